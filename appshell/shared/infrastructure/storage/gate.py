"""Startup gate on storage readiness."""

from __future__ import annotations

import logging
from typing import Optional

from .backends import Storage

logger = logging.getLogger(__name__)


class StorageGate:
    """Holds app startup until the storage backend reports ready.

    The gate never fails: a storage backend that errors while initializing is
    logged and the app starts anyway with whatever the backend has.
    """

    def __init__(self, storage: Optional[Storage] = None) -> None:
        self.storage = storage

    async def wait(self) -> None:
        signal = getattr(self.storage, "initializing", None) if self.storage is not None else None
        if signal is None:
            return

        try:
            await signal
            logger.debug("Storage ready")
        except Exception as e:
            logger.warning(f"Storage failed to initialize, continuing without it: {e}")
