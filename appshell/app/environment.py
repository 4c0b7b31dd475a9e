"""Host environment: the bits of the outside world the shell touches."""

from __future__ import annotations

import logging
import webbrowser
from typing import Any, Callable, Optional

from appshell.shared.core.redux.devtools import DevtoolsHook
from appshell.shared.infrastructure.storage.backends import Storage

logger = logging.getLogger(__name__)


class HostEnvironment:
    """Storage, location, redirect and dev-tools access for one host.

    Args:
        storage: Persistent storage backend, if the host has one
        location: The host's current location (browser-like hosts already sit
            at a URL); ``None`` for hosts without one
        devtools: Optional factory returning an inspection enhancer
        opener: Callable used to leave the app for an external URL; defaults
            to the system web browser
    """

    def __init__(
        self,
        storage: Optional[Storage] = None,
        location: Any = None,
        devtools: Optional[DevtoolsHook] = None,
        opener: Optional[Callable[[str], Any]] = None,
    ) -> None:
        self.storage = storage
        self.location = location
        self.devtools = devtools
        self._opener = opener or webbrowser.open

    def get_location(self) -> Any:
        return self.location

    def redirect(self, href: str) -> None:
        """Leave the app for ``href``."""
        try:
            self._opener(href)
            logger.info(f"Opened {href} outside the app")
        except Exception as e:
            logger.warning(f"Could not open {href}: {e}")
            raise
