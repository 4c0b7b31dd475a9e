"""Key/value storage backends.

Both backends expose an optional ``initializing`` awaitable. Web-like hosts
have storage ready immediately and leave it ``None``; hosts whose storage loads
asynchronously set it so the ``StorageGate`` can wait for it.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Awaitable, Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class Storage(Protocol):
    """What the rest of the app expects from a storage backend."""

    initializing: Optional[Awaitable[Any]]

    def get_item(self, key: str) -> Any: ...

    def set_item(self, key: str, value: Any) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage, ready as soon as it is constructed."""

    def __init__(
        self,
        items: Optional[Dict[str, Any]] = None,
        initializing: Optional[Awaitable[Any]] = None,
    ):
        self._items: Dict[str, Any] = dict(items or {})
        self.initializing = initializing

    def get_item(self, key: str) -> Any:
        return self._items.get(key)

    def set_item(self, key: str, value: Any) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self):
        return list(self._items)


class FileStorage:
    """JSON file storage loaded off the event loop.

    The file is read in a worker thread the first time ``initializing`` is
    accessed; until then ``get_item`` sees an empty store. Writes go straight
    to disk and replace the file atomically; a value that cannot be encoded as
    JSON is rejected and leaves both the file and the store unchanged.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._items: Dict[str, Any] = {}
        self._loading: Optional[asyncio.Future] = None

    @property
    def initializing(self) -> Optional[Awaitable[Any]]:
        if self._loading is None:
            loop = asyncio.get_running_loop()
            self._loading = loop.run_in_executor(None, self._load)
        return self._loading

    def _load(self) -> None:
        if not self.path.exists():
            logger.info(f"No storage file at {self.path}, starting empty")
            return
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file {self.path} does not hold a JSON object")
        self._items = data
        logger.info(f"Loaded {len(data)} storage item(s) from {self.path}")

    def _save(self) -> None:
        # Serialize before touching disk, then swap the file in whole.
        payload = json.dumps(self._items, indent=2, sort_keys=True)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Any:
        return self._items.get(key)

    def set_item(self, key: str, value: Any) -> None:
        had_key = key in self._items
        previous = self._items.get(key)
        self._items[key] = value
        try:
            self._save()
        except (TypeError, ValueError):
            if had_key:
                self._items[key] = previous
            else:
                del self._items[key]
            raise

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()
