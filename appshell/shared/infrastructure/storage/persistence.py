"""Persistence registry.

Features declare which parts of their state slice survive a restart. The
registry reads those parts back as the container's seed state and writes them
out again whenever they change.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from appshell.shared.core.redux.registries import StateListenerRegistry
from appshell.shared.core.redux.store import Container

from .backends import Storage

logger = logging.getLogger(__name__)

STORAGE_PREFIX = "appshell-state/"


class PersistenceRegistry:
    """Maps feature slice names to the keys of that slice that get persisted."""

    def __init__(self, storage: Optional[Storage] = None) -> None:
        self.storage = storage
        self._elements: Dict[str, Union[bool, tuple]] = {}

    def register(self, name: str, keys: Union[bool, Iterable[str]] = True) -> None:
        """Persist slice ``name``.

        Args:
            name: The reducer/slice name
            keys: ``True`` to persist the whole slice, or the keys to keep
        """
        self._elements[name] = True if keys is True else tuple(keys)

    def _filter(self, name: str, subtree: Any) -> Any:
        keys = self._elements[name]
        if keys is True or not isinstance(subtree, Mapping):
            return subtree
        return {key: subtree[key] for key in keys if key in subtree}

    def get_persisted_state(self) -> Dict[str, Any]:
        """Read the last saved snapshot of every registered slice."""
        if self.storage is None:
            return {}

        state: Dict[str, Any] = {}
        for name in self._elements:
            item = self.storage.get_item(STORAGE_PREFIX + name)
            if item is None:
                continue
            state[name] = self._filter(name, item)

        logger.debug(f"Restored persisted slices: {sorted(state)}")
        return state

    def select(self, state: Any) -> Dict[str, Any]:
        """The persistable view of ``state``."""
        state = state or {}
        return {
            name: self._filter(name, state[name])
            for name in self._elements
            if name in state
        }

    def persist_state(self, state: Any, previous: Optional[Mapping[str, Any]] = None) -> None:
        """Write out the slices of ``state`` that differ from ``previous``."""
        if self.storage is None:
            return
        previous = previous or {}
        for name, subtree in self.select(state).items():
            if previous.get(name) != subtree:
                self.storage.set_item(STORAGE_PREFIX + name, subtree)
                logger.debug(f"Persisted slice '{name}'")

    def attach(self, listeners: StateListenerRegistry) -> None:
        """Register a state listener that keeps storage in sync with the container."""

        def on_persisted_change(selection: Dict[str, Any], container: Container, previous: Any) -> None:
            self.persist_state(selection, previous)

        listeners.register(self.select, on_persisted_change)
