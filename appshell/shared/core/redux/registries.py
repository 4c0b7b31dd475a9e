"""Registries that features plug their reducers, middleware and listeners into.

Features register at start-up, the ``StateContainerFactory`` reads them once
when it builds the container.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

from .store import Container, Enhancer, MiddlewareAPI, Reducer, apply_middleware, combine_reducers

if TYPE_CHECKING:
    from appshell.shared.infrastructure.storage.persistence import PersistenceRegistry

logger = logging.getLogger(__name__)

Middleware = Callable[[MiddlewareAPI], Callable]
Selector = Callable[[Any], Any]
StateListener = Callable[[Any, Container, Any], None]


class ReducerRegistry:
    """Feature reducers keyed by their state slice name."""

    def __init__(self) -> None:
        self._reducers: Dict[str, Reducer] = {}

    def register(self, name: str, reducer: Reducer) -> None:
        if name in self._reducers:
            logger.warning(f"Reducer for '{name}' replaced")
        self._reducers[name] = reducer

    def combine_reducers(self) -> Reducer:
        return combine_reducers(self._reducers)

    def names(self) -> List[str]:
        return list(self._reducers)


class MiddlewareRegistry:
    """Ordered list of feature middleware."""

    def __init__(self) -> None:
        self._middleware: List[Middleware] = []

    def register(self, middleware: Middleware) -> None:
        self._middleware.append(middleware)

    def apply_middleware(self, *additional: Middleware) -> Enhancer:
        """Build the enhancer; ``additional`` middleware runs after the registered ones."""
        return apply_middleware(*self._middleware, *additional)


class StateListenerRegistry:
    """Listeners fired when a selected part of the state changes.

    Each entry is a ``selector`` over the full state plus a
    ``listener(selection, container, previous_selection)``.
    """

    def __init__(self) -> None:
        self._listeners: List[Tuple[Selector, StateListener]] = []

    def register(self, selector: Selector, listener: StateListener) -> None:
        self._listeners.append((selector, listener))

    def subscribe(self, container: Container) -> Callable[[], None]:
        """Start watching ``container``; returns the unsubscribe callable."""
        listeners = list(self._listeners)
        state = container.get_state()
        previous = [selector(state) for selector, _ in listeners]

        def on_change() -> None:
            current_state = container.get_state()
            for index, (selector, listener) in enumerate(listeners):
                selection = selector(current_state)
                if selection != previous[index]:
                    prior = previous[index]
                    previous[index] = selection
                    listener(selection, container, prior)

        logger.debug(f"Subscribing {len(listeners)} state listener(s)")
        return container.subscribe(on_change)


@dataclass
class Registries:
    """Everything the factory needs to assemble a container."""

    reducers: ReducerRegistry = field(default_factory=ReducerRegistry)
    middleware: MiddlewareRegistry = field(default_factory=MiddlewareRegistry)
    listeners: StateListenerRegistry = field(default_factory=StateListenerRegistry)
    persistence: Optional["PersistenceRegistry"] = None
