"""Single-writer state container.

A deliberately small take on the reducer/dispatch/subscribe model:

- ``create_store`` builds a ``Container`` from one reducer and a seed state
- ``combine_reducers`` merges per-feature reducers into one keyed reducer
- ``apply_middleware`` wraps ``dispatch`` with a middleware chain
- ``compose`` chains enhancers right to left
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeAlias

logger = logging.getLogger(__name__)

Action: TypeAlias = Any
State: TypeAlias = Any
Reducer: TypeAlias = Callable[[State, Action], State]
Listener: TypeAlias = Callable[[], None]
Dispatch: TypeAlias = Callable[[Action], Any]
StoreCreator: TypeAlias = Callable[..., "Container"]
Enhancer: TypeAlias = Callable[[StoreCreator], StoreCreator]

INIT = "@@appshell/INIT"


class Container:
    """Central state store. State only changes through ``dispatch``."""

    def __init__(self, reducer: Reducer, preloaded_state: State = None) -> None:
        self._reducer = reducer
        self._state = preloaded_state
        self._listeners: List[Listener] = []
        self._dispatching = False

        self.dispatch({"type": INIT})

    def get_state(self) -> State:
        if self._dispatching:
            raise RuntimeError("get_state() may not be called while the reducer is executing")
        return self._state

    def dispatch(self, action: Action) -> Action:
        if not isinstance(action, Mapping):
            raise TypeError(
                f"Actions must be mappings, got {type(action).__name__}. "
                "Install the thunk middleware to dispatch callables."
            )
        if "type" not in action:
            raise TypeError("Actions must have a 'type' key")
        if self._dispatching:
            raise RuntimeError("Reducers may not dispatch actions")

        try:
            self._dispatching = True
            self._state = self._reducer(self._state, action)
        finally:
            self._dispatching = False

        for listener in list(self._listeners):
            listener()

        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` to run after every dispatch.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


def create_store(
    reducer: Reducer,
    preloaded_state: State = None,
    enhancer: Optional[Enhancer] = None,
) -> Container:
    """Create a ``Container``, letting ``enhancer`` wrap the construction."""
    if enhancer is not None:
        return enhancer(create_store)(reducer, preloaded_state)
    return Container(reducer, preloaded_state)


def combine_reducers(reducers: Mapping[str, Reducer]) -> Reducer:
    """Turn a ``{key: reducer}`` mapping into a single reducer over a dict.

    Keys in the incoming state that have no reducer are dropped.
    """
    reducers = dict(reducers)

    def combination(state: Optional[Dict[str, Any]], action: Action) -> Dict[str, Any]:
        state = state or {}
        has_changed = set(state) != set(reducers)
        next_state: Dict[str, Any] = {}

        for key, key_reducer in reducers.items():
            previous = state.get(key)
            updated = key_reducer(previous, action)
            if updated is None:
                raise ValueError(
                    f"Reducer for key '{key}' returned None for action {action.get('type')!r}"
                )
            next_state[key] = updated
            has_changed = has_changed or updated is not previous

        return next_state if has_changed else state

    return combination


def compose(*funcs: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """compose(f, g, h)(x) == f(g(h(x)))"""
    if not funcs:
        return lambda arg: arg
    if len(funcs) == 1:
        return funcs[0]
    return reduce(lambda f, g: lambda arg: f(g(arg)), funcs)


class MiddlewareAPI:
    """The slice of the container a middleware gets to see."""

    def __init__(self, get_state: Callable[[], State], dispatch: Dispatch) -> None:
        self.get_state = get_state
        self.dispatch = dispatch


def apply_middleware(*middlewares: Callable[[MiddlewareAPI], Callable]) -> Enhancer:
    """Build an enhancer that routes ``dispatch`` through ``middlewares``.

    A middleware is ``api -> next_dispatch -> action -> result``. The first
    middleware sees the action first.
    """

    def enhancer(create: StoreCreator) -> StoreCreator:
        def creator(reducer: Reducer, preloaded_state: State = None) -> Container:
            container = create(reducer, preloaded_state)
            dispatch: Dispatch

            def dispatch_while_building(action: Action) -> Any:
                raise RuntimeError("Dispatching while constructing the middleware chain is not allowed")

            dispatch = dispatch_while_building
            api = MiddlewareAPI(container.get_state, lambda action: dispatch(action))
            chain = [middleware(api) for middleware in middlewares]
            dispatch = compose(*chain)(container.dispatch)
            container.dispatch = dispatch  # type: ignore[method-assign]

            logger.debug(f"Applied {len(middlewares)} middleware(s) to container")
            return container

        return creator

    return enhancer
