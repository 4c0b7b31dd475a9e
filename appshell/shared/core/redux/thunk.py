"""Async-action middleware.

Lets callers dispatch a callable ``(dispatch, get_state) -> result`` instead of
a plain action. Whatever the callable returns, including a coroutine, is handed
back to the caller of ``dispatch``.
"""

from __future__ import annotations

from typing import Any, Callable

from .store import Action, Dispatch, MiddlewareAPI


def thunk(api: MiddlewareAPI) -> Callable[[Dispatch], Dispatch]:
    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(action: Action) -> Any:
            if callable(action):
                return action(api.dispatch, api.get_state)
            return next_dispatch(action)

        return dispatch

    return wrap
