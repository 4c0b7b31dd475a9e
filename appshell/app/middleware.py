"""Middleware that keeps the mounted app's route in step with the location."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Mapping

from appshell.shared.core.redux.store import Dispatch, MiddlewareAPI

from .actions import SET_ROOM
from .reducers import APP_FEATURE

logger = logging.getLogger(__name__)


def _navigate(state: Mapping[str, Any]) -> None:
    app = (state.get(APP_FEATURE) or {}).get("app")
    if app is None:
        return
    route = app.routes.route_for(state)
    logger.debug(f"Room changed, routing to {route}")
    app.set_route(route).add_done_callback(_log_route_failure)


def _log_route_failure(committed: asyncio.Future) -> None:
    if committed.cancelled():
        return
    exc = committed.exception()
    if exc is not None:
        logger.error(f"Route change did not reach every observer: {exc}")


def route_middleware(api: MiddlewareAPI) -> Callable[[Dispatch], Dispatch]:
    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(action: Any) -> Any:
            result = next_dispatch(action)
            if isinstance(action, Mapping) and action.get("type") == SET_ROOM:
                _navigate(api.get_state())
            return result

        return dispatch

    return wrap
