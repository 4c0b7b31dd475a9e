"""Routes and the one-slot route state machine."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

RouteObserver = Callable[["Route"], None]


@dataclass(frozen=True)
class Route:
    """What the app should present.

    Either a view ``component`` to render, an ``href`` to leave the app for,
    or neither (the empty route, nothing to present). Compared by value.
    """

    component: Any = None
    href: Optional[str] = None

    def __post_init__(self) -> None:
        if self.component is not None and self.href is not None:
            raise ValueError("A route either renders a component or redirects, not both")
        if self.href is not None and not self.href:
            raise ValueError("A redirect route needs a non-empty href")

    @property
    def is_empty(self) -> bool:
        return self.component is None and self.href is None


EMPTY_ROUTE = Route()


def _resolved() -> asyncio.Future:
    future = asyncio.get_running_loop().create_future()
    future.set_result(None)
    return future


class RouteNavigator:
    """Holds the current route and moves it forward.

    Args:
        redirect: Called with the target of an ``href`` route; navigates the
            host away from the app
    """

    def __init__(self, redirect: Callable[[str], None]) -> None:
        self._redirect = redirect
        self._route: Route = EMPTY_ROUTE
        self._notified: Route = EMPTY_ROUTE
        self._observers: List[RouteObserver] = []

    @property
    def route(self) -> Route:
        return self._route

    def subscribe(self, observer: RouteObserver) -> Callable[[], None]:
        """Call ``observer(route)`` on every committed route change."""
        self._observers.append(observer)
        return lambda: self._observers.remove(observer) if observer in self._observers else None

    def set_route(self, route: Route) -> asyncio.Future:
        """Navigate to ``route``.

        Returns:
            A future that resolves once the change is visible to observers.
            Already resolved when nothing changed or the route redirected.
        """
        if route == self._route:
            return _resolved()

        if route.href is not None:
            logger.info(f"Redirecting host to {route.href}")
            self._redirect(route.href)
            return _resolved()

        self._route = route
        committed = asyncio.get_running_loop().create_future()
        asyncio.get_running_loop().call_soon(self._commit, committed)
        return committed

    def _commit(self, committed: asyncio.Future) -> None:
        # Several set_route calls in one loop turn collapse into one pass with
        # the latest route.
        route = self._route
        if route == self._notified:
            if not committed.done():
                committed.set_result(None)
            return
        self._notified = route

        first_error: Optional[Exception] = None
        for observer in list(self._observers):
            try:
                observer(route)
            except Exception as exc:
                observer_name = getattr(observer, "__name__", str(observer))
                logger.exception(f"Route observer '{observer_name}' failed for {route}", exc_info=exc)
                if first_error is None:
                    first_error = exc

        if committed.done():
            return
        if first_error is not None:
            committed.set_exception(first_error)
        else:
            committed.set_result(None)
