"""Which route to present for a given container state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .reducers import LOCATION_FEATURE
from .route import EMPTY_ROUTE, Route

logger = logging.getLogger(__name__)


@dataclass
class RouteTable:
    """View components per app situation.

    Attributes:
        welcome: Shown when no room is selected
        room: Shown inside a room
        redirect: Optional hook that may send the host elsewhere; given the
            full state, returns an external URL or ``None`` to stay in the app
    """

    welcome: Any = None
    room: Any = None
    redirect: Optional[Callable[[Mapping[str, Any]], Optional[str]]] = None

    def route_for(self, state: Mapping[str, Any]) -> Route:
        if self.redirect is not None:
            href = self.redirect(state)
            if href:
                return Route(href=href)

        location = state.get(LOCATION_FEATURE) or {}
        component = self.room if location.get("room") else self.welcome
        if component is None:
            logger.debug("No view registered for the current location")
            return EMPTY_ROUTE
        return Route(component=component)
