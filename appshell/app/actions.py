"""Actions the shell dispatches against the container."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional
from urllib.parse import unquote, urlsplit

from .urls import to_url_string

logger = logging.getLogger(__name__)

# Action types
APP_WILL_MOUNT = "APP_WILL_MOUNT"
APP_WILL_UNMOUNT = "APP_WILL_UNMOUNT"
APP_NAVIGATE = "APP_NAVIGATE"
SET_LOCATION_URL = "SET_LOCATION_URL"
SET_ROOM = "SET_ROOM"
SETTINGS_UPDATED = "SETTINGS_UPDATED"


def app_will_mount(app: Any) -> Dict[str, Any]:
    """Signal that ``app`` is about to present content."""
    return {"type": APP_WILL_MOUNT, "app": app}


def app_will_unmount(app: Any) -> Dict[str, Any]:
    """Signal that ``app`` is going away."""
    return {"type": APP_WILL_UNMOUNT, "app": app}


def set_location_url(location_url: Optional[str]) -> Dict[str, Any]:
    return {"type": SET_LOCATION_URL, "location_url": location_url}


def set_room(room: Optional[str]) -> Dict[str, Any]:
    return {"type": SET_ROOM, "room": room}


def update_settings(settings: Mapping[str, Any]) -> Dict[str, Any]:
    return {"type": SETTINGS_UPDATED, "settings": dict(settings)}


def room_from_url(url: str) -> Optional[str]:
    """The last path segment of ``url``, or ``None`` at the server root."""
    path = urlsplit(url).path.strip("/")
    if not path:
        return None
    return unquote(path.split("/")[-1]) or None


def app_navigate(uri: Any) -> Callable[[Callable, Callable], None]:
    """Open ``uri``: record it as the current location and enter its room.

    Returns a thunk; dispatch it through a container with the thunk middleware.
    """

    def navigate(dispatch: Callable, get_state: Callable) -> None:
        url = to_url_string(uri)
        logger.info(f"Navigating to {url or '<nothing>'}")
        dispatch({"type": APP_NAVIGATE, "url": url})
        dispatch(set_location_url(url or None))
        dispatch(set_room(room_from_url(url) if url else None))

    return navigate
