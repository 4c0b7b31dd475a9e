"""Reducers for the slices the shell itself owns."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .actions import (
    APP_WILL_MOUNT,
    APP_WILL_UNMOUNT,
    SET_LOCATION_URL,
    SET_ROOM,
    SETTINGS_UPDATED,
)
from .urls import SETTINGS_FEATURE

APP_FEATURE = "features/app"
LOCATION_FEATURE = "features/base/location"

_DEFAULT_LOCATION = {"location_url": None, "room": None}
_DEFAULT_SETTINGS = {"server_url": None}


def app_reducer(state: Optional[Dict[str, Any]], action: Mapping[str, Any]) -> Dict[str, Any]:
    """Tracks the app instance that is currently mounted."""
    state = {} if state is None else state
    action_type = action["type"]

    if action_type == APP_WILL_MOUNT:
        if state.get("app") is not action["app"]:
            return {**state, "app": action["app"]}
    elif action_type == APP_WILL_UNMOUNT:
        if state.get("app") is action["app"]:
            return {key: value for key, value in state.items() if key != "app"}

    return state


def location_reducer(state: Optional[Dict[str, Any]], action: Mapping[str, Any]) -> Dict[str, Any]:
    state = dict(_DEFAULT_LOCATION) if state is None else state
    action_type = action["type"]

    if action_type == SET_LOCATION_URL and state.get("location_url") != action["location_url"]:
        return {**state, "location_url": action["location_url"]}
    if action_type == SET_ROOM and state.get("room") != action["room"]:
        return {**state, "room": action["room"]}

    return state


def settings_reducer(state: Optional[Dict[str, Any]], action: Mapping[str, Any]) -> Dict[str, Any]:
    # Persisted snapshots may lack keys added since they were written.
    if state is None:
        state = dict(_DEFAULT_SETTINGS)
    elif not _DEFAULT_SETTINGS.keys() <= state.keys():
        state = {**_DEFAULT_SETTINGS, **state}

    if action["type"] == SETTINGS_UPDATED:
        return {**state, **action["settings"]}

    return state
