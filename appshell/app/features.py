"""Registers the shell's own features with a set of registries."""

from __future__ import annotations

from appshell.shared.core.redux.registries import Registries

from .middleware import route_middleware
from .reducers import APP_FEATURE, LOCATION_FEATURE, app_reducer, location_reducer, settings_reducer
from .urls import SETTINGS_FEATURE


def install_app_features(registries: Registries) -> Registries:
    """Register app, location and settings slices plus the route middleware.

    The settings ``server_url`` is persisted when ``registries.persistence``
    is set.
    """
    registries.reducers.register(APP_FEATURE, app_reducer)
    registries.reducers.register(LOCATION_FEATURE, location_reducer)
    registries.reducers.register(SETTINGS_FEATURE, settings_reducer)
    registries.middleware.register(route_middleware)

    if registries.persistence is not None:
        registries.persistence.register(SETTINGS_FEATURE, ["server_url"])
        registries.persistence.attach(registries.listeners)

    return registries
