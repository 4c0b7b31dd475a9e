"""Shared fixtures for the AppShell test suite."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import pytest

from appshell.app.actions import APP_NAVIGATE
from appshell.app.environment import HostEnvironment
from appshell.app.features import install_app_features
from appshell.app.lifecycle import LifecycleController
from appshell.app.routes import RouteTable
from appshell.shared.core.redux.registries import Registries
from appshell.shared.infrastructure.storage.backends import MemoryStorage
from appshell.shared.infrastructure.storage.persistence import PersistenceRegistry


class WelcomeView:
    def __init__(self, **props: Any) -> None:
        self.props = props


class RoomView:
    def __init__(self, **props: Any) -> None:
        self.props = props


class ActionRecorder:
    """Middleware that remembers every plain action passing through."""

    def __init__(self) -> None:
        self.actions: List[Dict[str, Any]] = []

    def __call__(self, api):
        def wrap(next_dispatch):
            def dispatch(action):
                if not callable(action):
                    self.actions.append(dict(action))
                return next_dispatch(action)

            return dispatch

        return wrap

    def of_type(self, action_type: str) -> List[Dict[str, Any]]:
        return [action for action in self.actions if action["type"] == action_type]

    @property
    def navigated_urls(self) -> List[str]:
        return [action["url"] for action in self.of_type(APP_NAVIGATE)]


@pytest.fixture
def recorder() -> ActionRecorder:
    return ActionRecorder()


@pytest.fixture
def opened() -> List[str]:
    """URLs the host was asked to open outside the app."""
    return []


@pytest.fixture
def routes() -> RouteTable:
    return RouteTable(welcome=WelcomeView, room=RoomView)


@pytest.fixture
def make_controller(recorder: ActionRecorder, opened: List[str], routes: RouteTable) -> Callable[..., LifecycleController]:
    def factory(
        props: Optional[Dict[str, Any]] = None,
        storage: Optional[MemoryStorage] = None,
        location: Any = None,
        **kwargs: Any,
    ) -> LifecycleController:
        storage = storage if storage is not None else MemoryStorage()
        environment = HostEnvironment(storage=storage, location=location, opener=opened.append)
        registries = install_app_features(Registries(persistence=PersistenceRegistry(storage)))
        registries.middleware.register(recorder)
        return LifecycleController(
            props,
            registries=registries,
            environment=environment,
            routes=kwargs.pop("routes", routes),
            **kwargs,
        )

    return factory


@pytest.fixture
def pending_storage() -> Callable[[], MemoryStorage]:
    """Storage whose readiness signal the test resolves by hand."""

    def factory() -> MemoryStorage:
        return MemoryStorage(initializing=asyncio.get_running_loop().create_future())

    return factory
