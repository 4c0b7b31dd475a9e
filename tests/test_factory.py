"""Container assembly by the StateContainerFactory."""

import pytest

from appshell.app.actions import update_settings
from appshell.app.environment import HostEnvironment
from appshell.app.factory import StateContainerFactory
from appshell.app.features import install_app_features
from appshell.shared.core.container_locator import ContainerLocator
from appshell.shared.core.redux import Registries, action_logger
from appshell.shared.infrastructure.storage import MemoryStorage, PersistenceRegistry
from appshell.shared.infrastructure.storage.persistence import STORAGE_PREFIX


def _registries(storage=None):
    return install_app_features(Registries(persistence=PersistenceRegistry(storage or MemoryStorage())))


def test_container_has_registered_slices_and_thunk_support():
    container = StateContainerFactory(_registries()).create()

    state = container.get_state()
    assert set(state) == {"features/app", "features/base/location", "features/base/settings"}
    assert container.dispatch(lambda dispatch, get_state: "thunked") == "thunked"


def test_container_is_seeded_from_persisted_state():
    storage = MemoryStorage({STORAGE_PREFIX + "features/base/settings": {"server_url": "https://s.example"}})

    container = StateContainerFactory(_registries(storage)).create()

    assert container.get_state()["features/base/settings"]["server_url"] == "https://s.example"


def test_create_twice_is_refused():
    factory = StateContainerFactory(_registries())
    factory.create()

    with pytest.raises(RuntimeError):
        factory.create()


def test_state_listeners_are_subscribed():
    storage = MemoryStorage()
    container = StateContainerFactory(_registries(storage)).create()

    container.dispatch(update_settings({"server_url": "https://new.example"}))

    assert storage.get_item(STORAGE_PREFIX + "features/base/settings") == {"server_url": "https://new.example"}


def test_devtools_hook_observes_without_changing_behaviour():
    history = []
    environment = HostEnvironment(devtools=lambda: action_logger(history))

    container = StateContainerFactory(_registries(), environment).create()
    container.dispatch(update_settings({"server_url": "https://new.example"}))

    assert container.get_state()["features/base/settings"]["server_url"] == "https://new.example"
    assert {"type": "SETTINGS_UPDATED", "changed": ["features/base/settings"]} in history


def test_locator_receives_container():
    locator = ContainerLocator()

    container = StateContainerFactory(_registries(), locator=locator).create()

    assert locator.get() is container


def test_locator_refuses_second_container_and_unset_reads():
    locator = ContainerLocator()
    with pytest.raises(RuntimeError):
        locator.get()

    locator.set(object())
    with pytest.raises(RuntimeError):
        locator.set(object())

    locator.reset()
    assert not locator.is_set
