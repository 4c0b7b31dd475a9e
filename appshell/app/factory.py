"""Builds the app's central state container."""

from __future__ import annotations

import logging
from typing import Optional

from appshell.shared.core.container_locator import ContainerLocator
from appshell.shared.core.redux.registries import Registries
from appshell.shared.core.redux.store import Container, compose, create_store
from appshell.shared.core.redux.thunk import thunk

from .environment import HostEnvironment

logger = logging.getLogger(__name__)


class StateContainerFactory:
    """Assembles one container from the registries.

    Args:
        registries: Reducers, middleware, listeners and persistence to use
        environment: Host environment; its ``devtools`` hook is layered in
            when present
        locator: If given, the container is published to it for legacy
            collaborators
    """

    def __init__(
        self,
        registries: Registries,
        environment: Optional[HostEnvironment] = None,
        locator: Optional[ContainerLocator] = None,
    ) -> None:
        self.registries = registries
        self.environment = environment
        self.locator = locator
        self._created = False

    def create(self) -> Container:
        """Create the container. May be called once per factory.

        Raises:
            RuntimeError: On a second call
        """
        if self._created:
            raise RuntimeError("StateContainerFactory.create() called twice; the container already exists")
        self._created = True

        reducer = self.registries.reducers.combine_reducers()

        # Thunk lets features dispatch async actions.
        enhancer = self.registries.middleware.apply_middleware(thunk)

        devtools = getattr(self.environment, "devtools", None)
        if devtools is not None:
            enhancer = compose(enhancer, devtools())
            logger.info("Development inspection hook enabled")

        persistence = self.registries.persistence
        seed = persistence.get_persisted_state() if persistence is not None else None

        container = create_store(reducer, seed, enhancer)

        self.registries.listeners.subscribe(container)

        if self.locator is not None:
            self.locator.set(container)

        logger.info(f"Container created with slices {self.registries.reducers.names()}")
        return container
