"""Container Locator - scoped access for legacy call sites.

Code that is not wired through the lifecycle controller (scripts, old
integrations) sometimes still needs to dispatch actions. Instead of a
process-wide global, the host creates one ``ContainerLocator`` and hands it to
both the ``StateContainerFactory`` and the legacy collaborators that need it.
"""

from __future__ import annotations

import logging
from typing import Optional

from .redux.store import Container

logger = logging.getLogger(__name__)


class ContainerLocator:
    """Holds at most one container for legacy collaborators.

    Usage:
        # During app wiring
        locator = ContainerLocator()
        factory = StateContainerFactory(registries, environment, locator=locator)

        # In a legacy collaborator that was given the locator
        locator.get().dispatch(some_action)
    """

    def __init__(self) -> None:
        self._container: Optional[Container] = None

    def set(self, container: Container) -> None:
        """Publish the container.

        Raises:
            RuntimeError: If a container was already published
        """
        if self._container is not None:
            raise RuntimeError("Container already published to this locator!")
        self._container = container
        logger.debug("Container published to legacy locator")

    def get(self) -> Container:
        """Get the published container.

        Raises:
            RuntimeError: If no container has been published yet
        """
        if self._container is None:
            raise RuntimeError("No container published! The app has not finished activating.")
        return self._container

    @property
    def is_set(self) -> bool:
        return self._container is not None

    def reset(self) -> None:
        """Forget the container. Called when the owning app deactivates."""
        self._container = None
