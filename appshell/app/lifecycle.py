"""Application lifecycle controller.

Drives start-up and navigation for one app instance:

- ``activate``: storage gate → container → mount notification → ready →
  initial navigation
- ``on_props_changed``: re-navigate when the host hands over a new URL (or the
  same URL with a new timestamp)
- ``deactivate``: unmount notification, and stop any still-pending start-up
- ``render_query`` / ``render``: what the host should present right now
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Set, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from appshell.shared.core.configuration import DEFAULT_URL
from appshell.shared.core.container_locator import ContainerLocator
from appshell.shared.core.redux.registries import Registries
from appshell.shared.core.redux.store import Container
from appshell.shared.infrastructure.storage.gate import StorageGate
from appshell.shared.infrastructure.storage.persistence import PersistenceRegistry

from .actions import app_navigate, app_will_mount, app_will_unmount
from .environment import HostEnvironment
from .factory import StateContainerFactory
from .features import install_app_features
from .route import Route, RouteNavigator, RouteObserver
from .routes import RouteTable
from .urls import resolve_default, to_url_string

logger = logging.getLogger(__name__)


class ContainerUnavailableError(RuntimeError):
    """A lifecycle operation needed the container before activation created it."""


class Props(BaseModel):
    """What the host hands the app on each render pass.

    ``url``, ``default_url`` and ``timestamp`` are consumed by the controller;
    any other field is forwarded to the active view.
    """
    model_config = ConfigDict(extra='allow', frozen=True, arbitrary_types_allowed=True)

    url: Any = Field(default=None, description="URL string, URL descriptor mapping, or None")
    default_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("default_url", "defaultURL"),
        description="Opened when url is absent",
    )
    # Hosts reuse identical URL strings to request a reload; a new timestamp
    # forces re-navigation.
    timestamp: Any = None

    def passthrough(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


PropsLike = Union[Props, Mapping[str, Any], None]


def _as_props(props: PropsLike) -> Props:
    if isinstance(props, Props):
        return props
    return Props(**dict(props or {}))


@dataclass(frozen=True)
class RenderQuery:
    ready: bool
    route: Route

    @property
    def presentable(self) -> bool:
        return self.ready and self.route.component is not None


class LifecycleController:
    """One app instance, from activation to deactivation.

    Args:
        props: Initial host props
        registries: Where the container's reducers, middleware and listeners
            come from; defaults to the shell's own features with persistence
            on the environment's storage
        environment: Host environment
        routes: Views to present per situation
        locator: Published with the container for legacy collaborators
        fallback_url: Opened when nothing else names a URL
    """

    def __init__(
        self,
        props: PropsLike = None,
        *,
        registries: Optional[Registries] = None,
        environment: Optional[HostEnvironment] = None,
        routes: Optional[RouteTable] = None,
        locator: Optional[ContainerLocator] = None,
        fallback_url: str = DEFAULT_URL,
    ) -> None:
        self.props = _as_props(props)
        self.environment = environment or HostEnvironment()
        if registries is None:
            registries = install_app_features(
                Registries(persistence=PersistenceRegistry(self.environment.storage))
            )
        self.registries = registries
        self.routes = routes or RouteTable()
        self.locator = locator
        self.fallback_url = fallback_url

        self.container: Optional[Container] = None
        self.async_ready = False

        self._gate = StorageGate(self.environment.storage)
        self._factory = StateContainerFactory(self.registries, self.environment, locator)
        self._navigator = RouteNavigator(self._redirect)
        self._activation: Optional[asyncio.Task] = None
        self._cancelled = False
        # Track pending tasks for deterministic waiting
        self._pending_tasks: Set[asyncio.Task] = set()

    # --- Host entry points ---

    def activate(self) -> asyncio.Task:
        """Start the app. Calling it again returns the same activation task."""
        if self._activation is None:
            self._activation = asyncio.ensure_future(self._activate(self.props))
            self._track(self._activation)
        return self._activation

    def on_props_changed(self, prev_props: PropsLike, next_props: PropsLike) -> asyncio.Task:
        """React to new host props once activation has finished.

        Calls queue behind activation and run in the order they were made.

        Raises:
            ContainerUnavailableError: If ``activate()`` was never called
        """
        if self._activation is None:
            raise ContainerUnavailableError("Props changed before activate() was called")

        prev = _as_props(prev_props)
        nxt = _as_props(next_props)
        self.props = nxt

        task = asyncio.ensure_future(self._props_changed(prev, nxt))
        self._track(task)
        return task

    def deactivate(self) -> None:
        """Notify the container that the app is going away.

        Any start-up or props change still waiting stops before dispatching.

        Raises:
            ContainerUnavailableError: If activation has not created the
                container yet
        """
        self._cancelled = True
        container = self._require_container("deactivate")
        container.dispatch(app_will_unmount(self))
        if self.locator is not None:
            self.locator.reset()
        logger.info("App deactivated")

    def render_query(self) -> RenderQuery:
        return RenderQuery(ready=self.async_ready, route=self._navigator.route)

    def render(self, **props: Any) -> Any:
        """Instantiate the active view with the pass-through props.

        Returns:
            The view, or ``None`` when there is nothing to present yet
        """
        query = self.render_query()
        if not query.presentable:
            return None
        return query.route.component(**{**self.props.passthrough(), **props})

    def subscribe(self, observer: RouteObserver) -> Callable[[], None]:
        """Be told about every committed route change (one per render pass)."""
        return self._navigator.subscribe(observer)

    async def wait_until_idle(self, timeout: float = 60.0) -> bool:
        """Wait for activation and queued props changes to complete.

        Returns:
            True if all tasks completed, False if timeout reached
        """
        if self._pending_tasks:
            _, pending = await asyncio.wait(set(self._pending_tasks), timeout=timeout)
            if pending:
                logger.warning(f"Timeout reached while waiting for {len(pending)} lifecycle task(s)")
                return False
        # Route commits are scheduled one loop iteration after navigation.
        await asyncio.sleep(0)
        return True

    # --- Navigation ---

    @property
    def route(self) -> Route:
        return self._navigator.route

    def set_route(self, route: Route) -> asyncio.Future:
        return self._navigator.set_route(route)

    async def open_url(self, url: Any) -> None:
        """Dispatch the navigate action for ``url``.

        Raises:
            ContainerUnavailableError: If the container does not exist yet
        """
        container = self._require_container("open a URL")
        result = container.dispatch(app_navigate(to_url_string(url)))
        if inspect.isawaitable(result):
            await result

    def get_window_location(self) -> Any:
        """The host's current location, if it has one.

        Hosts that know where they are can override this instead of passing
        a location through the environment.
        """
        return self.environment.get_location()

    def get_default_url(self, props: Optional[Props] = None) -> str:
        """The URL to open when ``props`` (the current props by default) name none."""
        container = self._require_container("compute the default URL")
        if props is None:
            props = self.props
        return resolve_default(
            props.default_url,
            container.get_state(),
            self.get_window_location(),
            self.fallback_url,
        )

    # --- Internals ---

    async def _activate(self, props: Props) -> None:
        await self._gate.wait()

        if self._cancelled:
            logger.info("Deactivated before the container was created, stopping start-up")
            return

        self.container = self._factory.create()
        self.container.dispatch(app_will_mount(self))
        self.async_ready = True
        logger.info("App activated")

        await self.open_url(to_url_string(props.url) or self.get_default_url(props))

    async def _props_changed(self, prev: Props, nxt: Props) -> None:
        await self._activation

        if self._cancelled or self.container is None:
            logger.debug("Ignoring props change for a deactivated app")
            return

        url = to_url_string(nxt.url)
        if to_url_string(prev.url) != url or prev.timestamp != nxt.timestamp:
            await self.open_url(url or self.get_default_url(nxt))

    def _redirect(self, href: str) -> None:
        self.environment.redirect(href)

    def _require_container(self, operation: str) -> Container:
        if self.container is None:
            raise ContainerUnavailableError(f"Cannot {operation}: the app has not been activated yet")
        return self.container

    def _track(self, task: asyncio.Task) -> None:
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)
