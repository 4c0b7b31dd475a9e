"""App lifecycle and navigation.

Architecture:
- LifecycleController: activation, props changes, deactivation, rendering
- StateContainerFactory: builds the container from the registries
- RouteNavigator: the current route and its transitions
- urls: URL normalization and default-URL selection
- actions/reducers/middleware/routes: the shell's own features
"""

from .environment import HostEnvironment
from .factory import StateContainerFactory
from .features import install_app_features
from .lifecycle import ContainerUnavailableError, LifecycleController, Props, RenderQuery
from .route import EMPTY_ROUTE, Route, RouteNavigator
from .routes import RouteTable
from .urls import resolve_default, to_url_string

__all__ = [
    "ContainerUnavailableError",
    "EMPTY_ROUTE",
    "HostEnvironment",
    "LifecycleController",
    "Props",
    "RenderQuery",
    "Route",
    "RouteNavigator",
    "RouteTable",
    "StateContainerFactory",
    "install_app_features",
    "resolve_default",
    "to_url_string",
]
