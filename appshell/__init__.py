"""AppShell package."""

from .app.lifecycle import ContainerUnavailableError, LifecycleController, Props
from .app.route import Route

__all__ = ["ContainerUnavailableError", "LifecycleController", "Props", "Route"]
