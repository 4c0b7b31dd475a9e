"""
Shared Core Module
==================

State container, registries, configuration and the legacy container locator.
"""

# State container
from .redux import (
    Container,
    MiddlewareRegistry,
    ReducerRegistry,
    Registries,
    StateListenerRegistry,
    create_store,
    thunk,
)
from .container_locator import ContainerLocator

# Configuration
from .configuration import (
    DEFAULT_URL,
    ConfigManager,
    ShellConfig,
    ValidationLevel,
    get_config,
)

__all__ = [
    # State container
    "Container",
    "MiddlewareRegistry",
    "ReducerRegistry",
    "Registries",
    "StateListenerRegistry",
    "create_store",
    "thunk",
    "ContainerLocator",
    # Configuration
    "DEFAULT_URL",
    "ConfigManager",
    "ShellConfig",
    "ValidationLevel",
    "get_config",
]
