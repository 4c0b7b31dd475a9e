"""State container and the registries features plug into."""

from .devtools import action_logger
from .registries import (
    MiddlewareRegistry,
    ReducerRegistry,
    Registries,
    StateListenerRegistry,
)
from .store import (
    INIT,
    Container,
    MiddlewareAPI,
    apply_middleware,
    combine_reducers,
    compose,
    create_store,
)
from .thunk import thunk

__all__ = [
    "INIT",
    "Container",
    "MiddlewareAPI",
    "MiddlewareRegistry",
    "ReducerRegistry",
    "Registries",
    "StateListenerRegistry",
    "action_logger",
    "apply_middleware",
    "combine_reducers",
    "compose",
    "create_store",
    "thunk",
]
