"""Development inspection hook.

``action_logger`` is an enhancer that records every dispatched action and the
top-level state keys it changed. It observes only; state and return values are
passed through untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping

from .store import Action, Container, Enhancer, Reducer, State, StoreCreator

logger = logging.getLogger(__name__)


def _changed_keys(before: State, after: State) -> List[str]:
    if not isinstance(before, Mapping) or not isinstance(after, Mapping):
        return [] if before is after else ["<root>"]
    keys = set(before) | set(after)
    return sorted(key for key in keys if before.get(key) is not after.get(key))


def action_logger(history: List[Dict[str, Any]] | None = None) -> Enhancer:
    """Create the inspection enhancer.

    Args:
        history: Optional list that receives one ``{"type", "changed"}`` entry
            per plain action, for hosts that want to show a timeline
    """

    def enhancer(create: StoreCreator) -> StoreCreator:
        def creator(reducer: Reducer, preloaded_state: State = None) -> Container:
            def inspected(state: State, action: Action) -> State:
                updated = reducer(state, action)
                changed = _changed_keys(state, updated)
                logger.debug(f"Action {action.get('type')!r} changed {changed or 'nothing'}")
                if history is not None:
                    history.append({"type": action.get("type"), "changed": changed})
                return updated

            return create(inspected, preloaded_state)

        return creator

    return enhancer


DevtoolsHook = Callable[[], Enhancer]
