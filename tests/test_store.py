"""The state container, reducer combination, middleware and thunks."""

import pytest

from appshell.shared.core.redux import (
    INIT,
    apply_middleware,
    combine_reducers,
    compose,
    create_store,
    thunk,
)


def counter(state, action):
    state = 0 if state is None else state
    if action["type"] == "INCREMENT":
        return state + action.get("by", 1)
    return state


def test_container_initializes_state_through_reducer():
    container = create_store(counter)

    assert container.get_state() == 0


def test_preloaded_state_is_kept():
    container = create_store(counter, 41)
    container.dispatch({"type": "INCREMENT"})

    assert container.get_state() == 42


def test_subscribers_run_after_each_dispatch_until_unsubscribed():
    container = create_store(counter)
    seen = []
    unsubscribe = container.subscribe(lambda: seen.append(container.get_state()))

    container.dispatch({"type": "INCREMENT"})
    unsubscribe()
    container.dispatch({"type": "INCREMENT"})

    assert seen == [1]


def test_dispatch_rejects_malformed_actions():
    container = create_store(counter)

    with pytest.raises(TypeError):
        container.dispatch("INCREMENT")
    with pytest.raises(TypeError):
        container.dispatch({"by": 2})


def test_reducers_may_not_dispatch():
    holder = {}

    def nosy(state, action):
        if action["type"] == "POKE":
            holder["container"].dispatch({"type": "OTHER"})
        return state or {}

    holder["container"] = create_store(nosy)

    with pytest.raises(RuntimeError):
        holder["container"].dispatch({"type": "POKE"})


def test_combine_reducers_keeps_identity_when_nothing_changed():
    settings = {"theme": "dark"}
    reducer = combine_reducers({"count": counter, "other": lambda state, action: settings if state is None else state})
    container = create_store(reducer)
    before = container.get_state()

    container.dispatch({"type": "UNRELATED"})
    assert container.get_state() is before

    container.dispatch({"type": "INCREMENT"})
    assert container.get_state() == {"count": 1, "other": {"theme": "dark"}}


def test_combine_reducers_drops_unknown_keys_and_rejects_none():
    reducer = combine_reducers({"count": counter})
    container = create_store(reducer, {"count": 3, "stale": True})

    assert container.get_state() == {"count": 3}

    broken = combine_reducers({"bad": lambda state, action: None})
    with pytest.raises(ValueError):
        create_store(broken)


def test_compose_applies_right_to_left():
    add_one = lambda x: x + 1
    double = lambda x: x * 2

    assert compose(add_one, double)(5) == 11
    assert compose()(5) == 5


def test_middleware_order_and_return_values():
    calls = []

    def tagging(name):
        def middleware(api):
            def wrap(next_dispatch):
                def dispatch(action):
                    calls.append(name)
                    return next_dispatch(action)
                return dispatch
            return wrap
        return middleware

    container = create_store(counter, None, apply_middleware(tagging("first"), tagging("second")))
    result = container.dispatch({"type": "INCREMENT"})

    assert calls == ["first", "second"]
    assert result == {"type": "INCREMENT"}


def test_thunk_receives_dispatch_and_get_state():
    container = create_store(counter, None, apply_middleware(thunk))

    def add_twice(dispatch, get_state):
        dispatch({"type": "INCREMENT"})
        dispatch({"type": "INCREMENT", "by": get_state()})
        return "done"

    assert container.dispatch(add_twice) == "done"
    assert container.get_state() == 2


def test_init_action_type_is_namespaced():
    seen = []

    def spy(state, action):
        seen.append(action["type"])
        return state or 0

    create_store(spy)

    assert seen == [INIT]
