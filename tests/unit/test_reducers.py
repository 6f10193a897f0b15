# tests/unit/test_reducers.py

import logging
from typing import Any, List, Tuple

import pytest
from pyrsistent import PMap, pmap

from keyed_reducers.errors import InvalidArgument
from keyed_reducers.path import AccessorPath
from keyed_reducers.reducers import collect_reducer, to_collection
from keyed_reducers.types import ABSENT


def counter(state: Any, action: Any) -> Any:
    if action["type"] == "INCREMENT":
        return (state or 0) + 1
    if action["type"] == "CLEAR":
        return None
    if action["type"] == "DELETE":
        return ABSENT
    return state


def test_to_collection() -> None:
    assert to_collection(None) == pmap()
    existing = pmap({"a": 1})
    assert to_collection(existing) is existing
    converted = to_collection({"a": 1})
    assert isinstance(converted, PMap)
    assert converted == pmap({"a": 1})


@pytest.mark.parametrize("reducer", [None, 1, "counter"])
def test_rejects_non_callable_reducer(reducer: Any) -> None:
    with pytest.raises(InvalidArgument):
        collect_reducer(reducer, "id")


@pytest.mark.parametrize("path", [None, "", "a..b", 2.5])
def test_rejects_invalid_path(path: Any) -> None:
    with pytest.raises(InvalidArgument):
        collect_reducer(counter, path)


def test_invalid_argument_is_value_error() -> None:
    with pytest.raises(ValueError):
        collect_reducer(counter, None)


def test_unkeyed_action_is_noop() -> None:
    reducer = collect_reducer(counter, "id")
    state = pmap({"a": 1})
    assert reducer(state, {"type": "INCREMENT"}) is state
    assert reducer({"a": 1}, {"type": "INCREMENT"}) == state
    assert reducer(None, {"type": "INCREMENT"}) == pmap()


@pytest.mark.parametrize("key", ["", 0, None])
def test_falsy_key_is_noop(key: Any) -> None:
    reducer = collect_reducer(counter, "id")
    assert reducer(pmap(), {"type": "INCREMENT", "id": key}) == pmap()


def test_routes_action_to_key() -> None:
    reducer = collect_reducer(counter, "id")
    state = reducer(None, {"type": "INCREMENT", "id": "a"})
    state = reducer(state, {"type": "INCREMENT", "id": "a"})
    state = reducer(state, {"type": "INCREMENT", "id": "b"})
    assert state == pmap({"a": 2, "b": 1})


def test_entity_reducer_receives_current_entry() -> None:
    calls: List[Tuple[Any, Any]] = []

    def spy(state: Any, action: Any) -> Any:
        calls.append((state, action))
        return state

    reducer = collect_reducer(spy, "id")
    action = {"type": "NOOP", "id": "b"}
    reducer({"a": 1}, action)
    reducer({"b": 5}, action)
    assert calls == [(None, action), (5, action)]


def test_absent_removes_key() -> None:
    reducer = collect_reducer(counter, "id")
    state = pmap({"a": 1, "b": 2})
    assert reducer(state, {"type": "DELETE", "id": "a"}) == pmap({"b": 2})
    assert reducer(state, {"type": "DELETE", "id": "z"}) == state


def test_none_is_stored() -> None:
    reducer = collect_reducer(counter, "id")
    state = reducer(pmap({"a": 1}), {"type": "CLEAR", "id": "a"})
    assert "a" in state
    assert state["a"] is None


def test_does_not_mutate_input() -> None:
    reducer = collect_reducer(counter, "id")
    plain = {"a": 1}
    persistent = pmap({"a": 1})
    reducer(plain, {"type": "INCREMENT", "id": "a"})
    reducer(persistent, {"type": "DELETE", "id": "a"})
    assert plain == {"a": 1}
    assert persistent == pmap({"a": 1})


def test_hydrated_mapping_matches_persistent_map() -> None:
    reducer = collect_reducer(counter, "id")
    action = {"type": "INCREMENT", "id": "a"}
    assert reducer({"a": 1, "b": 2}, action) == reducer(pmap({"a": 1, "b": 2}), action)


def test_nested_and_accessor_paths() -> None:
    nested = collect_reducer(counter, "meta.id")
    assert nested(None, {"type": "INCREMENT", "meta": {"id": 7}}) == pmap({7: 1})

    accessor = AccessorPath(
        getter=lambda action: action.get("target"),
        setter=lambda action, key: {**action, "target": key},
    )
    reducer = collect_reducer(counter, accessor)
    assert reducer(None, {"type": "INCREMENT", "target": "x"}) == pmap({"x": 1})


def test_logs_routing(caplog: pytest.LogCaptureFixture) -> None:
    reducer = collect_reducer(counter, "id")
    with caplog.at_level(logging.DEBUG, logger="keyed_reducers"):
        reducer(pmap({"a": 1}), {"type": "DELETE", "id": "a"})
    assert "Removing 'a' from collection" in caplog.text


def test_method_names_on_sequences_are_not_keys() -> None:
    reducer = collect_reducer(lambda state, action: 1, "meta.count")
    state = pmap({"a": 1})
    assert reducer(state, {"type": "X", "meta": ["a"]}) is state
    assert reducer(None, {"type": "X", "meta": "abc"}) == pmap()
