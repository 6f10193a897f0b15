"""Collection reducer.

:func:`collect_reducer` lifts a reducer for a *single* entity into a reducer
for a persistent map of entities. Every action is routed by the key found at
the configured path:

1. The incoming state is normalized into a ``PMap`` (plain mappings such as
    deserialized JSON are accepted and converted shallowly).
2. Actions without a key pass through and return the normalized map.
3. Keyed actions are handed to the entity reducer together with that key's
    current entry (``None`` when the entry does not exist yet).
4. An ``ABSENT`` result removes the key; any other result, ``None`` included,
    is stored under the key.
"""

import logging
from typing import Any, Mapping

from pyrsistent import PMap, pmap

from keyed_reducers.errors import InvalidArgument
from keyed_reducers.path import PathLike, as_key_path
from keyed_reducers.types import ABSENT, Collection, CollectionReducer, Reducer


logger = logging.getLogger(__name__)


def to_collection(state: Mapping[Any, Any] | None) -> Collection:
    """Return ``state`` as a persistent map (``None`` becomes an empty map)."""
    if isinstance(state, PMap):
        return state
    if state is None:
        return pmap()
    return pmap(state)


def collect_reducer(reducer: Reducer, path: PathLike) -> CollectionReducer:
    """Build a reducer over a keyed collection of ``reducer`` states.

    Args:
        reducer (Reducer): ``(entity_state, action) -> entity_state | ABSENT``.
        path (PathLike): Location of the collection key inside each action.

    Returns:
        CollectionReducer: ``(collection_state, action) -> PMap``.

    Raises:
        InvalidArgument: If ``reducer`` is not callable or ``path`` is missing
            or malformed.
    """
    if not callable(reducer):
        raise InvalidArgument(f"Reducer must be callable, got {reducer!r}")
    if path is None:
        raise InvalidArgument("Key path must not be None")
    key_path = as_key_path(path)

    def collection_reducer(state: Mapping[Any, Any] | None, action: Any) -> Collection:
        collection = to_collection(state)
        key = key_path.read(action)
        if not key:
            logger.debug("No key at %s; leaving collection unchanged", key_path)
            return collection

        next_state = reducer(collection.get(key), action)
        if next_state is ABSENT:
            logger.debug("Removing %r from collection", key)
            return collection.discard(key)
        logger.debug("Updating %r in collection", key)
        return collection.set(key, next_state)

    return collection_reducer
