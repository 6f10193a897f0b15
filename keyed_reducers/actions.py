"""Action creators over a keyed collection.

An action is either a plain record (a mapping, dataclass, ``pyrsistent``
record, ...) or a thunk tagged with :class:`Deferred`. *Decorating* an action
writes the collection key into it:

* Plain records receive the key at the configured path unless a key is
  already there; the record is copied, never mutated.
* Thunks are wrapped by :func:`collect_thunk` so every action they dispatch,
  thunks included, is decorated with the same key. When collection selectors
  are supplied they are bound to the key and handed to the thunk as its third
  argument, so thunks written for a single entity keep working unchanged.

Example::

    actions = collect_actions(car_actions, "vin", selectors=car_selectors)
    store.dispatch(actions.set_price("5678", 30000))

    mustang = bind_collected_actions(actions, "5678")
    store.dispatch(mustang.increment_price())
"""

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Mapping, Optional

from pyrsistent import pmap
from pyrsistent.typing import PMap

from keyed_reducers.path import PathLike, as_key_path
from keyed_reducers.selectors import bind_selectors
from keyed_reducers.types import (
    ABSENT,
    Action,
    ActionCreator,
    Dispatch,
    GetState,
    Key,
    Selector,
    ThunkFn,
)


logger = logging.getLogger(__name__)

SelectorMap = Mapping[str, Selector]


@dataclass(frozen=True)
class Deferred:
    """Thunk action: ``fn(dispatch, get_state, *extra)`` runs when dispatched.

    Instances are callable and forward to ``fn`` so thunk-aware stores can
    invoke them directly.
    """

    fn: ThunkFn

    def __call__(self, dispatch: Dispatch, get_state: GetState, *extra: Any) -> Any:
        return self.fn(dispatch, get_state, *extra)


def deferred(creator: Callable[..., ThunkFn]) -> Callable[..., Deferred]:
    """Decorate a function returning a thunk body so it returns ``Deferred``."""

    @wraps(creator)
    def deferred_creator(*args: Any, **kwargs: Any) -> Deferred:
        return Deferred(creator(*args, **kwargs))

    return deferred_creator


def decorate(
    action: Action,
    path: PathLike,
    key: Key,
    selectors: Optional[SelectorMap] = None,
) -> Action:
    """Return ``action`` carrying ``key`` at ``path``.

    A key already present at ``path`` wins over ``key``.
    """
    if isinstance(action, Deferred):
        return collect_thunk(action, path, key, selectors)
    key_path = as_key_path(path)
    existing = key_path.read(action)
    if existing is not ABSENT and existing is not None:
        return action
    return key_path.write(action, key)


def collect_thunk(
    thunk: Deferred,
    path: PathLike,
    key: Key,
    selectors: Optional[SelectorMap] = None,
) -> Deferred:
    """Wrap ``thunk`` so everything it dispatches is decorated with ``key``."""

    def collected_thunk(dispatch: Dispatch, get_state: GetState, *extra: Any) -> Any:
        logger.debug("Running thunk for key %r", key)

        def decorated_dispatch(action: Action) -> Any:
            return dispatch(decorate(action, path, key, selectors))

        if selectors is not None:
            extra = (bind_selectors(selectors, key), *extra[1:])
        return thunk(decorated_dispatch, get_state, *extra)

    return Deferred(collected_thunk)


def collect_action(
    action_creator: ActionCreator,
    path: PathLike,
    selectors: Optional[SelectorMap] = None,
) -> ActionCreator:
    """Return ``(key, *args, **kwargs)`` creator decorating ``action_creator``'s result."""
    key_path = as_key_path(path)

    @wraps(action_creator)
    def collection_action_creator(key: Key, *args: Any, **kwargs: Any) -> Action:
        return decorate(action_creator(*args, **kwargs), key_path, key, selectors)

    return collection_action_creator


def collect_actions(
    action_creators: Mapping[str, ActionCreator],
    path: PathLike,
    selectors: Optional[SelectorMap] = None,
) -> PMap[str, ActionCreator]:
    """Apply :func:`collect_action` to every creator, keeping names."""
    return pmap(
        {
            name: collect_action(creator, path, selectors)
            for name, creator in action_creators.items()
        }
    )


def bind_collected_action(action_creator: ActionCreator, key: Key) -> ActionCreator:
    """Fix ``key`` as the first argument of a collected action creator."""

    @wraps(action_creator)
    def bound_action_creator(*args: Any, **kwargs: Any) -> Action:
        return action_creator(key, *args, **kwargs)

    return bound_action_creator


def bind_collected_actions(
    action_creators: Mapping[str, ActionCreator], key: Key
) -> PMap[str, ActionCreator]:
    """Apply :func:`bind_collected_action` to every creator, keeping names."""
    return pmap(
        {
            name: bind_collected_action(creator, key)
            for name, creator in action_creators.items()
        }
    )
