"""Lift single-entity reducers, selectors and action creators to keyed collections.

Build the pieces for one entity, then lift them:

* :func:`collect_reducer` routes each action to the entity named by its key.
* :func:`collect_selectors` / :func:`bind_selectors` add and remove the key
  parameter of selectors.
* :func:`collect_actions` / :func:`bind_collected_actions` do the same for
  action creators, including thunks tagged with :class:`Deferred`.

See :mod:`keyed_reducers.examples.cars` for a complete example.
"""

import logging

from keyed_reducers.actions import (
    Deferred,
    bind_collected_action,
    bind_collected_actions,
    collect_action,
    collect_actions,
    collect_thunk,
    decorate,
    deferred,
)
from keyed_reducers.errors import InvalidArgument
from keyed_reducers.path import AccessorPath, KeyPath, as_key_path, read_key, write_key
from keyed_reducers.reducers import collect_reducer, to_collection
from keyed_reducers.selectors import (
    bind_selector,
    bind_selectors,
    collect_selector,
    collect_selectors,
)
from keyed_reducers.types import ABSENT

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ABSENT",
    "AccessorPath",
    "Deferred",
    "InvalidArgument",
    "KeyPath",
    "as_key_path",
    "bind_collected_action",
    "bind_collected_actions",
    "bind_selector",
    "bind_selectors",
    "collect_action",
    "collect_actions",
    "collect_reducer",
    "collect_selector",
    "collect_selectors",
    "collect_thunk",
    "decorate",
    "deferred",
    "read_key",
    "to_collection",
    "write_key",
]
