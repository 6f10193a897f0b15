"""Common type aliases and the ``ABSENT`` sentinel.

``Reducer``, ``Selector`` and ``ActionCreator`` describe the single-entity
building blocks; their ``Collection*`` counterparts take the collection state
and a ``Key`` in front of the original arguments.
"""

from typing import Any, Callable, Hashable, TYPE_CHECKING

from pyrsistent.typing import PMap


if TYPE_CHECKING:
    from keyed_reducers.actions import Deferred


class _Absent:
    """Singleton marking "no value": missing entries and removal requests."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

Key = Hashable
Collection = PMap[Key, Any]

Action = Any  # plain record or Deferred
Dispatch = Callable[[Any], Any]
GetState = Callable[[], Any]
ThunkFn = Callable[..., Any]

Reducer = Callable[[Any, Any], Any]
CollectionReducer = Callable[[Any, Any], Collection]
Selector = Callable[..., Any]
ActionCreator = Callable[..., "Any | Deferred"]
