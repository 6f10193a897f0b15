"""Key paths: where a collection key lives inside an action.

A key path is parsed once into a tuple of segments and then used uniformly to
read a key out of an action and to write a key into one. Field names select
mapping entries or attributes, integers select sequence positions::

    "vin"               -> ("vin",)
    "meta.vin"          -> ("meta", "vin")
    "targets[0].id"     -> ("targets", 0, "id")
    "meta['car.vin']"   -> ("meta", "car.vin")

Writes never mutate their input. Each container along the path is copied and
the copy updated: dict-like records are shallow-copied, ``pyrsistent``
containers use ``set`` and dataclass instances use :func:`dataclasses.replace`.
Sequences are padded with ``None`` when written past their end. Missing
intermediate containers are created as ``dict`` (or ``list`` when the
next segment is an index).

For action shapes a path expression cannot describe, :class:`AccessorPath`
pairs an explicit getter with a setter.
"""

import copy
import re
from dataclasses import dataclass, fields, is_dataclass, replace
from typing import (
    Any,
    Callable,
    FrozenSet,
    Mapping,
    MutableMapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from pyrsistent import PClass, PMap, PVector

from keyed_reducers.errors import InvalidArgument
from keyed_reducers.types import ABSENT, Key


Segment = Union[str, int]

_SEGMENT = re.compile(
    r"""
    (?P<name>[^.\[\]'"]+)
    | \[(?P<index>-?\d+)\]
    | \[(?P<quote>['"])(?P<quoted>.*?)(?P=quote)\]
    """,
    re.VERBOSE,
)


def parse_path(expression: str) -> Tuple[Segment, ...]:
    """Split a dotted/bracketed path expression into segments."""
    segments: list[Segment] = []
    pos = 0
    while pos < len(expression):
        if segments and expression[pos] == ".":
            pos += 1
            if pos == len(expression):
                break
        match = _SEGMENT.match(expression, pos)
        if match is None:
            raise InvalidArgument(
                f"Malformed key path {expression!r} at position {pos}"
            )
        if match.group("name") is not None:
            segments.append(match.group("name"))
        elif match.group("index") is not None:
            segments.append(int(match.group("index")))
        else:
            segments.append(match.group("quoted"))
        pos = match.end()
    if not segments or expression.endswith("."):
        raise InvalidArgument(f"Malformed key path {expression!r}")
    return tuple(segments)


def _record_fields(container: Any) -> Optional[FrozenSet[str]]:
    """Attribute names readable from a record, or ``None`` for non-records."""
    if isinstance(container, PClass):
        return frozenset(container._pclass_fields)
    if isinstance(container, tuple) and hasattr(container, "_fields"):
        return frozenset(container._fields)
    if is_dataclass(container) and not isinstance(container, type):
        return frozenset(field.name for field in fields(container))
    if (
        isinstance(container, (str, bytes, Sequence, type))
        or callable(container)
        or not hasattr(container, "__dict__")
    ):
        return None
    return frozenset(vars(container))


def _get(container: Any, segment: Segment) -> Any:
    if container is None or container is ABSENT:
        return ABSENT
    if isinstance(container, Mapping):
        return container.get(segment, ABSENT)
    if isinstance(segment, int):
        if isinstance(container, Sequence) and not isinstance(container, (str, bytes)):
            if -len(container) <= segment < len(container):
                return container[segment]
        return ABSENT
    record_fields = _record_fields(container)
    if record_fields is None or segment not in record_fields:
        return ABSENT
    return getattr(container, segment, ABSENT)


def _cannot_write(container: Any, segment: Segment) -> InvalidArgument:
    return InvalidArgument(
        f"Cannot write segment {segment!r} into {type(container).__name__}"
    )


def _set(container: Any, segment: Segment, value: Any) -> Any:
    if isinstance(container, PMap):
        return container.set(segment, value)
    if isinstance(container, MutableMapping):
        updated = copy.copy(container)
        updated[segment] = value
        return updated
    if isinstance(container, Mapping):
        return {**container, segment: value}
    if isinstance(container, PVector) or type(container) in (list, tuple):
        if not isinstance(segment, int) or segment < -len(container):
            raise _cannot_write(container, segment)
        padding = [None] * max(0, segment + 1 - len(container))
        if isinstance(container, PVector):
            return container.extend(padding).set(segment, value)
        items = list(container) + padding
        items[segment] = value
        return type(container)(items)
    record_fields = _record_fields(container)
    if record_fields is None or not isinstance(segment, str) or segment not in record_fields:
        raise _cannot_write(container, segment)
    if isinstance(container, PClass):
        return container.set(segment, value)
    if isinstance(container, tuple):
        return container._replace(**{segment: value})
    if is_dataclass(container):
        return replace(container, **{segment: value})
    raise _cannot_write(container, segment)


def _assign(container: Any, segments: Tuple[Segment, ...], value: Any) -> Any:
    head, rest = segments[0], segments[1:]
    if rest:
        child = _get(container, head)
        if child is ABSENT or child is None:
            child = [] if isinstance(rest[0], int) else {}
        value = _assign(child, rest, value)
    return _set(container, head, value)


@dataclass(frozen=True)
class KeyPath:
    """Parsed path of field names and indices.

    Attributes:
        segments: Non-empty tuple of field names (``str``) and indices (``int``).
    """

    segments: Tuple[Segment, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise InvalidArgument("Key path must have at least one segment")
        for segment in self.segments:
            if isinstance(segment, bool) or not isinstance(segment, (str, int)):
                raise InvalidArgument(f"Invalid key path segment: {segment!r}")

    @classmethod
    def parse(cls, expression: str) -> "KeyPath":
        return cls(parse_path(expression))

    def read(self, action: Any) -> Any:
        """Return the value at this path, or ``ABSENT`` if any step is missing."""
        value = action
        for segment in self.segments:
            value = _get(value, segment)
            if value is ABSENT:
                break
        return value

    def write(self, action: Any, key: Key) -> Any:
        """Return a copy of ``action`` with ``key`` stored at this path."""
        return _assign(action, self.segments, key)

    def __str__(self) -> str:
        rendered = ""
        for segment in self.segments:
            if isinstance(segment, int):
                rendered += f"[{segment}]"
            elif re.fullmatch(r"[^.\[\]'\"]+", segment):
                rendered += f".{segment}" if rendered else segment
            else:
                rendered += f"[{segment!r}]"
        return rendered


@dataclass(frozen=True)
class AccessorPath:
    """Explicit getter/setter pair standing in for a path expression.

    ``getter(action)`` returns the key (``None`` or ``ABSENT`` when missing);
    ``setter(action, key)`` must return a new action carrying ``key``.
    """

    getter: Callable[[Any], Any]
    setter: Callable[[Any, Key], Any]

    def read(self, action: Any) -> Any:
        value = self.getter(action)
        return ABSENT if value is None else value

    def write(self, action: Any, key: Key) -> Any:
        return self.setter(action, key)


PathLike = Union[KeyPath, AccessorPath, str, int, Sequence[Segment]]


def as_key_path(path: PathLike) -> Union[KeyPath, AccessorPath]:
    """Coerce a path expression, index, or segment sequence into a path object."""
    if isinstance(path, (KeyPath, AccessorPath)):
        return path
    if path is None:
        raise InvalidArgument("Key path must not be None")
    if isinstance(path, str):
        return KeyPath.parse(path)
    if isinstance(path, int) and not isinstance(path, bool):
        return KeyPath((path,))
    if isinstance(path, Sequence):
        return KeyPath(tuple(path))
    raise InvalidArgument(f"Unsupported key path type: {type(path).__name__}")


def read_key(action: Any, path: PathLike) -> Any:
    """Read the collection key from ``action``; ``ABSENT`` when there is none."""
    value = as_key_path(path).read(action)
    return ABSENT if value is None else value


def write_key(action: Any, path: PathLike, key: Key) -> Any:
    """Return a copy of ``action`` with ``key`` written at ``path``."""
    return as_key_path(path).write(action, key)
