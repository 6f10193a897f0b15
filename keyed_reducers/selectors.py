"""Selectors over a keyed collection.

``collect_*`` turns ``selector(entity_state, *args)`` into
``selector(collection_state, key, *args)``; ``bind_*`` fixes the key again and
yields ``selector(collection_state, *args)``. Selector maps are returned as
``PMap`` so entries can be read as attributes (``selectors.get_price``).
"""

from functools import wraps
from typing import Any, Mapping

from pyrsistent import pmap
from pyrsistent.typing import PMap

from keyed_reducers.reducers import to_collection
from keyed_reducers.types import ABSENT, Key, Selector


def collect_selector(selector: Selector) -> Selector:
    """Return ``(collection_state, key, *args)`` selector; ``ABSENT`` for unknown keys."""

    @wraps(selector)
    def collection_selector(state: Any, key: Key, *args: Any, **kwargs: Any) -> Any:
        collection = to_collection(state)
        if key not in collection:
            return ABSENT
        return selector(collection[key], *args, **kwargs)

    return collection_selector


def collect_selectors(selectors: Mapping[str, Selector]) -> PMap[str, Selector]:
    """Apply :func:`collect_selector` to every selector, keeping names."""
    return pmap({name: collect_selector(selector) for name, selector in selectors.items()})


def bind_selector(selector: Selector, key: Key) -> Selector:
    """Fix ``key`` into a collection selector."""

    @wraps(selector)
    def bound_selector(state: Any, *args: Any, **kwargs: Any) -> Any:
        return selector(state, key, *args, **kwargs)

    return bound_selector


def bind_selectors(selectors: Mapping[str, Selector], key: Key) -> PMap[str, Selector]:
    """Apply :func:`bind_selector` to every selector, keeping names."""
    return pmap({name: bind_selector(selector, key) for name, selector in selectors.items()})
