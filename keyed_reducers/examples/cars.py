"""A collection of cars keyed by Vehicle Identification Number.

The single-car reducer, selectors and action creators below know nothing
about collections. The bottom of the module lifts them into ``cars``,
``selectors`` and ``actions``, which operate on a ``PMap`` of VIN -> ``Car``::

    state = cars(None, actions.add("1234", Car("1234", "jaguar", 50350)))
    selectors.get_price(state, "1234")  # 50350
"""

from dataclasses import dataclass, replace
from enum import StrEnum, auto
from typing import Any, Mapping, Optional

from pyrsistent import pmap
from pyrsistent.typing import PMap

from keyed_reducers.actions import collect_actions, deferred
from keyed_reducers.reducers import collect_reducer
from keyed_reducers.selectors import collect_selectors
from keyed_reducers.types import ABSENT, Dispatch, GetState, ThunkFn


class CarAction(StrEnum):
    ADD = auto()
    SET_PRICE = auto()
    REMOVE = auto()


@dataclass(frozen=True)
class Car:
    vin: str
    model: str
    price: int


def car(state: Optional[Car], action: Mapping[str, Any]) -> Any:
    """Reducer for a single car; ``ABSENT`` keeps it out of the collection."""
    action_type = action.get("type")
    if action_type == CarAction.ADD:
        return action["car"]
    if action_type == CarAction.REMOVE or state is None:
        return ABSENT
    if action_type == CarAction.SET_PRICE:
        return replace(state, price=action["price"])
    return state


def get_price(state: Car) -> int:
    return state.price


def is_model(state: Car, model: str) -> bool:
    return state.model == model


def add(car: Car) -> PMap[str, Any]:
    return pmap({"type": CarAction.ADD, "car": car})


def set_price(price: int) -> PMap[str, Any]:
    return pmap({"type": CarAction.SET_PRICE, "price": price})


def remove() -> PMap[str, Any]:
    return pmap({"type": CarAction.REMOVE})


@deferred
def thunk_add(car: Car) -> ThunkFn:
    def run(dispatch: Dispatch, get_state: GetState, *extra: Any) -> Any:
        return dispatch(add(car))

    return run


@deferred
def increment_price() -> ThunkFn:
    # Expects bound selectors as the third argument.
    def run(dispatch: Dispatch, get_state: GetState, selectors: Any) -> Any:
        return dispatch(set_price(selectors.get_price(get_state()) + 1))

    return run


@deferred
def deep_thunk_add(car: Car) -> ThunkFn:
    def run(dispatch: Dispatch, get_state: GetState, *extra: Any) -> Any:
        return dispatch(thunk_add(car))

    return run


car_selectors = pmap({"get_price": get_price, "is_model": is_model})

car_actions = pmap(
    {
        "add": add,
        "set_price": set_price,
        "remove": remove,
        "thunk_add": thunk_add,
        "increment_price": increment_price,
        "deep_thunk_add": deep_thunk_add,
    }
)

# Collection equivalents keyed by VIN
cars = collect_reducer(car, "vin")
selectors = collect_selectors(car_selectors)
actions = collect_actions(car_actions, "vin", selectors)
