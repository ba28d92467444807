"""Lift a fact about a part of a value into a fact about the whole."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from factkit.core.check import Check
from factkit.core.fact import Fact

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy

Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], Any]


class LensFact(Fact):
    """
    A fact which applies an inner fact through a lens.

    If an outer value always contains an inner value, and you have a fact
    about the inner value, a lens lifts that fact to the outer value. The
    accessor is split in two: ``getter`` gives a read-only view used by
    ``check`` and ``advance``, and ``setter`` writes a mutated inner value
    back, returning the updated outer value. If the inner value is not always
    present, use ``prism`` instead.
    """

    def __init__(self, label: str, getter: Getter, setter: Setter, fact: Fact):
        self.label = label
        self.getter = getter
        self.setter = setter
        self.fact = fact

    def check(self, value: Any) -> Check:
        return self.fact.check(self.getter(value)).map(
            lambda e: f"lens({self.label}) > {e}"
        )

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        inner = self.fact.mutate(self.getter(value), entropy)
        return self.setter(value, inner)

    def advance(self, value: Any) -> None:
        self.fact.advance(self.getter(value))

    def __repr__(self) -> str:
        return f"LensFact({self.label!r}, {self.fact!r})"


def attr(name: str) -> tuple[Getter, Setter]:
    """
    Accessors for the attribute ``name``.

    Frozen dataclasses are rebuilt with ``dataclasses.replace``; anything else
    is updated in place.
    """

    def getter(obj: Any) -> Any:
        return getattr(obj, name)

    def setter(obj: Any, value: Any) -> Any:
        params = getattr(type(obj), "__dataclass_params__", None)
        if params is not None and params.frozen:
            return dataclasses.replace(obj, **{name: value})
        setattr(obj, name, value)
        return obj

    return getter, setter


def item(key: Any) -> tuple[Getter, Setter]:
    """
    Accessors for ``obj[key]``.

    Tuples (including named tuples) are rebuilt; mutable containers are
    updated in place.
    """

    def getter(obj: Any) -> Any:
        return obj[key]

    def setter(obj: Any, value: Any) -> Any:
        if isinstance(obj, tuple):
            items = list(obj)
            items[key] = value
            if hasattr(obj, "_make"):
                return obj._make(items)
            return tuple(items)
        obj[key] = value
        return obj

    return getter, setter


def lens(label: str, getter: Getter, setter: Setter, fact: Fact) -> LensFact:
    """
    Lift a fact about a part of a value into a fact about the whole.

    Args:
        label: Name of the part, used to prefix failure messages
        getter: Returns the part; must be pure and total
        setter: Takes the whole and a new part, returns the updated whole
        fact: Fact about the part

    Example:
        >>> @dataclass
        ... class S:
        ...     x: int
        ...     y: int
        >>> fact = lens("S.x", *attr("x"), eq(1, "must be 1"))
        >>> fact.check(S(1, 333)).is_ok(), fact.check(S(2, 333)).is_ok()
        (True, False)
    """
    return LensFact(label, getter, setter, fact)


def lens_attr(name: str, fact: Fact, label: str | None = None) -> LensFact:
    """Shorthand for a lens over the attribute ``name``."""
    return LensFact(label or name, *attr(name), fact)


def lens_item(key: Any, fact: Fact, label: str | None = None) -> LensFact:
    """Shorthand for a lens over ``obj[key]``."""
    return LensFact(label or f"[{key!r}]", *item(key), fact)
