"""Lift a fact about an optional part of a value into a fact about the whole."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from factkit.core.check import Check
from factkit.core.fact import Fact
from factkit.facts.lens import Setter, attr

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy

OptionalGetter = Callable[[Any], Any]


class _Nothing:
    """Marker returned by a prism getter when the outer value has no such part."""

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING = _Nothing()


class PrismFact(Fact):
    """
    A fact which applies an inner fact through a prism.

    A prism is a lens whose target may be absent, typically because the
    outer value is a different variant of a tagged union. When ``getter``
    returns ``NOTHING`` the fact is skipped for that value: nothing is
    checked, nothing is mutated and the inner state does not advance.
    ``None`` is an ordinary part like any other.
    """

    def __init__(
        self, label: str, getter: OptionalGetter, setter: Setter, fact: Fact
    ):
        self.label = label
        self.getter = getter
        self.setter = setter
        self.fact = fact

    def check(self, value: Any) -> Check:
        inner = self.getter(value)
        if inner is NOTHING:
            return Check.pass_()
        return self.fact.check(inner).map(lambda e: f"prism({self.label}) > {e}")

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        inner = self.getter(value)
        if inner is NOTHING:
            return value
        return self.setter(value, self.fact.mutate(inner, entropy))

    def advance(self, value: Any) -> None:
        inner = self.getter(value)
        if inner is not NOTHING:
            self.fact.advance(inner)

    def __repr__(self) -> str:
        return f"PrismFact({self.label!r}, {self.fact!r})"


def variant(cls: type, name: str) -> tuple[OptionalGetter, Setter]:
    """
    Prism accessors for attribute ``name`` of values which are instances of ``cls``.

    Example:
        >>> getter, setter = variant(X, "value")
        >>> getter(Y(3)) is NOTHING
        True
    """
    get_attr, set_attr = attr(name)

    def getter(obj: Any) -> Any:
        if isinstance(obj, cls):
            return get_attr(obj)
        return NOTHING

    return getter, set_attr


def prism(
    label: str, getter: OptionalGetter, setter: Setter, fact: Fact
) -> PrismFact:
    """
    Lift a fact about an optional part of a value into a fact about the whole.

    Args:
        label: Name of the part, used to prefix failure messages
        getter: Returns the part, or ``NOTHING`` if this value has no such part
        setter: Takes the whole and a new part, returns the updated whole;
            only called when ``getter`` found a part
        fact: Fact about the part

    Example:
        >>> fact = prism("E.x", *variant(X, "value"), eq(1, "must be 1"))
        >>> fact.check(X(1)).is_ok(), fact.check(X(2)).is_ok()
        (True, False)
        >>> fact.check(Y(99)).is_ok()
        True
    """
    return PrismFact(label, getter, setter, fact)
