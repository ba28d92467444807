"""Primitive facts: equality, membership, counters and boolean connectives."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Set
from typing import TYPE_CHECKING, Any

from factkit.core.check import Check
from factkit.core.fact import BoolFact, Fact, NotFact, OrFact
from factkit.core.types import (
    BRUTE_ITERATION_LIMIT,
    DEFAULT_CONTEXT,
    ConstraintUnsatisfiable,
)

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy


class EqFact(Fact):
    """Equality or inequality with a constant."""

    def __init__(
        self,
        constant: Any,
        context: str = DEFAULT_CONTEXT,
        equal: bool = True,
        shape: Any = None,
    ):
        self.constant = constant
        self.context = context
        self.equal = equal
        self.shape = shape

    def check(self, value: Any) -> Check:
        if self.equal:
            return Check.check(
                value == self.constant,
                f"{self.context}: expected {value!r} == {self.constant!r}",
            )
        return Check.check(
            value != self.constant,
            f"{self.context}: expected {value!r} != {self.constant!r}",
        )

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        if self.equal:
            return copy.deepcopy(self.constant)

        if value != self.constant:
            return value
        for _ in range(BRUTE_ITERATION_LIMIT):
            value = entropy.redraw(value, self.shape)
            if value != self.constant:
                return value

        raise ConstraintUnsatisfiable(
            f"Exceeded iteration limit of {BRUTE_ITERATION_LIMIT} while "
            f"attempting to find a value != {self.constant!r}"
        )

    def __repr__(self) -> str:
        op = "eq" if self.equal else "ne"
        return f"{op}({self.constant!r}, context={self.context!r})"


class InFact(Fact):
    """Membership in a fixed collection."""

    def __init__(self, items: Iterable[Any], context: str = DEFAULT_CONTEXT):
        # a list, so unhashable members are allowed; sets get a stable order
        if isinstance(items, Set):
            self.items = sorted(items, key=repr)
        else:
            self.items = list(items)
        self.context = context

    def check(self, value: Any) -> Check:
        return Check.check(
            value in self.items,
            f"{self.context}: expected {value!r} to be contained in {self.items!r}",
        )

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        if not self.items:
            raise ConstraintUnsatisfiable(
                f"{self.context}: cannot choose a member of an empty collection"
            )
        return copy.deepcopy(entropy.choose(self.items))

    def __repr__(self) -> str:
        return f"in_iter({self.items!r}, context={self.context!r})"


class ConsecutiveIntFact(Fact):
    """
    An integer which must increase by one with each item in a sequence.

    The counter moves forward only through ``advance``. Passing
    ``max_value`` bounds the counter the way a fixed-width integer would.
    """

    def __init__(
        self,
        initial: int = 0,
        context: str = DEFAULT_CONTEXT,
        max_value: int | None = None,
    ):
        if max_value is not None and initial > max_value:
            raise ValueError(f"initial {initial} exceeds max_value {max_value}")
        self.counter = initial
        self.context = context
        self.max_value = max_value

    def check(self, value: Any) -> Check:
        return Check.check(
            value == self.counter,
            f"{self.context}: expected {self.counter!r}, got {value!r}",
        )

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        return self.counter

    def advance(self, value: Any) -> None:
        if self.max_value is not None and self.counter >= self.max_value:
            raise OverflowError(
                f"{self.context}: counter overflowed past {self.max_value}"
            )
        self.counter += 1

    def __repr__(self) -> str:
        return f"consecutive_int({self.counter!r}, context={self.context!r})"


def always() -> BoolFact:
    """A constraint which is always met."""
    return BoolFact(True, "always")


def never(context: str = DEFAULT_CONTEXT) -> BoolFact:
    """A constraint which is never met. Cannot be used for mutation."""
    return BoolFact(False, context)


def eq(constant: Any, context: str = DEFAULT_CONTEXT) -> EqFact:
    """
    Specify an equality constraint.

    Example:
        >>> eq(1, "must be 1").check(2).errors
        ('must be 1: expected 2 == 1',)
    """
    return EqFact(constant, context, equal=True)


def ne(constant: Any, context: str = DEFAULT_CONTEXT, shape: Any = None) -> EqFact:
    """
    Specify an inequality constraint.

    Mutation redraws the value (from ``shape``, or from the value's own type)
    until it differs from the constant.
    """
    return EqFact(constant, context, equal=False, shape=shape)


def in_iter(items: Iterable[Any], context: str = DEFAULT_CONTEXT) -> InFact:
    """Specify a membership constraint."""
    return InFact(items, context)


def consecutive_int(
    initial: int = 0,
    context: str = DEFAULT_CONTEXT,
    max_value: int | None = None,
) -> ConsecutiveIntFact:
    """Specify that a value increases by 1 with every item in a sequence."""
    return ConsecutiveIntFact(initial, context, max_value)


def or_(a: Fact, b: Fact, context: str = DEFAULT_CONTEXT) -> OrFact:
    """
    Combine two facts so that either one may be satisfied.

    Mutation picks one side at random; it does not consider whether that side
    agrees with other facts applied before it.
    """
    return OrFact(a, b, context)


def not_(fact: Fact, context: str = DEFAULT_CONTEXT, shape: Any = None) -> NotFact:
    """Negate a fact. Mutation redraws until the inner fact fails."""
    return NotFact(fact, context, shape)
