"""Core fact protocol and its boolean compositions."""

from __future__ import annotations

import abc
import copy
import logging
import pprint
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from factkit.core.check import Check
from factkit.core.types import (
    BRUTE_ITERATION_LIMIT,
    DEFAULT_CONTEXT,
    SATISFY_ATTEMPTS,
    ConstraintUnsatisfiable,
    FactMisuse,
)

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy

logger = logging.getLogger(__name__)


class Fact(abc.ABC):
    """
    A declarative constraint on some data.

    A Fact can make an assertion about a value (``check``), or mold some
    arbitrary existing value into a shape which passes that same assertion
    (``mutate``). Facts may carry state which changes only through
    ``advance``, called once per item when walking a sequence.

    Since many Python values are immutable, ``mutate`` returns the new value
    rather than updating it in place. Callers must always use the return value.
    """

    @abc.abstractmethod
    def check(self, value: Any) -> Check:
        """
        Return every reason the value fails the constraint.

        Must not modify the value or the fact.
        """
        pass

    @abc.abstractmethod
    def mutate(self, value: Any, entropy: Entropy) -> Any:
        """
        Move the value closer to satisfying the constraint.

        Args:
            value: Current value
            entropy: Source of randomness for redraws and choices

        Returns:
            The mutated value
        """
        pass

    def advance(self, value: Any) -> None:
        """Update internal state after ``value`` has been finalized in a sequence."""
        pass

    def satisfy(self, value: Any, entropy: Entropy) -> Any:
        """
        Mutate a value until it satisfies the constraint.

        Raises:
            ConstraintUnsatisfiable: if the constraint still fails after
                SATISFY_ATTEMPTS rounds of mutation
        """
        last_failure: list[str] = []
        for attempt in range(SATISFY_ATTEMPTS):
            value = self.mutate(value, entropy)
            check = self.check(value)
            if check.is_ok():
                return value
            logger.debug("satisfy attempt %d failed: %s", attempt, check.errors)
            last_failure = list(check.errors)

        raise ConstraintUnsatisfiable(
            f"Could not satisfy a constraint even after {SATISFY_ATTEMPTS} "
            f"iterations. Last check failure: {last_failure!r}",
            last_failure,
        )

    def build(self, entropy: Entropy, shape: Any) -> Any:
        """
        Build a new value which satisfies the constraint.

        Args:
            entropy: Source of randomness
            shape: Shape of the value to draw, see ``Entropy.arbitrary``

        Returns:
            A fresh value passing ``check``
        """
        value = entropy.arbitrary(shape)
        return self.satisfy(value, entropy)

    def clone(self) -> Fact:
        """Return an independent copy, including any internal state."""
        return copy.deepcopy(self)

    def __and__(self, other: Fact) -> Facts:
        """Combine two facts so both must hold."""
        return Facts([self, other])

    def __or__(self, other: Fact) -> OrFact:
        """Combine two facts so either may hold."""
        return OrFact(self, other)

    def __invert__(self) -> NotFact:
        """Negate this fact."""
        return NotFact(self)


class Facts(Fact):
    """
    An ordered collection of facts about the same kind of value.

    Checks report every failing member. Mutations are applied in declaration
    order, so a later member may undo what an earlier one established; put
    weak constraints (e.g. brute-force ones) first.
    """

    def __init__(self, facts: Iterable[Fact] = ()):
        self.facts: list[Fact] = list(facts)

    def append(self, fact: Fact) -> Facts:
        self.facts.append(fact)
        return self

    def extend(self, facts: Iterable[Fact]) -> Facts:
        self.facts.extend(facts)
        return self

    def check(self, value: Any) -> Check:
        return Check.concat(f.check(value) for f in self.facts)

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        for f in self.facts:
            value = f.mutate(value, entropy)
        return value

    def advance(self, value: Any) -> None:
        for f in self.facts:
            f.advance(value)

    def __and__(self, other: Fact) -> Facts:
        return Facts([*self.facts, other])

    def __iter__(self) -> Iterator[Fact]:
        return iter(self.facts)

    def __len__(self) -> int:
        return len(self.facts)

    def __repr__(self) -> str:
        fact_reprs = [repr(f) for f in self.facts]
        return f"{self.__class__.__name__}([{', '.join(fact_reprs)}])"


def facts(*members: Fact) -> Facts:
    """
    Collect facts of different kinds into one fact.

    Example:
        >>> fact = facts(eq(1), not_(eq(2)))
        >>> fact.check(1).is_ok()
        True
    """
    return Facts(members)


class BoolFact(Fact):
    """A constant fact: either always met or never met."""

    def __init__(self, ok: bool, context: str):
        self.ok = ok
        self.context = context

    def check(self, value: Any) -> Check:
        return Check.check(self.ok, f"never() encountered: {self.context}")

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        if not self.ok:
            raise FactMisuse("never() cannot be used for mutation.")
        return value

    def __repr__(self) -> str:
        return "always()" if self.ok else f"never({self.context!r})"


class OrFact(Fact):
    """Logical OR of two facts: met when either one is met."""

    def __init__(self, a: Fact, b: Fact, context: str = DEFAULT_CONTEXT):
        self.a = a
        self.b = b
        self.context = context

    def check(self, value: Any) -> Check:
        a = self.a.check(value)
        b = self.b.check(value)
        if a.is_ok() or b.is_ok():
            return Check.pass_()
        return Check.fail(
            f"{self.context}: expected either one of the following conditions "
            "to be met:\n"
            f"condition 1: {pprint.pformat(list(a.errors))}\n"
            f"condition 2: {pprint.pformat(list(b.errors))}"
        )

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        # The chosen branch is not checked against facts applied earlier in
        # an aggregate.
        branch = entropy.choose([self.a, self.b])
        return branch.mutate(value, entropy)

    def advance(self, value: Any) -> None:
        self.a.advance(value)
        self.b.advance(value)

    def __repr__(self) -> str:
        return f"OrFact({self.a!r}, {self.b!r})"


class NotFact(Fact):
    """Logical NOT of a fact: met when the inner fact fails."""

    def __init__(self, fact: Fact, context: str = DEFAULT_CONTEXT, shape: Any = None):
        self.fact = fact
        self.context = context
        self.shape = shape

    def check(self, value: Any) -> Check:
        return Check.check(self.fact.check(value).is_err(), f"not({self.context})")

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        if self.fact.check(value).is_err():
            return value
        for _ in range(BRUTE_ITERATION_LIMIT):
            value = entropy.redraw(value, self.shape)
            if self.fact.check(value).is_err():
                return value

        raise ConstraintUnsatisfiable(
            f"Exceeded iteration limit of {BRUTE_ITERATION_LIMIT} while "
            f"attempting to meet not({self.context})"
        )

    def advance(self, value: Any) -> None:
        self.fact.advance(value)

    def __repr__(self) -> str:
        return f"NotFact({self.fact!r})"
