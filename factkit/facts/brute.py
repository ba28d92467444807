"""Facts defined by a predicate and satisfied by brute force."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from factkit.core.check import Check
from factkit.core.fact import Fact
from factkit.core.types import BRUTE_ITERATION_LIMIT, ConstraintUnsatisfiable

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy

logger = logging.getLogger(__name__)


class BruteFact(Fact):
    """
    A constraint defined only by a predicate.

    Mutation keeps redrawing the value until the predicate holds, up to
    BRUTE_ITERATION_LIMIT times. This only works when arbitrary data
    satisfies the predicate reasonably often, e.g. when requiring a
    particular enum member. Because a redraw replaces the whole value, place
    brute facts first in an aggregate so they don't undo other facts.
    """

    def __init__(
        self,
        predicate: Callable[[Any], bool],
        reason: str,
        shape: Any = None,
        fallible: bool = False,
    ):
        self.predicate = predicate
        self.reason = reason
        self.shape = shape
        self.fallible = fallible

    def check(self, value: Any) -> Check:
        if self.fallible:
            return Check.fallible(
                lambda: Check.check(self.predicate(value), self.reason)
            )
        return Check.check(self.predicate(value), self.reason)

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        if self.predicate(value):
            return value
        for i in range(1, BRUTE_ITERATION_LIMIT + 1):
            value = entropy.redraw(value, self.shape)
            if self.predicate(value):
                logger.debug("brute(%s) met after %d redraws", self.reason, i)
                return value

        raise ConstraintUnsatisfiable(
            f"Exceeded iteration limit of {BRUTE_ITERATION_LIMIT} while "
            f"attempting to meet brute({self.reason})"
        )

    def __repr__(self) -> str:
        return f"BruteFact({self.reason!r})"


def brute(
    predicate: Callable[[Any], bool], reason: str, shape: Any = None
) -> BruteFact:
    """
    Create a fact from a predicate, satisfied by rejection sampling.

    Args:
        predicate: Returns True when a value meets the constraint
        reason: Failure message when it does not
        shape: Shape to redraw from; defaults to the value's own type

    Example:
        >>> div_by_3 = brute(lambda x: x % 3 == 0, "divisible by 3")
        >>> div_by_3.check(4).errors
        ('divisible by 3',)
    """
    return BruteFact(predicate, reason, shape)


def brute_fallible(
    predicate: Callable[[Any], bool], reason: str, shape: Any = None
) -> BruteFact:
    """
    A version of ``brute`` whose predicate may raise.

    During ``check`` an exception becomes the failure message; during
    ``mutate`` it propagates.
    """
    return BruteFact(predicate, reason, shape, fallible=True)
