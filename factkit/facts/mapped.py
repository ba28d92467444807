"""Facts chosen on the fly from the data they are applied to."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from factkit.core.check import Check
from factkit.core.fact import Fact, Facts

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy

Selector = Callable[[Any], "Fact | Iterable[Fact]"]


class MappedFact(Fact):
    """
    A fact which maps the data to be checked or mutated into a fact.

    Useful for piecewise constraints, which differ fundamentally depending on
    the shape of the data. The selected facts are created anew on every call,
    so any state they hold is discarded: keep counters outside of the
    selector.
    """

    def __init__(self, selector: Selector, reason: str, fallible: bool = False):
        self.selector = selector
        self.reason = reason
        self.fallible = fallible

    def _select(self, value: Any) -> Fact:
        selected = self.selector(value)
        if isinstance(selected, Fact):
            return selected
        return Facts(selected)

    def _check(self, value: Any) -> Check:
        return (
            self._select(value)
            .check(value)
            .map(lambda e: f"mapped({self.reason}) > {e}")
        )

    def check(self, value: Any) -> Check:
        if self.fallible:
            return Check.fallible(lambda: self._check(value))
        return self._check(value)

    def mutate(self, value: Any, entropy: Entropy) -> Any:
        return self._select(value).mutate(value, entropy)

    def __repr__(self) -> str:
        return f"MappedFact({self.reason!r})"


def mapped(selector: Selector, reason: str) -> MappedFact:
    """
    Create a fact from a function of the data.

    Example:
        >>> # "if the number is greater than 9000, it must be divisible by 9,
        >>> #  otherwise it must be divisible by 10"
        >>> fact = mapped(
        ...     lambda n: brute(lambda n: n % 9 == 0, "divisible by 9")
        ...     if n > 9000
        ...     else brute(lambda n: n % 10 == 0, "divisible by 10"),
        ...     "reason",
        ... )
        >>> fact.check(50).is_ok(), fact.check(9010).is_ok()
        (True, False)
    """
    return MappedFact(selector, reason)


def mapped_fallible(selector: Selector, reason: str) -> MappedFact:
    """
    A version of ``mapped`` whose selector may raise.

    During ``check`` an exception becomes the failure message; during
    ``mutate`` it propagates.
    """
    return MappedFact(selector, reason, fallible=True)
