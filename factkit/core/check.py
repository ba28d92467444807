"""The result type of every validation."""

from __future__ import annotations

import pprint
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from factkit.core.types import CheckFailed


@dataclass(frozen=True)
class Check:
    """
    The result of a check operation.

    Holds one human-readable message for every constraint which was not met.
    An empty Check is a pass. Checks combine with ``+``, which concatenates
    their messages in order.

    Example:
        >>> Check.check(True, "message") == Check.pass_()
        True
        >>> (Check.fail("a") + Check.fail("b")).errors
        ('a', 'b')
    """

    errors: tuple[str, ...] = ()

    @classmethod
    def pass_(cls) -> Check:
        """Create a passing result."""
        return cls()

    @classmethod
    def fail(cls, error: object) -> Check:
        """Create a failure result with a single error."""
        return cls((str(error),))

    @classmethod
    def check(cls, ok: bool, error: object) -> Check:
        """Create a single-error failure if ``ok`` is false, otherwise pass."""
        return cls.pass_() if ok else cls.fail(error)

    @classmethod
    def concat(cls, checks: Iterable[Check]) -> Check:
        """Concatenate the messages of many checks, in order."""
        errors: list[str] = []
        for check in checks:
            errors.extend(check.errors)
        return cls(tuple(errors))

    @classmethod
    def fallible(cls, thunk: Callable[[], Check]) -> Check:
        """
        Run a check which may raise, mapping any exception into a failure.

        Args:
            thunk: Zero-argument callable producing a Check

        Returns:
            The thunk's Check, or a single failure holding the exception text
        """
        try:
            return thunk()
        except Exception as e:
            return cls.fail(e)

    def map(self, f: Callable[[str], str]) -> Check:
        """Apply ``f`` to every message, e.g. to prefix a path."""
        return Check(tuple(f(error) for error in self.errors))

    def is_ok(self) -> bool:
        """There are no errors."""
        return not self.errors

    def is_err(self) -> bool:
        """There is at least one error."""
        return not self.is_ok()

    def result(self) -> None:
        """
        Convert to an outcome: return None on success.

        Raises:
            CheckFailed: carrying the ordered list of messages
        """
        if self.errors:
            raise CheckFailed(list(self.errors))

    def unwrap(self) -> None:
        """Fail the calling test with a formatted report if any error is present."""
        if not self.errors:
            return
        if len(self.errors) == 1:
            msg = f"Check failed: {self.errors[0]}"
        else:
            msg = f"Check failed: {pprint.pformat(list(self.errors))}"
        raise AssertionError(msg)

    def __add__(self, other: Check) -> Check:
        if not isinstance(other, Check):
            return NotImplemented
        return Check(self.errors + other.errors)

    def __radd__(self, other: object) -> Check:
        # lets sum() start from 0
        if other == 0:
            return self
        return NotImplemented

    def __iter__(self) -> Iterator[str]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
