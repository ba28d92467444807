"""Shape objects describing what kind of value to draw."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy


@dataclass(frozen=True)
class Int:
    """Integers in the inclusive range ``[lo, hi]``."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"lo must be <= hi, got [{self.lo}, {self.hi}]")

    def arbitrary(self, entropy: Entropy) -> int:
        return entropy.integer(self.lo, self.hi)


U8 = Int(0, 2**8 - 1)
U16 = Int(0, 2**16 - 1)
U32 = Int(0, 2**32 - 1)
U64 = Int(0, 2**64 - 1)
I8 = Int(-(2**7), 2**7 - 1)
I16 = Int(-(2**15), 2**15 - 1)
I32 = Int(-(2**31), 2**31 - 1)
I64 = Int(-(2**63), 2**63 - 1)


@dataclass(frozen=True)
class Text:
    """Printable strings of up to ``max_size`` characters."""

    max_size: int | None = None

    def arbitrary(self, entropy: Entropy) -> str:
        return entropy.text(self.max_size)


@dataclass(frozen=True)
class ListOf:
    """Lists whose elements are drawn from ``shape``."""

    shape: Any
    max_size: int | None = None

    def arbitrary(self, entropy: Entropy) -> list[Any]:
        max_size = (
            entropy.config.max_collection_size
            if self.max_size is None
            else self.max_size
        )
        size = entropy.integer(0, max_size)
        return [entropy.arbitrary(self.shape) for _ in range(size)]


class OneOf:
    """
    A value drawn from one of several shapes, chosen uniformly.

    Typically used for tagged unions, with one shape per variant.
    """

    def __init__(self, *shapes: Any):
        if not shapes:
            raise ValueError("At least one shape must be provided")
        self.shapes = shapes

    def arbitrary(self, entropy: Entropy) -> Any:
        return entropy.arbitrary(entropy.choose(self.shapes))

    def __repr__(self) -> str:
        return f"OneOf({', '.join(repr(s) for s in self.shapes)})"


@dataclass(frozen=True)
class Just:
    """Always the same value."""

    value: Any

    def arbitrary(self, entropy: Entropy) -> Any:
        return self.value
