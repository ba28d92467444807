"""Seeded source of arbitrary data, backed by numpy's PRNG."""

from __future__ import annotations

import enum
import hashlib
import os
import string
from collections.abc import Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

import numpy as np

from factkit.core.types import GenerationConfig

T = TypeVar("T")

_ALPHABET = string.ascii_letters + string.digits + string.punctuation + " "

# numpy draws integers natively below this span
_NATIVE_SPAN = 2**63 - 1


@runtime_checkable
class Arbitrary(Protocol):
    """
    Anything which knows how to draw an instance of itself.

    Shape objects implement this as an instance method, user types as a
    classmethod. This is the contract every fixture type must meet to be
    built by a fact.
    """

    def arbitrary(self, entropy: Entropy) -> Any:
        ...


class Entropy:
    """
    A deterministic source of pseudo-random values.

    The same input bytes always yield the same sequence of draws, so fixtures
    are reproducible across runs. The source is the one piece of shared
    mutable state: it is passed explicitly into every call which may
    generate data and is never stored inside a fact.

    Example:
        >>> entropy = Entropy(b"some fixed noise")
        >>> entropy.integer(0, 255) == Entropy(b"some fixed noise").integer(0, 255)
        True
    """

    def __init__(self, data: bytes = b"", config: GenerationConfig | None = None):
        self.config = config or GenerationConfig()
        digest = hashlib.blake2b(bytes(data), digest_size=32).digest()
        seed = np.random.SeedSequence(int.from_bytes(digest, "little"))
        self._rng = np.random.default_rng(seed)

    @classmethod
    def from_seed(cls, seed: int, config: GenerationConfig | None = None) -> Entropy:
        """Create a source from an integer seed."""
        if seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        size = max(1, (seed.bit_length() + 7) // 8)
        return cls(seed.to_bytes(size, "little"), config)

    @classmethod
    def noise(cls, size: int = 4096, config: GenerationConfig | None = None) -> Entropy:
        """Create a source from ``size`` bytes of fresh OS randomness."""
        return cls(os.urandom(size), config)

    @classmethod
    def from_config(cls, config: GenerationConfig) -> Entropy:
        """Create a seeded source if the config has a seed, else a noisy one."""
        if config.seed is not None:
            return cls.from_seed(config.seed, config)
        return cls.noise(config.noise_size, config)

    def integer(self, lo: int, hi: int) -> int:
        """Draw an integer uniformly from ``[lo, hi]``."""
        if lo > hi:
            raise ValueError(f"empty integer range [{lo}, {hi}]")
        span = hi - lo
        if span <= _NATIVE_SPAN:
            return lo + int(self._rng.integers(0, span, endpoint=True))
        # wide ranges (e.g. u64) are drawn from raw bytes
        n = (span.bit_length() + 7) // 8 + 1
        return lo + int.from_bytes(self._rng.bytes(n), "little") % (span + 1)

    def boolean(self) -> bool:
        return bool(self._rng.integers(0, 2))

    def floating(self) -> float:
        return float(self._rng.standard_normal() * 1e6)

    def text(self, max_size: int | None = None) -> str:
        """Draw a printable string of up to ``max_size`` characters."""
        if max_size is None:
            max_size = self.config.max_text_size
        size = self.integer(0, max_size)
        return "".join(self.choose(_ALPHABET) for _ in range(size))

    def binary(self, max_size: int | None = None) -> bytes:
        if max_size is None:
            max_size = self.config.max_text_size
        size = self.integer(0, max_size)
        return self._rng.bytes(size)

    def choose(self, options: Sequence[T]) -> T:
        """
        Choose one element uniformly.

        Raises:
            ValueError: if there are no options
        """
        if len(options) == 0:
            raise ValueError("cannot choose from an empty sequence")
        return options[int(self._rng.integers(0, len(options)))]

    def arbitrary(self, shape: Any) -> Any:
        """
        Draw an arbitrary instance of the given shape.

        Supported shapes, in order of precedence:
            - objects or classes exposing ``arbitrary(entropy)``
            - Enum subclasses (uniform over members)
            - builtins bool, int, float, str, bytes and NoneType
            - tuples of shapes (drawn element-wise)
            - plain callables taking the entropy source

        Raises:
            TypeError: if the shape is not supported
        """
        if hasattr(shape, "arbitrary"):
            return shape.arbitrary(self)
        if isinstance(shape, type) and issubclass(shape, enum.Enum):
            return self.choose(list(shape))
        if shape is bool:
            return self.boolean()
        if shape is int:
            bits = self.config.int_bits
            return self.integer(-(2 ** (bits - 1)), 2 ** (bits - 1) - 1)
        if shape is float:
            return self.floating()
        if shape is str:
            return self.text()
        if shape is bytes:
            return self.binary()
        if shape is None or shape is type(None):
            return None
        if isinstance(shape, tuple):
            return tuple(self.arbitrary(s) for s in shape)
        if callable(shape) and not isinstance(shape, type):
            return shape(self)
        raise TypeError(f"Don't know how to draw an arbitrary {shape!r}")

    def redraw(self, value: Any, shape: Any = None) -> Any:
        """Draw a replacement for ``value``, of ``shape`` or else of its own type."""
        return self.arbitrary(type(value) if shape is None else shape)

    def __repr__(self) -> str:
        return f"Entropy(config={self.config!r})"
