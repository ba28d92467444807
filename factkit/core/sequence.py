"""Apply a fact across an ordered series of values."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from factkit.core.check import Check
from factkit.core.fact import Fact

if TYPE_CHECKING:
    from factkit.generators.entropy import Entropy

logger = logging.getLogger(__name__)


def check_seq(items: Iterable[Any], fact: Fact) -> Check:
    """
    Check that every item of a sequence satisfies the fact.

    The fact is advanced after each item, pass or fail, so stateful facts
    change as the sequence goes on. Failure messages are prefixed with the
    index of the offending item.

    Args:
        items: Values to check, in order
        fact: Fact to apply; its state is consumed

    Returns:
        Combined Check for the whole sequence
    """
    errors: list[str] = []
    for i, item in enumerate(items):
        errors.extend(f"item {i}: {e}" for e in fact.check(item))
        fact.advance(item)
    return Check(tuple(errors))


def build_seq(entropy: Entropy, count: int, fact: Fact, shape: Any) -> list[Any]:
    """
    Build a sequence from scratch such that every item satisfies the fact.

    Args:
        entropy: Source of randomness
        count: Number of items to build
        fact: Fact to satisfy; advanced after each item
        shape: Shape of each item, see ``Entropy.arbitrary``

    Returns:
        List of ``count`` conforming items
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    seq = []
    for i in range(count):
        logger.debug("building item %d of %d", i, count)
        item = fact.build(entropy, shape)
        fact.advance(item)
        seq.append(item)
    return seq
