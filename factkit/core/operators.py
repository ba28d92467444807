"""Logical operators for fact composition."""

from factkit.core.fact import Fact, Facts, NotFact, OrFact


def all_of(*facts: Fact) -> Fact:
    """
    Create a fact that requires ALL of the given facts to hold.

    Equivalent to fact1 & fact2 & ... & factN

    Example:
        >>> fact = all_of(ne(0), in_iter(range(10)))
    """
    if not facts:
        raise ValueError("At least one fact must be provided")

    if len(facts) == 1:
        return facts[0]

    return Facts(facts)


def any_of(*facts: Fact) -> Fact:
    """
    Create a fact that requires ANY of the given facts to hold.

    Equivalent to fact1 | fact2 | ... | factN. Note that mutation then picks
    the last fact with probability 1/2, the one before it with 1/4, and so on.

    Example:
        >>> fact = any_of(eq("ATG"), eq("GTG"), eq("TTG"))
    """
    if not facts:
        raise ValueError("At least one fact must be provided")

    result = facts[0]
    for fact in facts[1:]:
        result = OrFact(result, fact)
    return result


def none_of(*facts: Fact) -> Fact:
    """
    Create a fact that requires NONE of the given facts to hold.

    Equivalent to ~(fact1 | fact2 | ... | factN)
    """
    if not facts:
        raise ValueError("At least one fact must be provided")

    return NotFact(any_of(*facts))
