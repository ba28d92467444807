"""Domain-specific language for declaring facts."""

from __future__ import annotations

from typing import Any

from factkit.core.fact import Fact, Facts, NotFact
from factkit.core.operators import all_of, any_of
from factkit.core.types import DEFAULT_CONTEXT


class Rules(Facts):
    """
    Fluent builder for a set of facts about one kind of value.

    A Rules object is itself a fact: it checks every rule and applies the
    mutations in the order the rules were declared.

    Example:
        >>> rules = (
        ...     Rules()
        ...     .enforce(lens_attr("author", eq("alice")))
        ...     .enforce(lens_attr("prev", consecutive_int(0)))
        ...     .forbid(lens_attr("color", eq(Color.Black)))
        ... )
        >>> chain = build_seq(entropy, 10, rules, Link)
    """

    def __init__(self) -> None:
        super().__init__()
        self._enforced: list[Fact] = []
        self._forbidden: list[Fact] = []

    def enforce(self, fact: Fact) -> Rules:
        """
        Add a fact that must hold.

        Returns:
            Self for method chaining
        """
        self._enforced.append(fact)
        self.facts.append(fact)
        return self

    def forbid(
        self, fact: Fact, context: str = DEFAULT_CONTEXT, shape: Any = None
    ) -> Rules:
        """
        Add a fact that must NOT hold.

        Equivalent to enforce(not_(fact, context, shape)). Pass ``shape`` when
        redrawing must be able to produce another variant of a union.

        Returns:
            Self for method chaining
        """
        self._forbidden.append(fact)
        self.facts.append(NotFact(fact, context, shape))
        return self

    def require_all(self, *facts: Fact) -> Rules:
        """Require ALL of the given facts to hold."""
        return self.enforce(all_of(*facts))

    def require_any(self, *facts: Fact) -> Rules:
        """Require ANY of the given facts to hold."""
        return self.enforce(any_of(*facts))

    def forbid_all(self, *facts: Fact) -> Rules:
        """Forbid every one of the given facts from holding."""
        return self.forbid(any_of(*facts))

    @property
    def enforced(self) -> list[Fact]:
        """Facts added through enforce and the require methods."""
        return self._enforced.copy()

    @property
    def forbidden(self) -> list[Fact]:
        """Facts added through forbid, before negation."""
        return self._forbidden.copy()

    def __bool__(self) -> bool:
        """Check if any rules are defined."""
        return len(self.facts) > 0

    def __repr__(self) -> str:
        parts = []
        if self._enforced:
            parts.append(f"enforced={len(self._enforced)}")
        if self._forbidden:
            parts.append(f"forbidden={len(self._forbidden)}")

        summary = ", ".join(parts) if parts else "empty"
        return f"Rules({summary})"
