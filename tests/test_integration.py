"""Integration tests composing facts over realistic fixture types."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import pytest

from factkit import (
    ConstraintUnsatisfiable,
    Entropy,
    GenerationConfig,
    Rules,
    all_of,
    any_of,
    brute,
    build_seq,
    check_seq,
    consecutive_int,
    eq,
    facts,
    in_iter,
    lens_attr,
    ne,
    none_of,
    prism,
    variant,
)
from factkit.generators.shapes import U32, Int, OneOf, Text


class Color(enum.Enum):
    CYAN = "cyan"
    MAGENTA = "magenta"
    YELLOW = "yellow"
    BLACK = "black"


@dataclass
class Link:
    prev: int
    author: str

    @classmethod
    def arbitrary(cls, entropy):
        return cls(entropy.arbitrary(U32), entropy.arbitrary(Text()))


@dataclass
class Wrapper:
    color: Color
    link: Link

    @classmethod
    def arbitrary(cls, entropy):
        return cls(entropy.arbitrary(Color), Link.arbitrary(entropy))


def chain_fact(author):
    """All links share an author, and prev counts up from 0."""
    return facts(
        lens_attr("author", eq(author, "same author"), label="Link.author"),
        lens_attr("prev", consecutive_int(0, "increasing prev"), label="Link.prev"),
    )


def wrapper_fact(author, valid_colors):
    """The links form a valid chain, and the color is in the given set."""
    return facts(
        lens_attr("color", in_iter(valid_colors, "valid color"), label="Wrapper.color"),
        lens_attr("link", chain_fact(author), label="Wrapper.link"),
    )


class TestChain:
    """Test chains of links built across a sequence."""

    def test_link(self, entropy):
        """Test a chain of links by one author."""
        num = 10
        chain = build_seq(entropy, num, chain_fact("alice"), Link)
        check_seq(chain, chain_fact("alice")).unwrap()

        assert all(link.author == "alice" for link in chain)
        assert chain[-1].prev == num - 1

    def test_wrapper(self, entropy):
        """Test a chain nested inside wrappers with a restricted color."""
        num = 30
        valid = [Color.CYAN, Color.MAGENTA]
        chain = build_seq(entropy, num, wrapper_fact("alice", valid), Wrapper)
        check_seq(chain, wrapper_fact("alice", valid)).unwrap()

        assert all(w.link.author == "alice" for w in chain)
        assert all(w.color != Color.BLACK for w in chain)
        assert chain[-1].link.prev == num - 1
        # there is a high probability that this will be true
        assert any(w.color == Color.MAGENTA for w in chain)

    def test_broken_chain_messages(self):
        """Test messages for a chain with a gap and a wrong author."""
        chain = [Link(0, "alice"), Link(1, "bob"), Link(3, "alice")]
        assert list(check_seq(chain, chain_fact("alice"))) == [
            "item 1: lens(Link.author) > same author: expected 'bob' == 'alice'",
            "item 2: lens(Link.prev) > increasing prev: expected 2, got 3",
        ]

    def test_reproducible(self):
        """Test that a seeded source reproduces the same fixtures."""
        config = GenerationConfig(seed=99)
        a = build_seq(
            Entropy.from_config(config), 5, wrapper_fact("a", list(Color)), Wrapper
        )
        b = build_seq(
            Entropy.from_config(config), 5, wrapper_fact("a", list(Color)), Wrapper
        )
        assert a == b


# Nested tagged unions: an Omega holds an Alpha, and sometimes a Beta.


@dataclass
class Beta:
    id: int
    data: str

    @classmethod
    def arbitrary(cls, entropy):
        return cls(entropy.arbitrary(U32), entropy.arbitrary(Text()))


@dataclass
class AlphaBeta:
    id: int
    beta: Beta
    data: str

    @classmethod
    def arbitrary(cls, entropy):
        return cls(
            entropy.arbitrary(U32), Beta.arbitrary(entropy), entropy.arbitrary(Text())
        )


@dataclass
class AlphaNil:
    id: int
    data: str

    @classmethod
    def arbitrary(cls, entropy):
        return cls(entropy.arbitrary(U32), entropy.arbitrary(Text()))


ALPHA = OneOf(AlphaBeta, AlphaNil)


@dataclass
class OmegaAlphaBeta:
    id: int
    alpha: AlphaBeta | AlphaNil
    beta: Beta

    @classmethod
    def arbitrary(cls, entropy):
        return cls(
            entropy.arbitrary(U32), entropy.arbitrary(ALPHA), Beta.arbitrary(entropy)
        )


@dataclass
class OmegaAlpha:
    id: int
    alpha: AlphaBeta | AlphaNil

    @classmethod
    def arbitrary(cls, entropy):
        return cls(entropy.arbitrary(U32), entropy.arbitrary(ALPHA))


OMEGA = OneOf(OmegaAlphaBeta, OmegaAlpha)


def variants_match(o):
    return (isinstance(o, OmegaAlphaBeta) and isinstance(o.alpha, AlphaBeta)) or (
        isinstance(o, OmegaAlpha) and isinstance(o.alpha, AlphaNil)
    )


def omega_fact(id, data):
    """
    - All ids match each other, including the Beta's if there is one.
    - OmegaAlpha holds an AlphaNil; OmegaAlphaBeta holds an AlphaBeta.
    - All data is set as specified.
    """
    alpha_fact = facts(
        lens_attr("id", eq(id, "id"), label="Alpha.id"),
        lens_attr("data", eq(data, "data"), label="Alpha.data"),
    )
    beta_fact = lens_attr("id", eq(id, "id"), label="Beta.id")
    variant_fact = facts(
        brute(variants_match, "Omega variant matches Alpha variant", shape=OMEGA),
        lens_attr("id", eq(id, "id"), label="Omega.id"),
    )
    return facts(
        variant_fact,
        lens_attr("alpha", alpha_fact, label="Omega.alpha"),
        prism("Omega.beta", *variant(OmegaAlphaBeta, "beta"), beta_fact),
    )


class TestOmega:
    """Test facts over nested tagged unions."""

    def test_valid_after_mutation(self, entropy):
        """Test that mutation repairs values of either variant."""
        fact = omega_fact(11, "spartacus")

        valid1 = OmegaAlpha(8, AlphaNil(3, "cheese"))
        valid1 = fact.mutate(valid1, entropy)
        fact.check(valid1).unwrap()
        assert isinstance(valid1, OmegaAlpha)

        valid2 = OmegaAlphaBeta(8, AlphaNil(3, "cheese"), Beta(4, "beta"))
        valid2 = fact.mutate(valid2, entropy)
        fact.check(valid2).unwrap()

    def test_invalid_counts(self, entropy):
        """Test that every broken constraint is reported."""
        fact = omega_fact(11, "spartacus")

        invalid1 = OmegaAlpha(8, AlphaBeta(3, Beta(4, "beta"), "cheese"))
        assert len(fact.check(invalid1)) == 4
        invalid1 = fact.mutate(invalid1, entropy)
        fact.check(invalid1).unwrap()

        invalid2 = OmegaAlphaBeta(8, AlphaNil(3, "cheese"), Beta(4, "beta"))
        assert len(fact.check(invalid2)) == 5
        invalid2 = fact.mutate(invalid2, entropy)
        fact.check(invalid2).unwrap()

    def test_messages(self):
        """Test the paths in nested failure messages."""
        fact = omega_fact(11, "spartacus")
        value = OmegaAlphaBeta(11, AlphaBeta(11, Beta(4, "x"), "cheese"), Beta(5, "y"))
        assert list(fact.check(value)) == [
            "lens(Omega.alpha) > lens(Alpha.data) > data: expected 'cheese' == 'spartacus'",
            "prism(Omega.beta) > lens(Beta.id) > id: expected 5 == 11",
        ]

    def test_build(self, entropy):
        """Test building many conforming values from scratch."""
        fact = omega_fact(11, "spartacus")
        for omega in build_seq(entropy, 20, fact, OMEGA):
            assert variants_match(omega)
            assert omega.id == 11
            assert omega.alpha.id == 11
            if isinstance(omega, OmegaAlphaBeta):
                assert omega.beta.id == 11


class TestRules:
    """Test the fluent Rules builder."""

    def make_rules(self):
        return (
            Rules()
            .forbid(eq(0), "not zero")
            .require_any(in_iter(range(1, 5)), in_iter(range(10, 15)))
        )

    def test_build_and_check(self, entropy):
        """Test that built values satisfy every rule."""
        values = build_seq(entropy, 50, self.make_rules(), int)
        check_seq(values, self.make_rules()).unwrap()
        assert all(v in range(1, 5) or v in range(10, 15) for v in values)

    def test_check_reports_each_rule(self):
        """Test failure reporting for a value breaking both rules."""
        errors = self.make_rules().check(0).errors
        assert len(errors) == 2
        assert errors[0] == "not(not zero)"

    def test_views(self):
        """Test the enforced and forbidden views."""
        rules = self.make_rules()
        assert len(rules) == 2
        assert len(rules.enforced) == 1
        assert len(rules.forbidden) == 1
        assert repr(rules) == "Rules(enforced=1, forbidden=1)"
        assert repr(Rules()) == "Rules(empty)"
        assert not Rules()

    def test_chain_rules(self, entropy):
        """Test rules over a structured type."""
        rules = (
            Rules()
            .forbid(lens_attr("color", eq(Color.BLACK)))
            .enforce(lens_attr("link", chain_fact("carol")))
        )
        seq = build_seq(entropy, 10, rules, Wrapper)
        assert all(w.color != Color.BLACK for w in seq)
        assert [w.link.prev for w in seq] == list(range(10))

    def test_forbid_all(self):
        """Test forbidding several facts at once."""
        rules = Rules().forbid_all(eq(1), eq(2))
        assert rules.check(3).is_ok()
        assert rules.check(2).is_err()

    def test_forbid_redraws_from_shape(self, entropy):
        """Test that a forbidden fact can switch to another variant of a union."""
        is_color = brute(lambda v: isinstance(v, Color), "is a color")
        rules = Rules().forbid(
            is_color, "no colors", shape=OneOf(Color, Int(0, 3))
        )
        assert isinstance(rules.facts[0].shape, OneOf)
        for _ in range(10):
            assert rules.mutate(Color.CYAN, entropy) in range(4)

    def test_forbid_without_shape_keeps_type(self, entropy):
        """Test that without a shape a forbidden variant cannot be escaped."""
        is_color = brute(lambda v: isinstance(v, Color), "is a color")
        with pytest.raises(ConstraintUnsatisfiable):
            Rules().forbid(is_color).mutate(Color.CYAN, entropy)


class TestOperators:
    """Test all_of, any_of and none_of."""

    def test_all_of(self, entropy):
        """Test conjunction."""
        fact = all_of(in_iter(range(5)), ne(0, shape=Int(0, 4)))
        for _ in range(20):
            assert fact.build(entropy, int) in range(1, 5)

    def test_any_of(self, entropy):
        """Test disjunction over several facts."""
        fact = any_of(eq("ATG"), eq("GTG"), eq("TTG"))
        assert fact.check("GTG").is_ok()
        assert fact.check("AAA").is_err()
        assert fact.build(entropy, str) in ("ATG", "GTG", "TTG")

    def test_none_of(self, entropy):
        """Test negated disjunction."""
        fact = none_of(eq(1), eq(2))
        assert fact.check(1).is_err()
        assert fact.check(3).is_ok()
        assert fact.build(entropy, Int(1, 3)) not in (1, 2)

    def test_single(self):
        """Test that one fact is returned unchanged."""
        fact = eq(1)
        assert all_of(fact) is fact
        assert any_of(fact) is fact

    @pytest.mark.parametrize("operator", [all_of, any_of, none_of])
    def test_empty(self, operator):
        """Test that no facts is an error."""
        with pytest.raises(ValueError, match="At least one fact"):
            operator()
