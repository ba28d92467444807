"""
factkit: composable constraints for checking and generating test fixtures.

A fact is a constraint which can both verify existing data and mold
arbitrary data into a value which passes the same verification. Instead of
hand-writing fixtures, declare what a fixture needs and build as many as
you like.
"""

__version__ = "0.1.0"

# Core exports
from factkit.core.check import Check
from factkit.core.dsl import Rules
from factkit.core.operators import all_of, any_of, none_of
from factkit.core.sequence import build_seq, check_seq
from factkit.core.types import (
    BRUTE_ITERATION_LIMIT,
    SATISFY_ATTEMPTS,
    CheckFailed,
    ConstraintUnsatisfiable,
    FactError,
    FactMisuse,
    GenerationConfig,
    ValidationError,
)
from factkit.facts.brute import brute, brute_fallible
from factkit.facts.lens import attr, item, lens, lens_attr, lens_item
from factkit.facts.mapped import mapped, mapped_fallible
from factkit.facts.primitives import (
    always,
    consecutive_int,
    eq,
    in_iter,
    ne,
    never,
    not_,
    or_,
)
from factkit.facts.prism import NOTHING, prism, variant
from factkit.generators.entropy import Arbitrary, Entropy

# Imported after the factkit.facts submodules: loading them binds the
# subpackage as the package attribute `facts`, which would shadow the function.
from factkit.core.fact import Fact, Facts, facts

__all__ = [
    "BRUTE_ITERATION_LIMIT",
    "NOTHING",
    "SATISFY_ATTEMPTS",
    "Arbitrary",
    "Check",
    "CheckFailed",
    "ConstraintUnsatisfiable",
    "Entropy",
    "Fact",
    "FactError",
    "FactMisuse",
    "Facts",
    "GenerationConfig",
    "Rules",
    "ValidationError",
    "all_of",
    "always",
    "any_of",
    "attr",
    "brute",
    "brute_fallible",
    "build_seq",
    "check_seq",
    "consecutive_int",
    "eq",
    "facts",
    "in_iter",
    "item",
    "lens",
    "lens_attr",
    "lens_item",
    "mapped",
    "mapped_fallible",
    "ne",
    "never",
    "none_of",
    "not_",
    "or_",
    "prism",
    "variant",
]
