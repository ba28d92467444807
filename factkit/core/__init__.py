"""Core fact logic and types."""

from factkit.core.check import Check
from factkit.core.dsl import Rules
from factkit.core.fact import Fact, Facts, facts
from factkit.core.sequence import build_seq, check_seq
from factkit.core.types import GenerationConfig

__all__ = [
    "Check",
    "Fact",
    "Facts",
    "GenerationConfig",
    "Rules",
    "build_seq",
    "check_seq",
    "facts",
]
