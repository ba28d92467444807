"""Entropy sources and the shapes they draw."""

from factkit.generators.entropy import Arbitrary, Entropy

__all__ = ["Arbitrary", "Entropy"]
