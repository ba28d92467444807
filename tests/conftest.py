"""Shared fixtures."""

import pytest

from factkit.generators.entropy import Entropy


@pytest.fixture
def entropy() -> Entropy:
    """A fresh entropy source backed by OS noise."""
    return Entropy.noise(999_999)
