"""Concrete facts: primitives, brute force, mapping and optics."""
