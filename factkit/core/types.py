"""Core constants, configuration and exception types."""

from dataclasses import dataclass

# When running `Fact.satisfy`, repeat mutate+check this many times, in case
# repetition helps ease into the constraint.
SATISFY_ATTEMPTS = 3

# Ceiling for every rejection-sampling mutation (brute, not_, ne).
BRUTE_ITERATION_LIMIT = 100

DEFAULT_CONTEXT = "___"


class FactError(Exception):
    """Base class for all errors raised by factkit."""

    pass


class ValidationError(FactError):
    """Raised when a configuration value is invalid."""

    pass


class ConstraintUnsatisfiable(FactError):
    """
    Raised when a constraint cannot be met by its mutation strategy.

    This signals a mis-specified constraint rather than invalid data, so it
    is never retried and never folded into a Check.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])


class FactMisuse(FactError):
    """Raised when a fact is used in a way it does not support."""

    pass


class CheckFailed(FactError):
    """Raised by `Check.result()` when the check holds any failure."""

    def __init__(self, errors: list[str]):
        super().__init__(f"{len(errors)} check failure(s): {errors!r}")
        self.errors = errors


@dataclass
class GenerationConfig:
    """Configuration for the entropy source with validation."""

    seed: int | None = None
    noise_size: int = 4096
    max_text_size: int = 32
    max_collection_size: int = 8
    int_bits: int = 32

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.seed is not None and self.seed < 0:
            raise ValidationError(f"seed must be non-negative, got {self.seed}")

        if self.noise_size <= 0:
            raise ValidationError(
                f"noise_size must be positive, got {self.noise_size}"
            )

        if self.max_text_size < 0:
            raise ValidationError(
                f"max_text_size must be non-negative, got {self.max_text_size}"
            )

        if self.max_collection_size < 0:
            raise ValidationError(
                "max_collection_size must be non-negative, "
                f"got {self.max_collection_size}"
            )

        if self.int_bits not in (8, 16, 32, 64):
            raise ValidationError(
                f"int_bits must be one of 8, 16, 32, 64, got {self.int_bits}"
            )
