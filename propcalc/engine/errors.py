"""Typed failures raised by the calculation engine.

All subclass ValueError so callers that only care about "bad input" can catch
one type. The engine never catches these itself.
"""


class CalculationError(ValueError):
    """Base class for every engine failure."""


class InvalidInput(CalculationError):
    """Out-of-range or missing numeric parameter."""


class UnknownJurisdiction(CalculationError):
    """Region code not present in the stamp duty rules."""

    def __init__(self, code: str, known: list[str]):
        self.code = code
        self.known = known
        super().__init__(f"Invalid state: {code}. Must be one of: {', '.join(known)}")


class ConfigurationError(CalculationError):
    """Internal data-table inconsistency (e.g. a gap in duty brackets)."""
