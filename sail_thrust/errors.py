# sail_thrust/errors.py

"""
Error taxonomy for the thrust calculations.
Formulas raise these unmodified; the pipeline turns them into "undefined" outputs.
"""


class ThrustCalculationError(Exception):
    """Base class for every calculation failure the pipeline knows how to report."""


class IncompatibleDimensionError(ThrustCalculationError, ValueError):
    """A quantity has the wrong dimension class (or is not a quantity at all)."""


class DivisionByZeroError(ThrustCalculationError, ZeroDivisionError):
    """A computed denominator is exactly zero."""


class InvalidRangeError(ThrustCalculationError, ValueError):
    """An input lies outside its declared domain."""
