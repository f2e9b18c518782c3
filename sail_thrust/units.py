# sail_thrust/units.py

"""
Unit registry and helpers for dimensional calculations.

Every physical value in the app is a pint Quantity from the shared registry
below. Conversions go through convert() / magnitude_in() so a dimension
mismatch always surfaces as IncompatibleDimensionError.
"""

import numbers

import pint

from .errors import IncompatibleDimensionError

# Shared unit registry for the entire application
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity

# =============================================================================
# DIMENSION CLASSES
# =============================================================================
DIMENSIONS = {
    "mass": "[mass]",
    "number_density": "[length] ** -3",
    "velocity": "[length] / [time]",
    "pressure": "[mass] / [length] / [time] ** 2",
    "area": "[length] ** 2",
    "force": "[mass] * [length] / [time] ** 2",
    "energy": "[mass] * [length] ** 2 / [time] ** 2",
    "length": "[length]",
    "power": "[mass] * [length] ** 2 / [time] ** 3",
    "momentum": "[mass] * [length] / [time]",
    "dimensionless": None,  # checked via Quantity.dimensionless
}

# =============================================================================
# PHYSICAL CONSTANTS (from pint's built-in constants table)
# =============================================================================
PROTON_MASS = Q_(1, "proton_mass").to("kg")
PLANCK_CONSTANT = Q_(1, "planck_constant").to("J * s")
SPEED_OF_LIGHT = Q_(1, "speed_of_light").to("m / s")


def is_quantity(value):
    """True for pint quantities from any registry."""
    return isinstance(value, pint.Quantity)


def _matches(quantity, kind):
    if DIMENSIONS[kind] is None:
        return quantity.dimensionless
    return quantity.check(DIMENSIONS[kind])


def dimension_of(quantity):
    """
    Name the dimension class of a quantity.

    Raises:
        IncompatibleDimensionError: not a quantity, or outside the known classes
    """
    if not is_quantity(quantity):
        raise IncompatibleDimensionError(f"Expected a physical quantity, got bare value {quantity!r}")
    for kind in DIMENSIONS:
        if _matches(quantity, kind):
            return kind
    raise IncompatibleDimensionError(f"Unsupported dimension {quantity.dimensionality} for {quantity:~P}")


def require_dimension(quantity, kind):
    """Raise IncompatibleDimensionError unless quantity belongs to the named dimension class."""
    if kind not in DIMENSIONS:
        raise KeyError(f"Unknown dimension class: {kind}")
    if not is_quantity(quantity):
        raise IncompatibleDimensionError(f"Expected a {kind} quantity, got bare value {quantity!r}")
    if not _matches(quantity, kind):
        raise IncompatibleDimensionError(
            f"Expected a {kind} quantity, got {quantity:~P} ({quantity.dimensionality})"
        )
    return quantity


def convert(quantity, target_unit):
    """
    Convert a quantity to a compatible unit.

    Args:
        quantity: pint Quantity
        target_unit: unit string or pint Unit, e.g. "km/s"

    Returns:
        New Quantity expressed in target_unit
    """
    if not is_quantity(quantity):
        raise IncompatibleDimensionError(
            f"Cannot convert bare value {quantity!r} to {target_unit}"
        )
    try:
        return quantity.to(target_unit)
    except pint.DimensionalityError as exc:
        raise IncompatibleDimensionError(
            f"Cannot convert {quantity:~P} to {target_unit}: incompatible dimensions"
        ) from exc


def magnitude_in(quantity, unit):
    """Get the magnitude of a quantity in the specified unit."""
    return float(convert(quantity, unit).magnitude)


def as_scalar(value, name="value"):
    """
    Accept a bare real number or a dimensionless quantity and return a float.
    Used for count rates, which carry no unit.
    """
    if is_quantity(value):
        return magnitude_in(value, "dimensionless")
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise IncompatibleDimensionError(f"{name} must be a real number, got {value!r}")
    return float(value)
