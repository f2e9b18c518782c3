# sail_thrust/pipeline.py

"""
Assembly of the thrust comparison.

The calculation is a small DAG of pure steps evaluated in dependency order on
every input change. A failing step is recorded as undefined together with
everything downstream of it; independent outputs are still reported.
"""

import math
import numbers
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

import numpy as np
import pint

from .calculations import (
    force_from_photon_flux,
    force_from_pressure,
    force_ratio,
    photon_energy,
    photon_flux,
    photon_momentum,
    solar_wind_pressure,
)
from .constants import (
    LASER_POWER_MAX,
    LASER_POWER_MIN,
    RESULT_FORMULAS,
    RESULT_LABELS,
    SAIL_AREA_MAX,
    SAIL_AREA_MIN,
    UNDEFINED_TEXT,
)
from .debug import dprint
from .errors import InvalidRangeError, ThrustCalculationError
from .scenario_loader import DEFAULT_SCENARIO, ReferenceScenario
from .units import Q_, magnitude_in


def validate_slider_value(value, name, minimum, maximum):
    """Reject slider values outside [minimum, maximum] instead of trusting the UI."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidRangeError(f"{name} must be a number, got {value!r}")
    if not (minimum <= value <= maximum):
        raise InvalidRangeError(f"{name} must be between {minimum} and {maximum}, got {value}")
    return value


def sail_area_quantity(sail_area):
    """Slider value (m^2) -> area quantity."""
    validate_slider_value(sail_area, "Sail area", SAIL_AREA_MIN, SAIL_AREA_MAX)
    return Q_(sail_area, "m ** 2")


def laser_power_quantity(laser_power):
    """Slider value (W) -> power quantity."""
    validate_slider_value(laser_power, "Laser power", LASER_POWER_MIN, LASER_POWER_MAX)
    return Q_(laser_power, "W")


# =============================================================================
# DEPENDENCY GRAPH
# =============================================================================

@dataclass(frozen=True)
class Step:
    """One node of the calculation graph."""
    name: str
    func: Callable
    inputs: Tuple[str, ...]


# Topological order: inputs, then pressure/energy/momentum, flux, forces, ratio
PIPELINE_STEPS = (
    Step("sail_area", sail_area_quantity, ("raw_sail_area",)),
    Step("laser_power", laser_power_quantity, ("raw_laser_power",)),
    Step("solar_wind_pressure", solar_wind_pressure,
         ("proton_mass", "solar_wind_density", "solar_wind_velocity")),
    Step("photon_energy", photon_energy, ("laser_wavelength",)),
    Step("photon_momentum", photon_momentum, ("laser_wavelength",)),
    Step("photon_flux", photon_flux, ("laser_power", "photon_energy")),
    Step("sail_force", force_from_pressure, ("solar_wind_pressure", "sail_area")),
    Step("laser_force", force_from_photon_flux, ("photon_flux", "photon_momentum")),
    Step("force_ratio", force_ratio, ("laser_force", "sail_force")),
)


@dataclass(frozen=True)
class ThrustComparison:
    """
    Result of one evaluation pass.

    Outputs are None when undefined; `errors` maps the step name to the
    reason it is undefined.
    """
    scenario: ReferenceScenario
    sail_area: Optional[pint.Quantity]
    laser_power: Optional[pint.Quantity]
    solar_wind_pressure: Optional[pint.Quantity]
    photon_energy: Optional[pint.Quantity]
    photon_momentum: Optional[pint.Quantity]
    photon_flux: Optional[float]
    laser_force: Optional[pint.Quantity]
    sail_force: Optional[pint.Quantity]
    force_ratio: Optional[float]
    errors: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))

    def is_defined(self, name):
        return getattr(self, name) is not None


def _evaluate(values):
    errors = {}
    for step in PIPELINE_STEPS:
        # Seed values are always passed through; only failed steps propagate
        missing = [dep for dep in step.inputs if dep in errors]
        if missing:
            values[step.name] = None
            errors[step.name] = f"depends on undefined {', '.join(missing)}"
            continue
        try:
            values[step.name] = step.func(*(values[dep] for dep in step.inputs))
        except ThrustCalculationError as e:
            values[step.name] = None
            errors[step.name] = str(e)
            dprint(f"[PIPELINE] {step.name} undefined: {e}")
    return values, errors


def compute_thrust_comparison(sail_area, laser_power, scenario=DEFAULT_SCENARIO):
    """
    Compute solar wind force, laser force and their ratio.

    Args:
        sail_area: Sail area slider value in m^2 (1-100)
        laser_power: Laser power slider value in W (100-1000)
        scenario: ReferenceScenario with the fixed inputs

    Returns:
        ThrustComparison with every output (None where undefined)
    """
    seed = {
        "raw_sail_area": sail_area,
        "raw_laser_power": laser_power,
        "proton_mass": scenario.proton_mass,
        "solar_wind_density": scenario.solar_wind_density,
        "solar_wind_velocity": scenario.solar_wind_velocity,
        "laser_wavelength": scenario.laser_wavelength,
    }
    values, errors = _evaluate(seed)
    dprint(f"[PIPELINE] area={sail_area} power={laser_power} scenario={scenario.name} "
           f"ratio={values['force_ratio']}")

    return ThrustComparison(
        scenario=scenario,
        sail_area=values["sail_area"],
        laser_power=values["laser_power"],
        solar_wind_pressure=values["solar_wind_pressure"],
        photon_energy=values["photon_energy"],
        photon_momentum=values["photon_momentum"],
        photon_flux=values["photon_flux"],
        laser_force=values["laser_force"],
        sail_force=values["sail_force"],
        force_ratio=values["force_ratio"],
        errors=errors,
    )


def ratio_sweep(laser_power, scenario=DEFAULT_SCENARIO, sail_areas=None):
    """
    Evaluate the force ratio across sail areas (default: every integer in the slider domain).

    Returns:
        (areas, ratios) numpy arrays, NaN where the ratio is undefined
    """
    if sail_areas is None:
        sail_areas = np.arange(SAIL_AREA_MIN, SAIL_AREA_MAX + 1)
    areas = np.asarray(sail_areas)

    ratios = np.full(areas.shape, np.nan, dtype=float)
    for i, area in enumerate(areas):
        # numpy scalars -> plain python numbers for the slider validation
        result = compute_thrust_comparison(area.item(), laser_power, scenario)
        if result.force_ratio is not None:
            ratios[i] = result.force_ratio
    return areas, ratios


# =============================================================================
# PRESENTATION HELPERS
# =============================================================================

# Unit each quantity output is displayed in (matches RESULT_LABELS)
DISPLAY_UNITS = {
    "solar_wind_pressure": "nPa",
    "photon_energy": "J",
    "photon_momentum": "kg * m / s",
    "laser_force": "N",
    "sail_force": "N",
}

# Keys used by the JSON endpoint
JSON_KEYS = {
    "solar_wind_pressure": "solar_wind_pressure_nPa",
    "photon_energy": "photon_energy_J",
    "photon_momentum": "photon_momentum_kg_m_per_s",
    "photon_flux": "photon_flux_per_s",
    "laser_force": "laser_force_N",
    "sail_force": "sail_force_N",
    "force_ratio": "force_ratio",
}


def output_value(result, name):
    """Bare number for an output in its display unit, or None if undefined."""
    value = getattr(result, name)
    if value is None:
        return None
    if name in DISPLAY_UNITS:
        return magnitude_in(value, DISPLAY_UNITS[name])
    return float(value)


def format_output(result, name):
    value = output_value(result, name)
    if value is None or not math.isfinite(value):
        return UNDEFINED_TEXT
    unit = RESULT_LABELS[name][1]
    return f"{value:.4g} {unit}".strip()


def summary_rows(result):
    """
    Labelled outputs in display order.

    Returns:
        List of (label, formatted value, reason or None)
    """
    rows = []
    for name, (label, unit) in RESULT_LABELS.items():
        full_label = f"{label} ({unit})" if unit else label
        rows.append((full_label, format_output(result, name), result.errors.get(name)))
    return rows


def _describe(quantity, unit, symbol):
    """Short input text like "780 nm"; None when the input itself is unusable."""
    if quantity is None:
        return None
    try:
        value = magnitude_in(quantity, unit)
    except ThrustCalculationError:
        return None
    return f"{value:g} {symbol}"


def result_headings(result):
    """
    Headings that name the inputs each output was computed for,
    e.g. "Energy per photon at 780 nm". Falls back to the plain label
    when the input is undefined.
    """
    wavelength = _describe(result.scenario.laser_wavelength, "nm", "nm")
    power = _describe(result.laser_power, "W", "W")
    area = _describe(result.sail_area, "m ** 2", "m²")

    headings = {name: label for name, (label, _) in RESULT_LABELS.items()}
    headings["solar_wind_pressure"] = f"Solar wind pressure ({result.scenario.name})"
    if wavelength:
        headings["photon_energy"] = f"Energy per photon at {wavelength}"
        headings["photon_momentum"] = f"Momentum per photon at {wavelength}"
    if power:
        headings["photon_flux"] = f"Photons per second at {power}"
        headings["laser_force"] = f"Thrust from a {power} laser"
    if area:
        headings["sail_force"] = f"Thrust from the solar wind on a {area} sail"
        headings["force_ratio"] = f"Laser thrust multiplier vs. {area} sail"
    return headings


def detail_rows(result):
    """
    Outputs in display order with the formula behind each one.

    Returns:
        List of dicts with name, heading, formula (LaTeX), reference (URL or None),
        value (formatted) and reason (None when defined)
    """
    headings = result_headings(result)
    rows = []
    for name in RESULT_LABELS:
        formula, reference = RESULT_FORMULAS[name]
        rows.append({
            "name": name,
            "heading": headings[name],
            "formula": formula,
            "reference": reference,
            "value": format_output(result, name),
            "reason": result.errors.get(name),
        })
    return rows


def result_to_json(result):
    """Plain dict of the outputs for the JSON endpoint."""
    payload = {"scenario": result.scenario.name}
    for name, key in JSON_KEYS.items():
        payload[key] = output_value(result, name)
    payload["errors"] = dict(result.errors)
    return payload
