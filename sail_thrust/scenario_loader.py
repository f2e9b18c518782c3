# sail_thrust/scenario_loader.py

"""
Reference scenario loading.
Handles loading JSON files from the scenarios folder and provides access to
the boot-time data. The built-in 1 AU scenario is always available.
"""

import os
import json
import math
import sys
from dataclasses import dataclass

import pint

from .constants import (
    DEFAULT_SCENARIO_NAME,
    SOLAR_WIND_DENSITY_CM3,
    SOLAR_WIND_VELOCITY_KMS,
    LASER_WAVELENGTH_NM,
)
from .debug import dprint
from .errors import InvalidRangeError, ThrustCalculationError
from .units import PROTON_MASS, Q_, require_dimension


@dataclass(frozen=True)
class ReferenceScenario:
    """Fixed inputs of one evaluation pass: everything except the two sliders."""
    name: str
    proton_mass: pint.Quantity
    solar_wind_density: pint.Quantity
    solar_wind_velocity: pint.Quantity
    laser_wavelength: pint.Quantity
    description: str = ""


DEFAULT_SCENARIO = ReferenceScenario(
    name=DEFAULT_SCENARIO_NAME,
    proton_mass=PROTON_MASS,
    solar_wind_density=Q_(SOLAR_WIND_DENSITY_CM3, "cm ** -3"),
    solar_wind_velocity=Q_(SOLAR_WIND_VELOCITY_KMS, "km / s"),
    laser_wavelength=Q_(LASER_WAVELENGTH_NM, "nm"),
    description="Average solar wind at 1 AU, 780 nm fiber laser",
)


def resource_path(relative_path):
    """Get the absolute path to a resource, works for dev and PyInstaller."""
    if hasattr(sys, '_MEIPASS'):
        return os.path.join(sys._MEIPASS, relative_path)
    # Project root is one level above this package
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_dir, relative_path)


def _quantity_from_entry(entry, kind):
    """Build a quantity from {"value": ..., "unit": ...} and check its dimension class."""
    value = float(entry["value"])
    # json.load accepts NaN and Infinity literals
    if not math.isfinite(value):
        raise InvalidRangeError(f"Scenario value must be finite, got {entry['value']}")
    quantity = Q_(value, entry["unit"])
    return require_dimension(quantity, kind)


def scenario_from_dict(data, fallback_name=None):
    """
    Build a ReferenceScenario from parsed JSON.

    Args:
        data: Dict with solar_wind_density, solar_wind_velocity and
              laser_wavelength entries, each {"value": float, "unit": str}
        fallback_name: Name to use when the dict has no "name" key

    Returns:
        ReferenceScenario (proton mass always comes from the constants table)
    """
    return ReferenceScenario(
        name=data.get("name") or fallback_name,
        proton_mass=PROTON_MASS,
        solar_wind_density=_quantity_from_entry(data["solar_wind_density"], "number_density"),
        solar_wind_velocity=_quantity_from_entry(data["solar_wind_velocity"], "velocity"),
        laser_wavelength=_quantity_from_entry(data["laser_wavelength"], "length"),
        description=data.get("description", ""),
    )


def load_scenarios_from_folder(folder_name="scenarios"):
    """
    Load all scenario JSON files from the specified folder.

    Args:
        folder_name: Name of the folder containing scenario JSON files,
                     relative to the project root (or an absolute path)

    Returns:
        Dict mapping scenario names to ReferenceScenario, default first
    """
    folder_path = resource_path(folder_name)

    scenarios = {DEFAULT_SCENARIO.name: DEFAULT_SCENARIO}

    if not os.path.exists(folder_path):
        print(f"[WARNING] Scenario folder not found: {folder_path}")
        return scenarios

    for filename in sorted(os.listdir(folder_path)):
        if not filename.endswith(".json"):
            continue
        filepath = os.path.join(folder_path, filename)
        fallback = os.path.splitext(filename)[0].replace("_", " ")
        try:
            with open(filepath, "r") as f:
                data = json.load(f)
            scenario = scenario_from_dict(data, fallback_name=fallback)
        except (OSError, ValueError, KeyError, TypeError, pint.errors.PintError, ThrustCalculationError) as e:
            dprint(f"[SCENARIO] Skipping {filename}: {e}")
            continue
        scenarios[scenario.name] = scenario
        dprint(f"[SCENARIO] Loaded {scenario.name} from {filename}")

    return scenarios


def get_scenario(scenarios, name):
    """Find a scenario by name, falling back to the 1 AU default."""
    if name and name in scenarios:
        return scenarios[name]
    return DEFAULT_SCENARIO


def get_scenario_options(scenarios):
    """Convert scenarios to dropdown options format."""
    return [{"label": name, "value": name} for name in scenarios]


# =============================================================================
# BOOT-TIME LOADING
# =============================================================================
print("[BOOT] Loading reference scenarios...")
SCENARIOS = load_scenarios_from_folder()
SCENARIO_OPTIONS = get_scenario_options(SCENARIOS)
print(f"[BOOT] Loaded {len(SCENARIOS)} scenarios")
