# sail_thrust/__init__.py

"""
Core module containing unit handling, physics calculations, constants, and scenario loading.
"""

from .constants import (
    DEBUG_LOG,
    SAIL_AREA_MIN,
    SAIL_AREA_MAX,
    SAIL_AREA_STEP,
    LASER_POWER_MIN,
    LASER_POWER_MAX,
    LASER_POWER_STEP,
    DEFAULT_SAIL_AREA,
    DEFAULT_LASER_POWER,
    DEFAULT_SCENARIO_NAME,
    CANONICAL_PRESSURE_TO_NPA,
    RESULT_LABELS,
    RESULT_FORMULAS,
    UNDEFINED_TEXT,
    COLORS,
)

from .errors import (
    ThrustCalculationError,
    IncompatibleDimensionError,
    DivisionByZeroError,
    InvalidRangeError,
)

from .units import (
    ureg,
    Q_,
    DIMENSIONS,
    PROTON_MASS,
    PLANCK_CONSTANT,
    SPEED_OF_LIGHT,
    convert,
    magnitude_in,
    require_dimension,
    dimension_of,
)

from .calculations import (
    solar_wind_pressure,
    force_from_pressure,
    photon_energy,
    photon_momentum,
    photon_flux,
    force_from_photon_flux,
    force_ratio,
)

from .scenario_loader import (
    ReferenceScenario,
    DEFAULT_SCENARIO,
    SCENARIOS,
    SCENARIO_OPTIONS,
    load_scenarios_from_folder,
    scenario_from_dict,
    get_scenario,
)

from .pipeline import (
    ThrustComparison,
    PIPELINE_STEPS,
    compute_thrust_comparison,
    ratio_sweep,
    summary_rows,
    detail_rows,
    result_headings,
    result_to_json,
)

from .debug import dprint
