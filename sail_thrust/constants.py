# sail_thrust/constants.py

"""
Application-wide constants for the Laser Sail Thrust Calculator.
Physical constants live in units.py - this file is for app config constants.
"""

import os

# =============================================================================
# DEBUG SETTINGS
# =============================================================================
DEBUG_LOG = os.environ.get("SAIL_THRUST_DEBUG_LOG", "0") == "1"

# =============================================================================
# SLIDER DOMAINS (inclusive)
# =============================================================================
SAIL_AREA_MIN = 1      # m^2
SAIL_AREA_MAX = 100    # m^2
SAIL_AREA_STEP = 1

LASER_POWER_MIN = 100   # W
LASER_POWER_MAX = 1000  # W
LASER_POWER_STEP = 1

# Sliders start at the bottom of their range
DEFAULT_SAIL_AREA = SAIL_AREA_MIN
DEFAULT_LASER_POWER = LASER_POWER_MIN

# =============================================================================
# REFERENCE VALUES (solar wind at 1 AU, fiber laser)
# =============================================================================
DEFAULT_SCENARIO_NAME = "1 AU average"
SOLAR_WIND_DENSITY_CM3 = 7.0      # particles / cm^3
SOLAR_WIND_VELOCITY_KMS = 450.0   # km/s
LASER_WAVELENGTH_NM = 780         # nm

# m_p [kg] * n [cm^-3] * V^2 [(km/s)^2] is a pressure in units of 1e12 Pa,
# so this factor makes the bare product read directly in nanopascals.
CANONICAL_PRESSURE_TO_NPA = 1e21

# =============================================================================
# RESULT LABELS (display order)
# =============================================================================
RESULT_LABELS = {
    "solar_wind_pressure": ("Solar wind pressure", "nPa"),
    "photon_energy": ("Photon energy", "J"),
    "photon_momentum": ("Photon momentum", "kg·m/s"),
    "photon_flux": ("Photon flux", "photons/s"),
    "laser_force": ("Laser force", "N"),
    "sail_force": ("Sail force", "N"),
    "force_ratio": ("Force ratio (laser / sail)", ""),
}
UNDEFINED_TEXT = "undefined"

# =============================================================================
# FORMULAS AND SOURCES (LaTeX, reference URL)
# =============================================================================
SOLAR_WIND_REF = "https://en.wikipedia.org/wiki/Solar_wind#Pressure"
PASCAL_REF = "https://en.wikipedia.org/wiki/Pascal_(unit)"
LASER_MOMENTUM_REF = "http://umdberg.pbworks.com/w/page/50455623/Momentum%20of%20a%20laser%20beam"

RESULT_FORMULAS = {
    "solar_wind_pressure": (r"Pa = m_p \cdot n \cdot V^2", SOLAR_WIND_REF),
    "photon_energy": (r"E = \frac{hc}{\lambda}", LASER_MOMENTUM_REF),
    "photon_momentum": (r"p = \frac{h}{\lambda}", LASER_MOMENTUM_REF),
    "photon_flux": (r"\gamma = \frac{W}{E}", LASER_MOMENTUM_REF),
    "laser_force": (r"N = \gamma \cdot p", LASER_MOMENTUM_REF),
    "sail_force": (r"N = Pa \cdot m^2", PASCAL_REF),
    "force_ratio": (r"\frac{N_{laser}}{N_{sail}}", None),
}

# =============================================================================
# STYLING CONSTANTS
# =============================================================================
COLORS = {
    "ratio_line": "#1f77b4",
    "current_marker": "red",
    "parity_line": "rgba(128, 128, 128, 0.6)",
    "undefined_text": "#b02a37",
}
