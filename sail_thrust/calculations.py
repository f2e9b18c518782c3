# sail_thrust/calculations.py

"""
Centralized propulsion calculations.
Solar wind pressure, photon energy/momentum/flux and both sail forces live here.
Every function converts its inputs to a canonical unit first, so callers may
pass any compatible unit.
"""

import math

from .constants import CANONICAL_PRESSURE_TO_NPA
from .errors import DivisionByZeroError, InvalidRangeError
from .units import (
    PLANCK_CONSTANT,
    SPEED_OF_LIGHT,
    Q_,
    as_scalar,
    magnitude_in,
    require_dimension,
)

H_JS = PLANCK_CONSTANT.magnitude   # J*s
C_MS = SPEED_OF_LIGHT.magnitude    # m/s


def _require_finite(value, name):
    if not math.isfinite(value):
        raise InvalidRangeError(f"{name} must be finite, got {value}")
    return value


def _finite_magnitude(quantity, unit, name):
    """Magnitude in `unit`, rejecting NaN and infinities."""
    return _require_finite(magnitude_in(quantity, unit), name)


def _require_non_negative(value, name):
    _require_finite(value, name)
    if value < 0:
        raise InvalidRangeError(f"{name} must be non-negative, got {value}")


def _require_positive_wavelength(wavelength):
    require_dimension(wavelength, "length")
    lam_m = _finite_magnitude(wavelength, "m", "Wavelength")
    if lam_m <= 0:
        raise InvalidRangeError(f"Wavelength must be positive, got {wavelength:~P}")
    return lam_m


def solar_wind_pressure(proton_mass, number_density, velocity):
    """
    Pa = m_p * n * V^2

    Evaluated on bare magnitudes in (kg, cm^-3, km/s) and scaled so the
    result reads in nPa.
    """
    require_dimension(proton_mass, "mass")
    require_dimension(number_density, "number_density")
    require_dimension(velocity, "velocity")

    mp = magnitude_in(proton_mass, "kg")
    n = magnitude_in(number_density, "cm ** -3")
    V = _finite_magnitude(velocity, "km / s", "Solar wind velocity")
    _require_non_negative(mp, "Proton mass")
    _require_non_negative(n, "Number density")

    # Overflow yields inf here, rejected by the finite check
    pressure = _require_finite(mp * n * V * V * CANONICAL_PRESSURE_TO_NPA, "Solar wind pressure")
    return Q_(pressure, "nPa")


def force_from_pressure(pressure, area):
    """N = Pa * m^2"""
    require_dimension(pressure, "pressure")
    require_dimension(area, "area")

    pa = _finite_magnitude(pressure, "Pa", "Pressure")
    m2 = magnitude_in(area, "m ** 2")
    _require_non_negative(m2, "Sail area")

    return Q_(_require_finite(pa * m2, "Sail force"), "N")


def photon_energy(wavelength):
    """E = h c / lambda"""
    lam = _require_positive_wavelength(wavelength)
    return Q_(_require_finite(H_JS * C_MS / lam, "Photon energy"), "J")


def photon_momentum(wavelength):
    """p = h / lambda"""
    lam = _require_positive_wavelength(wavelength)
    return Q_(_require_finite(H_JS / lam, "Photon momentum"), "kg * m / s")


def photon_flux(power, energy_per_photon):
    """
    gamma = W / E

    Returns photons per second as a bare float (a count rate, not a quantity).
    """
    require_dimension(power, "power")
    require_dimension(energy_per_photon, "energy")

    W = magnitude_in(power, "W")
    E = magnitude_in(energy_per_photon, "J")
    _require_non_negative(W, "Laser power")
    _require_non_negative(E, "Photon energy")
    if E == 0:
        raise DivisionByZeroError("Photon energy is zero; photon flux is undefined")

    return _require_finite(W / E, "Photon flux")


def force_from_photon_flux(rate, momentum_per_photon):
    """N = gamma * p"""
    gamma = as_scalar(rate, "Photon flux")
    require_dimension(momentum_per_photon, "momentum")
    _require_non_negative(gamma, "Photon flux")

    p = _finite_magnitude(momentum_per_photon, "kg * m / s", "Photon momentum")
    return Q_(_require_finite(gamma * p, "Laser force"), "N")


def force_ratio(laser_force, sail_force):
    """Laser thrust multiplier: laser force / sail force (dimensionless)."""
    require_dimension(laser_force, "force")
    require_dimension(sail_force, "force")

    laser_n = _finite_magnitude(laser_force, "N", "Laser force")
    sail_n = _finite_magnitude(sail_force, "N", "Sail force")
    if sail_n == 0:
        raise DivisionByZeroError("Sail force is zero; force ratio is undefined")

    return _require_finite(laser_n / sail_n, "Force ratio")
