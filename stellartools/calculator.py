import logging
import math
import numbers

import numpy as np
from numpy.typing import ArrayLike

from stellartools.constants import (
    EARTH_LIKE_MAX_MASS,
    EARTH_LIKE_MIN_AGE_GYR,
    EARTH_LIKE_MIN_MASS,
    FROST_LINE_COEFFICIENT,
    HZ_INNER_FLUX,
    HZ_OUTER_FLUX,
    LUMINOSITY_BANDS,
    LUMINOSITY_HIGH_MASS_COEFFICIENT,
    LUMINOSITY_HIGH_MASS_EXPONENT,
    LUMINOSITY_HIGH_MASS_SCALE,
    RADIUS_EXPONENT,
    SUN_LIFETIME_GYR,
    SUN_TEMPERATURE_K,
)
from stellartools.derived import EarthLikeCompatibility, StarDerived, StarInput
from stellartools.spectral import spectral_class

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a star's mass or age is outside the domain of the empirical relations."""


def validate_input(mass: float, age: float) -> StarInput:
    for field_name, value in (("mass", mass), ("age", age)):
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidInputError(f"Stellar {field_name} must be a real number, got {value!r}")
    mass = float(mass)
    age = float(age)

    if not math.isfinite(mass) or mass <= 0:
        raise InvalidInputError(f"Stellar mass must be a positive finite number of solar masses, got {mass}")
    if not math.isfinite(age) or age < 0:
        raise InvalidInputError(f"Stellar age must be a non-negative finite number of Gyr, got {age}")

    return StarInput(mass=mass, age=age)


# The formulas below accept scalars or numpy arrays and assume already validated inputs.


def luminosity(mass: ArrayLike) -> np.ndarray:
    """Main sequence mass-luminosity relation, in solar luminosities."""
    m = np.asarray(mass, dtype=float)
    conditions = []
    choices = []
    lower_bound = 0.0
    for upper_bound, coefficient, exponent in LUMINOSITY_BANDS:
        conditions.append((m > lower_bound) & (m <= upper_bound))
        choices.append(coefficient * np.power(m, exponent))
        lower_bound = upper_bound

    high_mass = LUMINOSITY_HIGH_MASS_COEFFICIENT * np.power(
        m / LUMINOSITY_HIGH_MASS_SCALE, LUMINOSITY_HIGH_MASS_EXPONENT
    )
    return np.select(conditions, choices, default=high_mass)


def radius(mass: ArrayLike) -> np.ndarray:
    """Main sequence mass-radius relation, in solar radii."""
    return np.power(np.asarray(mass, dtype=float), RADIUS_EXPONENT)


def temperature(luminosity: ArrayLike, radius: ArrayLike) -> np.ndarray:
    """Effective temperature in Kelvin, scaled from the Sun through Stefan-Boltzmann."""
    r = np.asarray(radius, dtype=float)
    return SUN_TEMPERATURE_K * np.power(np.asarray(luminosity, dtype=float) / r / r, 0.25)


def density(mass: ArrayLike, radius: ArrayLike) -> np.ndarray:
    return np.asarray(mass, dtype=float) / np.power(np.asarray(radius, dtype=float), 3)


def expected_lifetime(mass: ArrayLike, luminosity: ArrayLike) -> np.ndarray:
    """Main sequence lifetime in billions of years, proportional to M/L."""
    return SUN_LIFETIME_GYR * np.asarray(mass, dtype=float) / np.asarray(luminosity, dtype=float)


def habitable_zone_inner(luminosity: ArrayLike) -> np.ndarray:
    return np.sqrt(np.asarray(luminosity, dtype=float) / HZ_INNER_FLUX)


def habitable_zone_outer(luminosity: ArrayLike) -> np.ndarray:
    return np.sqrt(np.asarray(luminosity, dtype=float) / HZ_OUTER_FLUX)


def frost_line(luminosity: ArrayLike) -> np.ndarray:
    """Distance in AU beyond which water condenses as ice."""
    return FROST_LINE_COEFFICIENT * np.sqrt(np.asarray(luminosity, dtype=float))


def earth_like_compatible(mass: float, age: float) -> EarthLikeCompatibility:
    if age <= EARTH_LIKE_MIN_AGE_GYR:
        return EarthLikeCompatibility.TOO_YOUNG
    # TODO: confirm whether the intended range is 0.5 <= mass <= 1.4, as written any positive mass passes
    if mass >= EARTH_LIKE_MIN_MASS or mass <= EARTH_LIKE_MAX_MASS:
        return EarthLikeCompatibility.YES
    return EarthLikeCompatibility.NO


def derive_numeric(mass: ArrayLike) -> dict[str, np.ndarray]:
    """
    Evaluates every numeric property for one or many validated masses.

    Overflow and underflow are not reported here; use `out_of_range_rows` on the result
    to find masses the relations cannot represent in double precision.
    """
    m = np.asarray(mass, dtype=float)
    with np.errstate(over="ignore", under="ignore", divide="ignore", invalid="ignore"):
        lum = luminosity(m)
        rad = radius(m)
        return {
            "luminosity": lum,
            "radius": rad,
            "density": density(m, rad),
            "temperature": temperature(lum, rad),
            "expected_lifetime": expected_lifetime(m, lum),
            "habitable_zone_inner": habitable_zone_inner(lum),
            "habitable_zone_outer": habitable_zone_outer(lum),
            "frost_line": frost_line(lum),
        }


def out_of_range_rows(values: dict[str, np.ndarray]) -> np.ndarray:
    """Boolean mask of rows where any property is non-finite or has underflowed to zero."""
    invalid = np.zeros(np.shape(values["luminosity"]), dtype=bool)
    for column in values.values():
        invalid |= ~np.isfinite(column) | (column <= 0)
    return invalid


class StellarPropertyCalculator:
    """
    Derives the physical properties of a main sequence star from its mass and age.

    The calculator holds no state: every call to `derive` recomputes all properties
    from its arguments, so a single instance can be shared freely.
    """

    def derive(self, mass: float, age: float) -> StarDerived:
        """
        Computes every derived property of a star.

        Parameters
        ----------
        mass : float
            Stellar mass in solar masses, must be positive.
        age : float
            Stellar age in billions of years, must be non-negative.

        Returns
        -------
        StarDerived
            Immutable bundle of the derived properties.

        Raises
        ------
        InvalidInputError
            If mass is not positive or age is negative, either is not finite, or the mass
            is so extreme that a derived property overflows or underflows.
        """
        star_input = validate_input(mass, age)
        m = star_input.mass

        values = derive_numeric(m)
        if out_of_range_rows(values).any():
            raise InvalidInputError(f"Stellar mass {m} is outside the numeric range of the empirical relations")

        numeric = {name: float(column) for name, column in values.items()}
        derived = StarDerived(
            **numeric,
            spectral_class=spectral_class(numeric["temperature"]),
            earth_like_compatible=earth_like_compatible(m, star_input.age),
        )
        logger.debug(f"Derived properties for mass={m}, age={star_input.age}: {derived.spectral_class}")
        return derived


def derive(mass: float, age: float) -> StarDerived:
    return StellarPropertyCalculator().derive(mass, age)
