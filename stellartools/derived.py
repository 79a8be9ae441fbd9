from dataclasses import asdict, dataclass
from enum import Enum

from astropy.units import Quantity

from stellartools.constants import (
    AGE_UNIT,
    DENSITY_UNIT,
    DISTANCE_UNIT,
    LIFETIME_UNIT,
    LUMINOSITY_UNIT,
    MASS_UNIT,
    RADIUS_UNIT,
    TEMPERATURE_UNIT,
)


class EarthLikeCompatibility(str, Enum):
    YES = "Yes"
    NO = "No"
    TOO_YOUNG = "Star Too Young"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StarInput:
    mass: float
    age: float

    def to_quantities(self) -> dict[str, Quantity]:
        return {"mass": self.mass * MASS_UNIT, "age": self.age * AGE_UNIT}


_QUANTITY_UNITS = {
    "luminosity": LUMINOSITY_UNIT,
    "radius": RADIUS_UNIT,
    "density": DENSITY_UNIT,
    "temperature": TEMPERATURE_UNIT,
    "expected_lifetime": LIFETIME_UNIT,
    "habitable_zone_inner": DISTANCE_UNIT,
    "habitable_zone_outer": DISTANCE_UNIT,
    "frost_line": DISTANCE_UNIT,
}


@dataclass(frozen=True)
class StarDerived:
    """
    Properties derived from a star's mass and age.

    Luminosity, radius and density are in solar units, temperature in Kelvin,
    expected lifetime in billions of years, and habitable zone bounds and frost
    line in AU.
    """

    luminosity: float
    radius: float
    density: float
    temperature: float
    spectral_class: str
    expected_lifetime: float
    habitable_zone_inner: float
    habitable_zone_outer: float
    frost_line: float
    earth_like_compatible: EarthLikeCompatibility

    def to_quantities(self) -> dict[str, Quantity]:
        """Numeric properties as astropy quantities, keyed by field name."""
        values = asdict(self)
        return {name: values[name] * unit for name, unit in _QUANTITY_UNITS.items()}
