from astropy.units import Quantity

from stellartools.calculator import StellarPropertyCalculator, validate_input
from stellartools.constants import AGE_UNIT, DEFAULT_STAR_AGE, DEFAULT_STAR_MASS, MASS_UNIT, MAX_STAR_NAME_LENGTH
from stellartools.derived import EarthLikeCompatibility, StarDerived, StarInput

_CALCULATOR = StellarPropertyCalculator()


def validate_name(name: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Star name is required")
    if len(name) > MAX_STAR_NAME_LENGTH:
        raise ValueError(f"Star name must be at most {MAX_STAR_NAME_LENGTH} characters, got {len(name)}")
    return name


class Star:
    """
    A named star defined by its mass and age.

    Only mass and age are stored. Every other property is derived from them on read,
    so replacing either input is immediately reflected by all derived properties.
    """

    def __init__(self, name: str, mass: float = DEFAULT_STAR_MASS, age: float = DEFAULT_STAR_AGE):
        self.name = name
        self._input: StarInput = validate_input(mass, age)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Star(name={self.name!r}, mass={self.mass}, age={self.age})"

    def to_string(self) -> str:
        return (
            f"{self.name}, "
            f"m: {self.mass_quantity}, "
            f"age: {self.age_quantity}, "
            f"class: {self.spectral_class}, "
            f"T: {self.temperature:.0f} K, "
            f"hz: {self.habitable_zone_inner:.3f}-{self.habitable_zone_outer:.3f} AU"
        )

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str):
        self._name = validate_name(value)

    @property
    def mass(self) -> float:
        return self._input.mass

    @mass.setter
    def mass(self, value: float):
        self._input = validate_input(value, self.age)

    @property
    def age(self) -> float:
        return self._input.age

    @age.setter
    def age(self, value: float):
        self._input = validate_input(self.mass, value)

    @property
    def mass_quantity(self) -> Quantity:
        return self.mass * MASS_UNIT

    @property
    def age_quantity(self) -> Quantity:
        return self.age * AGE_UNIT

    @property
    def derived(self) -> StarDerived:
        return _CALCULATOR.derive(self.mass, self.age)

    @property
    def luminosity(self) -> float:
        return self.derived.luminosity

    @property
    def radius(self) -> float:
        return self.derived.radius

    @property
    def density(self) -> float:
        return self.derived.density

    @property
    def temperature(self) -> float:
        return self.derived.temperature

    @property
    def spectral_class(self) -> str:
        return self.derived.spectral_class

    @property
    def expected_lifetime(self) -> float:
        return self.derived.expected_lifetime

    @property
    def habitable_zone_inner(self) -> float:
        return self.derived.habitable_zone_inner

    @property
    def habitable_zone_outer(self) -> float:
        return self.derived.habitable_zone_outer

    @property
    def frost_line(self) -> float:
        return self.derived.frost_line

    @property
    def earth_like_compatible(self) -> EarthLikeCompatibility:
        return self.derived.earth_like_compatible
