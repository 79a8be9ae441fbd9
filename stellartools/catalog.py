import logging
from typing import Iterable, Optional, Sequence

import astropy.units as u
import numpy as np
import pandas as pd
from astropy.table import QTable
from numpy.typing import ArrayLike
from typing_extensions import Self

from stellartools import calculator as calc
from stellartools.calculator import InvalidInputError
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
from stellartools.derived import EarthLikeCompatibility
from stellartools.spectral import spectral_class
from stellartools.star import Star, validate_name
from stellartools.utils.qtable_utils import QTableHeader, get_header_from_table

logger = logging.getLogger(__name__)

_ID_FIELD = "name"

CATALOG_DESCRIPTIONS = {
    "name": "Star name",
    "mass": "Stellar mass",
    "age": "Stellar age",
    "luminosity": "Main sequence luminosity",
    "radius": "Main sequence radius",
    "density": "Mean density",
    "temperature": "Effective surface temperature",
    "spectral_class": "Spectral letter and 0-9 subdivision",
    "expected_lifetime": "Expected main sequence lifetime",
    "habitable_zone_inner": "Habitable zone inner border",
    "habitable_zone_outer": "Habitable zone outer border",
    "frost_line": "Frost line distance",
    "earth_like_compatible": "Whether the star can host earth-like life",
}


class StarCatalog:
    """
    A table of stars with all their derived properties, one row per star.

    Numeric columns are astropy quantities. Rows hold the same values that
    `StellarPropertyCalculator.derive` returns for the same mass and age.
    """

    def __init__(self, dataset: QTable):
        if len(dataset.columns) == 0:
            raise ValueError("Attempting to create StarCatalog with empty column set.")

        # An empty dataset with columns but no data is a valid dataset
        if len(dataset) != 0:
            dataset.add_index(_ID_FIELD)

        self._ds = dataset

    def __len__(self):
        return len(self.view)

    def _factory(self, dataset: QTable) -> Self:
        return StarCatalog(dataset)

    @classmethod
    def from_inputs(cls, masses: ArrayLike, ages: ArrayLike, names: Optional[Sequence[str]] = None) -> Self:
        """
        Derives the properties of many stars at once.

        Parameters
        ----------
        masses : ArrayLike
            Stellar masses in solar masses.
        ages : ArrayLike
            Stellar ages in billions of years, same length as masses.
        names : Optional[Sequence[str]], optional
            Star names. Defaults to "star_0", "star_1", ...

        Raises
        ------
        InvalidInputError
            If any mass is not positive, any age is negative, any value is not finite, or a mass
            is so extreme that a derived property overflows or underflows.
        ValueError
            If the lengths differ or a name is blank or longer than 100 characters.
        """
        try:
            raw_mass = np.atleast_1d(np.asarray(masses))
            raw_age = np.atleast_1d(np.asarray(ages))
        except (TypeError, ValueError) as e:
            raise InvalidInputError("Masses and ages must be real numbers") from e

        # Integer and float arrays only, an empty list defaults to float
        if raw_mass.dtype.kind not in "iuf" or raw_age.dtype.kind not in "iuf":
            raise InvalidInputError(
                f"Masses and ages must be real numbers, got dtypes {raw_mass.dtype} and {raw_age.dtype}"
            )
        m = raw_mass.astype(float)
        age = raw_age.astype(float)

        if m.shape != age.shape or m.ndim != 1:
            raise ValueError(f"Masses and ages must be 1D and of the same length, got {m.shape} and {age.shape}")

        if names is None:
            names = [f"star_{i}" for i in range(len(m))]
        elif len(names) != len(m):
            raise ValueError(f"Expected {len(m)} names, got {len(names)}")
        names = [validate_name(name) for name in names]

        invalid_mass = ~np.isfinite(m) | (m <= 0)
        invalid_age = ~np.isfinite(age) | (age < 0)
        if invalid_mass.any() or invalid_age.any():
            raise InvalidInputError(
                f"Invalid stellar inputs at rows {np.flatnonzero(invalid_mass | invalid_age).tolist()}: "
                "mass must be positive and age non-negative"
            )

        logger.info(f"Deriving properties for {len(m)} stars")
        values = calc.derive_numeric(m)
        out_of_range = calc.out_of_range_rows(values)
        if out_of_range.any():
            raise InvalidInputError(
                f"Stellar masses at rows {np.flatnonzero(out_of_range).tolist()} are outside the numeric range "
                "of the empirical relations"
            )

        return cls(_build_catalog_table(names, m, age, values))

    @classmethod
    def from_stars(cls, stars: Iterable[Star]) -> Self:
        stars = list(stars)
        return cls.from_inputs(
            masses=[s.mass for s in stars],
            ages=[s.age for s in stars],
            names=[s.name for s in stars],
        )

    @property
    def view(self) -> QTable:
        return self._ds

    @property
    def dataset_copy(self) -> QTable:
        return self._ds.copy()

    @property
    def header(self) -> QTableHeader:
        return get_header_from_table(self._ds, descriptions=CATALOG_DESCRIPTIONS)

    def where(self, **kwargs) -> Self:
        """
        Filters the stars by the given fields.
        """
        conditions = np.ones(len(self._ds), dtype=bool)

        for field_name, value in kwargs.items():
            if field_name in self._ds.colnames:
                # Check if value is a sequence-like object (list, tuple, numpy array, etc.)
                if isinstance(value, (Sequence, np.ndarray)) and not isinstance(value, (str, bytes)):
                    conditions &= np.isin(self._ds[field_name], value)
                else:
                    conditions &= self._ds[field_name] == value
        return self._factory(self._ds[conditions])

    def where_true(self, bit_mask: np.ndarray) -> Self:
        """
        Returns the stars that match the mask
        """
        return self._factory(self._ds[bit_mask])

    def get_earth_like_compatible(self) -> Self:
        return self.where(earth_like_compatible=EarthLikeCompatibility.YES.value)

    def get_star(self, name: str) -> Optional[Star]:
        rows = self._ds[self._ds[_ID_FIELD] == name]
        if len(rows) == 0:
            return None
        row = rows[0]
        return Star(name=name, mass=row["mass"].to_value(MASS_UNIT), age=row["age"].to_value(AGE_UNIT))

    def get_unit(self, column_name: str) -> Optional[u.UnitBase]:
        col = self._ds[column_name]
        return col.unit if hasattr(col, "unit") else None

    def to_pandas(self) -> pd.DataFrame:
        if len(self._ds) == 0:
            return pd.DataFrame(columns=self._ds.colnames)
        return self._ds.to_pandas(index=False)


def _build_catalog_table(
    names: list[str], mass: np.ndarray, age: np.ndarray, values: dict[str, np.ndarray]
) -> QTable:
    earth_like = [calc.earth_like_compatible(m, a).value for m, a in zip(mass, age)]

    return QTable(
        {
            "name": np.array(names, dtype=str),
            "mass": mass * MASS_UNIT,
            "age": age * AGE_UNIT,
            "luminosity": values["luminosity"] * LUMINOSITY_UNIT,
            "radius": values["radius"] * RADIUS_UNIT,
            "density": values["density"] * DENSITY_UNIT,
            "temperature": values["temperature"] * TEMPERATURE_UNIT,
            "spectral_class": np.array([spectral_class(t) for t in values["temperature"]], dtype=str),
            "expected_lifetime": values["expected_lifetime"] * LIFETIME_UNIT,
            "habitable_zone_inner": values["habitable_zone_inner"] * DISTANCE_UNIT,
            "habitable_zone_outer": values["habitable_zone_outer"] * DISTANCE_UNIT,
            "frost_line": values["frost_line"] * DISTANCE_UNIT,
            "earth_like_compatible": np.array(earth_like, dtype=str),
        }
    )
