import numpy as np
import pandas as pd
import pytest
from astropy import units as u
from astropy.table import QTable

from stellartools import EarthLikeCompatibility, InvalidInputError, Star, StarCatalog, derive
from stellartools.constants import solDensity
from tests.sample_data import SAMPLE_STARS

_NUMERIC_FIELDS = [
    "luminosity",
    "radius",
    "density",
    "temperature",
    "expected_lifetime",
    "habitable_zone_inner",
    "habitable_zone_outer",
    "frost_line",
]


class TestStarCatalog:
    def test_from_inputs(self, sample_catalog):
        assert len(sample_catalog) == len(SAMPLE_STARS)
        assert list(sample_catalog.view["name"]) == [s[0] for s in SAMPLE_STARS]
        assert list(sample_catalog.view["spectral_class"]) == [s[3] for s in SAMPLE_STARS]

    def test_rows_match_derive(self, sample_catalog):
        """Every row holds the same values as a single derivation."""
        for row in sample_catalog.view:
            expected = derive(row["mass"].value, row["age"].value)
            quantities = expected.to_quantities()
            for field in _NUMERIC_FIELDS:
                assert np.isclose(row[field], quantities[field]), field
            assert row["spectral_class"] == expected.spectral_class
            assert row["earth_like_compatible"] == expected.earth_like_compatible.value

    def test_units(self, sample_catalog):
        assert sample_catalog.get_unit("mass") == u.solMass
        assert sample_catalog.get_unit("age") == u.Gyr
        assert sample_catalog.get_unit("luminosity") == u.solLum
        assert sample_catalog.get_unit("radius") == u.solRad
        assert sample_catalog.get_unit("density") == solDensity
        assert sample_catalog.get_unit("temperature") == u.K
        assert sample_catalog.get_unit("habitable_zone_outer") == u.AU
        assert sample_catalog.get_unit("name") is None

    def test_earth_like_column(self, sample_catalog):
        assert list(sample_catalog.view["earth_like_compatible"]) == ["Yes", "Yes", "Star Too Young"]

    def test_default_names(self):
        catalog = StarCatalog.from_inputs(masses=[1.0, 2.0], ages=[1.0, 2.0])
        assert list(catalog.view["name"]) == ["star_0", "star_1"]

    def test_scalar_inputs(self):
        catalog = StarCatalog.from_inputs(masses=1.0, ages=4.6)
        assert len(catalog) == 1
        assert catalog.view["spectral_class"][0] == "G2"

    def test_empty_inputs(self):
        catalog = StarCatalog.from_inputs(masses=[], ages=[])
        assert len(catalog) == 0
        assert "spectral_class" in catalog.view.colnames
        assert catalog.to_pandas().empty

    def test_invalid_rows(self):
        with pytest.raises(InvalidInputError, match=r"rows \[1, 3\]"):
            StarCatalog.from_inputs(masses=[1.0, 0.0, 2.0, 1.0], ages=[1.0, 1.0, 1.0, -5.0])

    def test_non_numeric_inputs(self):
        with pytest.raises(InvalidInputError, match="real numbers"):
            StarCatalog.from_inputs(masses=["a", "b"], ages=[1.0, 2.0])

    @pytest.mark.parametrize(
        "masses, ages",
        [(["1.5", "2.0"], [1.0, 2.0]), ([1.0, 2.0], [True, False]), ([1.0, None], [1.0, 2.0])],
    )
    def test_non_real_inputs(self, masses, ages):
        """Numeric strings, booleans and objects are rejected like in a single derivation."""
        with pytest.raises(InvalidInputError, match="real numbers"):
            StarCatalog.from_inputs(masses=masses, ages=ages)

    def test_out_of_range_rows(self):
        """Masses whose derived properties overflow or underflow are rejected before building the table."""
        with pytest.raises(InvalidInputError, match=r"rows \[0, 2\] are outside the numeric range"):
            StarCatalog.from_inputs(masses=[1e-150, 1.0, 1e306], ages=[5.0, 5.0, 5.0])

    @pytest.mark.parametrize("name", ["", "   ", "x" * 101])
    def test_invalid_names(self, name):
        """Every row name must be usable as a Star name, so get_star never fails on a stored row."""
        with pytest.raises(ValueError, match="name"):
            StarCatalog.from_inputs(masses=[1.0], ages=[4.6], names=[name])

    def test_longest_name_round_trip(self):
        name = "x" * 100
        star = StarCatalog.from_inputs(masses=[1.0], ages=[4.6], names=[name]).get_star(name)
        assert star is not None
        assert star.name == name

    def test_mismatched_lengths(self):
        with pytest.raises(ValueError, match="same length"):
            StarCatalog.from_inputs(masses=[1.0, 2.0], ages=[1.0])
        with pytest.raises(ValueError, match="names"):
            StarCatalog.from_inputs(masses=[1.0, 2.0], ages=[1.0, 2.0], names=["only_one"])

    def test_init_empty_no_columns(self):
        with pytest.raises(ValueError, match="empty column set"):
            StarCatalog(QTable())

    def test_from_stars(self):
        stars = [Star("Sol"), Star("Barnard", mass=0.16, age=10.0)]
        catalog = StarCatalog.from_stars(stars)
        assert list(catalog.view["name"]) == ["Sol", "Barnard"]
        assert catalog.view["spectral_class"][0] == "G2"
        assert np.isclose(catalog.view["temperature"][1].to_value(u.K), stars[1].temperature)

    def test_where_single_value(self, sample_catalog):
        filtered = sample_catalog.where(spectral_class="G2")
        assert isinstance(filtered, StarCatalog)
        assert list(filtered.view["name"]) == ["sun"]

    def test_where_multiple_values(self, sample_catalog):
        filtered = sample_catalog.where(spectral_class=["G2", "M5"])
        assert len(filtered) == 2
        assert set(filtered.view["name"]) == {"sun", "red_dwarf"}

    def test_where_unknown_field_is_ignored(self, sample_catalog):
        assert len(sample_catalog.where(color="red")) == len(sample_catalog)

    def test_where_no_match(self, sample_catalog):
        assert len(sample_catalog.where(spectral_class="O0")) == 0

    def test_where_true(self, sample_catalog):
        hot = sample_catalog.where_true(sample_catalog.view["temperature"] > 5000 * u.K)
        assert list(hot.view["name"]) == ["sun", "blue_giant"]

    def test_get_earth_like_compatible(self, sample_catalog):
        compatible = sample_catalog.get_earth_like_compatible()
        assert len(compatible) == 2
        assert all(v == EarthLikeCompatibility.YES.value for v in compatible.view["earth_like_compatible"])

    def test_get_star(self, sample_catalog):
        star = sample_catalog.get_star("sun")
        assert isinstance(star, Star)
        assert star.mass == pytest.approx(1.0)
        assert star.age == pytest.approx(4.6)
        assert star.spectral_class == "G2"
        assert sample_catalog.get_star("NonExistentStar123456789") is None

    def test_dataset_copy(self, sample_catalog):
        copy = sample_catalog.dataset_copy
        assert copy is not sample_catalog.view
        assert len(copy) == len(sample_catalog)

    def test_to_pandas(self, sample_catalog):
        df = sample_catalog.to_pandas()
        assert isinstance(df, pd.DataFrame)
        assert len(df) == len(SAMPLE_STARS)
        assert "temperature" in df.columns
        assert list(df["name"]) == [s[0] for s in SAMPLE_STARS]
        assert df["luminosity"].iloc[1] == pytest.approx(1.0)

    def test_header(self, sample_catalog):
        header = sample_catalog.header
        assert set(header) == set(sample_catalog.view.colnames)
        assert header["luminosity"].unit == "solLum"
        assert header["density"].unit == "solDensity"
        assert header["name"].description == "Star name"
        assert header["name"].unit is None

    def test_logs_catalog_build(self, caplog):
        with caplog.at_level("INFO", logger="stellartools.catalog"):
            StarCatalog.from_inputs(masses=[1.0, 2.0, 3.0], ages=[4.0, 4.0, 4.0])
        assert "Deriving properties for 3 stars" in caplog.text
