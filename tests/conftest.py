import pytest

from stellartools import StarCatalog, StarDerived, StellarPropertyCalculator
from tests.sample_data import SAMPLE_STARS


@pytest.fixture(scope="module")
def calculator() -> StellarPropertyCalculator:
    return StellarPropertyCalculator()


@pytest.fixture(scope="module")
def sun(calculator) -> StarDerived:
    return calculator.derive(mass=1.0, age=4.6)


@pytest.fixture
def sample_catalog() -> StarCatalog:
    """Catalog built from SAMPLE_STARS, rebuilt for every test since StarCatalog wraps a mutable QTable"""
    names, masses, ages, _ = zip(*SAMPLE_STARS)
    return StarCatalog.from_inputs(masses=masses, ages=ages, names=names)
