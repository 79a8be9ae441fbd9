"""StellarTools - Derived properties of main sequence stars from mass and age."""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("stellartools")
except importlib.metadata.PackageNotFoundError:
    # Package is not installed, try to read from pyproject.toml
    import os
    from pathlib import Path

    import tomli

    pyproject_path = Path(os.path.realpath(__file__)).parent.parent / "pyproject.toml"
    try:
        with open(pyproject_path, "rb") as f:
            __version__ = tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, ImportError):
        __version__ = "0.0.0"


from .calculator import InvalidInputError, StellarPropertyCalculator, derive
from .catalog import StarCatalog
from .derived import EarthLikeCompatibility, StarDerived, StarInput
from .spectral import classify_temperature, spectral_class
from .star import Star

__all__ = [
    # Calculator
    "StellarPropertyCalculator",
    "derive",
    "InvalidInputError",
    # Value types
    "StarInput",
    "StarDerived",
    "EarthLikeCompatibility",
    # Star types
    "Star",
    "StarCatalog",
    # Spectral classification
    "classify_temperature",
    "spectral_class",
]
