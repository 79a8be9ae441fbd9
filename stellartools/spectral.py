"""
Spectral classification of stellar surface temperatures.

Each letter class (O, B, A, F, G, K, M, hottest to coolest) is subdivided into
steps 0-9, where 0 is the hottest star within the class.
"""

import math

from stellartools.constants import MAX_SUBDIVISION, SPECTRAL_BANDS


def classify_temperature(temperature: float) -> tuple[str, int]:
    """
    Returns the spectral letter and the 0-9 subdivision for the given temperature.

    Parameters
    ----------
    temperature : float
        Effective surface temperature in Kelvin.

    Returns
    -------
    tuple[str, int]
        Spectral letter and subdivision, e.g. ("G", 2) for the Sun.
    """
    temperature = float(temperature)
    if not math.isfinite(temperature):
        raise ValueError(f"Cannot classify a non-finite temperature: {temperature}")

    # The coolest band has no lower bound, so the loop always breaks
    for letter, lower_bound, reference, step in SPECTRAL_BANDS:
        if temperature >= lower_bound:
            break

    subdivision = int((reference - temperature) / step)
    return letter, min(MAX_SUBDIVISION, max(0, subdivision))


def spectral_class(temperature: float) -> str:
    letter, subdivision = classify_temperature(temperature)
    return f"{letter}{subdivision}"
