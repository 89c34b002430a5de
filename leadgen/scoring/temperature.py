"""Temperature tier bucketing."""

from ..config import TemperatureThresholds
from ..models import Temperature

_DEFAULT_THRESHOLDS = TemperatureThresholds()


def temperature_for(score: float, thresholds: TemperatureThresholds = _DEFAULT_THRESHOLDS) -> Temperature:
    """
    Bucket a score into a contact-urgency tier.

    Anything below the warm cutoff is cold, including scores under
    `thresholds.cold_floor`.
    """
    if score >= thresholds.hot:
        return Temperature.HOT
    if score >= thresholds.warm:
        return Temperature.WARM
    return Temperature.COLD


def temperature_ranges(thresholds: TemperatureThresholds = _DEFAULT_THRESHOLDS) -> dict:
    """Human-readable tier ranges, as reported by the config endpoint."""
    return {
        "hot": f"{thresholds.hot}-100",
        "warm": f"{thresholds.warm}-{thresholds.hot - 1}",
        "cold": f"{thresholds.cold_floor}-{thresholds.warm - 1}",
    }
