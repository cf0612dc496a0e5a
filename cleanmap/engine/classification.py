"""
Rating classification.

Five bands over the 0-10 rating scale. The lower bound of each band is
inclusive; values outside the scale fall into the nearest end band.
"""

from enum import Enum
from typing import Tuple


class RatingBand(Enum):
    """Severity band: (color token, label)."""
    EXCELLENT = ("success", "Excellent")
    GOOD = ("good", "Good")
    FAIR = ("warning", "Fair")
    POOR = ("poor", "Poor")
    TERRIBLE = ("critical", "Terrible")

    @property
    def color(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


# Inclusive lower bounds, highest first
BAND_THRESHOLDS: Tuple[Tuple[float, RatingBand], ...] = (
    (8, RatingBand.EXCELLENT),
    (6, RatingBand.GOOD),
    (4, RatingBand.FAIR),
    (2, RatingBand.POOR),
)


def rating_band(rating: float) -> RatingBand:
    """Classify a rating (or average rating) into its band."""
    for lower_bound, band in BAND_THRESHOLDS:
        if rating >= lower_bound:
            return band
    return RatingBand.TERRIBLE


def rating_color(rating: float) -> str:
    """Color token for a rating: success, good, warning, poor or critical."""
    return rating_band(rating).color


def rating_label(rating: float) -> str:
    """Human-readable severity label for a rating."""
    return rating_band(rating).label
