"""
Unit tests for rating classification.
"""

import pytest
from cleanmap.engine.classification import (
    RatingBand,
    rating_band,
    rating_color,
    rating_label,
)


@pytest.mark.parametrize("rating,color,label", [
    (10, "success", "Excellent"),
    (8, "success", "Excellent"),
    (7.999, "good", "Good"),
    (6, "good", "Good"),
    (5.5, "warning", "Fair"),
    (4, "warning", "Fair"),
    (2, "poor", "Poor"),
    (1.99, "critical", "Terrible"),
    (0, "critical", "Terrible"),
])
def test_band_thresholds(rating, color, label):
    """Test lower bounds 8, 6, 4 and 2 are inclusive."""
    assert rating_color(rating) == color
    assert rating_label(rating) == label


def test_boundary_eight_differs_from_just_below():
    """Test 8 and 7.999 land in different bands."""
    assert rating_color(8) != rating_color(7.999)


def test_out_of_range_ratings_clamp_to_end_bands():
    """Test values outside 0-10 classify without error."""
    assert rating_band(42) is RatingBand.EXCELLENT
    assert rating_band(-3) is RatingBand.TERRIBLE


def test_band_properties():
    """Test band exposes color token and label."""
    assert RatingBand.GOOD.color == "good"
    assert RatingBand.GOOD.label == "Good"
