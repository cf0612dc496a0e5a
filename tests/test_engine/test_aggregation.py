"""
Unit tests for the Area Aggregator.
"""

import random
from collections import Counter
from datetime import datetime, timezone

import pytest
from cleanmap.engine.aggregation import AreaAggregator, calculate_area_statistics
from cleanmap.engine.grid import grid_key
from cleanmap.models.report import Report

NOW = datetime(2024, 7, 1, tzinfo=timezone.utc)


def make_report(lat, lng, rating=5, radius=500, day=1, user_name=None):
    return Report(
        latitude=lat,
        longitude=lng,
        rating=rating,
        radius=radius,
        timestamp=datetime(2024, 6, day, tzinfo=timezone.utc),
        user_name=user_name,
    )


def test_empty_input():
    """Test aggregating no reports yields no statistics."""
    assert calculate_area_statistics([]) == []


def test_same_cell_merges():
    """Test two nearby reports aggregate into one cell."""
    stats = calculate_area_statistics([
        make_report(-23.5505, -46.6333, rating=8),
        make_report(-23.5510, -46.6339, rating=5),
    ])

    assert len(stats) == 1
    assert stats[0].total_reports == 2
    assert stats[0].average_rating == pytest.approx(6.5)
    assert stats[0].cell_id == "-23.553_-46.638"


def test_different_cells_split():
    """Test reports more than a cell apart stay separate."""
    stats = calculate_area_statistics([
        make_report(-23.5505, -46.6333),
        make_report(-23.5600, -46.6333),
    ])

    assert len(stats) == 2
    assert [s.total_reports for s in stats] == [1, 1]


def test_anchor_is_first_report():
    """Test lat/lng/radius come from the first report seen, not a centroid."""
    stats = calculate_area_statistics([
        make_report(-23.5505, -46.6333, radius=500),
        make_report(-23.5510, -46.6339, radius=900),
    ])

    assert stats[0].latitude == -23.5505
    assert stats[0].longitude == -46.6333
    assert stats[0].radius == 500


def test_output_follows_first_seen_order():
    """Test cells are emitted in order of first appearance."""
    far = make_report(10.0, 10.0)
    near = make_report(-23.5505, -46.6333)
    stats = calculate_area_statistics([far, near, far])

    assert [s.latitude for s in stats] == [10.0, -23.5505]


def test_last_date_is_maximum():
    """Test an earlier report arriving later does not override the date."""
    stats = calculate_area_statistics([
        make_report(-23.5505, -46.6333, day=20),
        make_report(-23.5510, -46.6339, day=5),
        make_report(-23.5507, -46.6335, day=25),
        make_report(-23.5508, -46.6336, day=10),
    ])

    assert stats[0].last_evaluation_date == datetime(2024, 6, 25, tzinfo=timezone.utc)


def test_contributor_dedup():
    """Test repeated names appear once; empty and absent names never do."""
    stats = calculate_area_statistics([
        make_report(-23.5505, -46.6333, user_name="Ana"),
        make_report(-23.5510, -46.6339, user_name="Bruno"),
        make_report(-23.5507, -46.6335, user_name="Ana"),
        make_report(-23.5508, -46.6336, user_name=""),
        make_report(-23.5506, -46.6334),
    ])

    assert stats[0].contributors == ["Ana", "Bruno"]
    assert stats[0].total_reports == 5


def test_mixed_timestamp_shapes():
    """Test timestamps in store shapes are compared after normalization."""
    reports = [
        Report(-23.5505, -46.6333, 7, 500, timestamp={"seconds": 1717200000}),
        Report(-23.5510, -46.6339, 3, 500, timestamp="2024-06-15T00:00:00Z"),
        Report(-23.5507, -46.6335, 5, 500, timestamp=1717000000000),
    ]
    stats = AreaAggregator().aggregate(reports, now=NOW)

    assert stats[0].last_evaluation_date == datetime(2024, 6, 15, tzinfo=timezone.utc)


def test_unrecognized_timestamp_uses_now():
    """Test unknown timestamp shapes fall back to the supplied now."""
    reports = [Report(-23.5505, -46.6333, 7, 500, timestamp=None)]
    stats = AreaAggregator().aggregate(reports, now=NOW)

    assert stats[0].last_evaluation_date == NOW


def test_grouping_and_average_properties():
    """Test every report is counted in exactly its own cell with the right mean."""
    rng = random.Random(7)
    reports = [
        make_report(
            -23.55 + rng.uniform(-0.03, 0.03),
            -46.63 + rng.uniform(-0.03, 0.03),
            rating=rng.randint(0, 10),
        )
        for _ in range(200)
    ]

    stats = calculate_area_statistics(reports)

    expected_counts = Counter(grid_key(r.latitude, r.longitude) for r in reports)
    assert {s.cell_id: s.total_reports for s in stats} == dict(expected_counts)
    assert sum(s.total_reports for s in stats) == len(reports)

    for stat in stats:
        ratings = [r.rating for r in reports if grid_key(r.latitude, r.longitude) == stat.cell_id]
        assert stat.average_rating == pytest.approx(sum(ratings) / len(ratings))


def test_aggregation_is_repeatable():
    """Test two passes over the same snapshot give identical output."""
    reports = [make_report(-23.5505, -46.6333), make_report(1.0, 1.0)]
    aggregator = AreaAggregator()

    assert aggregator.aggregate(reports) == aggregator.aggregate(reports)


def test_custom_grid_size():
    """Test a coarser grid merges points a default grid would split."""
    reports = [make_report(-23.5505, -46.6333), make_report(-23.5600, -46.6333)]

    assert len(AreaAggregator(grid_size=0.1).aggregate(reports)) == 1
