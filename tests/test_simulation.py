import random

import pytest

from src.wasteroute.models.domain import FillStatus, classify_fill
from src.wasteroute.services.simulation import PUNE_LOCATIONS, generate_demo_bins, resolve_locations


def test_classify_fill_thresholds():
    assert classify_fill(0) is FillStatus.NORMAL
    assert classify_fill(59.9) is FillStatus.NORMAL
    assert classify_fill(60) is FillStatus.WARNING
    assert classify_fill(79.9) is FillStatus.WARNING
    assert classify_fill(80) is FillStatus.CRITICAL
    assert classify_fill(100) is FillStatus.CRITICAL


def test_resolve_locations_defaults_to_catalogue_prefix():
    assert resolve_locations([], 3) == list(PUNE_LOCATIONS[:3])
    assert resolve_locations(None, 2) == list(PUNE_LOCATIONS[:2])


def test_resolve_locations_skips_unknown_ids():
    selected = resolve_locations(["aundh", "atlantis", "baner"], 5)
    assert [location.location_id for location in selected] == ["aundh", "baner"]


def test_generate_demo_bins_shape():
    bins = generate_demo_bins(7, ["kothrud", "hadapsar"], rng=random.Random(1), now_ms=1_700_000_000_000)

    assert [b.bin_id for b in bins] == [f"dummy-{i}" for i in range(1, 8)]
    assert len({b.bin_id for b in bins}) == 7
    for index, point in enumerate(bins):
        expected = PUNE_LOCATIONS[3] if index % 2 == 0 else PUNE_LOCATIONS[5]
        assert point.location == expected.label
        assert abs(point.latitude - expected.latitude) <= 0.005
        assert abs(point.longitude - expected.longitude) <= 0.005
        assert 0 <= point.fill_percentage <= 100
        assert point.fill_percentage == round(point.fill_percentage, 1)
        assert point.capacity == 100
        assert point.last_updated == 1_700_000_000_000
        assert [entry.timestamp for entry in point.history] == [
            1_700_000_000_000 - 3_600_000,
            1_700_000_000_000 - 1_800_000,
            1_700_000_000_000,
        ]


def test_generate_demo_bins_is_seedable():
    first = generate_demo_bins(5, rng=random.Random(8), now_ms=0)
    second = generate_demo_bins(5, rng=random.Random(8), now_ms=0)
    assert first == second


def test_generate_demo_bins_rejects_negative_count():
    with pytest.raises(ValueError):
        generate_demo_bins(-1)
    assert generate_demo_bins(0) == []
