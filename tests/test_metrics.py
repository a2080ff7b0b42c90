import pytest

from physics.metrics import relative_drift, corner_counts


def test_relative_drift():
    assert relative_drift([10.0, 11.0, 9.5]) == pytest.approx(0.1)
    assert relative_drift([0.0, 5.0]) == 0.0
    assert relative_drift([]) == 0.0


def test_corner_counts():
    log = [{'corner': 'top_left'}, {'corner': 'top_left'}, {'corner': 'bottom_right'}]
    counts = corner_counts(log)
    assert counts['top_left'] == 2
    assert counts['bottom_right'] == 1
    assert counts['top_right'] == 0
