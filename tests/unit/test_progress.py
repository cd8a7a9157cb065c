"""Unit tests for progress percentage rounding."""

import pytest

from learnmatch.progress import compute_progress


@pytest.mark.parametrize(
    "completed,total,expected",
    [
        (0, 0, 0),
        (0, 5, 0),
        (1, 5, 20),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),
        (1, 200, 1),
        (3, 3, 100),
    ],
)
def test_compute_progress(completed, total, expected):
    assert compute_progress(completed, total) == expected


def test_half_rounds_up():
    # 12.5% and 0.5%
    assert compute_progress(1, 8) == 13
    assert compute_progress(1, 200) == 1
