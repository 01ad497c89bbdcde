# tests/test_report_stats.py

import pytest

from services import report_stats


@pytest.mark.parametrize(
    "values, expected",
    [([4, 6, 8], 6), ([8, 4, 10, 6], 7), ([5], 5), ([], 0)],
)
def test_median(values, expected):
    assert report_stats.median(values) == expected


def test_mean_of_empty_is_zero():
    assert report_stats.mean([]) == 0


def test_histogram_band_edges():
    counts = dict(report_stats.histogram([0, 2.99, 3, 5, 7, 9, 10, 10.01]))

    assert counts == {"0-3": 2, "3-5": 1, "5-7": 1, "7-9": 1, "9-10": 2}


def test_classify_rounds_to_one_decimal():
    result = report_stats.classify([1, 6, 8])

    assert [(category, count, pct) for category, _, count, pct in result] == [
        ("미흡", 1, 33.3),
        ("보통", 1, 33.3),
        ("양호", 1, 33.3),
        ("우수", 0, 0.0),
    ]


def test_classify_empty_is_all_zero():
    assert all(pct == 0 for *_, pct in report_stats.classify([]))


@pytest.mark.parametrize(
    "average, level",
    [(8.2, "만족스러운"), (7, "만족스러운"), (5, "보통"), (4.9, "미흡한")],
)
def test_describe_level(average, level):
    assert report_stats.describe_level(average) == level


def test_observation_mentions_average_and_count():
    text = report_stats.build_observation(6.25, 2)

    assert "6.2" in text or "6.3" in text
    assert "보통" in text
    assert "2명" in text


def test_recommendation_depends_on_below_average_count():
    assert "보충" in report_stats.build_recommendation(1)
    assert "심화" in report_stats.build_recommendation(0)
