"""Unit tests for the weighted match score, independent of storage."""

from types import SimpleNamespace

import pytest

from lostfound.services.aggregator import ACCEPTANCE_THRESHOLD, ScoreAggregator, round_score


def item(**overrides):
    data = {
        "title": "Black iPhone 13",
        "description": "Black iPhone 13 with a cracked screen",
        "category": "electronics",
        "location_lost": None,
        "location_found": None,
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def test_identical_items_score_full_marks():
    lost = item(location_lost="Library Building")
    found = item(location_found="library building, 2nd floor")

    result = ScoreAggregator.aggregate(lost, found)

    assert result.score == 1.0
    assert result.score >= ACCEPTANCE_THRESHOLD
    assert result.breakdown["category_score"] == 1.0
    assert result.breakdown["title_description_score"] == 1.0
    assert result.breakdown["location_score"] == 1.0
    assert result.breakdown["keyword_score"] == 1.0


def test_result_unpacks_like_a_tuple():
    score, breakdown = ScoreAggregator.aggregate(item(), item())
    assert isinstance(score, float)
    assert set(breakdown) == {
        "category_score",
        "title_score",
        "description_score",
        "title_description_score",
        "location_score",
        "keyword_score",
    }


def test_category_compared_case_insensitively():
    result = ScoreAggregator.aggregate(item(category="Electronics"), item(category="ELECTRONICS"))
    assert result.breakdown["category_score"] == 1.0


def test_category_mismatch_keeps_pair_below_threshold():
    lost = item(location_lost="Library Building")
    found = item(category="bags", location_found="Library Building")

    result = ScoreAggregator.aggregate(lost, found)

    assert result.score == 0.65
    assert not ScoreAggregator.is_match(result.score)


def test_missing_locations_score_zero_location():
    result = ScoreAggregator.aggregate(item(), item())
    assert result.breakdown["location_score"] == 0.0
    # 0.35 + 0.40 + 0.05
    assert result.score == 0.8


def test_location_falls_back_to_other_field():
    lost = item(location_found="Main Library")
    found = item(location_lost="Main Library")
    assert ScoreAggregator.aggregate(lost, found).breakdown["location_score"] == 1.0


def test_location_direction_is_not_symmetric():
    # Same text; each item carries both location fields
    a = item(location_lost="Main Library", location_found="Gym")
    b = item(location_found="Main Library", location_lost="Parking Lot")

    forward = ScoreAggregator.aggregate(a, b)
    backward = ScoreAggregator.aggregate(b, a)

    # a lost at "Main Library" vs b found at "Main Library"
    assert forward.breakdown["location_score"] == 1.0
    assert forward.score == 1.0
    # b lost at "Parking Lot" vs a found at "Gym": 10 edits over 11 characters
    assert backward.breakdown["location_score"] == pytest.approx(1 / 11, abs=1e-3)
    assert backward.score == 0.82
    assert ScoreAggregator.aggregate(b, a) == backward


def test_text_sub_scores_are_symmetric():
    a = item(title="Blue backpack", description="Lost near the gym")
    b = item(title="Backpack, blue", description="Found by the gym entrance")
    forward = ScoreAggregator.aggregate(a, b).breakdown
    backward = ScoreAggregator.aggregate(b, a).breakdown
    for key in ("category_score", "title_description_score", "keyword_score"):
        assert forward[key] == backward[key]


@pytest.mark.parametrize("value,expected", [
    (0.745, 0.75),
    (0.125, 0.13),
    (0.7049999, 0.70),
    (0.699, 0.70),
    (1.0000000000000002, 1.0),
])
def test_round_score_half_up(value, expected):
    assert round_score(value) == expected
