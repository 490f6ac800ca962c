"""Tests for the rating taxonomy lookups."""
import pytest

from csat.taxonomy import sentiment_tags_for, tag_for, text_for


@pytest.mark.parametrize(
    "rating, tag, tags, text",
    [
        ("1", "very_dissatisfied", ["csat-1", "csat-negative"], "Very dissatisfied"),
        ("2", "dissatisfied", ["csat-2", "csat-negative"], "Dissatisfied"),
        ("3", "neutral", ["csat-3", "csat-neutral"], "Neutral"),
        ("4", "satisfied", ["csat-4", "csat-positive"], "Satisfied"),
        ("5", "very_satisfied", ["csat-5", "csat-positive"], "Very satisfied"),
    ],
)
def test_known_ratings(rating, tag, tags, text):
    assert tag_for(rating) == tag
    assert sentiment_tags_for(rating) == tags
    assert text_for(rating) == text


@pytest.mark.parametrize("rating", ["0", "", "6", "five", " 5", None, 5])
def test_unknown_ratings_fall_back(rating):
    assert tag_for(rating) == ""
    assert sentiment_tags_for(rating) == []
    assert text_for(rating) == "Unknown"


def test_sentiment_tags_are_fresh_lists():
    tags = sentiment_tags_for("4")
    tags.append("mutated")
    assert sentiment_tags_for("4") == ["csat-4", "csat-positive"]
