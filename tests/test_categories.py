"""
Tests for category parsing.
"""

import pytest
from hybrid_text_classifier.categories import parse_categories
from hybrid_text_classifier.exceptions import InvalidInputError


class TestParseCategories:
    """Test cases for parse_categories."""

    def test_trims_and_drops_empties(self):
        assert parse_categories(" positive ,negative,, neutral ,") == ["positive", "negative", "neutral"]

    def test_keeps_case(self):
        assert parse_categories("Positive, NEGATIVE") == ["Positive", "NEGATIVE"]

    def test_accepts_lists(self):
        assert parse_categories(["b", "a", "b"]) == ["b", "a"]

    def test_rejects_empty(self):
        with pytest.raises(InvalidInputError, match="At least one category is required"):
            parse_categories(" , ,")

        with pytest.raises(InvalidInputError, match="At least one category is required"):
            parse_categories([])

    def test_rejects_wrong_types(self):
        with pytest.raises(InvalidInputError, match="Categories must be a string or a list"):
            parse_categories(42)

        with pytest.raises(InvalidInputError, match="Category names must be strings"):
            parse_categories(["positive", 3])
