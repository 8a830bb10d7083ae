"""Tests for review data models and category normalisation."""

import dataclasses

import pytest

from gelf_core.models import (
    CATEGORIES,
    FALLBACK_CATEGORY,
    FileReview,
    ReviewComment,
    StructuredReview,
    normalize_category,
)


class TestNormalizeCategory:
    @pytest.mark.parametrize("value", CATEGORIES)
    def test_known_categories_unchanged(self, value):
        assert normalize_category(value) == value

    def test_case_and_whitespace_ignored(self):
        assert normalize_category("  MUST ") == "must"

    def test_aliases(self):
        assert normalize_category("nit") == "nits"
        assert normalize_category("Critical") == "must"
        assert normalize_category("suggestion") == "want"

    def test_unknown_falls_back(self):
        assert normalize_category("severe-ish") == FALLBACK_CATEGORY
        assert normalize_category("blocker") == FALLBACK_CATEGORY

    def test_non_string_falls_back(self):
        assert normalize_category(None) == FALLBACK_CATEGORY
        assert normalize_category(3) == FALLBACK_CATEGORY


class TestReviewComment:
    def test_rejects_unknown_category(self):
        with pytest.raises(ValueError):
            ReviewComment(file_name="a.py", category="critical", message="x")

    def test_line_no_defaults_to_file_level(self):
        assert ReviewComment(file_name="a.py", category="fyi", message="x").line_no is None

    def test_is_immutable(self):
        comment = ReviewComment(file_name="a.py", category="fyi", message="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            comment.message = "y"


class TestReviewResults:
    def test_has_issues(self):
        comment = ReviewComment(file_name="a.py", category="nits", message="x")
        assert FileReview("a.py", "diff").has_issues is False
        assert FileReview("a.py", "diff", (comment,)).has_issues is True

    def test_total_comments(self):
        c = ReviewComment(file_name="a.py", category="nits", message="x")
        review = StructuredReview(
            summary="s",
            file_reviews=(FileReview("a.py", "d", (c, c)), FileReview("b.py", "d")),
        )
        assert review.total_comments == 2
