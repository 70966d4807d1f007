"""Tests for text normalization, tokenization and title synonym groups."""

from __future__ import annotations

import pytest

from jobmatch.tools.text import jaccard, map_title_to_group, normalize_text, tokenize


class TestNormalizeText:
    """Test suite for normalize_text."""

    def test_keeps_skill_punctuation(self) -> None:
        """Characters used in skill names survive normalization."""
        assert normalize_text("Senior  Node.js / C# Dev!") == "senior node.js / c# dev"

    def test_cpp_survives_intact(self) -> None:
        """Test that "C++" normalizes to "c++"."""
        assert normalize_text("C++ Developer") == "c++ developer"

    def test_apostrophes_become_spaces(self) -> None:
        """Apostrophes split words instead of joining them."""
        assert normalize_text("Don’t Panic") == "don t panic"
        assert normalize_text("don't panic") == "don t panic"

    def test_collapses_newlines_and_trims(self) -> None:
        """Newlines and repeated spaces collapse to single spaces."""
        assert normalize_text("  Backend\n\tEngineer  ") == "backend engineer"

    @pytest.mark.parametrize("value", [None, "", "   ", "!!!"])
    def test_empty_inputs(self, value: str | None) -> None:
        """None and blank strings normalize to an empty string."""
        assert normalize_text(value) == ""

    def test_deterministic(self) -> None:
        """Same input always normalizes to the same output."""
        text = "Full-Stack (MERN) Engineer — Remote"
        assert normalize_text(text) == normalize_text(text)


class TestTokenize:
    """Test suite for tokenize and jaccard."""

    def test_drops_stop_words(self) -> None:
        """Stop words are not tokens."""
        assert tokenize("The Senior Engineer for the Team") == {"senior", "engineer", "team"}

    def test_duplicates_collapse(self) -> None:
        """Repeated words produce one token."""
        assert tokenize("data data engineer") == {"data", "engineer"}

    def test_jaccard(self) -> None:
        """Test Jaccard similarity of two token sets."""
        assert jaccard({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)
        assert jaccard({"a"}, {"a"}) == 1.0

    def test_jaccard_of_empty_sets_is_zero(self) -> None:
        """Two empty sets have zero similarity."""
        assert jaccard(set(), set()) == 0.0
        assert jaccard({"a"}, set()) == 0.0


class TestTitleGroups:
    """Test suite for synonym group lookup."""

    @pytest.mark.parametrize(
        ("title", "group"),
        [
            ("Senior Software Engineer", "software engineer"),
            ("SWE II", "software engineer"),
            ("Front-End Engineer", "frontend"),
            ("Back-end Engineer", "backend"),
            ("Full Stack MERN Engineer", "fullstack"),
            ("Site Reliability Engineer", "devops"),
            ("QA Automation Engineer", "qa"),
            ("Pastry Chef", ""),
        ],
    )
    def test_map_title_to_group(self, title: str, group: str) -> None:
        """Titles map to their synonym group."""
        assert map_title_to_group(title) == group

    def test_first_group_in_table_order_wins(self) -> None:
        """A title matching several groups gets the first listed group."""
        # "software engineer" is listed before "backend"
        assert map_title_to_group("Backend Software Engineer") == "software engineer"

    def test_membership_is_substring_based(self) -> None:
        """Group membership uses substring containment."""
        # "ui" inside "builder"
        assert map_title_to_group("Site Builder") == "frontend"
