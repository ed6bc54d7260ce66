"""Tests for episode title slugification (content/slug.py)."""

import pytest

from podcast_import.content.slug import sanitize_title, slugify_title
from podcast_import.errors import EmptySlugError


class TestSlugifyTitle:
    def test_simple_title(self):
        assert slugify_title("Hello World") == "hello-world"

    def test_truncates_to_five_tokens(self):
        assert slugify_title("One Two Three Four Five Six Seven") == "one-two-three-four-five"

    def test_strips_structural_characters(self):
        slug = slugify_title('Episode: "The Big #1" - Launch')
        assert slug == "episode-the-big-1-launch"
        assert ":" not in slug
        assert '"' not in slug
        assert "#" not in slug

    def test_collapses_separator_runs(self):
        assert slugify_title("Part 1 --  The   Beginning") == "part-1-the-beginning"

    def test_removes_other_punctuation(self):
        assert slugify_title("What's New? (Part 2)") == "whats-new-part-2"

    def test_lower_cases(self):
        assert slugify_title("LOUD Title") == "loud-title"

    def test_folds_accents(self):
        assert slugify_title("Café Société") == "cafe-societe"

    def test_spells_out_ampersand(self):
        assert slugify_title("Design & Code Review") == "design-and-code-review"

    def test_spells_out_percent_and_dollar(self):
        assert slugify_title("100% Pure $5 Deals") == "100percent-pure-dollar5-deals"

    def test_transliterates_letters_without_accent_marks(self):
        assert slugify_title("Straße Øl Æther") == "strasse-ol-aether"

    def test_no_leading_or_trailing_hyphen(self):
        assert slugify_title("- Intro -") == "intro"

    def test_is_deterministic(self):
        title = 'Episode: "The Big #1" - Launch & More!'
        assert slugify_title(title) == slugify_title(title)

    def test_output_is_filesystem_safe(self):
        slug = slugify_title("A/B Testing: Why \\ Matters?")
        assert "/" not in slug
        assert "\\" not in slug
        assert slug == slug.lower()


class TestEmptySlug:
    @pytest.mark.parametrize("title", ["###:::", "", "   ", '"":#', "!!! ???"])
    def test_empty_slug_raises(self, title):
        with pytest.raises(EmptySlugError):
            slugify_title(title)

    def test_error_carries_title(self):
        with pytest.raises(EmptySlugError) as excinfo:
            slugify_title("###:::")
        assert excinfo.value.title == "###:::"

    def test_empty_slug_error_is_value_error(self):
        with pytest.raises(ValueError):
            slugify_title("###")


class TestSanitizeTitle:
    def test_removes_colon_quote_hash(self):
        assert sanitize_title('Episode: "The Big #1"') == "Episode The Big 1"

    def test_keeps_other_characters(self):
        assert sanitize_title("Q&A - Part 2!") == "Q&A - Part 2!"
