"""Unit tests for core/slugs.py -- slug normalization and collision-free resolution.

Covers:
- slugify() normalization rules (case, whitespace, punctuation, underscores, hyphens)
- resolve_slug() returns a free base as-is and probes suffixes in order
- empty-normalizing titles fall back to "untitled"
- the probe cap switches to a random suffix that is still a valid slug
- is_valid_slug() accepts only [a-z0-9] groups joined by single hyphens
"""

import pytest

from core.slugs import FALLBACK_BASE, is_valid_slug, resolve_slug, slugify


def _taken(*slugs: str):
    existing = set(slugs)
    return lambda candidate: candidate in existing


class TestSlugify:
    @pytest.mark.parametrize(
        "title, expected",
        [
            ("My Post", "my-post"),
            ("  Hello,   World!  ", "hello-world"),
            ("C++ & Rust: a comparison", "c-rust-a-comparison"),
            ("snake_case_title", "snake-case-title"),
            ("--Already--hyphenated--", "already-hyphenated"),
            ("Version 2.0 Release", "version-20-release"),
            ("Café au lait", "caf-au-lait"),
        ],
    )
    def test_normalization(self, title: str, expected: str) -> None:
        assert slugify(title) == expected

    def test_punctuation_only_title_normalizes_to_empty(self) -> None:
        assert slugify("!!! ???") == ""

    @pytest.mark.parametrize("title", ["My Post", "A__b  c", "x-_-y", "Ünïcödé only", "2024: Year in review"])
    def test_output_is_valid_or_empty(self, title: str) -> None:
        slug = slugify(title)
        assert slug == "" or is_valid_slug(slug), f"{title!r} produced invalid slug {slug!r}"


class TestResolveSlug:
    def test_free_base_returned_as_is(self) -> None:
        assert resolve_slug("My Post", _taken()) == "my-post"

    def test_first_free_suffix_is_used(self) -> None:
        assert resolve_slug("My Post", _taken("my-post", "my-post-1", "my-post-2")) == "my-post-3"

    def test_suffixes_are_not_skipped(self) -> None:
        """A gap in the sequence is filled before higher suffixes."""
        assert resolve_slug("My Post", _taken("my-post", "my-post-2")) == "my-post-1"

    def test_probes_in_order(self) -> None:
        probed: list[str] = []

        def exists(candidate: str) -> bool:
            probed.append(candidate)
            return candidate in {"c", "c-1"}

        assert resolve_slug("c", exists) == "c-2"
        assert probed == ["c", "c-1", "c-2"]

    def test_empty_title_uses_fallback_base(self) -> None:
        assert resolve_slug("???", _taken()) == FALLBACK_BASE
        assert resolve_slug("", _taken(FALLBACK_BASE)) == f"{FALLBACK_BASE}-1"

    def test_probe_cap_switches_to_random_suffix(self) -> None:
        slug = resolve_slug("busy", lambda candidate: True, max_probes=5)
        assert slug.startswith("busy-")
        assert len(slug) == len("busy-") + 8
        assert is_valid_slug(slug)


class TestIsValidSlug:
    @pytest.mark.parametrize("value", ["a", "my-post", "my-post-1", "2024", "a1-b2-c3"])
    def test_valid(self, value: str) -> None:
        assert is_valid_slug(value)

    @pytest.mark.parametrize("value", ["", None, "-a", "a-", "a--b", "My-Post", "a_b", "a b", "ä"])
    def test_invalid(self, value) -> None:
        assert not is_valid_slug(value)
