"""Slug Normalization tests — pure tests for normalize_slug / derive_slug.

Tests cover:
    - Lowercasing, punctuation stripping, separator collapsing, edge trimming
    - Idempotence over a spread of awkward inputs
    - Explicit candidate wins over the fallback title
    - Empty normalization result raises InvalidSlugError
"""

import pytest

from multiblog.core.errors import InvalidSlugError
from multiblog.core.slugs import derive_slug, normalize_slug


def test_title_becomes_hyphenated_lowercase():
    assert normalize_slug("Hello World") == "hello-world"


def test_punctuation_is_dropped():
    """'Hello World!!' collides with 'Hello World' by design."""
    assert normalize_slug("Hello World!!") == "hello-world"
    assert normalize_slug("What's new? (v2.0)") == "whats-new-v20"


def test_whitespace_underscore_and_hyphen_runs_collapse():
    assert normalize_slug("a  _ -- b") == "a-b"
    assert normalize_slug("snake_case_title") == "snake-case-title"


def test_leading_and_trailing_separators_trimmed():
    assert normalize_slug("  --Leading and trailing--  ") == "leading-and-trailing"
    assert normalize_slug("_private_") == "private"


def test_non_ascii_letters_are_not_url_slug_chars():
    assert normalize_slug("Café Crème") == "caf-crme"


def test_digits_survive():
    assert normalize_slug("Top 10 Tips") == "top-10-tips"


@pytest.mark.parametrize("text", [
    "Hello World",
    "  Mixed_CASE -- input!! ",
    "---",
    "already-a-slug",
    "Ünïcödé and ASCII",
    "tabs\tand\nnewlines",
])
def test_normalization_is_idempotent(text):
    once = normalize_slug(text)
    assert normalize_slug(once) == once


def test_all_punctuation_normalizes_to_empty():
    assert normalize_slug("!!! ???") == ""


def test_derive_prefers_explicit_candidate():
    assert derive_slug("Custom Slug", "Some Title") == "custom-slug"


def test_derive_falls_back_to_title():
    assert derive_slug(None, "Some Title") == "some-title"
    assert derive_slug("", "Some Title") == "some-title"


def test_derive_rejects_empty_result():
    with pytest.raises(InvalidSlugError) as exc_info:
        derive_slug(None, "!!!")
    assert exc_info.value.http_status == 400
    assert exc_info.value.code == "INVALID_SLUG"
