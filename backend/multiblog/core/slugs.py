"""Slug Normalization — pure derivation of URL-safe identifiers from titles.

Invariants:
    - Output is lowercase and contains only ASCII word characters and single hyphens
    - Output never starts or ends with a hyphen
    - normalize_slug(normalize_slug(x)) == normalize_slug(x)
    - An empty result is rejected (InvalidSlugError), never allocated

Design Decisions:
    - Pure functions, no IO: uniqueness against the store is checked by
      services/slug_allocator.py, which calls into this module
    - Explicit candidate wins over the title, but is normalized all the same
"""

import re

from multiblog.core.errors import InvalidSlugError

_DISALLOWED = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATOR_RUNS = re.compile(r"[\s_-]+", re.ASCII)
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def normalize_slug(text: str) -> str:
    """Lowercase, strip punctuation, and hyphenate whitespace/underscore runs."""
    slug = text.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _SEPARATOR_RUNS.sub("-", slug)
    return _EDGE_HYPHENS.sub("", slug)


def derive_slug(candidate: str | None, fallback: str) -> str:
    """Normalize the explicit candidate if given, else the fallback text.

    Raises InvalidSlugError when nothing URL-safe is left.
    """
    source = candidate if candidate else fallback
    slug = normalize_slug(source)
    if not slug:
        raise InvalidSlugError(source)
    return slug
