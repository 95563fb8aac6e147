"""
core/slugs.py -- Slug derivation and collision-free resolution.

A slug is the URL-safe identifier of a project or blog post: lowercase ASCII
letters and digits separated by single hyphens. It is derived from the
human-entered title and must be unique within its own collection.

resolve_slug() is pure. It never writes anything; it only asks the caller's
`exists` predicate whether a candidate is taken. The caller owns persistence
and the unique index behind it (see content/store.py for the write-time
conflict handling).

Layer rule: core/ is the kernel. No imports from api/, auth/, or content/.
"""

from __future__ import annotations

import logging
import re
import secrets
from collections.abc import Callable

logger = logging.getLogger("portfolio.slugs")

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Base used when a title has no sluggable characters at all ("!!!", "???").
FALLBACK_BASE = "untitled"

# Upper bound on sequential suffix probes before switching to a random suffix.
DEFAULT_MAX_PROBES = 1000

_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w-]+", re.ASCII)
_MULTI_HYPHEN_RE = re.compile(r"-{2,}")


def slugify(title: str) -> str:
    """Normalize a title into a base slug.

    Steps, in order: lowercase, whitespace runs to one hyphen, drop anything
    that is not an ASCII word character or hyphen, underscores to hyphens,
    collapse hyphen runs, trim hyphens from both ends.

    May return "" for titles made only of punctuation or non-ASCII letters.
    """
    value = title.lower()
    value = _WHITESPACE_RE.sub("-", value)
    value = _NON_WORD_RE.sub("", value)
    value = value.replace("_", "-")
    value = _MULTI_HYPHEN_RE.sub("-", value)
    return value.strip("-")


def is_valid_slug(value: str | None) -> bool:
    """Return True when value is a well-formed slug."""
    if not value:
        return False
    return bool(SLUG_PATTERN.fullmatch(value))


def resolve_slug(
    title: str,
    exists: Callable[[str], bool],
    max_probes: int = DEFAULT_MAX_PROBES,
) -> str:
    """Return the first free slug for title.

    Probes the base candidate, then base-1, base-2, ... in order and returns
    the first one `exists` reports as free. After max_probes suffixed
    candidates the search stops and a random 8-hex-char suffix is used.
    """
    base = slugify(title) or FALLBACK_BASE
    if not exists(base):
        return base
    for suffix in range(1, max_probes + 1):
        candidate = f"{base}-{suffix}"
        if not exists(candidate):
            return candidate
    candidate = f"{base}-{secrets.token_hex(4)}"
    logger.warning("Slug suffix search for %r exhausted %d probes; using %s", base, max_probes, candidate)
    return candidate
