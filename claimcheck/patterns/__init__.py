"""
Pattern Library

Static, per-content-kind collections of named detection patterns.
Loaded once at import time and never mutated: the library is a
read-only mapping of content kind to an immutable tuple.

Usage:
    from claimcheck.patterns import get_patterns, extract_keywords
    for pattern in get_patterns("stylesheet"):
        print(pattern.name, extract_keywords(pattern.category))
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Optional

from claimcheck.models import MARKUP, SCRIPT, STYLESHEET, PatternDefinition
from claimcheck.patterns.markup import MARKUP_PATTERNS
from claimcheck.patterns.script import SCRIPT_PATTERNS
from claimcheck.patterns.stylesheet import STYLESHEET_PATTERNS


PATTERN_LIBRARY = MappingProxyType({
    SCRIPT: SCRIPT_PATTERNS,
    STYLESHEET: STYLESHEET_PATTERNS,
    MARKUP: MARKUP_PATTERNS,
})

_KEYWORD_SEPARATORS = re.compile(r"[_\s-]+")


def extract_keywords(category: str) -> list[str]:
    """Lowercase a category tag and split it into keywords ("dark_mode" -> ["dark", "mode"])."""
    return [k for k in _KEYWORD_SEPARATORS.split(category.lower()) if k]


def get_patterns(content_kind: str) -> tuple[PatternDefinition, ...]:
    """Patterns for a content kind, or an empty tuple for an unknown kind."""
    return PATTERN_LIBRARY.get(content_kind, ())


def get_pattern(content_kind: str, name: str) -> Optional[PatternDefinition]:
    for pattern in get_patterns(content_kind):
        if pattern.name == name:
            return pattern
    return None


def describe_patterns(content_kind: Optional[str] = None) -> list[dict]:
    """
    Plain-dict view of the library, for listing and tool responses.

    Pass a content kind to restrict the listing; None lists every kind.
    """
    kinds = [content_kind] if content_kind else list(PATTERN_LIBRARY)
    return [
        {
            "name": p.name,
            "category": p.category,
            "weight": p.weight,
            "description": p.description,
            "content_kind": kind,
        }
        for kind in kinds
        for p in get_patterns(kind)
    ]
