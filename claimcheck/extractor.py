"""
Claim Extractor

Turns free-form assistant text into structured claims.

The text is split into sentence fragments; each fragment is tested
against an ordered table of claim shapes and the FIRST matching shape
wins. A fragment yields at most one claim, even when a later shape
would also match. Extraction confidence is computed from fixed term
tables and clamped to [0.3, 0.95].

This module holds no mutable state. Given the same text it produces
the same shapes and confidences; only ids and timestamps differ.
"""

from __future__ import annotations

import re
import time
import uuid
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Optional

from claimcheck.models import GENERIC, MARKUP, SCRIPT, STYLESHEET, Claim


# ============================================================
# CLAIM SHAPES (ordered, first match wins)
# ============================================================

@dataclass(frozen=True)
class ClaimShape:
    """One row of the claim-shape table."""
    expression: re.Pattern
    content_kind: str
    action: str
    target: str


def _shape(regex: str, content_kind: str, action: str, target: str) -> ClaimShape:
    return ClaimShape(re.compile(regex, re.IGNORECASE), content_kind, action, target)


CLAIM_SHAPES: tuple[ClaimShape, ...] = (
    # --- Styling ---
    _shape(
        r"(?:made|created|added|implemented)\s+(?:the\s+)?"
        r"(?:header|footer|button|layout|component)?\s*(?:responsive|mobile-friendly)",
        STYLESHEET, "modify", "responsive design",
    ),
    _shape(
        r"(?:changed|updated|modified)\s+(?:the\s+)?(?:color|background|styling|css)",
        STYLESHEET, "modify", "styling",
    ),
    _shape(
        r"(?:added|implemented)\s+(?:media\s+queries|breakpoints|responsive\s+styles)",
        STYLESHEET, "add", "media queries",
    ),

    # --- Markup ---
    _shape(
        r"(?:added|improved|implemented)\s+(?:aria\s+(?:labels?|attributes)|alt\s+text|"
        r"semantic\s+(?:html|markup|elements))",
        MARKUP, "add", "accessibility markup",
    ),
    _shape(
        r"(?:added|updated)\s+(?:the\s+)?(?:meta\s+tags|seo\s+metadata|open\s+graph\s+tags)",
        MARKUP, "add", "metadata",
    ),

    # --- Script ---
    _shape(
        r"(?:added|implemented|created)\s+(?:comprehensive\s+)?"
        r"(?:error\s+handling|try-catch|exception\s+handling)",
        SCRIPT, "add", "error handling",
    ),
    _shape(
        r"(?:optimized|improved|enhanced)\s+(?:the\s+)?(?:performance|database\s+queries|api\s+calls)",
        SCRIPT, "optimize", "performance",
    ),
    _shape(
        r"(?:added|implemented|created)\s+(?:typescript\s+)?(?:types|interfaces|type\s+definitions)",
        SCRIPT, "add", "types",
    ),
    _shape(
        r"(?:created|added|implemented)\s+(?:a\s+)?(?:react\s+)?(?:component|hook|context)",
        SCRIPT, "create", "component",
    ),
    _shape(
        r"(?:added|implemented)\s+(?:state\s+management|useState|useEffect|context)",
        SCRIPT, "add", "state management",
    ),
    _shape(
        r"(?:configured|setup|added)\s+(?:webpack|vite|rollup|build\s+process)",
        SCRIPT, "add", "build configuration",
    ),
    _shape(
        r"(?:added|wrote|created|implemented)\s+(?:unit\s+)?(?:tests|test\s+cases|testing)",
        SCRIPT, "add", "tests",
    ),

    # --- Generic ---
    _shape(
        r"(?:refactored|restructured|reorganized)\s+(?:the\s+)?(?:code|codebase|functions|components)",
        GENERIC, "refactor", "code structure",
    ),
    _shape(
        r"(?:fixed|resolved|solved)\s+(?:the\s+)?(?:bug|issue|error|problem)",
        GENERIC, "fix", "bug fix",
    ),
)


# ============================================================
# CONFIDENCE TABLES
# ============================================================

BASE_CONFIDENCE = 0.7
CONFIDENCE_FLOOR = 0.3
CONFIDENCE_CEILING = 0.95

# Each distinct term present in the fragment adds its delta once
TECHNICAL_TERMS = MappingProxyType({
    "implemented": 0.05,
    "optimized": 0.05,
    "refactored": 0.05,
    "configured": 0.05,
    "media queries": 0.05,
    "try-catch": 0.05,
    "typescript": 0.05,
    "error handling": 0.05,
    "responsive": 0.05,
    "component": 0.05,
    "function": 0.05,
    "class": 0.05,
})

VAGUE_TERMS = MappingProxyType({
    "might": -0.1,
    "maybe": -0.1,
    "probably": -0.1,
    "seems": -0.1,
    "appears": -0.1,
})

ACTION_VERBS: tuple[str, ...] = ("added", "created", "implemented", "fixed", "optimized")
ACTION_VERB_BONUS = 0.1
_ACTION_VERB_RE = re.compile(r"\b(?:" + "|".join(ACTION_VERBS) + r")\b", re.IGNORECASE)

# Fragments this short or shorter cannot carry a verifiable assertion
MIN_FRAGMENT_LENGTH = 10
_SENTENCE_BREAK = re.compile(r"[.!?]+")

# Fallbacks for manual claims the shape table cannot classify
DEFAULT_ACTION = "modify"
DEFAULT_TARGET = "code"
DEFAULT_CONFIDENCE = 0.8


def _new_claim_id() -> str:
    return f"claim_{uuid.uuid4().hex[:16]}"


# ============================================================
# THE EXTRACTOR
# ============================================================

class ClaimExtractor:
    """
    Extracts claims from assistant text and builds manual claims.

    The clock and id factory are injectable so callers (and tests) can
    pin timestamps and ids; everything else is fixed tables.
    """

    def __init__(
        self,
        shapes: tuple[ClaimShape, ...] = CLAIM_SHAPES,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = _new_claim_id,
    ):
        self._shapes = shapes
        self._clock = clock
        self._id_factory = id_factory

    @property
    def shapes(self) -> tuple[ClaimShape, ...]:
        return self._shapes

    def split_sentences(self, text: str) -> list[str]:
        """Split on sentence-terminal punctuation and drop fragments of 10 characters or fewer."""
        fragments = (s.strip() for s in _SENTENCE_BREAK.split(text))
        return [s for s in fragments if len(s) > MIN_FRAGMENT_LENGTH]

    def classify(self, sentence: str) -> Optional[ClaimShape]:
        """Return the first claim shape matching the sentence, if any."""
        for shape in self._shapes:
            if shape.expression.search(sentence):
                return shape
        return None

    def score_confidence(self, sentence: str) -> float:
        """Extraction confidence for one fragment, clamped to [0.3, 0.95]."""
        lowered = sentence.lower()
        confidence = BASE_CONFIDENCE
        confidence += sum(d for term, d in TECHNICAL_TERMS.items() if term in lowered)
        confidence += sum(d for term, d in VAGUE_TERMS.items() if term in lowered)
        if _ACTION_VERB_RE.search(sentence):
            confidence += ACTION_VERB_BONUS
        return max(CONFIDENCE_FLOOR, min(CONFIDENCE_CEILING, confidence))

    def extract_claims(
        self,
        text: str,
        conversation_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> list[Claim]:
        """
        Extract zero or more claims from free-form text.

        Empty or non-string input yields no claims.
        """
        if not text or not isinstance(text, str):
            return []

        claims: list[Claim] = []
        for sentence in self.split_sentences(text):
            shape = self.classify(sentence)
            if shape is None:
                continue
            claims.append(Claim(
                id=self._id_factory(),
                text=sentence,
                content_kind=shape.content_kind,
                action=shape.action,
                target=shape.target,
                confidence=self.score_confidence(sentence),
                timestamp=self._clock(),
                conversation_id=conversation_id,
                metadata=dict(metadata) if metadata else None,
            ))
        return claims

    def create_claim(
        self,
        text: str,
        content_kind: Optional[str] = None,
        action: Optional[str] = None,
        conversation_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Claim:
        """
        Build a claim from manually supplied text.

        Fields the caller leaves unset are backfilled from the first
        extracted claim, falling back to a generic classification.
        """
        detected = self.extract_claims(text or "")
        first = detected[0] if detected else None
        return Claim(
            id=self._id_factory(),
            text=(text or "").strip(),
            content_kind=content_kind or (first.content_kind if first else GENERIC),
            action=action or (first.action if first else DEFAULT_ACTION),
            target=first.target if first else DEFAULT_TARGET,
            confidence=first.confidence if first else DEFAULT_CONFIDENCE,
            timestamp=self._clock(),
            conversation_id=conversation_id,
            metadata=dict(metadata) if metadata else None,
        )


# ============================================================
# SINGLETON
# ============================================================

claim_extractor = ClaimExtractor()
