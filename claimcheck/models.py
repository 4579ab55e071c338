"""
Data Model

The records that flow through claim verification:

  - Claim:            a structured assertion extracted from assistant text
  - PatternDefinition: a named, weighted matcher in the pattern library
  - FileContent:      one already-read file supplied by the caller
  - DetectedPattern:  raw matches of one pattern in one file
  - Evidence:         one observation produced while checking a claim
  - AnalysisResult:   the verdict of one verification call

Claims and pattern definitions are immutable; claim metadata is held
as a read-only mapping. Results are plain dataclasses so callers can
serialize them with dataclasses.asdict().
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


# ============================================================
# VOCABULARIES
# ============================================================

SCRIPT = "script"
STYLESHEET = "stylesheet"
MARKUP = "markup"
GENERIC = "generic"

CONTENT_KINDS: tuple[str, ...] = (SCRIPT, STYLESHEET, MARKUP)

SEVERITY_LOW = "low"
SEVERITY_MEDIUM = "medium"
SEVERITY_HIGH = "high"

SUPPORTING_EVIDENCE = "supporting_evidence"
CONTRADICTING_EVIDENCE = "contradicting_evidence"
ANALYSIS_ERROR = "analysis_error"


# ============================================================
# DATA STRUCTURES
# ============================================================

@dataclass(frozen=True)
class Claim:
    """A structured assertion that some code-level property holds."""
    id: str
    text: str
    content_kind: str      # "script" | "stylesheet" | "markup" | "generic"
    action: str            # e.g., "add", "modify", "optimize", "fix"
    target: str            # e.g., "error handling", "responsive design"
    confidence: float      # Extraction confidence, 0.3 to 0.95 when extracted
    timestamp: float       # Seconds since the epoch
    conversation_id: Optional[str] = None
    metadata: Optional[Mapping[str, Any]] = None

    def __post_init__(self):
        # Read-only, like the rest of the claim
        if self.metadata is not None:
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class PatternDefinition:
    """
    A named detection pattern for one content kind.

    The category is a free-text tag ("error_handling", "dark_mode");
    its words decide which claims the pattern is relevant to.
    """
    name: str
    expression: re.Pattern
    category: str
    weight: float
    description: str = ""


@dataclass(frozen=True)
class FileContent:
    """One file supplied by the caller, already read."""
    path: str
    content_kind: str
    text: str


@dataclass(frozen=True)
class DetectedPattern:
    """Matches of one pattern in one file."""
    pattern_name: str
    matches: tuple[str, ...]
    confidence: float
    file: str = ""


@dataclass(frozen=True)
class Evidence:
    """A single observation raised while checking a claim against a file."""
    file: str
    description: str
    severity: str          # "low" | "medium" | "high"
    category: str          # "supporting_evidence" | "contradicting_evidence" | "analysis_error"


@dataclass
class AnalysisResult:
    """Result of one claim verification."""
    is_lie: bool
    confidence: float      # 0.0 to 1.0
    evidence: list[Evidence] = field(default_factory=list)
    summary: str = ""
    detected_patterns: list[DetectedPattern] = field(default_factory=list)

    @property
    def verdict(self) -> str:
        return "lie" if self.is_lie else "verified"

    def count(self, category: str) -> int:
        """Number of evidence items in the given category."""
        return sum(1 for e in self.evidence if e.category == category)
