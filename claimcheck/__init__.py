"""
ClaimCheck — Claim Verification for AI Coding Assistants

Cross-references what an assistant says it did ("added error handling",
"made the header responsive") against the files it touched, and returns
a confidence-scored verdict with itemized evidence.

Public API:
  - claim_extractor:   Sentence-level claim extraction from assistant text
  - detection_engine:  Pattern-matching engine (pure, deterministic per call)
  - verify_claim:      One claim + file batch -> AnalysisResult
  - verify_message:    Every claim in a message, each verified
  - claim_capture:     In-memory store of conversations and captured claims
  - calculate_slop_score: Share of lies across a batch of results
  - load_files:        Read named local files into FileContent records

Usage:
    from claimcheck import verify_claim, FileContent
    result = verify_claim(
        "Added dark mode support",
        [FileContent("theme.css", "stylesheet", css_text)],
    )
    print(result.verdict, result.confidence)
"""

__version__ = "1.0.0"

from claimcheck.models import (
    Claim,
    FileContent,
    PatternDefinition,
    DetectedPattern,
    Evidence,
    AnalysisResult,
    CONTENT_KINDS,
)
from claimcheck.patterns import get_patterns, describe_patterns, extract_keywords
from claimcheck.extractor import ClaimExtractor, claim_extractor
from claimcheck.engine import DetectionEngine, ContentDetector, decide_verdict
from claimcheck.detector import (
    ClaimVerification,
    detection_engine,
    verify_claim,
    verify_message,
)
from claimcheck.capture import ClaimCapture, ConversationMessage, claim_capture
from claimcheck.scorer import calculate_slop_score
from claimcheck.files import content_kind_for_path, load_files

__all__ = [
    "Claim",
    "FileContent",
    "PatternDefinition",
    "DetectedPattern",
    "Evidence",
    "AnalysisResult",
    "CONTENT_KINDS",
    "get_patterns",
    "describe_patterns",
    "extract_keywords",
    "ClaimExtractor",
    "claim_extractor",
    "DetectionEngine",
    "ContentDetector",
    "decide_verdict",
    "ClaimVerification",
    "detection_engine",
    "verify_claim",
    "verify_message",
    "ClaimCapture",
    "ConversationMessage",
    "claim_capture",
    "calculate_slop_score",
    "content_kind_for_path",
    "load_files",
]
