"""
Detector — Verification Orchestrator

The tool-invocation boundary. Accepts a claim (text or structured) and
an already-read file batch, resolves the content kind to check against,
and returns one AnalysisResult.

  - verify_claim:   one claim -> one result
  - verify_message: assistant text -> every extracted claim, each verified

This module composes the default engine with its reporter. The engine
itself never looks up a logger.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from claimcheck.config import settings
from claimcheck.engine import DetectionEngine
from claimcheck.extractor import ClaimExtractor, claim_extractor
from claimcheck.logging import get_logger
from claimcheck.models import GENERIC, AnalysisResult, Claim, FileContent

logger = logging.getLogger(__name__)


# ============================================================
# COMPOSITION ROOT
# ============================================================

detection_engine = DetectionEngine(reporter=get_logger("engine"))


@dataclass
class ClaimVerification:
    """One extracted claim and its verdict."""
    claim: Claim
    result: AnalysisResult


# ============================================================
# VERIFICATION
# ============================================================

def dominant_content_kind(files: Optional[Sequence[FileContent]]) -> Optional[str]:
    """
    The content kind most files in the batch share.

    Ties go to the configured generic kind when it is among the leaders,
    otherwise to the leader seen first. None for an empty batch.
    """
    counts = Counter(f.content_kind for f in files or [])
    if not counts:
        return None
    top = max(counts.values())
    leaders = [kind for kind, n in counts.items() if n == top]
    if settings.GENERIC_CONTENT_KIND in leaders:
        return settings.GENERIC_CONTENT_KIND
    return leaders[0]


def resolve_content_kind(
    claim_text: str,
    content_kind: Optional[str] = None,
    extractor: Optional[ClaimExtractor] = None,
    files: Optional[Sequence[FileContent]] = None,
) -> str:
    """
    Pick the content kind a claim is checked against.

    An explicit kind wins. Otherwise the claim text is classified by the
    extractor. Unclassified and generic claims take the dominant kind of
    the file batch, or the configured generic kind when there is no batch.
    """
    kind = content_kind
    if not kind:
        shape = (extractor or claim_extractor).classify(claim_text)
        kind = shape.content_kind if shape else GENERIC
    if kind == GENERIC:
        kind = dominant_content_kind(files) or settings.GENERIC_CONTENT_KIND
    return kind


def verify_claim(
    claim: Union[str, Claim],
    files: Optional[Sequence[FileContent]] = None,
    content_kind: Optional[str] = None,
    engine: Optional[DetectionEngine] = None,
    extractor: Optional[ClaimExtractor] = None,
) -> AnalysisResult:
    """
    Verify one claim against a batch of files.

    At most settings.MAX_FILES files are analyzed, in the order given.
    A missing file batch is treated as empty and yields the neutral
    non-applicable result.
    """
    engine = engine or detection_engine
    if isinstance(claim, Claim):
        text = claim.text
        requested_kind = content_kind or claim.content_kind
        claim_id = claim.id
    else:
        text = claim or ""
        requested_kind = content_kind
        claim_id = None

    batch = list(files or [])
    if len(batch) > settings.MAX_FILES:
        logger.warning(
            f"File batch truncated to {settings.MAX_FILES} files",
            extra={"files_count": len(batch), "claim_id": claim_id},
        )
        batch = batch[:settings.MAX_FILES]

    kind = resolve_content_kind(text, requested_kind, extractor, files=batch)

    start = time.perf_counter()
    result = engine.analyze(text, batch, kind)
    duration_ms = round((time.perf_counter() - start) * 1000, 2)

    logger.info(
        f"Claim {result.verdict}",
        extra={
            "claim_id": claim_id,
            "content_kind": kind,
            "is_lie": result.is_lie,
            "confidence": round(result.confidence, 4),
            "files_count": len(batch),
            "evidence_count": len(result.evidence),
            "duration_ms": duration_ms,
        },
    )
    return result


def verify_message(
    text: str,
    files: Optional[Sequence[FileContent]] = None,
    conversation_id: Optional[str] = None,
    engine: Optional[DetectionEngine] = None,
    extractor: Optional[ClaimExtractor] = None,
) -> list[ClaimVerification]:
    """Extract every claim from assistant text and verify each, in extraction order."""
    extractor = extractor or claim_extractor
    claims = extractor.extract_claims(text, conversation_id=conversation_id)
    logger.debug(
        "Claims extracted from message",
        extra={"claims_count": len(claims), "conversation_id": conversation_id},
    )
    return [
        ClaimVerification(
            claim=claim,
            result=verify_claim(claim, files, engine=engine, extractor=extractor),
        )
        for claim in claims
    ]
