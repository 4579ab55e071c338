"""
Tool Schemas — Request and Response Models

Pydantic models for the tool-invocation boundary, plus the two
dict-in / dict-out handlers a hosting harness calls. Malformed
requests never raise: they come back as a neutral result whose
summary names the validation problem.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from claimcheck.config import settings
from claimcheck.detector import resolve_content_kind, verify_claim
from claimcheck.extractor import claim_extractor
from claimcheck.models import AnalysisResult, FileContent

logger = logging.getLogger(__name__)

KIND_PATTERN = "^(script|stylesheet|markup)$"
CLAIM_KIND_PATTERN = "^(script|stylesheet|markup|generic)$"


# ============================================================
# VERIFY
# ============================================================

class FileContentIn(BaseModel):
    """One already-read file in a verify request."""
    path: str = Field(..., min_length=1)
    content_kind: str = Field(..., pattern=KIND_PATTERN)
    text: str = ""

    def to_file_content(self) -> FileContent:
        return FileContent(path=self.path, content_kind=self.content_kind, text=self.text)


class VerifyClaimRequest(BaseModel):
    """Verify one claim against a batch of files."""
    claim: str = Field(..., min_length=1, max_length=10_000,
                       description="The claim to verify (1-10,000 characters).")
    files: list[FileContentIn] = Field(default_factory=list)
    content_kind: Optional[str] = Field(None, pattern=CLAIM_KIND_PATTERN,
                                        description="Override the classified content kind.")

    model_config = {"json_schema_extra": {"examples": [
        {
            "claim": "I added comprehensive error handling to the fetch helper",
            "files": [{"path": "src/api.js", "content_kind": "script",
                       "text": "try { await load() } catch (e) { report(e) }"}],
        },
    ]}}


class EvidenceOut(BaseModel):
    file: str
    description: str
    severity: str
    category: str

    model_config = {"from_attributes": True}


class DetectedPatternOut(BaseModel):
    pattern_name: str
    matches: list[str]
    confidence: float
    file: str = ""

    model_config = {"from_attributes": True}


class AnalysisResponse(BaseModel):
    """Result of one verify call."""
    is_lie: bool
    verdict: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    evidence: list[EvidenceOut]
    summary: str
    detected_patterns: list[DetectedPatternOut]
    content_kind: Optional[str] = None
    core_version: str = settings.CORE_VERSION
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: AnalysisResult, content_kind: Optional[str] = None) -> "AnalysisResponse":
        return cls(
            is_lie=result.is_lie,
            verdict=result.verdict,
            confidence=result.confidence,
            evidence=[EvidenceOut.model_validate(e) for e in result.evidence],
            summary=result.summary,
            detected_patterns=[DetectedPatternOut.model_validate(p) for p in result.detected_patterns],
            content_kind=content_kind,
        )


# ============================================================
# EXTRACT
# ============================================================

class ExtractRequest(BaseModel):
    """Extract claims from assistant text."""
    text: str = Field(..., max_length=100_000)
    conversation_id: Optional[str] = None


class ClaimOut(BaseModel):
    id: str
    text: str
    content_kind: str
    action: str
    target: str
    confidence: float
    timestamp: float
    conversation_id: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    model_config = {"from_attributes": True}

    @field_validator("metadata", mode="before")
    @classmethod
    def _plain_metadata(cls, value):
        return dict(value) if value is not None else None


class ExtractResponse(BaseModel):
    claims: list[ClaimOut]
    total: int
    core_version: str = settings.CORE_VERSION
    error: Optional[str] = None


# ============================================================
# HANDLERS
# ============================================================

def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "request"
    return f"{exc.error_count()} validation error(s); {location}: {first.get('msg', 'invalid value')}"


def handle_verify_request(payload: Any) -> dict:
    """
    Validate a verify request, run it, and return the response as a dict.

    Invalid payloads produce a non-lie, zero-confidence response with
    `error` set instead of raising.
    """
    try:
        request = VerifyClaimRequest.model_validate(payload)
    except ValidationError as exc:
        problem = _describe_validation_error(exc)
        logger.warning("Invalid verify request", extra={"error": problem, "error_type": "ValidationError"})
        return AnalysisResponse(
            is_lie=False,
            verdict="verified",
            confidence=0.0,
            evidence=[],
            summary=f"Claim not analyzed: invalid request ({problem})",
            detected_patterns=[],
            error=problem,
        ).model_dump()

    files = [f.to_file_content() for f in request.files]
    kind = resolve_content_kind(request.claim, request.content_kind, files=files)
    result = verify_claim(request.claim, files, content_kind=kind)
    return AnalysisResponse.from_result(result, content_kind=kind).model_dump()


def handle_extract_request(payload: Any) -> dict:
    """Validate an extract request and return the extracted claims as a dict."""
    try:
        request = ExtractRequest.model_validate(payload)
    except ValidationError as exc:
        problem = _describe_validation_error(exc)
        logger.warning("Invalid extract request", extra={"error": problem, "error_type": "ValidationError"})
        return ExtractResponse(claims=[], total=0, error=problem).model_dump()

    claims = claim_extractor.extract_claims(request.text, conversation_id=request.conversation_id)
    return ExtractResponse(
        claims=[ClaimOut.model_validate(c) for c in claims],
        total=len(claims),
    ).model_dump()
