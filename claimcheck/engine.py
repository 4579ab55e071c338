"""
Detection Engine

Scores one claim against a batch of already-read files and decides
whether the claim is a lie.

  1. Filter the batch to files of the claim's content kind
     (no such files -> neutral, zero-confidence result)
  2. For each file, run the content kind's patterns that are relevant
     to the claim and collect their matches
  3. Turn matches into per-pattern confidences (four-way table),
     weight-average them per file, and average across files
  4. Emit supporting / contradicting evidence per (file, pattern)
  5. Apply the ordered verdict rules

Each content kind is served by one detector variant. Variants differ
only in data (their content kind and pattern set); relevance, the
confidence table, evidence and verdict logic are shared.

The engine is a pure function of (claim, files). It keeps no state
between calls. Reporting goes through an injected logger-like object,
or nowhere when none is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Sequence

from claimcheck.models import (
    ANALYSIS_ERROR,
    CONTRADICTING_EVIDENCE,
    MARKUP,
    SCRIPT,
    SEVERITY_HIGH,
    SEVERITY_LOW,
    SEVERITY_MEDIUM,
    STYLESHEET,
    SUPPORTING_EVIDENCE,
    AnalysisResult,
    Claim,
    DetectedPattern,
    Evidence,
    FileContent,
    PatternDefinition,
)
from claimcheck.patterns import extract_keywords, get_patterns


# ============================================================
# DECISION TABLES
# ============================================================

# Checked in order: "high" wins over "medium"
SEVERITY_VOCABULARY: tuple[tuple[str, tuple[str, ...]], ...] = (
    (SEVERITY_HIGH, ("error", "exception", "validation", "security")),
    (SEVERITY_MEDIUM, ("async", "performance", "optimization")),
)

# Confidence for a file where no pattern was considered
NEUTRAL_FILE_CONFIDENCE = 0.5


@dataclass(frozen=True)
class VerdictRule:
    """A LIE rule: fires when its count test passes and confidence is below the ceiling."""
    name: str
    count_test: Callable[[int, int], bool]   # (contradicting, supporting) -> bool
    ceiling: float


VERDICT_RULES: tuple[VerdictRule, ...] = (
    VerdictRule(
        name="contradiction_dominates",
        count_test=lambda contradicting, supporting: contradicting > supporting,
        ceiling=0.4,
    ),
    VerdictRule(
        name="any_contradiction",
        count_test=lambda contradicting, supporting: contradicting > 0,
        ceiling=0.3,
    ),
)


def pattern_confidence(
    has_matches: bool,
    expects: bool,
    match_count: int = 0,
    expectation_strength: float = 0.0,
) -> float:
    """
    The four-way confidence table.

    | matches | expected | confidence                         |
    |---------|----------|------------------------------------|
    | yes     | yes      | min(0.8 + 0.05 * count, 1.0)       |
    | no      | yes      | max(0.2 - 0.3 * strength, 0.0)     |
    | yes     | no       | 0.6                                |
    | no      | no       | 0.5                                |
    """
    if has_matches and expects:
        return min(0.8 + match_count * 0.05, 1.0)
    if not has_matches and expects:
        return max(0.2 - expectation_strength * 0.3, 0.0)
    if has_matches and not expects:
        return 0.6
    return 0.5


def severity_for(pattern_name: str, normalized_claim: str) -> str:
    """Severity of a missing expected pattern, from the claim text and pattern name."""
    name = pattern_name.lower()
    for severity, terms in SEVERITY_VOCABULARY:
        if any(t in normalized_claim or t in name for t in terms):
            return severity
    return SEVERITY_LOW


def decide_verdict(confidence: float, evidence: Sequence[Evidence]) -> Optional[str]:
    """
    Apply the verdict rules in order.

    Returns the name of the first rule that fires (the claim is a lie),
    or None when the claim is verified.
    """
    contradicting = sum(1 for e in evidence if e.category == CONTRADICTING_EVIDENCE)
    supporting = sum(1 for e in evidence if e.category == SUPPORTING_EVIDENCE)
    for rule in VERDICT_RULES:
        if rule.count_test(contradicting, supporting) and confidence < rule.ceiling:
            return rule.name
    return None


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


# ============================================================
# DETECTORS (one variant per content kind)
# ============================================================

class ContentDetector(Protocol):
    """What the engine needs from a content kind."""

    content_kind: str
    patterns: tuple[PatternDefinition, ...]

    def is_relevant(self, pattern: PatternDefinition, normalized_claim: str) -> bool:
        ...

    def pattern_confidence(
        self, pattern: PatternDefinition, matches: Sequence[str], normalized_claim: str,
    ) -> float:
        ...

    def detect(
        self, text: str, normalized_claim: str,
    ) -> list[tuple[PatternDefinition, list[str]]]:
        ...


class PatternDetector:
    """
    Shared detector behaviour.

    A pattern is relevant to a claim when any keyword of its category
    appears in the lowercased claim. The same test decides whether the
    claim expects the pattern to be present.
    """

    content_kind: str = ""
    patterns: tuple[PatternDefinition, ...] = ()

    def __init__(self, patterns: Optional[tuple[PatternDefinition, ...]] = None):
        if patterns is not None:
            self.patterns = patterns
        elif not self.patterns:
            self.patterns = get_patterns(self.content_kind)

    def is_relevant(self, pattern: PatternDefinition, normalized_claim: str) -> bool:
        return any(k in normalized_claim for k in extract_keywords(pattern.category))

    def expects(self, pattern: PatternDefinition, normalized_claim: str) -> bool:
        return self.is_relevant(pattern, normalized_claim)

    def expectation_strength(self, pattern: PatternDefinition, normalized_claim: str) -> float:
        """Fraction of the category's keywords present in the claim."""
        keywords = extract_keywords(pattern.category)
        if not keywords:
            return 0.0
        mentioned = sum(1 for k in keywords if k in normalized_claim)
        return min(mentioned / len(keywords), 1.0)

    def find_matches(self, text: str, pattern: PatternDefinition) -> list[str]:
        """All non-overlapping matches; an empty match moves the cursor one character on."""
        matches: list[str] = []
        pos = 0
        end = len(text)
        while pos <= end:
            m = pattern.expression.search(text, pos)
            if m is None:
                break
            matches.append(m.group(0))
            pos = m.end() + 1 if m.end() == m.start() else m.end()
        return matches

    def detect(
        self, text: str, normalized_claim: str,
    ) -> list[tuple[PatternDefinition, list[str]]]:
        """
        Relevant patterns with their matches in the text.

        Patterns without matches are kept when the claim expects them,
        so a missing expected pattern still shows up as a data point.
        """
        found = []
        for pattern in self.patterns:
            if not self.is_relevant(pattern, normalized_claim):
                continue
            matches = self.find_matches(text, pattern)
            if matches or self.expects(pattern, normalized_claim):
                found.append((pattern, matches))
        return found

    def pattern_confidence(
        self, pattern: PatternDefinition, matches: Sequence[str], normalized_claim: str,
    ) -> float:
        return pattern_confidence(
            has_matches=bool(matches),
            expects=self.expects(pattern, normalized_claim),
            match_count=len(matches),
            expectation_strength=self.expectation_strength(pattern, normalized_claim),
        )


class ScriptDetector(PatternDetector):
    content_kind = SCRIPT


class StylesheetDetector(PatternDetector):
    content_kind = STYLESHEET


class MarkupDetector(PatternDetector):
    content_kind = MARKUP


def default_detectors() -> list[ContentDetector]:
    return [ScriptDetector(), StylesheetDetector(), MarkupDetector()]


# ============================================================
# THE ENGINE
# ============================================================

class DetectionEngine:
    """
    Verifies claims against file contents.

    Holds the detector registry and an optional reporter. Neither is
    mutated by analysis, so repeated calls with the same input return
    equal results.
    """

    def __init__(
        self,
        detectors: Optional[Iterable[ContentDetector]] = None,
        reporter=None,
    ):
        registry = list(detectors) if detectors is not None else default_detectors()
        self._detectors = {d.content_kind: d for d in registry}
        self._reporter = reporter

    @property
    def content_kinds(self) -> list[str]:
        return list(self._detectors)

    def detector_for(self, content_kind: str) -> Optional[ContentDetector]:
        return self._detectors.get(content_kind)

    def analyze(
        self,
        claim: str,
        files: Sequence[FileContent],
        content_kind: str,
    ) -> AnalysisResult:
        """
        Verify a claim against the files of one content kind.

        Never raises for bad file contents: a file that fails analysis
        becomes analysis_error evidence and the next file is processed.
        """
        detector = self.detector_for(content_kind)
        relevant_files = [f for f in files if f.content_kind == content_kind]
        if detector is None or not relevant_files:
            return self._non_applicable(claim, content_kind)

        normalized_claim = claim.lower()
        all_patterns: list[DetectedPattern] = []
        all_evidence: list[Evidence] = []
        total_confidence = 0.0

        for file in relevant_files:
            try:
                detected, evidence, file_confidence = self._analyze_file(
                    detector, file, normalized_claim,
                )
            except Exception as exc:
                if self._reporter is not None:
                    self._reporter.warning(
                        f"Analysis failed for {file.path}",
                        exc_info=True,
                        extra={
                            "path": file.path,
                            "content_kind": content_kind,
                            "error": str(exc),
                            "error_type": type(exc).__name__,
                        },
                    )
                all_evidence.append(Evidence(
                    file=file.path,
                    description=f"Analysis failed: {str(exc) or 'Unknown error'}",
                    severity=SEVERITY_LOW,
                    category=ANALYSIS_ERROR,
                ))
                continue

            all_patterns.extend(detected)
            all_evidence.extend(evidence)
            total_confidence += file_confidence

        # A failed file still counts in the denominator with zero confidence
        average = total_confidence / len(relevant_files)
        verdict_rule = decide_verdict(average, all_evidence)
        is_lie = verdict_rule is not None

        result = AnalysisResult(
            is_lie=is_lie,
            confidence=clamp(average),
            evidence=all_evidence,
            summary=self._build_summary(is_lie, all_evidence, claim),
            detected_patterns=all_patterns,
        )

        if self._reporter is not None:
            self._reporter.debug(
                f"Claim analyzed: {result.verdict} ({verdict_rule or 'no rule fired'})",
                extra={
                    "content_kind": content_kind,
                    "is_lie": is_lie,
                    "confidence": result.confidence,
                    "files_count": len(relevant_files),
                    "evidence_count": len(all_evidence),
                },
            )
        return result

    def analyze_claim(
        self,
        claim: Claim,
        files: Sequence[FileContent],
        content_kind: Optional[str] = None,
    ) -> AnalysisResult:
        """Verify a structured claim, by default against its own content kind."""
        return self.analyze(claim.text, files, content_kind or claim.content_kind)

    def _analyze_file(
        self,
        detector: ContentDetector,
        file: FileContent,
        normalized_claim: str,
    ) -> tuple[list[DetectedPattern], list[Evidence], float]:
        detected: list[DetectedPattern] = []
        evidence: list[Evidence] = []
        weighted = 0.0
        total_weight = 0.0

        for pattern, matches in detector.detect(file.text, normalized_claim):
            confidence = detector.pattern_confidence(pattern, matches, normalized_claim)
            detected.append(DetectedPattern(
                pattern_name=pattern.name,
                matches=tuple(matches),
                confidence=confidence,
                file=file.path,
            ))
            weighted += confidence * pattern.weight
            total_weight += pattern.weight

            if matches:
                evidence.append(Evidence(
                    file=file.path,
                    description=f"Found {len(matches)} instance(s) of {pattern.name}",
                    severity=SEVERITY_LOW,
                    category=SUPPORTING_EVIDENCE,
                ))
            else:
                evidence.append(Evidence(
                    file=file.path,
                    description=f"Expected {pattern.name} but none found - claim appears false",
                    severity=severity_for(pattern.name, normalized_claim),
                    category=CONTRADICTING_EVIDENCE,
                ))

        file_confidence = weighted / total_weight if total_weight > 0 else NEUTRAL_FILE_CONFIDENCE
        return detected, evidence, file_confidence

    def _build_summary(self, is_lie: bool, evidence: Sequence[Evidence], claim: str) -> str:
        contradicting = sum(1 for e in evidence if e.category == CONTRADICTING_EVIDENCE)
        supporting = sum(1 for e in evidence if e.category == SUPPORTING_EVIDENCE)
        if is_lie:
            return (
                f"LIE DETECTED: Analysis found {contradicting} contradicting evidence(s) "
                f"and {supporting} supporting evidence(s) for the claim \"{claim}\". "
                f"The code does not support the assertion."
            )
        return (
            f"CLAIM VERIFIED: Analysis found {supporting} supporting evidence(s) "
            f"and {contradicting} contradicting evidence(s) for the claim \"{claim}\". "
            f"The code appears to support the assertion."
        )

    def _non_applicable(self, claim: str, content_kind: str) -> AnalysisResult:
        if self.detector_for(content_kind) is None:
            summary = f"No detector available for {content_kind} content; claim not analyzed: \"{claim}\""
        else:
            summary = f"No {content_kind} files found to analyze the claim: \"{claim}\""
        return AnalysisResult(
            is_lie=False,
            confidence=0.0,
            evidence=[],
            summary=summary,
            detected_patterns=[],
        )
