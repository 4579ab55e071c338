"""
Tests for the Detection Engine — relevance, matching, confidence
aggregation, evidence generation, error isolation and determinism.
"""

import re
from unittest.mock import MagicMock

import pytest

from claimcheck.engine import (
    DetectionEngine,
    MarkupDetector,
    PatternDetector,
    ScriptDetector,
    StylesheetDetector,
    pattern_confidence,
    severity_for,
)
from claimcheck.models import (
    ANALYSIS_ERROR,
    CONTRADICTING_EVIDENCE,
    MARKUP,
    SCRIPT,
    STYLESHEET,
    SUPPORTING_EVIDENCE,
    FileContent,
    PatternDefinition,
)
from claimcheck.patterns import get_pattern, get_patterns


ERROR_HANDLING_JS = """
async function load(url) {
  try {
    const res = await fetch(url);
  } catch (e) {
    throw new Error("load failed");
  }
}
"""

PLAIN_JS = "function add(a, b) { return a + b; }"

DARK_MODE_CSS = """
:root { --bg: white; }
@media (prefers-color-scheme: dark) { :root { --bg: black; } }
body { background: var(--bg); }
"""

PLAIN_CSS = "body { color: red; }"


@pytest.fixture
def engine():
    return DetectionEngine()


def js(path, text):
    return FileContent(path=path, content_kind=SCRIPT, text=text)


def css(path, text):
    return FileContent(path=path, content_kind=STYLESHEET, text=text)


class TestConfidenceTable:
    """The four-way (has matches, expects) table."""

    @pytest.mark.parametrize("count,expected", [
        (1, 0.85), (2, 0.9), (3, 0.95), (4, 1.0), (10, 1.0),
    ])
    def test_present_and_expected(self, count, expected):
        assert pattern_confidence(True, True, count) == pytest.approx(expected)

    @pytest.mark.parametrize("strength,expected", [
        (0.0, 0.2), (0.5, 0.05), (1.0, 0.0),
    ])
    def test_absent_and_expected(self, strength, expected):
        assert pattern_confidence(False, True, 0, strength) == pytest.approx(expected)

    def test_present_not_expected(self):
        assert pattern_confidence(True, False, 7) == 0.6

    def test_absent_not_expected(self):
        assert pattern_confidence(False, False) == 0.5


class TestRelevance:

    def test_category_keyword_in_claim(self):
        detector = StylesheetDetector()
        pattern = get_pattern(STYLESHEET, "dark_mode_media")
        assert detector.is_relevant(pattern, "added dark theme support")

    def test_unrelated_claim(self):
        detector = StylesheetDetector()
        pattern = get_pattern(STYLESHEET, "dark_mode_media")
        assert not detector.is_relevant(pattern, "updated the footer")

    def test_expectation_uses_relevance(self):
        detector = ScriptDetector()
        for pattern in detector.patterns:
            for claim in ("added error handling", "optimized performance", "nothing here"):
                assert detector.expects(pattern, claim) == detector.is_relevant(pattern, claim)

    def test_expectation_strength(self):
        detector = StylesheetDetector()
        pattern = get_pattern(STYLESHEET, "media_queries")   # responsive_design
        assert detector.expectation_strength(pattern, "made it responsive") == pytest.approx(0.5)
        assert detector.expectation_strength(pattern, "responsive design") == pytest.approx(1.0)
        assert detector.expectation_strength(pattern, "nothing") == 0.0

    def test_variants_use_their_own_library(self):
        assert ScriptDetector().patterns == get_patterns(SCRIPT)
        assert StylesheetDetector().patterns == get_patterns(STYLESHEET)
        assert MarkupDetector().patterns == get_patterns(MARKUP)


class TestFindMatches:

    def test_collects_all_matches(self):
        detector = ScriptDetector()
        pattern = get_pattern(SCRIPT, "throw_statements")
        matches = detector.find_matches("throw a; throw b; throw c;", pattern)
        assert matches == ["throw a", "throw b", "throw c"]

    def test_zero_width_matches_advance(self):
        pattern = PatternDefinition("xs", re.compile(r"x*"), "test", 1.0)
        assert PatternDetector(patterns=(pattern,)).find_matches("axb", pattern) == ["", "x", "", ""]

    def test_no_matches(self):
        pattern = get_pattern(SCRIPT, "try_catch_blocks")
        assert ScriptDetector().find_matches(PLAIN_JS, pattern) == []


class TestAnalyze:

    def test_supported_claim_is_verified(self, engine):
        result = engine.analyze("Added error handling", [js("api.js", ERROR_HANDLING_JS)], SCRIPT)
        assert result.is_lie is False
        assert result.confidence == pytest.approx(0.85)
        assert result.count(SUPPORTING_EVIDENCE) == 3
        assert result.count(CONTRADICTING_EVIDENCE) == 0
        assert [p.pattern_name for p in result.detected_patterns] == [
            "try_catch_blocks", "throw_statements", "error_objects",
        ]
        assert result.summary.startswith("CLAIM VERIFIED: Analysis found 3 supporting evidence(s)")

    def test_unsupported_claim_is_lie(self, engine):
        result = engine.analyze("Added error handling", [js("math.js", PLAIN_JS)], SCRIPT)
        assert result.is_lie is True
        assert result.confidence == 0.0
        assert result.count(CONTRADICTING_EVIDENCE) == 3
        assert all(e.severity == "high" for e in result.evidence)
        assert result.summary.startswith("LIE DETECTED: Analysis found 3 contradicting evidence(s)")
        assert "Added error handling" in result.summary

    def test_weighted_file_confidence(self, engine):
        result = engine.analyze("Added dark mode support", [css("theme.css", DARK_MODE_CSS)], STYLESHEET)
        # dark media query (0.9), custom properties x3 (0.7), color-scheme (0.8), no theme selector (0.7)
        expected = (0.85 * 0.9 + 0.95 * 0.7 + 0.85 * 0.8 + 0.0 * 0.7) / (0.9 + 0.7 + 0.8 + 0.7)
        assert result.confidence == pytest.approx(expected)
        assert result.count(SUPPORTING_EVIDENCE) == 3
        assert result.count(CONTRADICTING_EVIDENCE) == 1
        assert result.is_lie is False

    def test_missing_pattern_once_per_file(self, engine):
        files = [css("a.css", PLAIN_CSS), css("b.css", PLAIN_CSS)]
        result = engine.analyze("Added dark mode support", files, STYLESHEET)
        missing = [e for e in result.evidence if "dark_mode_media" in e.description]
        assert [e.file for e in missing] == ["a.css", "b.css"]
        assert all(e.category == CONTRADICTING_EVIDENCE for e in missing)

    def test_match_count_drives_confidence(self, engine):
        result = engine.analyze("Added error handling", [js("a.js", "throw a; throw b; throw c;")], SCRIPT)
        throws = [p for p in result.detected_patterns if p.pattern_name == "throw_statements"][0]
        assert throws.matches == ("throw a", "throw b", "throw c")
        assert throws.confidence == pytest.approx(0.95)

    def test_no_relevant_patterns_is_neutral(self, engine):
        result = engine.analyze("Updated the footer", [css("a.css", PLAIN_CSS)], STYLESHEET)
        assert result.confidence == 0.5
        assert result.evidence == []
        assert result.is_lie is False

    def test_other_kinds_ignored(self, engine):
        files = [js("api.js", ERROR_HANDLING_JS), css("a.css", PLAIN_CSS)]
        result = engine.analyze("Added error handling", files, SCRIPT)
        assert {e.file for e in result.evidence} == {"api.js"}

    def test_evidence_in_file_then_pattern_order(self, engine):
        files = [js("b.js", PLAIN_JS), js("a.js", ERROR_HANDLING_JS)]
        result = engine.analyze("Added error handling", files, SCRIPT)
        assert [e.file for e in result.evidence] == ["b.js"] * 3 + ["a.js"] * 3

    def test_analyze_claim_uses_claim_kind(self, engine):
        from claimcheck.extractor import ClaimExtractor
        claim = ClaimExtractor().create_claim("I added comprehensive error handling")
        result = engine.analyze_claim(claim, [js("api.js", ERROR_HANDLING_JS)])
        assert result.count(SUPPORTING_EVIDENCE) == 3


class TestNonApplicable:

    def test_no_files_of_kind(self, engine):
        result = engine.analyze("Added dark mode", [js("a.js", PLAIN_JS)], STYLESHEET)
        assert result.is_lie is False
        assert result.confidence == 0
        assert result.evidence == []
        assert result.detected_patterns == []
        assert result.summary == 'No stylesheet files found to analyze the claim: "Added dark mode"'

    def test_empty_batch(self, engine):
        result = engine.analyze("Added error handling", [], SCRIPT)
        assert result.is_lie is False
        assert result.confidence == 0

    def test_unknown_kind(self, engine):
        files = [FileContent("a.py", "python", "try: pass\nexcept: pass")]
        result = engine.analyze("Added error handling", files, "python")
        assert result.is_lie is False
        assert result.confidence == 0
        assert result.evidence == []


class TestErrorIsolation:

    def test_failed_file_becomes_evidence(self, engine):
        files = [FileContent("broken.js", SCRIPT, None), js("api.js", ERROR_HANDLING_JS)]
        result = engine.analyze("Added error handling", files, SCRIPT)
        errors = [e for e in result.evidence if e.category == ANALYSIS_ERROR]
        assert len(errors) == 1
        assert errors[0].file == "broken.js"
        assert errors[0].severity == "low"
        assert errors[0].description.startswith("Analysis failed: ")
        assert result.count(SUPPORTING_EVIDENCE) == 3

    def test_failed_file_counts_as_zero(self, engine):
        files = [FileContent("broken.js", SCRIPT, None), js("api.js", ERROR_HANDLING_JS)]
        result = engine.analyze("Added error handling", files, SCRIPT)
        assert result.confidence == pytest.approx(0.85 / 2)

    def test_failure_reported_to_reporter(self):
        reporter = MagicMock()
        engine = DetectionEngine(reporter=reporter)
        engine.analyze("Added error handling", [FileContent("broken.js", SCRIPT, None)], SCRIPT)
        reporter.warning.assert_called_once()
        assert reporter.warning.call_args.kwargs["extra"]["path"] == "broken.js"

    def test_custom_detector_failure(self):
        class Exploding(ScriptDetector):
            def detect(self, text, normalized_claim):
                raise RuntimeError("")

        engine = DetectionEngine(detectors=[Exploding()])
        result = engine.analyze("Added error handling", [js("a.js", PLAIN_JS)], SCRIPT)
        assert result.evidence[0].description == "Analysis failed: Unknown error"


class TestSeverity:

    @pytest.mark.parametrize("pattern_name,claim,expected", [
        ("try_catch_blocks", "added error handling", "high"),
        ("input_validation", "did some cleanup", "high"),
        ("sanitization", "improved security", "high"),
        ("will_change", "improved performance", "medium"),
        ("async_functions", "cleaned up", "medium"),
        ("memoization", "added memo", "low"),
        ("performance_check", "fixed exception path", "high"),
    ])
    def test_severity(self, pattern_name, claim, expected):
        assert severity_for(pattern_name, claim) == expected


class TestProperties:

    @pytest.mark.parametrize("claim,files,kind", [
        ("Added error handling", [js("a.js", ERROR_HANDLING_JS)], SCRIPT),
        ("Added error handling", [js("a.js", PLAIN_JS)] * 5, SCRIPT),
        ("Added dark mode support", [css("a.css", DARK_MODE_CSS)], STYLESHEET),
        ("Added aria labels and semantic html", [FileContent("i.html", MARKUP, "<main></main>")], MARKUP),
        ("Optimized performance with async await and validation", [js("a.js", "x" * 2000)], SCRIPT),
    ])
    def test_confidence_in_bounds_and_deterministic(self, engine, claim, files, kind):
        first = engine.analyze(claim, files, kind)
        second = engine.analyze(claim, files, kind)
        assert 0.0 <= first.confidence <= 1.0
        assert first == second
