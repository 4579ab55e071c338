"""
Tests for the verification orchestrator — content kind routing,
file-batch capping and message-level verification.
"""

from unittest.mock import MagicMock, patch

import pytest

from claimcheck.config import Settings
from claimcheck.detector import (
    ClaimVerification,
    dominant_content_kind,
    resolve_content_kind,
    verify_claim,
    verify_message,
)
from claimcheck.engine import DetectionEngine
from claimcheck.models import (
    GENERIC,
    MARKUP,
    SCRIPT,
    STYLESHEET,
    SUPPORTING_EVIDENCE,
    AnalysisResult,
    FileContent,
)
from claimcheck.patterns import get_patterns


ERROR_HANDLING_JS = "try { run(); } catch (e) { throw new Error('failed'); }"
RESPONSIVE_CSS = "@media (max-width: 600px) { .header { flex-direction: column; } }"


def js(path, text=ERROR_HANDLING_JS):
    return FileContent(path, SCRIPT, text)


def css(path, text=RESPONSIVE_CSS):
    return FileContent(path, STYLESHEET, text)


class TestResolveContentKind:

    def test_explicit_kind_wins(self):
        assert resolve_content_kind("I made the header responsive", MARKUP) == MARKUP

    def test_classified_from_claim(self):
        assert resolve_content_kind("I made the header responsive") == STYLESHEET

    def test_unclassified_uses_generic_kind(self):
        assert resolve_content_kind("Improved things a bit") == SCRIPT

    def test_generic_claim_without_batch_uses_generic_kind(self):
        assert resolve_content_kind("Fixed the bug in the parser") == SCRIPT
        assert resolve_content_kind("anything", GENERIC) == SCRIPT

    def test_generic_kind_is_configurable(self):
        with patch("claimcheck.detector.settings", Settings(GENERIC_CONTENT_KIND=MARKUP)):
            assert resolve_content_kind("Fixed the bug in the parser") == MARKUP

    def test_unclassified_takes_single_batch_kind(self):
        assert resolve_content_kind("Added dark mode support", files=[css("theme.css")]) == STYLESHEET

    def test_unclassified_takes_majority_kind(self):
        files = [css("a.css"), js("a.js"), css("b.css")]
        assert resolve_content_kind("Improved things a bit", files=files) == STYLESHEET

    def test_tie_prefers_generic_kind(self):
        assert resolve_content_kind("Improved things a bit", files=[css("a.css"), js("a.js")]) == SCRIPT

    def test_tie_without_generic_kind_takes_first_seen(self):
        files = [FileContent("a.html", MARKUP, ""), css("a.css")]
        assert resolve_content_kind("Improved things a bit", files=files) == MARKUP

    def test_classified_claim_ignores_batch(self):
        assert resolve_content_kind("I added comprehensive error handling", files=[css("a.css")]) == SCRIPT

    def test_dominant_kind_of_empty_batch(self):
        assert dominant_content_kind([]) is None
        assert dominant_content_kind(None) is None


class TestVerifyClaim:

    def test_routes_to_stylesheet(self):
        result = verify_claim("I made the header responsive", [js("a.js"), css("a.css")])
        names = {p.pattern_name for p in result.detected_patterns}
        assert names <= {p.name for p in get_patterns(STYLESHEET)}
        # one media query found, three responsive patterns missing at 0.05
        assert result.confidence == pytest.approx((0.85 * 0.9 + 0.05 * (0.8 + 0.9 + 0.7)) / 3.3)
        assert result.is_lie is True

    def test_generic_claim_with_mixed_batch_uses_generic_kind(self):
        result = verify_claim("Fixed the bug in the parser", [js("a.js"), css("a.css")])
        assert result.confidence == 0.5
        assert result.is_lie is False

    def test_generic_claim_with_stylesheets_only(self):
        result = verify_claim("Fixed the bug in the parser", [css("a.css")])
        assert result.confidence == 0.5
        assert result.evidence == []

    def test_unclassified_claim_checked_against_stylesheet_batch(self):
        theme = css("theme.css", "@media (prefers-color-scheme: dark) { :root { --bg: black; } }")
        result = verify_claim("Added dark mode support", [theme])
        names = {p.pattern_name for p in result.detected_patterns}
        assert {"dark_mode_media", "color_scheme_property"} <= names
        assert result.count(SUPPORTING_EVIDENCE) == 3
        assert result.confidence > 0
        assert result.is_lie is False

    def test_no_files(self):
        result = verify_claim("I added comprehensive error handling", None)
        assert result.is_lie is False
        assert result.confidence == 0
        assert result.evidence == []

    def test_structured_claim(self):
        from claimcheck.extractor import ClaimExtractor
        claim = ClaimExtractor().create_claim("I added comprehensive error handling")
        result = verify_claim(claim, [js("a.js")])
        assert result.is_lie is False
        assert result.confidence == pytest.approx(0.85)

    def test_file_batch_capped(self):
        engine = MagicMock(spec=DetectionEngine)
        engine.analyze.return_value = AnalysisResult(is_lie=False, confidence=0.5)
        files = [js(f"f{i}.js") for i in range(5)]
        with patch("claimcheck.detector.settings", Settings(MAX_FILES=2)):
            verify_claim("I added comprehensive error handling", files, engine=engine)
        passed = engine.analyze.call_args.args[1]
        assert [f.path for f in passed] == ["f0.js", "f1.js"]

    def test_logs_outcome(self, caplog):
        with caplog.at_level("INFO", logger="claimcheck.detector"):
            verify_claim("I added comprehensive error handling", [js("a.js")])
        record = [r for r in caplog.records if r.name == "claimcheck.detector"][-1]
        assert record.is_lie is False
        assert record.content_kind == SCRIPT
        assert record.files_count == 1


class TestVerifyMessage:

    def test_each_claim_verified_in_order(self):
        text = "I added comprehensive error handling. I made the header responsive. Thanks!"
        verifications = verify_message(text, [js("a.js"), css("a.css")], conversation_id="c1")
        assert len(verifications) == 2
        assert all(isinstance(v, ClaimVerification) for v in verifications)
        first, second = verifications
        assert first.claim.target == "error handling"
        assert first.claim.conversation_id == "c1"
        assert first.result.is_lie is False
        assert second.claim.content_kind == STYLESHEET
        assert {e.file for e in second.result.evidence} == {"a.css"}

    def test_no_claims(self):
        assert verify_message("Hello there, how are you today?", [js("a.js")]) == []
