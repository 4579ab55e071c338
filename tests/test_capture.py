"""
Tests for the in-memory claim capture store.
"""

import pytest

from claimcheck.capture import ClaimCapture, ConversationMessage
from claimcheck.extractor import ClaimExtractor
from claimcheck.models import GENERIC, SCRIPT, STYLESHEET


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def capture(clock):
    return ClaimCapture(extractor=ClaimExtractor(clock=clock), clock=clock)


def assistant(content, msg_id="m1", ts=1_000_000.0):
    return ConversationMessage(id=msg_id, role="assistant", content=content, timestamp=ts)


def user(content, msg_id="u1", ts=1_000_000.0):
    return ConversationMessage(id=msg_id, role="user", content=content, timestamp=ts)


class TestCaptureMessage:

    def test_assistant_message_mined(self, capture):
        claims = capture.capture_message(assistant("I added comprehensive error handling."), "c1")
        assert len(claims) == 1
        assert claims[0].conversation_id == "c1"
        assert claims[0].metadata == {"conversation_id": "c1", "message_id": "m1"}
        assert capture.get_claim(claims[0].id) == claims[0]

    def test_user_message_stored_not_mined(self, capture):
        claims = capture.capture_message(user("Please add error handling to the API."), "c1")
        assert claims == []
        assert capture.get_conversation("c1")[0].role == "user"
        assert capture.stats()["total_claims"] == 0

    def test_conversation_history_in_order(self, capture):
        capture.capture_message(user("Please fix the layout."), "c1")
        capture.capture_message(assistant("I made the header responsive.", msg_id="m2"), "c1")
        assert [m.id for m in capture.get_conversation("c1")] == ["u1", "m2"]

    def test_unknown_conversation(self, capture):
        assert capture.get_conversation("missing") == []


class TestListeners:

    def test_listeners_called_in_order(self, capture):
        seen = []
        capture.on_claim(lambda c: seen.append(("first", c.target)))
        capture.on_claim(lambda c: seen.append(("second", c.target)))
        capture.capture_message(assistant("I added comprehensive error handling."), "c1")
        assert seen == [("first", "error handling"), ("second", "error handling")]

    def test_manual_claim_notifies(self, capture):
        seen = []
        capture.on_claim(seen.append)
        claim = capture.add_claim("Something changed somewhere")
        assert seen == [claim]
        assert claim.content_kind == GENERIC

    def test_failing_listener_does_not_block_others(self, capture):
        seen = []

        def broken(claim):
            raise ValueError("boom")

        capture.on_claim(broken)
        capture.on_claim(seen.append)
        capture.add_claim("I made the header responsive")
        assert len(seen) == 1


class TestQueries:

    def test_add_claim_with_overrides(self, capture):
        claim = capture.add_claim("Tweaked things", content_kind=STYLESHEET, action="fix")
        assert claim.content_kind == STYLESHEET
        assert claim.action == "fix"

    def test_recent_claims_newest_first(self, capture, clock):
        capture.add_claim("I added comprehensive error handling")
        clock.now += 10
        newer = capture.add_claim("I made the header responsive")
        recent = capture.recent_claims()
        assert recent[0] == newer
        assert len(recent) == 2

    def test_recent_window(self, capture, clock):
        capture.add_claim("I added comprehensive error handling")
        clock.now += 301
        capture.add_claim("I made the header responsive")
        assert [c.content_kind for c in capture.recent_claims()] == [STYLESHEET]
        assert len(capture.recent_claims(since=0)) == 2

    def test_stats(self, capture, clock):
        capture.add_claim("I added comprehensive error handling")
        capture.add_claim("I wrote unit tests for the parser")
        clock.now += 1000
        capture.add_claim("I made the header responsive")
        stats = capture.stats()
        assert stats == {
            "total_claims": 3,
            "claims_by_kind": {SCRIPT: 2, STYLESHEET: 1},
            "recent_activity": 1,
        }


class TestCleanup:

    def test_drops_old_claims_and_messages(self, capture, clock):
        capture.capture_message(assistant("I added comprehensive error handling.", ts=clock.now), "old")
        clock.now += 100_000
        capture.capture_message(assistant("I made the header responsive.", ts=clock.now), "new")

        dropped = capture.cleanup()

        assert dropped == 1
        assert capture.get_conversation("old") == []
        assert len(capture.get_conversation("new")) == 1
        assert capture.stats()["total_claims"] == 1

    def test_explicit_cutoff_keeps_recent_messages(self, capture, clock):
        capture.capture_message(user("Please help.", ts=100.0), "c1")
        capture.capture_message(user("Still there?", ts=200.0), "c1")
        capture.cleanup(older_than=150.0)
        assert [m.content for m in capture.get_conversation("c1")] == ["Still there?"]
