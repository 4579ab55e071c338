"""
Claim Capture — In-Memory Conversation Store

Keeps conversation messages and the claims mined from them so a host
can verify claims later. Only assistant messages are mined.

Bounded by age, not size: call cleanup() periodically to drop claims
and messages older than the retention window.
Thread-safe via threading lock.

Usage:
    from claimcheck.capture import claim_capture, ConversationMessage
    claim_capture.on_claim(lambda claim: print(claim.text))
    claims = claim_capture.capture_message(
        ConversationMessage(id="m1", role="assistant", content=reply, timestamp=time.time()),
        conversation_id="c1",
    )
"""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Optional

from claimcheck.config import settings
from claimcheck.extractor import ClaimExtractor, claim_extractor
from claimcheck.models import Claim

logger = logging.getLogger(__name__)

ASSISTANT = "assistant"

ClaimListener = Callable[[Claim], None]


@dataclass(frozen=True)
class ConversationMessage:
    """One message in a conversation."""
    id: str
    role: str              # "user" | "assistant"
    content: str
    timestamp: float       # Seconds since the epoch


class ClaimCapture:
    """Stores conversations and captured claims, and notifies listeners of new claims."""

    def __init__(
        self,
        extractor: Optional[ClaimExtractor] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._extractor = extractor or claim_extractor
        self._clock = clock
        self._claims: dict[str, Claim] = {}
        self._conversations: dict[str, list[ConversationMessage]] = {}
        self._listeners: list[ClaimListener] = []
        self._lock = threading.Lock()

    def on_claim(self, listener: ClaimListener) -> None:
        """Register a callback invoked with every stored claim."""
        with self._lock:
            self._listeners.append(listener)

    def capture_message(self, message: ConversationMessage, conversation_id: str) -> list[Claim]:
        """Record a message; mine it for claims when it comes from the assistant."""
        with self._lock:
            self._conversations.setdefault(conversation_id, []).append(message)

        if message.role != ASSISTANT:
            return []

        claims = self._extractor.extract_claims(
            message.content,
            conversation_id=conversation_id,
            metadata={"conversation_id": conversation_id, "message_id": message.id},
        )
        self._store(claims)
        logger.debug(
            "Message captured",
            extra={"conversation_id": conversation_id, "claims_count": len(claims)},
        )
        return claims

    def add_claim(
        self,
        text: str,
        content_kind: Optional[str] = None,
        action: Optional[str] = None,
    ) -> Claim:
        """Manually enter a claim. Unset fields are classified from the text."""
        claim = self._extractor.create_claim(text, content_kind=content_kind, action=action)
        self._store([claim])
        return claim

    def _store(self, claims: list[Claim]) -> None:
        with self._lock:
            for claim in claims:
                self._claims[claim.id] = claim
            listeners = list(self._listeners)

        for claim in claims:
            for listener in listeners:
                try:
                    listener(claim)
                except Exception as exc:
                    logger.error(
                        "Claim listener failed",
                        exc_info=True,
                        extra={"claim_id": claim.id, "error": str(exc), "error_type": type(exc).__name__},
                    )

    def recent_claims(self, since: Optional[float] = None) -> list[Claim]:
        """Claims captured at or after `since` (default: the recent window), newest first."""
        if since is None:
            since = self._clock() - settings.RECENT_WINDOW_SECONDS
        with self._lock:
            recent = [c for c in self._claims.values() if c.timestamp >= since]
        return sorted(recent, key=lambda c: c.timestamp, reverse=True)

    def get_claim(self, claim_id: str) -> Optional[Claim]:
        with self._lock:
            return self._claims.get(claim_id)

    def get_conversation(self, conversation_id: str) -> list[ConversationMessage]:
        with self._lock:
            return list(self._conversations.get(conversation_id, []))

    def cleanup(self, older_than: Optional[float] = None) -> int:
        """
        Drop claims and messages older than the cutoff.

        Conversations left without messages are removed entirely.
        Returns the number of claims dropped.
        """
        if older_than is None:
            older_than = self._clock() - settings.RETENTION_SECONDS

        with self._lock:
            stale = [cid for cid, c in self._claims.items() if c.timestamp < older_than]
            for cid in stale:
                del self._claims[cid]

            for conversation_id in list(self._conversations):
                kept = [m for m in self._conversations[conversation_id] if m.timestamp >= older_than]
                if kept:
                    self._conversations[conversation_id] = kept
                else:
                    del self._conversations[conversation_id]

        if stale:
            logger.info(f"Cleaned up {len(stale)} stale claims", extra={"claims_count": len(stale)})
        return len(stale)

    def stats(self) -> dict:
        with self._lock:
            claims = list(self._claims.values())
        return {
            "total_claims": len(claims),
            "claims_by_kind": dict(Counter(c.content_kind for c in claims)),
            "recent_activity": len(self.recent_claims()),
        }


# ============================================================
# SINGLETON
# ============================================================

claim_capture = ClaimCapture()
