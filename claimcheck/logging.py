"""
Log Records for claimcheck

Everything claimcheck logs goes through the "claimcheck" logger tree:

  claimcheck.detector         one INFO line per verdict (is_lie, confidence,
                              files_count, evidence_count, duration_ms) and
                              a WARNING when a file batch is truncated
  claimcheck.engine           WARNING when one file's analysis raises; the
                              record carries path, error and error_type
  claimcheck.files            WARNING per skipped file (unsupported
                              extension, oversize, unreadable)
  claimcheck.capture          stale-claim cleanup and listener failures
  claimcheck.schemas.verify   WARNING for a request that fails validation

Hosts call setup_logging() once. JSON lines are the default so a harness
can parse verdicts out of stderr; CLAIMCHECK_LOG_FORMAT=text gives a
readable line per record instead.

    from claimcheck.logging import setup_logging
    setup_logging(level="debug")
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


LOG_LEVEL = os.getenv("CLAIMCHECK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("CLAIMCHECK_LOG_FORMAT", "json")  # "json" or "text"

# Record attributes that become JSON keys, grouped by the module that sets them
EXTRA_FIELDS = (
    # verdict lines
    "claim_id", "content_kind", "is_lie", "confidence",
    "files_count", "evidence_count", "duration_ms",
    # file and analysis failures
    "path", "error", "error_type",
    # extraction and capture
    "claims_count", "conversation_id",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, carrying whichever EXTRA_FIELDS are set."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Plain "time [LEVEL] logger: message" lines for terminal use."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(level: str | None = None, fmt: str | None = None, stream=None):
    """Configure the claimcheck logger. Call once at host startup."""
    root = logging.getLogger("claimcheck")
    level_name = (level or LOG_LEVEL).upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)
    return root


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the claimcheck namespace."""
    return logging.getLogger(f"claimcheck.{name}")
