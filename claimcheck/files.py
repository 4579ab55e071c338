"""
File Supplier

Reads explicitly named local files into FileContent records for hosts
that run next to the code (the CLI). No directory discovery, no
watching: callers say which files to read.
"""

from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Iterable, Optional

from claimcheck.config import settings
from claimcheck.models import MARKUP, SCRIPT, STYLESHEET, FileContent

logger = logging.getLogger(__name__)


CONTENT_KIND_EXTENSIONS = MappingProxyType({
    ".js": SCRIPT,
    ".jsx": SCRIPT,
    ".mjs": SCRIPT,
    ".cjs": SCRIPT,
    ".ts": SCRIPT,
    ".tsx": SCRIPT,
    ".css": STYLESHEET,
    ".scss": STYLESHEET,
    ".sass": STYLESHEET,
    ".less": STYLESHEET,
    ".html": MARKUP,
    ".htm": MARKUP,
    ".xhtml": MARKUP,
})


def content_kind_for_path(path: str) -> Optional[str]:
    """Content kind from the file extension (case-insensitive), or None if unsupported."""
    _, ext = os.path.splitext(path)
    return CONTENT_KIND_EXTENSIONS.get(ext.lower())


def load_files(paths: Iterable[str], max_bytes: Optional[int] = None) -> list[FileContent]:
    """
    Read the named files, in order.

    Unsupported, oversized and unreadable files are skipped with a
    warning; the rest are decoded as UTF-8 (undecodable bytes replaced).
    """
    limit = settings.MAX_FILE_BYTES if max_bytes is None else max_bytes
    loaded: list[FileContent] = []

    for path in paths:
        kind = content_kind_for_path(path)
        if kind is None:
            logger.warning(f"Skipping unsupported file: {path}", extra={"path": path})
            continue

        try:
            size = os.path.getsize(path)
            if size > limit:
                logger.warning(
                    f"Skipping large file: {path} ({size} bytes)",
                    extra={"path": path, "content_kind": kind},
                )
                continue
            with open(path, "r", encoding="utf-8", errors="replace") as fh:
                text = fh.read()
        except OSError as e:
            logger.warning(
                f"Skipping unreadable file: {path}",
                extra={"path": path, "error": str(e), "error_type": type(e).__name__},
            )
            continue

        loaded.append(FileContent(path=path, content_kind=kind, text=text))

    return loaded


def group_by_kind(files: Iterable[FileContent]) -> dict[str, list[FileContent]]:
    groups: dict[str, list[FileContent]] = {}
    for f in files:
        groups.setdefault(f.content_kind, []).append(f)
    return groups
