"""
ClaimCheck Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Core Versioning ---
    CORE_VERSION: str = "1.0.0"

    # --- Detection ---
    # Content kind used to evaluate claims the extractor could only classify as "generic"
    GENERIC_CONTENT_KIND: str = os.getenv("CLAIMCHECK_GENERIC_KIND", "script")
    MAX_FILES: int = int(os.getenv("CLAIMCHECK_MAX_FILES", "100"))
    MAX_FILE_BYTES: int = int(os.getenv("CLAIMCHECK_MAX_FILE_BYTES", str(1024 * 1024)))

    # --- Claim Capture ---
    RECENT_WINDOW_SECONDS: float = float(
        os.getenv("CLAIMCHECK_RECENT_WINDOW", "300")
    )
    RETENTION_SECONDS: float = float(
        os.getenv("CLAIMCHECK_RETENTION", "86400")
    )


settings = Settings()
