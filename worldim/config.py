"""
World IM Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Randomness. Unset means a fresh entropy source per run.
    WORLDIM_SEED: int | None = _optional_int("WORLDIM_SEED")

    # Orchestration timing (seconds)
    # Agents answer a message after a random delay in this window
    RESPONSE_DELAY_MIN: float = float(os.getenv("RESPONSE_DELAY_MIN", "1.5"))
    RESPONSE_DELAY_MAX: float = float(os.getenv("RESPONSE_DELAY_MAX", "5.5"))
    # Self-initiation timer fires at a random interval in this window
    INITIATION_INTERVAL_MIN: float = float(os.getenv("INITIATION_INTERVAL_MIN", "15"))
    INITIATION_INTERVAL_MAX: float = float(os.getenv("INITIATION_INTERVAL_MAX", "25"))
    KICKSTART_DELAY: float = float(os.getenv("KICKSTART_DELAY", "2"))

    # History handed to a newly admitted human
    RECENT_HISTORY_LIMIT: int = int(os.getenv("RECENT_HISTORY_LIMIT", "50"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    ROSTERS_DIR: Path = PROJECT_ROOT / "examples" / "rosters"

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are inconsistent."""
        if cls.RESPONSE_DELAY_MIN < 0 or cls.RESPONSE_DELAY_MAX < cls.RESPONSE_DELAY_MIN:
            raise ValueError(
                "RESPONSE_DELAY_MIN must be >= 0 and <= RESPONSE_DELAY_MAX "
                f"(got {cls.RESPONSE_DELAY_MIN}..{cls.RESPONSE_DELAY_MAX})"
            )

        if (
            cls.INITIATION_INTERVAL_MIN <= 0
            or cls.INITIATION_INTERVAL_MAX < cls.INITIATION_INTERVAL_MIN
        ):
            raise ValueError(
                "INITIATION_INTERVAL_MIN must be > 0 and <= INITIATION_INTERVAL_MAX "
                f"(got {cls.INITIATION_INTERVAL_MIN}..{cls.INITIATION_INTERVAL_MAX})"
            )

        if cls.RECENT_HISTORY_LIMIT < 0:
            raise ValueError("RECENT_HISTORY_LIMIT must be >= 0")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "World IM Configuration:",
            f"  Seed: {cls.WORLDIM_SEED if cls.WORLDIM_SEED is not None else 'random'}",
            f"  Response delay: {cls.RESPONSE_DELAY_MIN}-{cls.RESPONSE_DELAY_MAX}s",
            f"  Initiation interval: {cls.INITIATION_INTERVAL_MIN}-{cls.INITIATION_INTERVAL_MAX}s",
            f"  Kickstart delay: {cls.KICKSTART_DELAY}s",
            f"  History limit: {cls.RECENT_HISTORY_LIMIT}",
        ]
        return "\n".join(lines)
