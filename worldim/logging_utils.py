"""Terminal output helpers for World IM.

Everything the engine prints belongs to one channel: world bookkeeping,
agent decisions, rejections, completions, or run metadata. Each channel has
an ANSI colour and a plain-text tag, so a transcript still reads correctly
when colours are switched off with ``WORLDIM_NO_COLOR``.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI escape sequences, one per output channel."""

    BLUE = "\033[94m"      # world: sequencing, presence, relationships
    YELLOW = "\033[93m"    # agents: speak, abstain, initiate
    RED = "\033[91m"       # rejected drafts and senders
    GREEN = "\033[92m"     # finished runs
    CYAN = "\033[96m"      # roster and run metadata

    BOLD = "\033[1m"
    RESET = "\033[0m"


# Plain-text channel tags, printed even without colour
LOG_TAG_WORLD = "[•]"
LOG_TAG_AGENT = "[AG]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"


def env_flag(name: str) -> bool:
    """True when environment toggle ``name`` is set to 1/true/yes."""
    return os.getenv(name, "").lower() in ("1", "true", "yes")


def colors_enabled() -> bool:
    return not os.getenv("WORLDIM_NO_COLOR")


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Return ``text`` wrapped in ``color`` (and bold), or unchanged when colours are off."""
    if not colors_enabled():
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix
    return f"{prefix}{text}{Color.RESET.value}"


def log_world(message: str) -> None:
    print(colored(message, Color.BLUE))


def log_agent(message: str) -> None:
    print(colored(message, Color.YELLOW))


def log_error(message: str) -> None:
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    print(colored(message, Color.CYAN))
