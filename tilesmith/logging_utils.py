"""Console output for Tilesmith fill runs.

Every line carries a tag so placement work, LLM-supplied input and dropped
entries stay distinguishable even without colour:

    [•] fill phase summaries      [AI] handling of LLM output
    [!] dropped input, failures   [✓] finished layouts
    [i] map and inventory facts

Set TILESMITH_NO_COLOR to print the tags without ANSI codes (logs, CI).
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI escape codes, one per kind of message."""

    BLUE = "\033[94m"      # Fill phases
    YELLOW = "\033[93m"    # LLM output handling
    RED = "\033[91m"       # Dropped entries, parse failures
    GREEN = "\033[92m"     # Finished layouts
    CYAN = "\033[96m"      # Map facts

    BOLD = "\033[1m"
    RESET = "\033[0m"


# Tags (readable without colour)
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_LLM = "[AI]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Return ``text`` wrapped in ``color``, or unchanged when TILESMITH_NO_COLOR is set."""
    if os.getenv("TILESMITH_NO_COLOR"):
        return text

    prefix = Color.BOLD.value + color.value if bold else color.value
    return f"{prefix}{text}{Color.RESET.value}"


def _emit(tag: str, message: str, color: Color) -> None:
    print(colored(f"{tag} {message}", color))


def log_deterministic(message: str) -> None:
    """Summary of a fill phase, e.g. ``[Rooms] 2 rooms → 8 placements``."""
    _emit(LOG_TAG_DETERMINISTIC, message, Color.BLUE)


def log_llm(message: str) -> None:
    _emit(LOG_TAG_LLM, message, Color.YELLOW)


def log_error(message: str) -> None:
    """A dropped layout entry or an unreadable LLM response."""
    _emit(LOG_TAG_ERROR, message, Color.RED)


def log_success(message: str) -> None:
    _emit(LOG_TAG_SUCCESS, message, Color.GREEN)


def log_info(message: str) -> None:
    _emit(LOG_TAG_INFO, message, Color.CYAN)
