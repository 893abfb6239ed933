"""
Tilesmith Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Engine configuration loaded from environment variables."""

    # Greedy filling
    # Number of full sweeps over the tile list. Empirical: three sweeps mop up
    # the residual gaps of the reference catalog.
    FILL_PASSES: int = int(os.getenv("TILESMITH_FILL_PASSES", "3"))

    # Path rasterization
    PATH_GRID: int = int(os.getenv("TILESMITH_PATH_GRID", "6"))
    MIN_PATH_WIDTH: float = float(os.getenv("TILESMITH_MIN_PATH_WIDTH", "6"))

    # Dungeon layouts
    DUNGEON_STEP: float = float(os.getenv("TILESMITH_DUNGEON_STEP", "1.5"))
    MIN_ROOM_SIZE: float = float(os.getenv("TILESMITH_MIN_ROOM_SIZE", "6"))
    TRANSITION_SIZE: float = float(os.getenv("TILESMITH_TRANSITION_SIZE", "3"))

    # Response shaping
    DESCRIPTION_MAX_CHARS: int = int(os.getenv("TILESMITH_DESCRIPTION_MAX_CHARS", "500"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors for unusable values."""
        if cls.FILL_PASSES < 1:
            raise ValueError("TILESMITH_FILL_PASSES must be at least 1")

        if cls.PATH_GRID <= 0:
            raise ValueError("TILESMITH_PATH_GRID must be a positive number of inches")

        if cls.DUNGEON_STEP <= 0:
            raise ValueError(
                "TILESMITH_DUNGEON_STEP must be positive. "
                "Use 1.5 to scan dungeon floors on the half-tile grid."
            )

        if cls.MIN_PATH_WIDTH <= 0 or cls.MIN_ROOM_SIZE <= 0 or cls.TRANSITION_SIZE <= 0:
            raise ValueError(
                "TILESMITH_MIN_PATH_WIDTH, TILESMITH_MIN_ROOM_SIZE and "
                "TILESMITH_TRANSITION_SIZE must be positive"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Tilesmith Configuration:",
            f"  Fill Passes: {cls.FILL_PASSES}",
            f"  Path Grid: {cls.PATH_GRID}\"",
            f"  Min Path Width: {cls.MIN_PATH_WIDTH}\"",
            f"  Dungeon Step: {cls.DUNGEON_STEP}\"",
            f"  Min Room Size: {cls.MIN_ROOM_SIZE}\"",
            f"  Transition Size: {cls.TRANSITION_SIZE}\"",
            f"  Log Level: {cls.LOG_LEVEL}",
        ]
        return "\n".join(lines)
