"""
Constants for game project creation.

Defines the closed set of game types, the sprint plan shape, Linear
priority values and the fixed layout of a generated project.
"""

from enum import Enum
from typing import List, Optional, Tuple


# ============================================================================
# Game Types
# ============================================================================

class GameType(str, Enum):
    """Game types that have a dedicated template bundle."""

    PLATFORMER = "platformer"
    PUZZLE = "puzzle"
    ENDLESS_RUNNER = "endless-runner"
    PHYSICS_BASED = "physics-based"
    ARCADE = "arcade"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["GameType"]:
        """
        Resolve a raw game type string.

        Args:
            value: Game type as supplied by the caller

        Returns:
            Matching GameType, or None if the value is not a known type
        """
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def values(cls) -> List[str]:
        """All game type values in declaration order."""
        return [member.value for member in cls]


# Bundle used whenever a game type is not recognized
DEFAULT_GAME_TYPE = GameType.ARCADE

# Input hook used whenever a game type is not recognized
DEFAULT_INPUT_HOOK = "useGameControls"


# ============================================================================
# Sprint Plan
# ============================================================================

class SprintPlan:
    """Shape of the sprint plan created for every game project."""

    # Number of sprints created per project
    SPRINT_COUNT = 3

    # Tasks assigned to each sprint before moving to the next one
    BUCKET_SIZE = 3

    # Length of each sprint window
    SPRINT_LENGTH_DAYS = 7

    # Sprint names in chronological order
    SPRINT_NAMES: Tuple[str, ...] = (
        "Sprint 1: Foundation & Setup",
        "Sprint 2: Core Gameplay",
        "Sprint 3: Polish & Optimization",
    )


# ============================================================================
# Linear Values
# ============================================================================

class Priority:
    """Linear issue priority values (1 is highest, 0 means no priority)."""

    NONE = 0
    URGENT = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4

    # Used when a task does not carry its own priority
    DEFAULT = MEDIUM

    ALLOWED = {NONE, URGENT, HIGH, MEDIUM, LOW}


class ProjectStates:
    """Linear project states."""

    PLANNED = "planned"
    STARTED = "started"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELED = "canceled"


class RequestDefaults:
    """Defaults applied to every Linear API call."""

    # HTTP client timeout of one request
    TIMEOUT_SECONDS = 30
    # Budget of one attempt; must exceed TIMEOUT_SECONDS
    ATTEMPT_TIMEOUT_SECONDS = 45
    MAX_RETRIES = 3
    BASE_DELAY_SECONDS = 1.0

    # Linear rejects project descriptions longer than this
    PROJECT_DESCRIPTION_MAX_LENGTH = 255


LINEAR_API_URL = "https://api.linear.app/graphql"


# ============================================================================
# Generated Project Layout
# ============================================================================

# Directories created inside the game directory, relative to its root
PROJECT_SUBDIRECTORIES: Tuple[str, ...] = (
    "src",
    "src/components",
    "src/screens",
    "src/hooks",
    "src/utils",
    "src/assets",
    "public",
)

# Commands run after generation, in order; the first one is prefixed with `cd`
INSTALL_COMMAND = "npm install"
DEV_SERVER_COMMAND = "npm run dev"

DEV_SERVER_URL = "http://localhost:5173"


# ============================================================================
# Knowledge Base
# ============================================================================

DEFAULT_KNOWLEDGE_TOPICS: Tuple[str, ...] = (
    "react-three-fiber",
    "game-design",
    "performance",
)

MAX_KNOWLEDGE_TOPICS = 20


# ============================================================================
# Helper Functions
# ============================================================================

def next_step_commands(project_path: str) -> List[str]:
    """
    Build the shell commands that start a freshly generated project.

    Args:
        project_path: Generated project directory

    Returns:
        Commands in the order they should be run
    """
    return [
        f"cd {project_path}",
        INSTALL_COMMAND,
        DEV_SERVER_COMMAND,
    ]
