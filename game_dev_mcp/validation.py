"""
Input validation for game project tool arguments.

Normalizes caller input before it reaches the pipeline and rejects values
that cannot be turned into a Linear request or a directory on disk.
"""

import logging
import os
import re
from typing import Any, List, Optional

from .constants import GameType, Priority, MAX_KNOWLEDGE_TOPICS

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised when input validation fails."""
    pass


class GameNameValidator:
    """Validator for game names."""

    MAX_LENGTH = 80

    @staticmethod
    def validate(game_name: str) -> str:
        """
        Validate a game name.

        Args:
            game_name: The game name to validate

        Returns:
            The game name with surrounding whitespace removed

        Raises:
            ValidationError: If the name is empty, too long or contains path separators
        """
        if not isinstance(game_name, str) or not game_name.strip():
            raise ValidationError("Game name cannot be empty")

        game_name = game_name.strip()

        if len(game_name) > GameNameValidator.MAX_LENGTH:
            raise ValidationError(
                f"Game name too long: {len(game_name)} characters "
                f"(max: {GameNameValidator.MAX_LENGTH})"
            )

        # The name becomes a directory name
        if '/' in game_name or '\\' in game_name or '\x00' in game_name:
            raise ValidationError(
                f"Invalid game name: '{game_name}'. Path separators are not allowed."
            )

        if game_name in ('.', '..'):
            raise ValidationError(f"Invalid game name: '{game_name}'")

        return game_name


class GameTypeValidator:
    """Validator for game types."""

    @staticmethod
    def validate(game_type: str) -> str:
        """
        Normalize a game type.

        Unknown game types are accepted: they fall back to the arcade template
        and get no type-specific tasks.

        Args:
            game_type: The game type to validate

        Returns:
            The known game type value, or the stripped input if it is unknown

        Raises:
            ValidationError: If the game type is empty
        """
        if not isinstance(game_type, str) or not game_type.strip():
            raise ValidationError("Game type cannot be empty")

        parsed = GameType.parse(game_type)
        if parsed is None:
            logger.warning(
                f"Unknown game type '{game_type}'. "
                f"Known types: {', '.join(GameType.values())}. Falling back to defaults."
            )
            return game_type.strip()

        return parsed.value


class TeamIdValidator:
    """Validator for Linear team identifiers."""

    # UUIDs and team keys ("ENG") are both accepted by Linear
    TEAM_ID_PATTERN = re.compile(r'^[A-Za-z0-9][A-Za-z0-9_-]*$')

    @staticmethod
    def validate(team_id: str) -> str:
        """
        Validate a Linear team ID.

        Args:
            team_id: The team ID to validate

        Returns:
            The stripped team ID

        Raises:
            ValidationError: If the team ID is empty or malformed
        """
        if not isinstance(team_id, str) or not team_id.strip():
            raise ValidationError("Team ID cannot be empty")

        team_id = team_id.strip()

        if not TeamIdValidator.TEAM_ID_PATTERN.match(team_id):
            raise ValidationError(
                f"Invalid team ID: '{team_id}'. "
                "Use the Linear team UUID or team key."
            )

        return team_id


class ProjectPathValidator:
    """Validator for the directory that receives the generated project."""

    @staticmethod
    def validate(project_path: str) -> str:
        """
        Validate and normalize a project path.

        Args:
            project_path: Parent directory for the generated game

        Returns:
            Absolute path with `~` expanded

        Raises:
            ValidationError: If the path is empty, contains null bytes or
                points at an existing file
        """
        if not isinstance(project_path, str) or not project_path.strip():
            raise ValidationError("Project path cannot be empty")

        if '\x00' in project_path:
            raise ValidationError("Project path cannot contain null bytes")

        path = os.path.abspath(os.path.expanduser(project_path.strip()))

        if os.path.isfile(path):
            raise ValidationError(
                f"Invalid project path: '{path}' is a file, not a directory"
            )

        return path


class TopicsValidator:
    """Validator for knowledge refresh topics."""

    @staticmethod
    def validate(topics: Any) -> List[str]:
        """
        Validate a list of knowledge topics.

        Args:
            topics: Topics to refresh

        Returns:
            Stripped topics with duplicates removed, original order kept

        Raises:
            ValidationError: If topics is not a non-empty list of non-empty strings
        """
        if isinstance(topics, str) or not isinstance(topics, (list, tuple)):
            raise ValidationError("Topics must be a list of strings")

        if not topics:
            raise ValidationError("At least one topic is required")

        if len(topics) > MAX_KNOWLEDGE_TOPICS:
            raise ValidationError(
                f"Too many topics: {len(topics)} (max: {MAX_KNOWLEDGE_TOPICS})"
            )

        cleaned: List[str] = []
        for topic in topics:
            if not isinstance(topic, str) or not topic.strip():
                raise ValidationError(f"Invalid topic: {topic!r}")
            topic = topic.strip()
            if topic not in cleaned:
                cleaned.append(topic)

        return cleaned


class PriorityValidator:
    """Validator for Linear issue priority."""

    @staticmethod
    def validate(priority: int) -> int:
        """
        Validate issue priority.

        Args:
            priority: The priority to validate (0-4)

        Returns:
            The validated priority (unchanged)

        Raises:
            ValidationError: If priority is not 0-4
        """
        if isinstance(priority, bool) or priority not in Priority.ALLOWED:
            raise ValidationError(
                f"Invalid priority: {priority}. "
                f"Priority must be 0-4 (where 1 is highest and 0 is none)"
            )

        return priority


# Convenience functions for common validations

def validate_game_name(game_name: str) -> str:
    """Validate game name."""
    return GameNameValidator.validate(game_name)


def validate_game_type(game_type: str) -> str:
    """Normalize game type."""
    return GameTypeValidator.validate(game_type)


def validate_team_id(team_id: str) -> str:
    """Validate Linear team ID."""
    return TeamIdValidator.validate(team_id)


def validate_project_path(project_path: str) -> str:
    """Validate and normalize project path."""
    return ProjectPathValidator.validate(project_path)


def validate_topics(topics: Any) -> List[str]:
    """Validate knowledge topics."""
    return TopicsValidator.validate(topics)


def validate_priority(priority: Optional[int]) -> Optional[int]:
    """Validate priority if provided."""
    return PriorityValidator.validate(priority) if priority is not None else None
