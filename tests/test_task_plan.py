"""
Unit tests for task plan generation.
"""

import pytest
from game_dev_mcp.constants import GameType
from game_dev_mcp.services.task_plan import (
    COMMON_TASKS,
    generate_game_tasks,
    get_game_specific_tasks,
    generate_project_name,
    generate_project_description,
    generate_project_summary,
)


class TestGenerateGameTasks:
    """Test generate_game_tasks."""

    def test_common_tasks_first(self):
        """Test the five common tasks lead the plan in fixed order."""
        tasks = generate_game_tasks("arcade")

        assert [t.title for t in tasks[:5]] == [
            "Project Setup & Configuration",
            "Create Start Screen",
            "Implement Game Over Screen",
            "Mobile Optimization",
            "Performance Optimization",
        ]
        assert [t.priority for t in tasks[:5]] == [1, 2, 3, 2, 3]

    @pytest.mark.parametrize("game_type,titles", [
        ("platformer", ["Create Player Character", "Design Level System"]),
        ("puzzle", ["Create Puzzle Grid System", "Implement Puzzle Logic"]),
        ("endless-runner", ["Create Runner Character", "Implement Obstacle System"]),
        ("physics-based", ["Setup Physics World", "Create Interactive Objects"]),
        ("arcade", ["Create Game Controls", "Implement Scoring System"]),
    ])
    def test_type_specific_tasks_follow(self, game_type, titles):
        """Test each type appends its two tasks."""
        tasks = generate_game_tasks(game_type)

        assert len(tasks) == 7
        assert [t.title for t in tasks[5:]] == titles
        assert [t.priority for t in tasks[5:]] == [1, 2]

    def test_unknown_type_has_only_common_tasks(self):
        """Test unknown types get no type-specific tasks."""
        assert get_game_specific_tasks("racing") == []
        assert generate_game_tasks("racing") == COMMON_TASKS

    def test_accepts_enum(self):
        """Test GameType members work like their values."""
        assert generate_game_tasks(GameType.PUZZLE) == generate_game_tasks("puzzle")

    def test_descriptions_have_acceptance_criteria(self):
        """Test every task carries acceptance criteria and test cases."""
        for game_type in GameType:
            for task in generate_game_tasks(game_type):
                assert "### Acceptance Criteria" in task.description
                assert "### Test Cases" in task.description

    def test_returned_list_is_a_copy(self):
        """Test callers cannot change the shared plan."""
        tasks = generate_game_tasks("arcade")
        tasks.clear()
        assert len(generate_game_tasks("arcade")) == 7


class TestProjectText:
    """Test project name and description."""

    def test_project_name(self):
        """Test the Linear project name."""
        assert generate_project_name("Space Invaders 3D", "arcade") == "Space Invaders 3D - arcade Game"

    def test_project_description(self):
        """Test the markdown overview ends with the game type."""
        description = generate_project_description("Space Invaders 3D", "arcade")

        assert description.startswith("## Space Invaders 3D")
        assert "A arcade game built with React Three Fiber" in description
        assert "### Tech Stack" in description
        assert description.endswith("\n\nGame Type: arcade")

    def test_summary_fits_limit(self):
        """Test the short description is truncated to the limit."""
        summary = generate_project_summary("x" * 300, "arcade", 255)

        assert len(summary) <= 255
        assert summary.endswith("...")

    def test_summary_short_name(self):
        """Test short summaries are unchanged."""
        assert generate_project_summary("Pong", "arcade", 255) == (
            "A arcade game built with React Three Fiber: Pong"
        )
