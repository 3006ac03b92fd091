"""
Unit tests for tracker structuring.

The Linear client is an AsyncMock; calls are recorded in order.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest
from game_dev_mcp.errors import TrackerCreationError, TransientError, BadRequestError
from game_dev_mcp.models import CreatedIssue, CreatedSprint, TrackerProject
from game_dev_mcp.services.tracker_service import TrackerService, summarize_sprints

NOW = datetime(2025, 3, 3, 9, 30, tzinfo=timezone.utc)


def make_linear(fail_issue_at=None):
    """Mock LinearClient that numbers created entities"""
    linear = Mock()
    calls = []

    async def create_project(**kwargs):
        calls.append(("project", kwargs))
        return {"id": "p1", "name": kwargs["name"], "url": "https://linear.app/p1"}

    async def create_cycle(**kwargs):
        calls.append(("cycle", kwargs))
        number = sum(1 for kind, _ in calls if kind == "cycle")
        return {"id": f"c{number}", "name": kwargs["name"], "number": number}

    async def create_issue(**kwargs):
        calls.append(("issue", kwargs))
        number = sum(1 for kind, _ in calls if kind == "issue")
        if fail_issue_at is not None and number == fail_issue_at:
            raise TransientError(status_code=503)
        return {"id": f"i{number}", "identifier": f"GAME-{number}", "title": kwargs["title"]}

    linear.create_project = AsyncMock(side_effect=create_project)
    linear.create_cycle = AsyncMock(side_effect=create_cycle)
    linear.create_issue = AsyncMock(side_effect=create_issue)
    return linear, calls


class TestCreateGameDevelopmentStructure:
    """Test create_game_development_structure."""

    @pytest.mark.asyncio
    async def test_creates_project_sprints_then_issues(self):
        """Test one project, three sprints, seven issues in that order."""
        linear, calls = make_linear()
        service = TrackerService(linear, clock=lambda: NOW)

        project = await service.create_game_development_structure("T1", "Space Invaders 3D", "arcade")

        kinds = [kind for kind, _ in calls]
        assert kinds == ["project"] + ["cycle"] * 3 + ["issue"] * 7
        assert project.project_id == "p1"
        assert project.project_name == "Space Invaders 3D - arcade Game"
        assert [s.id for s in project.sprints] == ["c1", "c2", "c3"]
        assert len(project.issues) == 7
        assert project.is_well_formed()

    @pytest.mark.asyncio
    async def test_issues_bound_by_position(self):
        """Test tasks 0-2, 3-5 and 6 go to sprints 1, 2 and 3."""
        linear, _ = make_linear()
        service = TrackerService(linear, clock=lambda: NOW)

        project = await service.create_game_development_structure("T1", "Pong", "arcade")

        assert [i.cycle_id for i in project.issues] == ["c1", "c1", "c1", "c2", "c2", "c2", "c3"]
        sent_cycles = [call.kwargs["cycle_id"] for call in linear.create_issue.await_args_list]
        assert sent_cycles == ["c1", "c1", "c1", "c2", "c2", "c2", "c3"]

    @pytest.mark.asyncio
    async def test_request_contents(self):
        """Test project and sprint arguments."""
        linear, calls = make_linear()
        service = TrackerService(linear, clock=lambda: NOW)

        await service.create_game_development_structure("T1", "Pong", "arcade")

        project_kwargs = calls[0][1]
        assert project_kwargs["team_id"] == "T1"
        assert len(project_kwargs["description"]) <= 255
        assert project_kwargs["content"].endswith("Game Type: arcade")

        first_cycle = calls[1][1]
        assert first_cycle["starts_at"] == "2025-03-03T09:30:00.000Z"
        assert first_cycle["ends_at"] == "2025-03-10T09:30:00.000Z"

        issue_kwargs = calls[4][1]
        assert issue_kwargs["project_id"] == "p1"
        assert issue_kwargs["priority"] == 1
        assert issue_kwargs["label_ids"] == []

    @pytest.mark.asyncio
    async def test_unknown_type_creates_common_tasks_only(self):
        """Test five issues for an unknown game type."""
        linear, _ = make_linear()
        service = TrackerService(linear, clock=lambda: NOW)

        project = await service.create_game_development_structure("T1", "Kart", "racing")

        assert len(project.issues) == 5
        assert [i.cycle_id for i in project.issues] == ["c1", "c1", "c1", "c2", "c2"]
        assert project.project_name == "Kart - racing Game"

    @pytest.mark.asyncio
    async def test_project_failure(self):
        """Test nothing else is attempted when the project fails."""
        linear, _ = make_linear()
        linear.create_project = AsyncMock(side_effect=BadRequestError(message="teamId invalid"))
        service = TrackerService(linear, clock=lambda: NOW)

        with pytest.raises(TrackerCreationError) as exc_info:
            await service.create_game_development_structure("T1", "Pong", "arcade")

        assert exc_info.value.partial is None
        linear.create_cycle.assert_not_awaited()
        assert service.get_statistics()["structures_failed"] == 1

    @pytest.mark.asyncio
    async def test_issue_failure_keeps_partial(self):
        """Test the partial project lists what was created before the failure."""
        linear, _ = make_linear(fail_issue_at=5)
        service = TrackerService(linear, clock=lambda: NOW)

        with pytest.raises(TrackerCreationError) as exc_info:
            await service.create_game_development_structure("T1", "Pong", "arcade")

        partial = exc_info.value.partial
        assert len(partial.sprints) == 3
        assert len(partial.issues) == 4
        assert isinstance(exc_info.value.original_error, TransientError)

    @pytest.mark.asyncio
    async def test_sprint_failure_keeps_created_sprints(self):
        """Test a failing sprint leaves earlier sprints in the partial project."""
        linear, _ = make_linear()
        cycles = [
            {"id": "c1", "name": "Sprint 1: Foundation & Setup"},
            BadRequestError(message="Cycle dates overlap"),
        ]
        linear.create_cycle = AsyncMock(side_effect=cycles)
        service = TrackerService(linear, clock=lambda: NOW)

        with pytest.raises(TrackerCreationError) as exc_info:
            await service.create_game_development_structure("T1", "Pong", "arcade")

        partial = exc_info.value.partial
        assert partial.project_id == "p1"
        assert [s.id for s in partial.sprints] == ["c1"]
        assert partial.issues == []
        linear.create_issue.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_fault_is_wrapped(self):
        """Test faults outside the Linear error hierarchy still keep the partial project."""
        linear, _ = make_linear()
        linear.create_cycle = AsyncMock(return_value=None)
        service = TrackerService(linear, clock=lambda: NOW)

        with pytest.raises(TrackerCreationError) as exc_info:
            await service.create_game_development_structure("T1", "Pong", "arcade")

        assert isinstance(exc_info.value.original_error, TypeError)
        assert exc_info.value.partial.sprints == []

    @pytest.mark.asyncio
    async def test_project_without_id_is_wrapped(self):
        """Test a project reply without an id fails with no partial project."""
        linear, _ = make_linear()
        linear.create_project = AsyncMock(return_value={"name": "Pong - arcade Game"})
        service = TrackerService(linear, clock=lambda: NOW)

        with pytest.raises(TrackerCreationError) as exc_info:
            await service.create_game_development_structure("T1", "Pong", "arcade")

        assert exc_info.value.partial is None
        linear.create_cycle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_statistics(self):
        """Test success counter."""
        linear, _ = make_linear()
        service = TrackerService(linear, clock=lambda: NOW)

        await service.create_game_development_structure("T1", "Pong", "puzzle")

        assert service.get_statistics() == {"structures_created": 1, "structures_failed": 0}


class TestSummarizeSprints:
    """Test summarize_sprints."""

    def test_lines(self):
        """Test one line per sprint with its task count."""
        project = TrackerProject(
            project_id="p1",
            project_name="Pong - arcade Game",
            sprints=[CreatedSprint(id="c1", name="Sprint 1"), CreatedSprint(id="c2", name="Sprint 2")],
            issues=[
                CreatedIssue(id="i1", title="a", cycle_id="c1"),
                CreatedIssue(id="i2", title="b", cycle_id="c1"),
                CreatedIssue(id="i3", title="c", cycle_id="c2"),
            ],
        )

        assert summarize_sprints(project) == ["1. Sprint 1 - 2 tasks", "2. Sprint 2 - 1 tasks"]
