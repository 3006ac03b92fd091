"""
Unit tests for the creation pipeline.

Stages are replaced by mocks except in the end-to-end test, which runs
the real services against a mock Linear client and a temporary directory.
"""

import json
import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from game_dev_mcp.errors import (
    KnowledgeRefreshError,
    TemplateGenerationError,
    TrackerCreationError,
)
from game_dev_mcp.models import (
    CreatedIssue,
    CreatedSprint,
    CreationRequest,
    PipelineStatus,
    TrackerProject,
)
from game_dev_mcp.services.confirmation import StaticConfirmer
from game_dev_mcp.services.filesystem import LocalFileSystem
from game_dev_mcp.services.knowledge_service import KnowledgeService
from game_dev_mcp.services.linear_client import LinearClient
from game_dev_mcp.services.pipeline import CreationPipeline, Stage, generate_setup_instructions
from game_dev_mcp.services.template_service import TemplateService
from game_dev_mcp.services.tracker_service import TrackerService

NOW = datetime(2025, 3, 3, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def request_():
    return CreationRequest(
        game_name="Space Invaders 3D",
        game_type="arcade",
        team_id="T1",
        project_path="/games",
    )


@pytest.fixture
def tracker_project():
    return TrackerProject(
        project_id="p1",
        project_name="Space Invaders 3D - arcade Game",
        sprints=[CreatedSprint(id="c1", name="Sprint 1: Foundation & Setup")],
        issues=[CreatedIssue(id="i1", title="Project Setup & Configuration", cycle_id="c1")],
    )


def make_pipeline(tracker_project, game_dir="/games/space-invaders-3d"):
    knowledge = Mock()
    knowledge.refresh = AsyncMock(return_value={})
    tracker = Mock()
    tracker.create_game_development_structure = AsyncMock(return_value=tracker_project)
    templates = Mock()
    templates.generate_template = AsyncMock(return_value=game_dir)
    pipeline = CreationPipeline(knowledge, tracker, templates, knowledge_topics=["performance"])
    return pipeline, knowledge, tracker, templates


class TestPipelineOutcomes:
    """Test terminal states of the pipeline."""

    @pytest.mark.asyncio
    async def test_success(self, request_, tracker_project):
        """Test every stage runs in order when confirmed."""
        pipeline, knowledge, tracker, templates = make_pipeline(tracker_project)

        result = await pipeline.run(request_, StaticConfirmer(True))

        assert result.status is PipelineStatus.SUCCESS
        assert result.stages == [
            Stage.KNOWLEDGE_REFRESH,
            Stage.TRACKER_STRUCTURING,
            Stage.CONFIRMATION,
            Stage.TEMPLATE_ASSEMBLY,
            Stage.RESULT_PACKAGING,
        ]
        knowledge.refresh.assert_awaited_once_with(["performance"])
        tracker.create_game_development_structure.assert_awaited_once_with(
            "T1", "Space Invaders 3D", "arcade"
        )
        templates.generate_template.assert_awaited_once_with("arcade", "Space Invaders 3D", "/games")
        assert result.project_path == "/games/space-invaders-3d"
        assert result.next_steps == [
            "cd /games/space-invaders-3d",
            "npm install",
            "npm run dev",
        ]
        assert "Location: /games/space-invaders-3d" in result.setup_instructions

    @pytest.mark.asyncio
    async def test_cancel_writes_nothing(self, request_, tracker_project):
        """Test a declined confirmation never reaches template assembly."""
        pipeline, _, _, templates = make_pipeline(tracker_project)

        result = await pipeline.run(request_, StaticConfirmer(False))

        assert result.status is PipelineStatus.CANCELLED
        assert result.tracker_project is tracker_project
        assert Stage.TEMPLATE_ASSEMBLY not in result.stages
        templates.generate_template.assert_not_awaited()

        data = result.to_dict()
        assert data["message"] == "Project creation cancelled by user"
        assert "project_path" not in data
        assert data["linear_project"]["project"]["id"] == "p1"

    @pytest.mark.asyncio
    async def test_confirmer_sees_summary(self, request_, tracker_project):
        """Test the confirmer is asked with the project summary."""
        pipeline, _, _, _ = make_pipeline(tracker_project)
        confirmer = Mock()
        confirmer.confirm = AsyncMock(return_value=False)

        await pipeline.run(request_, confirmer)

        summary = confirmer.confirm.await_args.args[0]
        assert "Project Name: Space Invaders 3D - arcade Game" in summary
        assert "1. Sprint 1: Foundation & Setup - 1 tasks" in summary

    @pytest.mark.asyncio
    async def test_knowledge_failure_is_ignored(self, request_, tracker_project):
        """Test a failing refresh does not stop the run."""
        pipeline, knowledge, _, _ = make_pipeline(tracker_project)
        knowledge.refresh = AsyncMock(side_effect=KnowledgeRefreshError("offline"))

        result = await pipeline.run(request_, StaticConfirmer(True))

        assert result.status is PipelineStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_tracker_failure(self, request_, tracker_project):
        """Test tracker errors end the run before confirmation."""
        pipeline, _, tracker, templates = make_pipeline(tracker_project)
        tracker.create_game_development_structure = AsyncMock(
            side_effect=TrackerCreationError("Linear unavailable", partial=tracker_project)
        )
        confirmer = Mock()
        confirmer.confirm = AsyncMock(return_value=True)

        result = await pipeline.run(request_, confirmer)

        assert result.status is PipelineStatus.FAILED
        assert result.failed_stage == Stage.TRACKER_STRUCTURING
        assert result.error == "Linear unavailable"
        assert result.tracker_project is tracker_project
        confirmer.confirm.assert_not_awaited()
        templates.generate_template.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_template_failure(self, request_, tracker_project):
        """Test template errors are reported with the tracker project."""
        pipeline, _, _, templates = make_pipeline(tracker_project)
        templates.generate_template = AsyncMock(
            side_effect=TemplateGenerationError("disk full", path="/games/space-invaders-3d")
        )

        result = await pipeline.run(request_, StaticConfirmer(True))

        assert result.status is PipelineStatus.FAILED
        assert result.failed_stage == Stage.TEMPLATE_ASSEMBLY
        assert result.tracker_project is tracker_project
        assert result.to_dict()["error"] == "disk full"

    @pytest.mark.asyncio
    async def test_progress_messages(self, request_, tracker_project):
        """Test progress is reported for each stage."""
        pipeline, _, _, _ = make_pipeline(tracker_project)
        progress = AsyncMock()

        await pipeline.run(request_, StaticConfirmer(True), progress=progress)

        messages = [call.args[0] for call in progress.await_args_list]
        assert messages[0] == "Updating knowledge base..."
        assert "Creating Linear project..." in messages
        assert "Generating game template..." in messages

    @pytest.mark.asyncio
    async def test_statistics(self, request_, tracker_project):
        """Test runs are counted by status."""
        pipeline, _, _, _ = make_pipeline(tracker_project)

        await pipeline.run(request_, StaticConfirmer(True))
        await pipeline.run(request_, StaticConfirmer(False))

        assert pipeline.get_statistics()["runs"] == {"success": 1, "cancelled": 1, "failed": 0}


class TestEndToEnd:
    """Run the real services with a mock Linear client."""

    @pytest.mark.asyncio
    async def test_full_run(self, tmp_path):
        """Test Linear structure and files for an arcade game."""
        counter = {"cycle": 0, "issue": 0}

        async def create_cycle(**kwargs):
            counter["cycle"] += 1
            return {"id": f"c{counter['cycle']}", "name": kwargs["name"]}

        async def create_issue(**kwargs):
            counter["issue"] += 1
            return {"id": f"i{counter['issue']}", "title": kwargs["title"]}

        linear = Mock()
        linear.create_project = AsyncMock(return_value={"id": "p1", "name": "Space Invaders 3D - arcade Game"})
        linear.create_cycle = AsyncMock(side_effect=create_cycle)
        linear.create_issue = AsyncMock(side_effect=create_issue)

        pipeline = CreationPipeline(
            knowledge_service=KnowledgeService(clock=lambda: NOW),
            tracker_service=TrackerService(linear, clock=lambda: NOW),
            template_service=TemplateService(LocalFileSystem()),
        )
        request = CreationRequest(
            game_name="Space Invaders 3D",
            game_type="arcade",
            team_id="T1",
            project_path=str(tmp_path),
        )

        result = await pipeline.run(request, StaticConfirmer(True))

        assert result.status is PipelineStatus.SUCCESS
        project = result.tracker_project
        assert len(project.sprints) == 3
        assert [issue.cycle_id for issue in project.issues] == ["c1", "c1", "c1", "c2", "c2", "c2", "c3"]
        assert result.project_path == os.path.join(str(tmp_path), "space-invaders-3d")
        assert os.path.isfile(os.path.join(result.project_path, "src", "screens", "GameScreen.tsx"))


class TestSetupInstructions:
    """Test generate_setup_instructions."""

    def test_contents(self):
        """Test name, location and dev server URL."""
        text = generate_setup_instructions("Pong", "/games/pong")

        assert "- Name: Pong" in text
        assert "$ cd /games/pong" in text
        assert "http://localhost:5173" in text


class TestFaultsBecomeFailedResults:
    """Faults outside the typed error hierarchy still end in a result."""

    @pytest.mark.asyncio
    async def test_knowledge_failure_then_cancel(self, request_, tracker_project):
        """Test a failing refresh followed by a declined confirmation is cancelled."""
        pipeline, knowledge, _, templates = make_pipeline(tracker_project)
        knowledge.refresh = AsyncMock(side_effect=RuntimeError("knowledge store unavailable"))

        result = await pipeline.run(request_, StaticConfirmer(False))

        assert result.status is PipelineStatus.CANCELLED
        assert result.stages == [
            Stage.KNOWLEDGE_REFRESH,
            Stage.TRACKER_STRUCTURING,
            Stage.CONFIRMATION,
        ]
        templates.generate_template.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_null_cycle_from_linear(self, tmp_path):
        """Test a success reply without a cycle fails tracker structuring."""
        def handler(request):
            query = json.loads(request.content)["query"]
            if "projectCreate" in query:
                return httpx.Response(200, json={"data": {"projectCreate": {
                    "success": True,
                    "project": {"id": "p1", "name": "Pong - arcade Game"},
                }}})
            return httpx.Response(200, json={"data": {"cycleCreate": {"success": True, "cycle": None}}})

        auth = Mock()
        auth.get_client.return_value = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        templates = Mock()
        templates.generate_template = AsyncMock()
        pipeline = CreationPipeline(
            knowledge_service=KnowledgeService(clock=lambda: NOW),
            tracker_service=TrackerService(LinearClient(auth), clock=lambda: NOW),
            template_service=templates,
        )
        request = CreationRequest(game_name="Pong", game_type="arcade", team_id="T1", project_path=str(tmp_path))

        result = await pipeline.run(request, StaticConfirmer(True))

        assert result.status is PipelineStatus.FAILED
        assert result.failed_stage == Stage.TRACKER_STRUCTURING
        assert result.tracker_project.project_id == "p1"
        assert result.tracker_project.sprints == []
        templates.generate_template.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unencodable_game_name(self, tmp_path, tracker_project):
        """Test a name the filesystem rejects fails template assembly."""
        tracker = Mock()
        tracker.create_game_development_structure = AsyncMock(return_value=tracker_project)
        knowledge = Mock()
        knowledge.refresh = AsyncMock(return_value={})
        pipeline = CreationPipeline(knowledge, tracker, TemplateService(LocalFileSystem()))
        request = CreationRequest(
            game_name="Space \ud800 Game",
            game_type="arcade",
            team_id="T1",
            project_path=str(tmp_path),
        )

        result = await pipeline.run(request, StaticConfirmer(True))

        assert result.status is PipelineStatus.FAILED
        assert result.failed_stage == Stage.TEMPLATE_ASSEMBLY
        assert result.tracker_project is tracker_project
        assert json.loads(json.dumps(result.to_dict()))["status"] == "failed"
