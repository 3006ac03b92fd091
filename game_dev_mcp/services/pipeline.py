"""
Creation pipeline
Runs knowledge refresh, tracker structuring, the confirmation gate and
template assembly for one game project request.

    start -> knowledge_refresh -> tracker_structuring -> confirmation
          -> cancelled
          -> template_assembly -> result_packaging -> success

tracker_structuring and template_assembly failures end in `failed`.
Knowledge refresh failures are logged and ignored. Nothing already created
in Linear or on disk is undone.
"""
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from ..constants import DEFAULT_KNOWLEDGE_TOPICS, DEV_SERVER_URL, next_step_commands
from ..decorators import PerformanceMonitor, log_execution
from ..errors import TemplateGenerationError, TrackerCreationError
from ..log_sanitizer import safe_log_error
from ..models import CreationRequest, PipelineResult, TrackerProject
from .confirmation import format_project_summary

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], Awaitable[None]]


class Stage:
    """Stage names recorded in PipelineResult.stages"""
    KNOWLEDGE_REFRESH = "knowledge_refresh"
    TRACKER_STRUCTURING = "tracker_structuring"
    CONFIRMATION = "confirmation"
    TEMPLATE_ASSEMBLY = "template_assembly"
    RESULT_PACKAGING = "result_packaging"


def generate_setup_instructions(game_name: str, project_path: str) -> str:
    """Plain-text instructions returned with a successful result"""
    return f"""Game Project Setup Complete!

Project Details:
- Name: {game_name}
- Location: {project_path}

Next Steps:

1. Navigate to your project:
   $ cd {project_path}

2. Install dependencies:
   $ npm install

3. Start development server:
   $ npm run dev

4. Open your browser:
   Navigate to {DEV_SERVER_URL}

Development Tips:
- The game follows mobile-first design principles
- All screens (Start, Game, Game Over) are pre-configured
- Confetti celebration is integrated on game completion
- Physics are powered by Rapier
- 3D graphics use React Three Fiber

Linear Integration:
- Your project board is ready in Linear
- Tasks are organized into 3 sprints
- Each task has acceptance criteria and test cases
- Update task status as you complete them

Happy game development!
"""


class CreationPipeline:
    """
    Sequences the stages of one creation request.

    The confirmation gate is the only point where the run waits on a human;
    a `False` answer ends the run as cancelled before any file is written.
    """

    def __init__(
        self,
        knowledge_service,
        tracker_service,
        template_service,
        knowledge_topics: Sequence[str] = DEFAULT_KNOWLEDGE_TOPICS
    ):
        """
        Initialize pipeline

        Args:
            knowledge_service: KnowledgeService instance
            tracker_service: TrackerService instance
            template_service: TemplateService instance
            knowledge_topics: Topics refreshed at the start of every run
        """
        self.knowledge = knowledge_service
        self.tracker = tracker_service
        self.templates = template_service
        self.knowledge_topics = list(knowledge_topics)

        self._runs = {"success": 0, "cancelled": 0, "failed": 0}

    @log_execution(level=logging.DEBUG)
    async def run(
        self,
        request: CreationRequest,
        confirmer,
        progress: Optional[ProgressCallback] = None
    ) -> PipelineResult:
        """
        Create the Linear structure and, if confirmed, the starter project.

        Args:
            request: Validated creation request
            confirmer: Object with an async confirm(summary) -> bool
            progress: Optional async callback receiving one line per stage

        Returns:
            PipelineResult with status success, cancelled or failed
        """
        stages: List[str] = []

        async def report(message: str):
            logger.info(message)
            if progress is not None:
                await progress(message)

        # Knowledge refresh (best effort)
        stages.append(Stage.KNOWLEDGE_REFRESH)
        await report("Updating knowledge base...")
        try:
            async with PerformanceMonitor(Stage.KNOWLEDGE_REFRESH):
                await self.knowledge.refresh(self.knowledge_topics)
            await report("Knowledge base updated")
        except Exception as e:
            logger.warning(safe_log_error(e, "Knowledge refresh failed, continuing"))
            await report("Failed to update knowledge base, continuing")

        # Tracker structuring
        stages.append(Stage.TRACKER_STRUCTURING)
        await report("Creating Linear project...")
        try:
            async with PerformanceMonitor(Stage.TRACKER_STRUCTURING, warn_threshold_ms=30000):
                tracker_project = await self.tracker.create_game_development_structure(
                    request.team_id,
                    request.game_name,
                    request.game_type,
                )
        except TrackerCreationError as e:
            logger.error(f"Tracker structuring failed for '{request.game_name}': {e}")
            await report("Failed to create Linear project")
            return self._finish(PipelineResult.failed(
                error=str(e),
                failed_stage=Stage.TRACKER_STRUCTURING,
                stages=stages,
                tracker_project=e.partial,
            ))

        await report(
            f"Linear project created: {tracker_project.project_name} "
            f"({len(tracker_project.sprints)} sprints, {len(tracker_project.issues)} tasks)"
        )

        # Confirmation gate
        stages.append(Stage.CONFIRMATION)
        proceed = await confirmer.confirm(format_project_summary(tracker_project))
        if not proceed:
            await report("Project creation cancelled by user")
            return self._finish(PipelineResult.cancelled(tracker_project, stages))

        # Template assembly
        stages.append(Stage.TEMPLATE_ASSEMBLY)
        await report("Generating game template...")
        try:
            async with PerformanceMonitor(Stage.TEMPLATE_ASSEMBLY, warn_threshold_ms=5000):
                generated_path = await self.templates.generate_template(
                    request.game_type,
                    request.game_name,
                    request.project_path,
                )
        except TemplateGenerationError as e:
            logger.error(f"Template assembly failed for '{request.game_name}': {e}")
            await report("Failed to generate game template")
            return self._finish(PipelineResult.failed(
                error=str(e),
                failed_stage=Stage.TEMPLATE_ASSEMBLY,
                stages=stages,
                tracker_project=tracker_project,
            ))
        await report(f"Game template generated at {generated_path}")

        # Result packaging
        stages.append(Stage.RESULT_PACKAGING)
        return self._finish(self._package(request, tracker_project, generated_path, stages))

    def _package(
        self,
        request: CreationRequest,
        tracker_project: TrackerProject,
        generated_path: str,
        stages: List[str]
    ) -> PipelineResult:
        return PipelineResult.success(
            tracker_project=tracker_project,
            project_path=generated_path,
            setup_instructions=generate_setup_instructions(request.game_name, generated_path),
            next_steps=next_step_commands(generated_path),
            stages=stages,
        )

    def _finish(self, result: PipelineResult) -> PipelineResult:
        self._runs[result.status.value] += 1
        logger.info(f"Pipeline finished with status '{result.status.value}' after stages {result.stages}")
        return result

    def get_statistics(self) -> dict:
        return {
            "runs": dict(self._runs),
            "knowledge_topics": list(self.knowledge_topics),
        }
