"""
Tracker structuring service
Materializes a game's project, sprints and issues in Linear
"""
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..constants import RequestDefaults
from ..errors import TrackerCreationError
from ..log_sanitizer import safe_log_error
from ..models import CreatedIssue, CreatedSprint, TrackerProject
from .sprint_planner import pair_with_sprints, plan_sprints, to_iso
from .task_plan import (
    generate_game_tasks,
    generate_project_description,
    generate_project_name,
    generate_project_summary,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TrackerService:
    """
    Creates the Linear structure for a game.

    Calls are made one at a time: the project, then every sprint in order,
    then every issue in task order. Nothing is rolled back on failure.
    """

    def __init__(self, linear_client, clock: Callable[[], datetime] = _utc_now):
        """
        Initialize tracker service

        Args:
            linear_client: LinearClient instance
            clock: Returns the start of the first sprint (injectable for tests)
        """
        self.linear = linear_client
        self.clock = clock
        self._structures_created = 0
        self._structures_failed = 0

    async def create_game_development_structure(
        self,
        team_id: str,
        game_name: str,
        game_type: str
    ) -> TrackerProject:
        """
        Create the project, its three sprints and one issue per planned task.

        Args:
            team_id: Linear team ID
            game_name: Name of the game
            game_type: Game type (unknown types get only the common tasks)

        Returns:
            The created TrackerProject

        Raises:
            TrackerCreationError: If the project, a sprint or an issue could not
                be created. `partial` holds whatever was created before.
        """
        project_name = generate_project_name(game_name, game_type)

        try:
            project = await self.linear.create_project(
                team_id=team_id,
                name=project_name,
                description=generate_project_summary(
                    game_name, game_type, RequestDefaults.PROJECT_DESCRIPTION_MAX_LENGTH
                ),
                content=generate_project_description(game_name, game_type),
            )
            tracker_project = TrackerProject(
                project_id=project["id"],
                project_name=project.get("name") or project_name,
                url=project.get("url"),
            )
        except Exception as e:
            self._structures_failed += 1
            logger.error(safe_log_error(e, f"Creating project '{project_name}'"))
            raise TrackerCreationError(
                f"Failed to create Linear project '{project_name}': {e}",
                original_error=e,
            )

        try:
            await self._create_sprints(tracker_project, team_id)
            await self._create_issues(tracker_project, team_id, game_type)
        except Exception as e:
            self._structures_failed += 1
            logger.error(
                f"Linear structure for '{project_name}' left partial: "
                f"{len(tracker_project.sprints)} sprints, {len(tracker_project.issues)} issues. "
                + safe_log_error(e, "cause")
            )
            raise TrackerCreationError(
                f"Failed to build Linear structure for '{project_name}': {e}",
                original_error=e,
                partial=tracker_project,
            )

        self._structures_created += 1
        logger.info(
            f"Linear structure ready for '{project_name}': "
            f"{len(tracker_project.sprints)} sprints, {len(tracker_project.issues)} issues"
        )
        return tracker_project

    async def _create_sprints(self, tracker_project: TrackerProject, team_id: str):
        for sprint in plan_sprints(team_id, self.clock()):
            cycle = await self.linear.create_cycle(
                team_id=sprint.team_id,
                name=sprint.name,
                starts_at=to_iso(sprint.start_date),
                ends_at=to_iso(sprint.end_date),
            )
            tracker_project.sprints.append(CreatedSprint(
                id=cycle["id"],
                name=cycle.get("name") or sprint.name,
                starts_at=cycle.get("startsAt"),
                ends_at=cycle.get("endsAt"),
                number=cycle.get("number"),
            ))

    async def _create_issues(self, tracker_project: TrackerProject, team_id: str, game_type: str):
        tasks = generate_game_tasks(game_type)
        for task, sprint in pair_with_sprints(tasks, tracker_project.sprints):
            cycle_id: Optional[str] = sprint.id if sprint else None
            issue = await self.linear.create_issue(
                team_id=team_id,
                title=task.title,
                description=task.description,
                project_id=tracker_project.project_id,
                cycle_id=cycle_id,
                priority=task.priority,
                label_ids=[],
            )
            tracker_project.issues.append(CreatedIssue(
                id=issue["id"],
                title=issue.get("title") or task.title,
                priority=issue.get("priority", task.priority),
                cycle_id=cycle_id,
                identifier=issue.get("identifier"),
                url=issue.get("url"),
            ))

    def get_statistics(self) -> dict:
        """Counters for monitoring"""
        return {
            "structures_created": self._structures_created,
            "structures_failed": self._structures_failed,
        }


def summarize_sprints(tracker_project: TrackerProject) -> List[str]:
    """One line per sprint: `<n>. <name> - <k> tasks`"""
    return [
        f"{index}. {sprint.name} - {len(tracker_project.issues_for_sprint(sprint.id))} tasks"
        for index, sprint in enumerate(tracker_project.sprints, start=1)
    ]
