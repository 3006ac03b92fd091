"""
Data models for the game development MCP server
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any, Mapping, Tuple


@dataclass(frozen=True)
class CreationRequest:
    """A validated request to create a game project"""
    game_name: str
    game_type: str
    team_id: str
    project_path: str


@dataclass(frozen=True)
class TaskItem:
    """One unit of planned work; its position in the plan picks its sprint"""
    title: str
    description: str
    priority: int


@dataclass(frozen=True)
class Sprint:
    """A planned sprint window, before it exists in the tracker"""
    name: str
    start_date: datetime
    end_date: datetime
    team_id: str


@dataclass
class CreatedSprint:
    """A sprint (Linear cycle) that exists in the tracker"""
    id: str
    name: str
    starts_at: Optional[str] = None
    ends_at: Optional[str] = None
    number: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'starts_at': self.starts_at,
            'ends_at': self.ends_at,
            'number': self.number,
        }


@dataclass
class CreatedIssue:
    """An issue that exists in the tracker, bound to a sprint or to none"""
    id: str
    title: str
    priority: Optional[int] = None
    cycle_id: Optional[str] = None
    identifier: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'identifier': self.identifier,
            'title': self.title,
            'priority': self.priority,
            'cycle_id': self.cycle_id,
            'url': self.url,
        }


@dataclass
class TrackerProject:
    """The project, sprints and issues created in the tracker for one game"""
    project_id: str
    project_name: str
    sprints: List[CreatedSprint] = field(default_factory=list)
    issues: List[CreatedIssue] = field(default_factory=list)
    url: Optional[str] = None

    def is_well_formed(self) -> bool:
        """
        Check that every sprint has an id and every issue points at one of
        this project's sprints (or at none).
        """
        if not all(sprint.id for sprint in self.sprints):
            return False
        sprint_ids = {sprint.id for sprint in self.sprints}
        return all(
            issue.cycle_id is None or issue.cycle_id in sprint_ids
            for issue in self.issues
        )

    def issues_for_sprint(self, sprint_id: str) -> List[CreatedIssue]:
        """Issues bound to the given sprint, in creation order"""
        return [issue for issue in self.issues if issue.cycle_id == sprint_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'project': {
                'id': self.project_id,
                'name': self.project_name,
                'url': self.url,
            },
            'sprints': [sprint.to_dict() for sprint in self.sprints],
            'issues': [issue.to_dict() for issue in self.issues],
        }


class PipelineStatus(str, Enum):
    """Terminal states of the creation pipeline"""
    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class PipelineResult:
    """
    Outcome of one creation pipeline run.

    success carries the tracker project, generated path, setup instructions
    and next steps; cancelled carries the tracker project only; failed carries
    an error (plus the tracker project if it had already been created).
    """
    status: PipelineStatus
    message: str
    tracker_project: Optional[TrackerProject] = None
    project_path: Optional[str] = None
    setup_instructions: Optional[str] = None
    next_steps: List[str] = field(default_factory=list)
    error: Optional[str] = None
    failed_stage: Optional[str] = None
    stages: List[str] = field(default_factory=list)

    @classmethod
    def success(
        cls,
        tracker_project: TrackerProject,
        project_path: str,
        setup_instructions: str,
        next_steps: List[str],
        stages: List[str]
    ) -> "PipelineResult":
        return cls(
            status=PipelineStatus.SUCCESS,
            message="Game project created successfully!",
            tracker_project=tracker_project,
            project_path=project_path,
            setup_instructions=setup_instructions,
            next_steps=list(next_steps),
            stages=list(stages),
        )

    @classmethod
    def cancelled(cls, tracker_project: TrackerProject, stages: List[str]) -> "PipelineResult":
        return cls(
            status=PipelineStatus.CANCELLED,
            message="Project creation cancelled by user",
            tracker_project=tracker_project,
            stages=list(stages),
        )

    @classmethod
    def failed(
        cls,
        error: str,
        failed_stage: str,
        stages: List[str],
        tracker_project: Optional[TrackerProject] = None
    ) -> "PipelineResult":
        return cls(
            status=PipelineStatus.FAILED,
            message=f"Game project creation failed during {failed_stage}",
            tracker_project=tracker_project,
            error=error,
            failed_stage=failed_stage,
            stages=list(stages),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize only the fields that belong to this status"""
        result: Dict[str, Any] = {
            'status': self.status.value,
            'message': self.message,
        }
        if self.tracker_project is not None:
            result['linear_project'] = self.tracker_project.to_dict()

        if self.status is PipelineStatus.SUCCESS:
            result['project_path'] = self.project_path
            result['setup_instructions'] = self.setup_instructions
            result['next_steps'] = self.next_steps
        elif self.status is PipelineStatus.FAILED:
            result['error'] = self.error
            result['failed_stage'] = self.failed_stage

        result['stages'] = self.stages
        return result


@dataclass(frozen=True)
class TemplateBundle:
    """Everything the catalog knows about one game type"""
    game_type: str
    name: str
    description: str
    features: Tuple[str, ...]
    difficulty: str
    scaffold_components: Tuple[str, ...]
    planned_components: Tuple[str, ...]
    hooks: Tuple[str, ...]
    assets: Tuple[str, ...]
    input_hook: str

    def to_listing(self) -> Dict[str, Any]:
        """Public catalog entry"""
        return {
            'name': self.name,
            'description': self.description,
            'features': list(self.features),
            'difficulty': self.difficulty,
        }


@dataclass(frozen=True)
class TopicUpdate:
    """Result of refreshing one knowledge topic"""
    topic: str
    updated_at: datetime
    source: str
    improvements: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'updated': self.updated_at.isoformat(),
            'source': self.source,
            'improvements': list(self.improvements),
        }


@dataclass(frozen=True)
class KnowledgeBase:
    """
    Versioned snapshot of game development knowledge.

    Never mutated; a refresh produces a new snapshot.
    """
    technologies: Mapping[str, Mapping[str, Any]]
    game_patterns: Mapping[str, Tuple[str, ...]]
    last_updated: datetime
    topics: Mapping[str, TopicUpdate] = field(default_factory=dict)
    version: int = 1
