"""
Linear GraphQL client
Creates projects, cycles (sprints) and issues
"""
import logging
from typing import List, Dict, Any, Optional

from ..constants import LINEAR_API_URL, ProjectStates, Priority, RequestDefaults
from ..decorators import linear_operation
from ..errors import BadRequestError, LinearAPIError, map_graphql_error
from ..validation import ValidationError, validate_priority

logger = logging.getLogger(__name__)


PROJECT_CREATE = """
mutation ProjectCreate($input: ProjectCreateInput!) {
  projectCreate(input: $input) {
    success
    project { id name url state }
  }
}
"""

CYCLE_CREATE = """
mutation CycleCreate($input: CycleCreateInput!) {
  cycleCreate(input: $input) {
    success
    cycle { id name number startsAt endsAt }
  }
}
"""

ISSUE_CREATE = """
mutation IssueCreate($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue { id identifier title priority url cycle { id } }
  }
}
"""


class LinearClient:
    """Thin wrapper over the three Linear mutations the project builder needs"""

    def __init__(self, auth, api_url: str = LINEAR_API_URL):
        """
        Initialize Linear client

        Args:
            auth: LinearAuth instance
            api_url: Linear GraphQL endpoint
        """
        self.auth = auth
        self.api_url = api_url
        self._request_count = 0

    @property
    def client(self):
        """Shared HTTP client from the auth handler"""
        return self.auth.get_client()

    async def _execute(
        self,
        query: str,
        variables: Dict[str, Any],
        payload_key: str,
        entity_key: str
    ) -> Dict[str, Any]:
        """
        Run a mutation and return the entity it created.

        Raises:
            LinearAPIError: On GraphQL errors, a payload without success, or
                a payload missing the created entity
        """
        self._request_count += 1
        response = await self.client.post(
            self.api_url,
            json={"query": query, "variables": variables}
        )
        response.raise_for_status()
        body = response.json()

        errors = body.get("errors")
        if errors:
            raise map_graphql_error(errors[0])

        payload = (body.get("data") or {}).get(payload_key)
        if not payload or not payload.get("success"):
            raise LinearAPIError(message=f"Linear reported {payload_key} as unsuccessful")

        entity = payload.get(entity_key)
        if not isinstance(entity, dict) or not entity.get("id"):
            raise LinearAPIError(message=f"Linear returned {payload_key} without a {entity_key} id")

        return entity

    @linear_operation(
        timeout_seconds=RequestDefaults.ATTEMPT_TIMEOUT_SECONDS,
        max_retries=RequestDefaults.MAX_RETRIES,
        base_delay=RequestDefaults.BASE_DELAY_SECONDS
    )
    async def create_project(
        self,
        team_id: str,
        name: str,
        description: str,
        content: Optional[str] = None,
        state: str = ProjectStates.PLANNED
    ) -> Dict[str, Any]:
        """
        Create a project for a team.

        Args:
            team_id: Linear team ID
            name: Project name
            description: Short project description
            content: Optional markdown body of the project
            state: Initial project state (default: planned)

        Returns:
            Created project: {id, name, url, state}
        """
        project_input: Dict[str, Any] = {
            "name": name,
            "description": description,
            "teamIds": [team_id],
            "state": state,
        }
        if content:
            project_input["content"] = content

        project = await self._execute(PROJECT_CREATE, {"input": project_input}, "projectCreate", "project")
        logger.info(f"Created Linear project '{project['name']}' ({project['id']})")
        return project

    @linear_operation(
        timeout_seconds=RequestDefaults.ATTEMPT_TIMEOUT_SECONDS,
        max_retries=RequestDefaults.MAX_RETRIES,
        base_delay=RequestDefaults.BASE_DELAY_SECONDS
    )
    async def create_cycle(
        self,
        team_id: str,
        name: str,
        starts_at: str,
        ends_at: str
    ) -> Dict[str, Any]:
        """
        Create a cycle (sprint).

        Args:
            team_id: Linear team ID
            name: Cycle name
            starts_at: ISO-8601 start timestamp
            ends_at: ISO-8601 end timestamp

        Returns:
            Created cycle: {id, name, number, startsAt, endsAt}
        """
        cycle_input = {
            "teamId": team_id,
            "name": name,
            "startsAt": starts_at,
            "endsAt": ends_at,
        }

        cycle = await self._execute(CYCLE_CREATE, {"input": cycle_input}, "cycleCreate", "cycle")
        logger.debug(f"Created cycle '{cycle.get('name')}' ({cycle['id']})")
        return cycle

    @linear_operation(
        timeout_seconds=RequestDefaults.ATTEMPT_TIMEOUT_SECONDS,
        max_retries=RequestDefaults.MAX_RETRIES,
        base_delay=RequestDefaults.BASE_DELAY_SECONDS
    )
    async def create_issue(
        self,
        team_id: str,
        title: str,
        description: str,
        project_id: str,
        cycle_id: Optional[str] = None,
        priority: Optional[int] = None,
        label_ids: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Create an issue in a project, optionally bound to a cycle.

        Args:
            team_id: Linear team ID
            title: Issue title
            description: Markdown description
            project_id: Project the issue belongs to
            cycle_id: Cycle to bind the issue to, or None
            priority: 0-4 (defaults to 3, medium)
            label_ids: Label IDs (defaults to none)

        Returns:
            Created issue: {id, identifier, title, priority, url, cycle}

        Raises:
            BadRequestError: If priority is outside 0-4, before any request
        """
        try:
            priority = validate_priority(priority)
        except ValidationError as e:
            raise BadRequestError(message=str(e), original_error=e)

        issue_input: Dict[str, Any] = {
            "teamId": team_id,
            "title": title,
            "description": description,
            "projectId": project_id,
            "priority": priority if priority is not None else Priority.DEFAULT,
            "labelIds": label_ids or [],
        }
        if cycle_id:
            issue_input["cycleId"] = cycle_id

        issue = await self._execute(ISSUE_CREATE, {"input": issue_input}, "issueCreate", "issue")
        logger.debug(f"Created issue {issue.get('identifier') or issue['id']}: {title}")
        return issue

    def get_statistics(self) -> Dict[str, Any]:
        """Request counters for monitoring"""
        return {
            "api_url": self.api_url,
            "requests": self._request_count,
        }
