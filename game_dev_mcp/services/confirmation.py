"""
Confirmation gate
Asks a human whether to generate code once the Linear project exists
"""
import logging

from ..log_sanitizer import safe_log_error
from ..models import TrackerProject
from .tracker_service import summarize_sprints

logger = logging.getLogger(__name__)


CONFIRMATION_QUESTION = (
    "The Linear project has been created. "
    "Do you want to proceed with generating the game code?"
)


def format_project_summary(tracker_project: TrackerProject) -> str:
    """Summary shown before the confirmation question"""
    breakdown = "\n".join(f"  {line}" for line in summarize_sprints(tracker_project))
    return (
        "Project Summary:\n"
        f"Project Name: {tracker_project.project_name}\n"
        f"Total Sprints: {len(tracker_project.sprints)}\n"
        f"Total Tasks: {len(tracker_project.issues)}\n"
        "\n"
        "Sprint Breakdown:\n"
        f"{breakdown}"
    )


class StaticConfirmer:
    """Answers every confirmation with a fixed decision"""

    def __init__(self, decision: bool):
        self.decision = decision

    async def confirm(self, summary: str) -> bool:
        logger.info(f"Confirmation answered without prompting: {'proceed' if self.decision else 'cancel'}")
        return self.decision


class ElicitationConfirmer:
    """
    Asks the MCP client through elicitation.

    Waits for the user with no timeout. Accept returns the user's answer;
    decline and cancel both mean "do not proceed". When the client cannot
    elicit at all, `fallback` decides.
    """

    def __init__(self, ctx, fallback: bool = False):
        """
        Args:
            ctx: FastMCP Context of the running tool call
            fallback: Decision used when the client does not support elicitation
        """
        self.ctx = ctx
        self.fallback = fallback

    async def confirm(self, summary: str) -> bool:
        message = f"{summary}\n\n{CONFIRMATION_QUESTION}"
        try:
            result = await self.ctx.elicit(message=message, response_type=bool)
        except Exception as e:
            logger.warning(
                safe_log_error(e, "Client could not answer confirmation")
                + f". Using fallback decision: {'proceed' if self.fallback else 'cancel'}"
            )
            return self.fallback

        if result.action == "accept":
            decision = bool(result.data)
        else:
            decision = False

        logger.info(f"Confirmation {result.action}: {'proceed' if decision else 'cancel'}")
        return decision
