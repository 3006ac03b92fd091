"""
Sprint planning for game projects.

Builds the three consecutive sprint windows and assigns each task to a
sprint by its position in the task plan.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, TypeVar

from ..constants import SprintPlan
from ..models import Sprint

T = TypeVar('T')


def assign_sprint_index(
    position: int,
    sprint_count: int = SprintPlan.SPRINT_COUNT,
    bucket_size: int = SprintPlan.BUCKET_SIZE
) -> Optional[int]:
    """
    Sprint index for the task at a 0-based position.

    Tasks fill sprints in buckets of `bucket_size`. Every task past the last
    full bucket lands in the final sprint; there is never an extra sprint.

    Args:
        position: Task position in the plan
        sprint_count: Number of sprints available
        bucket_size: Tasks per sprint before moving on

    Returns:
        Sprint index, or None when there are no sprints to assign to
    """
    if position < 0:
        raise ValueError(f"Task position cannot be negative: {position}")
    if bucket_size < 1:
        raise ValueError(f"Bucket size must be positive: {bucket_size}")
    if sprint_count < 1:
        return None
    return min(position // bucket_size, sprint_count - 1)


def distribute(task_count: int, sprint_count: int = SprintPlan.SPRINT_COUNT) -> List[Optional[int]]:
    """Sprint index for every position of a plan with `task_count` tasks"""
    return [assign_sprint_index(i, sprint_count) for i in range(task_count)]


def pair_with_sprints(items: Sequence[T], sprints: Sequence) -> List[tuple]:
    """
    Pair each item with the sprint its position maps to.

    Returns:
        (item, sprint or None) tuples in item order
    """
    pairs = []
    for index, sprint_index in enumerate(distribute(len(items), len(sprints))):
        sprint = sprints[sprint_index] if sprint_index is not None else None
        pairs.append((items[index], sprint))
    return pairs


def plan_sprints(team_id: str, now: Optional[datetime] = None) -> List[Sprint]:
    """
    Build the sprint windows for a new project.

    Windows are contiguous and start at `now`:
    [now, now+7d), [now+7d, now+14d), [now+14d, now+21d)

    Args:
        team_id: Linear team the sprints belong to
        now: Start of the first sprint (defaults to the current UTC time)

    Returns:
        Sprints in chronological order
    """
    if now is None:
        now = datetime.now(timezone.utc)

    length = timedelta(days=SprintPlan.SPRINT_LENGTH_DAYS)
    return [
        Sprint(
            name=name,
            start_date=now + length * index,
            end_date=now + length * (index + 1),
            team_id=team_id,
        )
        for index, name in enumerate(SprintPlan.SPRINT_NAMES)
    ]


def to_iso(moment: datetime) -> str:
    """ISO-8601 timestamp in UTC with millisecond precision, as Linear expects"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
