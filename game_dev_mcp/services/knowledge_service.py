"""
Knowledge service
Owns the versioned game development knowledge base and refreshes it by topic
"""
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from ..errors import KnowledgeRefreshError
from ..models import KnowledgeBase, TopicUpdate
from ..validation import ValidationError, validate_topics

logger = logging.getLogger(__name__)


KNOWLEDGE_SOURCE = "documentation"

DEFAULT_IMPROVEMENTS = ("General improvements",)

TOPIC_IMPROVEMENTS: Dict[str, tuple] = {
    "react-three-fiber": (
        "New hooks for performance optimization",
        "Better TypeScript support",
        "Improved React 18 concurrent features",
    ),
    "game-design": (
        "Mobile-first approach is now standard",
        "Focus on accessibility",
        "Progressive web app features",
    ),
    "performance": (
        "WebGPU support emerging",
        "Better mobile GPU optimization",
        "Improved asset streaming",
    ),
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def initial_knowledge_base(now: Optional[datetime] = None) -> KnowledgeBase:
    """Knowledge base the server starts with"""
    return KnowledgeBase(
        technologies={
            "react-three-fiber": {
                "version": "latest",
                "best_practices": (
                    "Use useFrame for animations",
                    "Implement proper disposal of geometries and materials",
                    "Use instances for repeated objects",
                    "Optimize with LOD (Level of Detail)",
                    "Use React.memo for performance",
                ),
            },
            "rapier": {
                "version": "latest",
                "best_practices": (
                    "Use fixed timestep for physics",
                    "Implement collision groups for optimization",
                    "Use continuous collision detection for fast objects",
                    "Properly configure mass and friction",
                    "Use convex hulls for complex shapes",
                ),
            },
            "gsap": {
                "version": "latest",
                "best_practices": (
                    "Use timeline for complex animations",
                    "Kill animations on unmount",
                    "Use gsap.context() for cleanup",
                    "Optimize with will-change CSS",
                    "Use RAF (requestAnimationFrame) sync",
                ),
            },
        },
        game_patterns={
            "mobile_first": (
                "Touch controls as primary input",
                "Viewport meta tag configuration",
                "Performance budgets for mobile",
                "Progressive enhancement",
                "Offline capability with PWA",
            ),
            "performance": (
                "Texture atlasing",
                "Object pooling",
                "Frustum culling",
                "Draw call batching",
                "Asset lazy loading",
            ),
        },
        last_updated=now or _utc_now(),
    )


def get_topic_improvements(topic: str) -> tuple:
    """Improvements known for a topic; unknown topics get a generic entry"""
    return TOPIC_IMPROVEMENTS.get(topic, DEFAULT_IMPROVEMENTS)


class KnowledgeService:
    """
    Holds the current KnowledgeBase.

    A refresh never edits the current value; it swaps in a merged copy with
    the next version number, so readers always see a complete snapshot.
    """

    def __init__(
        self,
        knowledge: Optional[KnowledgeBase] = None,
        clock: Callable[[], datetime] = _utc_now
    ):
        self.clock = clock
        self._knowledge = knowledge or initial_knowledge_base(clock())
        self._refresh_count = 0

    @property
    def knowledge(self) -> KnowledgeBase:
        """Current snapshot"""
        return self._knowledge

    async def refresh(self, topics: Sequence[str]) -> Dict[str, TopicUpdate]:
        """
        Refresh the given topics.

        Args:
            topics: Topic names; duplicates are refreshed once

        Returns:
            One TopicUpdate per topic, keyed by topic

        Raises:
            KnowledgeRefreshError: If the topic list is empty or invalid
        """
        try:
            cleaned: List[str] = validate_topics(topics)
        except ValidationError as e:
            raise KnowledgeRefreshError(f"Cannot refresh knowledge: {e}", original_error=e)

        now = self.clock()
        updates = {
            topic: TopicUpdate(
                topic=topic,
                updated_at=now,
                source=KNOWLEDGE_SOURCE,
                improvements=get_topic_improvements(topic),
            )
            for topic in cleaned
        }

        current = self._knowledge
        merged_topics = dict(current.topics)
        merged_topics.update(updates)
        self._knowledge = replace(
            current,
            topics=merged_topics,
            last_updated=now,
            version=current.version + 1,
        )
        self._refresh_count += 1

        logger.info(
            f"Knowledge base refreshed to version {self._knowledge.version}: {', '.join(cleaned)}"
        )
        return updates

    def render_markdown(self) -> str:
        """Readable summary of the current snapshot"""
        knowledge = self._knowledge
        lines = [
            "# Game Development Knowledge",
            "",
            f"Version: {knowledge.version}",
            f"Last updated: {knowledge.last_updated.isoformat()}",
            "",
            "## Technologies",
        ]
        for name, details in knowledge.technologies.items():
            lines.append(f"### {name} ({details.get('version', 'unknown')})")
            for practice in details.get("best_practices", ()):
                lines.append(f"- {practice}")
            lines.append("")

        lines.append("## Game Patterns")
        for name, patterns in knowledge.game_patterns.items():
            lines.append(f"### {name}")
            for pattern in patterns:
                lines.append(f"- {pattern}")
            lines.append("")

        if knowledge.topics:
            lines.append("## Recent Topic Updates")
            for topic, update in knowledge.topics.items():
                lines.append(f"### {topic} ({update.updated_at.isoformat()}, {update.source})")
                for improvement in update.improvements:
                    lines.append(f"- {improvement}")
                lines.append("")

        return "\n".join(lines).rstrip() + "\n"

    def get_statistics(self) -> dict:
        return {
            "version": self._knowledge.version,
            "last_updated": self._knowledge.last_updated.isoformat(),
            "refresh_count": self._refresh_count,
            "topics": sorted(self._knowledge.topics),
        }
