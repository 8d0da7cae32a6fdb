"""
Content Creator Agent
=====================
Produces one long-form piece per configured content type.

The topic comes from the pipeline (`keywords` or `topics` handed over by a
previous agent) when present, else from the configured SEO keywords.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.agents.handoff import handoff_strings
from agent_core.app.schemas.agent_config import ContentCreatorOptions
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import ContentSharedData

logger = logging.getLogger(__name__)

GENERATION_DELAY_MS = 2000
API_CALLS = 3


class ContentCreatorAgent(BaseAgent[ContentCreatorOptions]):
    """Writes SEO-aware content pieces."""

    agent_type = AgentType.CONTENT_CREATOR
    label = "Content Creator"
    description = "Creates blog posts and other long-form content"
    failure_message = "Content creation failed"

    options_schema = ContentCreatorOptions
    shared_data_schema = ContentSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        options = self.options
        work = self.work_source

        await self.stage(GENERATION_DELAY_MS)

        topics = handoff_strings(input, "keywords", "topics") or options.seo.keywords
        topic = topics[0]
        year = datetime.now(timezone.utc).year

        pieces = [
            {
                "type": content_type,
                "title": f"Ultimate Guide to {topic} in {year}",
                "content": self._body(options.writing.tone, topic),
                "wordCount": work.randint(500, 2499),
                "seoScore": work.randint(70, 99) if options.seo.enabled else None,
                "readabilityScore": work.randint(80, 99),
                "keywords": list(topics),
            }
            for content_type in options.content_types
        ]

        shared = ContentSharedData(
            content_created=len(pieces),
            total_words=sum(piece["wordCount"] for piece in pieces),
        )

        logger.info(f"[{self.label}] Created {len(pieces)} pieces on '{topic}'")

        return AgentRun(
            output={
                "contentPieces": len(pieces),
                "content": pieces,
                "seoOptimized": options.seo.enabled,
                "sharedData": shared.to_handoff(),
            },
            api_calls=API_CALLS,
        )

    @staticmethod
    def _body(tone: str, topic: str) -> str:
        return (
            f"This comprehensive guide explores {topic} and its impact on modern business "
            f"operations. With {tone} insights and practical examples, this content helps "
            f"readers understand the transformative power of intelligent automation..."
        )


__all__ = ["ContentCreatorAgent"]
