"""
SEO Optimizer Agent
===================
Audits the site, applies optimizations and tracks keyword rankings.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.app.schemas.agent_config import SeoOptimizerOptions
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import SeoSharedData

logger = logging.getLogger(__name__)

AUDIT_DELAY_MS = 2500
API_CALLS = 5
DEFAULT_TRACKED_KEYWORDS = 25
CONTENT_UPDATE_RATE = 0.8


class SeoOptimizerAgent(BaseAgent[SeoOptimizerOptions]):
    """Improves search visibility for the configured targets."""

    agent_type = AgentType.SEO_OPTIMIZER
    label = "SEO Optimizer"
    description = "Analyses and optimizes pages for search rankings"
    failure_message = "SEO optimization failed"

    options_schema = SeoOptimizerOptions
    shared_data_schema = SeoSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        targets = self.options.targets
        work = self.work_source

        await self.stage(AUDIT_DELAY_MS)

        analysis = {
            "keywordsAnalyzed": work.randint(20, 69),
            "overallScore": work.randint(70, 99),
            "technicalIssues": work.randint(2, 11),
            "contentOpportunities": work.randint(5, 19),
        }
        optimizations = {
            "pagesOptimized": work.randint(5, 24),
            "metaTagsUpdated": work.randint(10, 39),
            "technicalFixes": analysis["technicalIssues"],
            "contentUpdates": math.floor(analysis["contentOpportunities"] * CONTENT_UPDATE_RATE),
        }
        rankings = {
            "improvement": round(work.uniform(5.0, 20.0), 1),
            "keywordsTracked": len(targets.keywords) or DEFAULT_TRACKED_KEYWORDS,
            "topRankings": work.randint(3, 10),
        }

        shared = SeoSharedData(
            seo_score=analysis["overallScore"],
            ranking_improvement=rankings["improvement"],
        )

        logger.info(
            f"[{self.label}] Score {analysis['overallScore']}, "
            f"{optimizations['pagesOptimized']} pages optimized"
        )

        return AgentRun(
            output={
                "pagesOptimized": optimizations["pagesOptimized"],
                "keywordsAnalyzed": analysis["keywordsAnalyzed"],
                "rankingImprovement": rankings["improvement"],
                "analysis": analysis,
                "optimizations": optimizations,
                "rankings": rankings,
                "sharedData": shared.to_handoff(),
            },
            api_calls=API_CALLS,
        )


__all__ = ["SeoOptimizerAgent"]
