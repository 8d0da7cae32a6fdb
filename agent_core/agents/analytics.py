"""
Analytics Agent
===============
Aggregates traffic and conversion figures across data sources.

Any numeric values a previous agent shared are echoed back as
`pipelineSignals`, so a chain can report on what ran before it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.agents.handoff import numeric_signals
from agent_core.app.schemas.agent_config import AnalyticsOptions
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import AnalyticsSharedData

logger = logging.getLogger(__name__)

COLLECTION_DELAY_MS = 1000
INDUSTRY_AVERAGE_CONVERSION = 3.0

RECOMMENDATIONS = (
    "Optimize mobile experience to improve conversion rates",
    "Focus on high-performing traffic sources",
    "Implement A/B testing for landing pages",
)


class AnalyticsAgent(BaseAgent[AnalyticsOptions]):
    """Reports traffic, conversions and engagement trends."""

    agent_type = AgentType.ANALYTICS
    label = "Analytics"
    description = "Aggregates traffic and conversion metrics into insights"
    failure_message = "Analytics failed"

    options_schema = AnalyticsOptions
    shared_data_schema = AnalyticsSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        options = self.options
        work = self.work_source

        await self.stage(COLLECTION_DELAY_MS)

        analytics = {
            "totalTraffic": work.randint(1000, 10999),
            "conversionRate": round(work.uniform(2, 7), 2),
            "bounceRate": round(work.uniform(40, 70), 2),
            "avgSessionDuration": work.randint(120, 419),
            "sources": list(options.data_sources),
            "metrics": list(options.metrics),
            "timeRange": "30 days",
        }

        comparison = "above" if analytics["conversionRate"] > INDUSTRY_AVERAGE_CONVERSION else "below"
        insights = [
            f"Traffic increased by {work.randint(5, 24)}% this month",
            f"Conversion rate is {comparison} industry average",
            f"Mobile traffic represents {work.randint(50, 79)}% of total visits",
        ]

        shared = AnalyticsSharedData(
            conversion_rate=analytics["conversionRate"],
            total_traffic=analytics["totalTraffic"],
        )

        logger.info(
            f"[{self.label}] Analysed {len(options.data_sources)} data sources: "
            f"{analytics['totalTraffic']} visits, {analytics['conversionRate']}% conversion"
        )

        return AgentRun(
            output={
                "analytics": analytics,
                "insights": insights,
                "recommendations": list(RECOMMENDATIONS),
                "pipelineSignals": numeric_signals(input),
                "sharedData": shared.to_handoff(),
            },
            api_calls=len(options.data_sources),
        )


__all__ = ["AnalyticsAgent"]
