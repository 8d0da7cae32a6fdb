"""
Sales Agent
===========
Runs outreach over a set of leads and updates the deal pipeline.

Leads handed over by a previous agent (e.g. the lead generator's `leads`)
are used when present; otherwise a small synthetic set is worked.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.agents.handoff import handoff_records
from agent_core.app.schemas.agent_config import SalesOptions
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import SalesSharedData
from agent_core.services.work_source import WorkSource

logger = logging.getLogger(__name__)

OUTREACH_DELAY_MS = 1500
CONTACT_RATE = 0.8
MEETING_RATE = 0.3
PROPOSAL_RATE = 0.6


class SalesAgent(BaseAgent[SalesOptions]):
    """Contacts leads, books meetings and projects revenue."""

    agent_type = AgentType.SALES
    label = "Sales"
    description = "Performs lead outreach and advances the sales pipeline"
    failure_message = "Sales execution failed"

    options_schema = SalesOptions
    shared_data_schema = SalesSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        options = self.options
        work = self.work_source

        await self.stage(OUTREACH_DELAY_MS)

        leads = handoff_records(input, "leads") or self.default_leads(work)

        contacted = math.floor(len(leads) * CONTACT_RATE)
        meetings = math.floor(contacted * MEETING_RATE)
        revenue = work.randint(10_000, 59_999)
        stages = {
            "qualified": meetings,
            "proposal": math.floor(meetings * PROPOSAL_RATE),
        }

        shared = SalesSharedData(deals_created=meetings, revenue=revenue)

        logger.info(
            f"[{self.label}] Contacted {contacted}/{len(leads)} leads, booked {meetings} meetings"
        )

        return AgentRun(
            output={
                "leadsWorked": len(leads),
                "leadsContacted": contacted,
                "meetings": meetings,
                "revenue": revenue,
                "pipelineStage": stages,
                "outreachChannels": list(options.outreach.channels),
                "sharedData": shared.to_handoff(),
            },
            api_calls=len(leads),
        )

    @staticmethod
    def default_leads(work: WorkSource) -> list[dict[str, Any]]:
        return [
            {"id": f"lead_{i}", "score": work.randint(0, 99), "company": f"Company {i}"}
            for i in range(work.randint(5, 19))
        ]


__all__ = ["SalesAgent"]
