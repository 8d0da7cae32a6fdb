"""
Customer Service Agent
======================
Works through the support queue of the configured channels.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.app.schemas.agent_config import CustomerServiceOptions
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import CustomerServiceSharedData

logger = logging.getLogger(__name__)

QUEUE_DELAY_MS = 800
RESOLUTION_RATE = 0.9


class CustomerServiceAgent(BaseAgent[CustomerServiceOptions]):
    """Answers and resolves support tickets."""

    agent_type = AgentType.CUSTOMER_SERVICE
    label = "Customer Service"
    description = "Processes support tickets across customer channels"
    failure_message = "Customer service failed"

    options_schema = CustomerServiceOptions
    shared_data_schema = CustomerServiceSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        options = self.options
        work = self.work_source

        await self.stage(QUEUE_DELAY_MS)

        tickets = [
            {
                "id": f"ticket_{i}",
                "channel": work.choice(options.channels),
                "resolved": work.chance(RESOLUTION_RATE),
                "responseTime": work.randint(5, 64),
            }
            for i in range(work.randint(5, 24))
        ]
        resolved = sum(1 for ticket in tickets if ticket["resolved"])
        satisfaction = round(work.uniform(8.0, 10.0), 1)

        by_channel: dict[str, int] = {}
        for ticket in tickets:
            by_channel[ticket["channel"]] = by_channel.get(ticket["channel"], 0) + 1

        shared = CustomerServiceSharedData(
            tickets_resolved=resolved,
            satisfaction_score=satisfaction,
        )

        logger.info(f"[{self.label}] Processed {len(tickets)} tickets, {resolved} resolved")

        return AgentRun(
            output={
                "ticketsProcessed": len(tickets),
                "ticketsResolved": resolved,
                "avgResponseTime": work.randint(15, 44),
                "satisfaction": satisfaction,
                "channels": list(options.channels),
                "ticketsByChannel": by_channel,
                "sharedData": shared.to_handoff(),
            },
            api_calls=len(tickets),
        )


__all__ = ["CustomerServiceAgent"]
