"""
Execution Stats Service
=======================
Running per-agent aggregates of execution results: usage count, success
rate, average response time and api calls.

Metrics are always present on a result, success or failure, so the
aggregation needs no null checks. Storage is in-memory and process-local.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from threading import Lock

from agent_core.app.schemas.execution import ExecutionResult
from agent_core.app.schemas.pipeline import AgentStats

logger = logging.getLogger(__name__)


class AgentNotFoundError(Exception):
    """No executions have been recorded for the agent."""

    def __init__(self, agent_id: str):
        self.agent_id = agent_id
        super().__init__(f"No executions recorded for agent: {agent_id}")


class StatsService:
    """In-memory execution statistics keyed by agent id."""

    def __init__(self):
        self._stats: dict[str, AgentStats] = {}
        self._lock = Lock()

    def record(self, agent_id: str, result: ExecutionResult) -> AgentStats:
        """Fold one execution result into the agent's running aggregate."""
        with self._lock:
            current = self._stats.get(agent_id) or AgentStats(agent_id=agent_id)

            usage_count = current.usage_count + 1
            success_count = current.success_count + (1 if result.success else 0)
            avg_response_time = (
                current.avg_response_time * current.usage_count + result.metrics.duration
            ) / usage_count

            updated = AgentStats(
                agent_id=agent_id,
                usage_count=usage_count,
                success_count=success_count,
                success_rate=round(success_count / usage_count * 100, 2),
                avg_response_time=round(avg_response_time, 2),
                total_api_calls=current.total_api_calls + result.metrics.api_calls,
                last_used_at=datetime.now(timezone.utc),
            )
            self._stats[agent_id] = updated

        logger.debug(
            f"Recorded execution for {agent_id}: success={result.success}, "
            f"duration={result.metrics.duration}ms"
        )
        return updated

    def get(self, agent_id: str) -> AgentStats:
        """
        Aggregate stats of one agent.

        Raises:
            AgentNotFoundError: If nothing was recorded for the agent
        """
        stats = self._stats.get(agent_id)
        if stats is None:
            raise AgentNotFoundError(agent_id)
        return stats

    def list_all(self) -> list[AgentStats]:
        return list(self._stats.values())

    def reset(self) -> None:
        with self._lock:
            self._stats.clear()


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================

_stats_service: StatsService | None = None


def get_stats_service() -> StatsService:
    """Get the process-wide stats service."""
    global _stats_service
    if _stats_service is None:
        _stats_service = StatsService()
    return _stats_service


__all__ = [
    "AgentNotFoundError",
    "StatsService",
    "get_stats_service",
]
