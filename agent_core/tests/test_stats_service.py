"""
Unit Tests for Execution Stats
==============================
"""

import pytest

from agent_core.agents.results import build_error, build_success
from agent_core.app.schemas.execution import ExecutionMetrics
from agent_core.services.stats_service import (
    AgentNotFoundError,
    StatsService,
    get_stats_service,
)


class TestStatsService:

    def test_running_aggregate(self, stats_service):
        stats_service.record("agent_1", build_success({}, ExecutionMetrics(duration=100, api_calls=3)))
        stats_service.record("agent_1", build_error("boom", ExecutionMetrics(duration=300)))
        stats = stats_service.record("agent_1", build_success({}, ExecutionMetrics(duration=200, api_calls=2)))

        assert stats.usage_count == 3
        assert stats.success_count == 2
        assert stats.success_rate == 66.67
        assert stats.avg_response_time == 200.0
        assert stats.total_api_calls == 5
        assert stats.last_used_at is not None

    def test_failure_with_default_metrics(self, stats_service):
        stats = stats_service.record("agent_1", build_error("boom"))

        assert stats.success_rate == 0.0
        assert stats.avg_response_time == 0.0
        assert stats.total_api_calls == 0

    def test_agents_tracked_separately(self, stats_service):
        stats_service.record("agent_1", build_success({}))
        stats_service.record("agent_2", build_error("boom"))

        assert stats_service.get("agent_1").success_rate == 100.0
        assert stats_service.get("agent_2").success_rate == 0.0
        assert len(stats_service.list_all()) == 2

    def test_unknown_agent(self, stats_service):
        with pytest.raises(AgentNotFoundError) as exc_info:
            stats_service.get("agent_missing")
        assert exc_info.value.agent_id == "agent_missing"

    def test_reset(self, stats_service):
        stats_service.record("agent_1", build_success({}))
        stats_service.reset()

        assert stats_service.list_all() == []

    def test_camel_case_view(self, stats_service):
        payload = stats_service.record("agent_1", build_success({})).model_dump(by_alias=True)

        assert {"agentId", "usageCount", "successRate", "avgResponseTime", "totalApiCalls"} <= set(payload)

    def test_process_wide_instance(self):
        assert get_stats_service() is get_stats_service()
        assert isinstance(get_stats_service(), StatsService)
