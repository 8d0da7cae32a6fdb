"""
Unit Tests for the Execution Result Envelope
============================================
Test Coverage:
- ExecutionResult success/error invariant
- build_success / build_error defaults
- Metrics synthesis and camelCase serialization
- Handoff readers (sharedData first, then top-level input)
"""

import pytest
from pydantic import ValidationError

from agent_core.agents.handoff import (
    handoff_list,
    handoff_number,
    handoff_records,
    handoff_strings,
    handoff_value,
    numeric_signals,
    shared_data,
)
from agent_core.agents.results import (
    build_error,
    build_success,
    start_timer,
    synthesize_metrics,
)
from agent_core.app.schemas.execution import (
    AgentConfiguration,
    ExecutionMetrics,
    ExecutionResult,
)


# =============================================================================
# ENVELOPE
# =============================================================================

class TestExecutionResultEnvelope:
    """Exactly one of output/error, selected by success."""

    def test_success_requires_output(self):
        with pytest.raises(ValidationError):
            ExecutionResult(success=True)

    def test_success_rejects_error(self):
        with pytest.raises(ValidationError):
            ExecutionResult(success=True, output={"sharedData": {}}, error="boom")

    def test_success_requires_shared_data_map(self):
        with pytest.raises(ValidationError):
            ExecutionResult(success=True, output={"value": 1})

    def test_failure_requires_error(self):
        with pytest.raises(ValidationError):
            ExecutionResult(success=False)

    def test_failure_rejects_output(self):
        with pytest.raises(ValidationError):
            ExecutionResult(success=False, output={"sharedData": {}}, error="boom")

    def test_metrics_default_to_zero(self):
        result = ExecutionResult(success=False, error="boom")

        assert result.metrics.duration == 0
        assert result.metrics.api_calls == 0
        assert result.metrics.resource_usage == {}

    def test_result_is_frozen(self):
        result = build_error("boom")

        with pytest.raises(ValidationError):
            result.success = True

    def test_shared_data_property(self):
        assert build_success({"sharedData": {"leadCount": 3}}).shared_data == {"leadCount": 3}
        assert build_error("boom").shared_data == {}


class TestBuilders:
    """build_success and build_error."""

    def test_build_success_adds_shared_data(self):
        result = build_success({"totalLeads": 4})

        assert result.success is True
        assert result.error is None
        assert result.output == {"totalLeads": 4, "sharedData": {}}

    def test_build_success_replaces_non_map_shared_data(self):
        result = build_success({"sharedData": "not a map"})
        assert result.output["sharedData"] == {}

    def test_build_success_does_not_mutate_output(self):
        output = {"value": 1}
        build_success(output)
        assert output == {"value": 1}

    def test_build_success_fills_missing_metrics(self):
        result = build_success({}, {"apiCalls": 2, "duration": None})

        assert result.metrics.api_calls == 2
        assert result.metrics.duration == 0
        assert result.metrics.memory_usage == 0.0

    def test_build_error_keeps_metrics(self):
        result = build_error("Sales execution failed: timeout", ExecutionMetrics(duration=12))

        assert result.success is False
        assert result.output is None
        assert result.error == "Sales execution failed: timeout"
        assert result.metrics.duration == 12

    def test_build_error_never_blank(self):
        assert build_error("").error == "Agent execution failed"

    def test_negative_metrics_rejected(self):
        with pytest.raises(ValidationError):
            ExecutionMetrics(duration=-1)
        with pytest.raises(ValidationError):
            ExecutionMetrics(resource_usage={"memoryPeak": -5.0})


class TestMetricsSynthesis:
    """synthesize_metrics()"""

    def test_synthesized_metrics_shape(self, work_source):
        metrics = synthesize_metrics(start_timer(), 3, work_source)

        assert metrics.duration >= 0
        assert metrics.api_calls == 3
        assert set(metrics.resource_usage) == {"processingTime", "memoryPeak", "cpuPeak"}
        assert 50.0 <= metrics.resource_usage["memoryPeak"] <= 150.0
        assert 20.0 <= metrics.resource_usage["cpuPeak"] <= 70.0
        assert 50.0 <= metrics.memory_usage <= 150.0
        assert 20.0 <= metrics.cpu_usage <= 70.0

    def test_negative_api_calls_clamped(self, work_source):
        assert synthesize_metrics(start_timer(), -4, work_source).api_calls == 0

    def test_camel_case_serialization(self, work_source):
        result = build_success({}, synthesize_metrics(start_timer(), 1, work_source))
        payload = result.model_dump(by_alias=True)

        assert set(payload["metrics"]) == {
            "duration", "resourceUsage", "apiCalls", "memoryUsage", "cpuUsage",
        }


class TestAgentConfiguration:

    def test_null_configuration_means_defaults(self):
        config = AgentConfiguration(type="SALES", configuration=None)

        assert config.configuration == {}
        assert config.id.startswith("agent_")

    def test_raw_type_strings_are_kept(self):
        assert AgentConfiguration(type="CONVERSATIONAL").type == "CONVERSATIONAL"


# =============================================================================
# HANDOFF
# =============================================================================

class TestHandoff:
    """Optional-safe reading of a previous agent's output."""

    @pytest.mark.parametrize("input", [None, {}, {"sharedData": {}}, {"sharedData": None}, "text", 42])
    def test_missing_values_use_default(self, input):
        assert handoff_value(input, "leadCount", "hundreds of") == "hundreds of"
        assert handoff_list(input, "leads") is None
        assert handoff_records(input, "leads", "recipients") is None
        assert handoff_strings(input, "keywords") is None
        assert numeric_signals(input) == {}

    def test_shared_data_takes_precedence(self):
        input = {"leadCount": 1, "sharedData": {"leadCount": 7}}
        assert handoff_value(input, "leadCount") == 7

    def test_top_level_fallback(self):
        assert handoff_value({"leadCount": 5, "sharedData": {}}, "leadCount") == 5

    def test_falsy_values_are_returned(self):
        assert handoff_value({"sharedData": {"leadCount": 0}}, "leadCount", 99) == 0

    def test_shared_data_non_map(self):
        assert shared_data({"sharedData": ["a"]}) == {}

    def test_handoff_number(self):
        input = {"sharedData": {"openRate": 21.5, "flag": True, "label": "x"}}

        assert handoff_number(input, "openRate") == 21.5
        assert handoff_number(input, "flag", 0.0) == 0.0
        assert handoff_number(input, "label") is None

    def test_handoff_list_requires_non_empty_list(self):
        assert handoff_list({"sharedData": {"leads": []}}, "leads") is None
        assert handoff_list({"sharedData": {"leads": "many"}}, "leads") is None
        assert handoff_list({"leads": [1]}, "leads") == [1]

    def test_handoff_records_drops_non_maps(self):
        input = {"sharedData": {"leads": ["x", {"email": "a@b.c"}, None]}}
        assert handoff_records(input, "leads") == [{"email": "a@b.c"}]

    def test_handoff_records_falls_through_keys(self):
        input = {"leads": ["x"], "recipients": [{"email": "a@b.c"}]}
        assert handoff_records(input, "leads", "recipients") == [{"email": "a@b.c"}]

    def test_handoff_strings(self):
        assert handoff_strings({"keywords": " crm "}, "keywords") == ["crm"]
        assert handoff_strings({"topics": ["AI", 3, ""]}, "keywords", "topics") == ["AI"]

    def test_numeric_signals(self):
        input = {"sharedData": {"leadCount": 4, "avgLeadScore": 71.5, "campaignId": "c1", "ok": True}}
        assert numeric_signals(input) == {"leadCount": 4, "avgLeadScore": 71.5}
