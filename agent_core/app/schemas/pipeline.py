"""
Pipeline & Execution API Schemas
================================
Request/response models for single executions, sequential pipelines and
parallel fan-out, plus the agent catalog and stats views.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from agent_core.app.schemas.base import AgentType, CamelSchema
from agent_core.app.schemas.execution import AgentConfiguration, ExecutionResult


# =============================================================================
# SINGLE EXECUTION
# =============================================================================

class ExecuteAgentRequest(CamelSchema):
    """Run one agent once."""
    id: str | None = Field(default=None, description="Agent id (generated when omitted)")
    type: str = Field(..., min_length=1, description="Agent type from the catalog")
    configuration: dict[str, Any] = Field(default_factory=dict)
    input: dict[str, Any] | None = Field(
        default=None,
        description="Execution input, typically a previous agent's output",
    )

    @field_validator("configuration", mode="before")
    @classmethod
    def default_configuration(cls, v: Any) -> Any:
        return {} if v is None else v


# =============================================================================
# PIPELINES
# =============================================================================

class PipelineRequest(CamelSchema):
    """Run agents one after another, each fed the previous output."""
    steps: list[AgentConfiguration] = Field(..., min_length=1, max_length=20)
    input: dict[str, Any] | None = None
    stop_on_failure: bool = True


class ParallelRequest(CamelSchema):
    """Run independent agents concurrently on the same input."""
    steps: list[AgentConfiguration] = Field(..., min_length=1, max_length=20)
    input: dict[str, Any] | None = None


class PipelineStepResult(CamelSchema):
    """Outcome of one link in a chain."""
    index: int = Field(ge=0)
    agent_id: str
    agent_type: AgentType
    result: ExecutionResult


class PipelineRun(CamelSchema):
    """Outcome of a sequential pipeline."""
    pipeline_id: str
    success: bool
    halted: bool = False
    steps: list[PipelineStepResult] = Field(default_factory=list)
    final_output: dict[str, Any] | None = None


class ParallelRun(CamelSchema):
    """Outcome of a parallel fan-out, in step order."""
    success: bool
    steps: list[PipelineStepResult] = Field(default_factory=list)


# =============================================================================
# CATALOG & STATS
# =============================================================================

class AgentTypeInfo(CamelSchema):
    value: AgentType
    label: str
    description: str
    shared_data_fields: list[str]


class AgentTypeListResponse(CamelSchema):
    types: list[AgentTypeInfo]


class AgentStats(CamelSchema):
    """Running aggregate of one agent's executions."""
    agent_id: str
    usage_count: int = 0
    success_count: int = 0
    success_rate: float = 0.0
    avg_response_time: float = 0.0
    total_api_calls: int = 0
    last_used_at: datetime | None = None
