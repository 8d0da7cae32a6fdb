"""
Pydantic Schemas Module
=======================
Data models for agent execution, configuration and the HTTP API.
"""

from agent_core.app.schemas.base import (
    AgentType,
    CamelSchema,
    OptionsSchema,
)
from agent_core.app.schemas.execution import (
    SHARED_DATA_KEY,
    AgentConfiguration,
    ExecutionMetrics,
    ExecutionResult,
)
from agent_core.app.schemas.pipeline import (
    AgentStats,
    AgentTypeInfo,
    AgentTypeListResponse,
    ExecuteAgentRequest,
    ParallelRequest,
    ParallelRun,
    PipelineRequest,
    PipelineRun,
    PipelineStepResult,
)

__all__ = [
    # Base
    "AgentType",
    "CamelSchema",
    "OptionsSchema",
    # Execution
    "SHARED_DATA_KEY",
    "AgentConfiguration",
    "ExecutionMetrics",
    "ExecutionResult",
    # API
    "AgentStats",
    "AgentTypeInfo",
    "AgentTypeListResponse",
    "ExecuteAgentRequest",
    "ParallelRequest",
    "ParallelRun",
    "PipelineRequest",
    "PipelineRun",
    "PipelineStepResult",
]
