"""
Execution Schemas
=================
The envelope every agent returns, the metrics attached to it and the
declarative configuration an agent instance is built from.

Invariants:
- `metrics` is always present, on success and on failure, with non-negative
  numeric fields, so dashboards can sum and average runs without null checks.
- Exactly one of `output` / `error` is populated, selected by `success`.
- A successful `output` always carries a `sharedData` map for the next agent.
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from pydantic import ConfigDict, Field, field_validator, model_validator

from agent_core.app.schemas.base import AgentType, CamelSchema


SHARED_DATA_KEY = "sharedData"


class ExecutionMetrics(CamelSchema):
    """Timing and resource figures for one execution."""
    model_config = ConfigDict(frozen=True)

    duration: int = Field(default=0, ge=0, description="Wall-clock duration in ms")
    resource_usage: dict[str, float] = Field(default_factory=dict)
    api_calls: int = Field(default=0, ge=0)
    memory_usage: float = Field(default=0.0, ge=0.0)
    cpu_usage: float = Field(default=0.0, ge=0.0)

    @field_validator("resource_usage")
    @classmethod
    def validate_resource_usage(cls, v: dict[str, float]) -> dict[str, float]:
        """Resource estimates share the non-negativity of the other fields."""
        negative = [key for key, value in v.items() if value < 0]
        if negative:
            raise ValueError(f"resource usage values must be >= 0: {', '.join(negative)}")
        return v


class ExecutionResult(CamelSchema):
    """Closed result envelope returned by every agent."""
    model_config = ConfigDict(frozen=True)

    success: bool
    output: dict[str, Any] | None = None
    error: str | None = None
    metrics: ExecutionMetrics = Field(default_factory=ExecutionMetrics)

    @model_validator(mode="after")
    def validate_envelope(self) -> "ExecutionResult":
        """Exactly one of output/error, matching the success flag."""
        if self.success:
            if self.output is None or self.error is not None:
                raise ValueError("successful results carry output and no error")
            if not isinstance(self.output.get(SHARED_DATA_KEY), dict):
                raise ValueError(f"successful output must include a '{SHARED_DATA_KEY}' map")
        else:
            if not self.error or self.output is not None:
                raise ValueError("failed results carry an error message and no output")
        return self

    @property
    def shared_data(self) -> dict[str, Any]:
        """The slice of output intended for the next agent ({} on failure)."""
        if self.output is None:
            return {}
        return self.output[SHARED_DATA_KEY]


class AgentConfiguration(CamelSchema):
    """
    Declarative identity of an agent instance.

    Supplied by the surrounding CRUD system. `type` accepts raw strings so
    the factory can reject unknown values by name.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: f"agent_{uuid4().hex[:12]}")
    type: AgentType | str
    configuration: dict[str, Any] = Field(default_factory=dict)

    @field_validator("configuration", mode="before")
    @classmethod
    def default_configuration(cls, v: Any) -> Any:
        """A null configuration means 'use every default'."""
        return {} if v is None else v


__all__ = [
    "SHARED_DATA_KEY",
    "ExecutionMetrics",
    "ExecutionResult",
    "AgentConfiguration",
]
