"""
Pipeline State
==============
The state a sequential agent pipeline carries from node to node.

Each node runs one agent on `current_input` and appends its step result to
`results`. On success the agent's full output becomes the next
`current_input`; after a failure the next agent receives {}.
"""

from __future__ import annotations

import operator
from datetime import datetime, timezone
from typing import Annotated, Any, Optional, TypedDict
from uuid import uuid4

from agent_core.app.schemas.pipeline import PipelineStepResult


class PipelineState(TypedDict):
    """State of one pipeline run."""
    pipeline_id: str
    started_at: str

    # Handoff: the input the next agent will receive
    current_input: Optional[dict[str, Any]]

    # Step results (append-only)
    results: Annotated[list[PipelineStepResult], operator.add]

    # Progress
    step_index: int
    stop_on_failure: bool
    halted: bool


def create_initial_state(
    initial_input: dict[str, Any] | None = None,
    stop_on_failure: bool = True,
    pipeline_id: str | None = None,
) -> PipelineState:
    """
    Build the starting state of a pipeline run.

    Args:
        initial_input: Input for the first agent (may be None)
        stop_on_failure: End the run at the first failed step
        pipeline_id: Run id (generated when omitted)
    """
    return PipelineState(
        pipeline_id=pipeline_id or f"pipeline_{uuid4().hex[:12]}",
        started_at=datetime.now(timezone.utc).isoformat(),
        current_input=dict(initial_input) if initial_input is not None else None,
        results=[],
        step_index=0,
        stop_on_failure=stop_on_failure,
        halted=False,
    )


def last_result(state: PipelineState) -> PipelineStepResult | None:
    """The most recent step result, if any step has run."""
    results = state.get("results") or []
    return results[-1] if results else None


__all__ = [
    "PipelineState",
    "create_initial_state",
    "last_result",
]
