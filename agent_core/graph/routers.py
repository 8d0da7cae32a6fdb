"""
LangGraph Routing Functions
===========================
Conditional edge functions for pipeline graphs.

Router Pattern:
- Inspect state
- Decide
- Return the route name as a string
"""

from __future__ import annotations

import logging
from typing import Literal

from agent_core.graph.state import PipelineState, last_result

logger = logging.getLogger(__name__)


StepRoute = Literal["continue", "halt"]


def route_after_step(state: PipelineState) -> StepRoute:
    """End the pipeline once a step has halted it, else move on."""
    if state.get("halted"):
        step = last_result(state)
        logger.info(
            f"[Pipeline {state['pipeline_id']}] Halting after step "
            f"{step.index if step else '?'}"
        )
        return "halt"
    return "continue"


__all__ = [
    "StepRoute",
    "route_after_step",
]
