"""
LangGraph Node Functions
========================
Wraps an agent as a pipeline node.

A node never raises for a failed execution: agents already convert
failures into error results, and the node records that result and decides
what the next agent receives.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from agent_core.agents.base import BaseAgent
from agent_core.app.schemas.pipeline import PipelineStepResult
from agent_core.graph.state import PipelineState

logger = logging.getLogger(__name__)

NodeFunction = Callable[[PipelineState], Awaitable[dict[str, Any]]]


def node_name(index: int, agent: BaseAgent) -> str:
    """Graph node name of the agent at position `index`."""
    return f"step_{index}_{agent.type.value.lower()}"


def make_agent_node(index: int, agent: BaseAgent) -> NodeFunction:
    """Build the node function that runs `agent` as step `index`."""

    async def agent_node(state: PipelineState) -> dict[str, Any]:
        logger.info(
            f"[Pipeline {state['pipeline_id']}] Step {index}: "
            f"{agent.label} ({agent.id})"
        )

        result = await agent.execute(state.get("current_input"))

        updates: dict[str, Any] = {
            "results": [
                PipelineStepResult(
                    index=index,
                    agent_id=agent.id,
                    agent_type=agent.type,
                    result=result,
                )
            ],
            "step_index": index + 1,
            "current_input": dict(result.output) if result.success else {},
        }

        if not result.success:
            logger.warning(
                f"[Pipeline {state['pipeline_id']}] Step {index} failed: {result.error}"
            )
            if state["stop_on_failure"]:
                updates["halted"] = True

        return updates

    agent_node.__name__ = node_name(index, agent)
    return agent_node


__all__ = [
    "NodeFunction",
    "node_name",
    "make_agent_node",
]
