"""
LangGraph Workflow Definition
=============================
Sequential agent pipelines as StateGraphs.

Flow:
START -> step_0_<type> -> step_1_<type> -> ... -> END

With stop_on_failure a router after each step ends the graph as soon as a
step fails; without it every step runs and a failed step hands {} to the
next one. Ordering is the caller's: no cycle detection or branching.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from langgraph.graph import END, START, StateGraph
from langgraph.graph.state import CompiledStateGraph

from agent_core.agents.base import BaseAgent
from agent_core.agents.factory import create_agent_from_config
from agent_core.app.core.config import Settings
from agent_core.app.schemas.execution import AgentConfiguration
from agent_core.app.schemas.pipeline import PipelineRun
from agent_core.graph.nodes import make_agent_node, node_name
from agent_core.graph.routers import route_after_step
from agent_core.graph.state import PipelineState, create_initial_state
from agent_core.services.work_source import WorkSource

logger = logging.getLogger(__name__)


# =============================================================================
# WORKFLOW BUILDER
# =============================================================================

def build_pipeline_workflow(
    agents: Sequence[BaseAgent],
    stop_on_failure: bool = True,
) -> StateGraph:
    """
    Build a linear pipeline graph, one node per agent.

    Args:
        agents: Agents in execution order
        stop_on_failure: Route to END after a failed step

    Raises:
        ValueError: If `agents` is empty
    """
    if not agents:
        raise ValueError("A pipeline needs at least one agent")

    workflow = StateGraph(PipelineState)

    names = [node_name(index, agent) for index, agent in enumerate(agents)]

    # --- Add Nodes ---
    for index, (name, agent) in enumerate(zip(names, agents)):
        workflow.add_node(name, make_agent_node(index, agent))

    # --- Add Edges ---
    workflow.add_edge(START, names[0])

    for current, following in zip(names, names[1:]):
        if stop_on_failure:
            workflow.add_conditional_edges(
                current,
                route_after_step,
                {
                    "continue": following,
                    "halt": END,
                }
            )
        else:
            workflow.add_edge(current, following)

    workflow.add_edge(names[-1], END)

    return workflow


def compile_pipeline(
    agents: Sequence[BaseAgent],
    stop_on_failure: bool = True,
) -> CompiledStateGraph:
    """Build and compile a pipeline graph."""
    compiled = build_pipeline_workflow(agents, stop_on_failure).compile()
    logger.debug(f"Compiled pipeline with {len(agents)} steps")
    return compiled


# =============================================================================
# EXECUTION
# =============================================================================

async def run_pipeline(
    steps: Sequence[AgentConfiguration],
    initial_input: dict[str, Any] | None = None,
    stop_on_failure: bool = True,
    *,
    work_source: WorkSource | None = None,
    settings: Settings | None = None,
    pipeline_id: str | None = None,
) -> PipelineRun:
    """
    Build the agents for `steps` and run them as one pipeline.

    Every agent is built before any runs, so an unsupported type or an
    invalid configuration fails the whole request up front.

    Raises:
        UnsupportedAgentTypeError: If a step names an unknown agent type
        pydantic.ValidationError: If a step's configuration is invalid
        ValueError: If `steps` is empty
    """
    agents = [
        create_agent_from_config(step, work_source=work_source, settings=settings)
        for step in steps
    ]
    graph = compile_pipeline(agents, stop_on_failure)

    initial_state = create_initial_state(
        initial_input=initial_input,
        stop_on_failure=stop_on_failure,
        pipeline_id=pipeline_id,
    )
    run_id = initial_state["pipeline_id"]

    logger.info(f"[Pipeline {run_id}] Starting {len(agents)} steps")

    final_state = await graph.ainvoke(
        initial_state,
        config={"recursion_limit": len(agents) + 5},
    )

    results = list(final_state["results"])
    last = results[-1] if results else None
    success = len(results) == len(agents) and all(step.result.success for step in results)

    logger.info(
        f"[Pipeline {run_id}] Finished {len(results)}/{len(agents)} steps "
        f"(success={success}, halted={final_state['halted']})"
    )

    return PipelineRun(
        pipeline_id=run_id,
        success=success,
        halted=final_state["halted"],
        steps=results,
        final_output=last.result.output if last and last.result.success else None,
    )


__all__ = [
    "build_pipeline_workflow",
    "compile_pipeline",
    "run_pipeline",
]
