"""
LangGraph Workflow Module
=========================
Sequential agent pipelines with LangGraph.

This module provides:
- PipelineState: State carried between pipeline steps
- Workflow builder: One node per agent, linear edges
- Node functions: Agent execution wrapped as graph nodes
- Routing logic: Halting after a failed step
"""

from agent_core.graph.state import (
    PipelineState,
    create_initial_state,
    last_result,
)

from agent_core.graph.nodes import (
    make_agent_node,
    node_name,
)

from agent_core.graph.routers import (
    route_after_step,
)

from agent_core.graph.workflow import (
    build_pipeline_workflow,
    compile_pipeline,
    run_pipeline,
)

__all__ = [
    # State
    "PipelineState",
    "create_initial_state",
    "last_result",
    # Nodes
    "make_agent_node",
    "node_name",
    # Routers
    "route_after_step",
    # Workflow
    "build_pipeline_workflow",
    "compile_pipeline",
    "run_pipeline",
]
