"""
Pipeline Service
================
Runs agents for the API: single executions, sequential pipelines and
parallel fan-out, recording every result in the execution stats.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

from agent_core.agents.factory import create_agent, create_agent_from_config
from agent_core.app.core.config import Settings, get_settings
from agent_core.app.schemas.execution import AgentConfiguration, ExecutionResult
from agent_core.app.schemas.pipeline import ParallelRun, PipelineRun, PipelineStepResult
from agent_core.graph.workflow import run_pipeline
from agent_core.services.stats_service import StatsService, get_stats_service
from agent_core.services.work_source import WorkSource

logger = logging.getLogger(__name__)


async def run_parallel(
    steps: Sequence[AgentConfiguration],
    input: Mapping[str, Any] | None = None,
    *,
    work_source: WorkSource | None = None,
    settings: Settings | None = None,
) -> ParallelRun:
    """
    Execute independent agents concurrently on the same input.

    Results are returned in step order. Every agent is built before any
    runs, so a bad step fails the whole request up front.

    Raises:
        UnsupportedAgentTypeError: If a step names an unknown agent type
        pydantic.ValidationError: If a step's configuration is invalid
    """
    agents = [
        create_agent_from_config(step, work_source=work_source, settings=settings)
        for step in steps
    ]

    logger.info(f"Running {len(agents)} agents in parallel")

    results = await asyncio.gather(
        *(agent.execute(dict(input) if input is not None else None) for agent in agents)
    )

    step_results = [
        PipelineStepResult(index=index, agent_id=agent.id, agent_type=agent.type, result=result)
        for index, (agent, result) in enumerate(zip(agents, results))
    ]
    return ParallelRun(
        success=all(step.result.success for step in step_results),
        steps=step_results,
    )


# =============================================================================
# PIPELINE SERVICE
# =============================================================================

class PipelineService:
    """
    Execution entry point used by the HTTP layer.

    Responsibilities:
    - Build agents through the factory
    - Run single agents, sequential pipelines and parallel fan-outs
    - Record every execution result in the stats service
    """

    def __init__(
        self,
        stats: StatsService | None = None,
        work_source: WorkSource | None = None,
        settings: Settings | None = None,
    ):
        self.stats = stats or get_stats_service()
        self.work_source = work_source
        self.settings = settings or get_settings()

    async def execute_agent(
        self,
        agent_id: str,
        agent_type: str,
        configuration: Mapping[str, Any] | None = None,
        input: Mapping[str, Any] | None = None,
    ) -> ExecutionResult:
        """Build and execute one agent."""
        agent = create_agent(
            agent_id,
            agent_type,
            configuration,
            work_source=self.work_source,
            settings=self.settings,
        )
        result = await agent.execute(input)
        self.stats.record(agent.id, result)
        return result

    async def run_pipeline(
        self,
        steps: Sequence[AgentConfiguration],
        input: dict[str, Any] | None = None,
        stop_on_failure: bool = True,
    ) -> PipelineRun:
        """Run agents sequentially, each fed the previous output."""
        run = await run_pipeline(
            steps,
            input,
            stop_on_failure,
            work_source=self.work_source,
            settings=self.settings,
        )
        self._record_steps(run.steps)
        return run

    async def run_parallel(
        self,
        steps: Sequence[AgentConfiguration],
        input: Mapping[str, Any] | None = None,
    ) -> ParallelRun:
        """Run independent agents concurrently."""
        run = await run_parallel(
            steps,
            input,
            work_source=self.work_source,
            settings=self.settings,
        )
        self._record_steps(run.steps)
        return run

    def _record_steps(self, steps: Sequence[PipelineStepResult]) -> None:
        for step in steps:
            self.stats.record(step.agent_id, step.result)


__all__ = [
    "run_parallel",
    "PipelineService",
]
