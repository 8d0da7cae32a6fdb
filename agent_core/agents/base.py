"""
Base Agent Architecture
=======================
Abstract base class for every executable agent in the catalog.

All agents must:
1. Inherit from BaseAgent and set `agent_type`, `label`, `failure_message`
2. Declare their typed configuration (`options_schema`) and the shape of
   the sharedData they emit (`shared_data_schema`)
3. Implement run(), returning an AgentRun
4. Route every latency and random figure through the work source

execute() is the only public entry point. It never raises for execution
failures: any exception (including a timeout) becomes an error
ExecutionResult with metrics attached. Task cancellation is not an
execution failure and propagates to the caller.

Each execution draws from its own child of the configured work source
(`WorkSource.spawn`), so concurrent calls never share a generator.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from agent_core.agents.results import (
    build_error,
    build_success,
    start_timer,
    synthesize_metrics,
)
from agent_core.app.core.config import Settings, get_settings
from agent_core.app.schemas.agent_config import AgentOptions
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.execution import ExecutionResult
from agent_core.app.schemas.shared_data import SharedData
from agent_core.services.work_source import WorkSource, get_default_work_source

logger = logging.getLogger(__name__)

# Type variable for agent option schemas
OptionsT = TypeVar("OptionsT", bound=AgentOptions)

# (agent, work source) of the execution running in the current task
_execution_source: ContextVar[tuple[BaseAgent, WorkSource] | None] = ContextVar(
    "execution_work_source", default=None
)


# =============================================================================
# AGENT RUN
# =============================================================================

@dataclass(frozen=True)
class AgentRun:
    """
    What a variant's run() produced.

    `api_calls` is the number of provider calls the run accounts for; it is
    reported in the metrics of a successful result.
    """
    output: dict[str, Any] = field(default_factory=dict)
    api_calls: int = 0


# =============================================================================
# BASE AGENT ABSTRACT CLASS
# =============================================================================

class BaseAgent(ABC, Generic[OptionsT]):
    """
    Abstract base for the eight catalog agents.

    Instances are immutable and hold no per-execution state, so one agent
    can serve concurrent execute() calls.

    Type Parameters:
        OptionsT: The pydantic model type of the agent's configuration

    Example:
        >>> class EchoAgent(BaseAgent[AgentOptions]):
        ...     agent_type = AgentType.ANALYTICS
        ...     label = "Echo"
        ...     failure_message = "Echo failed"
        ...     options_schema = AgentOptions
        ...
        ...     async def run(self, input):
        ...         await self.stage(100)
        ...         return AgentRun(output={"sharedData": {}}, api_calls=1)
    """

    # Agent identification (override in subclass)
    agent_type: ClassVar[AgentType]
    label: ClassVar[str] = "Agent"
    description: ClassVar[str] = "Base agent - override in subclass"
    failure_message: ClassVar[str] = "Agent execution failed"

    # Configuration and handoff schemas
    options_schema: ClassVar[type[AgentOptions]] = AgentOptions
    shared_data_schema: ClassVar[type[SharedData]] = SharedData

    def __init__(
        self,
        id: str,
        type: AgentType | str,
        configuration: Mapping[str, Any] | None = None,
        *,
        work_source: WorkSource | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the agent.

        Args:
            id: Agent instance id
            type: Must match this class's agent_type
            configuration: Free-form option map (None means all defaults)
            work_source: Source of staged latency and synthetic figures
            settings: Application settings (defaults to get_settings())

        Raises:
            ValueError: If `type` does not match this class
            pydantic.ValidationError: If a configuration value is invalid
        """
        agent_type = AgentType(type)
        if agent_type is not self.agent_type:
            raise ValueError(
                f"{self.__class__.__name__} executes {self.agent_type.value} agents, "
                f"not {agent_type.value}"
            )

        raw = dict(configuration or {})

        self._id = id
        self._type = agent_type
        self._configuration: Mapping[str, Any] = MappingProxyType(raw)
        self._options: OptionsT = self.options_schema.model_validate(raw)
        self._settings = settings or get_settings()
        self._work_source = work_source or get_default_work_source(self._settings)

        logger.info(f"Initialized agent: {self.label} ({self._id})")

    # =========================================================================
    # READ-ONLY ATTRIBUTES
    # =========================================================================

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> AgentType:
        return self._type

    @property
    def configuration(self) -> Mapping[str, Any]:
        """The raw configuration map, read-only."""
        return self._configuration

    @property
    def options(self) -> OptionsT:
        """The validated, typed configuration."""
        return self._options

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def work_source(self) -> WorkSource:
        """
        The source of the execution in progress.

        Inside execute() this is a child spawned for that execution alone;
        outside it, the configured source.
        """
        current = _execution_source.get()
        if current is not None and current[0] is self:
            return current[1]
        return self._work_source

    @property
    def timeout_seconds(self) -> float:
        """`maxExecutionTime` (ms) when configured, else the settings default."""
        if self._options.max_execution_time is not None:
            return self._options.max_execution_time / 1000
        return self._settings.agent_execution_timeout_seconds

    # =========================================================================
    # ABSTRACT METHODS (Must be implemented by subclasses)
    # =========================================================================

    @abstractmethod
    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        """
        Variant-specific staged work.

        Args:
            input: Execution input; may be None, {} or a previous agent's output

        Returns:
            AgentRun with the output map (including `sharedData`) and the
            number of provider calls made

        Note:
            Never store per-execution data on self.
        """
        pass

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def stage(self, base_delay_ms: float) -> None:
        """One staged provider call, scaled by the configured complexity."""
        await self.work_source.wait(base_delay_ms * self._options.complexity)

    def execution_info(self) -> dict[str, Any]:
        """The `execution` block attached to every successful output."""
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "agentId": self._id,
            "agentType": self._type.value,
        }

    def _failure_text(self, error: BaseException) -> str:
        detail = str(error)
        return f"{self.failure_message}: {detail}" if detail else self.failure_message

    # =========================================================================
    # EXECUTION CONTRACT
    # =========================================================================

    async def execute(self, input: Mapping[str, Any] | None = None) -> ExecutionResult:
        """
        Run the agent once and wrap the outcome in an ExecutionResult.

        Args:
            input: Optional input map, typically a previous agent's output

        Returns:
            A successful result with output and metrics, or an error result
            with metrics. Execution failures are never raised.
        """
        start_time = start_timer()
        timeout = self.timeout_seconds
        source = self._work_source.spawn()

        logger.info(f"[{self.label}] Starting execution for agent {self._id}")

        token = _execution_source.set((self, source))
        try:
            agent_run = await asyncio.wait_for(self.run(input), timeout=timeout)

            metrics = synthesize_metrics(start_time, agent_run.api_calls, source)
            output = dict(agent_run.output)
            output["execution"] = {**self.execution_info(), "processingTime": metrics.duration}
            result = build_success(output, metrics)

        except asyncio.TimeoutError:
            logger.error(f"[{self.label}] Execution timed out after {timeout:g}s")
            return build_error(
                f"{self.failure_message}: timed out after {timeout:g}s",
                synthesize_metrics(start_time, 0, source),
            )

        except Exception as e:
            logger.error(f"[{self.label}] Execution failed: {e}", exc_info=True)
            return build_error(
                self._failure_text(e),
                synthesize_metrics(start_time, 0, source),
            )

        finally:
            _execution_source.reset(token)

        logger.info(
            f"[{self.label}] Completed in {result.metrics.duration}ms "
            f"({result.metrics.api_calls} api calls)"
        )
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, type={self._type.value})"


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "AgentRun",
    "BaseAgent",
]
