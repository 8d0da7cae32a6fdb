"""
Services Module
===============
Work sources and execution bookkeeping.

The pipeline service is imported from `agent_core.services.pipeline_service`
directly; it builds on the agent layer, which depends on this package.
"""

from agent_core.services.work_source import (
    # Base
    WorkSource,
    # Implementations
    SimulatedWorkSource,
    # Registry
    get_work_source,
    register_work_source,
    get_default_work_source,
)

from agent_core.services.stats_service import (
    # Errors
    AgentNotFoundError,
    # Service
    StatsService,
    # DI
    get_stats_service,
)

__all__ = [
    # Work sources
    "WorkSource",
    "SimulatedWorkSource",
    "get_work_source",
    "register_work_source",
    "get_default_work_source",
    # Stats
    "AgentNotFoundError",
    "StatsService",
    "get_stats_service",
]
