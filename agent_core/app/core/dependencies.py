"""
Dependency Injection Setup
==========================
FastAPI dependency functions.
Every endpoint reaches settings, the work source and the execution
services through these dependencies, so tests can override them.
"""

from typing import Annotated, Optional

from fastapi import Depends

from agent_core.app.core.config import Settings, get_settings
from agent_core.services.pipeline_service import PipelineService
from agent_core.services.stats_service import StatsService, get_stats_service
from agent_core.services.work_source import WorkSource, get_default_work_source


# =============================================================================
# SETTINGS DEPENDENCY
# =============================================================================

def get_settings_dep() -> Settings:
    """
    Settings dependency for FastAPI endpoints.

    Usage:
        @router.get("/")
        async def endpoint(settings: Annotated[Settings, Depends(get_settings_dep)]):
            return {"debug": settings.debug}
    """
    return get_settings()


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]


# =============================================================================
# WORK SOURCE
# =============================================================================

class WorkSourceManager:
    """
    Process-wide work source manager.
    Builds the configured source once and shares it across requests.
    """

    _source: Optional[WorkSource] = None

    @classmethod
    def get_source(cls, settings: Settings) -> WorkSource:
        """Get or create the configured work source."""
        if cls._source is None:
            cls._source = get_default_work_source(settings)
        return cls._source

    @classmethod
    def reset(cls) -> None:
        """Drop the shared source (rebuilt from settings on next use)."""
        cls._source = None


def get_work_source_dep(settings: SettingsDep) -> WorkSource:
    """Work source dependency."""
    return WorkSourceManager.get_source(settings)


WorkSourceDep = Annotated[WorkSource, Depends(get_work_source_dep)]


# =============================================================================
# EXECUTION SERVICES
# =============================================================================

def get_stats_dep() -> StatsService:
    """Execution stats dependency."""
    return get_stats_service()


StatsDep = Annotated[StatsService, Depends(get_stats_dep)]


def get_pipeline_service(
    settings: SettingsDep,
    work_source: WorkSourceDep,
    stats: StatsDep,
) -> PipelineService:
    """
    Pipeline service dependency.

    Usage:
        @router.post("/")
        async def endpoint(service: PipelineServiceDep):
            return await service.run_parallel(steps)
    """
    return PipelineService(stats=stats, work_source=work_source, settings=settings)


PipelineServiceDep = Annotated[PipelineService, Depends(get_pipeline_service)]


# =============================================================================
# DEPENDENCY EXPORTS
# =============================================================================

__all__ = [
    # Settings
    "get_settings_dep",
    "SettingsDep",
    # Work source
    "WorkSourceManager",
    "get_work_source_dep",
    "WorkSourceDep",
    # Services
    "get_stats_dep",
    "StatsDep",
    "get_pipeline_service",
    "PipelineServiceDep",
]
