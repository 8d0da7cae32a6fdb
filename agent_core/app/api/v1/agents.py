"""
Agent API Endpoints
===================
Catalog listing, single agent execution and per-agent execution stats.
"""

from uuid import uuid4

from fastapi import APIRouter, HTTPException, status

from agent_core.agents.factory import supported_agent_types
from agent_core.app.core.dependencies import PipelineServiceDep, StatsDep
from agent_core.app.schemas.execution import ExecutionResult
from agent_core.app.schemas.pipeline import (
    AgentStats,
    AgentTypeListResponse,
    ExecuteAgentRequest,
)
from agent_core.services.stats_service import AgentNotFoundError


router = APIRouter()


# =============================================================================
# CATALOG
# =============================================================================

@router.get(
    "/types",
    response_model=AgentTypeListResponse,
    response_model_by_alias=True,
    summary="List executable agent types",
)
async def list_agent_types() -> AgentTypeListResponse:
    """
    List the agent catalog.

    Each entry names the type, a label, a description and the sharedData
    fields the agent hands to the next one in a pipeline.
    """
    return AgentTypeListResponse(types=supported_agent_types())


# =============================================================================
# EXECUTION
# =============================================================================

@router.post(
    "/execute",
    response_model=ExecutionResult,
    response_model_by_alias=True,
    summary="Execute one agent",
)
async def execute_agent(
    request: ExecuteAgentRequest,
    service: PipelineServiceDep,
) -> ExecutionResult:
    """
    Build an agent from `type` and `configuration` and execute it once.

    Execution failures are reported in the result (`success: false`), not
    as HTTP errors. An unsupported type returns 400; an invalid
    configuration returns 422.

    **Example Input:**
    ```json
    {
        "type": "LEAD_GENERATOR",
        "configuration": {"dailyLimit": 10, "leadQualification": {"minimumScore": 90}}
    }
    ```
    """
    return await service.execute_agent(
        agent_id=request.id or f"agent_{uuid4().hex[:12]}",
        agent_type=request.type,
        configuration=request.configuration,
        input=request.input,
    )


# =============================================================================
# STATS
# =============================================================================

@router.get(
    "/stats",
    response_model=list[AgentStats],
    response_model_by_alias=True,
    summary="List execution stats of all agents",
)
async def list_agent_stats(stats: StatsDep) -> list[AgentStats]:
    return stats.list_all()


@router.get(
    "/{agent_id}/stats",
    response_model=AgentStats,
    response_model_by_alias=True,
    summary="Get execution stats of one agent",
)
async def get_agent_stats(agent_id: str, stats: StatsDep) -> AgentStats:
    """Usage count, success rate, average response time and api calls."""
    try:
        return stats.get(agent_id)
    except AgentNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
