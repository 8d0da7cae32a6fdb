"""
Pipeline API Endpoints
======================
Sequential pipelines (each agent fed the previous output) and parallel
fan-out over independent agents.
"""

from fastapi import APIRouter

from agent_core.app.core.dependencies import PipelineServiceDep
from agent_core.app.schemas.pipeline import (
    ParallelRequest,
    ParallelRun,
    PipelineRequest,
    PipelineRun,
)


router = APIRouter()


@router.post(
    "",
    response_model=PipelineRun,
    response_model_by_alias=True,
    summary="Run a sequential pipeline",
)
async def run_pipeline(
    request: PipelineRequest,
    service: PipelineServiceDep,
) -> PipelineRun:
    """
    Run the steps in order; each successful step's output is the next
    step's input.

    With `stopOnFailure` (default) the run ends at the first failed step
    and `halted` is true. Otherwise the next step receives an empty input.

    **Example Input:**
    ```json
    {
        "steps": [
            {"type": "LEAD_GENERATOR", "configuration": {"dailyLimit": 25}},
            {"type": "EMAIL_MARKETER"},
            {"type": "SOCIAL_MEDIA"}
        ]
    }
    ```
    """
    return await service.run_pipeline(
        steps=request.steps,
        input=request.input,
        stop_on_failure=request.stop_on_failure,
    )


@router.post(
    "/parallel",
    response_model=ParallelRun,
    response_model_by_alias=True,
    summary="Run independent agents concurrently",
)
async def run_parallel(
    request: ParallelRequest,
    service: PipelineServiceDep,
) -> ParallelRun:
    """Run every step concurrently on the same input; results keep step order."""
    return await service.run_parallel(steps=request.steps, input=request.input)
