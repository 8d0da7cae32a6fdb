"""
Result & Metrics Construction
=============================
Pure functions every agent uses to build its ExecutionResult, so all
variants produce identical envelopes and metrics shapes.
"""

from __future__ import annotations

import time
from typing import Any, Mapping

from agent_core.app.schemas.execution import (
    SHARED_DATA_KEY,
    ExecutionMetrics,
    ExecutionResult,
)
from agent_core.services.work_source import WorkSource


def _coerce_metrics(metrics: ExecutionMetrics | Mapping[str, Any] | None) -> ExecutionMetrics:
    """Missing or null metric fields fall back to their zero defaults."""
    if metrics is None:
        return ExecutionMetrics()
    if isinstance(metrics, ExecutionMetrics):
        return metrics
    return ExecutionMetrics.model_validate(
        {key: value for key, value in metrics.items() if value is not None}
    )


def build_success(
    output: Mapping[str, Any],
    metrics: ExecutionMetrics | Mapping[str, Any] | None = None,
) -> ExecutionResult:
    """Wrap agent output in a successful envelope; `sharedData` is always present."""
    payload = dict(output)
    shared = payload.get(SHARED_DATA_KEY)
    payload[SHARED_DATA_KEY] = dict(shared) if isinstance(shared, Mapping) else {}
    return ExecutionResult(success=True, output=payload, metrics=_coerce_metrics(metrics))


def build_error(
    message: str,
    metrics: ExecutionMetrics | Mapping[str, Any] | None = None,
) -> ExecutionResult:
    """Wrap a human-readable message in a failed envelope; metrics still populated."""
    return ExecutionResult(
        success=False,
        error=message or "Agent execution failed",
        metrics=_coerce_metrics(metrics),
    )


def start_timer() -> float:
    """Monotonic start time for synthesize_metrics()."""
    return time.monotonic()


def synthesize_metrics(
    start_time: float,
    api_calls: int,
    work_source: WorkSource,
) -> ExecutionMetrics:
    """
    Metrics for an execution that started at `start_time` (see start_timer()).

    Resource figures come from the work source; a measuring source keeps the
    same fields and the same non-negativity.
    """
    duration = max(0, int(round((time.monotonic() - start_time) * 1000)))
    sample = work_source.resource_sample()

    return ExecutionMetrics(
        duration=duration,
        resource_usage={
            "processingTime": float(duration),
            "memoryPeak": sample["memoryPeak"],
            "cpuPeak": sample["cpuPeak"],
        },
        api_calls=max(0, api_calls),
        memory_usage=sample["memoryUsage"],
        cpu_usage=sample["cpuUsage"],
    )


__all__ = [
    "build_success",
    "build_error",
    "start_timer",
    "synthesize_metrics",
]
