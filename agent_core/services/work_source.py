"""
Work Sources
============
The seam where agents "call an external provider".

Agents never touch `random` or `asyncio.sleep` directly: every latency and
every synthetic business figure is drawn from a WorkSource. The simulated
source below stands in for real provider calls; a production source can
replace it without touching scoring, segmentation or aggregation logic.
"""

from __future__ import annotations

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import Any, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# ABSTRACT BASE CLASS
# =============================================================================


class WorkSource(ABC):
    """
    Abstract source of staged work and synthetic outcomes.

    Implementations must:
    - wait(): suspend for one provider call; never raise under normal conditions
    - uniform()/randint()/choice()/chance()/shuffled(): draw outcomes
    - resource_sample(): report memory/cpu estimates for metrics
    - spawn(): hand out the source used by a single execution
    """

    name: str = "base"

    @abstractmethod
    async def wait(self, delay_ms: float) -> None:
        """Suspend for one staged provider call of roughly `delay_ms`."""
        pass

    @abstractmethod
    def uniform(self, low: float, high: float) -> float:
        """Float in [low, high)."""
        pass

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], both inclusive."""
        pass

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element of a non-empty sequence."""
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[self.randint(0, len(items) - 1)]

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self.uniform(0.0, 1.0) < probability

    def shuffled(self, items: Sequence[T]) -> list[T]:
        """A shuffled copy of `items`."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.randint(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def spawn(self) -> WorkSource:
        """
        A source for exactly one execution.

        Sources that keep per-draw state return an independent child, so
        concurrent executions never draw from the same generator. Stateless
        sources may return themselves.
        """
        return self

    def resource_sample(self) -> dict[str, float]:
        """Peak memory (MB) and cpu (%) estimates for one execution."""
        return {
            "memoryPeak": self.uniform(50.0, 150.0),
            "cpuPeak": self.uniform(20.0, 70.0),
            "memoryUsage": self.uniform(50.0, 150.0),
            "cpuUsage": self.uniform(20.0, 70.0),
        }


# =============================================================================
# SIMULATED SOURCE
# =============================================================================


class SimulatedWorkSource(WorkSource):
    """
    Randomized stand-in for provider calls.

    A staged call waits `delay + random * delay` ms, multiplied by
    `delay_scale` (0 disables waiting, which tests rely on).
    """

    name = "simulated"

    def __init__(self, seed: int | None = None, delay_scale: float = 1.0):
        if delay_scale < 0:
            raise ValueError(f"delay_scale must be >= 0, got {delay_scale}")
        self.seed = seed
        self.delay_scale = delay_scale
        self._rng = random.Random(seed)

    async def wait(self, delay_ms: float) -> None:
        jittered = delay_ms + self._rng.random() * delay_ms
        await asyncio.sleep(max(0.0, jittered * self.delay_scale) / 1000)

    def uniform(self, low: float, high: float) -> float:
        return low + self._rng.random() * (high - low)

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def spawn(self) -> SimulatedWorkSource:
        """Child source seeded from this one, with the same delay scale."""
        return type(self)(seed=self._rng.getrandbits(64), delay_scale=self.delay_scale)

    def __repr__(self) -> str:
        return f"SimulatedWorkSource(seed={self.seed!r}, delay_scale={self.delay_scale!r})"


# =============================================================================
# REGISTRY
# =============================================================================

_source_registry: dict[str, type[WorkSource]] = {
    "simulated": SimulatedWorkSource,
}


def get_work_source(name: str = "simulated", **kwargs: Any) -> WorkSource:
    """
    Create a work source by registered name.

    Args:
        name: Registered source name (case-insensitive)
        **kwargs: Constructor arguments for the source

    Raises:
        ValueError: If the source is not registered
    """
    name = name.lower()

    if name not in _source_registry:
        supported = ", ".join(sorted(_source_registry))
        raise ValueError(f"Unsupported work source: {name}. Supported: {supported}")

    return _source_registry[name](**kwargs)


def register_work_source(name: str, source_class: type[WorkSource]) -> None:
    """Register a custom work source (e.g. one backed by real providers)."""
    _source_registry[name.lower()] = source_class
    logger.info(f"Registered work source: {name.lower()}")


def get_default_work_source(settings: Any | None = None) -> WorkSource:
    """Build the work source described by application settings."""
    if settings is None:
        from agent_core.app.core.config import get_settings
        settings = get_settings()

    if settings.work_source == SimulatedWorkSource.name:
        return SimulatedWorkSource(
            seed=settings.work_source_seed,
            delay_scale=settings.simulated_delay_scale,
        )
    return get_work_source(settings.work_source)


__all__ = [
    "WorkSource",
    "SimulatedWorkSource",
    "get_work_source",
    "register_work_source",
    "get_default_work_source",
]
