"""
Test Configuration and Fixtures
================================
Shared pytest fixtures: seeded zero-delay work sources, settings, an agent
builder and a FastAPI test client with its dependencies overridden.
"""

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from agent_core.agents.base import BaseAgent
from agent_core.agents.factory import create_agent
from agent_core.app.core.config import Settings
from agent_core.app.core.dependencies import get_stats_dep, get_work_source_dep
from agent_core.app.main import app as fastapi_app
from agent_core.app.schemas.base import AgentType
from agent_core.services.stats_service import StatsService
from agent_core.services.work_source import SimulatedWorkSource


TEST_SEED = 1234


# =============================================================================
# WORK SOURCE & SETTINGS FIXTURES
# =============================================================================

@pytest.fixture
def work_source() -> SimulatedWorkSource:
    """Seeded work source that never sleeps."""
    return SimulatedWorkSource(seed=TEST_SEED, delay_scale=0)


@pytest.fixture
def settings() -> Settings:
    """Development settings with simulated latency disabled."""
    return Settings(
        environment="development",
        simulated_delay_scale=0,
        work_source_seed=TEST_SEED,
    )


@pytest.fixture
def make_agent(work_source, settings) -> Callable[..., BaseAgent]:
    """Build catalog agents wired to the test work source and settings."""

    def _make(
        agent_type: AgentType | str,
        configuration: dict[str, Any] | None = None,
        agent_id: str = "agent_test",
    ) -> BaseAgent:
        return create_agent(
            agent_id,
            agent_type,
            configuration,
            work_source=work_source,
            settings=settings,
        )

    return _make


@pytest.fixture
def stats_service() -> StatsService:
    """Fresh, empty stats store."""
    return StatsService()


# =============================================================================
# APP FIXTURES
# =============================================================================

@pytest.fixture
def app(work_source, stats_service) -> FastAPI:
    """FastAPI application using the test work source and stats store."""
    fastapi_app.dependency_overrides[get_work_source_dep] = lambda: work_source
    fastapi_app.dependency_overrides[get_stats_dep] = lambda: stats_service
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Synchronous test client."""
    return TestClient(app)


# =============================================================================
# SAMPLE DATA
# =============================================================================

@pytest.fixture
def sample_leads() -> list[dict[str, Any]]:
    """Leads as a lead generator hands them to the next agent."""
    return [
        {
            "id": "lead_1",
            "email": "ada@technova.io",
            "firstName": "Ada",
            "lastName": "Lovelace",
            "company": "TechNova",
            "jobTitle": "CTO",
            "industry": "Technology",
            "score": 91,
        },
        {
            "id": "lead_2",
            "email": "grace@finlabs.com",
            "firstName": "Grace",
            "lastName": "Hopper",
            "company": "FinLabs",
            "jobTitle": "VP Sales",
            "industry": "Finance",
            "score": 64,
        },
        {
            "id": "lead_3",
            "email": "alan@carepoint.org",
            "firstName": "Alan",
            "lastName": "Turing",
            "company": "CarePoint",
            "jobTitle": "Marketing Director",
            "industry": "Healthcare",
            "score": 22,
        },
    ]
