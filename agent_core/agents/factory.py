"""
Agent Factory
=============
Maps a catalog type to its agent class and builds instances.

The catalog is closed: the registry must cover every AgentType member
(checked at import), and any other type name is rejected with
UnsupportedAgentTypeError instead of silently producing a no-op agent.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from agent_core.agents.analytics import AnalyticsAgent
from agent_core.agents.base import BaseAgent
from agent_core.agents.content_creator import ContentCreatorAgent
from agent_core.agents.customer_service import CustomerServiceAgent
from agent_core.agents.email_marketer import EmailMarketerAgent
from agent_core.agents.lead_generator import LeadGeneratorAgent
from agent_core.agents.sales import SalesAgent
from agent_core.agents.seo_optimizer import SeoOptimizerAgent
from agent_core.agents.social_media import SocialMediaAgent
from agent_core.app.core.config import Settings
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.execution import AgentConfiguration
from agent_core.app.schemas.pipeline import AgentTypeInfo
from agent_core.services.work_source import WorkSource

logger = logging.getLogger(__name__)


class UnsupportedAgentTypeError(ValueError):
    """Raised when an agent type is not part of the executable catalog."""

    def __init__(self, agent_type: Any):
        self.agent_type = agent_type.value if isinstance(agent_type, AgentType) else str(agent_type)
        super().__init__(f"Unsupported agent type: {self.agent_type}")


# =============================================================================
# REGISTRY
# =============================================================================

AGENT_REGISTRY: dict[AgentType, type[BaseAgent]] = {
    AgentType.LEAD_GENERATOR: LeadGeneratorAgent,
    AgentType.EMAIL_MARKETER: EmailMarketerAgent,
    AgentType.SOCIAL_MEDIA: SocialMediaAgent,
    AgentType.CONTENT_CREATOR: ContentCreatorAgent,
    AgentType.ANALYTICS: AnalyticsAgent,
    AgentType.CUSTOMER_SERVICE: CustomerServiceAgent,
    AgentType.SALES: SalesAgent,
    AgentType.SEO_OPTIMIZER: SeoOptimizerAgent,
}

_missing = [agent_type.value for agent_type in AgentType if agent_type not in AGENT_REGISTRY]
if _missing:
    raise RuntimeError(f"Agent registry is missing implementations for: {', '.join(_missing)}")


def resolve_agent_type(value: AgentType | str) -> AgentType:
    """
    Resolve a catalog type name.

    Raises:
        UnsupportedAgentTypeError: If `value` is not one of the catalog types
    """
    if isinstance(value, AgentType):
        return value
    try:
        return AgentType(value)
    except ValueError:
        raise UnsupportedAgentTypeError(value) from None


# =============================================================================
# CONSTRUCTION
# =============================================================================

def create_agent(
    id: str,
    type: AgentType | str,
    configuration: Mapping[str, Any] | None = None,
    *,
    work_source: WorkSource | None = None,
    settings: Settings | None = None,
) -> BaseAgent:
    """
    Build the agent for a catalog type.

    Args:
        id: Agent instance id
        type: Catalog type (enum member or its string value)
        configuration: Free-form option map; None means all defaults
        work_source: Optional work source override (tests, real providers)
        settings: Optional settings override

    Raises:
        UnsupportedAgentTypeError: If the type is not in the catalog
        pydantic.ValidationError: If a configuration value is invalid
    """
    agent_type = resolve_agent_type(type)
    agent_class = AGENT_REGISTRY[agent_type]

    logger.debug(f"Creating {agent_class.__name__} for agent {id}")
    return agent_class(
        id,
        agent_type,
        configuration,
        work_source=work_source,
        settings=settings,
    )


def create_agent_from_config(
    config: AgentConfiguration,
    *,
    work_source: WorkSource | None = None,
    settings: Settings | None = None,
) -> BaseAgent:
    """Build an agent from its declarative configuration record."""
    return create_agent(
        config.id,
        config.type,
        config.configuration,
        work_source=work_source,
        settings=settings,
    )


def supported_agent_types() -> list[AgentTypeInfo]:
    """The executable catalog with labels, descriptions and sharedData fields."""
    return [
        AgentTypeInfo(
            value=agent_type,
            label=agent_class.label,
            description=agent_class.description,
            shared_data_fields=list(
                agent_class.shared_data_schema.model_json_schema(by_alias=True)["properties"]
            ),
        )
        for agent_type, agent_class in AGENT_REGISTRY.items()
    ]


__all__ = [
    "AGENT_REGISTRY",
    "UnsupportedAgentTypeError",
    "resolve_agent_type",
    "create_agent",
    "create_agent_from_config",
    "supported_agent_types",
]
