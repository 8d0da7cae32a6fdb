"""
Agents Module
=============
The executable agent catalog behind a uniform `execute(input)` contract.

Catalog:
- Acquisition: Lead generation, sales outreach
- Campaigns: Email marketing, social media, content creation
- Operations: Analytics, customer service, SEO optimization
"""

from agent_core.agents.base import (
    # Contract
    AgentRun,
    BaseAgent,
)
from agent_core.agents.results import (
    build_error,
    build_success,
    synthesize_metrics,
)
from agent_core.agents.handoff import (
    handoff_list,
    handoff_value,
    shared_data,
)
from agent_core.agents.lead_generator import LeadGeneratorAgent, qualify_leads
from agent_core.agents.email_marketer import EmailMarketerAgent, segment_recipients
from agent_core.agents.social_media import SocialMediaAgent, adapt_post
from agent_core.agents.content_creator import ContentCreatorAgent
from agent_core.agents.analytics import AnalyticsAgent
from agent_core.agents.customer_service import CustomerServiceAgent
from agent_core.agents.sales import SalesAgent
from agent_core.agents.seo_optimizer import SeoOptimizerAgent
from agent_core.agents.factory import (
    AGENT_REGISTRY,
    UnsupportedAgentTypeError,
    create_agent,
    create_agent_from_config,
    supported_agent_types,
)

__all__ = [
    # Contract
    "AgentRun",
    "BaseAgent",
    # Results
    "build_error",
    "build_success",
    "synthesize_metrics",
    # Handoff
    "handoff_list",
    "handoff_value",
    "shared_data",
    # Agents
    "LeadGeneratorAgent",
    "EmailMarketerAgent",
    "SocialMediaAgent",
    "ContentCreatorAgent",
    "AnalyticsAgent",
    "CustomerServiceAgent",
    "SalesAgent",
    "SeoOptimizerAgent",
    # Pure steps
    "qualify_leads",
    "segment_recipients",
    "adapt_post",
    # Factory
    "AGENT_REGISTRY",
    "UnsupportedAgentTypeError",
    "create_agent",
    "create_agent_from_config",
    "supported_agent_types",
]
