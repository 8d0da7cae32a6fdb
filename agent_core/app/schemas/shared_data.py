"""
Shared Data Schemas
===================
The `sharedData` slice each agent emits for the next agent in a chain.

Field names (camelCase on the wire) are the cross-agent contract: a consumer
such as the social media agent reads `leadCount` produced by the lead
generator. Renaming a field here breaks every chain that relies on it.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from agent_core.app.schemas.base import CamelSchema


class SharedData(CamelSchema):
    """Base class for sharedData payloads."""

    def to_handoff(self) -> dict[str, Any]:
        """Dump with the camelCase names consumers look up."""
        return self.model_dump(by_alias=True)


class LeadGenerationSharedData(SharedData):
    lead_count: int = Field(ge=0)
    avg_lead_score: float = Field(ge=0)
    leads: list[dict[str, Any]] = Field(default_factory=list)


class EmailCampaignSharedData(SharedData):
    emails_sent: int = Field(ge=0)
    open_rate: float | None = None
    click_rate: float | None = None
    campaign_id: str


class SocialMediaSharedData(SharedData):
    posts_published: int = Field(ge=0)
    total_reach: int = Field(ge=0)
    engagement_rate: float = Field(ge=0)


class ContentSharedData(SharedData):
    content_created: int = Field(ge=0)
    total_words: int = Field(ge=0)


class AnalyticsSharedData(SharedData):
    conversion_rate: float
    total_traffic: int = Field(ge=0)


class CustomerServiceSharedData(SharedData):
    tickets_resolved: int = Field(ge=0)
    satisfaction_score: float = Field(ge=0, le=10)


class SalesSharedData(SharedData):
    deals_created: int = Field(ge=0)
    revenue: int = Field(ge=0)


class SeoSharedData(SharedData):
    seo_score: int = Field(ge=0, le=100)
    ranking_improvement: float


__all__ = [
    "SharedData",
    "LeadGenerationSharedData",
    "EmailCampaignSharedData",
    "SocialMediaSharedData",
    "ContentSharedData",
    "AnalyticsSharedData",
    "CustomerServiceSharedData",
    "SalesSharedData",
    "SeoSharedData",
]
