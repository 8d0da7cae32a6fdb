"""
Agent Configuration Schemas
===========================
Typed, per-agent-type views of the free-form `configuration` map.

Every field has a default, so an empty or missing map is valid. Values are
validated when the agent is constructed; execution never re-reads the raw map.
Unknown keys are kept (extra="allow") as agent-specific options.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from agent_core.app.schemas.base import OptionsSchema


DEFAULT_LEAD_SOURCES = ["website", "social_media", "linkedin"]
DEFAULT_INDUSTRIES = ["Technology", "Healthcare", "Finance", "E-commerce"]
DEFAULT_JOB_TITLES = ["CEO", "CTO", "Marketing Director", "VP Sales"]
DEFAULT_SCORING_CRITERIA = ["revenue", "size", "industry"]
DEFAULT_SOCIAL_TOPICS = ["AI", "Business", "Technology"]
DEFAULT_CONTENT_KEYWORDS = ["AI Agents", "Business Automation", "Digital Transformation"]

CompanySize = Literal["startup", "small", "medium", "large", "enterprise"]


def _default_if_empty(v: Any, default: list[str]) -> Any:
    """Swap a null or empty list for the default one."""
    if v is None or (isinstance(v, list) and not v):
        return list(default)
    return v


# =============================================================================
# SHARED OPTIONS
# =============================================================================

class AgentOptions(OptionsSchema):
    """Options every agent type understands."""
    max_execution_time: Optional[int] = Field(
        default=None,
        ge=1000,
        le=300000,
        description="Per-execution timeout in ms (falls back to settings)",
    )
    complexity: float = Field(
        default=1.0,
        ge=0.1,
        le=10.0,
        description="Multiplier applied to staged provider latency",
    )


# =============================================================================
# LEAD GENERATOR
# =============================================================================

class TargetCriteria(OptionsSchema):
    """Who the generated leads should look like."""
    industries: list[str] = Field(default_factory=lambda: list(DEFAULT_INDUSTRIES))
    job_titles: list[str] = Field(default_factory=lambda: list(DEFAULT_JOB_TITLES))
    company_size: Optional[CompanySize] = None
    location: Optional[str] = None

    @field_validator("industries", mode="before")
    @classmethod
    def default_industries(cls, v: Any) -> Any:
        return _default_if_empty(v, DEFAULT_INDUSTRIES)

    @field_validator("job_titles", mode="before")
    @classmethod
    def default_job_titles(cls, v: Any) -> Any:
        return _default_if_empty(v, DEFAULT_JOB_TITLES)


class LeadQualification(OptionsSchema):
    """Scoring rule applied to generated leads."""
    minimum_score: float = Field(default=50, ge=0, le=100)
    scoring_criteria: list[str] = Field(default_factory=lambda: list(DEFAULT_SCORING_CRITERIA))


class LeadGeneratorOptions(AgentOptions):
    sources: list[str] = Field(default_factory=lambda: list(DEFAULT_LEAD_SOURCES))
    target_criteria: TargetCriteria = Field(default_factory=TargetCriteria)
    lead_qualification: LeadQualification = Field(default_factory=LeadQualification)
    daily_limit: int = Field(default=100, ge=1, le=1000)
    output_format: Literal["csv", "json", "crm"] = "json"

    @field_validator("sources", mode="before")
    @classmethod
    def default_sources(cls, v: Any) -> Any:
        return _default_if_empty(v, DEFAULT_LEAD_SOURCES)


# =============================================================================
# EMAIL MARKETER
# =============================================================================

class EmailTemplate(OptionsSchema):
    """A campaign template; `variables` lists the placeholders to fill."""
    id: str
    name: str
    subject: str
    content: str
    variables: list[str] = Field(default_factory=list)


class Segmentation(OptionsSchema):
    enabled: bool = True
    criteria: list[str] = Field(default_factory=lambda: ["industry", "score"])


class Tracking(OptionsSchema):
    opens: bool = True
    clicks: bool = True
    unsubscribes: bool = False


class EmailMarketerOptions(AgentOptions):
    email_provider: str = "sendgrid"
    templates: list[EmailTemplate] = Field(default_factory=list)
    segmentation: Segmentation = Field(default_factory=Segmentation)
    scheduling: dict[str, Any] = Field(default_factory=dict)
    tracking: Tracking = Field(default_factory=Tracking)


# =============================================================================
# SOCIAL MEDIA
# =============================================================================

class HashtagOptions(OptionsSchema):
    enabled: bool = True
    max_count: int = Field(default=5, ge=1, le=30)


class ContentGeneration(OptionsSchema):
    tone: str = "professional"
    topics: list[str] = Field(default_factory=lambda: list(DEFAULT_SOCIAL_TOPICS))
    hashtags: HashtagOptions = Field(default_factory=HashtagOptions)

    @field_validator("topics", mode="before")
    @classmethod
    def default_topics(cls, v: Any) -> Any:
        return _default_if_empty(v, DEFAULT_SOCIAL_TOPICS)


class EngagementOptions(OptionsSchema):
    auto_like: bool = False
    auto_comment: bool = False
    auto_follow: bool = False
    response_time: int = Field(default=3600, ge=60, le=86400)

    @property
    def any_enabled(self) -> bool:
        return self.auto_like or self.auto_comment or self.auto_follow


class PostingOptions(OptionsSchema):
    frequency: int = Field(default=3, ge=1, le=24)
    optimal_times: list[str] = Field(default_factory=list)


class SocialMediaOptions(AgentOptions):
    platforms: list[str] = Field(default_factory=lambda: ["twitter", "linkedin"])
    post_types: list[str] = Field(default_factory=lambda: ["text", "image"])
    content_generation: ContentGeneration = Field(default_factory=ContentGeneration)
    engagement: EngagementOptions = Field(default_factory=EngagementOptions)
    posting: PostingOptions = Field(default_factory=PostingOptions)

    @field_validator("platforms", mode="before")
    @classmethod
    def default_platforms(cls, v: Any) -> Any:
        return _default_if_empty(v, ["twitter", "linkedin"])


# =============================================================================
# CONTENT CREATOR
# =============================================================================

class WritingOptions(OptionsSchema):
    tone: str = "professional"
    style: Optional[str] = None


class ContentSeoOptions(OptionsSchema):
    enabled: bool = True
    keywords: list[str] = Field(default_factory=lambda: list(DEFAULT_CONTENT_KEYWORDS))

    @field_validator("keywords", mode="before")
    @classmethod
    def default_keywords(cls, v: Any) -> Any:
        return _default_if_empty(v, DEFAULT_CONTENT_KEYWORDS)


class ContentCreatorOptions(AgentOptions):
    content_types: list[str] = Field(default_factory=lambda: ["blog_post"])
    writing: WritingOptions = Field(default_factory=WritingOptions)
    seo: ContentSeoOptions = Field(default_factory=ContentSeoOptions)


# =============================================================================
# ANALYTICS / CUSTOMER SERVICE / SALES / SEO
# =============================================================================

class AnalyticsOptions(AgentOptions):
    data_sources: list[str] = Field(default_factory=lambda: ["google_analytics"])
    metrics: list[str] = Field(default_factory=lambda: ["traffic", "conversions"])


class CustomerServiceOptions(AgentOptions):
    channels: list[str] = Field(default_factory=lambda: ["email", "chat"])
    responses: dict[str, Any] = Field(default_factory=dict)

    @field_validator("channels", mode="before")
    @classmethod
    def default_channels(cls, v: Any) -> Any:
        return _default_if_empty(v, ["email", "chat"])


class OutreachOptions(OptionsSchema):
    channels: list[str] = Field(default_factory=lambda: ["email"])


class SalesOptions(AgentOptions):
    pipeline: dict[str, Any] = Field(default_factory=dict)
    outreach: OutreachOptions = Field(default_factory=OutreachOptions)


class SeoTargets(OptionsSchema):
    keywords: list[str] = Field(default_factory=list)
    competitors: list[str] = Field(default_factory=list)
    target_pages: list[str] = Field(default_factory=list)


class SeoOptimizerOptions(AgentOptions):
    targets: SeoTargets = Field(default_factory=SeoTargets)
    optimization: dict[str, Any] = Field(default_factory=dict)
