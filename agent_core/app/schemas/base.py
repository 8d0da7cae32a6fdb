"""
Base Pydantic Schemas
=====================
Core schema definitions and the closed agent catalog enumeration.
All schemas use Pydantic V2; wire names are camelCase.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================


class AgentType(str, Enum):
    """Closed catalog of executable agent types."""
    LEAD_GENERATOR = "LEAD_GENERATOR"
    EMAIL_MARKETER = "EMAIL_MARKETER"
    SOCIAL_MEDIA = "SOCIAL_MEDIA"
    CONTENT_CREATOR = "CONTENT_CREATOR"
    ANALYTICS = "ANALYTICS"
    CUSTOMER_SERVICE = "CUSTOMER_SERVICE"
    SALES = "SALES"
    SEO_OPTIMIZER = "SEO_OPTIMIZER"


# =============================================================================
# BASE SCHEMAS
# =============================================================================

class CamelSchema(BaseModel):
    """
    Base schema with common configuration.

    Fields are declared in snake_case and exchanged in camelCase, which is
    what the dashboard and the chained agents read.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OptionsSchema(CamelSchema):
    """Base for agent configuration maps; unknown keys are kept as extras."""
    model_config = ConfigDict(extra="allow", frozen=True)
