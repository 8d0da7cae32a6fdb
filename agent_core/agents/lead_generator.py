"""
Lead Generator Agent
====================
Synthesizes a batch of candidate leads from the configured sources,
enriches them, then qualifies them against the scoring rule.

Qualification is a pure function (qualify_leads) so the threshold logic
can be reasoned about independently of the synthetic data.

Output is consumed by:
- Email marketer (reads `leads` as recipients)
- Sales agent (reads `leads` for outreach)
- Social media agent (reads `leadCount` in educational posts)
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Sequence
from uuid import uuid4

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.app.schemas.agent_config import LeadGeneratorOptions, LeadQualification
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import LeadGenerationSharedData
from agent_core.services.work_source import WorkSource

logger = logging.getLogger(__name__)


# =============================================================================
# ENRICHMENT DATA
# =============================================================================

FIRST_NAMES = ("John", "Jane", "Michael", "Sarah", "David", "Emily", "Robert", "Lisa", "James", "Maria")
LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones",
    "Garcia", "Miller", "Davis", "Rodriguez", "Martinez",
)
COMPANIES = (
    "TechCorp Inc", "Innovate Solutions", "Digital Dynamics", "Future Systems",
    "Alpha Industries", "Beta Technologies", "Gamma Enterprises", "Delta Innovations",
    "Quantum Labs", "Synergy Group", "Nexus Corporation", "Apex Ventures",
)
LOCATIONS = (
    "New York, NY", "San Francisco, CA", "Chicago, IL", "Austin, TX",
    "Seattle, WA", "Boston, MA", "Denver, CO", "Atlanta, GA",
)
COMPANY_SIZES = ("startup", "small", "medium", "large", "enterprise")
EMAIL_DOMAINS = ("gmail.com", "company.com", "business.org", "enterprise.net")

# Scoring rule
REVENUE_BONUS_THRESHOLD = 1_000_000
REVENUE_BONUS = 15
SIZE_BONUS_TIERS = frozenset({"medium", "large", "enterprise"})
SIZE_BONUS = 10
INDUSTRY_BONUS_SET = frozenset({"Technology", "Finance"})
INDUSTRY_BONUS = 12
MAX_SCORE = 100

# Staged provider calls: LinkedIn API, website scraping, social media APIs
SOURCE_CALL_DELAYS_MS = (1500, 1200, 800)


# =============================================================================
# QUALIFICATION (pure)
# =============================================================================

def score_bonus(lead: Mapping[str, Any], scoring_criteria: Sequence[str]) -> int:
    """Bonus points a lead earns under the configured criteria."""
    bonus = 0
    if "revenue" in scoring_criteria and (lead.get("estimatedRevenue") or 0) > REVENUE_BONUS_THRESHOLD:
        bonus += REVENUE_BONUS
    if "size" in scoring_criteria and lead.get("companySize") in SIZE_BONUS_TIERS:
        bonus += SIZE_BONUS
    if "industry" in scoring_criteria and lead.get("industry") in INDUSTRY_BONUS_SET:
        bonus += INDUSTRY_BONUS
    return bonus


def qualify_leads(
    leads: Sequence[Mapping[str, Any]],
    qualification: LeadQualification,
) -> list[dict[str, Any]]:
    """
    Score, filter and rank leads.

    Each lead's score becomes min(100, score + bonus); leads scoring at least
    `minimum_score` are kept and sorted by score, highest first (ties keep
    batch order). The input leads are not modified.

    Raising `minimum_score` over the same batch never adds leads.
    """
    qualified = []
    for lead in leads:
        score = min(MAX_SCORE, (lead.get("score") or 0) + score_bonus(lead, qualification.scoring_criteria))
        if score >= qualification.minimum_score:
            qualified.append({**lead, "score": score})

    qualified.sort(key=lambda lead: lead["score"], reverse=True)
    return qualified


# =============================================================================
# AGENT
# =============================================================================

class LeadGeneratorAgent(BaseAgent[LeadGeneratorOptions]):
    """Finds and qualifies prospects from the configured lead sources."""

    agent_type = AgentType.LEAD_GENERATOR
    label = "Lead Generator"
    description = "Generates, enriches and qualifies leads from configured sources"
    failure_message = "Lead generation failed"

    options_schema = LeadGeneratorOptions
    shared_data_schema = LeadGenerationSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        options = self.options

        for delay_ms in SOURCE_CALL_DELAYS_MS:
            await self.stage(delay_ms)

        leads = self.generate_leads(self.work_source)
        qualified = qualify_leads(leads, options.lead_qualification)
        preview = qualified[: self.settings.lead_preview_size]

        avg_score = (
            round(sum(lead["score"] for lead in qualified) / len(qualified), 2)
            if qualified else 0.0
        )
        shared = LeadGenerationSharedData(
            lead_count=len(qualified),
            avg_lead_score=avg_score,
            leads=preview,
        )

        logger.info(f"[{self.label}] Generated {len(leads)} leads, {len(qualified)} qualified")

        return AgentRun(
            output={
                "totalLeads": len(leads),
                "qualifiedCount": len(qualified),
                "qualifiedLeads": qualified,
                "qualificationRate": round(len(qualified) / len(leads), 4) if leads else 0.0,
                "sources": list(options.sources),
                "leads": preview,
                "targetCriteria": options.target_criteria.model_dump(by_alias=True, exclude_none=True),
                "sharedData": shared.to_handoff(),
            },
            api_calls=len(SOURCE_CALL_DELAYS_MS),
        )

    # =========================================================================
    # GENERATION
    # =========================================================================

    def generate_leads(self, work: WorkSource) -> list[dict[str, Any]]:
        """A batch of min(dailyLimit, 20..69) enriched candidate leads."""
        options = self.options
        batch_size = min(options.daily_limit, work.randint(20, 69))
        batch_id = uuid4().hex[:8]
        now = datetime.now(timezone.utc)

        return [
            self._enrich_lead(work, f"lead_{batch_id}_{i}", now)
            for i in range(batch_size)
        ]

    def _enrich_lead(self, work: WorkSource, lead_id: str, now: datetime) -> dict[str, Any]:
        criteria = self.options.target_criteria

        return {
            "id": lead_id,
            "email": f"{self._username(work)}@{work.choice(EMAIL_DOMAINS)}",
            "firstName": work.choice(FIRST_NAMES),
            "lastName": work.choice(LAST_NAMES),
            "company": work.choice(COMPANIES),
            "jobTitle": work.choice(criteria.job_titles),
            "industry": work.choice(criteria.industries),
            "source": work.choice(self.options.sources),
            "phone": (
                f"+1-{work.randint(100, 999)}-{work.randint(100, 999)}-{work.randint(1000, 9999)}"
            ),
            "score": work.randint(0, 99),
            "location": criteria.location or work.choice(LOCATIONS),
            "companySize": criteria.company_size or work.choice(COMPANY_SIZES),
            "estimatedRevenue": work.randint(100_000, 10_099_999),
            "socialProfiles": {
                "linkedin": f"https://linkedin.com/in/{self._username(work)}",
                "twitter": f"https://twitter.com/{self._username(work)}",
            },
            "metadata": {
                "foundAt": now.isoformat(),
                "confidence": round(work.uniform(0.6, 1.0), 3),
                "lastActive": (now - timedelta(days=work.uniform(0, 30))).isoformat(),
            },
        }

    @staticmethod
    def _username(work: WorkSource) -> str:
        return "".join(work.choice("abcdefghijklmnopqrstuvwxyz") for _ in range(8))


__all__ = [
    "LeadGeneratorAgent",
    "qualify_leads",
    "score_bonus",
]
