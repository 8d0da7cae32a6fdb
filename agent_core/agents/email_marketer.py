"""
Email Marketer Agent
====================
Runs one email campaign: recipients -> segments -> template ->
personalized emails -> batched sending -> engagement figures.

Recipients come from the pipeline when a previous agent handed over
`leads` (or `recipients`); otherwise a default audience is synthesized.

Segmentation uses exactly one criterion per recipient, in this order:
industry, then score tier, then job title, else the `default` bucket.
Only the first configured criterion that applies is used, so reordering
the checks changes who receives which campaign content.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Mapping, Sequence

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.agents.handoff import handoff_records
from agent_core.app.schemas.agent_config import (
    EmailMarketerOptions,
    EmailTemplate,
    Segmentation,
    Tracking,
)
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import EmailCampaignSharedData
from agent_core.services.work_source import WorkSource
from agent_core.templates import TemplateCatalog, compile_template, placeholder_context

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_SEGMENT = "default"
EXECUTIVE_TITLES = frozenset({"CEO", "CTO", "VP"})

HIGH_VALUE_SCORE = 80
MEDIUM_VALUE_SCORE = 50

# Per-batch latency of each provider (ms)
PROVIDER_DELAYS_MS: dict[str, int] = {
    "sendgrid": 100,
    "mailchimp": 150,
    "aws-ses": 80,
    "smtp": 200,
}
DEFAULT_PROVIDER_DELAY_MS = 100

SEND_HOURS = ("9am", "10am", "11am", "12pm", "1pm", "2pm", "3pm")
TOP_PERFORMER_COUNT = 5


# =============================================================================
# SEGMENTATION (pure)
# =============================================================================

def segment_key(recipient: Mapping[str, Any], criteria: Sequence[str]) -> str:
    """The single segment a recipient falls in under `criteria`."""
    industry = recipient.get("industry")
    if "industry" in criteria and isinstance(industry, str) and industry:
        return industry.lower()

    if "score" in criteria:
        score = recipient.get("score")
        if not isinstance(score, (int, float)):
            score = 0
        if score >= HIGH_VALUE_SCORE:
            return "high_value"
        if score >= MEDIUM_VALUE_SCORE:
            return "medium_value"
        return "nurture"

    job_title = recipient.get("jobTitle")
    if "jobTitle" in criteria and isinstance(job_title, str) and job_title:
        return "executives" if job_title in EXECUTIVE_TITLES else "managers"

    return DEFAULT_SEGMENT


def segment_recipients(
    recipients: Sequence[Mapping[str, Any]],
    segmentation: Segmentation,
) -> dict[str, list[Mapping[str, Any]]]:
    """Group recipients by segment, in first-seen segment order."""
    if not segmentation.enabled:
        return {DEFAULT_SEGMENT: list(recipients)}

    segments: dict[str, list[Mapping[str, Any]]] = {}
    for recipient in recipients:
        segments.setdefault(segment_key(recipient, segmentation.criteria), []).append(recipient)
    return segments


def select_template(
    templates: Sequence[EmailTemplate],
    segments: Mapping[str, Any],
) -> EmailTemplate:
    """
    The first template whose name mentions the primary segment, else the
    first configured template, else the built-in default.
    """
    if not templates:
        return TemplateCatalog.get_instance().default_email_template()

    primary_segment = next(iter(segments), None)
    if primary_segment:
        for template in templates:
            if primary_segment in template.name.lower():
                return template

    return templates[0]


def personalize_emails(
    recipients: Sequence[Mapping[str, Any]],
    template: EmailTemplate,
) -> list[dict[str, Any]]:
    """
    Render subject and body for each recipient.

    Placeholders listed in `template.variables` are filled from the
    recipient; a missing value renders as `[variable]` and unlisted
    placeholders are left as written. Rendering is sandboxed, so a template
    that reaches for Python internals raises jinja2 SecurityError.
    """
    subject = compile_template(template.subject)
    content = compile_template(template.content)

    emails = []
    for recipient in recipients:
        context = placeholder_context(dict(recipient), template.variables)
        emails.append({
            "to": recipient.get("email"),
            "subject": subject.render(context),
            "content": content.render(context),
            "recipient": recipient,
            "templateId": template.id,
        })
    return emails


# =============================================================================
# AGENT
# =============================================================================

class EmailMarketerAgent(BaseAgent[EmailMarketerOptions]):
    """Segments an audience and sends a personalized campaign."""

    agent_type = AgentType.EMAIL_MARKETER
    label = "Email Marketer"
    description = "Segments recipients and sends personalized email campaigns"
    failure_message = "Email marketing failed"

    options_schema = EmailMarketerOptions
    shared_data_schema = EmailCampaignSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        options = self.options
        work = self.work_source

        recipients = handoff_records(input, "leads", "recipients") or self.default_recipients(work)
        segments = segment_recipients(recipients, options.segmentation)
        template = select_template(options.templates, segments)
        emails = personalize_emails(recipients, template)

        batches = await self._send(options.email_provider, emails)
        results = self.campaign_results(work, emails, options.tracking, segments)

        campaign_id = f"email_campaign_{int(time.time() * 1000)}"
        shared = EmailCampaignSharedData(
            emails_sent=len(emails),
            open_rate=results["openRate"],
            click_rate=results["clickRate"],
            campaign_id=campaign_id,
        )

        logger.info(
            f"[{self.label}] Sent {len(emails)} emails with "
            f"{results['openRate']}% open rate"
        )

        return AgentRun(
            output={
                "campaignId": campaign_id,
                "emailsSent": len(emails),
                "segments": len(segments),
                "segmentSizes": {name: len(members) for name, members in segments.items()},
                "template": template.model_dump(by_alias=True),
                "provider": options.email_provider,
                "sampleEmail": (
                    {key: emails[0][key] for key in ("to", "subject", "content")}
                    if emails else None
                ),
                "results": results,
                "tracking": options.tracking.model_dump(by_alias=True),
                "scheduling": dict(options.scheduling),
                "sharedData": shared.to_handoff(),
            },
            api_calls=batches,
        )

    # =========================================================================
    # RECIPIENTS
    # =========================================================================

    @staticmethod
    def default_recipients(work: WorkSource) -> list[dict[str, Any]]:
        """A synthesized audience of 50..249 recipients."""
        industries = ("Technology", "Healthcare", "Finance")
        job_titles = ("Manager", "Director", "VP", "CEO")

        return [
            {
                "email": f"user{i}@example.com",
                "firstName": f"User{i}",
                "lastName": "Test",
                "company": f"Company {i % 10}",
                "industry": industries[i % len(industries)],
                "jobTitle": job_titles[i % len(job_titles)],
                "score": work.randint(0, 99),
            }
            for i in range(work.randint(50, 249))
        ]

    # =========================================================================
    # SENDING
    # =========================================================================

    async def _send(self, provider: str, emails: Sequence[Mapping[str, Any]]) -> int:
        """Send in fixed-size batches; returns the number of provider calls."""
        batch_size = self.settings.email_batch_size
        batches = math.ceil(len(emails) / batch_size)
        delay_ms = PROVIDER_DELAYS_MS.get(provider.lower(), DEFAULT_PROVIDER_DELAY_MS)

        logger.info(f"[{self.label}] Sending {len(emails)} emails via {provider}")

        for i in range(batches):
            await self.stage(delay_ms)
            logger.debug(f"[{self.label}] Sent batch {i + 1}/{batches}")

        return batches

    # =========================================================================
    # RESULTS
    # =========================================================================

    @staticmethod
    def campaign_results(
        work: WorkSource,
        emails: Sequence[Mapping[str, Any]],
        tracking: Tracking,
        segments: Mapping[str, Sequence[Any]],
    ) -> dict[str, Any]:
        """Engagement figures; untracked figures are None."""
        total = len(emails)

        open_rate = work.uniform(15, 45)
        click_rate = work.uniform(2, 10)
        unsubscribe_rate = work.uniform(0.5, 2.5)
        bounce_rate = work.uniform(1, 4)

        opens = math.floor(total * open_rate / 100)
        clicks = math.floor(total * click_rate / 100)
        unsubscribes = math.floor(total * unsubscribe_rate / 100)
        bounces = math.floor(total * bounce_rate / 100)

        results: dict[str, Any] = {
            "delivered": total - bounces,
            "opens": opens if tracking.opens else None,
            "clicks": clicks if tracking.clicks else None,
            "unsubscribes": unsubscribes if tracking.unsubscribes else None,
            "bounces": bounces,
            "openRate": round(open_rate, 2) if tracking.opens else None,
            "clickRate": round(click_rate, 2) if tracking.clicks else None,
            "unsubscribeRate": round(unsubscribe_rate, 2) if tracking.unsubscribes else None,
            "bounceRate": round(bounce_rate, 2),
            "deliveryRate": round((total - bounces) / total * 100, 2) if total else 0.0,
        }

        if tracking.opens or tracking.clicks:
            results["engagement"] = {
                "bySegment": {
                    name: {
                        "recipients": len(members),
                        "openRate": round(work.uniform(15, 45), 1),
                        "clickRate": round(work.uniform(2, 10), 1),
                    }
                    for name, members in segments.items()
                },
                "byTimeOfDay": {hour: round(work.uniform(10, 25), 1) for hour in SEND_HOURS},
                "topPerformers": [
                    {
                        "email": email["to"],
                        "recipient": " ".join(
                            str(part)
                            for part in (
                                email["recipient"].get("firstName"),
                                email["recipient"].get("lastName"),
                            )
                            if part
                        ),
                        "company": email["recipient"].get("company"),
                        "engagement": round(work.uniform(60, 100), 1),
                    }
                    for email in work.shuffled(emails)[:TOP_PERFORMER_COUNT]
                ],
            }

        return results


__all__ = [
    "EmailMarketerAgent",
    "segment_key",
    "segment_recipients",
    "select_template",
    "personalize_emails",
]
