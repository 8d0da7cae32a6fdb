"""
Social Media Agent
==================
Drafts posts per topic, adapts them to each platform's constraints,
publishes them and reports reach and engagement.

Adapted content never exceeds the platform's maximum length: long bodies
are truncated to `max - 3` characters plus "...", and hashtags are only
appended when the result still fits.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Sequence
from uuid import uuid4

from agent_core.agents.base import AgentRun, BaseAgent
from agent_core.agents.handoff import handoff_value
from agent_core.app.schemas.agent_config import EngagementOptions, SocialMediaOptions
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.shared_data import SocialMediaSharedData
from agent_core.services.work_source import WorkSource
from agent_core.templates import PlatformProfile, TemplateCatalog

logger = logging.getLogger(__name__)


# =============================================================================
# CONTENT DATA
# =============================================================================

TONE_STYLES: dict[str, dict[str, tuple[str, ...]]] = {
    "professional": {
        "starters": ("Excited to share", "Thrilled to announce", "Pleased to present"),
        "endings": ("Thoughts?", "What do you think?", "Let's discuss!"),
    },
    "casual": {
        "starters": ("Just discovered", "Check this out", "Mind blown"),
        "endings": ("What's your take?", "Anyone else?", "Share your thoughts!"),
    },
    "inspirational": {
        "starters": ("Believe in the power of", "Transform your business with", "Unlock the potential of"),
        "endings": ("The future is now!", "Start your journey today!", "Make it happen!"),
    },
}
DEFAULT_TONE = "professional"

HASHTAG_MAP: dict[str, tuple[str, ...]] = {
    "AI": ("#AI", "#MachineLearning", "#ArtificialIntelligence", "#Automation", "#Tech"),
    "Business": ("#Business", "#Entrepreneur", "#Growth", "#Strategy", "#Innovation"),
    "Technology": ("#Technology", "#Tech", "#Digital", "#Future", "#Innovation"),
}

ENGAGEMENT_QUESTIONS = (
    "What's your biggest challenge with {topic}?",
    "How do you think {topic} will evolve in the next 5 years?",
    "What's the most exciting {topic} trend you've seen recently?",
)
NEWS_TEMPLATES = (
    "Breaking: Major breakthrough in {topic}! This could change everything...",
    "Industry Update: {topic} adoption reaches new heights! Here's what it means for your business...",
    "Research shows: {topic} users see 300% better results! Here's why...",
)

# Staged provider calls (ms)
CONTENT_GENERATION_DELAY_MS = 800
PUBLISH_DELAY_MS = 300
ENGAGEMENT_DELAY_MS = 500

PUBLISH_SUCCESS_RATE = 0.95
MIN_POSTS, MAX_POSTS = 3, 7
TRUNCATION_MARKER = "..."


# =============================================================================
# CONTENT (pure)
# =============================================================================

def generate_hashtags(topics: Sequence[str], max_count: int) -> list[str]:
    """Unique hashtags for the topics, in topic order, at most `max_count`."""
    tags = dict.fromkeys(
        tag
        for topic in topics
        for tag in HASHTAG_MAP.get(topic, (f"#{topic.replace(' ', '')}",))
    )
    return list(tags)[:max_count]


def adapt_post(
    post: Mapping[str, Any],
    profile: PlatformProfile,
    hashtags: Sequence[str],
) -> dict[str, Any]:
    """
    Fit one drafted post to a platform.

    The returned `content` is at most `profile.max_length` characters.
    """
    content = post["content"]
    if len(content) > profile.max_length:
        content = content[: profile.max_length - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER

    applied: list[str] = []
    platform_tags = list(hashtags[: profile.hashtag_limit])
    if platform_tags and profile.hashtag_style != "minimal":
        separator = " " if profile.hashtag_style == "inline" else "\n\n"
        candidate = content + separator + " ".join(platform_tags)
        if len(candidate) <= profile.max_length:
            content = candidate
            applied = platform_tags

    return {
        **post,
        "content": content,
        "platform": profile.name,
        "adaptation": profile.model_dump(by_alias=True),
        "hashtags": list(hashtags),
        "appliedHashtags": applied,
    }


# =============================================================================
# AGENT
# =============================================================================

class SocialMediaAgent(BaseAgent[SocialMediaOptions]):
    """Creates, adapts and publishes posts across social platforms."""

    agent_type = AgentType.SOCIAL_MEDIA
    label = "Social Media"
    description = "Creates platform-adapted posts, publishes them and tracks engagement"
    failure_message = "Social media execution failed"

    options_schema = SocialMediaOptions
    shared_data_schema = SocialMediaSharedData

    async def run(self, input: Mapping[str, Any] | None) -> AgentRun:
        options = self.options
        work = self.work_source
        catalog = TemplateCatalog.get_instance()

        content = await self.generate_content(work, input)

        now = datetime.now(timezone.utc)
        posts = []
        for draft in content["posts"]:
            for platform in options.platforms:
                adapted = adapt_post(draft, catalog.platform_profile(platform), content["hashtags"])
                posts.append({
                    **adapted,
                    "id": f"post_{uuid4().hex[:10]}",
                    "platform": platform,
                    "scheduledFor": (now + timedelta(hours=work.uniform(0, 24))).isoformat(),
                })

        post_results = await self.publish_posts(work, posts)
        engagement = await self.handle_engagement(work, options.engagement, options.platforms)
        analytics = self.social_analytics(work, post_results, engagement)

        shared = SocialMediaSharedData(
            posts_published=analytics["successfulPosts"],
            total_reach=analytics["totalReach"],
            engagement_rate=analytics["avgEngagementRate"],
        )

        logger.info(
            f"[{self.label}] Created {len(posts)} posts across {len(options.platforms)} platforms"
        )

        return AgentRun(
            output={
                "postsCreated": len(posts),
                "platforms": list(options.platforms),
                "content": content,
                "posts": posts,
                "postResults": post_results,
                "engagement": engagement,
                "analytics": analytics,
                "sharedData": shared.to_handoff(),
            },
            api_calls=2 * len(options.platforms),
        )

    # =========================================================================
    # CONTENT GENERATION
    # =========================================================================

    async def generate_content(self, work: WorkSource, input: Mapping[str, Any] | None) -> dict[str, Any]:
        generation = self.options.content_generation

        await self.stage(CONTENT_GENERATION_DELAY_MS)

        style = TONE_STYLES.get(generation.tone, TONE_STYLES[DEFAULT_TONE])
        lead_count = handoff_value(input, "leadCount", "hundreds of")
        emails_sent = handoff_value(input, "emailsSent", "thousands of")

        drafts = []
        for topic in generation.topics:
            drafts.append(self._educational_post(work, topic, style, lead_count, emails_sent))
            drafts.append(self._engagement_post(work, topic))
            drafts.append(self._news_post(work, topic))

        return {
            "posts": drafts[: work.randint(MIN_POSTS, MAX_POSTS)],
            "hashtags": (
                generate_hashtags(generation.topics, generation.hashtags.max_count)
                if generation.hashtags.enabled else []
            ),
            "tone": generation.tone,
            "topics": list(generation.topics),
        }

    @staticmethod
    def _educational_post(
        work: WorkSource,
        topic: str,
        style: Mapping[str, Sequence[str]],
        lead_count: Any,
        emails_sent: Any,
    ) -> dict[str, Any]:
        starters, endings = style["starters"], style["endings"]
        topic_templates = {
            "AI": (
                f"{starters[0]} insights on how AI is transforming {topic}. Our agents have "
                f"already generated {lead_count} qualified leads this month! Here's what we learned..."
            ),
            "Business": (
                f"{starters[1]} how {topic} automation can scale your operations. "
                f"We've seen {emails_sent} successful interactions!"
            ),
            "Technology": f"{starters[2]} the latest in {topic}. The future of automation is here!",
        }
        return {
            "type": "educational",
            "topic": topic,
            "content": topic_templates.get(topic, f"{starters[0]} insights about {topic}. {endings[0]}"),
            "length": "medium",
            "includeImage": work.chance(0.5),
        }

    @staticmethod
    def _engagement_post(work: WorkSource, topic: str) -> dict[str, Any]:
        return {
            "type": "engagement",
            "topic": topic,
            "content": work.choice(ENGAGEMENT_QUESTIONS).format(topic=topic),
            "length": "short",
            "includeImage": False,
            "pollOptions": (
                [f"Option A for {topic}", f"Option B for {topic}"] if work.chance(0.3) else None
            ),
        }

    @staticmethod
    def _news_post(work: WorkSource, topic: str) -> dict[str, Any]:
        return {
            "type": "news",
            "topic": topic,
            "content": work.choice(NEWS_TEMPLATES).format(topic=topic),
            "length": "medium",
            "includeImage": True,
            "urgent": work.chance(0.2),
        }

    # =========================================================================
    # PUBLISHING & ENGAGEMENT
    # =========================================================================

    async def publish_posts(self, work: WorkSource, posts: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
        results = []
        for post in posts:
            await self.stage(PUBLISH_DELAY_MS)

            success = work.chance(PUBLISH_SUCCESS_RATE)
            results.append({
                "postId": post["id"],
                "platform": post["platform"],
                "success": success,
                "publishedAt": datetime.now(timezone.utc).isoformat() if success else None,
                "error": None if success else "Platform API error",
                "reach": work.randint(100, 1099) if success else 0,
                "impressions": work.randint(500, 5499) if success else 0,
            })
            logger.debug(
                f"[{self.label}] Published to {post['platform']}: {'Success' if success else 'Failed'}"
            )
        return results

    async def handle_engagement(
        self,
        work: WorkSource,
        engagement: EngagementOptions,
        platforms: Sequence[str],
    ) -> dict[str, Any]:
        if not engagement.any_enabled:
            return {"message": "Auto-engagement disabled"}

        totals = {"likes": 0, "comments": 0, "follows": 0, "responses": 0}
        for _platform in platforms:
            await self.stage(ENGAGEMENT_DELAY_MS)

            if engagement.auto_like:
                totals["likes"] += work.randint(5, 24)
            if engagement.auto_comment:
                totals["comments"] += work.randint(2, 11)
            if engagement.auto_follow:
                totals["follows"] += work.randint(3, 17)
            totals["responses"] += work.randint(1, 8)

        return totals

    # =========================================================================
    # ANALYTICS
    # =========================================================================

    @staticmethod
    def social_analytics(
        work: WorkSource,
        post_results: Sequence[Mapping[str, Any]],
        engagement: Mapping[str, Any],
    ) -> dict[str, Any]:
        published = [result for result in post_results if result["success"]]
        total_reach = sum(result["reach"] for result in published)
        total_impressions = sum(result["impressions"] for result in published)

        interactions = engagement.get("likes", 0) + engagement.get("comments", 0)
        engagement_rate = interactions / total_reach * 100 if total_reach > 0 else 0.0

        breakdown: dict[str, dict[str, int]] = {}
        for result in published:
            platform = breakdown.setdefault(result["platform"], {"posts": 0, "reach": 0, "impressions": 0})
            platform["posts"] += 1
            platform["reach"] += result["reach"]
            platform["impressions"] += result["impressions"]

        top_post = (
            max(published, key=lambda result: result["reach"] + result["impressions"] * 0.1)
            if published else None
        )

        return {
            "totalPosts": len(post_results),
            "successfulPosts": len(published),
            "totalReach": total_reach,
            "totalImpressions": total_impressions,
            "avgEngagementRate": round(engagement_rate, 2),
            "platformBreakdown": breakdown,
            "engagement": dict(engagement),
            "topPerformingPost": dict(top_post) if top_post else None,
            "growthMetrics": {
                "reachGrowth": round(work.uniform(5, 25), 2),
                "followerGrowth": round(work.uniform(2, 12), 2),
                "engagementGrowth": round(work.uniform(3, 18), 2),
            },
        }


__all__ = [
    "SocialMediaAgent",
    "adapt_post",
    "generate_hashtags",
]
