"""
Unit Tests for Social Media Agent
=================================
Test Coverage:
- Hashtag generation
- Platform adaptation never exceeds the platform maximum
- Publishing, engagement and analytics output
- leadCount / emailsSent woven into educational posts
"""

import pytest

from agent_core.agents.social_media import (
    SocialMediaAgent,
    adapt_post,
    generate_hashtags,
)
from agent_core.app.schemas.base import AgentType
from agent_core.templates import TemplateCatalog


@pytest.fixture
def catalog() -> TemplateCatalog:
    return TemplateCatalog.get_instance()


def _post(content: str) -> dict:
    return {"type": "news", "topic": "AI", "content": content}


# =============================================================================
# HASHTAGS
# =============================================================================

class TestGenerateHashtags:

    def test_unique_in_topic_order(self):
        tags = generate_hashtags(["AI", "Technology"], 30)

        assert tags[:5] == ["#AI", "#MachineLearning", "#ArtificialIntelligence", "#Automation", "#Tech"]
        assert len(tags) == len(set(tags))
        assert tags.count("#Tech") == 1

    def test_capped_at_max_count(self):
        assert generate_hashtags(["AI", "Business"], 3) == ["#AI", "#MachineLearning", "#ArtificialIntelligence"]

    def test_unknown_topic(self):
        assert generate_hashtags(["Web Design"], 5) == ["#WebDesign"]


# =============================================================================
# PLATFORM ADAPTATION
# =============================================================================

class TestAdaptPost:
    """Adapted content length <= platform maximum."""

    @pytest.mark.parametrize("platform", ["twitter", "linkedin", "facebook", "instagram"])
    @pytest.mark.parametrize("length", [10, 270, 278, 280, 281, 2300, 3500])
    def test_length_safety(self, catalog, platform, length):
        profile = catalog.platform_profile(platform)
        hashtags = generate_hashtags(["AI", "Business"], 5)

        adapted = adapt_post(_post("x" * length), profile, hashtags)

        assert len(adapted["content"]) <= profile.max_length

    def test_long_content_truncated_with_ellipsis(self, catalog):
        profile = catalog.platform_profile("twitter")

        adapted = adapt_post(_post("y" * 500), profile, ["#AI"])

        assert len(adapted["content"]) == 280
        assert adapted["content"].endswith("...")
        assert adapted["appliedHashtags"] == []

    def test_inline_hashtags_on_twitter(self, catalog):
        tags = ["#AI", "#MachineLearning", "#ArtificialIntelligence", "#Automation"]

        adapted = adapt_post(_post("Hello"), catalog.platform_profile("twitter"), tags)

        assert adapted["content"] == "Hello #AI #MachineLearning #ArtificialIntelligence"
        assert adapted["appliedHashtags"] == tags[:3]
        assert adapted["hashtags"] == tags

    def test_end_hashtags_on_linkedin(self, catalog):
        adapted = adapt_post(_post("Hello"), catalog.platform_profile("linkedin"), ["#AI", "#Tech"])
        assert adapted["content"] == "Hello\n\n#AI #Tech"

    def test_minimal_style_adds_no_hashtags(self, catalog):
        adapted = adapt_post(_post("Hello"), catalog.platform_profile("facebook"), ["#AI"])

        assert adapted["content"] == "Hello"
        assert adapted["appliedHashtags"] == []

    def test_hashtags_dropped_when_they_do_not_fit(self, catalog):
        adapted = adapt_post(_post("z" * 275), catalog.platform_profile("twitter"), ["#Innovation"])

        assert adapted["content"] == "z" * 275
        assert adapted["appliedHashtags"] == []

    def test_unknown_platform_uses_default_profile(self, catalog):
        assert catalog.platform_profile("myspace").name == "twitter"


# =============================================================================
# AGENT
# =============================================================================

class TestSocialMediaAgent:

    @pytest.mark.asyncio
    async def test_posts_fit_their_platforms(self, make_agent, catalog):
        agent = make_agent(
            AgentType.SOCIAL_MEDIA,
            {"platforms": ["twitter", "linkedin", "instagram", "myspace"]},
        )

        result = await agent.execute()

        assert result.success is True
        for post in result.output["posts"]:
            assert len(post["content"]) <= catalog.platform_profile(post["platform"]).max_length
        assert result.metrics.api_calls == 8

    @pytest.mark.asyncio
    async def test_post_count(self, make_agent):
        output = (await make_agent(AgentType.SOCIAL_MEDIA).execute()).output

        drafts = output["content"]["posts"]
        assert 3 <= len(drafts) <= 7
        assert output["postsCreated"] == len(drafts) * len(output["platforms"])
        assert len(output["postResults"]) == output["postsCreated"]

    @pytest.mark.asyncio
    async def test_shared_data_matches_analytics(self, make_agent):
        result = await make_agent(AgentType.SOCIAL_MEDIA).execute()

        analytics = result.output["analytics"]
        assert result.shared_data == {
            "postsPublished": analytics["successfulPosts"],
            "totalReach": analytics["totalReach"],
            "engagementRate": analytics["avgEngagementRate"],
        }
        published = [r for r in result.output["postResults"] if r["success"]]
        assert analytics["totalReach"] == sum(r["reach"] for r in published)

    @pytest.mark.asyncio
    async def test_engagement_disabled_by_default(self, make_agent):
        output = (await make_agent(AgentType.SOCIAL_MEDIA).execute()).output

        assert output["engagement"] == {"message": "Auto-engagement disabled"}
        assert output["analytics"]["avgEngagementRate"] == 0.0

    @pytest.mark.asyncio
    async def test_auto_engagement(self, make_agent):
        agent = make_agent(
            AgentType.SOCIAL_MEDIA,
            {"engagement": {"autoLike": True, "autoComment": True}},
        )

        engagement = (await agent.execute()).output["engagement"]

        assert 2 * 5 <= engagement["likes"] <= 2 * 24
        assert 2 * 2 <= engagement["comments"] <= 2 * 11
        assert engagement["follows"] == 0

    @pytest.mark.asyncio
    async def test_lead_count_woven_into_educational_post(self, make_agent):
        output = (await make_agent(AgentType.SOCIAL_MEDIA).execute(
            {"sharedData": {"leadCount": 42}}
        )).output

        first = output["content"]["posts"][0]
        assert first["type"] == "educational"
        assert "generated 42 qualified leads" in first["content"]

    @pytest.mark.asyncio
    async def test_placeholder_without_lead_count(self, make_agent):
        output = (await make_agent(AgentType.SOCIAL_MEDIA).execute()).output
        assert "generated hundreds of qualified leads" in output["content"]["posts"][0]["content"]

    @pytest.mark.asyncio
    async def test_hashtags_disabled(self, make_agent):
        agent = make_agent(
            AgentType.SOCIAL_MEDIA,
            {"contentGeneration": {"hashtags": {"enabled": False}}},
        )

        output = (await agent.execute()).output

        assert output["content"]["hashtags"] == []
        assert all(post["appliedHashtags"] == [] for post in output["posts"])

    @pytest.mark.asyncio
    async def test_unknown_tone_falls_back(self, make_agent):
        agent = make_agent(AgentType.SOCIAL_MEDIA, {"contentGeneration": {"tone": "sarcastic"}})

        output = (await agent.execute()).output

        assert output["content"]["tone"] == "sarcastic"
        assert output["content"]["posts"][0]["content"].startswith("Excited to share")

    def test_agent_metadata(self):
        assert SocialMediaAgent.failure_message == "Social media execution failed"
