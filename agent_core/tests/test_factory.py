"""
Unit Tests for the Agent Factory
================================
Test Coverage:
- Every catalog type builds its agent
- Unsupported types are rejected by name
- Configuration validation at construction
- Catalog listing
"""

import pytest
from pydantic import ValidationError

from agent_core.agents.factory import (
    AGENT_REGISTRY,
    UnsupportedAgentTypeError,
    create_agent,
    create_agent_from_config,
    resolve_agent_type,
    supported_agent_types,
)
from agent_core.agents.lead_generator import LeadGeneratorAgent
from agent_core.app.schemas.base import AgentType
from agent_core.app.schemas.execution import AgentConfiguration


class TestDispatch:
    """Totality of dispatch over the closed catalog."""

    def test_registry_covers_catalog(self):
        assert set(AGENT_REGISTRY) == set(AgentType)

    @pytest.mark.parametrize("agent_type", list(AgentType))
    def test_every_type_builds_its_agent(self, agent_type, work_source, settings):
        agent = create_agent("agent_1", agent_type, work_source=work_source, settings=settings)

        assert isinstance(agent, AGENT_REGISTRY[agent_type])
        assert agent.type is agent_type
        assert agent.id == "agent_1"

    @pytest.mark.parametrize("agent_type", [t.value for t in AgentType])
    def test_string_types_accepted(self, agent_type, work_source, settings):
        agent = create_agent("agent_1", agent_type, work_source=work_source, settings=settings)
        assert agent.type.value == agent_type

    @pytest.mark.parametrize("agent_type", ["CONVERSATIONAL", "lead_generator", "", "UNKNOWN"])
    def test_unsupported_type_rejected(self, agent_type, work_source, settings):
        with pytest.raises(UnsupportedAgentTypeError) as exc_info:
            create_agent("agent_1", agent_type, work_source=work_source, settings=settings)

        assert exc_info.value.agent_type == agent_type
        assert f"Unsupported agent type: {agent_type}" == str(exc_info.value)

    def test_unsupported_type_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_agent_type("CONVERSATIONAL")

    def test_create_from_config(self, work_source, settings):
        config = AgentConfiguration(
            id="agent_leads",
            type=AgentType.LEAD_GENERATOR,
            configuration={"dailyLimit": 10},
        )
        agent = create_agent_from_config(config, work_source=work_source, settings=settings)

        assert isinstance(agent, LeadGeneratorAgent)
        assert agent.options.daily_limit == 10
        assert agent.configuration == {"dailyLimit": 10}

    def test_agent_class_rejects_other_type(self, work_source, settings):
        with pytest.raises(ValueError, match="LEAD_GENERATOR"):
            LeadGeneratorAgent("agent_1", AgentType.SALES, work_source=work_source, settings=settings)


class TestConfigurationValidation:
    """Typed configuration is validated when the agent is built."""

    def test_missing_configuration_uses_defaults(self, make_agent):
        agent = make_agent(AgentType.LEAD_GENERATOR, None)

        assert agent.options.daily_limit == 100
        assert agent.options.lead_qualification.minimum_score == 50
        assert agent.options.sources == ["website", "social_media", "linkedin"]

    def test_empty_lists_use_defaults(self, make_agent):
        agent = make_agent(
            AgentType.LEAD_GENERATOR,
            {"sources": [], "targetCriteria": {"industries": [], "jobTitles": None}},
        )

        assert agent.options.sources == ["website", "social_media", "linkedin"]
        assert "Technology" in agent.options.target_criteria.industries
        assert "CEO" in agent.options.target_criteria.job_titles

    @pytest.mark.parametrize(
        "configuration",
        [
            {"dailyLimit": "many"},
            {"dailyLimit": 0},
            {"leadQualification": {"minimumScore": 150}},
            {"targetCriteria": {"companySize": "gigantic"}},
            {"maxExecutionTime": 10},
            {"complexity": 0},
        ],
    )
    def test_invalid_configuration_fails_construction(self, make_agent, configuration):
        with pytest.raises(ValidationError):
            make_agent(AgentType.LEAD_GENERATOR, configuration)

    def test_unknown_keys_are_kept(self, make_agent):
        agent = make_agent(AgentType.SALES, {"territory": "EMEA"})

        assert agent.options.model_extra == {"territory": "EMEA"}

    def test_configuration_is_read_only(self, make_agent):
        agent = make_agent(AgentType.SALES, {"territory": "EMEA"})

        with pytest.raises(TypeError):
            agent.configuration["territory"] = "APAC"
        with pytest.raises(AttributeError):
            agent.id = "agent_other"

    def test_timeout_from_configuration(self, make_agent, settings):
        assert make_agent(AgentType.SALES, {"maxExecutionTime": 1500}).timeout_seconds == 1.5
        assert make_agent(AgentType.SALES).timeout_seconds == settings.agent_execution_timeout_seconds


class TestCatalog:
    """supported_agent_types()"""

    def test_lists_every_type(self):
        types = supported_agent_types()
        assert [info.value for info in types] == list(AGENT_REGISTRY)

    def test_shared_data_fields(self):
        fields = {info.value: info.shared_data_fields for info in supported_agent_types()}

        assert fields[AgentType.LEAD_GENERATOR] == ["leadCount", "avgLeadScore", "leads"]
        assert fields[AgentType.EMAIL_MARKETER] == ["emailsSent", "openRate", "clickRate", "campaignId"]
        assert fields[AgentType.SEO_OPTIMIZER] == ["seoScore", "rankingImprovement"]

    def test_labels_and_descriptions(self):
        for info in supported_agent_types():
            assert info.label
            assert info.description
