"""
API Endpoint Tests
==================
Test Coverage:
- Root and health endpoints
- Agent catalog, execution and stats endpoints
- Pipeline and parallel endpoints
- Error responses (400 unsupported type, 422 invalid configuration, 404)
"""

from fastapi.testclient import TestClient


API = "/api/v1"


class TestRootEndpoints:

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/health"

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers


class TestAgentEndpoints:

    def test_list_types(self, client: TestClient):
        response = client.get(f"{API}/agents/types")

        assert response.status_code == 200
        types = response.json()["types"]
        assert len(types) == 8
        lead = next(info for info in types if info["value"] == "LEAD_GENERATOR")
        assert lead["sharedDataFields"] == ["leadCount", "avgLeadScore", "leads"]

    def test_execute_agent(self, client: TestClient):
        response = client.post(
            f"{API}/agents/execute",
            json={
                "id": "agent_leads",
                "type": "LEAD_GENERATOR",
                "configuration": {"dailyLimit": 10, "leadQualification": {"minimumScore": 90}},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["error"] is None
        assert body["metrics"]["apiCalls"] == 3
        assert "resourceUsage" in body["metrics"]
        assert all(lead["score"] >= 90 for lead in body["output"]["qualifiedLeads"])
        assert body["output"]["sharedData"]["leadCount"] == body["output"]["qualifiedCount"]

    def test_execute_with_input(self, client: TestClient, sample_leads):
        response = client.post(
            f"{API}/agents/execute",
            json={"type": "EMAIL_MARKETER", "input": {"sharedData": {"leads": sample_leads}}},
        )

        assert response.status_code == 200
        assert response.json()["output"]["emailsSent"] == 3

    def test_template_cannot_reach_python_internals(self, client: TestClient, sample_leads):
        response = client.post(
            f"{API}/agents/execute",
            json={
                "type": "EMAIL_MARKETER",
                "configuration": {
                    "templates": [{
                        "id": "t_bad",
                        "name": "Intro",
                        "subject": "Hello",
                        "content": "{{ cycler.__init__.__globals__.os.popen('id').read() }}",
                    }],
                },
                "input": {"sharedData": {"leads": sample_leads}},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert body["output"] is None
        assert body["error"].startswith("Email marketing failed: ")
        assert "uid=" not in response.text

    def test_unsupported_type(self, client: TestClient):
        response = client.post(f"{API}/agents/execute", json={"type": "CONVERSATIONAL"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Unsupported Agent Type"
        assert "CONVERSATIONAL" in body["detail"]
        assert body["path"] == f"{API}/agents/execute"

    def test_invalid_configuration(self, client: TestClient):
        response = client.post(
            f"{API}/agents/execute",
            json={"type": "LEAD_GENERATOR", "configuration": {"dailyLimit": "many"}},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "Invalid Agent Configuration"

    def test_missing_type(self, client: TestClient):
        response = client.post(f"{API}/agents/execute", json={"configuration": {}})

        assert response.status_code == 422
        assert response.json()["error"] == "Validation Error"

    def test_stats_after_execution(self, client: TestClient):
        for _ in range(2):
            client.post(f"{API}/agents/execute", json={"id": "agent_seo", "type": "SEO_OPTIMIZER"})

        response = client.get(f"{API}/agents/agent_seo/stats")

        assert response.status_code == 200
        stats = response.json()
        assert stats["agentId"] == "agent_seo"
        assert stats["usageCount"] == 2
        assert stats["successRate"] == 100.0
        assert stats["totalApiCalls"] == 10

        listing = client.get(f"{API}/agents/stats").json()
        assert [entry["agentId"] for entry in listing] == ["agent_seo"]

    def test_stats_unknown_agent(self, client: TestClient):
        response = client.get(f"{API}/agents/agent_missing/stats")

        assert response.status_code == 404
        assert "agent_missing" in response.json()["detail"]


class TestPipelineEndpoints:

    def test_run_pipeline(self, client: TestClient):
        response = client.post(
            f"{API}/pipelines",
            json={
                "steps": [
                    {
                        "id": "agent_leads",
                        "type": "LEAD_GENERATOR",
                        "configuration": {"dailyLimit": 5, "leadQualification": {"minimumScore": 0}},
                    },
                    {"id": "agent_email", "type": "EMAIL_MARKETER"},
                ],
            },
        )

        assert response.status_code == 200
        run = response.json()
        assert run["success"] is True
        assert run["halted"] is False
        assert [step["agentType"] for step in run["steps"]] == ["LEAD_GENERATOR", "EMAIL_MARKETER"]
        assert run["steps"][1]["result"]["output"]["emailsSent"] == 5
        assert run["finalOutput"]["emailsSent"] == 5

    def test_pipeline_with_unsupported_step(self, client: TestClient):
        response = client.post(
            f"{API}/pipelines",
            json={"steps": [{"type": "SALES"}, {"type": "CONVERSATIONAL"}]},
        )
        assert response.status_code == 400

    def test_empty_pipeline_rejected(self, client: TestClient):
        response = client.post(f"{API}/pipelines", json={"steps": []})
        assert response.status_code == 422

    def test_parallel(self, client: TestClient):
        response = client.post(
            f"{API}/pipelines/parallel",
            json={"steps": [{"type": "ANALYTICS"}, {"type": "SALES"}, {"type": "CUSTOMER_SERVICE"}]},
        )

        assert response.status_code == 200
        run = response.json()
        assert run["success"] is True
        assert [step["agentType"] for step in run["steps"]] == ["ANALYTICS", "SALES", "CUSTOMER_SERVICE"]
