"""Tests for agent service functions."""

import json

import pytest

from propconnect_admin.exceptions import BackendError, NotFoundError, ValidationError
from propconnect_admin.models.agent import Agent, AgentCreate, AgentUpdate
from propconnect_admin.models.enums import AgentStatus, BadgeVariant
from propconnect_admin.services import agent as agent_service

AGENTS_PATH = "/api/admin/agents"


def agent_payload(agent_id=1, **overrides):
    payload = {
        "id": agent_id,
        "username": f"agent{agent_id}",
        "fullName": f"Agent Number {agent_id}",
        "email": f"agent{agent_id}@propconnect.test",
        "phoneNumber": "9000000000",
        "status": "ACTIVE",
        "createdAt": "2024-01-01T10:00:00",
    }
    payload.update(overrides)
    return payload


def valid_create(**overrides):
    fields = dict(
        username="newagent",
        password="secret123",
        full_name="New Agent",
        email="new@propconnect.test",
        phone_number="9876543210",
    )
    fields.update(overrides)
    return AgentCreate(**fields)


class TestValidation:
    def test_valid_form_passes(self):
        agent_service.validate_agent_form(valid_create(), creating=True)

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"username": "  "}, "username"),
            ({"password": ""}, "password"),
            ({"full_name": ""}, "fullName"),
            ({"email": ""}, "email"),
            ({"email": "not-an-email"}, "email"),
            ({"phone_number": ""}, "phoneNumber"),
        ],
    )
    def test_invalid_form(self, overrides, field):
        with pytest.raises(ValidationError) as exc_info:
            agent_service.validate_agent_form(valid_create(**overrides), creating=True)
        assert exc_info.value.field == field

    def test_password_not_required_on_update(self):
        update = AgentUpdate(
            username="a", full_name="A", email="a@b.co", phone_number="1"
        )
        agent_service.validate_agent_form(update)


class TestBackendCalls:
    @pytest.mark.asyncio
    async def test_list_agents(self, backend_client, fake_backend):
        fake_backend.add("GET", AGENTS_PATH, [agent_payload(1), agent_payload(2)])

        agents = await agent_service.list_agents(backend_client)

        assert [a.id for a in agents] == [1, 2]
        assert agents[0].full_name == "Agent Number 1"

    @pytest.mark.asyncio
    async def test_get_missing_agent(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{AGENTS_PATH}/9", {"error": "gone"}, status_code=404)

        with pytest.raises(NotFoundError):
            await agent_service.get_agent(backend_client, 9)

    @pytest.mark.asyncio
    async def test_get_agent_server_error_propagates(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{AGENTS_PATH}/9", status_code=500)

        with pytest.raises(BackendError):
            await agent_service.get_agent(backend_client, 9)

    @pytest.mark.asyncio
    async def test_create_agent_sends_multipart(self, backend_client, fake_backend):
        fake_backend.add("POST", AGENTS_PATH, agent_payload(5, username="newagent"))

        created = await agent_service.create_agent(
            backend_client,
            valid_create(age=31),
            proofs=[("id.pdf", b"%PDF-1.4", "application/pdf")],
        )

        assert created.id == 5
        request = fake_backend.last("POST", AGENTS_PATH)
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = request.content
        assert b'name="fullName"' in body
        assert b'name="age"' in body
        assert b'name="proofs"; filename="id.pdf"' in body

    @pytest.mark.asyncio
    async def test_create_invalid_agent_never_reaches_backend(
        self, backend_client, fake_backend
    ):
        with pytest.raises(ValidationError):
            await agent_service.create_agent(backend_client, valid_create(email="x"))
        assert fake_backend.requests == []

    @pytest.mark.asyncio
    async def test_update_agent_sends_json(self, backend_client, fake_backend):
        fake_backend.add("PUT", f"{AGENTS_PATH}/3", agent_payload(3, status="SUSPENDED"))
        update = AgentUpdate(
            username="agent3",
            full_name="Agent Three",
            email="a3@propconnect.test",
            phone_number="1",
            status=AgentStatus.SUSPENDED,
        )

        updated = await agent_service.update_agent(backend_client, 3, update)

        assert updated.status == AgentStatus.SUSPENDED
        body = json.loads(fake_backend.last("PUT", f"{AGENTS_PATH}/3").content)
        assert body["fullName"] == "Agent Three"
        assert body["status"] == "SUSPENDED"
        assert "location" not in body

    @pytest.mark.asyncio
    async def test_delete_agent(self, backend_client, fake_backend):
        fake_backend.add("DELETE", f"{AGENTS_PATH}/3", status_code=204)

        await agent_service.delete_agent(backend_client, 3)

        assert fake_backend.last("DELETE", f"{AGENTS_PATH}/3")


class TestFilterAgents:
    @pytest.fixture
    def agents(self):
        return [
            Agent.model_validate(agent_payload(1, fullName="Ravi Kumar")),
            Agent.model_validate(
                agent_payload(2, email="anita@homes.in", status="INACTIVE")
            ),
            Agent.model_validate(agent_payload(3, username="vk_realty", status="SUSPENDED")),
        ]

    def test_search_fields(self, agents):
        assert [a.id for a in agent_service.filter_agents(agents, "RAVI")] == [1]
        assert [a.id for a in agent_service.filter_agents(agents, "homes.in")] == [2]
        assert [a.id for a in agent_service.filter_agents(agents, "vk_")] == [3]

    def test_status_filter(self, agents):
        result = agent_service.filter_agents(agents, status="INACTIVE")
        assert [a.id for a in result] == [2]

    def test_all_status(self, agents):
        assert len(agent_service.filter_agents(agents)) == 3

    def test_unknown_status(self, agents):
        with pytest.raises(ValidationError):
            agent_service.filter_agents(agents, status="RETIRED")


def test_agent_status_badge():
    agent = Agent.model_validate(agent_payload(1, status="SUSPENDED"))
    assert agent.status_badge == BadgeVariant.DESTRUCTIVE
    assert agent.model_dump(by_alias=True)["statusBadge"] == BadgeVariant.DESTRUCTIVE
