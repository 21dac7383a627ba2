"""Agent service module: backend calls and list filtering for the agents pages."""

import logging
from typing import Iterable

from propconnect_admin.exceptions import BackendError, NotFoundError, ValidationError
from propconnect_admin.models.agent import Agent, AgentBase, AgentCreate, AgentUpdate
from propconnect_admin.models.enums import AgentStatus
from propconnect_admin.services.backend_client import BackendClient
from propconnect_admin.utils.validation import is_valid_email

logger = logging.getLogger(__name__)

AGENTS_PATH = "/api/admin/agents"
ALL_STATUSES = "ALL"

# (filename, content, content type) as accepted by httpx multipart bodies
UploadedFile = tuple[str, bytes, str]


def validate_agent_form(agent: AgentBase | AgentUpdate, creating: bool = False) -> None:
    """
    Check the agent form before it is sent to the backend.

    Username, full name, email and phone number are required and the email must look
    like an address. Creating an agent also requires a password.

    Raises:
        ValidationError: On the first failing field.
    """
    if not (agent.username or "").strip():
        raise ValidationError("Username is required", field="username")
    if creating and not getattr(agent, "password", None):
        raise ValidationError("Password is required", field="password")
    if not (agent.full_name or "").strip():
        raise ValidationError("Full name is required", field="fullName")
    if not (agent.email or "").strip():
        raise ValidationError("Email is required", field="email")
    if not is_valid_email(agent.email):
        raise ValidationError("Invalid email format", field="email")
    if not (agent.phone_number or "").strip():
        raise ValidationError("Phone number is required", field="phoneNumber")


async def list_agents(client: BackendClient) -> list[Agent]:
    payload = await client.get(AGENTS_PATH)
    return [Agent.model_validate(item) for item in payload or []]


async def get_agent(client: BackendClient, agent_id: int) -> Agent:
    """
    Retrieve one agent.

    Raises:
        NotFoundError: The backend has no agent with this ID.
    """
    try:
        payload = await client.get(f"{AGENTS_PATH}/{agent_id}")
    except BackendError as e:
        if e.status_code == 404:
            raise NotFoundError("Agent", agent_id) from e
        raise
    if not payload:
        raise NotFoundError("Agent", agent_id)
    return Agent.model_validate(payload)


async def create_agent(
    client: BackendClient,
    agent_in: AgentCreate,
    proofs: list[UploadedFile] | None = None,
) -> Agent | None:
    """
    Register a new agent as a multipart form, with optional proof documents.

    Returns:
        Agent | None: The created agent when the backend echoes it back.

    Raises:
        ValidationError: The form is incomplete.
    """
    validate_agent_form(agent_in, creating=True)
    fields = {
        key: str(value)
        for key, value in agent_in.model_dump(by_alias=True, exclude_none=True).items()
    }
    files = [("proofs", proof) for proof in proofs or []]
    payload = await client.post(AGENTS_PATH, data=fields, files=files or None)
    logger.info(f"Agent '{agent_in.username}' created with {len(files)} proof(s).")
    return Agent.model_validate(payload) if isinstance(payload, dict) else None


async def update_agent(
    client: BackendClient, agent_id: int, agent_update: AgentUpdate
) -> Agent | None:
    """
    Update an agent. The whole form is validated, as in the edit dialog.

    Raises:
        ValidationError: The form is incomplete.
    """
    validate_agent_form(agent_update)
    payload = await client.put(
        f"{AGENTS_PATH}/{agent_id}",
        json=agent_update.model_dump(mode="json", by_alias=True, exclude_none=True),
    )
    logger.info(f"Agent {agent_id} updated.")
    return Agent.model_validate(payload) if isinstance(payload, dict) else None


async def delete_agent(client: BackendClient, agent_id: int) -> None:
    await client.delete(f"{AGENTS_PATH}/{agent_id}")
    logger.info(f"Agent {agent_id} deleted.")


def filter_agents(
    agents: Iterable[Agent], search: str = "", status: str = ALL_STATUSES
) -> list[Agent]:
    """
    Case-insensitive search over full name, email and username, combined with a status filter.

    Raises:
        ValidationError: `status` is neither "ALL" nor an agent status.
    """
    if status != ALL_STATUSES and status not in AgentStatus.__members__:
        raise ValidationError(f"Unknown agent status '{status}'", field="status")

    query = (search or "").strip().lower()
    result = []
    for agent in agents:
        if query and not (
            query in agent.full_name.lower()
            or query in agent.email.lower()
            or query in agent.username.lower()
        ):
            continue
        if status != ALL_STATUSES and agent.status.value != status:
            continue
        result.append(agent)
    return result
