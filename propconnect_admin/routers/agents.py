"""Agent management pages: list, detail, create, edit and delete."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from propconnect_admin.core.dependencies import AdminShellDep, BackendDep, CurrentAdmin
from propconnect_admin.models.agent import Agent, AgentCreate, AgentUpdate
from propconnect_admin.models.base import Page
from propconnect_admin.models.shell import AdminPage
from propconnect_admin.services import agent as agent_service
from propconnect_admin.services.pagination import page_of

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("", response_model=AdminPage[Page[Agent]])
async def list_agents(
    shell: AdminShellDep,
    backend: BackendDep,
    search: str = "",
    status_filter: Annotated[str, Query(alias="status")] = agent_service.ALL_STATUSES,
    page: int = 1,
    page_size: Annotated[int, Query(alias="pageSize")] = 10,
) -> AdminPage[Page[Agent]]:
    """
    Agents matching `search` (full name, email or username) and `status` ("ALL" or an
    agent status), paginated by the console.
    """
    agents = await agent_service.list_agents(backend)
    filtered = agent_service.filter_agents(agents, search, status_filter)
    return AdminPage[Page[Agent]](shell=shell, data=page_of(filtered, page, page_size))


@router.get("/{agent_id}", response_model=AdminPage[Agent])
async def get_agent(
    agent_id: int, shell: AdminShellDep, backend: BackendDep
) -> AdminPage[Agent]:
    agent = await agent_service.get_agent(backend, agent_id)
    return AdminPage[Agent](shell=shell, data=agent)


@router.post(
    "", response_model=AdminPage[Agent | None], status_code=status.HTTP_201_CREATED
)
async def create_agent(
    shell: AdminShellDep,
    backend: BackendDep,
    username: Annotated[str, Form()],
    password: Annotated[str, Form()],
    full_name: Annotated[str, Form(alias="fullName")],
    email: Annotated[str, Form()],
    phone_number: Annotated[str, Form(alias="phoneNumber")],
    location: Annotated[str | None, Form()] = None,
    address: Annotated[str | None, Form()] = None,
    age: Annotated[int | None, Form()] = None,
    blood_group: Annotated[str | None, Form(alias="bloodGroup")] = None,
    date_of_birth: Annotated[str | None, Form(alias="dateOfBirth")] = None,
    proofs: Annotated[list[UploadFile] | None, File()] = None,
) -> AdminPage[Agent | None]:
    """
    Register a new agent from the multipart agent form, with optional proof documents.

    Returns the created agent when the backend sends it back.
    """
    agent_in = AgentCreate(
        username=username,
        password=password,
        full_name=full_name,
        email=email,
        phone_number=phone_number,
        location=location,
        address=address,
        age=age,
        blood_group=blood_group,
        date_of_birth=date_of_birth,
    )
    files = [
        (
            proof.filename or "proof",
            await proof.read(),
            proof.content_type or "application/octet-stream",
        )
        for proof in proofs or []
    ]
    created = await agent_service.create_agent(backend, agent_in, files)
    return AdminPage[Agent | None](shell=shell, data=created)


@router.put("/{agent_id}", response_model=AdminPage[Agent | None])
async def update_agent(
    agent_id: int,
    agent_update: AgentUpdate,
    shell: AdminShellDep,
    backend: BackendDep,
) -> AdminPage[Agent | None]:
    updated = await agent_service.update_agent(backend, agent_id, agent_update)
    return AdminPage[Agent | None](shell=shell, data=updated)


@router.delete("/{agent_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_agent(agent_id: int, _: CurrentAdmin, backend: BackendDep) -> None:
    await agent_service.delete_agent(backend, agent_id)
