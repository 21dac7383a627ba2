"""Property management pages."""

import json
from typing import Annotated

from fastapi import APIRouter, Query, Request, status
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import FormData, UploadFile

from propconnect_admin.core.dependencies import AdminShellDep, BackendDep, CurrentAdmin
from propconnect_admin.exceptions import ValidationError
from propconnect_admin.models.enums import PropertyType
from propconnect_admin.models.property import (
    PropertyListItem,
    PropertyPage,
    PropertyUpdate,
)
from propconnect_admin.models.shell import AdminPage
from propconnect_admin.services import property as property_service

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=AdminPage[PropertyPage])
async def list_properties(
    shell: AdminShellDep,
    backend: BackendDep,
    page: int = 0,
    size: int = 10,
    property_type: Annotated[PropertyType | None, Query(alias="propertyType")] = None,
    search: str | None = None,
) -> AdminPage[PropertyPage]:
    """One backend page of properties; `page` is zero-based like the backend's."""
    properties = await property_service.list_properties(
        backend, page=page, size=size, property_type=property_type, search=search
    )
    return AdminPage[PropertyPage](shell=shell, data=properties)


@router.get("/agent/{agent_id}", response_model=AdminPage[list[PropertyListItem]])
async def list_agent_properties(
    agent_id: int, shell: AdminShellDep, backend: BackendDep
) -> AdminPage[list[PropertyListItem]]:
    properties = await property_service.list_properties_by_agent(backend, agent_id)
    return AdminPage[list[PropertyListItem]](shell=shell, data=properties)


@router.get("/{property_id}", response_model=AdminPage[PropertyListItem])
async def get_property(
    property_id: int, shell: AdminShellDep, backend: BackendDep
) -> AdminPage[PropertyListItem]:
    listing = await property_service.get_property(backend, property_id)
    return AdminPage[PropertyListItem](shell=shell, data=listing)


def parse_property_form(form: FormData) -> tuple[PropertyUpdate, list[UploadFile]]:
    """
    Read the property edit form.

    Text fields use the backend's camelCase names; `amenities` is comma separated,
    `existingImages` is a JSON array and `newImages` holds the uploaded files.

    Raises:
        ValidationError: A field has the wrong format.
    """
    fields = {
        key: value
        for key, value in form.multi_items()
        if isinstance(value, str)
        and value != ""
        and key not in ("amenities", "existingImages")
    }

    amenities = form.get("amenities")
    if isinstance(amenities, str):
        fields["amenities"] = [a.strip() for a in amenities.split(",") if a.strip()]

    existing_images = form.get("existingImages")
    if isinstance(existing_images, str) and existing_images:
        try:
            fields["existingImages"] = json.loads(existing_images)
        except json.JSONDecodeError as e:
            raise ValidationError(
                "existingImages must be a JSON array", field="existingImages"
            ) from e

    try:
        update = PropertyUpdate.model_validate(fields)
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"Invalid value for {field}: {error['msg']}", field=field) from e

    new_images = [
        value for value in form.getlist("newImages") if isinstance(value, UploadFile)
    ]
    return update, new_images


@router.put("/{property_id}")
async def update_property(
    property_id: int, request: Request, _: CurrentAdmin, backend: BackendDep
) -> dict[str, str]:
    """
    Submit the multipart property edit form.

    Example response:
        {"message": "Property updated successfully"}
    """
    async with request.form() as form:
        update, new_images = parse_property_form(form)
        files = [
            (
                image.filename or "image",
                await image.read(),
                image.content_type or "application/octet-stream",
            )
            for image in new_images
        ]
    message = await property_service.update_property(backend, property_id, update, files)
    return {"message": message}


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(property_id: int, _: CurrentAdmin, backend: BackendDep) -> None:
    await property_service.delete_property(backend, property_id)
