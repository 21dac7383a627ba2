"""Property service module: listing, editing and deleting properties through the backend."""

import json
import logging
from enum import Enum

from pydantic.alias_generators import to_camel

from propconnect_admin.exceptions import BackendError, NotFoundError, ValidationError
from propconnect_admin.models.enums import PropertyType
from propconnect_admin.models.property import (
    PROPERTY_REQUIRED_FIELDS,
    PropertyListItem,
    PropertyPage,
    PropertyUpdate,
)
from propconnect_admin.services.agent import UploadedFile
from propconnect_admin.services.backend_client import BackendClient

logger = logging.getLogger(__name__)

PROPERTIES_PATH = "/api/properties"


async def list_properties(
    client: BackendClient,
    page: int = 0,
    size: int = 10,
    property_type: PropertyType | None = None,
    search: str | None = None,
) -> PropertyPage:
    """
    Retrieve one backend page of properties.

    Parameters:
        client: Backend gateway.
        page: Zero-based page number, as the backend counts them.
        size: Page size.
        property_type: Only this type when set.
        search: Free-text search forwarded to the backend; blank means none.

    Returns:
        PropertyPage: The page as returned by the backend.
    """
    params = {
        "page": page,
        "size": size,
        "propertyType": property_type.value if property_type else None,
        "search": search.strip() if search and search.strip() else None,
    }
    payload = await client.get(PROPERTIES_PATH, params=params)
    return PropertyPage.model_validate(payload or {})


async def get_property(client: BackendClient, property_id: int) -> PropertyListItem:
    """
    Raises:
        NotFoundError: The backend has no property with this ID.
    """
    try:
        payload = await client.get(f"{PROPERTIES_PATH}/{property_id}")
    except BackendError as e:
        if e.status_code == 404:
            raise NotFoundError("Property", property_id) from e
        raise
    if not payload:
        raise NotFoundError("Property", property_id)
    return PropertyListItem.model_validate(payload)


async def list_properties_by_agent(
    client: BackendClient, agent_id: int
) -> list[PropertyListItem]:
    payload = await client.get(f"{PROPERTIES_PATH}/agent/{agent_id}")
    # Some backend versions wrap the list in a page
    if isinstance(payload, dict):
        payload = payload.get("content", [])
    return [PropertyListItem.model_validate(item) for item in payload or []]


def _form_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def missing_required_fields(update: PropertyUpdate) -> list[str]:
    """Wire names of the required fields left empty, in form order."""
    return [
        to_camel(field)
        for field in PROPERTY_REQUIRED_FIELDS
        if getattr(update, field) in (None, "", 0)
    ]


def build_property_form(update: PropertyUpdate) -> dict[str, str]:
    """
    Flatten an edit into multipart form fields.

    Empty values are not sent; amenities travel as one comma separated field and the
    images kept from the current listing as a JSON array.
    """
    fields = {}
    for field, value in update:
        if field in ("amenities", "existing_images"):
            continue
        if value is None or value == "":
            continue
        fields[to_camel(field)] = _form_value(value)
    fields["amenities"] = ", ".join(update.amenities)
    fields["existingImages"] = json.dumps(
        [image.model_dump(by_alias=True) for image in update.existing_images]
    )
    return fields


async def update_property(
    client: BackendClient,
    property_id: int,
    update: PropertyUpdate,
    new_images: list[UploadedFile] | None = None,
) -> str:
    """
    Submit the property edit form.

    Returns:
        str: The backend confirmation message.

    Raises:
        ValidationError: Required fields are missing.
        NotFoundError: The backend has no property with this ID.
    """
    missing = missing_required_fields(update)
    if missing:
        raise ValidationError(
            f"Please fill in required fields: {', '.join(missing)}", field=missing[0]
        )

    files = [("newImages", image) for image in new_images or []]
    try:
        payload = await client.put(
            f"{PROPERTIES_PATH}/{property_id}",
            data=build_property_form(update),
            files=files or None,
        )
    except BackendError as e:
        if e.status_code == 404:
            raise NotFoundError("Property", property_id) from e
        raise

    logger.info(f"Property {property_id} updated with {len(files)} new image(s).")
    if isinstance(payload, dict) and payload.get("message"):
        return payload["message"]
    return "Property updated successfully"


async def delete_property(client: BackendClient, property_id: int) -> None:
    await client.delete(f"{PROPERTIES_PATH}/{property_id}")
    logger.info(f"Property {property_id} deleted.")
