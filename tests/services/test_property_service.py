"""Tests for property service functions."""

import json

import pytest

from propconnect_admin.exceptions import NotFoundError, ValidationError
from propconnect_admin.models.enums import BadgeVariant, ListingType, PropertyType
from propconnect_admin.models.property import PropertyImage, PropertyUpdate
from propconnect_admin.services import property as property_service

PROPERTIES_PATH = "/api/properties"


def listing(property_id=1, **overrides):
    payload = {
        "id": property_id,
        "propertyTitle": f"Listing {property_id}",
        "price": 4500000,
        "propertyType": "COMMERCIAL",
        "listingType": "RENT",
        "city": "Pune",
        "agentId": 7,
        "agentName": "Anita Rao",
        "status": "ACTIVE",
        "viewCount": 12,
    }
    payload.update(overrides)
    return payload


def complete_update(**overrides):
    fields = dict(
        property_title="Lake House",
        price=7500000,
        property_type=PropertyType.RESIDENTIAL,
        listing_type=ListingType.SALE,
        full_address="1 Lake Road",
        locality="Baner",
        city="Pune",
        state="Maharashtra",
        pincode="411045",
        contact_name="Anita",
        contact_phone="9000000000",
    )
    fields.update(overrides)
    return PropertyUpdate(**fields)


class TestListing:
    @pytest.mark.asyncio
    async def test_list_properties_forwards_filters(self, backend_client, fake_backend):
        fake_backend.add(
            "GET",
            PROPERTIES_PATH,
            {"content": [listing(1)], "totalPages": 3, "totalElements": 21, "number": 1},
        )

        page = await property_service.list_properties(
            backend_client, page=1, size=10, property_type=PropertyType.COMMERCIAL
        )

        assert page.total_pages == 3
        assert page.content[0].type_badge == BadgeVariant.SECONDARY
        assert page.content[0].listing_badge == BadgeVariant.SECONDARY
        params = dict(fake_backend.last("GET", PROPERTIES_PATH).url.params)
        assert params == {"page": "1", "size": "10", "propertyType": "COMMERCIAL"}

    @pytest.mark.asyncio
    async def test_blank_search_not_forwarded(self, backend_client, fake_backend):
        fake_backend.add("GET", PROPERTIES_PATH, {"content": []})

        await property_service.list_properties(backend_client, search="   ")

        assert "search" not in fake_backend.last("GET", PROPERTIES_PATH).url.params

    @pytest.mark.asyncio
    async def test_get_missing_property(self, backend_client, fake_backend):
        with pytest.raises(NotFoundError):
            await property_service.get_property(backend_client, 404)

    @pytest.mark.asyncio
    async def test_properties_by_agent(self, backend_client, fake_backend):
        fake_backend.add("GET", f"{PROPERTIES_PATH}/agent/7", [listing(1), listing(2)])

        result = await property_service.list_properties_by_agent(backend_client, 7)

        assert [p.id for p in result] == [1, 2]


class TestUpdate:
    def test_missing_required_fields(self):
        update = complete_update(city="", pincode=None, price=0)
        assert property_service.missing_required_fields(update) == [
            "price",
            "city",
            "pincode",
        ]

    def test_form_fields(self):
        update = complete_update(
            parking_available=True,
            amenities=["Gym", "Pool"],
            existing_images=[PropertyImage(image_url="https://img/1.jpg", is_primary=True)],
            property_description="",
        )

        form = property_service.build_property_form(update)

        assert form["propertyTitle"] == "Lake House"
        assert form["price"] == "7500000"
        assert form["propertyType"] == "RESIDENTIAL"
        assert form["parkingAvailable"] == "true"
        assert form["amenities"] == "Gym, Pool"
        assert json.loads(form["existingImages"]) == [
            {"imageUrl": "https://img/1.jpg", "isPrimary": True}
        ]
        assert "propertyDescription" not in form
        assert "bedrooms" not in form

    @pytest.mark.asyncio
    async def test_incomplete_update_is_rejected(self, backend_client, fake_backend):
        with pytest.raises(ValidationError, match="contactPhone"):
            await property_service.update_property(
                backend_client, 1, complete_update(contact_phone="")
            )
        assert fake_backend.requests == []

    @pytest.mark.asyncio
    async def test_update_sends_multipart_with_images(
        self, backend_client, fake_backend
    ):
        fake_backend.add("PUT", f"{PROPERTIES_PATH}/1", {"message": "Saved"})

        message = await property_service.update_property(
            backend_client,
            1,
            complete_update(),
            new_images=[("front.jpg", b"\xff\xd8", "image/jpeg")],
        )

        assert message == "Saved"
        request = fake_backend.last("PUT", f"{PROPERTIES_PATH}/1")
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="newImages"; filename="front.jpg"' in request.content
        assert b'name="existingImages"' in request.content

    @pytest.mark.asyncio
    async def test_update_default_message(self, backend_client, fake_backend):
        fake_backend.add("PUT", f"{PROPERTIES_PATH}/1", status_code=204)

        message = await property_service.update_property(
            backend_client, 1, complete_update()
        )

        assert message == "Property updated successfully"

    @pytest.mark.asyncio
    async def test_update_missing_property(self, backend_client, fake_backend):
        with pytest.raises(NotFoundError):
            await property_service.update_property(backend_client, 5, complete_update())


@pytest.mark.asyncio
async def test_delete_property(backend_client, fake_backend):
    fake_backend.add("DELETE", f"{PROPERTIES_PATH}/5", status_code=204)
    await property_service.delete_property(backend_client, 5)
    assert fake_backend.last("DELETE", f"{PROPERTIES_PATH}/5")
