import csv
import io
from datetime import date
from typing import Sequence

from propconnect_admin.exceptions import ValidationError
from propconnect_admin.models.sold_property import SoldProperty

CSV_HEADERS = (
    "Property ID",
    "Title",
    "Price",
    "Type",
    "City",
    "Locality",
    "Bedrooms",
    "Bathrooms",
    "Area",
    "Sold Date",
    "Agent Name",
    "Agent Email",
    "Agent Phone",
)


def _format_price(price: float) -> str:
    return str(int(price)) if price.is_integer() else str(price)


def _format_date(value: date) -> str:
    """US locale date without zero padding, e.g. 3/7/2024."""
    return f"{value.month}/{value.day}/{value.year}"


def export_row(record: SoldProperty) -> list[str]:
    return [
        str(record.property_id),
        record.property_title,
        _format_price(record.price),
        record.property_type.value,
        record.city,
        record.locality,
        str(record.bedrooms),
        str(record.bathrooms),
        record.area,
        _format_date(record.updated_at.date()),
        record.sold_by.agent_name,
        record.sold_by.agent_email,
        record.sold_by.agent_phone,
    ]


def export_csv(records: Sequence[SoldProperty]) -> str:
    """
    Serialize sold properties to CSV, header first.

    Fields containing commas, quotes or line breaks are quoted and quotes are doubled.
    Lines end with "\\n" and there is no trailing newline, so N records give N + 1 lines.

    Raises:
        ValidationError: `records` is empty.
    """
    if not records:
        raise ValidationError("Nothing to export")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(export_row(record) for record in records)
    return buffer.getvalue().removesuffix("\n")


def export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"sold-properties-{today.isoformat()}.csv"
