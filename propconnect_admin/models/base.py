"""Shared pydantic base classes for backend records and console responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """
    Base for records exchanged with the PropConnect backend.

    Attributes are snake_case in Python and camelCase on the wire. Unknown fields sent by the
    backend are ignored so new backend columns never break parsing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Page(CamelModel, Generic[T]):
    """One page of a collection paginated by the console."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
