import math
from dataclasses import dataclass
from typing import Sequence, TypeVar

from propconnect_admin.exceptions import ValidationError
from propconnect_admin.models.base import Page
from propconnect_admin.models.sold_property import PAGE_SIZE_OPTIONS

T = TypeVar("T")


@dataclass(frozen=True)
class Pagination:
    """
    Page position over a collection of `total` records.

    `total_pages` is at least 1, so an empty collection is a single empty page.
    """

    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    @property
    def start(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def end(self) -> int:
        return min(self.start + self.page_size, self.total)

    def with_page_size(self, page_size: int) -> "Pagination":
        """Switch page size; always goes back to page 1."""
        validate_page_size(page_size)
        return Pagination(page=1, page_size=page_size, total=self.total)


def validate_page_size(page_size: int) -> int:
    if page_size not in PAGE_SIZE_OPTIONS:
        allowed = ", ".join(str(size) for size in PAGE_SIZE_OPTIONS)
        raise ValidationError(f"Page size must be one of {allowed}", field="pageSize")
    return page_size


def clamp_page(page: int, page_size: int, total: int) -> Pagination:
    """Build a Pagination whose page is clamped into [1, total_pages]."""
    validate_page_size(page_size)
    pagination = Pagination(page=1, page_size=page_size, total=total)
    return Pagination(
        page=min(max(page, 1), pagination.total_pages),
        page_size=page_size,
        total=total,
    )


def paginate(
    records: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE_OPTIONS[0]
) -> tuple[list[T], Pagination]:
    """
    Slice one page out of `records`.

    Out-of-range pages are clamped, so asking for a page past the end returns the last page.

    Raises:
        ValidationError: `page_size` is not one of the page size options.
    """
    pagination = clamp_page(page, page_size, len(records))
    return list(records[pagination.start : pagination.end]), pagination


def page_of(
    records: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE_OPTIONS[0]
) -> Page[T]:
    """`paginate()` packed into the Page response model."""
    items, pagination = paginate(records, page, page_size)
    return Page(
        items=items,
        total=pagination.total,
        page=pagination.page,
        page_size=pagination.page_size,
        total_pages=pagination.total_pages,
    )
