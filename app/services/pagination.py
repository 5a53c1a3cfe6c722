# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Pagination normalizer shared by every list endpoint.

Out-of-range page sizes reset to the default rather than being clamped
to the nearest bound. Page numbers are capped so the offset stays a valid
SQL integer.
"""

from typing import Any, NamedTuple

from app.core.config import settings


# Largest offset a 64-bit signed SQL integer can hold.
MAX_OFFSET = 2 ** 63 - 1


class Page(NamedTuple):
    page: int
    page_size: int
    offset: int


def _to_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def normalize(page: Any = 1, page_size: Any = None) -> Page:
    default_size = settings.DEFAULT_PAGE_SIZE
    page = _to_int(page, 1)
    page_size = _to_int(page_size, default_size)
    if page < 1:
        page = 1
    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        page_size = default_size
    if (page - 1) * page_size > MAX_OFFSET:
        page = MAX_OFFSET // page_size + 1
    return Page(page, page_size, (page - 1) * page_size)
