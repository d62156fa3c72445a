"""
Page descriptor returned by the paginated endpoints.

``page`` is zero‑indexed.  ``total_pages`` is zero for an empty
collection, and ``first``/``last`` describe the position of the
current page.
"""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    model_config = ConfigDict(populate_by_name=True)

    content: List[T]
    page: int
    size: int
    total_elements: int = Field(..., alias="totalElements")
    total_pages: int = Field(..., alias="totalPages")
    number_of_elements: int = Field(..., alias="numberOfElements")
    first: bool
    last: bool

    @classmethod
    def build(cls, content: List[T], page: int, size: int, total: int) -> "Page[T]":
        total_pages = math.ceil(total / size) if size else 0
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total,
            total_pages=total_pages,
            number_of_elements=len(content),
            first=page == 0,
            last=page >= total_pages - 1,
        )
