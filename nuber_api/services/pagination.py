"""
Fixed-size offset pagination shared by the listing operations.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Sequence, TypeVar

from nuber_api.db.storage import Repository

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    results: List[T] = field(default_factory=list)
    total_results: int = 0
    total_pages: int = 0


def page_offset(page: int, page_size: int) -> int:
    """Rows to skip before ``page``; pages below 1 are treated as page 1."""
    return (max(page, 1) - 1) * page_size


def total_pages(total_results: int, page_size: int) -> int:
    return math.ceil(total_results / page_size)


def paginate(repository: Repository, *criteria, page: int, page_size: int,
             order_by: Sequence[Any] = ()) -> Page:
    """Load one page of ``repository`` rows matching ``criteria`` and count all matches."""
    results = repository.find(
        *criteria,
        order_by=order_by,
        skip=page_offset(page, page_size),
        take=page_size,
    )
    total_results = repository.count(*criteria)
    return Page(
        results=results,
        total_results=total_results,
        total_pages=total_pages(total_results, page_size),
    )
