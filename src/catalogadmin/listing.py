"""Search, filter and page a fetched collection for the console list pages."""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Page:
    items: list[Mapping[str, Any]]
    page: int
    pages: int
    total: int
    per_page: int

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.per_page


def filter_records(
    records: Iterable[Mapping[str, Any]],
    query: str | None,
    fields: Sequence[str],
    **exact: Any,
) -> list[Mapping[str, Any]]:
    """Keep records where any of ``fields`` contains ``query`` (case-insensitive)
    and every non-empty ``exact`` filter equals the record's value."""
    needle = (query or "").strip().lower()
    active = {key: value for key, value in exact.items() if value not in (None, "")}

    matched = []
    for record in records:
        if needle and not any(needle in str(record.get(field) or "").lower() for field in fields):
            continue
        if any(record.get(key) != value for key, value in active.items()):
            continue
        matched.append(record)
    return matched


def paginate(items: Sequence[Mapping[str, Any]], page: int, per_page: int) -> Page:
    per_page = max(per_page, 1)
    total = len(items)
    pages = max(math.ceil(total / per_page), 1)
    page = min(max(page, 1), pages)
    start = (page - 1) * per_page
    return Page(
        items=list(items[start : start + per_page]),
        page=page,
        pages=pages,
        total=total,
        per_page=per_page,
    )
