"""페이지네이션 / 정렬 헬퍼"""

from __future__ import annotations

import math

from sqlalchemy import Column

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def get_page(page: int | None) -> int:
    return page if page and page > 0 else 1


def get_page_size(page_size: int | None) -> int:
    if not page_size or page_size <= 0:
        return DEFAULT_PAGE_SIZE
    return min(page_size, MAX_PAGE_SIZE)


def get_offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def get_order_by(sort: str | None, columns: dict[str, Column], default: str):
    """
    "<column> [asc|desc]" 문자열 → ORDER BY 절.

    허용된 컬럼(columns)만 받으며 "business.created_at desc"처럼
    테이블 접두어가 붙어 있어도 마지막 부분만 본다. 해석할 수 없으면 default 사용.
    """
    parsed = _parse_sort(sort, columns) or _parse_sort(default, columns)
    if parsed is None:
        raise ValueError(f"default sort {default!r} is not an allowed column")
    column, direction = parsed
    return column.desc() if direction == "desc" else column.asc()


def _parse_sort(sort: str | None, columns: dict[str, Column]):
    if not sort:
        return None
    parts = sort.strip().split()
    if not parts or len(parts) > 2:
        return None
    name = parts[0].rsplit(".", 1)[-1].lower()
    direction = parts[1].lower() if len(parts) == 2 else "asc"
    if name not in columns or direction not in ("asc", "desc"):
        return None
    return columns[name], direction


def pagination_info(total: int, page: int, page_size: int) -> dict:
    return {
        "page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": math.ceil(total / page_size) if page_size else 0,
    }
