"""Page/limit pagination for repository queries and in-memory lists."""

import math

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _meta(page: int, limit: int, total: int) -> dict:
    total_pages = math.ceil(total / limit) if limit else 1
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalItems": total,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }


def paginate(query, page: int = 1, limit: int = DEFAULT_LIMIT) -> tuple[list, dict]:
    """Slice a Protean queryset and describe the page."""
    page = max(1, page)
    limit = max(1, min(limit, MAX_LIMIT))

    total = query.count()
    items = query.offset((page - 1) * limit).limit(limit).all().items
    return items, _meta(page, limit, total)


def paginate_list(items: list, page: int = 1, limit: int = DEFAULT_LIMIT) -> tuple[list, dict]:
    page = max(1, page)
    limit = max(1, min(limit, MAX_LIMIT))

    start = (page - 1) * limit
    return items[start : start + limit], _meta(page, limit, len(items))
