import math
from typing import Any, Dict, List

from flask import request

from chaplog.utils.errors import ValidationError

MAX_PAGE_SIZE = 100


def get_paging_args(default_page_size=20):
    """Read and validate ``page`` / ``pageSize`` from the query string."""
    try:
        page = int(request.args.get('page', 1))
        page_size = int(request.args.get('pageSize', default_page_size))
    except ValueError:
        raise ValidationError("page and pageSize must be integers")

    errors = []
    if page < 1:
        errors.append({"field": "page", "message": "page must be 1 or greater"})
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        errors.append({"field": "pageSize", "message": f"pageSize must be between 1 and {MAX_PAGE_SIZE}"})
    if errors:
        raise ValidationError("Invalid paging parameters", errors)
    return page, page_size


def paginate(query, page: int, page_size: int):
    """Return ``(items, total_count)`` for one page of a SQLAlchemy query."""
    total_count = query.order_by(None).count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return items, total_count


def paged_result(items: List[Any], total_count: int, page: int, page_size: int) -> Dict[str, Any]:
    page_count = math.ceil(total_count / page_size) if page_size else 0
    return {
        'items': items,
        'totalCount': total_count,
        'pageCount': page_count,
        'currentPage': page,
        'pageSize': page_size,
        'hasPreviousPage': page > 1,
        'hasNextPage': page < page_count,
    }
