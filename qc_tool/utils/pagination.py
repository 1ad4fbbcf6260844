import math

from flask import request, current_app


def get_pagination_params():
    """Extract and validate pagination params from query string."""
    try:
        page = int(request.args.get('page', 1))
    except (ValueError, TypeError):
        page = 1
    page = max(1, page)

    try:
        per_page = int(request.args.get('per_page', current_app.config.get('DEFAULT_PER_PAGE', 20)))
    except (ValueError, TypeError):
        per_page = 20
    per_page = max(1, min(per_page, current_app.config.get('MAX_PER_PAGE', 100)))

    return page, per_page


def paginate_list(items, page, per_page):
    """Slice an already filtered list and return the page + meta."""
    total = len(items)
    total_pages = math.ceil(total / per_page) if total else 0
    start = (page - 1) * per_page
    meta = {
        'page': page,
        'per_page': per_page,
        'total': total,
        'total_pages': total_pages,
        'has_next': page < total_pages,
        'has_prev': page > 1,
    }
    return items[start:start + per_page], meta
