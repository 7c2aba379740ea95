"""
Pagination metadata for list endpoints.

Turns a Flask-SQLAlchemy :class:`~flask_sqlalchemy.pagination.Pagination`
into the ``{"data": [...], "meta": {...}}`` page envelope consumed by the
frontend.
"""

from collections.abc import Callable
from typing import Any

from flask_sqlalchemy.pagination import Pagination

PREVIOUS_LABEL = "« Previous"
NEXT_LABEL = "Next »"
GAP_LABEL = "..."


def _link(url: str | None, label: str, page: int | None, active: bool = False) -> dict[str, Any]:
    return {"url": url, "label": label, "page": page, "active": active}


def build_page_links(
    pagination: Pagination,
    last_page: int,
    url_for_page: Callable[[int], str],
) -> list[dict[str, Any]]:
    """
    Build the previous / numbered / next link list for a page.

    Numbered pages come from :meth:`Pagination.iter_pages`, which keeps the
    first and last two pages plus a window around the current one; skipped
    ranges are represented by a ``"..."`` entry without a URL.
    """
    current = pagination.page

    prev_page = current - 1 if current > 1 else None
    links = [
        _link(url_for_page(prev_page) if prev_page else None, PREVIOUS_LABEL, prev_page)
    ]

    numbered = list(pagination.iter_pages()) or [1]
    for number in numbered:
        if number is None:
            links.append(_link(None, GAP_LABEL, None))
        else:
            links.append(_link(url_for_page(number), str(number), number, number == current))

    next_page = current + 1 if current < last_page else None
    links.append(
        _link(url_for_page(next_page) if next_page else None, NEXT_LABEL, next_page)
    )
    return links


def format_page(
    pagination: Pagination,
    serialize: Callable[[Any], dict[str, Any]],
    url_for_page: Callable[[int], str],
    path: str,
) -> dict[str, Any]:
    """
    Wrap one page of results in the page envelope.

    ``current_page`` is passed through untouched, so asking for a page past
    the end yields ``data == []`` alongside the real ``last_page``.

    Args:
        pagination: Result of ``db.paginate``.
        serialize: Converts one item into its JSON representation.
        url_for_page: Returns the absolute URL of a given page number.
        path: URL of the listing endpoint without a query string.

    Returns:
        Dictionary with ``data`` (serialized items) and ``meta``.
    """
    total = pagination.total or 0
    last_page = max(1, pagination.pages)
    items = [serialize(item) for item in pagination.items]

    if items:
        first_index = (pagination.page - 1) * pagination.per_page + 1
        last_index = first_index + len(items) - 1
    else:
        first_index = last_index = None

    return {
        "data": items,
        "meta": {
            "current_page": pagination.page,
            "from": first_index,
            "last_page": last_page,
            "links": build_page_links(pagination, last_page, url_for_page),
            "path": path,
            "per_page": pagination.per_page,
            "to": last_index,
            "total": total,
        },
    }
