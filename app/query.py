"""
Query building for the task listing endpoint.

Translates the raw query-string parameters of ``GET /api/tasks`` into a
single bounded, ordered ``select()`` against the ``tasks`` table.
Malformed paging and sorting values are never rejected: they fall back to
defaults or are clamped into range.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from flask_sqlalchemy import SQLAlchemy
from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import Select, select

from app.models import Task

SORTABLE_FIELDS = ("id", "title", "status", "created_at", "updated_at")
DEFAULT_SORT_FIELD = "created_at"
DEFAULT_SORT_DIRECTION = "desc"

# Largest OFFSET a signed 64-bit SQL integer can hold.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PaginationSettings:
    """Page size limits for the listing endpoint."""

    default_per_page: int = 10
    max_per_page: int = 100

    def __post_init__(self) -> None:
        if self.max_per_page < 1:
            raise ValueError("max_per_page must be at least 1")
        if self.default_per_page < 1:
            raise ValueError("default_per_page must be at least 1")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "PaginationSettings":
        """Build settings from a Flask config (``DEFAULT_PER_PAGE``, ``MAX_PER_PAGE``)."""
        return cls(
            default_per_page=int(config.get("DEFAULT_PER_PAGE", cls.default_per_page)),
            max_per_page=int(config.get("MAX_PER_PAGE", cls.max_per_page)),
        )

    def clamp(self, per_page: int | None) -> int:
        """Resolve a requested page size into ``[1, max_per_page]``."""
        if per_page is None:
            per_page = self.default_per_page
        return max(1, min(per_page, self.max_per_page))


@dataclass
class BoundedQuery:
    """
    A filtered, ordered statement together with its page window.

    Attributes:
        statement: The ``select(Task)`` with filters and ordering applied.
        page: 1-based page index.
        per_page: Page size, already clamped.
        params: The effective listing parameters, used to build page links.
    """

    statement: Select
    page: int
    per_page: int
    params: dict[str, Any] = field(default_factory=dict)

    def execute(self, db: SQLAlchemy) -> Pagination:
        """
        Run the statement, returning one page plus the total match count.

        Pages whose offset would overflow the database integer are past the
        end of any table, so the last representable page is queried instead
        and the requested page number is reported back unchanged.
        """
        page = min(self.page, MAX_OFFSET // self.per_page)
        pagination = db.paginate(
            self.statement,
            page=page,
            per_page=self.per_page,
            error_out=False,
            count=True,
        )
        pagination.page = self.page
        return pagination


def _as_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class TaskQueryBuilder:
    """
    Build bounded task queries from listing parameters.

    Recognized parameters: ``status``, ``search``, ``sort_by``,
    ``sort_dir``, ``per_page`` and ``page``. Anything else is ignored.
    """

    def __init__(self, settings: PaginationSettings) -> None:
        self.settings = settings

    def build(self, params: Mapping[str, Any]) -> BoundedQuery:
        """
        Translate listing parameters into a bounded query.

        Unusable values never raise: unknown sort fields and directions fall
        back to the defaults, ``per_page`` is clamped by the injected
        settings and a missing or non-positive ``page`` becomes 1.

        Args:
            params: Raw query-string parameters (e.g. ``request.args``).

        Returns:
            BoundedQuery holding the ordered statement, the resolved page
            window and the effective parameters for page links.
        """
        stmt = select(Task)
        effective: dict[str, Any] = {}

        status = _as_text(params.get("status"))
        if status:
            # Exact match; a non-canonical value simply matches nothing.
            stmt = stmt.where(Task.status == status)
            effective["status"] = status

        search = _as_text(params.get("search"))
        if search:
            stmt = stmt.where(Task.search_clause(search))
            effective["search"] = search

        sort_by = _as_text(params.get("sort_by"))
        if sort_by not in SORTABLE_FIELDS:
            sort_by = DEFAULT_SORT_FIELD

        sort_dir = (_as_text(params.get("sort_dir")) or DEFAULT_SORT_DIRECTION).lower()
        if sort_dir not in ("asc", "desc"):
            sort_dir = DEFAULT_SORT_DIRECTION

        stmt = stmt.order_by(*self._ordering(sort_by, sort_dir))
        effective["sort_by"] = sort_by
        effective["sort_dir"] = sort_dir

        per_page = self.settings.clamp(_as_int(params.get("per_page")))
        page = _as_int(params.get("page")) or 1
        if page < 1:
            page = 1
        effective["per_page"] = per_page

        return BoundedQuery(statement=stmt, page=page, per_page=per_page, params=effective)

    @staticmethod
    def _ordering(sort_by: str, sort_dir: str) -> list:
        columns = [getattr(Task, sort_by)]
        # id breaks ties so equal sort values keep a stable order across pages
        if sort_by != "id":
            columns.append(Task.id)
        if sort_dir == "asc":
            return [column.asc() for column in columns]
        return [column.desc() for column in columns]
