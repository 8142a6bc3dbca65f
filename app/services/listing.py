"""Filter and sort helpers shared by the store and user listings."""

from collections.abc import Iterable, Mapping

from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

SORT_ORDERS = ("ASC", "DESC")
DEFAULT_SORT_FIELD = "name"
DEFAULT_SORT_ORDER = "ASC"


def normalize_sort(
    sort_by: str | None,
    sort_order: str | None,
    allowed_fields: Iterable[str],
    default_field: str = DEFAULT_SORT_FIELD,
) -> tuple[str, str]:
    """
    Resolve user-supplied sortBy/sortOrder against a whitelist.

    Unknown fields fall back to default_field and unknown orders to ASC;
    this never raises.
    """
    allowed = tuple(allowed_fields)
    field = sort_by if sort_by in allowed else default_field
    order = (sort_order or "").strip().upper()
    if order not in SORT_ORDERS:
        order = DEFAULT_SORT_ORDER
    return field, order


def apply_contains_filters(
    query: Query,
    columns: Mapping[str, ColumnElement],
    values: Mapping[str, str | None],
) -> Query:
    """
    AND together a case-insensitive substring match for every non-empty filter value.

    % and _ in a value match themselves, not LIKE wildcards.
    """
    for key, value in values.items():
        if value is None or not value.strip():
            continue
        query = query.filter(columns[key].icontains(value.strip(), autoescape=True))
    return query


def apply_sort(
    query: Query,
    columns: Mapping[str, ColumnElement],
    field: str,
    order: str,
    tiebreaker: ColumnElement | None = None,
) -> Query:
    column = columns[field]
    query = query.order_by(column.desc() if order == "DESC" else column.asc())
    if tiebreaker is not None:
        query = query.order_by(tiebreaker.asc())
    return query
