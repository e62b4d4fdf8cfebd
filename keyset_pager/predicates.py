"""Keyset predicates over SQLAlchemy selects.

For ORDER BY created_at ASC, id ASC and a cursor at (t1, 42), the predicate
that resumes after the cursor is::

    created_at > t1 OR (created_at = t1 AND id > 42)

and the one that seeks before it flips both comparators. A DESC key flips
its own comparator once more, since later rows hold smaller values.
"""

import logging
import operator
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, List

from sqlalchemy import Select, and_, or_
from sqlalchemy.sql.elements import ColumnElement

from .cursor import KeyTuple
from .errors import ConfigError, DecodeError
from .sorting import Order, SortKey, SortSpec

logger = logging.getLogger(__name__)

_TRUE_TOKENS = {"1", "true", "t", "yes", "y"}
_FALSE_TOKENS = {"0", "false", "f", "no", "n"}


def resolve_column(query: Select, name: str) -> ColumnElement:
    """Find a sort column among the select's columns by name.

    Cursors are built from the values of the sort columns in fetched rows,
    so every sort column has to be selected.

    Raises:
        ConfigError: If the select has no column of that name
    """
    try:
        return query.selected_columns[name]
    except KeyError:
        raise ConfigError(f"Sort column '{name}' is not selected by the query") from None


def coerce_value(col: ColumnElement, value: Any) -> Any:
    """Convert a string cursor value to the Python type of ``col``.

    Non-string values and columns without a known Python type pass through.

    Raises:
        DecodeError: If the value does not parse as the column's type
    """
    if not isinstance(value, str):
        return value
    try:
        python_type = col.type.python_type
    except NotImplementedError:
        return value

    try:
        if python_type is str:
            return value
        if python_type is datetime:
            return datetime.fromisoformat(value)
        if python_type is date:
            return date.fromisoformat(value)
        if python_type is time:
            return time.fromisoformat(value)
        if python_type is bool:
            token = value.strip().lower()
            if token in _TRUE_TOKENS:
                return True
            if token in _FALSE_TOKENS:
                return False
            raise ValueError(f"not a boolean: {value!r}")
        if python_type in (int, float, Decimal, uuid.UUID):
            return python_type(value)
    except (TypeError, ValueError, ArithmeticError) as e:
        logger.warning(f"Rejected cursor value {value!r} for column {col}: {e}")
        raise DecodeError(f"Cursor value {value!r} is not a valid {python_type.__name__}") from e
    return value


def comparator(key: SortKey, forward: bool) -> Callable[[Any, Any], ColumnElement]:
    """Comparison that selects rows past a boundary in the given direction."""
    comp = operator.gt if forward else operator.lt
    if key.order is Order.DESC:
        comp = operator.lt if comp is operator.gt else operator.gt
    return comp


def order_by(query: Select, spec: SortSpec) -> List[ColumnElement]:
    """ORDER BY clauses for a sort spec."""
    clauses = []
    for key in spec.keys():
        col = resolve_column(query, key.name)
        clauses.append(col.desc() if key.order is Order.DESC else col.asc())
    return clauses


class PredicateBuilder:
    """Builds the resume/probe predicate for a sort spec.

    The same predicate serves the main fetch and the limit-1 boundary
    probes so both see identical comparator logic.
    """

    def __init__(self, spec: SortSpec):
        self.spec = spec

    def build(self, query: Select, keys: KeyTuple, forward: bool) -> ColumnElement:
        """Predicate matching rows strictly after (forward) or before the keys.

        ``forward`` is relative to the sort's own ordering: forward rows come
        later in that order, whichever direction the primary key runs.
        """
        primary = self.spec.require_primary()
        primary_col = resolve_column(query, primary.name)
        clause = comparator(primary, forward)(primary_col, keys.primary)

        backup = self.spec.backup
        if backup is None or keys.backup is None:
            return clause

        backup_col = resolve_column(query, backup.name)
        tie_break = and_(
            primary_col == keys.primary,
            comparator(backup, forward)(backup_col, keys.backup),
        )
        return or_(clause, tie_break)
