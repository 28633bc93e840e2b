"""Fluent SELECT statement builder.

The builder accumulates query fragments through chained calls and renders
them in a fixed clause order, so the order of the calls never changes the
output. The one exception is predicates: ``where`` / ``and_`` / ``or_`` /
``append`` fragments appear in the order they were added.

Rendering is a single pass over the accumulated state:

    select -> from -> joins -> where -> group by -> having -> order by
    -> limit -> offset

Sub-queries passed to ``from_subquery``, the join methods, ``and_in`` and
``or_in`` are rendered immediately; the parent keeps only the resulting
string, so later changes to the sub-query do not affect it.

Example:
    >>> sql = (
    ...     QueryBuilder()
    ...     .select("o.*")
    ...     .from_("orders o")
    ...     .where("o.id = :orderId")
    ...     .build()
    ... )
    >>> sql
    'select o.* from orders o where o.id = :orderId'
"""

from __future__ import annotations

from collections import abc
from typing import Dict, Iterable, List, Optional, Union

from simple_query_builder.common.exceptions import (
    invalid_argument_error,
    missing_parameter_error,
)
from simple_query_builder.constants.sql import (
    COUNT_PROJECTION,
    GROUP_BY,
    HAVING,
    LATERAL,
    LATERAL_CONDITION,
    LIMIT,
    LIST_SEPARATOR,
    OFFSET,
    ORDER_BY,
)
from simple_query_builder.logging import get_logger
from simple_query_builder.query_builder.spec import Spec, _require_text
from simple_query_builder.settings import get_settings
from simple_query_builder.settings.main import _Settings
from simple_query_builder.telemetry import get_tracer

logger = get_logger(__name__)

Criteria = Union[str, Spec]


def _normalize_sorts(columns: tuple) -> List[str]:
    """Flatten order-by arguments, drop ``None`` and strip each entry.

    A single non-string iterable is treated as the collection of columns.
    """
    if len(columns) == 1 and columns[0] is not None and not isinstance(columns[0], str):
        if not isinstance(columns[0], abc.Iterable):
            raise invalid_argument_error("columns", columns[0], "str or iterable of str")
        columns = tuple(columns[0])
    return [
        _require_text("columns", column, "str or None").strip()
        for column in columns
        if column is not None
    ]


def _require_int(argument: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise invalid_argument_error(argument, value, "int")
    return value


class QueryBuilder:
    """Builds a single SQL ``SELECT`` statement from caller-supplied fragments.

    The builder does not parse, quote or validate fragment text; named
    parameters such as ``:orderId`` pass through untouched and are bound by
    whoever executes the statement.

    Joins and predicates are held in an owned :class:`Spec`; every other
    clause lives on the builder itself. All mutators return the builder so
    calls can be chained. A builder is not safe for concurrent mutation.

    Args:
        settings: Settings to render with. Defaults to :func:`get_settings`.
    """

    def __init__(self, settings: Optional[_Settings] = None):
        self.settings = settings if settings is not None else get_settings()

        self._spec = Spec()
        self._columns: List[str] = []
        self._from = ""
        self._group_by: List[str] = []
        self._having: List[str] = []
        self._order_by: Dict[str, None] = {}
        self._default_sorts: Dict[str, None] = {}
        self._limit = 0
        self._offset = 0

    # ------------------------------------------------------------------
    # Projection and source
    # ------------------------------------------------------------------

    def select(self, *columns: str) -> "QueryBuilder":
        """Append columns to the select list, in order and without deduplication."""
        self._columns.extend([_require_text("columns", column) for column in columns])
        return self

    def from_(self, source: Optional[str]) -> "QueryBuilder":
        """Replace the source of the query. ``None`` renders as empty."""
        self._from = _require_text("source", source, "str or None") if source is not None else ""
        return self

    def from_subquery(self, subquery: "QueryBuilder", alias: str) -> "QueryBuilder":
        """Use a rendered sub-query as the source: ``(<subquery>) <alias>``."""
        self._from = self._embed(subquery, alias, "from_subquery")
        return self

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(self, statement: str) -> "QueryBuilder":
        """Add a join clause verbatim; the caller supplies the keyword."""
        self._spec.join(statement)
        return self

    def inner_join(
        self,
        statement: Union[str, "QueryBuilder"],
        alias: Optional[str] = None,
    ) -> "QueryBuilder":
        """Add an ``inner join``.

        Args:
            statement: Join text such as ``"account a on o.account_id = a.id"``,
                or a sub-query builder to join against.
            alias: Alias for the sub-query. Required when ``statement`` is a
                builder, ignored otherwise.
        """
        if isinstance(statement, QueryBuilder):
            statement = self._embed(statement, alias, "inner_join")
        self._spec.inner_join(statement)
        return self

    def left_join(
        self,
        statement: Union[str, "QueryBuilder"],
        alias: Optional[str] = None,
    ) -> "QueryBuilder":
        """Add a ``left join``; see :meth:`inner_join` for the arguments."""
        if isinstance(statement, QueryBuilder):
            statement = self._embed(statement, alias, "left_join")
        self._spec.left_join(statement)
        return self

    def inner_join_lateral(self, subquery: "QueryBuilder", alias: str) -> "QueryBuilder":
        """Add ``inner join lateral (<subquery>) <alias> on true``."""
        embedded = self._embed(subquery, alias, "inner_join_lateral")
        self._spec.inner_join(LATERAL + embedded + LATERAL_CONDITION)
        return self

    def left_join_lateral(self, subquery: "QueryBuilder", alias: str) -> "QueryBuilder":
        """Add ``left join lateral (<subquery>) <alias> on true``."""
        embedded = self._embed(subquery, alias, "left_join_lateral")
        self._spec.left_join(LATERAL + embedded + LATERAL_CONDITION)
        return self

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def where(self, criteria: Criteria) -> "QueryBuilder":
        self._spec.where(criteria)
        return self

    def and_(self, criteria: Criteria) -> "QueryBuilder":
        self._spec.and_(criteria)
        return self

    def or_(self, criteria: Criteria) -> "QueryBuilder":
        self._spec.or_(criteria)
        return self

    def append(self, criteria: str) -> "QueryBuilder":
        self._spec.append(criteria)
        return self

    def and_if(self, condition: bool, criteria: Criteria) -> "QueryBuilder":
        """Apply :meth:`and_` only when ``condition`` is truthy."""
        if condition:
            self._spec.and_(criteria)
        return self

    def and_in(self, column: str, subquery: "QueryBuilder") -> "QueryBuilder":
        """Add ``and <column> in (<subquery>)``."""
        self._spec.and_(f"{column} in ({self._render_subquery(subquery)})")
        return self

    def or_in(self, column: str, subquery: "QueryBuilder") -> "QueryBuilder":
        """Add ``or <column> in (<subquery>)``."""
        self._spec.or_(f"{column} in ({self._render_subquery(subquery)})")
        return self

    # ------------------------------------------------------------------
    # Grouping, ordering and paging
    # ------------------------------------------------------------------

    def group_by(self, *columns: str) -> "QueryBuilder":
        self._group_by.extend([_require_text("columns", column) for column in columns])
        return self

    def having(self, *criteria: str) -> "QueryBuilder":
        self._having.extend([_require_text("criteria", item) for item in criteria])
        return self

    def order_by(self, *columns: Union[str, Iterable[Optional[str]], None]) -> "QueryBuilder":
        """Add explicit sort expressions.

        Accepts either several strings or one iterable of strings. Entries
        are stripped, ``None`` entries are dropped and repeated entries are
        kept once, in first-seen order.
        """
        for column in _normalize_sorts(columns):
            self._order_by.setdefault(column, None)
        return self

    def default_order_by(self, *columns: Union[str, Iterable[Optional[str]], None]) -> "QueryBuilder":
        """Add fallback sort expressions, used only when no explicit order is set."""
        for column in _normalize_sorts(columns):
            self._default_sorts.setdefault(column, None)
        return self

    def limit(self, limit: int) -> "QueryBuilder":
        """Set the row limit. Values of zero or below leave the query unlimited."""
        self._limit = _require_int("limit", limit)
        return self

    def offset(self, offset: int) -> "QueryBuilder":
        """Set the row offset. Values of zero or below emit no offset."""
        self._offset = _require_int("offset", offset)
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def build_count(self) -> str:
        """Render the ``count(1)`` form of the query without ordering or paging."""
        return self.build(count_query=True)

    def build_where_statement(self) -> str:
        return self._spec.build_where_statement()

    def build(self, count_query: bool = False, include_paging: bool = True) -> str:
        """Render the statement.

        Args:
            count_query: Replace the select list with ``count(1)`` and omit
                ``order by``, ``limit`` and ``offset``.
            include_paging: Emit ``limit`` / ``offset`` when they are set.
                Has no effect on count queries.

        Returns:
            The SQL statement on a single line, without a trailing semicolon.
        """
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("simple_query_builder.build") as span:
            span.set_attribute("query.count", count_query)
            span.set_attribute("query.include_paging", include_paging)
            sql = self._render(count_query, include_paging)

        if self.settings.log_rendered_sql:
            logger.debug(
                "Rendered query",
                extra={
                    "sql": sql,
                    "count_query": count_query,
                    "include_paging": include_paging,
                    "sql_length": len(sql),
                },
            )
        return sql

    def _render(self, count_query: bool, include_paging: bool) -> str:
        parts = ["select "]
        if count_query:
            parts.append(COUNT_PROJECTION)
        else:
            parts.append(LIST_SEPARATOR.join(self._columns))

        parts.append(" from ")
        parts.append(self._from)

        joins = self._spec.joins
        if joins:
            parts.append(" ")
            parts.append(" ".join(joins))

        if self._spec.has_criteria:
            parts.append(self._spec.build_where_statement())

        if self._group_by:
            parts.append(GROUP_BY + LIST_SEPARATOR.join(self._group_by))

        if self._having:
            parts.append(HAVING + LIST_SEPARATOR.join(self._having))

        if not count_query:
            if self._order_by:
                parts.append(ORDER_BY + LIST_SEPARATOR.join(self._order_by))
            elif self._default_sorts:
                parts.append(ORDER_BY + LIST_SEPARATOR.join(self._default_sorts))

            if include_paging:
                if self._limit > 0:
                    parts.append(f"{LIMIT}{self._limit}")
                if self._offset > 0:
                    parts.append(f"{OFFSET}{self._offset}")

        sql = "".join(parts)
        if self.settings.collapse_whitespace:
            sql = " ".join(sql.split())
        return sql

    # ------------------------------------------------------------------
    # Sub-queries
    # ------------------------------------------------------------------

    @staticmethod
    def _render_subquery(subquery: "QueryBuilder") -> str:
        if not isinstance(subquery, QueryBuilder):
            raise invalid_argument_error("subquery", subquery, "QueryBuilder")
        return subquery.build()

    def _embed(self, subquery: "QueryBuilder", alias: Optional[str], operation: str) -> str:
        """Render ``(<subquery>) <alias>``."""
        if not alias:
            raise missing_parameter_error("alias", operation=operation)
        return f"({self._render_subquery(subquery)}) {alias}"

    def __str__(self) -> str:
        return self.build()
