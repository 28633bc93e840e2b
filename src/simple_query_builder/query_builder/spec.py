"""Predicate container shared by every query.

A ``Spec`` accumulates join clauses and predicate fragments. Each fragment
is stored together with its own leading connective (``and``, ``or`` or
nothing), and only the very first connective is removed when the predicate
body is rendered. Fragments can therefore be added in any order, and a
whole ``Spec`` can be merged into another as a single parenthesized
fragment.

Example:
    >>> date_range = (
    ...     Spec()
    ...     .where("o.created_date > :startDate")
    ...     .or_("o.created_date <= :endDate")
    ... )
    >>> date_range.build_where_statement()
    ' where o.created_date > :startDate or o.created_date <= :endDate'
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple, Union

from simple_query_builder.common.exceptions import invalid_argument_error
from simple_query_builder.constants.sql import WHERE, Connective, JoinType


def _require_text(argument: str, value: object, expected: str = "str") -> str:
    if not isinstance(value, str):
        raise invalid_argument_error(argument, value, expected)
    return value


class Spec:
    """Ordered, deduplicated joins and predicate fragments.

    Both collections behave as insertion-ordered sets: adding a string that
    is already present is a no-op.
    """

    def __init__(self) -> None:
        self._joins: Dict[str, None] = {}
        self._where: Dict[str, None] = {}

    @property
    def joins(self) -> Tuple[str, ...]:
        """Join clauses in insertion order, each with its keyword prefix."""
        return tuple(self._joins)

    @property
    def criteria(self) -> Tuple[str, ...]:
        """Predicate fragments in insertion order, each with its connective."""
        return tuple(self._where)

    @property
    def has_criteria(self) -> bool:
        return bool(self._where)

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(self, statement: str) -> "Spec":
        """Add a join clause exactly as written (after stripping)."""
        self._add_join(JoinType.PLAIN, statement)
        return self

    def inner_join(self, statement: str) -> "Spec":
        self._add_join(JoinType.INNER, statement)
        return self

    def left_join(self, statement: str) -> "Spec":
        self._add_join(JoinType.LEFT, statement)
        return self

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def where(self, criteria: Union[str, "Spec"]) -> "Spec":
        """Add a predicate joined with ``and``.

        A ``Spec`` argument is merged exactly like :meth:`and_`. Text is
        stripped before it is stored.
        """
        if isinstance(criteria, Spec):
            return self.and_(criteria)
        self._add_criteria(Connective.AND, _require_text("criteria", criteria, "str or Spec").strip())
        return self

    def and_(self, criteria: Union[str, "Spec"]) -> "Spec":
        """Add a predicate joined with ``and``.

        Text is stored as given, without stripping. A ``Spec`` argument is
        merged: its joins are added to this container and its predicate
        body is added as one parenthesized fragment.
        """
        if isinstance(criteria, Spec):
            self._merge(Connective.AND, criteria)
            return self
        self._add_criteria(Connective.AND, _require_text("criteria", criteria, "str or Spec"))
        return self

    def or_(self, criteria: Union[str, "Spec"]) -> "Spec":
        """Add a predicate joined with ``or``.

        Text is stripped before it is stored. A ``Spec`` argument is merged
        the same way as in :meth:`and_`.
        """
        if isinstance(criteria, Spec):
            self._merge(Connective.OR, criteria)
            return self
        self._add_criteria(Connective.OR, _require_text("criteria", criteria, "str or Spec").strip())
        return self

    def append(self, criteria: str) -> "Spec":
        """Add a raw fragment with no connective.

        When a raw fragment is the first one in the container, the rendered
        body is ``None`` and no where clause is emitted at all.
        """
        self._add_criteria(Connective.NONE, _require_text("criteria", criteria).strip())
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def build_filter_statements(self) -> Optional[str]:
        """Render the predicate body with the first connective removed.

        Returns:
            The body prefixed with a single space, or ``None`` when the
            first fragment carries no connective (including when there are
            no fragments at all).
        """
        filters = " ".join(self._where)
        for connective in (Connective.AND, Connective.OR):
            if filters.startswith(connective.value):
                return " " + filters[len(connective.value):]
        return None

    def build_where_statement(self) -> str:
        """Render ``" where <body>"``, or an empty string without a body."""
        body = self.build_filter_statements()
        if body is None:
            return ""
        return WHERE + body

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _add_join(self, join_type: JoinType, statement: str) -> None:
        statement = _require_text("join statement", statement)
        self._joins.setdefault(join_type.value + statement.strip(), None)

    def _add_criteria(self, connective: Connective, criteria: str) -> None:
        self._where.setdefault(connective.value + criteria, None)

    def _merge(self, connective: Connective, other: "Spec") -> None:
        for join in other._joins:
            self._joins.setdefault(join, None)

        if not other._where:
            return
        body = other.build_filter_statements()
        # A spec led by a raw fragment has no body to wrap.
        if body is None:
            return
        self._add_criteria(connective, f"({body.strip()})")

    def __repr__(self) -> str:
        return f"Spec(joins={list(self._joins)!r}, criteria={list(self._where)!r})"
