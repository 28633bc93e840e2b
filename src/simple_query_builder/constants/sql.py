"""SQL keyword constants.

This module contains the fixed keyword fragments the query builder
prepends to caller-supplied text. They live in Layer 0 so the predicate
container and the builder can share them without circular imports.
"""

from enum import Enum


class Connective(str, Enum):
    """Leading connective stored in front of every predicate fragment.

    Each fragment carries its own connective; only the first one is
    removed when the predicate body is rendered.
    """

    AND = "and "
    OR = "or "
    NONE = ""


class JoinType(str, Enum):
    """Keyword prefix stored in front of a join clause."""

    INNER = "inner join "
    LEFT = "left join "
    PLAIN = ""


LATERAL = "lateral "
LATERAL_CONDITION = " on true"

COUNT_PROJECTION = "count(1) "

WHERE = " where"
GROUP_BY = " group by "
HAVING = " having "
ORDER_BY = " order by "
LIMIT = " limit "
OFFSET = " offset "

LIST_SEPARATOR = ", "
