"""Query builder module for SELECT statement assembly.

This module assembles textual SQL ``SELECT`` statements from fragments
supplied by the caller. Builders only generate SQL strings; they do NOT
parse, validate, bind or execute anything.

Architecture:
    - spec.py: ``Spec``, the predicate container (joins + predicates)
    - builder.py: ``QueryBuilder``, the remaining clause state and the
      rendering procedure
    - factory.py: settings-aware construction helpers

Design Principles:
    1. **SQL Generation Only**: Builders only generate SQL strings
    2. **Order Independence**: Only predicate order affects output
    3. **Self-Describing Fragments**: Each predicate stores its own connective
    4. **Eager Sub-Queries**: Sub-queries are embedded as rendered text

Example:
    >>> from simple_query_builder.query_builder import QueryBuilder, Spec
    >>>
    >>> date_range = (
    ...     Spec()
    ...     .where("o.created_date > :startDate")
    ...     .or_("o.created_date <= :endDate")
    ... )
    >>> sql = (
    ...     QueryBuilder()
    ...     .select("o.*")
    ...     .from_("orders o")
    ...     .where(date_range)
    ...     .and_("o.id = :orderId")
    ...     .build()
    ... )
    >>> print(sql)
    select o.* from orders o where (o.created_date > :startDate or o.created_date <= :endDate) and o.id = :orderId
"""

from simple_query_builder.query_builder.spec import Spec
from simple_query_builder.query_builder.builder import QueryBuilder
from simple_query_builder.query_builder.factory import (
    QueryBuilderFactory,
    get_query_builder,
    new_spec,
)

__all__ = [
    "Spec",
    "QueryBuilder",
    "QueryBuilderFactory",
    "get_query_builder",
    "new_spec",
]
