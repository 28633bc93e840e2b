"""Query Builder Factory.

This module provides a factory for creating query builders configured from
environment settings, so callers never have to load settings themselves.
"""

from simple_query_builder.query_builder.builder import QueryBuilder
from simple_query_builder.query_builder.spec import Spec


class QueryBuilderFactory:
    """Factory for creating query builders and predicate containers.

    Example:
        >>> builder = QueryBuilderFactory.create()
        >>> active = QueryBuilderFactory.create_spec().where("o.active")
    """

    @staticmethod
    def create() -> QueryBuilder:
        """Create a query builder auto-configured from environment.

        Returns:
            Empty QueryBuilder bound to the settings singleton.
        """
        from simple_query_builder.settings import get_settings

        settings = get_settings()

        return QueryBuilder(settings)

    @staticmethod
    def create_spec() -> Spec:
        """Create an empty predicate container."""
        return Spec()


def get_query_builder() -> QueryBuilder:
    """Get an empty query builder configured from environment settings.

    Example:
        >>> from simple_query_builder.query_builder.factory import get_query_builder
        >>>
        >>> sql = get_query_builder().select("o.*").from_("orders o").build()
    """
    return QueryBuilderFactory.create()


def new_spec() -> Spec:
    """Get an empty predicate container for composing reusable criteria."""
    return QueryBuilderFactory.create_spec()
