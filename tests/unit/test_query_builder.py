"""Unit tests for QueryBuilder rendering."""

import pytest

from simple_query_builder.query_builder import QueryBuilder, Spec


@pytest.fixture
def base_query():
    return QueryBuilder().select("o.*").from_("order o")


@pytest.fixture
def account_users():
    return (
        QueryBuilder()
        .select("a.id as accountId, a.name as accountName, u.name as userName, u.email")
        .from_("account a")
        .inner_join("users u on a.user_id = u.id")
    )


class TestSelectQueries:
    """Test plain select/from/where rendering."""

    def test_select_all(self):
        sql = QueryBuilder().select("o.*").from_("orders o").build()

        assert sql == "select o.* from orders o"

    def test_select_with_where(self):
        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .where("o.id = :orderId")
            .build()
        )

        assert sql == "select o.* from orders o where o.id = :orderId"

    def test_select_with_multiple_criteria(self, inlined):
        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .where("o.id = :orderId")
            .and_("o.created_date > :startDate")
            .or_("o.created_date <= :endDate")
            .build()
        )

        assert sql == inlined("""
            select o.*
            from orders o
            where o.id = :orderId
                and o.created_date > :startDate
                or o.created_date <= :endDate
        """)

    def test_select_with_multiple_criteria_and_order_by(self, inlined):
        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .where("o.id = :orderId")
            .and_("o.created_date > :startDate")
            .or_("o.created_date <= :endDate")
            .order_by("o.created_date desc", "o.name asc")
            .build()
        )

        assert sql == inlined("""
            select o.*
            from orders o
            where o.id = :orderId
                and o.created_date > :startDate
                or o.created_date <= :endDate
            order by o.created_date desc, o.name asc
        """)

    def test_select_with_spec(self, inlined):
        date_between = (
            Spec()
            .where("o.created_date > :startDate")
            .or_("o.created_date <= :endDate")
        )

        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .where(date_between)
            .and_("o.id = :orderId")
            .order_by("o.created_date desc", "o.name asc")
            .build()
        )

        assert sql == inlined("""
            select o.*
            from orders o
            where (o.created_date > :startDate or o.created_date <= :endDate)
                and o.id = :orderId
            order by o.created_date desc, o.name asc
        """)

    def test_select_with_group_by_and_having(self, inlined):
        sql = (
            QueryBuilder()
            .select("o.name", "count(1)")
            .from_("orders o")
            .where("o.created_date > :startDate")
            .or_("o.created_date <= :endDate")
            .group_by("o.name")
            .having("count(1) > 2")
            .order_by("o.name asc")
            .build()
        )

        assert sql == inlined("""
            select o.name, count(1)
            from orders o
            where o.created_date > :startDate
                or o.created_date <= :endDate
            group by o.name
                having count(1) > 2
            order by o.name asc
        """)

    def test_multiple_group_by_and_having_use_list_separator(self):
        sql = (
            QueryBuilder()
            .select("o.name", "o.status", "count(1)")
            .from_("orders o")
            .group_by("o.name", "o.status")
            .having("count(1) > 2", "sum(o.amount) > 10")
            .build()
        )

        assert sql == (
            "select o.name, o.status, count(1) from orders o "
            "group by o.name, o.status having count(1) > 2, sum(o.amount) > 10"
        )

    def test_and_if(self, inlined):
        sql = (
            QueryBuilder()
            .select("a.*, o.*, u.*")
            .from_("order o")
            .inner_join("account a on o.account_id = a.id")
            .left_join("user u on u.id = a.user_id")
            .where("a.id = :accountId")
            .and_if(True, "o.id = :orderId")
            .and_if(False, "u.id = :userId")
            .build()
        )

        assert sql == inlined("""
            select a.*, o.*, u.*
            from order o
                inner join account a on o.account_id = a.id
                left join user u on u.id = a.user_id
            where a.id = :accountId
                and o.id = :orderId
        """)

    def test_and_if_with_spec(self):
        active = Spec().left_join("user u on u.id = a.user_id").where("u.active").or_("u.admin")

        skipped = QueryBuilder().select("a.*").from_("account a").and_if(False, active).build()
        applied = QueryBuilder().select("a.*").from_("account a").and_if(True, active).build()

        assert skipped == "select a.* from account a"
        assert applied == (
            "select a.* from account a left join user u on u.id = a.user_id "
            "where (u.active or u.admin)"
        )

    def test_or_spec(self):
        flags = Spec().where("o.flagged").and_("o.reviewed")

        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .where("o.id = :orderId")
            .or_(flags)
            .build()
        )

        assert sql == "select o.* from orders o where o.id = :orderId or (o.flagged and o.reviewed)"

    def test_append_first_omits_where(self):
        sql = QueryBuilder().select("o.*").from_("orders o").append("o.id = 1").build()

        assert sql == "select o.* from orders o"

    def test_str_renders_query(self, base_query):
        assert str(base_query) == base_query.build()

    def test_build_where_statement(self):
        builder = QueryBuilder().where("a = 1").or_("b = 2")

        assert builder.build_where_statement() == " where a = 1 or b = 2"


class TestJoins:
    """Test join rendering, including sub-query joins."""

    def test_left_join(self, base_query):
        sql = base_query.left_join("agency a on o.agency_id = a.id").build()

        assert sql == "select o.* from order o left join agency a on o.agency_id = a.id"

    def test_inner_join(self, base_query):
        sql = base_query.inner_join("agency a on o.agency_id = a.id").build()

        assert sql == "select o.* from order o inner join agency a on o.agency_id = a.id"

    def test_plain_join_is_verbatim(self, base_query):
        sql = base_query.join("  natural join agency a ").build()

        assert sql == "select o.* from order o natural join agency a"

    def test_left_join_sub_query(self, account_users, inlined):
        sql = (
            QueryBuilder()
            .select("o.id, a.accountName, a.userName")
            .from_("order o")
            .left_join(account_users, "a")
            .build()
        )

        assert sql == inlined("""
            select
                o.id,
                a.accountName,
                a.userName
            from order o
                left join (select
                                a.id as accountId,
                                a.name as accountName,
                                u.name as userName,
                                u.email
                           from account a
                                inner join users u on a.user_id = u.id) a
        """)

    def test_inner_join_sub_query(self, account_users, inlined):
        sql = (
            QueryBuilder()
            .select("o.id, a.accountName, a.userName")
            .from_("order o")
            .inner_join(account_users, "a")
            .build()
        )

        assert sql == inlined("""
            select o.id, a.accountName, a.userName
            from order o
                inner join (select
                                a.id as accountId,
                                a.name as accountName,
                                u.name as userName,
                                u.email
                            from account a
                                inner join users u on a.user_id = u.id) a
        """)

    def test_inner_join_lateral(self, account_users, inlined):
        account_users.where("o.account_id = a.id")

        sql = (
            QueryBuilder()
            .select("o.id, a.accountName, a.userName")
            .from_("order o")
            .inner_join_lateral(account_users, "a")
            .build()
        )

        assert sql == inlined("""
            select
                o.id,
                a.accountName,
                a.userName
            from order o
                inner join lateral (select
                                        a.id as accountId,
                                        a.name as accountName,
                                        u.name as userName,
                                        u.email
                                    from account a
                                        inner join users u on a.user_id = u.id
                                    where o.account_id = a.id) a on true
        """)

    def test_left_join_lateral(self, account_users, inlined):
        account_users.where("o.account_id = a.id")

        sql = (
            QueryBuilder()
            .select("o.id, a.accountName, a.userName")
            .from_("order o")
            .left_join_lateral(account_users, "a")
            .build()
        )

        assert sql == inlined("""
            select
                o.id,
                a.accountName,
                a.userName
            from order o
                left join lateral (select
                                        a.id as accountId,
                                        a.name as accountName,
                                        u.name as userName,
                                        u.email
                                    from account a
                                        inner join users u on a.user_id = u.id
                                    where o.account_id = a.id) a on true
        """)

    def test_joins_from_merged_spec_follow_builder_joins(self):
        spec = Spec().left_join("user u on u.id = a.user_id").where("u.active")

        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("order o")
            .inner_join("account a on o.account_id = a.id")
            .where(spec)
            .build()
        )

        assert sql == (
            "select o.* from order o inner join account a on o.account_id = a.id "
            "left join user u on u.id = a.user_id where (u.active)"
        )


class TestSubQueries:
    """Test sub-queries used as sources and as IN right-hand sides."""

    def test_from_sub_query(self, inlined):
        sub_query = (
            QueryBuilder()
            .select("a.name as accountName, u.name as userName, u.email")
            .from_("account a")
            .inner_join("users u on a.user_id = u.id")
        )

        sql = QueryBuilder().select("a.accountName, a.email").from_subquery(sub_query, "a").build()

        assert sql == inlined("""
            select
                a.accountName,
                a.email
            from (select
                    a.name as accountName,
                    u.name as userName,
                    u.email
                   from account a
                    inner join users u on a.user_id = u.id) a
        """)

    def test_and_in(self, inlined):
        top_customers = (
            QueryBuilder()
            .select("expensiveOrder.customer_id")
            .from_("orders expensiveOrder")
            .order_by("expensiveOrder.amount desc")
            .limit(3)
        )

        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .where("o.id = :orderId")
            .and_in("o.customer_id", top_customers)
            .build()
        )

        assert sql == inlined("""
            select o.*
            from orders o
            where o.id = :orderId
                and o.customer_id in (select
                                        expensiveOrder.customer_id
                                       from orders expensiveOrder
                                       order by expensiveOrder.amount desc
                                       limit 3)
        """)

    def test_or_in(self):
        vip = QueryBuilder().select("c.id").from_("customers c").where("c.vip")

        sql = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .where("o.id = :orderId")
            .or_in("o.customer_id", vip)
            .build()
        )

        assert sql == (
            "select o.* from orders o where o.id = :orderId "
            "or o.customer_id in (select c.id from customers c where c.vip)"
        )

    def test_sub_query_is_rendered_when_embedded(self):
        """Changes made to a sub-query after embedding do not reach the parent."""
        sub_query = QueryBuilder().select("c.id").from_("customers c")
        parent = (
            QueryBuilder()
            .select("o.*")
            .from_("orders o")
            .and_in("o.customer_id", sub_query)
            .left_join(sub_query, "c2")
        )
        before = parent.build()

        sub_query.where("c.deleted is false").limit(10)

        assert parent.build() == before
        assert "deleted" not in before

    def test_sub_query_paging_is_kept(self):
        latest = QueryBuilder().select("o.*").from_("orders o").order_by("o.id desc").limit(5).offset(10)

        sql = QueryBuilder().select("x.*").from_subquery(latest, "x").build()

        assert sql == "select x.* from (select o.* from orders o order by o.id desc limit 5 offset 10) x"


class TestCountQueries:
    """Test the count rendering."""

    def test_count_query(self):
        sql = QueryBuilder().from_("agency a").where("a.id = :accountId").build_count()

        assert sql == "select count(1)  from agency a where a.id = :accountId"

    def test_count_query_omits_ordering_and_paging(self):
        builder = (
            QueryBuilder()
            .select("o.customer_id", "count(1)")
            .from_("orders o")
            .inner_join("customers c on c.id = o.customer_id")
            .where("o.status = :status")
            .group_by("o.customer_id")
            .having("count(1) > 1")
            .order_by("o.customer_id")
            .default_order_by("o.id")
            .limit(20)
            .offset(40)
        )

        assert builder.build_count() == (
            "select count(1)  from orders o inner join customers c on c.id = o.customer_id "
            "where o.status = :status group by o.customer_id having count(1) > 1"
        )
        assert builder.build() == (
            "select o.customer_id, count(1) from orders o inner join customers c on c.id = o.customer_id "
            "where o.status = :status group by o.customer_id having count(1) > 1 "
            "order by o.customer_id limit 20 offset 40"
        )

    def test_count_query_with_paging_disabled(self):
        builder = QueryBuilder().from_("orders o").limit(5)

        assert builder.build(count_query=True, include_paging=False) == builder.build_count()
