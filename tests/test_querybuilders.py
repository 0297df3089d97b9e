"""Tests for the SQL statement builders."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from litequery.database import MalformedQueryError
from litequery.database.querybuilders import (
    ColumnBuilder,
    CreateTableBuilder,
    DeleteBuilder,
    DropTableBuilder,
    InsertBuilder,
    QueryBuilder,
    SelectBuilder,
    UpdateBuilder,
)

pytestmark = pytest.mark.unit


class TestColumnBuilder:
    """Tests for column definitions."""

    def test_primary_key_column(self) -> None:
        column = ColumnBuilder.create_builder().set_name("id").set_data_type("INTEGER").is_primary_key()
        assert column.build() == "id INTEGER PRIMARY KEY,"

    def test_text_default_is_quoted(self) -> None:
        column = (
            ColumnBuilder.create_builder()
            .set_name("name")
            .set_data_type(ColumnBuilder.DATA_TYPE_TEXT)
            .set_default_value("bob")
            .is_not_null()
        )
        assert column.build() == 'name TEXT DEFAULT "bob" NOT NULL,'

    def test_blob_default_is_quoted(self) -> None:
        column = ColumnBuilder().set_name("data").set_data_type("BLOB").set_default_value("x")
        assert column.build() == 'data BLOB DEFAULT "x",'

    def test_numeric_default_is_not_quoted(self) -> None:
        real = ColumnBuilder().set_name("score").set_data_type("REAL").set_default_value(1.5)
        count = ColumnBuilder().set_name("n").set_data_type("INTEGER").set_default_value(0)
        assert real.build() == "score REAL DEFAULT 1.5,"
        # A zero default renders as "0", which is a non-empty string
        assert count.build() == "n INTEGER DEFAULT 0,"

    def test_caller_supplied_data_type(self) -> None:
        column = ColumnBuilder().set_name("code").set_data_type("VARCHAR(10)")
        assert column.build() == "code VARCHAR(10),"

    def test_flags_can_be_cleared(self) -> None:
        column = (
            ColumnBuilder()
            .set_name("id")
            .set_data_type("INTEGER")
            .is_primary_key()
            .is_primary_key(False)
            .is_not_null(False)
        )
        assert column.build() == "id INTEGER,"

    def test_missing_name(self) -> None:
        with pytest.raises(MalformedQueryError, match="Missing column name"):
            ColumnBuilder().set_data_type("TEXT").build()

    def test_missing_data_type(self) -> None:
        with pytest.raises(MalformedQueryError, match="Missing data type"):
            ColumnBuilder().set_name("id").set_data_type("").build()


class TestCreateTableBuilder:
    """Tests for CREATE TABLE rendering."""

    def test_single_column(self) -> None:
        query = (
            CreateTableBuilder.create_builder()
            .set_table_name("t")
            .add_column(ColumnBuilder().set_name("id").set_data_type("INTEGER").is_primary_key())
            .build()
        )
        assert query == "CREATE TABLE t (id INTEGER PRIMARY KEY);"

    def test_last_separator_replaced_by_terminator(self) -> None:
        builder = CreateTableBuilder().set_table_name("t").if_not_exists()
        for name, data_type in (("a", "INTEGER"), ("b", "TEXT"), ("c", "REAL")):
            builder.add_column(ColumnBuilder().set_name(name).set_data_type(data_type))

        query = builder.build()

        assert query == "CREATE TABLE IF NOT EXISTS t (a INTEGER,b TEXT,c REAL);"
        assert ",)" not in query
        assert ",;" not in query

    def test_missing_table_name(self) -> None:
        builder = CreateTableBuilder().add_column(ColumnBuilder().set_name("a").set_data_type("TEXT"))
        with pytest.raises(MalformedQueryError, match="Missing table name"):
            builder.build()

    def test_no_columns(self) -> None:
        with pytest.raises(MalformedQueryError, match="No columns given"):
            CreateTableBuilder().set_table_name("t").build()

    def test_invalid_column_propagates(self) -> None:
        builder = CreateTableBuilder().set_table_name("t").add_column(ColumnBuilder().set_name("a"))
        with pytest.raises(MalformedQueryError, match="Missing data type"):
            builder.build()

    def test_duplicate_copies_columns(self) -> None:
        original = CreateTableBuilder().set_table_name("t").add_column(
            ColumnBuilder().set_name("a").set_data_type("TEXT")
        )
        copy = original.duplicate()
        copy.columns[0].set_name("renamed")
        copy.add_column(ColumnBuilder().set_name("b").set_data_type("REAL"))

        assert original.build() == "CREATE TABLE t (a TEXT);"
        assert copy.build() == "CREATE TABLE t (renamed TEXT,b REAL);"


class TestDropTableBuilder:
    """Tests for DROP TABLE rendering."""

    def test_drop(self) -> None:
        assert DropTableBuilder().set_table_name("t").build() == "DROP TABLE t;"

    def test_drop_if_exists(self) -> None:
        query = DropTableBuilder().set_table_name("t").if_exists().build()
        assert query == "DROP TABLE IF EXISTS t;"

    def test_missing_table_name(self) -> None:
        with pytest.raises(MalformedQueryError, match="Missing table name"):
            DropTableBuilder().build()


class TestInsertBuilder:
    """Tests for INSERT rendering."""

    def test_literal_values(self) -> None:
        query = InsertBuilder.create_builder().set_table_name("t").add_value("x", 5).add_value("y", "hi").build()
        assert query == 'INSERT INTO t (x,y) VALUES (5,"hi");'

    def test_repeated_column_overwrites_in_place(self) -> None:
        query = (
            InsertBuilder()
            .set_table_name("t")
            .add_value("x", 1)
            .add_value("y", 2)
            .add_value("x", 3)
            .build()
        )
        assert query == "INSERT INTO t (x,y) VALUES (3,2);"

    def test_prepared_values(self) -> None:
        query = InsertBuilder().set_table_name("t").add_prepared_value("a").add_prepared_value("b").build()
        assert query == "INSERT INTO t (a,b) VALUES (?,?);"

    def test_unquoted_text_and_real(self) -> None:
        query = (
            InsertBuilder()
            .set_table_name("t")
            .add_value("created", "CURRENT_TIMESTAMP", include_quotes=False)
            .add_value("score", 2.5)
            .build()
        )
        assert query == "INSERT INTO t (created,score) VALUES (CURRENT_TIMESTAMP,2.5);"

    def test_rejects_non_scalar_values(self) -> None:
        with pytest.raises(TypeError):
            InsertBuilder().set_table_name("t").add_value("flag", True)

    def test_missing_table_name(self) -> None:
        with pytest.raises(MalformedQueryError, match="Missing table name"):
            InsertBuilder().add_value("x", 1).build()

    def test_no_values(self) -> None:
        with pytest.raises(MalformedQueryError, match="No values given"):
            InsertBuilder().set_table_name("t").build()

    def test_duplicate_is_independent(self) -> None:
        original = InsertBuilder().set_table_name("t").add_value("x", 1)
        copy = original.duplicate().add_value("y", 2)
        original.add_value("x", 9)

        assert original.build() == "INSERT INTO t (x) VALUES (9);"
        assert copy.build() == "INSERT INTO t (x,y) VALUES (1,2);"


class TestUpdateBuilder:
    """Tests for UPDATE rendering."""

    def test_full_update(self) -> None:
        query = (
            UpdateBuilder()
            .set_table_name("t")
            .add_value("x", 1)
            .add_value("y", "a")
            .set_where("id = 2")
            .set_limit(1)
            .build()
        )
        assert query == 'UPDATE t SET x = 1,y = "a" WHERE id = 2 LIMIT 1;'

    def test_without_where_or_limit(self) -> None:
        query = UpdateBuilder().set_table_name("t").add_prepared_value("x").set_limit(0).build()
        assert query == "UPDATE t SET x = ?;"

    def test_no_values(self) -> None:
        with pytest.raises(MalformedQueryError, match="No values given"):
            UpdateBuilder().set_table_name("t").set_where("id = 1").build()

    def test_missing_table_name(self) -> None:
        with pytest.raises(MalformedQueryError, match="Missing table name"):
            UpdateBuilder().add_value("x", 1).build()

    def test_duplicate_is_independent(self) -> None:
        original = UpdateBuilder().set_table_name("t").add_value("x", 1).set_where("id = 1")
        copy = original.duplicate().set_where("id = 2").add_value("y", 5)

        assert original.build() == "UPDATE t SET x = 1 WHERE id = 1;"
        assert copy.build() == "UPDATE t SET x = 1,y = 5 WHERE id = 2;"


class TestDeleteBuilder:
    """Tests for DELETE rendering."""

    def test_delete_all(self) -> None:
        assert DeleteBuilder().set_table_name("t").build() == "DELETE FROM t;"

    def test_delete_with_where_and_limit(self) -> None:
        query = DeleteBuilder().set_table_name("t").set_where("id = 1").set_limit(5).build()
        assert query == "DELETE FROM t WHERE id = 1 LIMIT 5;"

    def test_empty_where_is_ignored(self) -> None:
        assert DeleteBuilder().set_table_name("t").set_where("").build() == "DELETE FROM t;"

    def test_missing_table_name(self) -> None:
        with pytest.raises(MalformedQueryError, match="Missing table name"):
            DeleteBuilder().set_where("id = 1").build()


@pytest.mark.parametrize(
    ("original", "mutate", "expected"),
    [
        (
            ColumnBuilder().set_name("id").set_data_type("INTEGER"),
            lambda copy: copy.set_name("other").is_not_null(),
            "id INTEGER,",
        ),
        (
            DropTableBuilder().set_table_name("t"),
            lambda copy: copy.set_table_name("u").if_exists(),
            "DROP TABLE t;",
        ),
        (
            DeleteBuilder().set_table_name("t").set_where("id = 1"),
            lambda copy: copy.set_where("id = 2").set_limit(3),
            "DELETE FROM t WHERE id = 1;",
        ),
    ],
)
def test_duplicate_leaves_original_untouched(
    original: QueryBuilder, mutate: Callable[[QueryBuilder], object], expected: str
) -> None:
    copy = original.duplicate()
    mutate(copy)

    assert copy is not original
    assert original.build() == expected
    assert copy.build() != expected


class TestSelectBuilder:
    """Tests for SELECT rendering."""

    def test_columns_table_and_where(self) -> None:
        query = SelectBuilder().set_columns("id", "name").set_table_name("users").set_where("id = 1").build()
        assert query == "SELECT id,name FROM users WHERE id = 1;"

    def test_all_clauses(self) -> None:
        query = (
            SelectBuilder.create_builder()
            .set_columns("u.id", "o.total")
            .set_table_name("users u")
            .add_join(SelectBuilder.JOIN_TYPE_INNER, "orders o", "u.id", "o.user_id")
            .add_join("CROSS JOIN tags")
            .set_where("o.total > 10")
            .set_order_by("o.total DESC")
            .set_limit(3)
            .is_distinct()
            .build()
        )
        assert query == (
            "SELECT DISTINCT u.id,o.total FROM users u "
            "INNER JOIN orders o ON u.id = o.user_id CROSS JOIN tags "
            "WHERE o.total > 10 ORDER BY o.total DESC LIMIT 3;"
        )

    def test_set_column_ignores_empty(self) -> None:
        builder = SelectBuilder().set_column("id").set_column("").set_table_name("t")
        assert builder.build() == "SELECT id FROM t;"

    def test_partial_join_arguments(self) -> None:
        with pytest.raises(TypeError):
            SelectBuilder().add_join(SelectBuilder.JOIN_TYPE_LEFT_OUTER, "orders")

    def test_no_columns_checked_first(self) -> None:
        with pytest.raises(MalformedQueryError, match="No columns given"):
            SelectBuilder().build()

    def test_missing_table_name(self) -> None:
        with pytest.raises(MalformedQueryError, match="Missing table name"):
            SelectBuilder().set_columns("id").build()

    @pytest.mark.parametrize(
        "builder",
        [
            SelectBuilder().set_column("*").set_table_name("t"),
            SelectBuilder().set_columns("a", "b").set_table_name("t").is_distinct(),
            SelectBuilder().set_column("a").set_table_name("t").set_order_by("a"),
            SelectBuilder().set_column("a").set_table_name("t").set_limit(10),
            SelectBuilder().set_column("a").set_table_name("t").add_join("CROSS JOIN u").set_where("a > 1"),
        ],
    )
    def test_rendered_shape(self, builder: SelectBuilder) -> None:
        query = builder.build()
        assert query.startswith("SELECT ")
        assert query.count(" FROM ") == 1
        assert query.endswith(";")
        assert not query.endswith(" ;")
        assert not query.endswith(",;")

    def test_duplicate_is_independent(self) -> None:
        original = SelectBuilder().set_columns("id").set_table_name("users")
        copy = original.duplicate().set_where("id > 1").add_join("CROSS JOIN tags")
        original.set_columns("id", "name")

        assert original.build() == "SELECT id,name FROM users;"
        assert copy.build() == "SELECT id FROM users CROSS JOIN tags WHERE id > 1;"
