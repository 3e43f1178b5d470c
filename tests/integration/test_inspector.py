import typing as t
from pathlib import Path

import pytest

from genmapper.java.model import JavaType
from genmapper.table.inspector import NamingConfig, TableInspector
from genmapper.table.model import GeneratedKeyInfo, TableInfo

_SHOP_DDL = """
CREATE TABLE `order` (
    id INT AUTO_INCREMENT PRIMARY KEY,
    user_id INT NOT NULL,
    created_at DATETIME
);

CREATE TABLE order_item (
    order_id INT NOT NULL,
    line_no INT NOT NULL,
    sku VARCHAR(64) NOT NULL,
    amount DECIMAL(10, 2),
    note TEXT,
    PRIMARY KEY (order_id, line_no)
);
"""


def test_inspect_table_with_identity_key(inspector: TableInspector) -> None:
    order = _get_table(inspector.inspect_text(_SHOP_DDL), "`order`")

    assert order.record_type == JavaType("com.x.model.Order")
    assert order.example_type == JavaType("com.x.model.OrderExample")
    assert order.mapper_type == JavaType("com.x.mapper.OrderMapper")
    assert order.primary_key_type is None
    assert order.key_type == JavaType("java.lang.Integer")
    assert order.generated_key == GeneratedKeyInfo(column="id")
    assert [(column.name, column.java_property, column.jdbc_type) for column in order.columns] == [
        ("id", "id", "INTEGER"),
        ("user_id", "userId", "INTEGER"),
        ("created_at", "createdAt", "TIMESTAMP"),
    ]
    assert [column.name for column in order.columns if column.identity] == ["id"]


def test_inspect_table_with_composite_key(inspector: TableInspector) -> None:
    item = _get_table(inspector.inspect_text(_SHOP_DDL), "order_item")

    assert [column.name for column in item.primary_key_columns] == ["order_id", "line_no"]
    assert item.primary_key_type == JavaType("com.x.model.OrderItemKey")
    assert item.key_type == JavaType("com.x.model.OrderItemKey")
    assert item.generated_key is None
    amount = item.get_column("amount")
    assert amount is not None
    assert amount.java_type == JavaType("java.math.BigDecimal")
    assert [column.name for column in item.blob_columns] == ["note"]


def test_inspect_with_select_key_statement() -> None:
    inspector = TableInspector(
        dialect="mysql",
        naming=NamingConfig(
            model_package="com.x.model",
            client_package="com.x.mapper",
            select_key_statement="SELECT LAST_INSERT_ID()",
        ),
    )

    order = _get_table(inspector.inspect_text(_SHOP_DDL), "`order`")

    assert order.generated_key == GeneratedKeyInfo(
        column="id",
        jdbc_standard=False,
        runtime_statement="SELECT LAST_INSERT_ID()",
    )


def test_inspect_unsupported_type_warns(inspector: TableInspector) -> None:
    with pytest.warns(RuntimeWarning, match="is not supported"):
        tables = list(inspector.inspect_text("CREATE TABLE place (id INT PRIMARY KEY, location GEOMETRY);"))

    location = tables[0].get_column("location")
    assert location is not None
    assert location.jdbc_type == "OTHER"
    assert location.java_type == JavaType("java.lang.Object")


def test_inspect_skips_non_create_statements(inspector: TableInspector) -> None:
    tables = list(inspector.inspect_text("INSERT INTO log (message) VALUES ('x'); CREATE TABLE log (message TEXT);"))

    assert [table.name for table in tables] == ["log"]
    assert not tables[0].has_primary_key


def _get_table(tables: t.Iterable[TableInfo], name: str) -> TableInfo:
    return next(table for table in tables if table.name == name)


@pytest.fixture
def inspector() -> TableInspector:
    return TableInspector(
        dialect="mysql",
        naming=NamingConfig(model_package="com.x.model", client_package="com.x.mapper"),
    )


def test_inspect_shop_example(inspector: TableInspector) -> None:
    tables = list(inspector.inspect_source(Path.cwd() / "examples" / "shop"))

    assert [str(table.record_type) for table in tables] == [
        "com.x.model.User",
        "com.x.model.Order",
        "com.x.model.OrderItem",
    ]
    assert [column.name for column in tables[0].blob_columns] == ["bio"]
