import pytest

from genmapper.java.model import JavaType
from genmapper.table.model import ColumnInfo, GeneratedKeyInfo, TableInfo

_INTEGER = JavaType("java.lang.Integer")
_STRING = JavaType("java.lang.String")


@pytest.fixture
def user_table() -> TableInfo:
    return TableInfo(
        name="user",
        record_type=JavaType("com.x.model.User"),
        example_type=JavaType("com.x.model.UserExample"),
        mapper_type=JavaType("com.x.mapper.UserMapper"),
        columns=[
            ColumnInfo(name="id", java_property="id", java_type=_INTEGER, jdbc_type="INTEGER", primary_key=True),
            ColumnInfo(name="name", java_property="name", java_type=_STRING, jdbc_type="VARCHAR"),
        ],
    )


@pytest.fixture
def order_table() -> TableInfo:
    return TableInfo(
        name="`order`",
        record_type=JavaType("com.x.model.Order"),
        example_type=JavaType("com.x.model.OrderExample"),
        mapper_type=JavaType("com.x.mapper.OrderMapper"),
        columns=[
            ColumnInfo(
                name="id",
                java_property="id",
                java_type=_INTEGER,
                jdbc_type="INTEGER",
                primary_key=True,
                identity=True,
            ),
            ColumnInfo(name="user_id", java_property="userId", java_type=_INTEGER, jdbc_type="INTEGER"),
        ],
        generated_key=GeneratedKeyInfo(column="id"),
    )


@pytest.fixture
def order_item_table() -> TableInfo:
    return TableInfo(
        name="order_item",
        record_type=JavaType("com.x.model.OrderItem"),
        example_type=JavaType("com.x.model.OrderItemExample"),
        mapper_type=JavaType("com.x.mapper.OrderItemMapper"),
        columns=[
            ColumnInfo(
                name="order_id",
                java_property="orderId",
                java_type=_INTEGER,
                jdbc_type="INTEGER",
                primary_key=True,
            ),
            ColumnInfo(name="line_no", java_property="lineNo", java_type=_INTEGER, jdbc_type="INTEGER", primary_key=True),
            ColumnInfo(name="sku", java_property="sku", java_type=_STRING, jdbc_type="VARCHAR"),
        ],
        primary_key_type=JavaType("com.x.model.OrderItemKey"),
    )


@pytest.fixture
def log_table() -> TableInfo:
    """Table without a primary key."""

    return TableInfo(
        name="log",
        record_type=JavaType("com.x.model.Log"),
        example_type=JavaType("com.x.model.LogExample"),
        mapper_type=JavaType("com.x.mapper.LogMapper"),
        columns=[
            ColumnInfo(name="message", java_property="message", java_type=_STRING, jdbc_type="VARCHAR"),
        ],
    )
