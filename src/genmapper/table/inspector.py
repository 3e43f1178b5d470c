import typing as t
import warnings
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from sqlglot import Dialect, exp, parse

from genmapper.java.model import JavaType
from genmapper.string_case import snake2camel
from genmapper.table.model import ColumnInfo, GeneratedKeyInfo, TableInfo


@dataclass(frozen=True)
class NamingConfig:
    model_package: str
    client_package: str
    sql_map_package: t.Optional[str] = None
    select_key_statement: t.Optional[str] = None


class TableInspector:
    def __init__(self, dialect: str, naming: NamingConfig) -> None:
        self.__dialect = Dialect.get_or_raise(dialect)
        self.__naming = naming

    def inspect_source(self, source: Path) -> t.Iterable[TableInfo]:
        return self.inspect_paths([source] if source.is_file() else sorted(source.rglob("*.sql")))

    def inspect_paths(self, paths: t.Iterable[Path]) -> t.Iterable[TableInfo]:
        for path in paths:
            yield from self.inspect_text(path.read_text())

    def inspect_text(self, text: str) -> t.Iterable[TableInfo]:
        for expression in parse(text, dialect=self.__dialect):
            if expression is None:
                continue

            table = self.__extract_table(expression)
            if table is not None:
                yield table

    def __extract_table(self, expression: exp.Expression) -> t.Optional[TableInfo]:
        if (
            not isinstance(expression, exp.Create)
            or not isinstance(expression.this, exp.Schema)
            or not isinstance(expression.this.this, exp.Table)
        ):
            return None

        schema_expr: exp.Schema = expression.this
        table_expr: exp.Table = expression.this.this

        table_keys = set(self.__extract_table_primary_keys(schema_expr))
        columns = [
            self.__extract_column(column, table_keys)
            for column in schema_expr.expressions
            if isinstance(column, exp.ColumnDef)
        ]

        record_name = snake2camel(table_expr.name)
        keys = [column for column in columns if column.primary_key]

        return TableInfo(
            name=table_expr.sql(dialect=self.__dialect),
            record_type=self.__model_type(record_name),
            example_type=self.__model_type(f"{record_name}Example"),
            mapper_type=JavaType(f"{self.__naming.client_package}.{record_name}Mapper"),
            columns=columns,
            primary_key_type=self.__model_type(f"{record_name}Key") if len(keys) > 1 else None,
            generated_key=self.__extract_generated_key(columns),
            sql_map_package=self.__naming.sql_map_package,
        )

    def __extract_table_primary_keys(self, schema: exp.Schema) -> t.Iterable[str]:
        for constraint in schema.find_all(exp.PrimaryKey):
            for key in constraint.expressions:
                node = key.this if isinstance(key, exp.Ordered) else key
                yield node.name.lower()

    def __extract_column(self, column: exp.ColumnDef, table_keys: t.Collection[str]) -> ColumnInfo:
        kinds = [constraint.kind for constraint in column.constraints]
        jdbc_type, java_type = self.__extract_types(column)

        return ColumnInfo(
            name=column.name,
            java_property=snake2camel(column.name, lower_first=True),
            java_type=java_type,
            jdbc_type=jdbc_type,
            escaped_name=column.this.sql(dialect=self.__dialect),
            primary_key=column.name.lower() in table_keys
            or any(isinstance(kind, exp.PrimaryKeyColumnConstraint) for kind in kinds),
            identity=self.__is_serial(column)
            or any(
                isinstance(kind, (exp.AutoIncrementColumnConstraint, exp.GeneratedAsIdentityColumnConstraint))
                for kind in kinds
            ),
            generated_always=any(
                isinstance(kind, exp.GeneratedAsIdentityColumnConstraint) and kind.this is True for kind in kinds
            ),
        )

    def __extract_types(self, column: exp.ColumnDef) -> tuple[str, JavaType]:
        dtype = column.kind
        if dtype is None:
            warnings.warn(f"column {column.name!r} has no type info, continuing with OTHER", RuntimeWarning)
            return "OTHER", JavaType("java.lang.Object")

        types = self.__sql2java_type_map.get(dtype.this.name)
        if types is None:
            warnings.warn(f"data type {dtype.sql()!r} is not supported, continuing with OTHER", RuntimeWarning)
            return "OTHER", JavaType("java.lang.Object")

        return types

    def __extract_generated_key(self, columns: t.Sequence[ColumnInfo]) -> t.Optional[GeneratedKeyInfo]:
        identity = next((column for column in columns if column.identity), None)
        if identity is None:
            return None

        statement = self.__naming.select_key_statement

        return GeneratedKeyInfo(
            column=identity.name,
            jdbc_standard=statement is None,
            runtime_statement=statement,
        )

    def __is_serial(self, column: exp.ColumnDef) -> bool:
        return column.kind is not None and column.kind.this.name in {"SERIAL", "BIGSERIAL", "SMALLSERIAL"}

    def __model_type(self, name: str) -> JavaType:
        return JavaType(f"{self.__naming.model_package}.{name}")

    @cached_property
    def __sql2java_type_map(self) -> t.Mapping[str, tuple[str, JavaType]]:
        return {
            sql_type: (jdbc_type, JavaType(java_type))
            for sql_types, jdbc_type, java_type in [
                (["BOOLEAN", "BIT"], "BIT", "java.lang.Boolean"),
                (["TINYINT", "UTINYINT"], "TINYINT", "java.lang.Byte"),
                (["SMALLINT", "USMALLINT", "SMALLSERIAL"], "SMALLINT", "java.lang.Short"),
                (["INT", "UINT", "MEDIUMINT", "UMEDIUMINT", "SERIAL"], "INTEGER", "java.lang.Integer"),
                (["BIGINT", "UBIGINT", "BIGSERIAL"], "BIGINT", "java.lang.Long"),
                (["FLOAT"], "REAL", "java.lang.Float"),
                (["DOUBLE"], "DOUBLE", "java.lang.Double"),
                (["DECIMAL"], "DECIMAL", "java.math.BigDecimal"),
                (["CHAR", "NCHAR"], "CHAR", "java.lang.String"),
                (["VARCHAR", "NVARCHAR", "UUID", "JSON"], "VARCHAR", "java.lang.String"),
                (["TEXT", "MEDIUMTEXT", "LONGTEXT"], "LONGVARCHAR", "java.lang.String"),
                (["DATE"], "DATE", "java.util.Date"),
                (["TIME"], "TIME", "java.util.Date"),
                (["DATETIME", "TIMESTAMP", "TIMESTAMPTZ"], "TIMESTAMP", "java.util.Date"),
                (["BINARY", "VARBINARY"], "BINARY", "byte[]"),
                (["BLOB", "MEDIUMBLOB", "LONGBLOB"], "LONGVARBINARY", "byte[]"),
            ]
            for sql_type in sql_types
        }
