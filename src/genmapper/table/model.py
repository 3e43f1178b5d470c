from __future__ import annotations

__all__ = [
    "ColumnInfo",
    "GeneratedKeyInfo",
    "KeyOrder",
    "TableInfo",
]

import typing as t
from dataclasses import dataclass

from genmapper.java.model import JavaType

KeyOrder = t.Literal["BEFORE", "AFTER"]

BLOB_JDBC_TYPES: t.Final[frozenset[str]] = frozenset(
    {"BINARY", "BLOB", "CLOB", "LONGNVARCHAR", "LONGVARBINARY", "LONGVARCHAR", "NCLOB", "VARBINARY"}
)


@dataclass(frozen=True)
class ColumnInfo:
    name: str
    java_property: str
    java_type: JavaType
    jdbc_type: str
    escaped_name: t.Optional[str] = None
    primary_key: bool = False
    identity: bool = False
    generated_always: bool = False
    sequence: bool = False

    @property
    def escaped(self) -> str:
        return self.escaped_name if self.escaped_name is not None else self.name

    @property
    def is_blob(self) -> bool:
        return self.jdbc_type in BLOB_JDBC_TYPES

    def parameter_clause(self, prefix: str = "", *, property_: t.Optional[str] = None) -> str:
        """Build a MyBatis parameter reference, e.g. `#{record.userId,jdbcType=INTEGER}`."""
        return f"#{{{prefix}{property_ if property_ is not None else self.java_property},jdbcType={self.jdbc_type}}}"


@dataclass(frozen=True)
class GeneratedKeyInfo:
    column: str
    jdbc_standard: bool = True
    runtime_statement: t.Optional[str] = None
    order: KeyOrder = "AFTER"


@dataclass(frozen=True)
class TableInfo:
    name: str
    record_type: JavaType
    example_type: JavaType
    mapper_type: JavaType
    columns: t.Sequence[ColumnInfo]
    alias: t.Optional[str] = None
    primary_key_type: t.Optional[JavaType] = None
    generated_key: t.Optional[GeneratedKeyInfo] = None
    sql_map_package: t.Optional[str] = None

    base_result_map_id: t.ClassVar[str] = "BaseResultMap"
    result_map_with_blobs_id: t.ClassVar[str] = "ResultMapWithBLOBs"
    base_column_list_id: t.ClassVar[str] = "Base_Column_List"
    blob_column_list_id: t.ClassVar[str] = "Blob_Column_List"
    example_where_clause_id: t.ClassVar[str] = "Example_Where_Clause"
    update_by_example_where_clause_id: t.ClassVar[str] = "Update_By_Example_Where_Clause"

    @property
    def aliased_name(self) -> str:
        return f"{self.name} {self.alias}" if self.alias else self.name

    @property
    def sql_map_namespace(self) -> str:
        return self.mapper_type.qualname

    @property
    def primary_key_columns(self) -> t.Sequence[ColumnInfo]:
        return [column for column in self.columns if column.primary_key]

    @property
    def non_primary_key_columns(self) -> t.Sequence[ColumnInfo]:
        return [column for column in self.columns if not column.primary_key]

    @property
    def base_columns(self) -> t.Sequence[ColumnInfo]:
        return [column for column in self.columns if not column.is_blob]

    @property
    def blob_columns(self) -> t.Sequence[ColumnInfo]:
        return [column for column in self.columns if column.is_blob]

    @property
    def has_primary_key(self) -> bool:
        return any(column.primary_key for column in self.columns)

    @property
    def has_blob_columns(self) -> bool:
        return any(column.is_blob for column in self.columns)

    @property
    def has_primary_key_class(self) -> bool:
        return self.primary_key_type is not None

    @property
    def key_type(self) -> t.Optional[JavaType]:
        """Type of the by-key method argument: the key class or the only key column type."""
        if self.primary_key_type is not None:
            return self.primary_key_type

        keys = self.primary_key_columns
        if len(keys) == 1:
            return keys[0].java_type

        return None

    def get_column(self, name: str) -> t.Optional[ColumnInfo]:
        lowered = name.lower()
        return next((column for column in self.columns if column.name.lower() == lowered), None)

    def aliased_escaped_name(self, column: ColumnInfo) -> str:
        return f"{self.alias}.{column.escaped}" if self.alias else column.escaped

    def key_parameter_clause(self, column: ColumnInfo, *, param: t.Optional[str] = None, prefix: str = "") -> str:
        """
        Build a parameter reference to primary key column value.

        :param: name of the `@Param` annotated key argument (the key class object or the only key value).
        :prefix: property path prefix used when the key properties are read from a record, e.g. `record.`.
        """

        if param is None:
            return column.parameter_clause(prefix)

        if self.has_primary_key_class:
            return column.parameter_clause(f"{param}.")

        return column.parameter_clause(property_=param)

    def key_where_clauses(
        self,
        *,
        param: t.Optional[str] = None,
        prefix: str = "",
        aliased: bool = False,
    ) -> t.Sequence[str]:
        return [
            f"{'where' if i == 0 else '  and'} "
            f"{self.aliased_escaped_name(column) if aliased else column.escaped} = "
            f"{self.key_parameter_clause(column, param=param, prefix=prefix)}"
            for i, column in enumerate(self.primary_key_columns)
        ]
