import typing as t

from genmapper._typing import assert_never
from genmapper.generator.model import STATEMENT_IDS, ClientMethodKind, SqlMapElementKind, SqlMapFragmentKind
from genmapper.sqlmap.builder import example_where, if_, include, select_key
from genmapper.sqlmap.model import Document, XmlElement
from genmapper.table.model import ColumnInfo, TableInfo

SQL_MAP_ELEMENT_ORDER: t.Final[t.Sequence[SqlMapElementKind]] = (
    "result_map",
    "result_map_with_blobs",
    "example_where_clause",
    "update_by_example_where_clause",
    "base_column_list",
    "blob_column_list",
    "select_by_example_with_blobs",
    "select_by_example",
    "select_by_primary_key",
    "select_all",
    "delete_by_primary_key",
    "delete_by_example",
    "insert",
    "insert_selective",
    "count_by_example",
    "update_by_example_selective",
    "update_by_example_with_blobs",
    "update_by_example",
    "update_by_primary_key_selective",
    "update_by_primary_key_with_blobs",
    "update_by_primary_key",
)


def iter_sql_map_fragment_kinds(table: TableInfo, *, example: bool) -> t.Iterator[SqlMapFragmentKind]:
    yield "result_map"

    if table.has_blob_columns:
        yield "result_map_with_blobs"

    if example:
        yield "example_where_clause"
        yield "update_by_example_where_clause"

    yield "base_column_list"

    if table.has_blob_columns:
        yield "blob_column_list"


class SqlMapBuilder:
    """Builds MyBatis 3 sql map elements of a table, statement parameters match the client methods."""

    def __init__(self, table: TableInfo) -> None:
        self.__table = table

    def build_document(self) -> Document:
        return Document(root=XmlElement("mapper").attr("namespace", self.__table.sql_map_namespace))

    def build_element(self, kind: SqlMapElementKind) -> XmlElement:
        table = self.__table

        if kind == "result_map":
            return self.__result_map(table.base_result_map_id, table.base_columns)

        elif kind == "result_map_with_blobs":
            return self.__result_map(table.result_map_with_blobs_id, table.blob_columns).attr(
                "extends", table.base_result_map_id
            )

        elif kind == "example_where_clause":
            return self.__where_clause(table.example_where_clause_id, "oredCriteria")

        elif kind == "update_by_example_where_clause":
            return self.__where_clause(table.update_by_example_where_clause_id, "example.oredCriteria")

        elif kind == "base_column_list":
            return self.__column_list(table.base_column_list_id, table.base_columns)

        elif kind == "blob_column_list":
            return self.__column_list(table.blob_column_list_id, table.blob_columns)

        elif kind == "count_by_example":
            return (
                self.__statement("select", kind)
                .attr("parameterType", table.example_type.qualname)
                .attr("resultType", "java.lang.Long")
                .text(f"select count(*) from {table.aliased_name}")
                .add(example_where(table.example_where_clause_id))
            )

        elif kind == "delete_by_example":
            return (
                self.__statement("delete", kind)
                .attr("parameterType", table.example_type.qualname)
                .text(f"delete from {table.name}")
                .add(example_where(table.example_where_clause_id))
            )

        elif kind == "delete_by_primary_key":
            return (
                self.__statement("delete", kind)
                .attr("parameterType", self.__key_parameter_type())
                .text(f"delete from {table.name}", *table.key_where_clauses())
            )

        elif kind == "insert":
            element = self.__insert(kind)
            columns = self.__insertable_columns()
            return element.text(
                f"insert into {table.name} ({', '.join(column.escaped for column in columns)})",
                f"values ({', '.join(column.parameter_clause() for column in columns)})",
            )

        elif kind == "insert_selective":
            return self.__insert_selective(self.__insert(kind))

        elif kind == "select_all":
            return (
                self.__statement("select", kind)
                .attr("resultMap", table.base_result_map_id)
                .text("select")
                .add(include(table.base_column_list_id))
                .text(f"from {table.aliased_name}")
            )

        elif kind == "select_by_example":
            return self.__select_by_example(kind, with_blobs=False)

        elif kind == "select_by_example_with_blobs":
            return self.__select_by_example(kind, with_blobs=True)

        elif kind == "select_by_primary_key":
            element = (
                self.__statement("select", kind)
                .attr("parameterType", self.__key_parameter_type())
                .attr(
                    "resultMap",
                    table.result_map_with_blobs_id if table.has_blob_columns else table.base_result_map_id,
                )
                .text("select")
            )
            self.__add_column_lists(element, with_blobs=table.has_blob_columns)
            return element.text(f"from {table.aliased_name}", *table.key_where_clauses(aliased=True))

        elif kind == "update_by_example":
            return self.__update_by_example(kind, self.__updatable_columns(table.columns))

        elif kind == "update_by_example_selective":
            sets = XmlElement("set")
            for column in self.__updatable_columns(table.columns, with_blobs=True):
                sets.add(self.__not_null_assignment(column, "record."))

            return (
                self.__statement("update", kind)
                .attr("parameterType", "map")
                .text(f"update {table.aliased_name}")
                .add(sets, self.__update_by_example_where())
            )

        elif kind == "update_by_example_with_blobs":
            return self.__update_by_example(kind, self.__updatable_columns(table.columns, with_blobs=True))

        elif kind == "update_by_primary_key":
            return self.__update_by_primary_key(kind, self.__updatable_columns(table.non_primary_key_columns))

        elif kind == "update_by_primary_key_selective":
            sets = XmlElement("set")
            for column in self.__updatable_columns(table.non_primary_key_columns, with_blobs=True):
                sets.add(self.__not_null_assignment(column))

            return (
                self.__statement("update", kind)
                .attr("parameterType", table.record_type.qualname)
                .text(f"update {table.name}")
                .add(sets)
                .text(*table.key_where_clauses())
            )

        elif kind == "update_by_primary_key_with_blobs":
            return self.__update_by_primary_key(
                kind,
                self.__updatable_columns(table.non_primary_key_columns, with_blobs=True),
            )

        else:
            assert_never(kind)

    def __statement(self, name: str, kind: ClientMethodKind) -> XmlElement:
        return XmlElement(name).attr("id", STATEMENT_IDS[kind])

    def __result_map(self, id_: str, columns: t.Sequence[ColumnInfo]) -> XmlElement:
        element = XmlElement("resultMap").attr("id", id_).attr("type", self.__table.record_type.qualname)

        for column in columns:
            element.add(
                XmlElement("id" if column.primary_key else "result")
                .attr("column", column.name)
                .attr("jdbcType", column.jdbc_type)
                .attr("property", column.java_property)
            )

        return element

    def __where_clause(self, id_: str, collection: str) -> XmlElement:
        criterion = XmlElement("choose").add(
            XmlElement("when").attr("test", "criterion.noValue").text("and ${criterion.condition}"),
            XmlElement("when")
            .attr("test", "criterion.singleValue")
            .text("and ${criterion.condition} #{criterion.value}"),
            XmlElement("when")
            .attr("test", "criterion.betweenValue")
            .text("and ${criterion.condition} #{criterion.value} and #{criterion.secondValue}"),
            XmlElement("when")
            .attr("test", "criterion.listValue")
            .text("and ${criterion.condition}")
            .add(
                XmlElement("foreach")
                .attr("close", ")")
                .attr("collection", "criterion.value")
                .attr("item", "listItem")
                .attr("open", "(")
                .attr("separator", ",")
                .text("#{listItem}")
            ),
        )

        return (
            XmlElement("sql")
            .attr("id", id_)
            .add(
                XmlElement("where").add(
                    XmlElement("foreach")
                    .attr("collection", collection)
                    .attr("item", "criteria")
                    .attr("separator", "or")
                    .add(
                        XmlElement("if")
                        .attr("test", "criteria.valid")
                        .add(
                            XmlElement("trim")
                            .attr("prefix", "(")
                            .attr("prefixOverrides", "and")
                            .attr("suffix", ")")
                            .add(
                                XmlElement("foreach")
                                .attr("collection", "criteria.criteria")
                                .attr("item", "criterion")
                                .add(criterion)
                            )
                        )
                    )
                )
            )
        )

    def __column_list(self, id_: str, columns: t.Sequence[ColumnInfo]) -> XmlElement:
        return (
            XmlElement("sql")
            .attr("id", id_)
            .text(", ".join(self.__table.aliased_escaped_name(column) for column in columns))
        )

    def __add_column_lists(self, element: XmlElement, *, with_blobs: bool) -> None:
        element.add(include(self.__table.base_column_list_id))

        if with_blobs:
            element.text(",").add(include(self.__table.blob_column_list_id))

    def __select_by_example(self, kind: ClientMethodKind, *, with_blobs: bool) -> XmlElement:
        table = self.__table
        element = (
            self.__statement("select", kind)
            .attr("parameterType", table.example_type.qualname)
            .attr("resultMap", table.result_map_with_blobs_id if with_blobs else table.base_result_map_id)
            .text("select")
            .add(if_("distinct", "distinct"))
        )
        self.__add_column_lists(element, with_blobs=with_blobs)

        return element.text(f"from {table.aliased_name}").add(
            example_where(table.example_where_clause_id),
            if_("orderByClause != null", "order by ${orderByClause}"),
        )

    def __insert(self, kind: ClientMethodKind) -> XmlElement:
        table = self.__table
        element = self.__statement("insert", kind).attr("parameterType", table.record_type.qualname)

        key = table.generated_key
        column = table.get_column(key.column) if key is not None else None
        if key is not None and column is not None:
            if key.jdbc_standard:
                element.attr("keyColumn", column.name)
                element.attr("keyProperty", column.java_property)
                element.attr("useGeneratedKeys", "true")

            else:
                element.add(select_key(column, key))

        return element

    def __insert_selective(self, element: XmlElement) -> XmlElement:
        insert_trim = XmlElement("trim").attr("prefix", "(").attr("suffix", ")").attr("suffixOverrides", ",")
        values_trim = XmlElement("trim").attr("prefix", "values (").attr("suffix", ")").attr("suffixOverrides", ",")

        for column in self.__insertable_columns():
            test = f"{column.java_property} != null"
            insert_trim.add(if_(test, f"{column.escaped},"))
            values_trim.add(if_(test, f"{column.parameter_clause()},"))

        return element.text(f"insert into {self.__table.name}").add(insert_trim, values_trim)

    def __update_by_example(self, kind: ClientMethodKind, columns: t.Sequence[ColumnInfo]) -> XmlElement:
        table = self.__table
        return (
            self.__statement("update", kind)
            .attr("parameterType", "map")
            .text(f"update {table.aliased_name}")
            .text(*self.__assignments(columns, "record.", aliased=True))
            .add(self.__update_by_example_where())
        )

    def __update_by_primary_key(self, kind: ClientMethodKind, columns: t.Sequence[ColumnInfo]) -> XmlElement:
        table = self.__table
        return (
            self.__statement("update", kind)
            .attr("parameterType", table.record_type.qualname)
            .text(f"update {table.name}")
            .text(*self.__assignments(columns))
            .text(*table.key_where_clauses())
        )

    def __update_by_example_where(self) -> XmlElement:
        return (
            XmlElement("if")
            .attr("test", "_parameter != null")
            .add(include(self.__table.update_by_example_where_clause_id))
        )

    def __assignments(self, columns: t.Sequence[ColumnInfo], prefix: str = "", *, aliased: bool = False) -> list[str]:
        table = self.__table
        return [
            f"{'set' if i == 0 else '  '} "
            f"{table.aliased_escaped_name(column) if aliased else column.escaped} = {column.parameter_clause(prefix)}"
            f"{',' if i + 1 < len(columns) else ''}"
            for i, column in enumerate(columns)
        ]

    def __not_null_assignment(self, column: ColumnInfo, prefix: str = "") -> XmlElement:
        return if_(f"{prefix}{column.java_property} != null", f"{column.escaped} = {column.parameter_clause(prefix)},")

    def __key_parameter_type(self) -> str:
        key_type = self.__table.key_type
        return key_type.qualname if key_type is not None else "map"

    def __insertable_columns(self) -> t.Sequence[ColumnInfo]:
        return [column for column in self.__table.columns if not column.identity and not column.generated_always]

    def __updatable_columns(self, columns: t.Sequence[ColumnInfo], *, with_blobs: bool = False) -> list[ColumnInfo]:
        return [
            column
            for column in columns
            if not column.generated_always and (with_blobs or not column.is_blob)
        ]
