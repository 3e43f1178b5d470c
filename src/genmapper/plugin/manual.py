import typing as t

from genmapper._typing import override
from genmapper.generator.model import SqlMapElementKind
from genmapper.generic.protocol import GenericInterfaceContext
from genmapper.java.model import ClassInfo, FieldInfo, JavaType, MethodInfo, ParameterInfo, predef
from genmapper.plugin.abc import is_true
from genmapper.plugin.contributor import GenericContributorPlugin
from genmapper.sqlmap.builder import if_, include, limit_clause, select_key
from genmapper.sqlmap.model import XmlElement
from genmapper.table.model import ColumnInfo, TableInfo


def _param(name: str, type_: JavaType) -> ParameterInfo:
    return ParameterInfo(name=name, type_=type_, annotations=(f'@Param("{name}")',))


class ManualQueryPlugin(GenericContributorPlugin):
    """
    Add methods that take raw select / update clauses.

    * `selectManuallyByExample(selectClause, example)`, `updateManuallyByExample(updateClause, example)` (only with
      example support)
    * `selectManuallyById(selectClause, id)`, `updateManuallyById(updateClause, id)`
    * `insertOrUpdateManually(record, updateClause)`, `insertSelectiveOrUpdateManually(record, updateClause)` (when
      `upsert` property is `true`, mysql `on duplicate key update` syntax)

    Example classes get `limit` & `offset` properties, they are applied to `selectByExample` and
    `selectManuallyByExample` statements.
    """

    UPSERT: t.Final[str] = "upsert"

    SELECT_BY_EXAMPLE: t.Final[str] = "selectManuallyByExample"
    SELECT_BY_ID: t.Final[str] = "selectManuallyById"
    UPDATE_BY_EXAMPLE: t.Final[str] = "updateManuallyByExample"
    UPDATE_BY_ID: t.Final[str] = "updateManuallyById"
    INSERT_OR_UPDATE: t.Final[str] = "insertOrUpdateManually"
    INSERT_SELECTIVE_OR_UPDATE: t.Final[str] = "insertSelectiveOrUpdateManually"

    @property
    def upsert(self) -> bool:
        return is_true(self.properties.get(self.UPSERT))

    @override
    def model_example_class_generated(self, cls: ClassInfo, table: TableInfo) -> bool:
        if not self.generic.example_enabled:
            return True

        int_, integer = predef().int, predef().integer

        cls.add_field(FieldInfo(name="limit", type_=integer, visibility="protected"))
        cls.add_field(FieldInfo(name="offset", type_=integer, visibility="protected"))

        cls.add_method(
            MethodInfo(
                name="limit",
                returns=cls.type_,
                params=[ParameterInfo("offset", int_), ParameterInfo("limit", int_)],
                body=["this.offset = offset;", "this.limit = limit;", "return this;"],
            )
        )
        cls.add_method(
            MethodInfo(
                name="limit",
                returns=cls.type_,
                params=[ParameterInfo("limit", int_)],
                body=["this.limit = limit;", "return this;"],
            )
        )

        for name in ("limit", "offset"):
            prop = name.capitalize()
            cls.add_method(MethodInfo(name=f"get{prop}", returns=integer, body=[f"return {name};"]))
            cls.add_method(
                MethodInfo(
                    name=f"set{prop}",
                    returns=predef().void,
                    params=[ParameterInfo(name, integer)],
                    body=[f"this.{name} = {name};"],
                )
            )

        return True

    @override
    def sql_map_element_generated(self, kind: SqlMapElementKind, element: XmlElement, table: TableInfo) -> bool:
        if kind == "select_by_example" and self.generic.example_enabled:
            element.add(limit_clause())

        return True

    @override
    def build_methods(self, generic: GenericInterfaceContext) -> t.Iterable[MethodInfo]:
        string, int_ = predef().string, predef().int

        if generic.example_enabled:
            yield MethodInfo(
                name=self.SELECT_BY_EXAMPLE,
                returns=generic.model_list,
                params=[_param("selectClause", string), _param("example", generic.example)],
            )

        yield MethodInfo(
            name=self.SELECT_BY_ID,
            returns=generic.model,
            params=[_param("selectClause", string), _param("id", generic.id_)],
        )

        if generic.example_enabled:
            yield MethodInfo(
                name=self.UPDATE_BY_EXAMPLE,
                returns=int_,
                params=[_param("updateClause", string), _param("example", generic.example)],
            )

        yield MethodInfo(
            name=self.UPDATE_BY_ID,
            returns=int_,
            params=[_param("updateClause", string), _param("id", generic.id_)],
        )

        if self.upsert:
            for name in (self.INSERT_OR_UPDATE, self.INSERT_SELECTIVE_OR_UPDATE):
                yield MethodInfo(
                    name=name,
                    returns=int_,
                    params=[_param("record", generic.model), _param("updateClause", string)],
                )

    @override
    def build_elements(self, table: TableInfo) -> t.Iterable[XmlElement]:
        if self.upsert:
            yield self.__build_insert_or_update(table)
            yield self.__build_insert_selective_or_update(table)

        if self.generic.example_enabled:
            yield self.__build_select_by_example(table)

        # NOTE: by id statements need a primary key
        if table.has_primary_key:
            yield self.__build_select_by_id(table)

        if self.generic.example_enabled:
            yield self.__build_update_by_example(table)

        if table.has_primary_key:
            yield self.__build_update_by_id(table)

    def __build_select_by_example(self, table: TableInfo) -> XmlElement:
        return (
            XmlElement("select")
            .attr("id", self.SELECT_BY_EXAMPLE)
            .attr("parameterType", "map")
            .attr("resultMap", table.base_result_map_id)
            .text("select")
            .add(if_("example.distinct", "distinct"))
            .text(f"${{selectClause}} from {table.aliased_name}")
            .add(
                XmlElement("if").attr("test", "example != null").add(include(table.update_by_example_where_clause_id)),
                if_("example.orderByClause != null", "order by ${example.orderByClause}"),
                limit_clause("example."),
            )
        )

    def __build_select_by_id(self, table: TableInfo) -> XmlElement:
        return (
            XmlElement("select")
            .attr("id", self.SELECT_BY_ID)
            .attr("parameterType", "map")
            .attr("resultMap", table.base_result_map_id)
            .text(f"select ${{selectClause}} from {table.aliased_name}")
            .text(*table.key_where_clauses(param="id", aliased=True))
        )

    def __build_update_by_example(self, table: TableInfo) -> XmlElement:
        return (
            XmlElement("update")
            .attr("id", self.UPDATE_BY_EXAMPLE)
            .attr("parameterType", "map")
            .text(f"update {table.aliased_name}", "set ${updateClause}")
            .add(XmlElement("if").attr("test", "example != null").add(include(table.update_by_example_where_clause_id)))
        )

    def __build_update_by_id(self, table: TableInfo) -> XmlElement:
        return (
            XmlElement("update")
            .attr("id", self.UPDATE_BY_ID)
            .attr("parameterType", "map")
            .text(f"update {table.aliased_name}", "set ${updateClause}")
            .text(*table.key_where_clauses(param="id"))
        )

    def __build_insert_or_update(self, table: TableInfo) -> XmlElement:
        element = XmlElement("insert").attr("id", self.INSERT_OR_UPDATE).attr("parameterType", "map")
        update_key = self.__apply_generated_key(element, table)
        columns = self.__insertable_columns(table)

        return element.text(
            f"insert into {table.name} ({', '.join(column.escaped for column in columns)})",
            f"values ({', '.join(column.parameter_clause('record.') for column in columns)})",
            f"on duplicate key update ${{updateClause}}{update_key}",
        )

    def __build_insert_selective_or_update(self, table: TableInfo) -> XmlElement:
        element = XmlElement("insert").attr("id", self.INSERT_SELECTIVE_OR_UPDATE).attr("parameterType", "map")
        update_key = self.__apply_generated_key(element, table)

        insert_trim = XmlElement("trim").attr("prefix", "(").attr("suffix", ")").attr("suffixOverrides", ",")
        values_trim = XmlElement("trim").attr("prefix", "values (").attr("suffix", ")").attr("suffixOverrides", ",")

        for column in self.__insertable_columns(table):
            column_text = f"{column.escaped},"
            value_text = f"{column.parameter_clause('record.')},"

            # NOTE: primitive properties are never null
            if column.sequence or column.java_type.is_primitive:
                insert_trim.text(column_text)
                values_trim.text(value_text)

            else:
                test = f"record.{column.java_property} != null"
                insert_trim.add(if_(test, column_text))
                values_trim.add(if_(test, value_text))

        return (
            element.text(f"insert into {table.name}")
            .add(insert_trim, values_trim)
            .text(f"on duplicate key update ${{updateClause}}{update_key}")
        )

    def __apply_generated_key(self, element: XmlElement, table: TableInfo) -> str:
        """Add generated key handling to insert element, returns `update` clause suffix for the key column."""

        key = table.generated_key
        column = table.get_column(key.column) if key is not None else None
        if key is None or column is None:
            return ""

        if key.jdbc_standard:
            element.attr("useGeneratedKeys", "true")
            element.attr("keyProperty", f"record.{column.java_property}")
            element.attr("keyColumn", column.name)

        else:
            element.add(select_key(column, key, "record."))

        return f", {column.name} = last_insert_id({column.name})"

    def __insertable_columns(self, table: TableInfo) -> t.Sequence[ColumnInfo]:
        return [column for column in table.columns if not column.identity and not column.generated_always]
