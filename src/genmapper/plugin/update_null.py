import typing as t

from genmapper._typing import override
from genmapper.generic.protocol import GenericInterfaceContext
from genmapper.java.model import MethodInfo, ParameterInfo, predef
from genmapper.plugin.contributor import GenericContributorPlugin
from genmapper.sqlmap.builder import if_
from genmapper.sqlmap.model import XmlElement
from genmapper.table.model import TableInfo


class UpdateSelectNullPlugin(GenericContributorPlugin):
    """
    Add `updateByIdSelectNull` method.

    Selective update skips null values, the method updates non null properties of the record and then applies the raw
    `updateNullClause` (e.g. `name = null`), so the columns may be set to null explicitly.
    """

    METHOD: t.Final[str] = "updateByIdSelectNull"

    @override
    def build_methods(self, generic: GenericInterfaceContext) -> t.Iterable[MethodInfo]:
        yield MethodInfo(
            name=self.METHOD,
            returns=predef().int,
            params=[
                ParameterInfo(name="record", type_=generic.model, annotations=('@Param("record")',)),
                ParameterInfo(
                    name="updateNullClause",
                    type_=predef().string,
                    annotations=('@Param("updateNullClause")',),
                ),
            ],
        )

    @override
    def build_elements(self, table: TableInfo) -> t.Iterable[XmlElement]:
        if not table.has_primary_key:
            return

        sets = XmlElement("set")
        for column in table.non_primary_key_columns:
            if column.generated_always:
                continue

            sets.add(
                if_(
                    f"record.{column.java_property} != null",
                    f"{column.escaped} = {column.parameter_clause('record.')},",
                )
            )

        sets.text("${updateNullClause}")

        yield (
            XmlElement("update")
            .attr("id", self.METHOD)
            .attr("parameterType", "map")
            .text(f"update {table.aliased_name}")
            .add(sets)
            .text(*table.key_where_clauses(prefix="record."))
        )
