import typing as t

from genmapper._typing import override
from genmapper.generic.protocol import GenericInterfaceContext
from genmapper.java.model import MethodInfo, ParameterInfo
from genmapper.plugin.contributor import GenericContributorPlugin
from genmapper.sqlmap.builder import example_where, if_, include
from genmapper.sqlmap.model import XmlElement
from genmapper.table.model import TableInfo


class SelectOneByExamplePlugin(GenericContributorPlugin):
    """Add `selectOneByExample` method, it selects the first row matching the example."""

    METHOD: t.Final[str] = "selectOneByExample"

    requires_example = True

    @override
    def build_methods(self, generic: GenericInterfaceContext) -> t.Iterable[MethodInfo]:
        yield MethodInfo(
            name=self.METHOD,
            returns=generic.model,
            params=[ParameterInfo(name="example", type_=generic.example)],
        )

    @override
    def build_elements(self, table: TableInfo) -> t.Iterable[XmlElement]:
        yield (
            XmlElement("select")
            .attr("id", self.METHOD)
            .attr("parameterType", table.example_type.qualname)
            .attr("resultMap", table.base_result_map_id)
            .text("select")
            .add(if_("distinct", "distinct"), include(table.base_column_list_id))
            .text(f"from {table.aliased_name}")
            .add(
                example_where(table.example_where_clause_id),
                if_("orderByClause != null", "order by ${orderByClause}"),
            )
            .text("limit 1")
        )
