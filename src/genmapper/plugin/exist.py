import typing as t

from genmapper._typing import override
from genmapper.generic.protocol import GenericInterfaceContext
from genmapper.java.model import MethodInfo, ParameterInfo, predef
from genmapper.plugin.contributor import GenericContributorPlugin
from genmapper.sqlmap.builder import example_where
from genmapper.sqlmap.model import XmlElement
from genmapper.table.model import TableInfo


class ExistByExamplePlugin(GenericContributorPlugin):
    """Add `existByExample` method to the generic interface."""

    METHOD: t.Final[str] = "existByExample"

    requires_example = True

    @override
    def build_methods(self, generic: GenericInterfaceContext) -> t.Iterable[MethodInfo]:
        yield MethodInfo(
            name=self.METHOD,
            returns=predef().boolean,
            params=[ParameterInfo(name="example", type_=generic.example)],
        )

    @override
    def build_elements(self, table: TableInfo) -> t.Iterable[XmlElement]:
        yield (
            XmlElement("select")
            .attr("id", self.METHOD)
            .attr("parameterType", table.example_type.qualname)
            .attr("resultType", "boolean")
            .text("select", "count(*) > 0", f"from {table.aliased_name}")
            .add(example_where(table.example_where_clause_id))
        )
