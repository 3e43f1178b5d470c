from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:
    from genmapper.generator.model import ClientMethodKind, GeneratedFile, SqlMapElementKind
    from genmapper.java.model import ClassInfo, CompilationUnit, InterfaceInfo, MethodInfo
    from genmapper.plugin.abc import Plugin
    from genmapper.sqlmap.model import Document, XmlElement
    from genmapper.table.model import TableInfo


class PluginAggregator:
    def __init__(self, plugins: t.Sequence[Plugin]) -> None:
        self.__plugins = list(plugins)
        self.__active: list[Plugin] = []

    @property
    def active(self) -> t.Sequence[Plugin]:
        return self.__active

    def validate(self) -> t.Sequence[str]:
        """Validate plugins in the configured order, only valid plugins take part in the run."""
        warnings = list[str]()

        for plugin in self.__plugins:
            if plugin.validate(warnings):
                self.__active.append(plugin)

        return warnings

    def initialized(self, table: TableInfo) -> None:
        for plugin in self.__active:
            plugin.initialized(table)

    def model_record_class_generated(self, cls: ClassInfo, table: TableInfo) -> bool:
        return all(plugin.model_record_class_generated(cls, table) for plugin in self.__active)

    def model_primary_key_class_generated(self, cls: ClassInfo, table: TableInfo) -> bool:
        return all(plugin.model_primary_key_class_generated(cls, table) for plugin in self.__active)

    def model_example_class_generated(self, cls: ClassInfo, table: TableInfo) -> bool:
        return all(plugin.model_example_class_generated(cls, table) for plugin in self.__active)

    def client_method_generated(
        self,
        kind: ClientMethodKind,
        method: MethodInfo,
        target: CompilationUnit,
        table: TableInfo,
    ) -> bool:
        return all(plugin.client_method_generated(kind, method, target, table) for plugin in self.__active)

    def client_generated(self, interface: InterfaceInfo, impl: t.Optional[ClassInfo], table: TableInfo) -> bool:
        return all(plugin.client_generated(interface, impl, table) for plugin in self.__active)

    def sql_map_element_generated(self, kind: SqlMapElementKind, element: XmlElement, table: TableInfo) -> bool:
        return all(plugin.sql_map_element_generated(kind, element, table) for plugin in self.__active)

    def sql_map_document_generated(self, document: Document, table: TableInfo) -> bool:
        return all(plugin.sql_map_document_generated(document, table) for plugin in self.__active)

    def context_generate_additional_files(self) -> t.Sequence[GeneratedFile]:
        return [file for plugin in self.__active for file in plugin.context_generate_additional_files()]
