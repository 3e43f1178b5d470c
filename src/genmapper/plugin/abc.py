from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:
    from genmapper.generator.model import ClientMethodKind, GeneratedFile, SqlMapElementKind
    from genmapper.java.model import ClassInfo, CompilationUnit, InterfaceInfo, MethodInfo
    from genmapper.plugin.context import PluginContext
    from genmapper.sqlmap.model import Document, XmlElement
    from genmapper.table.model import TableInfo


def is_true(value: t.Optional[str]) -> bool:
    return value is not None and value.strip().lower() == "true"


class Plugin:
    """
    Base class for code generator plugins.

    The host calls the hooks for every table in a fixed order: `initialized`, model classes, client methods,
    `client_generated`, sql map elements, `sql_map_document_generated`. After all tables were processed
    `context_generate_additional_files` is called once. Hooks returning `bool` decide whether the generated artifact
    is kept (the first plugin returning `False` wins). All hooks keep the artifact by default.
    """

    def __init__(self, context: PluginContext, properties: t.Optional[t.Mapping[str, str]] = None) -> None:
        self.context = context
        self.properties: t.Mapping[str, str] = dict(properties or {})

    @property
    def name(self) -> str:
        return type(self).__name__

    def validate(self, warnings: list[str]) -> bool:
        """Check the plugin settings; append a message to `warnings` and return `False` to skip the plugin."""
        return True

    def initialized(self, table: TableInfo) -> None:
        pass

    def model_record_class_generated(self, cls: ClassInfo, table: TableInfo) -> bool:
        return True

    def model_primary_key_class_generated(self, cls: ClassInfo, table: TableInfo) -> bool:
        return True

    def model_example_class_generated(self, cls: ClassInfo, table: TableInfo) -> bool:
        return True

    def client_method_generated(
        self,
        kind: ClientMethodKind,
        method: MethodInfo,
        target: CompilationUnit,
        table: TableInfo,
    ) -> bool:
        """
        Client method was generated for the mapper interface or for the implementation class.

        In `dao` client style the hook is called twice for the same logical method: once with the interface, once
        with the implementation class as `target`.
        """
        return True

    def client_generated(self, interface: InterfaceInfo, impl: t.Optional[ClassInfo], table: TableInfo) -> bool:
        return True

    def sql_map_element_generated(self, kind: SqlMapElementKind, element: XmlElement, table: TableInfo) -> bool:
        return True

    def sql_map_document_generated(self, document: Document, table: TableInfo) -> bool:
        return True

    def context_generate_additional_files(self) -> t.Sequence[GeneratedFile]:
        return ()
