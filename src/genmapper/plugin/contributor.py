import abc
import typing as t

from genmapper._typing import override
from genmapper.errors import DependencyError
from genmapper.generic.protocol import GenericInterfaceContext
from genmapper.java.model import ClassInfo, InterfaceInfo, MethodInfo
from genmapper.plugin.abc import Plugin
from genmapper.plugin.context import PluginContext
from genmapper.plugin.generic import GenericInterfacePlugin
from genmapper.sqlmap.model import Document, XmlElement
from genmapper.table.model import TableInfo


class GenericContributorPlugin(Plugin, metaclass=abc.ABCMeta):
    """
    Base for plugins that add methods into the generic interface and statements into every sql map.

    Methods are contributed once per run (the generic interface deduplicates them by name), statements are built for
    each table.
    """

    requires_example: t.ClassVar[bool] = False

    def __init__(self, context: PluginContext, properties: t.Optional[t.Mapping[str, str]] = None) -> None:
        super().__init__(context, properties)
        self.__generic: t.Optional[GenericInterfaceContext] = None

    @property
    def generic(self) -> GenericInterfaceContext:
        if self.__generic is None:
            msg = "plugin was not validated"
            raise RuntimeError(msg, self.name)

        return self.__generic

    @override
    def validate(self, warnings: list[str]) -> bool:
        try:
            generic = self.context.require_generic_interface()

        except DependencyError:
            warnings.append(f"{GenericInterfacePlugin.__name__} not enabled, plugin {self.name} is skipped")
            return False

        if self.requires_example and not generic.example_enabled:
            warnings.append(
                f"Example support is disabled in {GenericInterfacePlugin.__name__}, plugin {self.name} is skipped"
            )
            return False

        self.__generic = generic

        return True

    @override
    def client_generated(self, interface: InterfaceInfo, impl: t.Optional[ClassInfo], table: TableInfo) -> bool:
        generic = self.generic

        for method in self.build_methods(generic):
            if not generic.has_contributed(method.name):
                generic.contribute(method.name, method.returns, method.params)

        return True

    @override
    def sql_map_document_generated(self, document: Document, table: TableInfo) -> bool:
        document.root.add(*self.build_elements(table))
        return True

    @abc.abstractmethod
    def build_methods(self, generic: GenericInterfaceContext) -> t.Iterable[MethodInfo]:
        raise NotImplementedError

    @abc.abstractmethod
    def build_elements(self, table: TableInfo) -> t.Iterable[XmlElement]:
        raise NotImplementedError
