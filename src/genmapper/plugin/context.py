from __future__ import annotations

import typing as t

from genmapper.errors import DependencyError

if t.TYPE_CHECKING:
    from genmapper.generic.protocol import GenericInterfaceContext


class PluginContext:
    """
    Run-wide state shared by all plugins of one generation run.

    The context is created once per run and injected into every plugin, it keeps host settings and the handle of the
    active generic interface (if any plugin provides it).
    """

    def __init__(
        self,
        *,
        java_target_project: str = "src/main/java",
        xml_target_project: str = "src/main/resources",
    ) -> None:
        self.java_target_project: t.Final[str] = java_target_project
        self.xml_target_project: t.Final[str] = xml_target_project
        self.__generic_interface: t.Optional[GenericInterfaceContext] = None

    def register_generic_interface(self, generic: GenericInterfaceContext) -> None:
        if self.__generic_interface is not None:
            msg = "generic interface is already registered in this run"
            raise RuntimeError(msg, self.__generic_interface.interface_type)

        self.__generic_interface = generic

    def lookup(self) -> t.Optional[GenericInterfaceContext]:
        return self.__generic_interface

    def require_generic_interface(self) -> GenericInterfaceContext:
        generic = self.lookup()
        if generic is None:
            msg = "generic interface plugin is not enabled"
            raise DependencyError(msg)

        return generic
