import typing as t

from genmapper.generic.synthesizer import GenericInterfaceSynthesizer
from genmapper.java.model import JavaType, ParameterInfo


class GenericInterfaceContext:
    """
    A handle of the active generic interface for plugins that contribute extra methods into it.

    Plugins may read generic type parameters, check and add methods; the registry of contributed names is not exposed.
    """

    def __init__(self, synthesizer: GenericInterfaceSynthesizer) -> None:
        self.__synthesizer = synthesizer

    @property
    def interface_type(self) -> JavaType:
        return self.__synthesizer.interface_type

    @property
    def example_enabled(self) -> bool:
        return self.__synthesizer.example_enabled

    @property
    def type_params(self) -> tuple[JavaType, ...]:
        return self.__synthesizer.type_params

    @property
    def model(self) -> JavaType:
        return self.__synthesizer.model

    @property
    def example(self) -> JavaType:
        return self.__synthesizer.example

    @property
    def id_(self) -> JavaType:
        return self.__synthesizer.id_

    @property
    def model_list(self) -> JavaType:
        return self.__synthesizer.model_list

    def has_contributed(self, name: str) -> bool:
        return self.__synthesizer.has_contributed(name)

    def contribute(self, name: str, returns: t.Optional[JavaType], params: t.Sequence[ParameterInfo]) -> bool:
        return self.__synthesizer.contribute(name, returns, params)
