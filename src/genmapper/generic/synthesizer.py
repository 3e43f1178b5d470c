import typing as t
from copy import deepcopy
from dataclasses import replace
from operator import attrgetter

from genmapper.errors import ConfigError
from genmapper.generator.model import GeneratedJavaFile
from genmapper.java.model import InterfaceInfo, JavaType, MethodInfo, ParameterInfo, predef

GENERIC_MODEL: t.Final[JavaType] = JavaType("Model")
GENERIC_EXAMPLE: t.Final[JavaType] = JavaType("Example")
GENERIC_ID: t.Final[JavaType] = JavaType("Id")


class GenericInterfaceSynthesizer:
    """
    Owns the one generic interface shared by all mappers of a generation run.

    Table specific method signatures are translated into the generic form (`Model`, `Example`, `Id` type variables)
    and registered once per method name, no matter how many tables (or how many equivalent hook calls for one table)
    contribute the same method.
    """

    def __init__(self) -> None:
        self.__interface: t.Optional[InterfaceInfo] = None
        self.__example_enabled = False
        self.__contributed = set[str]()

    def initialize(self, interface_name: t.Optional[str], example_enabled: bool) -> None:
        if self.__interface is not None:
            msg = "generic interface is already initialized"
            raise RuntimeError(msg, self.__interface.type_)

        if not interface_name:
            msg = "generic interface name is required"
            raise ConfigError(msg, interface_name)

        type_params = (GENERIC_MODEL, GENERIC_EXAMPLE, GENERIC_ID) if example_enabled else (GENERIC_MODEL, GENERIC_ID)

        self.__interface = InterfaceInfo(type_=JavaType.build(interface_name, *type_params))
        self.__example_enabled = example_enabled
        self.__contributed.clear()

    @property
    def is_initialized(self) -> bool:
        return self.__interface is not None

    @property
    def example_enabled(self) -> bool:
        return self.__example_enabled

    @property
    def interface_type(self) -> JavaType:
        """Generic interface type without type arguments, e.g. `com.example.BaseMapper`."""
        return self.__require_interface().type_.raw

    @property
    def type_params(self) -> tuple[JavaType, ...]:
        return self.__require_interface().type_.type_args

    @property
    def model(self) -> JavaType:
        return GENERIC_MODEL

    @property
    def example(self) -> JavaType:
        return GENERIC_EXAMPLE

    @property
    def id_(self) -> JavaType:
        return GENERIC_ID

    @property
    def model_list(self) -> JavaType:
        return predef().list.parametrize(GENERIC_MODEL)

    def has_contributed(self, name: str) -> bool:
        return name in self.__contributed

    def contribute(
        self,
        name: str,
        returns: t.Optional[JavaType],
        params: t.Sequence[ParameterInfo],
        substitutions: t.Sequence[t.Optional[JavaType]] = (),
    ) -> bool:
        """
        Add method to the generic interface unless a method with the same name was already contributed.

        :name: method name, unique within the generic interface
        :returns: generic return type
        :params: method parameters (concrete types of the contributing table are allowed)
        :substitutions: positional parameter type replacements, `None` (or a missing item) keeps the parameter type
        :return: `True` if the method was added
        """

        interface = self.__require_interface()
        if name in self.__contributed:
            return False

        interface.add_method(
            MethodInfo(
                name=name,
                returns=returns,
                params=[
                    replace(param, type_=substitutions[i])
                    if i < len(substitutions) and substitutions[i] is not None
                    else param
                    for i, param in enumerate(params)
                ],
            )
        )
        self.__contributed.add(name)

        return True

    def finalize_and_emit(self, target_project: str) -> GeneratedJavaFile:
        interface = deepcopy(self.__require_interface())
        interface.methods.sort(key=attrgetter("name"))

        if self.__example_enabled:
            interface.add_import(predef().list)

        return GeneratedJavaFile(unit=interface, target_project=target_project)

    def __require_interface(self) -> InterfaceInfo:
        if self.__interface is None:
            msg = "generic interface is not initialized"
            raise RuntimeError(msg)

        return self.__interface
