import typing as t
from dataclasses import dataclass
from functools import cached_property

from genmapper._typing import assert_never, override
from genmapper.errors import BindingError, ConfigError
from genmapper.generator.model import ClientMethodKind, GeneratedFile
from genmapper.generic.binder import MapperBinder
from genmapper.generic.protocol import GenericInterfaceContext
from genmapper.generic.synthesizer import GenericInterfaceSynthesizer
from genmapper.java.model import ClassInfo, CompilationUnit, InterfaceInfo, JavaType, MethodInfo, predef
from genmapper.plugin.abc import Plugin, is_true
from genmapper.plugin.context import PluginContext
from genmapper.table.model import TableInfo

BindRole = t.Literal["model", "result", "id", "example"]


@dataclass(frozen=True)
class _GenericMethodRule:
    returns: t.Optional[JavaType]
    substitutions: tuple[JavaType, ...] = ()
    example_only: bool = False
    binds: tuple[BindRole, ...] = ()
    whole_key: bool = False


class GenericInterfacePlugin(Plugin):
    """
    Create one generic interface for all mappers.

    Properties:

    * `interface` -- fully qualified name of the generic interface (required)
    * `example` -- `true` to add `Example` type parameter and example based methods (all tables must generate
      examples then)

    Base mapper methods are moved into the generic interface, every table mapper extends the interface instantiated
    with the table model, example & primary key types. The plugin must be configured before the plugins contributing
    into the generic interface.
    """

    INTERFACE: t.Final[str] = "interface"
    EXAMPLE: t.Final[str] = "example"

    def __init__(self, context: PluginContext, properties: t.Optional[t.Mapping[str, str]] = None) -> None:
        super().__init__(context, properties)
        self.__synthesizer = GenericInterfaceSynthesizer()
        self.__binder: t.Optional[MapperBinder] = None

    @property
    def synthesizer(self) -> GenericInterfaceSynthesizer:
        return self.__synthesizer

    @override
    def validate(self, warnings: list[str]) -> bool:
        registered = self.context.lookup()
        if registered is not None:
            warnings.append(
                f"Generic interface {registered.interface_type} is already registered, plugin {self.name} is skipped"
            )
            return False

        try:
            self.__synthesizer.initialize(
                interface_name=self.properties.get(self.INTERFACE),
                example_enabled=is_true(self.properties.get(self.EXAMPLE)),
            )

        except ConfigError:
            warnings.append(f"Property {self.INTERFACE} not set for plugin {self.name}")
            return False

        self.__binder = MapperBinder(
            self.__synthesizer.interface_type,
            example_enabled=self.__synthesizer.example_enabled,
        )
        self.context.register_generic_interface(GenericInterfaceContext(self.__synthesizer))

        return True

    @override
    def client_method_generated(
        self,
        kind: ClientMethodKind,
        method: MethodInfo,
        target: CompilationUnit,
        table: TableInfo,
    ) -> bool:
        rule = self.__rules[kind]
        if rule.example_only and not self.__synthesizer.example_enabled:
            return True

        # NOTE: by key methods of multi column keys without key class keep table specific signature
        if rule.whole_key and len(method.params) != len(rule.substitutions):
            return True

        binder = self.__require_binder()
        self.__bind(binder, rule, method, table)
        self.__synthesizer.contribute(method.name, rule.returns, method.params, rule.substitutions)

        # NOTE: implementation classes keep the method, it implements the generic one
        if isinstance(target, ClassInfo):
            method.add_annotation("@Override")
            return True

        binder.withhold(table, method)

        return False

    @override
    def client_generated(self, interface: InterfaceInfo, impl: t.Optional[ClassInfo], table: TableInfo) -> bool:
        binder = self.__require_binder()

        try:
            binder.attach(table, interface)

        # NOTE: the table lacks some of base methods, so it keeps its own methods and doesn't extend the generic one
        except BindingError:
            for method in binder.release(table):
                interface.add_method(method)

        return True

    @override
    def context_generate_additional_files(self) -> t.Sequence[GeneratedFile]:
        return [self.__synthesizer.finalize_and_emit(self.context.java_target_project)]

    def __bind(self, binder: MapperBinder, rule: _GenericMethodRule, method: MethodInfo, table: TableInfo) -> None:
        for role in rule.binds:
            if role == "model":
                if method.params:
                    binder.bind_insert(table, method.params[0].type_)

            elif role == "result":
                if method.returns is not None:
                    binder.bind_insert(table, method.returns)

            # NOTE: tables with multiple key columns and without key class have no single `Id` type
            elif role == "id":
                if len(method.params) == 1:
                    binder.bind_delete(table, method.params[0].type_)

            elif role == "example":
                if method.params:
                    binder.bind_count_or_delete(table, method.params[0].type_)

            else:
                assert_never(role)

    def __require_binder(self) -> MapperBinder:
        if self.__binder is None:
            msg = "plugin was not validated"
            raise RuntimeError(msg, self.name)

        return self.__binder

    @cached_property
    def __rules(self) -> t.Mapping[ClientMethodKind, _GenericMethodRule]:
        synth = self.__synthesizer
        int_ = predef().int

        return {
            "count_by_example": _GenericMethodRule(
                returns=predef().long,
                substitutions=(synth.example,),
                example_only=True,
                binds=("example",),
            ),
            "delete_by_example": _GenericMethodRule(
                returns=int_,
                substitutions=(synth.example,),
                example_only=True,
                binds=("example",),
            ),
            "delete_by_primary_key": _GenericMethodRule(
                returns=int_,
                substitutions=(synth.id_,),
                binds=("id",),
                whole_key=True,
            ),
            "insert": _GenericMethodRule(returns=int_, substitutions=(synth.model,), binds=("model",)),
            "insert_selective": _GenericMethodRule(returns=int_, substitutions=(synth.model,), binds=("model",)),
            "select_all": _GenericMethodRule(returns=synth.model_list),
            "select_by_example": _GenericMethodRule(
                returns=synth.model_list,
                substitutions=(synth.example,),
                example_only=True,
            ),
            "select_by_example_with_blobs": _GenericMethodRule(
                returns=synth.model_list,
                substitutions=(synth.example,),
                example_only=True,
            ),
            "select_by_primary_key": _GenericMethodRule(
                returns=synth.model,
                substitutions=(synth.id_,),
                binds=("result", "id"),
                whole_key=True,
            ),
            "update_by_example": _GenericMethodRule(
                returns=int_,
                substitutions=(synth.model, synth.example),
                example_only=True,
            ),
            "update_by_example_selective": _GenericMethodRule(
                returns=int_,
                substitutions=(synth.model, synth.example),
                example_only=True,
            ),
            "update_by_example_with_blobs": _GenericMethodRule(
                returns=int_,
                substitutions=(synth.model, synth.example),
                example_only=True,
            ),
            "update_by_primary_key": _GenericMethodRule(returns=int_, substitutions=(synth.model,)),
            "update_by_primary_key_selective": _GenericMethodRule(returns=int_, substitutions=(synth.model,)),
            "update_by_primary_key_with_blobs": _GenericMethodRule(returns=int_, substitutions=(synth.model,)),
        }
