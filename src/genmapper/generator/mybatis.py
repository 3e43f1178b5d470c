import typing as t
import warnings

from genmapper._typing import override
from genmapper.generator.abc import CodeGenerator
from genmapper.generator.client import ClientBuilder, iter_client_method_kinds
from genmapper.generator.model import (
    GeneratedFile,
    GeneratedJavaFile,
    GeneratedXmlFile,
    GeneratorContext,
    GeneratorResult,
    SqlMapElementKind,
)
from genmapper.generator.sqlmap import SQL_MAP_ELEMENT_ORDER, SqlMapBuilder, iter_sql_map_fragment_kinds
from genmapper.java.model import ClassInfo, MethodInfo, predef
from genmapper.plugin.abc import Plugin
from genmapper.plugin.aggregator import PluginAggregator
from genmapper.plugin.context import PluginContext
from genmapper.table.model import TableInfo


class MapperCodeGenerator(CodeGenerator):
    """
    Generates MyBatis 3 model classes, client (mapper / dao) and sql map files for every table.

    Plugins are validated at the beginning of `generate` and keep their state until the end of the run, so the
    generator (as well as the plugins and their context) serves one run only.
    """

    def __init__(self, plugins: t.Sequence[Plugin], context: PluginContext) -> None:
        self.__plugins = PluginAggregator(plugins)
        self.__context = context

    @override
    def generate(self, context: GeneratorContext) -> GeneratorResult:
        messages = self.__plugins.validate()
        for message in messages:
            warnings.warn(message, RuntimeWarning)

        files = list[GeneratedFile]()
        for table in context.tables:
            files.extend(self.__generate_table(context, table))

        files.extend(self.__plugins.context_generate_additional_files())

        return GeneratorResult(
            files=[
                GeneratorResult.File(
                    path=context.output.joinpath(file.path),
                    content=file.render(),
                )
                for file in files
            ],
            warnings=tuple(messages),
        )

    def __generate_table(self, context: GeneratorContext, table: TableInfo) -> t.Iterable[GeneratedFile]:
        self.__plugins.initialized(table)

        yield from self.__generate_model(context, table)
        yield from self.__generate_client(context, table)
        yield from self.__generate_sql_map(context, table)

    def __generate_model(self, context: GeneratorContext, table: TableInfo) -> t.Iterable[GeneratedFile]:
        builder = ClientBuilder(table)
        project = self.__context.java_target_project

        key = builder.build_primary_key_class()
        if key is not None and self.__plugins.model_primary_key_class_generated(key, table):
            yield GeneratedJavaFile(unit=key, target_project=project)

        record = builder.build_record_class()
        if self.__plugins.model_record_class_generated(record, table):
            yield GeneratedJavaFile(unit=record, target_project=project)

        if context.example:
            example = builder.build_example_class()
            if self.__plugins.model_example_class_generated(example, table):
                yield GeneratedJavaFile(unit=example, target_project=project)

    def __generate_client(self, context: GeneratorContext, table: TableInfo) -> t.Iterable[GeneratedFile]:
        builder = ClientBuilder(table)
        project = self.__context.java_target_project

        interface = builder.build_interface()
        impl = builder.build_impl_class(interface) if context.style == "dao" else None

        for kind in iter_client_method_kinds(table, example=context.example):
            method = builder.build_method(kind)
            if self.__plugins.client_method_generated(kind, method, interface, table):
                interface.add_method(method)

            # NOTE: dao style fires method hooks once more, for the implementation
            if impl is not None:
                impl_method = builder.build_impl_method(kind, method)
                if self.__plugins.client_method_generated(kind, impl_method, impl, table):
                    self.__add_impl_method(impl, impl_method)

        if not self.__plugins.client_generated(interface, impl, table):
            return

        yield GeneratedJavaFile(unit=interface, target_project=project)

        if impl is not None:
            yield GeneratedJavaFile(unit=impl, target_project=project)

    def __generate_sql_map(self, context: GeneratorContext, table: TableInfo) -> t.Iterable[GeneratedFile]:
        builder = SqlMapBuilder(table)
        document = builder.build_document()

        kinds = set[SqlMapElementKind]()
        kinds.update(iter_sql_map_fragment_kinds(table, example=context.example))
        kinds.update(iter_client_method_kinds(table, example=context.example))

        for kind in SQL_MAP_ELEMENT_ORDER:
            if kind not in kinds:
                continue

            element = builder.build_element(kind)
            if self.__plugins.sql_map_element_generated(kind, element, table):
                document.root.add(element)

        if self.__plugins.sql_map_document_generated(document, table):
            yield GeneratedXmlFile(
                document=document,
                file_name=f"{table.mapper_type.simple_name}.xml",
                target_package=table.sql_map_package,
                target_project=self.__context.xml_target_project,
            )

    def __add_impl_method(self, impl: ClassInfo, method: MethodInfo) -> None:
        impl.add_method(method)

        if len(method.params) > 1:
            impl.add_import(predef().map)
            impl.add_import(predef().hash_map)
