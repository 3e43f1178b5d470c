import io
import typing as t

from genmapper._typing import override
from genmapper.java.model import (
    ClassInfo,
    CompilationUnit,
    FieldInfo,
    InterfaceInfo,
    JavaType,
    MethodInfo,
    ParameterInfo,
    Visitor,
)


class JavaPrinter(Visitor):
    def __init__(self, dest: t.IO[str]) -> None:
        self.__dest = dest
        self.__in_interface = False

    @override
    def visit_interface(self, info: InterfaceInfo) -> None:
        self.__write_header(info)

        extends = self.__join_types(info.super_interfaces)
        self.__write_line(
            f"{self.__visibility_prefix(info.visibility)}interface {info.type_.short_name}"
            + (f" extends {extends}" if extends else "")
            + " {"
        )

        self.__in_interface = True
        self.__write_members(info.methods)
        self.__in_interface = False

        self.__write_line("}")

    @override
    def visit_class(self, info: ClassInfo) -> None:
        self.__write_header(info)

        with io.StringIO() as ss:
            ss.write(f"{self.__visibility_prefix(info.visibility)}class {info.type_.short_name}")

            if info.super_class is not None:
                ss.write(f" extends {info.super_class.short_name}")

            if info.super_interfaces:
                ss.write(f" implements {self.__join_types(info.super_interfaces)}")

            ss.write(" {")
            self.__write_line(ss.getvalue())

        for field in info.fields:
            field.accept(self)

        if info.fields and info.methods:
            self.__write_new_line()

        self.__write_members(info.methods)
        self.__write_line("}")

    @override
    def visit_method(self, info: MethodInfo) -> None:
        for annotation in info.annotations:
            self.__write_line(annotation, 1)

        with io.StringIO() as ss:
            if not self.__in_interface:
                ss.write(self.__visibility_prefix(info.visibility))

            if info.returns is not None:
                ss.write(f"{info.returns.short_name} ")

            ss.write(f"{info.name}({', '.join(self.__format_param(param) for param in info.params)})")

            if self.__in_interface and not info.body:
                ss.write(";")
                self.__write_line(ss.getvalue(), 1)
                return

            ss.write(" {")
            self.__write_line(ss.getvalue(), 1)

        for line in info.body:
            self.__write_line(line, 2)

        self.__write_line("}", 1)

    @override
    def visit_field(self, info: FieldInfo) -> None:
        initializer = f" = {info.initializer}" if info.initializer is not None else ""
        self.__write_line(
            f"{self.__visibility_prefix(info.visibility)}{info.type_.short_name} {info.name}{initializer};",
            1,
        )

    def __write_header(self, info: CompilationUnit) -> None:
        if info.type_.package is not None:
            self.__write_line(f"package {info.type_.package};")
            self.__write_new_line()

        imports = sorted(imported.qualname for imported in info.imports)
        for imported in imports:
            self.__write_line(f"import {imported};")

        if imports:
            self.__write_new_line()

    def __write_members(self, methods: t.Sequence[MethodInfo]) -> None:
        for i, method in enumerate(methods):
            if i > 0:
                self.__write_new_line()

            method.accept(self)

    def __write_line(self, line: str, indent: int = 0) -> None:
        self.__write_indent(indent)
        self.__dest.write(line)
        self.__write_new_line()

    def __write_indent(self, indent: int) -> None:
        self.__dest.write(" " * 4 * indent)

    def __write_new_line(self) -> None:
        self.__dest.write("\n")

    def __format_param(self, param: ParameterInfo) -> str:
        return " ".join((*param.annotations, param.type_.short_name, param.name))

    def __join_types(self, types: t.Sequence[JavaType]) -> str:
        return ", ".join(type_.short_name for type_ in types)

    def __visibility_prefix(self, visibility: str) -> str:
        return f"{visibility} " if visibility != "default" else ""


def render_java(info: CompilationUnit) -> str:
    with io.StringIO() as ss:
        info.accept(JavaPrinter(ss))
        return ss.getvalue()
