from __future__ import annotations

__all__ = [
    "ClassInfo",
    "CompilationUnit",
    "FieldInfo",
    "InterfaceInfo",
    "JavaType",
    "MethodInfo",
    "ParameterInfo",
    "Visibility",
    "Visitable",
    "Visitor",
    "predef",
]

import abc
import typing as t
from dataclasses import dataclass, field, replace
from functools import cache

from genmapper._typing import TypeAlias, override

Visibility = t.Literal["public", "protected", "private", "default"]

_PRIMITIVE_WRAPPERS: t.Final[t.Mapping[str, str]] = {
    "boolean": "java.lang.Boolean",
    "byte": "java.lang.Byte",
    "char": "java.lang.Character",
    "short": "java.lang.Short",
    "int": "java.lang.Integer",
    "long": "java.lang.Long",
    "float": "java.lang.Float",
    "double": "java.lang.Double",
}


@dataclass(frozen=True)
class JavaType:
    """
    Java type reference.

    `qualname` is a fully qualified name (`com.example.User`), a primitive (`int`), an array (`byte[]`) or a type
    variable (`Model`). Names without a package never need an import.
    """

    qualname: str
    type_args: tuple[JavaType, ...] = ()

    @classmethod
    def build(cls, qualname: str, *type_args: JavaType) -> JavaType:
        return cls(qualname=qualname, type_args=type_args)

    def parametrize(self, *type_args: JavaType) -> JavaType:
        return replace(self, type_args=type_args)

    @property
    def raw(self) -> JavaType:
        return replace(self, type_args=()) if self.type_args else self

    @property
    def package(self) -> t.Optional[str]:
        package, sep, _ = self.qualname.rpartition(".")
        return package if sep else None

    @property
    def simple_name(self) -> str:
        return self.qualname.rpartition(".")[2]

    @property
    def short_name(self) -> str:
        if not self.type_args:
            return self.simple_name

        return f"{self.simple_name}<{', '.join(arg.short_name for arg in self.type_args)}>"

    @property
    def is_primitive(self) -> bool:
        return self.qualname in _PRIMITIVE_WRAPPERS

    @property
    def wrapper(self) -> JavaType:
        wrapper = _PRIMITIVE_WRAPPERS.get(self.qualname)
        return JavaType(wrapper) if wrapper is not None else self

    def iter_imports(self) -> t.Iterator[JavaType]:
        if self.package is not None and self.package != "java.lang":
            yield self.raw

        for arg in self.type_args:
            yield from arg.iter_imports()

    @override
    def __str__(self) -> str:
        if not self.type_args:
            return self.qualname

        return f"{self.qualname}<{', '.join(str(arg) for arg in self.type_args)}>"


@dataclass(frozen=True)
class _Predef:
    void: JavaType = JavaType("void")
    int: JavaType = JavaType("int")
    long: JavaType = JavaType("long")
    boolean: JavaType = JavaType("boolean")
    integer: JavaType = JavaType("java.lang.Integer")
    string: JavaType = JavaType("java.lang.String")
    object: JavaType = JavaType("java.lang.Object")
    list: JavaType = JavaType("java.util.List")
    array_list: JavaType = JavaType("java.util.ArrayList")
    map: JavaType = JavaType("java.util.Map")
    hash_map: JavaType = JavaType("java.util.HashMap")
    param: JavaType = JavaType("org.apache.ibatis.annotations.Param")
    sql_session: JavaType = JavaType("org.apache.ibatis.session.SqlSession")


@cache
def predef() -> _Predef:
    return _Predef()


class Visitable(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def accept(self, visitor: Visitor) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class ParameterInfo:
    name: str
    type_: JavaType
    annotations: tuple[str, ...] = ()


@dataclass
class MethodInfo(Visitable):
    name: str
    returns: t.Optional[JavaType] = None
    params: list[ParameterInfo] = field(default_factory=list)
    annotations: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    visibility: Visibility = "public"

    def add_annotation(self, annotation: str) -> None:
        if annotation not in self.annotations:
            self.annotations.append(annotation)

    def iter_imports(self) -> t.Iterator[JavaType]:
        if self.returns is not None:
            yield from self.returns.iter_imports()

        for param in self.params:
            yield from param.type_.iter_imports()

            if any(annotation.startswith("@Param(") for annotation in param.annotations):
                yield predef().param

    @override
    def accept(self, visitor: Visitor) -> None:
        visitor.visit_method(self)


@dataclass(frozen=True)
class FieldInfo(Visitable):
    name: str
    type_: JavaType
    visibility: Visibility = "private"
    initializer: t.Optional[str] = None

    @override
    def accept(self, visitor: Visitor) -> None:
        visitor.visit_field(self)


@dataclass
class _BaseUnit:
    type_: JavaType
    super_interfaces: list[JavaType] = field(default_factory=list)
    imports: set[JavaType] = field(default_factory=set)
    methods: list[MethodInfo] = field(default_factory=list)
    visibility: Visibility = "public"

    def add_import(self, type_: JavaType) -> None:
        for imported in type_.iter_imports():
            if imported.package != self.type_.package:
                self.imports.add(imported)

    def add_super_interface(self, type_: JavaType) -> None:
        if type_ not in self.super_interfaces:
            self.super_interfaces.append(type_)
            self.add_import(type_)

    def add_method(self, method: MethodInfo) -> None:
        self.methods.append(method)

        for imported in method.iter_imports():
            self.add_import(imported)

    def get_method(self, name: str) -> t.Optional[MethodInfo]:
        return next((method for method in self.methods if method.name == name), None)


@dataclass
class InterfaceInfo(_BaseUnit, Visitable):
    @override
    def accept(self, visitor: Visitor) -> None:
        visitor.visit_interface(self)


@dataclass
class ClassInfo(_BaseUnit, Visitable):
    super_class: t.Optional[JavaType] = None
    fields: list[FieldInfo] = field(default_factory=list)

    def add_field(self, info: FieldInfo) -> None:
        self.fields.append(info)
        self.add_import(info.type_)

    def set_super_class(self, type_: JavaType) -> None:
        self.super_class = type_
        self.add_import(type_)

    @override
    def accept(self, visitor: Visitor) -> None:
        visitor.visit_class(self)


CompilationUnit: TypeAlias = t.Union[InterfaceInfo, ClassInfo]


class Visitor(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def visit_interface(self, info: InterfaceInfo) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def visit_class(self, info: ClassInfo) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def visit_method(self, info: MethodInfo) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def visit_field(self, info: FieldInfo) -> None:
        raise NotImplementedError
