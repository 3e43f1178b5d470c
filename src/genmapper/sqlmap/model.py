from __future__ import annotations

__all__ = [
    "Attribute",
    "Document",
    "Node",
    "TextElement",
    "Visitable",
    "Visitor",
    "XmlElement",
]

import abc
import typing as t
from dataclasses import dataclass, field

from genmapper._typing import Self, TypeAlias, override

MYBATIS3_MAPPER_PUBLIC_ID: t.Final[str] = "-//mybatis.org//DTD Mapper 3.0//EN"
MYBATIS3_MAPPER_SYSTEM_ID: t.Final[str] = "http://mybatis.org/dtd/mybatis-3-mapper.dtd"


class Visitable(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def accept(self, visitor: Visitor) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class Attribute:
    name: str
    value: str


@dataclass(frozen=True)
class TextElement(Visitable):
    content: str

    @override
    def accept(self, visitor: Visitor) -> None:
        visitor.visit_text(self)


@dataclass
class XmlElement(Visitable):
    name: str
    attributes: list[Attribute] = field(default_factory=list)
    elements: list[Node] = field(default_factory=list)

    def attr(self, name: str, value: str) -> Self:
        self.attributes.append(Attribute(name=name, value=value))
        return self

    def text(self, *contents: str) -> Self:
        self.elements.extend(TextElement(content) for content in contents)
        return self

    def add(self, *elements: Node) -> Self:
        self.elements.extend(elements)
        return self

    def get_attribute(self, name: str) -> t.Optional[str]:
        return next((attr.value for attr in self.attributes if attr.name == name), None)

    def find_all(self, name: str) -> t.Iterator[XmlElement]:
        for element in self.elements:
            if isinstance(element, XmlElement):
                if element.name == name:
                    yield element

                yield from element.find_all(name)

    def find_by_id(self, id_: str) -> t.Optional[XmlElement]:
        return next(
            (
                element
                for element in self.elements
                if isinstance(element, XmlElement) and element.get_attribute("id") == id_
            ),
            None,
        )

    def iter_texts(self) -> t.Iterator[str]:
        for element in self.elements:
            if isinstance(element, TextElement):
                yield element.content

            else:
                yield from element.iter_texts()

    @override
    def accept(self, visitor: Visitor) -> None:
        visitor.visit_element(self)


Node: TypeAlias = t.Union[XmlElement, TextElement]


@dataclass
class Document(Visitable):
    root: XmlElement
    public_id: str = MYBATIS3_MAPPER_PUBLIC_ID
    system_id: str = MYBATIS3_MAPPER_SYSTEM_ID

    @override
    def accept(self, visitor: Visitor) -> None:
        visitor.visit_document(self)


class Visitor(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def visit_document(self, document: Document) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def visit_element(self, element: XmlElement) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def visit_text(self, element: TextElement) -> None:
        raise NotImplementedError
