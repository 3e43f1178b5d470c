import io
import typing as t
from xml.sax.saxutils import escape, quoteattr

from genmapper._typing import override
from genmapper.sqlmap.model import Document, TextElement, Visitor, XmlElement


class XmlPrinter(Visitor):
    def __init__(self, dest: t.IO[str]) -> None:
        self.__dest = dest
        self.__indent = 0

    @override
    def visit_document(self, document: Document) -> None:
        self.__write_line('<?xml version="1.0" encoding="UTF-8"?>')
        self.__write_line(
            f'<!DOCTYPE {document.root.name} PUBLIC "{document.public_id}" "{document.system_id}">',
        )
        document.root.accept(self)

    @override
    def visit_element(self, element: XmlElement) -> None:
        attrs = "".join(f" {attr.name}={quoteattr(attr.value)}" for attr in element.attributes)

        if not element.elements:
            self.__write_line(f"<{element.name}{attrs} />")
            return

        self.__write_line(f"<{element.name}{attrs}>")

        self.__indent += 1
        for child in element.elements:
            child.accept(self)
        self.__indent -= 1

        self.__write_line(f"</{element.name}>")

    @override
    def visit_text(self, element: TextElement) -> None:
        self.__write_line(escape(element.content))

    def __write_line(self, line: str) -> None:
        self.__dest.write("  " * self.__indent)
        self.__dest.write(line)
        self.__dest.write("\n")


def render_xml(document: Document) -> str:
    with io.StringIO() as ss:
        document.accept(XmlPrinter(ss))
        return ss.getvalue()
