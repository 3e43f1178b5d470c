"""Reusable MyBatis sql map fragments."""

from genmapper.sqlmap.model import XmlElement
from genmapper.table.model import ColumnInfo, GeneratedKeyInfo


def if_(test: str, *texts: str) -> XmlElement:
    return XmlElement("if").attr("test", test).text(*texts)


def include(refid: str) -> XmlElement:
    return XmlElement("include").attr("refid", refid)


def example_where(refid: str) -> XmlElement:
    """Conditional include of the example where clause (`_parameter` is the statement argument)."""
    return XmlElement("if").attr("test", "_parameter != null").add(include(refid))


def limit_clause(prefix: str = "") -> XmlElement:
    """
    Build optional `limit` clause.

    Renders `limit ${limit}` when only limit is set and `limit ${offset}, ${limit}` when offset is set too.
    """

    return (
        XmlElement("if")
        .attr("test", f"{prefix}limit != null")
        .add(
            XmlElement("choose").add(
                XmlElement("when")
                .attr("test", f"{prefix}offset != null")
                .text(f"limit ${{{prefix}offset}}, ${{{prefix}limit}}"),
                XmlElement("otherwise").text(f"limit ${{{prefix}limit}}"),
            )
        )
    )


def select_key(column: ColumnInfo, key: GeneratedKeyInfo, prefix: str = "") -> XmlElement:
    return (
        XmlElement("selectKey")
        .attr("resultType", column.java_type.qualname)
        .attr("keyProperty", f"{prefix}{column.java_property}")
        .attr("order", key.order)
        .text(key.runtime_statement or "")
    )
