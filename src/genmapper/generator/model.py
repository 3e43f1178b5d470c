from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from genmapper._typing import TypeAlias
from genmapper.java.model import CompilationUnit
from genmapper.java.printer import render_java
from genmapper.sqlmap.model import Document
from genmapper.sqlmap.printer import render_xml

if t.TYPE_CHECKING:
    from genmapper.table.model import TableInfo

ClientStyle = t.Literal["mapper", "dao"]

ClientMethodKind = t.Literal[
    "count_by_example",
    "delete_by_example",
    "delete_by_primary_key",
    "insert",
    "insert_selective",
    "select_all",
    "select_by_example",
    "select_by_example_with_blobs",
    "select_by_primary_key",
    "update_by_example",
    "update_by_example_selective",
    "update_by_example_with_blobs",
    "update_by_primary_key",
    "update_by_primary_key_selective",
    "update_by_primary_key_with_blobs",
]

SqlMapFragmentKind = t.Literal[
    "result_map",
    "result_map_with_blobs",
    "example_where_clause",
    "update_by_example_where_clause",
    "base_column_list",
    "blob_column_list",
]

SqlMapElementKind: TypeAlias = t.Union[ClientMethodKind, SqlMapFragmentKind]

STATEMENT_IDS: t.Final[t.Mapping[ClientMethodKind, str]] = {
    "count_by_example": "countByExample",
    "delete_by_example": "deleteByExample",
    "delete_by_primary_key": "deleteByPrimaryKey",
    "insert": "insert",
    "insert_selective": "insertSelective",
    "select_all": "selectAll",
    "select_by_example": "selectByExample",
    "select_by_example_with_blobs": "selectByExampleWithBLOBs",
    "select_by_primary_key": "selectByPrimaryKey",
    "update_by_example": "updateByExample",
    "update_by_example_selective": "updateByExampleSelective",
    "update_by_example_with_blobs": "updateByExampleWithBLOBs",
    "update_by_primary_key": "updateByPrimaryKey",
    "update_by_primary_key_selective": "updateByPrimaryKeySelective",
    "update_by_primary_key_with_blobs": "updateByPrimaryKeyWithBLOBs",
}


@dataclass(frozen=True)
class GeneratedJavaFile:
    unit: CompilationUnit
    target_project: str

    @property
    def path(self) -> PurePosixPath:
        type_ = self.unit.type_
        package = type_.package.split(".") if type_.package is not None else []
        return PurePosixPath(self.target_project, *package, f"{type_.simple_name}.java")

    def render(self) -> str:
        return render_java(self.unit)


@dataclass(frozen=True)
class GeneratedXmlFile:
    document: Document
    file_name: str
    target_package: t.Optional[str]
    target_project: str

    @property
    def path(self) -> PurePosixPath:
        package = self.target_package.split(".") if self.target_package else []
        return PurePosixPath(self.target_project, *package, self.file_name)

    def render(self) -> str:
        return render_xml(self.document)


GeneratedFile: TypeAlias = t.Union[GeneratedJavaFile, GeneratedXmlFile]


@dataclass(frozen=True)
class GeneratorContext:
    tables: t.Sequence[TableInfo]
    output: Path
    example: bool = True
    style: ClientStyle = "mapper"


@dataclass(frozen=True)
class GeneratorResult:
    @dataclass(frozen=True)
    class File:
        path: Path
        content: str

    files: t.Sequence[File]
    warnings: t.Sequence[str] = field(default_factory=tuple)
