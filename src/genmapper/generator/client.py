import typing as t
from dataclasses import replace

from genmapper._typing import assert_never
from genmapper.generator.model import STATEMENT_IDS, ClientMethodKind
from genmapper.java.model import ClassInfo, FieldInfo, InterfaceInfo, JavaType, MethodInfo, ParameterInfo, predef
from genmapper.table.model import ColumnInfo, TableInfo

CLIENT_METHOD_ORDER: t.Final[t.Sequence[ClientMethodKind]] = (
    "insert",
    "insert_selective",
    "select_by_primary_key",
    "select_all",
    "delete_by_primary_key",
    "update_by_primary_key_selective",
    "update_by_primary_key_with_blobs",
    "update_by_primary_key",
    "count_by_example",
    "delete_by_example",
    "select_by_example",
    "select_by_example_with_blobs",
    "update_by_example_selective",
    "update_by_example_with_blobs",
    "update_by_example",
)

_SessionCall = t.Literal["selectList", "selectOne", "insert", "update", "delete"]


def iter_client_method_kinds(table: TableInfo, *, example: bool) -> t.Iterator[ClientMethodKind]:
    """Client methods the table supports, in generation order."""

    updatable = [column for column in table.non_primary_key_columns if not column.generated_always]
    has_base_updatable = any(not column.is_blob for column in updatable)

    for kind in CLIENT_METHOD_ORDER:
        if kind in {"insert", "insert_selective", "select_all"}:
            yield kind

        elif kind in {"select_by_primary_key", "delete_by_primary_key"}:
            if table.has_primary_key:
                yield kind

        elif kind == "update_by_primary_key_selective":
            if table.has_primary_key and updatable:
                yield kind

        elif kind == "update_by_primary_key":
            if table.has_primary_key and has_base_updatable:
                yield kind

        elif kind == "update_by_primary_key_with_blobs":
            if table.has_primary_key and table.has_blob_columns:
                yield kind

        elif kind in {"count_by_example", "delete_by_example", "select_by_example", "update_by_example_selective"}:
            if example:
                yield kind

        elif kind == "update_by_example":
            if example and has_base_updatable:
                yield kind

        elif kind in {"select_by_example_with_blobs", "update_by_example_with_blobs"}:
            if example and table.has_blob_columns:
                yield kind

        else:
            assert_never(kind)


class ClientBuilder:
    """Builds model classes & client (mapper interface and dao implementation) methods of a table."""

    def __init__(self, table: TableInfo) -> None:
        self.__table = table

    @property
    def record_list(self) -> JavaType:
        return predef().list.parametrize(self.__table.record_type)

    def build_record_class(self) -> ClassInfo:
        table = self.__table
        cls = ClassInfo(type_=table.record_type)

        if table.primary_key_type is not None:
            cls.set_super_class(table.primary_key_type)
            columns = table.non_primary_key_columns

        else:
            columns = table.columns

        self.__add_properties(cls, columns)

        return cls

    def build_primary_key_class(self) -> t.Optional[ClassInfo]:
        if self.__table.primary_key_type is None:
            return None

        cls = ClassInfo(type_=self.__table.primary_key_type)
        self.__add_properties(cls, self.__table.primary_key_columns)

        return cls

    def build_example_class(self) -> ClassInfo:
        cls = ClassInfo(type_=self.__table.example_type)

        cls.add_field(FieldInfo(name="orderByClause", type_=predef().string, visibility="protected"))
        cls.add_field(FieldInfo(name="distinct", type_=predef().boolean, visibility="protected"))

        cls.add_method(self.__setter("orderByClause", predef().string))
        cls.add_method(self.__getter("orderByClause", predef().string))
        cls.add_method(self.__setter("distinct", predef().boolean))
        cls.add_method(MethodInfo(name="isDistinct", returns=predef().boolean, body=["return distinct;"]))

        return cls

    def build_interface(self) -> InterfaceInfo:
        return InterfaceInfo(type_=self.__table.mapper_type)

    def build_impl_class(self, interface: InterfaceInfo) -> ClassInfo:
        impl_type = JavaType(f"{interface.type_.qualname}Impl")
        session = predef().sql_session

        cls = ClassInfo(type_=impl_type)
        cls.add_super_interface(interface.type_)
        cls.add_field(FieldInfo(name="sqlSession", type_=session))
        cls.add_method(
            MethodInfo(
                name=impl_type.simple_name,
                params=[ParameterInfo("sqlSession", session)],
                body=["this.sqlSession = sqlSession;"],
            )
        )

        return cls

    def build_method(self, kind: ClientMethodKind) -> MethodInfo:
        table = self.__table
        int_ = predef().int
        record = ParameterInfo("record", table.record_type)
        example = ParameterInfo("example", table.example_type)
        name = STATEMENT_IDS[kind]

        if kind == "count_by_example":
            return MethodInfo(name=name, returns=predef().long, params=[example])

        elif kind == "delete_by_example":
            return MethodInfo(name=name, returns=int_, params=[example])

        elif kind == "delete_by_primary_key":
            return MethodInfo(name=name, returns=int_, params=self.__key_params())

        elif kind in {"insert", "insert_selective"}:
            return MethodInfo(name=name, returns=int_, params=[record])

        elif kind == "select_all":
            return MethodInfo(name=name, returns=self.record_list)

        elif kind in {"select_by_example", "select_by_example_with_blobs"}:
            return MethodInfo(name=name, returns=self.record_list, params=[example])

        elif kind == "select_by_primary_key":
            return MethodInfo(name=name, returns=table.record_type, params=self.__key_params())

        elif kind in {"update_by_example", "update_by_example_selective", "update_by_example_with_blobs"}:
            return MethodInfo(
                name=name,
                returns=int_,
                params=[
                    replace(record, annotations=('@Param("record")',)),
                    replace(example, annotations=('@Param("example")',)),
                ],
            )

        elif kind in {"update_by_primary_key", "update_by_primary_key_selective", "update_by_primary_key_with_blobs"}:
            return MethodInfo(name=name, returns=int_, params=[record])

        else:
            assert_never(kind)

    def build_impl_method(self, kind: ClientMethodKind, method: MethodInfo) -> MethodInfo:
        """Copy interface method and add the body that calls mybatis session."""

        statement = f'"{self.__table.sql_map_namespace}.{method.name}"'
        call = self.__session_call(kind)

        if len(method.params) > 1:
            body = ["Map<String, Object> parms = new HashMap<>();"]
            body.extend(f'parms.put("{param.name}", {param.name});' for param in method.params)
            body.append(f"return sqlSession.{call}({statement}, parms);")

        elif method.params:
            body = [f"return sqlSession.{call}({statement}, {method.params[0].name});"]

        else:
            body = [f"return sqlSession.{call}({statement});"]

        return replace(method, params=list(method.params), annotations=list(method.annotations), body=body)

    def __session_call(self, kind: ClientMethodKind) -> _SessionCall:
        if kind in {"select_all", "select_by_example", "select_by_example_with_blobs"}:
            return "selectList"

        elif kind in {"select_by_primary_key", "count_by_example"}:
            return "selectOne"

        elif kind in {"insert", "insert_selective"}:
            return "insert"

        elif kind in {"delete_by_example", "delete_by_primary_key"}:
            return "delete"

        else:
            return "update"

    def __key_params(self) -> list[ParameterInfo]:
        table = self.__table
        if table.primary_key_type is not None:
            return [ParameterInfo("key", table.primary_key_type)]

        return [ParameterInfo(column.java_property, column.java_type) for column in table.primary_key_columns]

    def __add_properties(self, cls: ClassInfo, columns: t.Sequence[ColumnInfo]) -> None:
        for column in columns:
            cls.add_field(FieldInfo(name=column.java_property, type_=column.java_type))

        for column in columns:
            cls.add_method(self.__getter(column.java_property, column.java_type))
            cls.add_method(self.__setter(column.java_property, column.java_type))

    def __getter(self, prop: str, type_: JavaType) -> MethodInfo:
        return MethodInfo(name=f"get{_capitalize(prop)}", returns=type_, body=[f"return {prop};"])

    def __setter(self, prop: str, type_: JavaType) -> MethodInfo:
        return MethodInfo(
            name=f"set{_capitalize(prop)}",
            returns=predef().void,
            params=[ParameterInfo(prop, type_)],
            body=[f"this.{prop} = {prop};"],
        )


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]
