import typing as t
from pathlib import Path

import pytest

from genmapper.generator.model import ClientStyle, GeneratorContext, GeneratorResult
from genmapper.generator.mybatis import MapperCodeGenerator
from genmapper.plugin.abc import Plugin
from genmapper.plugin.context import PluginContext
from genmapper.plugin.exist import ExistByExamplePlugin
from genmapper.plugin.generic import GenericInterfacePlugin
from genmapper.table.model import TableInfo

_OUTPUT = Path("out")


def test_mappers_extend_generic_interface(user_table: TableInfo, order_table: TableInfo) -> None:
    result = _generate([user_table, order_table], interface="com.x.BaseMapper")

    assert _read(result, "src/main/java/com/x/mapper/UserMapper.java") == "\n".join(
        [
            "package com.x.mapper;",
            "",
            "import com.x.BaseMapper;",
            "import com.x.model.User;",
            "import com.x.model.UserExample;",
            "",
            "public interface UserMapper extends BaseMapper<User, UserExample, Integer> {",
            "}",
            "",
        ]
    )
    assert "public interface OrderMapper extends BaseMapper<Order, OrderExample, Integer> {" in _read(
        result,
        "src/main/java/com/x/mapper/OrderMapper.java",
    )
    assert result.warnings == ()


def test_contributed_method_is_declared_once(user_table: TableInfo, order_table: TableInfo) -> None:
    result = _generate([user_table, order_table], interface="com.x.BaseMapper")

    base_mapper = _read(result, "src/main/java/com/x/BaseMapper.java")

    assert base_mapper.count("boolean existByExample(Example example);") == 1
    assert "public interface BaseMapper<Model, Example, Id> {" in base_mapper
    assert "    int deleteByPrimaryKey(Id id);" in base_mapper
    assert '<select id="existByExample"' in _read(result, "src/main/resources/UserMapper.xml")
    assert '<select id="existByExample"' in _read(result, "src/main/resources/OrderMapper.xml")


def test_generic_interface_is_the_last_file(user_table: TableInfo) -> None:
    result = _generate([user_table], interface="com.x.BaseMapper")

    assert [file.path for file in result.files] == [
        _OUTPUT / "src/main/java/com/x/model/User.java",
        _OUTPUT / "src/main/java/com/x/model/UserExample.java",
        _OUTPUT / "src/main/java/com/x/mapper/UserMapper.java",
        _OUTPUT / "src/main/resources/UserMapper.xml",
        _OUTPUT / "src/main/java/com/x/BaseMapper.java",
    ]


def test_dao_implementation_keeps_methods(user_table: TableInfo) -> None:
    result = _generate([user_table], interface="com.x.BaseMapper", style="dao")

    impl = _read(result, "src/main/java/com/x/mapper/UserMapperImpl.java")

    assert "public class UserMapperImpl implements UserMapper {" in impl
    assert "\n".join(
        [
            "    @Override",
            "    public int insert(User record) {",
            '        return sqlSession.insert("com.x.mapper.UserMapper.insert", record);',
            "    }",
        ]
    ) in impl
    assert "import java.util.HashMap;" in impl
    assert "extends BaseMapper<User, UserExample, Integer> {\n}" in _read(
        result,
        "src/main/java/com/x/mapper/UserMapper.java",
    )


def test_table_without_key_keeps_own_methods(user_table: TableInfo, log_table: TableInfo) -> None:
    result = _generate([user_table, log_table], interface="com.x.BaseMapper")

    log_mapper = _read(result, "src/main/java/com/x/mapper/LogMapper.java")

    assert "public interface LogMapper {" in log_mapper
    assert "    int insert(Log record);" in log_mapper
    assert "    long countByExample(LogExample example);" in log_mapper
    assert "extends BaseMapper<User, UserExample, Integer> {\n}" in _read(
        result,
        "src/main/java/com/x/mapper/UserMapper.java",
    )


def test_missing_interface_skips_generic_plugins(user_table: TableInfo) -> None:
    with pytest.warns(RuntimeWarning):
        result = _generate([user_table], interface=None)

    assert result.warnings == (
        "Property interface not set for plugin GenericInterfacePlugin",
        "GenericInterfacePlugin not enabled, plugin ExistByExamplePlugin is skipped",
    )
    assert [file.path.name for file in result.files] == [
        "User.java",
        "UserExample.java",
        "UserMapper.java",
        "UserMapper.xml",
    ]
    assert "    int insert(User record);" in _read(result, "src/main/java/com/x/mapper/UserMapper.java")
    assert "existByExample" not in _read(result, "src/main/resources/UserMapper.xml")


def _generate(
    tables: t.Sequence[TableInfo],
    *,
    interface: t.Optional[str],
    style: ClientStyle = "mapper",
) -> GeneratorResult:
    context = PluginContext()

    properties = {GenericInterfacePlugin.EXAMPLE: "true"}
    if interface is not None:
        properties[GenericInterfacePlugin.INTERFACE] = interface

    plugins: list[Plugin] = [GenericInterfacePlugin(context, properties), ExistByExamplePlugin(context)]

    return MapperCodeGenerator(plugins, context).generate(GeneratorContext(tables=tables, output=_OUTPUT, style=style))


def _read(result: GeneratorResult, path: str) -> str:
    return next(file.content for file in result.files if file.path == _OUTPUT / path)
