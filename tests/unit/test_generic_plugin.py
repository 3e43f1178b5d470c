import typing as t

import pytest

from genmapper.generator.client import ClientBuilder
from genmapper.generator.model import ClientMethodKind
from genmapper.java.model import InterfaceInfo, JavaType, ParameterInfo
from genmapper.plugin.context import PluginContext
from genmapper.plugin.generic import GenericInterfacePlugin
from genmapper.table.model import ColumnInfo, TableInfo


@pytest.mark.parametrize(
    "properties",
    [
        pytest.param({}, id="no properties"),
        pytest.param({"interface": "", "example": "true"}, id="empty interface"),
    ],
)
def test_validate_without_interface_fails(context: PluginContext, properties: t.Mapping[str, str]) -> None:
    plugin = GenericInterfacePlugin(context, properties)
    warnings = list[str]()

    assert not plugin.validate(warnings)
    assert warnings == ["Property interface not set for plugin GenericInterfacePlugin"]
    assert context.lookup() is None


@pytest.mark.parametrize(
    ("example", "expected_example_enabled"),
    [
        pytest.param(None, False),
        pytest.param("false", False),
        pytest.param("TRUE", True),
        pytest.param(" true ", True),
    ],
)
def test_validate_registers_generic_interface(
    context: PluginContext,
    example: t.Optional[str],
    expected_example_enabled: bool,
) -> None:
    properties = {"interface": "com.x.BaseMapper"}
    if example is not None:
        properties["example"] = example

    plugin = GenericInterfacePlugin(context, properties)

    assert plugin.validate([])

    generic = context.require_generic_interface()
    assert generic.interface_type == JavaType("com.x.BaseMapper")
    assert generic.example_enabled is expected_example_enabled


@pytest.mark.parametrize(
    ("kind", "expected_signature"),
    [
        pytest.param("insert", "int insert(Model record)"),
        pytest.param("select_all", "List<Model> selectAll()"),
        pytest.param("select_by_primary_key", "Model selectByPrimaryKey(Id id)"),
        pytest.param("delete_by_primary_key", "int deleteByPrimaryKey(Id id)"),
        pytest.param("count_by_example", "long countByExample(Example example)"),
        pytest.param("select_by_example", "List<Model> selectByExample(Example example)"),
        pytest.param(
            "update_by_example_selective",
            'int updateByExampleSelective(@Param("record") Model record, @Param("example") Example example)',
        ),
        pytest.param("update_by_primary_key", "int updateByPrimaryKey(Model record)"),
    ],
)
def test_interface_method_is_moved_to_generic_interface(
    plugin: GenericInterfacePlugin,
    user_table: TableInfo,
    kind: ClientMethodKind,
    expected_signature: str,
) -> None:
    builder = ClientBuilder(user_table)
    method = builder.build_method(kind)

    assert not plugin.client_method_generated(kind, method, builder.build_interface(), user_table)

    generic_method = plugin.synthesizer.finalize_and_emit("src").unit.get_method(method.name)
    assert generic_method is not None
    assert _signature(generic_method.returns, generic_method.name, generic_method.params) == expected_signature


def test_example_method_is_kept_when_example_disabled(context: PluginContext, user_table: TableInfo) -> None:
    plugin = GenericInterfacePlugin(context, {"interface": "com.x.BaseMapper"})
    plugin.validate([])
    builder = ClientBuilder(user_table)

    assert plugin.client_method_generated(
        "count_by_example",
        builder.build_method("count_by_example"),
        builder.build_interface(),
        user_table,
    )
    assert not plugin.synthesizer.has_contributed("countByExample")


def test_impl_method_is_kept_with_override(plugin: GenericInterfacePlugin, user_table: TableInfo) -> None:
    builder = ClientBuilder(user_table)
    interface = builder.build_interface()
    impl = builder.build_impl_class(interface)
    method = builder.build_impl_method("insert", builder.build_method("insert"))

    assert plugin.client_method_generated("insert", method, impl, user_table)
    assert method.annotations == ["@Override"]
    assert plugin.synthesizer.has_contributed("insert")


def test_client_generated_attaches_generic_interface(plugin: GenericInterfacePlugin, user_table: TableInfo) -> None:
    interface = _generate_client(plugin, user_table, ["insert", "delete_by_primary_key", "count_by_example"])

    assert plugin.client_generated(interface, None, user_table)
    assert [str(type_) for type_ in interface.super_interfaces] == [
        "com.x.BaseMapper<com.x.model.User, com.x.model.UserExample, java.lang.Integer>",
    ]
    assert interface.methods == []


def test_client_generated_restores_methods_when_binding_is_incomplete(
    plugin: GenericInterfacePlugin,
    log_table: TableInfo,
) -> None:
    interface = _generate_client(plugin, log_table, ["insert", "select_all", "count_by_example"])

    assert plugin.client_generated(interface, None, log_table)
    assert interface.super_interfaces == []
    assert [method.name for method in interface.methods] == ["insert", "selectAll", "countByExample"]


def test_context_generate_additional_files_returns_generic_interface(
    plugin: GenericInterfacePlugin,
    user_table: TableInfo,
) -> None:
    _generate_client(plugin, user_table, ["insert"])

    files = plugin.context_generate_additional_files()

    assert [str(file.path) for file in files] == ["src/main/java/com/x/BaseMapper.java"]


def _generate_client(
    plugin: GenericInterfacePlugin,
    table: TableInfo,
    kinds: t.Sequence[ClientMethodKind],
) -> InterfaceInfo:
    builder = ClientBuilder(table)
    interface = builder.build_interface()

    for kind in kinds:
        method = builder.build_method(kind)
        if plugin.client_method_generated(kind, method, interface, table):
            interface.add_method(method)

    return interface


def _signature(returns: t.Optional[JavaType], name: str, params: t.Sequence[ParameterInfo]) -> str:
    args = ", ".join(" ".join((*param.annotations, param.type_.short_name, param.name)) for param in params)
    return f"{returns.short_name if returns is not None else 'void'} {name}({args})"


@pytest.fixture
def context() -> PluginContext:
    return PluginContext()


@pytest.fixture
def plugin(context: PluginContext) -> GenericInterfacePlugin:
    plugin = GenericInterfacePlugin(context, {"interface": "com.x.BaseMapper", "example": "true"})
    assert plugin.validate([])
    return plugin


def test_multi_column_key_without_key_class_keeps_by_key_methods(
    plugin: GenericInterfacePlugin,
    user_table: TableInfo,
    link_table: TableInfo,
) -> None:
    kinds: list[ClientMethodKind] = ["insert", "select_by_primary_key", "delete_by_primary_key", "count_by_example"]
    link = _generate_client(plugin, link_table, kinds)
    user = _generate_client(plugin, user_table, kinds)

    assert plugin.client_generated(link, None, link_table)
    assert plugin.client_generated(user, None, user_table)

    unit = plugin.synthesizer.finalize_and_emit("src").unit
    signatures = {method.name: _signature(method.returns, method.name, method.params) for method in unit.methods}
    assert signatures["selectByPrimaryKey"] == "Model selectByPrimaryKey(Id id)"
    assert signatures["deleteByPrimaryKey"] == "int deleteByPrimaryKey(Id id)"

    assert link.super_interfaces == []
    assert sorted(_signature(method.returns, method.name, method.params) for method in link.methods) == [
        "Link selectByPrimaryKey(Integer a, Integer b)",
        "int deleteByPrimaryKey(Integer a, Integer b)",
        "int insert(Link record)",
        "long countByExample(LinkExample example)",
    ]
    assert [str(type_) for type_ in user.super_interfaces] == [
        "com.x.BaseMapper<com.x.model.User, com.x.model.UserExample, java.lang.Integer>",
    ]
    assert user.methods == []


def test_model_type_is_bound_from_select_by_primary_key(
    plugin: GenericInterfacePlugin,
    user_table: TableInfo,
) -> None:
    interface = _generate_client(plugin, user_table, ["select_by_primary_key", "count_by_example"])

    assert plugin.client_generated(interface, None, user_table)
    assert [str(type_) for type_ in interface.super_interfaces] == [
        "com.x.BaseMapper<com.x.model.User, com.x.model.UserExample, java.lang.Integer>",
    ]


def test_second_generic_interface_plugin_is_skipped(context: PluginContext, plugin: GenericInterfacePlugin) -> None:
    other = GenericInterfacePlugin(context, {"interface": "com.x.OtherMapper"})
    warnings = list[str]()

    assert not other.validate(warnings)
    assert warnings == [
        "Generic interface com.x.BaseMapper is already registered, plugin GenericInterfacePlugin is skipped",
    ]
    assert context.require_generic_interface().interface_type == JavaType("com.x.BaseMapper")


@pytest.fixture
def link_table() -> TableInfo:
    """Table with two key columns and without key class."""

    integer = JavaType("java.lang.Integer")

    return TableInfo(
        name="link",
        record_type=JavaType("com.x.model.Link"),
        example_type=JavaType("com.x.model.LinkExample"),
        mapper_type=JavaType("com.x.mapper.LinkMapper"),
        columns=[
            ColumnInfo(name="a", java_property="a", java_type=integer, jdbc_type="INTEGER", primary_key=True),
            ColumnInfo(name="b", java_property="b", java_type=integer, jdbc_type="INTEGER", primary_key=True),
            ColumnInfo(name="c", java_property="c", java_type=JavaType("java.lang.String"), jdbc_type="VARCHAR"),
        ],
    )
