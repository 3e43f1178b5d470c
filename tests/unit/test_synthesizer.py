import typing as t

import pytest

from genmapper.errors import ConfigError
from genmapper.generic.synthesizer import GenericInterfaceSynthesizer
from genmapper.java.model import InterfaceInfo, JavaType, ParameterInfo, predef

_USER = JavaType("com.x.model.User")
_USER_EXAMPLE = JavaType("com.x.model.UserExample")


@pytest.mark.parametrize("interface_name", [None, ""])
def test_initialize_without_name_raises_config_error(
    synthesizer: GenericInterfaceSynthesizer,
    interface_name: t.Optional[str],
) -> None:
    with pytest.raises(ConfigError):
        synthesizer.initialize(interface_name, example_enabled=True)

    assert not synthesizer.is_initialized


def test_initialize_twice_raises_runtime_error(initialized: GenericInterfaceSynthesizer) -> None:
    with pytest.raises(RuntimeError):
        initialized.initialize("com.x.OtherMapper", example_enabled=False)


@pytest.mark.parametrize(
    "action",
    [
        pytest.param(lambda synth: synth.contribute("insert", predef().int, []), id="contribute"),
        pytest.param(lambda synth: synth.finalize_and_emit("src/main/java"), id="finalize_and_emit"),
        pytest.param(lambda synth: synth.interface_type, id="interface_type"),
    ],
)
def test_use_before_initialize_raises_runtime_error(
    synthesizer: GenericInterfaceSynthesizer,
    action: t.Callable[[GenericInterfaceSynthesizer], object],
) -> None:
    with pytest.raises(RuntimeError):
        action(synthesizer)


@pytest.mark.parametrize(
    ("example_enabled", "expected_type_params"),
    [
        pytest.param(False, ["Model", "Id"], id="without example"),
        pytest.param(True, ["Model", "Example", "Id"], id="with example"),
    ],
)
def test_type_params_depend_on_example_support(
    synthesizer: GenericInterfaceSynthesizer,
    example_enabled: bool,
    expected_type_params: t.Sequence[str],
) -> None:
    synthesizer.initialize("com.x.BaseMapper", example_enabled=example_enabled)

    assert [param.qualname for param in synthesizer.type_params] == expected_type_params
    assert synthesizer.interface_type == JavaType("com.x.BaseMapper")


@pytest.mark.parametrize(
    "names",
    [
        pytest.param(["insert"], id="single"),
        pytest.param(["selectAll", "insert", "selectAll", "insert", "insert"], id="repeated"),
        pytest.param(["updateByPrimaryKey", "countByExample", "existByExample", "countByExample"], id="unordered"),
    ],
)
def test_contribute_keeps_one_method_per_name_sorted(
    initialized: GenericInterfaceSynthesizer,
    names: t.Sequence[str],
) -> None:
    added = [initialized.contribute(name, predef().int, []) for name in names]

    unit = initialized.finalize_and_emit("src/main/java").unit

    assert [method.name for method in unit.methods] == sorted(set(names))
    assert added.count(True) == len(set(names))
    assert all(initialized.has_contributed(name) for name in names)


def test_contribute_keeps_first_signature(initialized: GenericInterfaceSynthesizer) -> None:
    initialized.contribute("insert", predef().int, [ParameterInfo("record", _USER)], [initialized.model])
    initialized.contribute("insert", predef().long, [ParameterInfo("row", _USER)], [initialized.model])

    method = initialized.finalize_and_emit("src/main/java").unit.get_method("insert")

    assert method is not None
    assert method.returns == predef().int
    assert method.params == [ParameterInfo("record", initialized.model)]


def test_contribute_substitutes_parameters_positionally(initialized: GenericInterfaceSynthesizer) -> None:
    initialized.contribute(
        "updateByExample",
        predef().int,
        [
            ParameterInfo("record", _USER, annotations=('@Param("record")',)),
            ParameterInfo("example", _USER_EXAMPLE, annotations=('@Param("example")',)),
            ParameterInfo("clause", predef().string),
        ],
        [initialized.model, initialized.example],
    )

    method = initialized.finalize_and_emit("src/main/java").unit.get_method("updateByExample")

    assert method is not None
    assert method.params == [
        ParameterInfo("record", initialized.model, annotations=('@Param("record")',)),
        ParameterInfo("example", initialized.example, annotations=('@Param("example")',)),
        ParameterInfo("clause", predef().string),
    ]


def test_finalize_and_emit_is_repeatable(initialized: GenericInterfaceSynthesizer) -> None:
    initialized.contribute("selectAll", initialized.model_list, [])
    initialized.contribute("deleteByPrimaryKey", predef().int, [ParameterInfo("id", initialized.id_)])

    first = initialized.finalize_and_emit("src/main/java")
    second = initialized.finalize_and_emit("src/main/java")

    assert first.render() == second.render()
    assert first.path == second.path


def test_finalize_and_emit_renders_interface(initialized: GenericInterfaceSynthesizer) -> None:
    initialized.contribute("selectAll", initialized.model_list, [])
    initialized.contribute(
        "insert",
        predef().int,
        [ParameterInfo("record", _USER, annotations=('@Param("record")',))],
        [initialized.model],
    )

    file = initialized.finalize_and_emit("src/main/java")

    assert str(file.path) == "src/main/java/com/x/BaseMapper.java"
    assert file.render() == "\n".join(
        [
            "package com.x;",
            "",
            "import java.util.List;",
            "import org.apache.ibatis.annotations.Param;",
            "",
            "public interface BaseMapper<Model, Example, Id> {",
            '    int insert(@Param("record") Model record);',
            "",
            "    List<Model> selectAll();",
            "}",
            "",
        ]
    )


def test_finalize_and_emit_does_not_change_interface_state(initialized: GenericInterfaceSynthesizer) -> None:
    initialized.contribute("selectAll", initialized.model_list, [])
    initialized.contribute("insert", predef().int, [])

    initialized.finalize_and_emit("src/main/java")
    initialized.contribute("countByExample", predef().long, [])

    unit = initialized.finalize_and_emit("src/main/java").unit

    assert isinstance(unit, InterfaceInfo)
    assert [method.name for method in unit.methods] == ["countByExample", "insert", "selectAll"]


@pytest.fixture
def synthesizer() -> GenericInterfaceSynthesizer:
    return GenericInterfaceSynthesizer()


@pytest.fixture
def initialized(synthesizer: GenericInterfaceSynthesizer) -> GenericInterfaceSynthesizer:
    synthesizer.initialize("com.x.BaseMapper", example_enabled=True)
    return synthesizer
