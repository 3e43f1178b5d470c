import typing as t
import warnings
from functools import cached_property
from pathlib import Path

import click

from genmapper.generator.mybatis import MapperCodeGenerator
from genmapper.generator.model import ClientStyle, GeneratorContext
from genmapper.plugin.abc import Plugin
from genmapper.plugin.context import PluginContext
from genmapper.plugin.contributor import GenericContributorPlugin
from genmapper.plugin.exist import ExistByExamplePlugin
from genmapper.plugin.generic import GenericInterfacePlugin
from genmapper.plugin.manual import ManualQueryPlugin
from genmapper.plugin.select_one import SelectOneByExamplePlugin
from genmapper.plugin.update_null import UpdateSelectNullPlugin
from genmapper.table.inspector import NamingConfig, TableInspector
from genmapper.table.model import TableInfo

PluginKind = t.Literal["exist", "manual", "select-one", "update-null"]

PLUGINS: t.Final[t.Mapping[PluginKind, type[GenericContributorPlugin]]] = {
    "exist": ExistByExamplePlugin,
    "manual": ManualQueryPlugin,
    "select-one": SelectOneByExamplePlugin,
    "update-null": UpdateSelectNullPlugin,
}


class CLIContext:
    def __init__(
        self,
        base: click.Context,
        source: Path,
        dialect: str,
        naming: NamingConfig,
    ) -> None:
        self.base = base
        self.source: t.Final[Path] = source
        self.dialect: t.Final[str] = dialect
        self.naming: t.Final[NamingConfig] = naming

    @cached_property
    def table_inspector(self) -> TableInspector:
        return TableInspector(dialect=self.dialect, naming=self.naming)

    def inspect_source(self) -> t.Iterable[TableInfo]:
        return self.table_inspector.inspect_source(self.source)


@click.group()
@click.pass_context
@click.argument(
    "source",
    type=click.Path(exists=True, resolve_path=True, path_type=Path),
)
@click.option(
    "--dialect",
    type=str,
    default="mysql",
    show_default=True,
)
@click.option(
    "--model-package",
    type=str,
    default="model",
    show_default=True,
)
@click.option(
    "--client-package",
    type=str,
    default="mapper",
    show_default=True,
)
@click.option(
    "--sql-map-package",
    type=str,
    default=None,
)
@click.option(
    "--select-key",
    type=str,
    default=None,
    help="Statement returning generated key (e.g. `SELECT LAST_INSERT_ID()`), JDBC generated keys by default.",
)
def cli(
    context: click.Context,
    source: Path,
    dialect: str,
    model_package: str,
    client_package: str,
    sql_map_package: t.Optional[str],
    select_key: t.Optional[str],
) -> None:
    context.obj = CLIContext(
        base=context,
        source=source,
        dialect=dialect,
        naming=NamingConfig(
            model_package=model_package,
            client_package=client_package,
            sql_map_package=sql_map_package,
            select_key_statement=select_key,
        ),
    )


OPT_OUTPUT = click.option(
    "-o",
    "--output",
    type=click.Path(writable=True, resolve_path=True, path_type=Path),
    default=None,
)


@cli.command()
@click.pass_obj
@OPT_OUTPUT
@click.option(
    "--interface",
    type=str,
    default=None,
    help="Fully qualified name of the generic interface all mappers extend.",
)
@click.option(
    "--example",
    type=bool,
    is_flag=True,
    default=False,
    help="Add `Example` type parameter & example based methods to the generic interface.",
)
@click.option(
    "-p",
    "--plugin",
    "plugins",
    type=click.Choice(t.get_args(PluginKind)),
    multiple=True,
)
@click.option(
    "--upsert",
    type=bool,
    is_flag=True,
    default=False,
)
@click.option(
    "--style",
    type=click.Choice(t.get_args(ClientStyle)),
    default="mapper",
    show_default=True,
)
@click.option(
    "--dry-run",
    type=bool,
    is_flag=True,
    default=False,
)
def cast(
    context: CLIContext,
    output: t.Optional[Path],
    interface: t.Optional[str],
    example: bool,
    plugins: t.Sequence[PluginKind],
    upsert: bool,
    style: ClientStyle,
    dry_run: bool,
) -> None:
    """Generate MyBatis models, mappers and sql maps for the tables."""

    plugin_context = PluginContext()

    generic_properties = {GenericInterfacePlugin.EXAMPLE: str(example).lower()}
    if interface is not None:
        generic_properties[GenericInterfacePlugin.INTERFACE] = interface

    enabled: list[Plugin] = [GenericInterfacePlugin(plugin_context, generic_properties)]
    for kind in plugins:
        properties = {ManualQueryPlugin.UPSERT: str(upsert).lower()} if kind == "manual" else {}
        enabled.append(PLUGINS[kind](plugin_context, properties))

    gen = MapperCodeGenerator(enabled, plugin_context)
    gen_context = GeneratorContext(
        tables=list(context.inspect_source()),
        output=output if output is not None else Path.cwd(),
        style=style,
    )

    # NOTE: validation warnings are printed below
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        result = gen.generate(gen_context)

    for message in result.warnings:
        click.echo(f"warning: {message}", err=True)

    for file in result.files:
        click.echo(file.path)

        if dry_run:
            continue

        file.path.parent.mkdir(parents=True, exist_ok=True)
        with file.path.open("w") as fd:
            fd.write(file.content)


@cli.command()
@click.pass_obj
def show(context: CLIContext) -> None:
    """Show info about the tables."""

    for table in context.inspect_source():
        click.echo(f"{table.name}: {table.record_type} (mapper {table.mapper_type})")

        if table.key_type is not None:
            click.echo(f"  key: {table.key_type}")

        for column in table.columns:
            flags = [
                flag
                for flag, enabled in (
                    ("pk", column.primary_key),
                    ("identity", column.identity),
                    ("generated always", column.generated_always),
                )
                if enabled
            ]
            click.echo(
                f"  {column.name}: {column.jdbc_type} -> {column.java_type}"
                + (f" [{', '.join(flags)}]" if flags else "")
            )


if __name__ == "__main__":
    cli()
