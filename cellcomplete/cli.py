"""Cellcomplete CLI - inspect completions outside the notebook.

Commands:
    cellcomplete complete <prefix>    Show completion items for a prefix
    cellcomplete namespaces [prefix]  List loadable namespaces
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from cellcomplete.engine import get_completion_items
from cellcomplete.environment import Environment, Import
from cellcomplete.exceptions import ManifestError, SettingsError
from cellcomplete.manifest import load_manifest
from cellcomplete.reflect import ModuleRegistry
from cellcomplete.registry import NamespaceRegistry
from cellcomplete.settings import CompletionSettings

app = typer.Typer(
    name="cellcomplete",
    help="Context-aware completion for notebook cells",
    no_args_is_help=True,
)
console = Console()

ManifestOption = Annotated[
    Optional[Path],
    typer.Option("--manifest", "-m", help="JSON namespace manifest (default: live Python modules)"),
]


def _load_registry(manifest: Path | None) -> NamespaceRegistry:
    if manifest is None:
        return ModuleRegistry()
    try:
        return load_manifest(manifest)
    except ManifestError as e:
        raise typer.BadParameter(str(e))


def _load_settings(config: Path | None) -> CompletionSettings:
    if config is None:
        return CompletionSettings()
    try:
        return CompletionSettings.from_toml(config)
    except SettingsError as e:
        raise typer.BadParameter(str(e))


def _pairs(values: list[str], what: str) -> dict[str, str]:
    pairs = {}
    for value in values:
        name, sep, rest = value.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE for {what}, got '{value}'")
        pairs[name] = rest
    return pairs


def _bindings(values: list[str]) -> dict[str, object]:
    bindings = {}
    for name, raw in _pairs(values, "--var").items():
        try:
            bindings[name] = json.loads(raw)
        except json.JSONDecodeError as e:
            raise typer.BadParameter(f"Invalid JSON for variable '{name}': {e}")
    return bindings


@app.command("complete")
def complete(
    prefix: Annotated[str, typer.Argument(help="Cell text up to the cursor")],
    manifest: ManifestOption = None,
    var: Annotated[
        Optional[list[str]],
        typer.Option("--var", "-v", help="Bound variable as NAME=JSON"),
    ] = None,
    alias: Annotated[
        Optional[list[str]],
        typer.Option("--alias", "-a", help="Alias as Short=Full.Namespace"),
    ] = None,
    imports: Annotated[
        Optional[list[str]],
        typer.Option("--import", "-i", help="Imported namespace"),
    ] = None,
    requires: Annotated[
        Optional[list[str]],
        typer.Option("--require", "-r", help="Required namespace"),
    ] = None,
    namespace: Annotated[
        Optional[str],
        typer.Option("--namespace", "-n", help="Current namespace"),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="TOML file with a [tool.cellcomplete] table"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print items as JSON"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log resolution steps to stderr"),
    ] = False,
):
    """Show completion items for PREFIX.

    Examples:
        cellcomplete complete "Sys.ve" -m core.json -a Sys=System
        cellcomplete complete "map." -v 'map={"foo": 1, "bar": 2}'
        cellcomplete complete ":json.lo"
    """
    if debug:
        _enable_debug()
    registry = _load_registry(manifest)
    env = Environment(
        namespace=namespace,
        aliases=_pairs(alias or [], "--alias"),
        imports=tuple(Import(namespace=ns) for ns in imports or []),
        requires=tuple(requires or []),
    )
    items = get_completion_items(
        prefix, _bindings(var or []), env, registry, _load_settings(config)
    )

    if as_json:
        typer.echo(json.dumps([item.model_dump(mode="json") for item in items], indent=2))
        return
    if not items:
        typer.echo("No completions.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("label")
    table.add_column("kind")
    table.add_column("detail")
    for item in items:
        table.add_row(item.label, item.kind.value, item.detail)
    console.print(table)


@app.command("namespaces")
def namespaces(
    prefix: Annotated[str, typer.Argument(help="Namespace name prefix")] = "",
    manifest: ManifestOption = None,
):
    """List loadable namespaces starting with PREFIX.

    Examples:
        cellcomplete namespaces -m core.json
        cellcomplete namespaces json
    """
    registry = _load_registry(manifest)
    for name in registry.list_namespaces(prefix):
        typer.echo(name)


def _enable_debug() -> None:
    """Attach a stderr handler to the cellcomplete loggers."""
    logger = logging.getLogger("cellcomplete")
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def main():
    app()


if __name__ == "__main__":
    main()
