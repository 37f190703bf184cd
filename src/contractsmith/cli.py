"""
Contractsmith Command Line Interface (CLI)

Command-line utilities for generating contract sources: batch generation of
every option combination, printing a single contract, and listing the library
sources a contract pulls in.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from contractsmith.core.alternatives import count_alternatives
from contractsmith.core.build_generic import KINDS, build_generic, parse_options
from contractsmith.core.builder import ContractBuilder
from contractsmith.core.dependencies import SourceLibrary, get_imports
from contractsmith.core.errors import ContractsmithError, OptionsError
from contractsmith.core.printer import print_contract
from contractsmith.core.settings import ContractsmithSettings
from contractsmith.core.sources import SUBSETS, write_generated_sources
from contractsmith.kinds import fungible, non_fungible

app = typer.Typer(rich_markup_mode="markdown")
console = Console()

BLUEPRINTS = {
    "Fungible": fungible.blueprint,
    "NonFungible": non_fungible.blueprint,
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Generate Soroban smart contract sources from option records."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def output_json(data: Any) -> None:
    """Helper to output data as JSON."""
    print(json.dumps(data, default=str, indent=2))


def _check_kind(kind: Optional[str]) -> None:
    if kind is not None and kind not in KINDS:
        console.print(f"[red]Unknown kind '{kind}'.[/red] Choose one of: {', '.join(KINDS)}")
        raise typer.Exit(1)


def _parse_value(raw: str) -> Any:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return raw


def parse_option_pairs(pairs: List[str]) -> Dict[str, Any]:
    """
    Turn ``key=value`` strings into a nested options mapping.

    Dotted keys address nested records (``info.license=MIT``). ``true`` and
    ``false`` become booleans; every other value stays a string.
    """
    result: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--option")
        target = result
        *parents, leaf = key.split(".")
        for parent in parents:
            target = target.setdefault(parent, {})
            if not isinstance(target, dict):
                raise typer.BadParameter(
                    f"'{parent}' already holds a value, cannot set '{key}'",
                    param_hint="--option",
                )
        if isinstance(target.get(leaf), dict):
            raise typer.BadParameter(
                f"'{key}' already holds nested options", param_hint="--option"
            )
        target[leaf] = _parse_value(value)
    return result


def _print_option_errors(error: OptionsError) -> None:
    console.print("[red]Invalid options:[/red]")
    for field, message in error.messages.items():
        console.print(f"  [bold]{field}[/bold]: {message}")


def _build_from_cli(
    kind: str,
    name: Optional[str],
    option: List[str],
    settings: ContractsmithSettings,
) -> ContractBuilder:
    _check_kind(kind)
    raw: Dict[str, Any] = {"kind": kind, **parse_option_pairs(option)}
    if name is not None:
        raw["name"] = name
    try:
        return build_generic(parse_options(raw), settings)
    except OptionsError as e:
        _print_option_errors(e)
        raise typer.Exit(1)
    except ContractsmithError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def generate(
    out_dir: Path = typer.Argument(..., help="Directory to write the `.rs` files to."),
    subset: str = typer.Option(
        "all", help="`all` combinations or a `minimal-cover` of their traits."
    ),
    kind: Optional[str] = typer.Option(None, help="Only generate this contract kind."),
    unique_name: bool = typer.Option(
        False, "--unique-name", help="Name contracts Contract1, Contract2, ..."
    ),
) -> None:
    """Generate sources for every option combination."""
    if subset not in SUBSETS:
        console.print(f"[red]Unknown subset '{subset}'.[/red] Choose one of: {', '.join(SUBSETS)}")
        raise typer.Exit(1)
    _check_kind(kind)

    settings = ContractsmithSettings.from_env()
    try:
        names = write_generated_sources(out_dir, subset, unique_name, kind, settings)
    except ContractsmithError as e:
        console.print(f"[red]Generation failed: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Wrote {len(names)} contracts to {out_dir}[/green]")


@app.command()
def show(
    kind: str = typer.Argument(..., help="Contract kind, e.g. `Fungible`."),
    name: Optional[str] = typer.Option(None, help="Contract name."),
    option: List[str] = typer.Option(
        [], "--option", "-o", help="Option override as `key=value`. Repeatable."
    ),
) -> None:
    """Print the source of a single contract."""
    settings = ContractsmithSettings.from_env()
    contract = _build_from_cli(kind, name, option, settings)
    print(print_contract(contract, settings), end="")


@app.command()
def deps(
    kind: str = typer.Argument(..., help="Contract kind, e.g. `Fungible`."),
    library: Optional[Path] = typer.Option(
        None, help="JSON library table. Defaults to $CONTRACTSMITH_LIBRARY."
    ),
    name: Optional[str] = typer.Option(None, help="Contract name."),
    option: List[str] = typer.Option(
        [], "--option", "-o", help="Option override as `key=value`. Repeatable."
    ),
    json_output: bool = typer.Option(False, "--json", help="Output sources as JSON."),
) -> None:
    """List every library source a contract depends on, transitively."""
    settings = ContractsmithSettings.from_env()
    library_path = library or (Path(settings.library_path) if settings.library_path else None)
    if library_path is None or not library_path.exists():
        console.print(f"[red]Library table not found at {library_path}[/red]")
        console.print(
            "[yellow]Hint: Use --library or set CONTRACTSMITH_LIBRARY environment variable[/yellow]"
        )
        raise typer.Exit(1)

    contract = _build_from_cli(kind, name, option, settings)
    try:
        imports = get_imports(contract, SourceLibrary.from_json(library_path))
    except ContractsmithError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if json_output:
        output_json({path: source.content for path, source in imports.items()})
        return

    table = Table(title=f"Dependencies of [green]{contract.name}[/green]")
    table.add_column("Source", style="cyan")
    table.add_column("Lines", style="magenta", justify="right")
    for path, source in imports.items():
        table.add_row(path, str(len(source.content.splitlines())))
    console.print(table)


@app.command()
def kinds() -> None:
    """List the available contract kinds and their option combinations."""
    table = Table(title="Contract Kinds")
    table.add_column("Kind", style="green")
    table.add_column("Options", style="yellow")
    table.add_column("Combinations", style="magenta", justify="right")
    for kind in KINDS:
        blueprint = BLUEPRINTS[kind]
        table.add_row(kind, ", ".join(blueprint), str(count_alternatives(blueprint)))
    console.print(table)


if __name__ == "__main__":
    app()
