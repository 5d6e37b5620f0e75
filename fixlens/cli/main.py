"""
fixlens CLI.

Commands:
- decode: Annotate FIX log lines with field and enum names
- fields: Browse the fields of a loaded dictionary
- dictionaries: Show which protocol versions loaded
- config: Configuration management
"""

import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..config import FixlensConfig, load_config, generate_default_config
from ..dictionary import DictionaryStore, load_store_from_paths
from ..decode import scan, decode, collect_issues, format_message, resolve_version


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="fixlens",
    help="Annotate FIX protocol log lines with dictionary names",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    text = "text"
    json = "json"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_cfg(config_path: Optional[Path]) -> FixlensConfig:
    if config_path is not None and not config_path.exists():
        console.print(f"[red]Error:[/] Config not found: {config_path}")
        raise typer.Exit(1)
    try:
        return load_config(config_path)
    except Exception as e:
        console.print(f"[red]Error loading config:[/] {e}")
        raise typer.Exit(1)


def _parse_overrides(specs: Optional[List[str]]) -> Dict[str, Path]:
    """Parse repeated VERSION=PATH options."""
    overrides = {}
    for spec in specs or []:
        version, sep, path = spec.partition("=")
        if not sep or not version or not path:
            console.print(f"[red]Invalid dictionary spec:[/] {spec} (expected VERSION=PATH)")
            raise typer.Exit(1)
        overrides[version] = Path(path)
    return overrides


def _build_store(cfg: FixlensConfig, specs: Optional[List[str]]) -> DictionaryStore:
    paths = cfg.resolve_schema_paths()
    paths.update(_parse_overrides(specs))
    if not paths:
        logger.warning("No dictionaries configured; names will not be resolved")
    return load_store_from_paths(paths)


def _read_lines(source: Optional[Path]):
    if source is None:
        yield from sys.stdin
        return
    with open(source, encoding="utf-8", errors="replace") as f:
        yield from f


@app.command("decode")
def decode_cmd(
    source: Optional[Path] = typer.Argument(None, help="Log file (stdin if omitted)"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    dictionary: Optional[List[str]] = typer.Option(
        None, "-d", "--dictionary", help="VERSION=PATH, may be repeated"
    ),
    separator: Optional[str] = typer.Option(None, "--separator", help="Line printed after each message"),
    format: OutputFormat = typer.Option(OutputFormat.text, "-f", "--format"),
    explain: bool = typer.Option(False, "--explain", help="Report unresolved tags and values"),
    verbose: bool = typer.Option(False, "-v", "--verbose"),
):
    """Decode FIX messages found in a log, one output block per message."""
    cfg = _load_cfg(config_path)
    _configure_logging("DEBUG" if verbose else cfg.log_level)

    if source is not None and not source.exists():
        console.print(f"[red]Error:[/] File not found: {source}")
        raise typer.Exit(1)

    store = _build_store(cfg, dictionary)
    separator = cfg.output.separator if separator is None else separator
    explain = explain or cfg.output.explain

    for line in _read_lines(source):
        pairs, scan_issues = scan(line)
        if not pairs:
            continue

        resolved = decode(pairs, store)
        issues = scan_issues + collect_issues(pairs, store) if explain else []

        if format == OutputFormat.json:
            record = {
                'version': resolve_version(pairs),
                'fields': [r.to_dict() for r in resolved],
            }
            if explain:
                record['issues'] = [i.to_dict() for i in issues]
            typer.echo(json.dumps(record))
            continue

        for text in format_message(resolved):
            typer.echo(text)
        for issue in issues:
            typer.echo(f"# {issue.code.value} {issue.message}")
        typer.echo(separator)


@app.command()
def fields(
    version: str = typer.Argument(..., help="Protocol version, e.g. FIX.4.4"),
    tag: Optional[str] = typer.Option(None, "-t", "--tag", help="Show one field with its values"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    dictionary: Optional[List[str]] = typer.Option(None, "-d", "--dictionary"),
):
    """List the fields of a loaded dictionary."""
    cfg = _load_cfg(config_path)
    _configure_logging(cfg.log_level)
    store = _build_store(cfg, dictionary)

    dic = store.lookup(version)
    if dic is None:
        console.print(f"[red]Dictionary not loaded:[/] {version}")
        if version in store.unavailable:
            console.print(f"  {escape(store.unavailable[version].message)}")
        raise typer.Exit(1)

    if tag is not None:
        fld = dic.get(tag) or dic.field_by_name(tag)
        if fld is None:
            console.print(f"[red]Unknown field:[/] {tag}")
            raise typer.Exit(1)

        table = Table(title=f"{fld.name} ({fld.number})")
        table.add_column("Value", style="cyan")
        table.add_column("Description")
        for enum in fld.enums:
            table.add_row(enum.value, enum.description)
        console.print(table)
        if not fld.is_coded:
            console.print("[dim]Free-form field, no coded values[/]")
        return

    table = Table(title=f"{version} ({len(dic)} fields)")
    table.add_column("Tag", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Values", justify="right")
    for fld in sorted(dic.values(), key=lambda f: (len(f.number), f.number)):
        table.add_row(fld.number, fld.name, fld.data_type or "", str(len(fld.enums)))
    console.print(table)


@app.command()
def dictionaries(
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    dictionary: Optional[List[str]] = typer.Option(None, "-d", "--dictionary"),
):
    """Show loaded and unavailable dictionaries."""
    cfg = _load_cfg(config_path)
    _configure_logging(cfg.log_level)
    store = _build_store(cfg, dictionary)

    table = Table(title="Dictionaries")
    table.add_column("Version", style="cyan")
    table.add_column("Status")
    table.add_column("Fields", justify="right")

    for version in store.versions:
        table.add_row(version, "[green]loaded[/]", str(len(store.lookup(version))))
    for version, issue in store.unavailable.items():
        table.add_row(version, f"[red]unavailable[/] {escape(str(issue.context.get('reason', '')))}", "-")

    console.print(table)


@app.command("config")
def config_cmd(
    action: str = typer.Argument(..., help="Action: init|validate|dump"),
    path: Optional[Path] = typer.Argument(None, help="Config file path"),
):
    """Configuration management."""
    if action == "init":
        typer.echo(generate_default_config())

    elif action == "validate":
        if not path:
            console.print("[red]Path required for validate[/]")
            raise typer.Exit(1)
        try:
            cfg = FixlensConfig.load(path)
        except Exception as e:
            console.print(f"[red]Error:[/] {e}")
            raise typer.Exit(1)
        errors = cfg.validate()
        if errors:
            console.print("[red]Invalid configuration:[/]")
            for e in errors:
                console.print(f"  - {e}")
            raise typer.Exit(1)
        console.print(f"[green]Valid:[/] {path}")

    elif action == "dump":
        cfg = _load_cfg(path)
        typer.echo(cfg.to_yaml())

    else:
        console.print(f"[red]Unknown action:[/] {action}")
        console.print("Valid actions: init, validate, dump")
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold blue]fixlens v{__version__}[/]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
