"""Main CLI interface for LockWatch."""

from contextlib import contextmanager
from pathlib import Path
from typing import FrozenSet, Iterator, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from .. import __version__
from ..config import load_config
from ..core.affected import normalize_affected_names, parse_affected_names
from ..core.analyzer import LockfileAnalyzer
from ..core.errors import LockfileError
from ..core.parsers import registry
from ..output.formatters import ConsoleFormatter, JSONFormatter
from ..utils.logging import setup_logging, get_logger

app = typer.Typer(
    name="lockwatch",
    help="Check an npm or yarn lockfile for packages on an affected list",
    add_completion=False
)
affected_app = typer.Typer(help="Show or edit the affected package list")
app.add_typer(affected_app, name="affected")

console = Console()
logger = get_logger("CLI")


def _resolve_affected_names(
    affected_file: Optional[Path],
    packages: Optional[List[str]]
) -> FrozenSet[str]:
    """Pick the affected names for a scan.

    Names given on the command line or in a list file replace the configured
    list; otherwise the configured list is used.
    """
    if affected_file is None and not packages:
        return load_config().load_affected_names()

    names = normalize_affected_names(packages or [])
    if affected_file is not None:
        names |= parse_affected_names(affected_file.read_text(encoding="utf-8-sig"))
    return names


@app.command()
def scan(
    lockfile: Path = typer.Argument(
        ...,
        help="Path to a package-lock.json or yarn.lock file"
    ),
    affected_file: Optional[Path] = typer.Option(
        None,
        "--affected-file",
        "-f",
        help="File with one affected package name per line"
    ),
    packages: Optional[List[str]] = typer.Option(
        None,
        "--package",
        "-p",
        help="Affected package name (repeatable)"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file for JSON results"
    ),
    fail_on_match: bool = typer.Option(
        False,
        "--fail-on-match",
        help="Exit with code 2 when an affected package is found"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    )
) -> None:
    """Scan a lockfile for packages on the affected list."""

    setup_logging(verbose=verbose)

    console_formatter = ConsoleFormatter(console)
    json_formatter = JSONFormatter(output)

    try:
        affected_names = _resolve_affected_names(affected_file, packages)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: Could not read affected list: {e}[/red]")
        raise typer.Exit(1)

    if not affected_names:
        console.print("[yellow]The affected package list is empty[/yellow]")

    try:
        report = LockfileAnalyzer().analyze_file(lockfile, affected_names)
    except LockfileError as e:
        logger.debug(f"Analysis of {lockfile} failed: {e.kind.value}")
        console_formatter.format_error(e)
        if output:
            json_formatter.save_results(json_formatter.format_error(e))
        raise typer.Exit(1)

    console_formatter.format_report(report)

    if output:
        json_formatter.save_results(json_formatter.format_report(report))
        console.print(f"[green]Results saved to: {output}[/green]")

    if fail_on_match and report.result.found:
        raise typer.Exit(2)


@contextmanager
def _affected_list_errors() -> Iterator[None]:
    """Turn failures reading or writing the stored list into exit code 1."""
    try:
        yield
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: Could not access affected list: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@affected_app.command("show")
def affected_show() -> None:
    """Show the affected package list used by scans."""
    config = load_config()
    with _affected_list_errors():
        if config.affected_list_path.exists():
            source = str(config.affected_list_path)
        else:
            source = "built-in list"
        names = config.load_affected_names()

    ConsoleFormatter(console).format_affected_list(names, source)


@affected_app.command("add")
def affected_add(
    names: List[str] = typer.Argument(..., help="Package names to add")
) -> None:
    """Add package names to the affected list."""
    config = load_config()
    with _affected_list_errors():
        current = config.load_affected_names()
        updated = current | normalize_affected_names(names)
        config.save_affected_names(updated)
    console.print(f"Added {len(updated) - len(current)} package(s); {len(updated)} in list")


@affected_app.command("remove")
def affected_remove(
    names: List[str] = typer.Argument(..., help="Package names to remove")
) -> None:
    """Remove package names from the affected list."""
    config = load_config()
    with _affected_list_errors():
        current = config.load_affected_names()
        updated = current - normalize_affected_names(names)
        config.save_affected_names(updated)
    console.print(f"Removed {len(current) - len(updated)} package(s); {len(updated)} in list")


@affected_app.command("reset")
def affected_reset() -> None:
    """Discard the stored list and go back to the built-in one."""
    with _affected_list_errors():
        load_config().reset_affected_names()
    console.print("Affected list reset to the built-in list")


@app.command()
def info() -> None:
    """Show LockWatch information."""

    console.print(Panel.fit(
        f"[bold blue]LockWatch[/bold blue] {__version__}\n"
        "Checks npm and yarn lockfiles for packages on an affected list",
        title="Information"
    ))

    file_names = registry.get_supported_file_names()
    console.print(f"\n[bold]Supported Lockfiles:[/bold] {', '.join(file_names)}")


def main() -> None:
    """Main entry point for LockWatch CLI."""
    app()


if __name__ == "__main__":
    main()
