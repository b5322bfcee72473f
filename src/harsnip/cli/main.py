"""harsnip CLI - turn HAR files into code snippets."""

import json
import os
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

import harsnip
from harsnip import console as hs_console
from harsnip.config import get_settings
from harsnip.exceptions import HARParseError, InputError
from harsnip.har import load_har_file
from harsnip.logging import configure_logging, get_logger, level_for_verbosity
from harsnip.registry import default_registry
from harsnip.snippet import HTTPSnippet

# Configure logging early using env vars directly; -v/-vv and --log-format
# in main_callback() may reconfigure later.
configure_logging(
    level=os.environ.get("HARSNIP_LOG_LEVEL", "WARNING"),
    json_output=os.environ.get("HARSNIP_LOG_FORMAT", "console") == "json",
)

LOG = get_logger(__name__)

app = typer.Typer(
    name="harsnip",
    help="""
    harsnip - turn HAR requests into code snippets

    \b
    Quick start:
      harsnip targets                          List targets and clients
      harsnip convert capture.har -t shell     Print curl commands
      harsnip convert req.json -t python -o .  Write req.py
    """,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


def parse_options(pairs: list[str]) -> dict[str, Any]:
    """Parse ``key=value`` renderer options.

    Values are decoded as JSON when possible (``short=true``, ``indent=false``)
    and kept as plain strings otherwise.

    Raises:
        typer.BadParameter: If a pair has no ``=``.
    """
    options: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'")
        try:
            options[key] = json.loads(raw)
        except ValueError:
            options[key] = raw
    return options


@app.callback(invoke_without_command=True)
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase verbosity (-v for info, -vv for debug)",
        ),
    ] = 0,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            help="Log output format: console (human-readable) or json (structured)",
        ),
    ] = None,
) -> None:
    """harsnip - turn HAR requests into code snippets."""
    settings = get_settings()
    json_output = (log_format or settings.log_format) == "json"

    if verbose or log_format is not None:
        configure_logging(
            level=level_for_verbosity(verbose, default=settings.log_level),
            json_output=json_output,
        )


@app.command("version")
def version() -> None:
    """Show harsnip version."""
    settings = get_settings()
    console.print(
        Panel(
            f"[bold cyan]harsnip[/bold cyan] v{harsnip.__version__}\n\n"
            f"[dim]Default target:[/dim] {settings.default_target}",
            title="HAR to code snippets",
            border_style="cyan",
        )
    )


@app.command("targets")
def targets() -> None:
    """List available targets and their clients."""
    registry = default_registry()

    table = Table(title="Targets", show_header=True, header_style="bold")
    table.add_column("Target", style="cyan")
    table.add_column("Title")
    table.add_column("Ext", style="dim")
    table.add_column("Clients")

    for target in registry.list_targets():
        clients = ", ".join(
            f"[bold]{c['key']}[/bold]" if c["key"] == target["default"] else c["key"]
            for c in target["clients"]
        )
        table.add_row(target["key"], target["title"], target["extname"] or "-", clients)

    console.print(table)
    console.print("[dim]Default clients are shown in bold.[/dim]")


@app.command("convert")
def convert(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="HAR files or single-request JSON files",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    target: Annotated[
        str | None,
        typer.Option("--target", "-t", help="Target, e.g. shell, python (default from settings)"),
    ] = None,
    client: Annotated[
        str | None,
        typer.Option("--client", "-c", help="Client, e.g. curl, requests (target default if omitted)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to write snippets to (default: print to stdout)",
            file_okay=False,
            dir_okay=True,
        ),
    ] = None,
    option: Annotated[
        list[str] | None,
        typer.Option("--option", "-x", help="Renderer option as key=value (repeatable)"),
    ] = None,
) -> None:
    """Convert HAR files into code snippets.

    \b
    Examples:
        harsnip convert capture.har -t shell -c curl
        harsnip convert request.json -t python -x indent='  '
        harsnip convert a.har b.har -t node -o ./snippets
    """
    settings = get_settings()
    target_id = target or settings.default_target
    client_id = client or settings.default_client
    options = {**settings.renderer_options(), **parse_options(option or [])}

    registry = default_registry()
    if target_id not in registry:
        hs_console.error(f"Unknown target '{target_id}'. Run 'harsnip targets' to list targets.")
        raise typer.Exit(1)

    if output is not None:
        output.mkdir(parents=True, exist_ok=True)

    for har_file in files:
        try:
            snippet = HTTPSnippet(load_har_file(har_file), registry=registry)
        except (HARParseError, InputError) as exc:
            hs_console.error(f"Failed to parse {har_file}: {exc}")
            raise typer.Exit(1) from None

        result = snippet.convert(target_id, client_id, options)
        snippets = [result] if isinstance(result, str) else list(result or [])
        if not snippets:
            hs_console.warn(f"No valid requests in {har_file}")
            continue

        code = "\n\n".join(snippets)
        if output is None:
            hs_console.snippet(code)
            continue

        destination = output / f"{har_file.stem}{registry.extension_for(target_id)}"
        destination.write_text(code + "\n", encoding="utf-8")
        LOG.info("snippet_written", path=str(destination), requests=len(snippets))
        hs_console.success(f"Wrote {destination}")


if __name__ == "__main__":
    app()
