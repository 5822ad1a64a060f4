"""
Command line interface for inspecting and deploying the admin panel.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .app import App
from .config import ConfigError, PanelConfig, PanelError, get_settings, load_config
from .panel import SEPARATOR, Assets, Menu
from .toolkit import View

console = Console()
app = typer.Typer(help="Build menus, resolve assets and link the admin panel.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = get_settings().log_level
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Optional[Path]) -> Path:
    """Fall back to PANELKIT_CONFIG and ensure the config path is a file."""
    candidate = value or get_settings().config_path
    if candidate is None:
        raise typer.BadParameter("No config file given; use --config or set PANELKIT_CONFIG")
    resolved = Path(candidate).expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(path: Optional[Path]) -> PanelConfig:
    try:
        return load_config(_resolve_config_path(path))
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _parse_data(pairs: List[str]) -> Dict[str, str]:
    data: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {pair!r}")
        data[key.strip()] = value
    return data


CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to the panel configuration TOML (defaults to $PANELKIT_CONFIG).",
)
REQUEST_OPTION = typer.Option(
    None,
    "--request-url",
    help="URL of the simulated request (defaults to request_url from the config).",
)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show panelkit version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]panelkit[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def menu(
    config: Optional[Path] = CONFIG_OPTION,
    request_url: Optional[str] = REQUEST_OPTION,
    current: Optional[str] = typer.Option(
        None,
        "--current",
        help="Id of the active area (defaults to current from the config).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the entries as JSON."),
) -> None:
    """
    Show the menu entries the panel sidebar would render.
    """
    panel_config = _load_config_or_exit(config)
    panel_app = App.from_config(panel_config, request_url=request_url)
    entries = Menu(
        panel_app,
        areas=panel_config.area_definitions(),
        permissions=panel_config.permissions,
        current=current or panel_config.current,
    ).entries()

    if as_json:
        console.print_json(data=entries)
        return

    table = Table(title="Panel Menu")
    table.add_column("Text")
    table.add_column("Action", overflow="fold")
    table.add_column("Icon")
    table.add_column("State")
    for entry in entries:
        if entry == SEPARATOR:
            table.add_section()
            continue
        action = entry.get("link") or entry.get("dialog") or entry.get("drawer") or ""
        state = ", ".join(flag for flag in ("current", "disabled") if entry.get(flag))
        table.add_row(entry.get("text", ""), action, entry.get("icon", ""), state)
    console.print(table)


@app.command()
def assets(
    config: Optional[Path] = CONFIG_OPTION,
    request_url: Optional[str] = REQUEST_OPTION,
) -> None:
    """
    Print the css, js and icon payload of the panel page as JSON.
    """
    panel_config = _load_config_or_exit(config)
    panel_app = App.from_config(panel_config, request_url=request_url)
    try:
        payload = Assets(panel_app).external()
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    console.print_json(data=payload)


@app.command()
def link(config: Optional[Path] = CONFIG_OPTION) -> None:
    """
    Copy the built panel into the versioned media folder if needed.
    """
    panel_config = _load_config_or_exit(config)
    panel_app = App.from_config(panel_config)
    try:
        linked = Assets(panel_app).link()
    except PanelError as exc:
        console.print(f"[bold red]Linking failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if linked:
        console.print(f"[bold green]Panel assets linked[/] (version {panel_app.version_hash()}).")
    else:
        console.print("[green]Panel assets already up to date.[/]")


@app.command()
def render(
    template: Path = typer.Argument(..., help="Template file to render."),
    data: List[str] = typer.Option(
        None,
        "--data",
        "-d",
        help="Template variables as key=value (multiple allowed).",
    ),
) -> None:
    """
    Render a view template and print its output.
    """
    view = View(template, _parse_data(data or []))
    try:
        output = view.render()
    except PanelError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/]")
        raise typer.Exit(code=1) from exc
    typer.echo(output, nl=False)


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
