"""Thin CLI wrapper: Typer commands that delegate to the Container.

All document building goes through ``apibake.bootstrap.Container``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from apibake.config.loader import DEFAULT_CONFIG_FILENAME
from apibake.domain.errors import ApiBakeError
from apibake.presentation.cli.formatters import error_message, json_panel, success_panel

app = typer.Typer(
    name="apibake",
    help="📄 Render API reference documents to PDF",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

# Sub-app for config commands
config_app = typer.Typer(
    name="config",
    help="⚙️  Manage the apibake style configuration",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug logging")
    ] = False,
) -> None:
    """apibake command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# apibake demo
# ---------------------------------------------------------------------------


@app.command()
def demo(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Output PDF file")
    ] = "apibake_demo.pdf",
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help=f"Path to {DEFAULT_CONFIG_FILENAME}")
    ] = None,
    title: Annotated[str, typer.Option("--title", help="Document title")] = "Pet Store API",
    subtitle: Annotated[
        str, typer.Option("--subtitle", help="Document sub title")
    ] = "Reference documentation",
) -> None:
    """Render a sample API reference using every document block."""
    from apibake.bootstrap import Container

    try:
        container = Container(config_path=config)
        result = container.generate_demo().execute(Path(output), title, subtitle or None)
    except ApiBakeError as exc:
        error_message(str(exc))
        raise typer.Exit(code=1)

    success_panel(
        f"✅ Demo document generated: [bold green]{result}[/]", title="🍞 apibake demo"
    )


# ---------------------------------------------------------------------------
# apibake config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help=f"Path to {DEFAULT_CONFIG_FILENAME}")
    ] = None,
) -> None:
    """Print the effective configuration."""
    from apibake.config import load_config

    try:
        cfg = load_config(Path(config) if config else None)
    except ApiBakeError as exc:
        error_message(str(exc))
        raise typer.Exit(code=1)
    json_panel(cfg.to_json())


@config_app.command("export")
def config_export(
    output: Annotated[
        str, typer.Option("--output", "-o", help="Destination JSON file")
    ] = DEFAULT_CONFIG_FILENAME,
) -> None:
    """Save the default configuration into a JSON file for editing."""
    from apibake.config import export_config

    try:
        path = export_config(Path(output))
    except OSError as exc:
        error_message(f"Cannot write {output}: {exc}")
        raise typer.Exit(code=1)
    success_panel(f"✅ Default config exported into [bold green]{path}[/]")


@config_app.command("validate")
def config_validate(
    path: Annotated[str, typer.Argument(help="JSON configuration file to check")],
) -> None:
    """Validate a configuration file without rendering anything."""
    from apibake.config import load_config

    try:
        load_config(Path(path))
    except ApiBakeError as exc:
        error_message(str(exc))
        raise typer.Exit(code=1)
    success_panel(f"✅ {path} is a valid configuration")


if __name__ == "__main__":
    app()
