"""Typer CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from globe_cli import __version__


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"globe-cli {__version__}")
        raise typer.Exit()


def _configure_logging(log_file: Optional[Path]) -> None:
    """Log to a file only; the terminal belongs to the viewer."""
    logger = logging.getLogger("globe_cli")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    if log_file is None:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="globe-cli",
        help="Render an ASCII globe in your terminal.",
        rich_markup_mode="rich",
    )
    err_console = Console(stderr=True)

    @app.command()
    def globe(
        ctx: typer.Context,
        interactive: Annotated[bool, typer.Option("--interactive", "-i", help="Rotate with arrow keys or mouse drag, zoom with PgUp/PgDn or the wheel")] = False,
        screensaver: Annotated[bool, typer.Option("--screensaver", "-s", help="Spin the globe until a key is pressed")] = False,
        cell_width: Annotated[int, typer.Option("--cell-width", min=1, help="Glyph columns packed into one terminal cell")] = 4,
        cell_height: Annotated[int, typer.Option("--cell-height", min=1, help="Glyph rows packed into one terminal cell")] = 8,
        log_file: Annotated[Optional[Path], typer.Option("--log-file", envvar="GLOBE_CLI_LOG_FILE", help="Write debug logs to this file")] = None,
        version: Annotated[bool, typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit")] = False,
    ) -> None:
        """Render an ASCII globe in your terminal.

        Any character key quits. Press [bold]Enter[/] to focus the globe.
        """
        if not (interactive or screensaver):
            typer.echo(ctx.get_help())
            raise typer.Exit()

        from globe_cli.cli.core.terminal import TerminalError
        from globe_cli.cli.studio import viewer
        from globe_cli.config import GlyphPacking, ViewerConfig

        _configure_logging(log_file)
        config = ViewerConfig(packing=GlyphPacking(cols=cell_width, rows=cell_height))

        try:
            # -i wins when both flags are given
            viewer.run_viewer(interactive=interactive, config=config)
        except TerminalError as e:
            err_console.print(f"[red]Terminal error:[/] {escape(str(e))}")
            raise typer.Exit(1)

    return app
