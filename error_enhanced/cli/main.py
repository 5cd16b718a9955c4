"""Main entry point for the error_enhanced command line interface."""

from __future__ import annotations

from pathlib import Path

import typer

from error_enhanced.core.config import get_config
from error_enhanced.core.logging import configure_logging

from .errors import register as register_error_commands
from .formatters import create_formatter


def create_app() -> typer.Typer:
    """Create a Typer application instance for error_enhanced."""

    app = typer.Typer(add_completion=False, help="Build, inspect and serialize enhanced errors")

    @app.callback()
    def main(
        ctx: typer.Context,
        format: str = typer.Option(
            "json",
            "--format",
            "-f",
            help="Output format (json, xml, csv, yaml or table).",
            show_default=True,
        ),
        output: Path | None = typer.Option(
            None,
            "--output",
            "-o",
            help="Write output to a file instead of stdout.",
        ),
        log_level: str | None = typer.Option(
            None,
            "--log-level",
            help="Logging level for diagnostics written to stderr; the configured level by default.",
        ),
        no_color: bool = typer.Option(
            False,
            "--no-color",
            help="Disable colorized output for table format.",
        ),
    ) -> None:
        ctx.ensure_object(dict)
        normalized_format = format.strip().lower()
        try:
            create_formatter(normalized_format, no_color=no_color)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--format") from exc

        log_settings = get_config().logging
        resolved_level = (log_level or log_settings.level).upper()
        ctx.obj.update(
            {
                "format": normalized_format,
                "output_path": output,
                "log_level": resolved_level,
                "no_color": no_color,
            }
        )
        configure_logging(
            resolved_level,
            file_output=log_settings.file is not None,
            file_path=log_settings.file,
        )

    register_error_commands(app)
    return app


app = create_app()
