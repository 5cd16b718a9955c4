"""Commands that build a composite error from options and print it."""

from __future__ import annotations

import typer

from error_enhanced import __version__
from error_enhanced.core.capabilities import FilterUtility, SerializersUtility
from error_enhanced.core.composition import EnhancedError, compose
from error_enhanced.core.enhancers import HttpStatusEnhancer, IdentifiersEnhancer, SystemContextEnhancer
from error_enhanced.core.exceptions import FieldValidationError, SerializationError

from .constants import SERIALIZATION_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import emit_error, prepare_output


def register(app: typer.Typer) -> None:
    """Register error commands on the root CLI application."""

    app.command("render")(render_command)
    app.command("inspect")(inspect_command)
    app.command("version")(version_command)


def build_error(
    *,
    message: str = "",
    name: str | None = None,
    code: int | None = None,
    prefix: str | None = None,
    severity: str | None = None,
    category: str | None = None,
    description: str | None = None,
    status: int | None = None,
    url: str | None = None,
    method: str | None = None,
    filter_unused: bool = True,
) -> EnhancedError:
    """Compose an error with identifier, HTTP and system context and apply the given values.

    Raises:
        FieldValidationError: One of the values is invalid.
    """

    error = compose(
        [IdentifiersEnhancer(), HttpStatusEnhancer(), SystemContextEnhancer(), FilterUtility(), SerializersUtility()],
        message,
        name=name,
    )
    if code is not None:
        error.set_error_code(code)
    if prefix is not None:
        error.set_error_code_prefix(prefix)
    if severity is not None:
        error.set_severity(severity.lower())
    if category is not None:
        error.set_category(category.lower())
    if description is not None:
        error.set_error_description(description)
    if status is not None:
        error.set_http_status_code(status)
    if url is not None:
        error.set_url(url)
    if method is not None:
        error.set_http_method(method.upper())
    return error.filter_unused() if filter_unused else error


def render_command(
    ctx: typer.Context,
    message: str = typer.Option("", "--message", "-m", help="Error message."),
    name: str | None = typer.Option(None, "--name", help="Error name (root element in XML)."),
    code: int | None = typer.Option(None, "--code", help="Positive error code."),
    prefix: str | None = typer.Option(None, "--prefix", help="Error code prefix."),
    severity: str | None = typer.Option(None, "--severity", help="low, medium, high or critical."),
    category: str | None = typer.Option(None, "--category", help="Error category."),
    description: str | None = typer.Option(None, "--description", help="Error description."),
    status: int | None = typer.Option(None, "--status", help="HTTP status code."),
    url: str | None = typer.Option(None, "--url", help="Request URL."),
    method: str | None = typer.Option(None, "--method", help="HTTP method."),
    no_filter: bool = typer.Option(False, "--no-filter", help="Keep fields that were never set."),
) -> None:
    """Build an error and print it in the selected format."""

    error = _build_or_exit(
        message=message,
        name=name,
        code=code,
        prefix=prefix,
        severity=severity,
        category=category,
        description=description,
        status=status,
        url=url,
        method=method,
        filter_unused=not no_filter,
    )
    formatter, stream, stack = prepare_output(ctx)
    try:
        formatter.render(error, stream=stream)
    except SerializationError as exc:
        emit_error(exc.message, exc.error_code, details=exc.details)
        raise typer.Exit(code=SERIALIZATION_EXIT_CODE) from exc
    finally:
        stack.close()


def inspect_command(
    ctx: typer.Context,
    message: str = typer.Option("", "--message", "-m", help="Error message."),
    name: str | None = typer.Option(None, "--name", help="Error name."),
    code: int | None = typer.Option(None, "--code", help="Positive error code."),
    prefix: str | None = typer.Option(None, "--prefix", help="Error code prefix."),
    severity: str | None = typer.Option(None, "--severity", help="low, medium, high or critical."),
    category: str | None = typer.Option(None, "--category", help="Error category."),
) -> None:
    """Show the filtered fields of an error as a table."""

    error = _build_or_exit(
        message=message, name=name, code=code, prefix=prefix, severity=severity, category=category
    )
    formatter, stream, stack = prepare_output(ctx, format="table")
    try:
        formatter.render(error, stream=stream)
    finally:
        stack.close()


def version_command() -> None:
    """Print the installed version."""

    typer.echo(__version__)


def _build_or_exit(**options: object) -> EnhancedError:
    try:
        return build_error(**options)  # type: ignore[arg-type]
    except FieldValidationError as error:
        emit_error(error.message, error.error_code, details=error.details)
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error


__all__ = ["register", "build_error", "render_command", "inspect_command", "version_command"]
