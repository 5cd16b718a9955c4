"""Output formatters for CLI commands."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table

from error_enhanced.core.composition import EnhancedError

SERIALIZER_METHODS = {
    "json": "to_json",
    "xml": "to_xml",
    "csv": "to_csv",
    "yaml": "to_yaml",
}
AVAILABLE_FORMATS = (*SERIALIZER_METHODS, "table")


class OutputFormatter:
    """Protocol-like base class for CLI output formatters."""

    name: str

    def render(self, error: EnhancedError, *, stream: TextIO) -> None:
        """Render ``error`` to the target stream."""

        raise NotImplementedError


@dataclass(slots=True)
class SerializerFormatter(OutputFormatter):
    """Write the output of one of the error's serializers."""

    name: str = "json"

    def render(self, error: EnhancedError, *, stream: TextIO) -> None:
        text = getattr(error, SERIALIZER_METHODS[self.name])()
        stream.write(text)
        if not text.endswith("\n"):
            stream.write("\n")
        stream.flush()


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render the error's snapshot as a two-column Rich table."""

    name: str = "table"
    no_color: bool = False

    def render(self, error: EnhancedError, *, stream: TextIO) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        header_style = "" if self.no_color else "bold"
        table = Table(box=SIMPLE, show_lines=False, title=error.name)
        table.add_column("field", header_style=header_style)
        table.add_column("value", header_style=header_style)

        snapshot = error.serializable_snapshot()
        if not snapshot:
            console.print("No fields set.")
            return
        for field, value in snapshot.items():
            table.add_row(field, self._format_cell(value))
        console.print(table)

    def _format_cell(self, value: Any) -> str:
        if value is None:
            return "-"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            return json.dumps(value, ensure_ascii=False)
        return str(value)


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized in SERIALIZER_METHODS:
        return SerializerFormatter(name=normalized)
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    msg = f"Unsupported format '{name}'. Available formats: {', '.join(AVAILABLE_FORMATS)}."
    raise ValueError(msg)


__all__ = ["AVAILABLE_FORMATS", "OutputFormatter", "SerializerFormatter", "TableFormatter", "create_formatter"]
