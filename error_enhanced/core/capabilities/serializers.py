"""JSON, XML, CSV and YAML renderings of a composite error."""

from __future__ import annotations

import csv
import io
import json
import re
import xml.etree.ElementTree as ET
from collections.abc import Callable
from typing import Any

import yaml

from error_enhanced.core.composition import SNAPSHOT_CACHE_FIELD
from error_enhanced.core.config import get_config
from error_enhanced.core.exceptions import ErrorBoundary, ErrorCode, ErrorMessageTemplate, SerializationError
from error_enhanced.core.snapshot import build_snapshot

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_INVALID_TAG_CHARS = re.compile(r"[^A-Za-z0-9\-._]")
_VALID_TAG_START = re.compile(r"[A-Za-z_]")

_boundary = ErrorBoundary("serializers")


class _Omit:
    def __repr__(self) -> str:
        return "OMIT"


OMIT: Any = _Omit()
"""Returned by a JSON replacer to leave a key out of the output."""

Replacer = Callable[[Any, Any], Any]


def default_replacer(key: Any, value: Any) -> Any:
    """Drop ``None`` and empty strings."""
    if value is None or (isinstance(value, str) and value == ""):
        return OMIT
    return value


def sanitize_tag(name: Any) -> str:
    """Make ``name`` usable as an XML element name."""
    tag = _INVALID_TAG_CHARS.sub("_", str(name))
    if not _VALID_TAG_START.match(tag):
        tag = f"_{tag}"
    return tag


def _serialization_error(format_name: str) -> Callable[[Exception], SerializationError]:
    def wrap(exc: Exception) -> SerializationError:
        message = ErrorMessageTemplate.get_message(ErrorCode.SERIALIZATION_ERROR, format=format_name, message=str(exc))
        return SerializationError(message, format=format_name)

    return wrap


def _replace(key: Any, value: Any, replacer: Replacer) -> Any:
    value = replacer(key, value)
    if value is OMIT:
        return OMIT
    if isinstance(value, dict):
        result = {}
        for item_key, item in value.items():
            replaced = _replace(item_key, item, replacer)
            if replaced is not OMIT:
                result[item_key] = replaced
        return result
    if isinstance(value, list):
        # Omitted list items become null, as with JSON.stringify.
        return [None if (item := _replace(index, entry, replacer)) is OMIT else item for index, entry in enumerate(value)]
    return value


def _fill_element(element: ET.Element, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, dict):
        for key, item in value.items():
            _fill_element(ET.SubElement(element, sanitize_tag(key)), item)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _fill_element(ET.SubElement(element, f"item_{index}"), item)
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    else:
        element.text = str(value)


def _csv_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return value


class SerializersUtility:
    """Capability rendering the error's canonical snapshot in four text formats.

    All formats read the same snapshot, built lazily and cached until any
    attribute of the error is rebound. Failures are logged and raised as
    :class:`SerializationError`.
    """

    def serializable_snapshot(self) -> dict[str, Any]:
        """Return the cached canonical snapshot, building it when missing."""
        snapshot = self.__dict__.get(SNAPSHOT_CACHE_FIELD)
        if snapshot is None:
            snapshot = build_snapshot(self, getattr(type(self), "_transient_fields", ()))
            setattr(self, SNAPSHOT_CACHE_FIELD, snapshot)
        return snapshot

    def to_json(self, replacer: Replacer | None = None, *, indent: int | None = None) -> str:
        """Render as JSON.

        Args:
            replacer: ``(key, value) -> value | OMIT``, applied to the root
                (key ``""``) and then to every key and list index.
                Defaults to dropping ``None`` and ``""``.
            indent: Pretty-print indentation; the configured default when omitted.
        """
        with _boundary.guard("to_json", _serialization_error("JSON"), name=self.name):
            replaced = _replace("", self.serializable_snapshot(), replacer or default_replacer)
            if replaced is OMIT:
                replaced = None
            if indent is None:
                indent = get_config().serialization.json_indent
            return json.dumps(replaced, indent=indent, ensure_ascii=False)

    def to_xml(self) -> str:
        """Render as an XML document whose root element is the error's name."""
        with _boundary.guard("to_xml", _serialization_error("XML"), name=self.name):
            root = ET.Element(sanitize_tag(self.name))
            _fill_element(root, self.serializable_snapshot())
            ET.indent(root, space=get_config().serialization.xml_indent)
            return f"{XML_DECLARATION}\n{ET.tostring(root, encoding='unicode')}"

    def to_csv(self, delimiter: str | None = None, quoted: bool | None = None) -> str:
        """Render as CSV: one header row and one data row.

        Booleans are written as the text cells ``true`` and ``false``, so they
        are quoted together with the other text cells when ``quoted`` is set.
        Numbers are never quoted and ``None`` is an empty cell.

        Args:
            delimiter: Field separator; the configured default (``,``) when omitted.
            quoted: Quote text cells; the configured default (``True``) when omitted.
        """
        with _boundary.guard("to_csv", _serialization_error("CSV"), name=self.name):
            settings = get_config().serialization
            delimiter = settings.csv_delimiter if delimiter is None else delimiter
            quoted = settings.csv_quoted if quoted is None else quoted
            snapshot = self.serializable_snapshot()

            buffer = io.StringIO()
            writer = csv.writer(
                buffer,
                delimiter=delimiter,
                quoting=csv.QUOTE_NONNUMERIC if quoted else csv.QUOTE_MINIMAL,
            )
            writer.writerow(list(snapshot))
            writer.writerow([_csv_cell(value) for value in snapshot.values()])
            return buffer.getvalue().rstrip("\r\n")

    def to_yaml(self) -> str:
        """Render as block-style YAML in field order."""
        with _boundary.guard("to_yaml", _serialization_error("YAML"), name=self.name):
            return yaml.safe_dump(
                self.serializable_snapshot(),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
