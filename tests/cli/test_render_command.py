from __future__ import annotations

import csv
import io
import json

import pytest
import yaml
from typer.testing import CliRunner

from error_enhanced import __version__
from error_enhanced.cli import errors as errors_module
from error_enhanced.cli.constants import SERIALIZATION_EXIT_CODE, VALIDATION_EXIT_CODE
from error_enhanced.cli.main import create_app
from error_enhanced.core.exceptions import SerializationError

PAYMENT_ARGS = [
    "--message",
    "Payment failed",
    "--name",
    "PaymentError",
    "--code",
    "5432",
    "--prefix",
    "EE",
    "--severity",
    "HIGH",
    "--category",
    "network",
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_render_json_output(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["render", *PAYMENT_ARGS])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["_error_code"] == 5432
    assert data["_error_code_prefix"] == "EE"
    assert data["_severity"] == "high"
    assert data["name"] == "PaymentError"
    assert "_url" not in data


def test_render_without_filter_keeps_defaults(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["render", "--no-filter", "--code", "7"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["_http_status_code"] == -1


def test_render_xml_output(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "render", *PAYMENT_ARGS])

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<_severity>high</_severity>" in result.stdout


def test_render_csv_output(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--format", "csv", "render", *PAYMENT_ARGS])

    assert result.exit_code == 0, result.output
    rows = list(csv.reader(io.StringIO(result.stdout)))
    record = dict(zip(rows[0], rows[1], strict=True))
    assert record["_category"] == "network"


def test_render_yaml_output(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["-f", "yaml", "render", *PAYMENT_ARGS])

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.stdout)["_error_code"] == 5432


def test_render_http_options(runner: CliRunner) -> None:
    result = runner.invoke(
        create_app(),
        ["render", "--status", "502", "--url", "https://api.example.com/pay", "--method", "post"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["_http_status_code"] == 502
    assert data["_http_method"] == "POST"
    assert data["_url"] == "https://api.example.com/pay"


def test_invalid_severity_exits_with_validation_error(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["render", "--severity", "urgent"])

    assert result.exit_code == VALIDATION_EXIT_CODE
    assert "VALIDATION_ERROR" in result.output
    assert "severity" in result.output


def test_validation_error_payload_shape(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["render", "--method", "TRACE"])

    assert result.exit_code == VALIDATION_EXIT_CODE
    payload = json.loads(result.output.strip().splitlines()[-1])
    assert payload["code"] == "VALIDATION_ERROR"
    assert payload["message"].startswith("Invalid http_method: 'TRACE'")
    assert payload["details"]["field"] == "http_method"
    assert payload["details"]["valid_values"] == ["GET", "POST", "PATCH", "PUT", "DELETE"]


def test_non_positive_code_is_rejected(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["render", "--code", "0"])

    assert result.exit_code == VALIDATION_EXIT_CODE
    assert "VALIDATION_ERROR" in result.output


def test_unknown_format_is_rejected(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--format", "toml", "render"])

    assert result.exit_code != 0
    assert "Unsupported format" in result.output


def test_serialization_failure_exit_code(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    original = errors_module.build_error

    def failing_build(**options: object):
        error = original(**options)
        error.to_json = _raise_serialization_error
        return error

    monkeypatch.setattr(errors_module, "build_error", failing_build)

    result = runner.invoke(create_app(), ["render", "--code", "1"])

    assert result.exit_code == SERIALIZATION_EXIT_CODE
    assert "SERIALIZATION_ERROR" in result.output


def _raise_serialization_error(*args: object, **kwargs: object) -> str:
    raise SerializationError("Failed to serialize to JSON: broken", format="JSON")


def test_render_writes_output_file(runner: CliRunner, tmp_path) -> None:
    target = tmp_path / "error.json"

    result = runner.invoke(create_app(), ["--output", str(target), "render", *PAYMENT_ARGS])

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))["_error_code"] == 5432
    assert result.stdout == ""


def test_inspect_renders_table(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--no-color", "inspect", *PAYMENT_ARGS])

    assert result.exit_code == 0, result.output
    assert "PaymentError" in result.output
    assert "_error_code" in result.output
    assert "5432" in result.output
    assert "network" in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == __version__
