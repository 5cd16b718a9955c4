"""Tests for the exception hierarchy, message templates and error boundary."""

import pytest

from error_enhanced.core.exceptions import (
    CommandExecutionError,
    ConfigurationError,
    DependencyDiscoveryError,
    EnhancementError,
    ErrorBoundary,
    ErrorCode,
    ErrorMessageTemplate,
    FieldValidationError,
    SerializationError,
    StackAnalysisError,
    format_error_payload,
    validation_message,
)


class TestErrorHierarchy:
    """Every library error carries a code and structured details."""

    def test_base_error(self):
        error = EnhancementError("something broke", details={"key": "value"})

        assert str(error) == "something broke"
        assert error.error_code == ErrorCode.GENERAL_ERROR.value
        assert error.details == {"key": "value"}

    def test_field_validation_error_is_value_error(self):
        error = FieldValidationError("Invalid severity", field="severity", value="urgent", reason="unknown")

        assert isinstance(error, ValueError)
        assert isinstance(error, EnhancementError)
        assert error.error_code == "VALIDATION_ERROR"
        assert error.details == {"field": "severity", "value": "urgent", "reason": "unknown"}

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (SerializationError("x", format="XML"), ErrorCode.SERIALIZATION_ERROR),
            (CommandExecutionError("x", command="uv --version"), ErrorCode.COMMAND_EXECUTION_ERROR),
            (DependencyDiscoveryError("x", phase="parse_dependencies"), ErrorCode.DEPENDENCY_DISCOVERY_ERROR),
            (StackAnalysisError("x"), ErrorCode.STACK_ANALYSIS_ERROR),
            (ConfigurationError("x", source="config.toml"), ErrorCode.CONFIGURATION_ERROR),
        ],
    )
    def test_error_codes(self, error, code):
        assert error.error_code == code.value

    def test_details_record_context(self):
        assert SerializationError("x", format="CSV").details == {"format": "CSV"}
        assert DependencyDiscoveryError("x", phase="fetch_dependencies").details == {"phase": "fetch_dependencies"}
        assert CommandExecutionError("x", command="pip", exit_code=1).details == {"command": "pip", "exit_code": 1}


class TestMessages:
    def test_templates(self):
        assert (
            ErrorMessageTemplate.get_message(ErrorCode.SERIALIZATION_ERROR, format="YAML", message="bad")
            == "Failed to serialize to YAML: bad"
        )
        assert (
            ErrorMessageTemplate.get_message(ErrorCode.DEPENDENCY_DISCOVERY_ERROR, phase="parse_dependencies", message="x")
            == "Failed during parse_dependencies: x"
        )

    def test_missing_template_variables(self):
        message = ErrorMessageTemplate.get_message(ErrorCode.SERIALIZATION_ERROR)

        assert message == "An unknown error occurred (error code: SERIALIZATION_ERROR)"

    def test_validation_message(self):
        assert validation_message("error_code", 0, "must be positive") == "Invalid error_code: '0' must be positive"
        assert validation_message("severity", "x", "unknown", ["low", "high"]).endswith("; valid values: low, high")

    def test_format_error_payload_renders_template(self):
        payload = format_error_payload(ErrorCode.DEPENDENCY_DISCOVERY_ERROR, phase="fetch_dependencies")

        assert payload["code"] == "DEPENDENCY_DISCOVERY_ERROR"
        assert payload["details"] == {"phase": "fetch_dependencies"}
        assert payload["message"] == "An unknown error occurred (error code: DEPENDENCY_DISCOVERY_ERROR)"

    def test_format_error_payload_with_message(self):
        payload = format_error_payload(ErrorCode.SERIALIZATION_ERROR, "Failed to serialize to CSV: bad", format="CSV")

        assert payload == {
            "code": "SERIALIZATION_ERROR",
            "message": "Failed to serialize to CSV: bad",
            "details": {"format": "CSV"},
        }

    def test_format_error_payload_accepts_plain_codes(self):
        assert format_error_payload("OUTPUT_WRITE_ERROR", "Unable to open") == {
            "code": "OUTPUT_WRITE_ERROR",
            "message": "Unable to open",
        }


class TestErrorBoundary:
    @pytest.fixture
    def boundary(self):
        return ErrorBoundary("tests")

    def test_wraps_unexpected_errors(self, boundary):
        with pytest.raises(SerializationError) as exc_info:
            with boundary.guard("to_xml", lambda exc: SerializationError(str(exc), format="XML")):
                raise KeyError("tag")

        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_validation_errors_pass_through(self, boundary):
        with pytest.raises(FieldValidationError):
            with boundary.guard("set", lambda exc: SerializationError(str(exc), format="XML")):
                raise FieldValidationError("bad", field="f", value=1, reason="r")

    def test_passthrough_types(self, boundary):
        with pytest.raises(DependencyDiscoveryError) as exc_info:
            with boundary.guard(
                "outer",
                lambda exc: DependencyDiscoveryError(str(exc), phase="outer"),
                passthrough=(DependencyDiscoveryError,),
            ):
                raise DependencyDiscoveryError("inner failure", phase="inner")

        assert exc_info.value.phase == "inner"

    def test_no_error_no_effect(self, boundary):
        with boundary.guard("noop", lambda exc: SerializationError(str(exc), format="JSON")):
            value = 1

        assert value == 1
