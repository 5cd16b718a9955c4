"""
Tests for the top-level error_enhanced module.

Covers the version, public exports and the create_enhanced_error facade.
"""

import json

import pytest

import error_enhanced
from error_enhanced import (
    ApplicationStateEnhancer,
    ErrorAnalysisEnhancer,
    FilterUtility,
    HttpStatusEnhancer,
    IdentifiersEnhancer,
    SerializersUtility,
    SystemContextEnhancer,
    UserInfoEnhancer,
    create_enhanced_error,
)


class TestModule:
    """Test module level attributes."""

    def test_version_available(self):
        assert error_enhanced.__version__ == "0.1.0"

    def test_all_exports_available(self):
        for export in error_enhanced.__all__:
            assert hasattr(error_enhanced, export)


class TestCreateEnhancedError:
    """Test the create_enhanced_error facade."""

    def test_default_enhancers_are_composed(self):
        err = create_enhanced_error("Payment failed", name="PaymentError")

        for capability in [
            IdentifiersEnhancer,
            HttpStatusEnhancer,
            SystemContextEnhancer,
            UserInfoEnhancer,
            ApplicationStateEnhancer,
            ErrorAnalysisEnhancer,
            FilterUtility,
            SerializersUtility,
        ]:
            assert err.supports(capability)
        assert err.name == "PaymentError"
        assert str(err) == "Payment failed"

    def test_default_name(self):
        assert create_enhanced_error("boom").name == "EnhancedError"

    def test_explicit_enhancers(self):
        err = create_enhanced_error("boom", enhancers=[IdentifiersEnhancer(), SerializersUtility()])

        assert err.supports(IdentifiersEnhancer)
        assert not err.supports(HttpStatusEnhancer)
        assert not hasattr(err, "set_http_status_code")

    def test_is_raisable(self):
        err = create_enhanced_error("Payment failed", name="PaymentError")
        err.set_error_code(5432).set_severity("high")

        with pytest.raises(Exception) as exc_info:
            raise err

        assert exc_info.value is err
        assert exc_info.value.error_code == 5432
        assert "raise err" in err.stack

    def test_fresh_state_per_error(self):
        first = create_enhanced_error("first")
        second = create_enhanced_error("second")
        first.set_roles(["admin"])

        assert second.roles == []
        assert first.id != second.id

    def test_full_pipeline(self):
        err = create_enhanced_error("Payment failed", name="PaymentError")
        err.set_error_code(5432).set_error_code_prefix("EE").set_http_status_code(502)

        data = json.loads(err.filter_unused().to_json())

        assert data["_error_code"] == 5432
        assert data["_http_status_code"] == 502
        assert data["name"] == "PaymentError"
