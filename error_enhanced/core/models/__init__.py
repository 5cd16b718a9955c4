"""Value types shared by the enhancers."""

from error_enhanced.core.models.enums import Category, Environment, HttpMethod, Severity
from error_enhanced.core.models.stack import StackFrame

__all__ = ["Category", "Environment", "HttpMethod", "Severity", "StackFrame"]
