"""error_enhanced - native exceptions with structured, serializable context.

Compose identifier, HTTP, system, user, application state and stack analysis
enhancers into one raisable exception, drop unset fields and render the
result as JSON, XML, CSV or YAML.
"""

from collections.abc import Sequence

from error_enhanced.core.capabilities import OMIT, FilterUtility, SerializersUtility
from error_enhanced.core.composition import EnhancedError, compose
from error_enhanced.core.enhancers import (
    ApplicationStateEnhancer,
    ErrorAnalysisEnhancer,
    HttpStatusEnhancer,
    IdentifiersEnhancer,
    SystemContextEnhancer,
    UserInfoEnhancer,
)
from error_enhanced.core.exceptions import (
    CommandExecutionError,
    DependencyDiscoveryError,
    EnhancementError,
    FieldValidationError,
    SerializationError,
    StackAnalysisError,
)
from error_enhanced.core.models import Category, HttpMethod, Severity

__version__ = "0.1.0"


def default_enhancers() -> list[object]:
    """Fresh instances of every built-in enhancer and capability."""
    return [
        IdentifiersEnhancer(),
        HttpStatusEnhancer(),
        SystemContextEnhancer(),
        UserInfoEnhancer(),
        ApplicationStateEnhancer(),
        ErrorAnalysisEnhancer(),
        FilterUtility(),
        SerializersUtility(),
    ]


def create_enhanced_error(
    message: str = "",
    *,
    name: str | None = None,
    enhancers: Sequence[object] | None = None,
) -> EnhancedError:
    """Create a composite error.

    Args:
        message: Error message.
        name: Error name; ``"EnhancedError"`` when omitted.
        enhancers: Enhancer instances to compose; all built-in ones by default.

    Returns:
        The composite error, ready to configure and raise.

    Examples:
        >>> import error_enhanced
        >>> err = error_enhanced.create_enhanced_error("Payment failed", name="PaymentError")
        >>> err.set_error_code(5432).set_severity("high")
        >>> raise err
    """
    return compose(default_enhancers() if enhancers is None else enhancers, message, name=name)


__all__ = [
    "__version__",
    "create_enhanced_error",
    "default_enhancers",
    "compose",
    "EnhancedError",
    "IdentifiersEnhancer",
    "HttpStatusEnhancer",
    "SystemContextEnhancer",
    "UserInfoEnhancer",
    "ApplicationStateEnhancer",
    "ErrorAnalysisEnhancer",
    "FilterUtility",
    "SerializersUtility",
    "OMIT",
    "Severity",
    "Category",
    "HttpMethod",
    "EnhancementError",
    "FieldValidationError",
    "SerializationError",
    "CommandExecutionError",
    "DependencyDiscoveryError",
    "StackAnalysisError",
]
