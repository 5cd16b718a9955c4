"""Enumerations used by the enhancers."""

from enum import Enum


class Severity(str, Enum):
    """Error severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Category(str, Enum):
    """Error category."""

    NETWORK = "network"
    DATABASE = "database"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_LOGIC = "business_logic"
    CONFIGURATION = "configuration"
    DEPRECATION = "deprecation"
    FILE_SYSTEM = "file_system"
    PERFORMANCE = "performance"
    SECURITY = "security"
    THIRD_PARTY = "third_party"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


class HttpMethod(str, Enum):
    """HTTP methods accepted by the HTTP status enhancer."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"


class Environment(str, Enum):
    """Common deployment environment names."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"
    UNKNOWN = "unknown"
