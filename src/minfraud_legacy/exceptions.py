"""Exception hierarchy for the minFraud legacy client."""

from __future__ import annotations

from typing import Optional


class MinFraudError(Exception):
    """Base exception for all minFraud client errors."""

    pass


class ConfigurationError(MinFraudError, ValueError):
    """Raised when the client configuration is missing or invalid."""

    pass


class ValidationError(MinFraudError, ValueError):
    """Raised when transaction attributes are missing or invalid."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field} {message}")


class MissingRequiredAttribute(ValidationError):
    def __init__(self, field: str):
        super().__init__(field, "is required")


class InvalidAttributeType(ValidationError):
    def __init__(self, field: str, message: str = "must be a string"):
        super().__init__(field, message)


class InvalidTimeout(ValidationError):
    def __init__(self, message: str = "must be Numeric"):
        super().__init__("timeout", message)


class InvalidServiceTier(ValidationError):
    def __init__(self, value: object):
        self.value = value
        super().__init__("service_tier", f"must be 'standard' or 'premium', got {value!r}")


class InvalidServiceRegion(ValidationError):
    def __init__(self, value: str):
        self.value = value
        super().__init__("service_region", f"must be a region key or an absolute http(s) URL, got {value!r}")


class UnknownAttribute(ValidationError):
    def __init__(self, field: str):
        super().__init__(field, "is not a recognized transaction attribute")


class ConnectionError(MinFraudError):
    """Raised when the service cannot be reached or answers with a non-success status.

    ``status_code`` is None when the failure happened below HTTP (DNS, TLS, timeout).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ServiceError(MinFraudError):
    """Raised when the service reports an error code in the response body."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Error message from minFraud: {code}")


class DecodeError(MinFraudError):
    """Raised when a response field holds a value that cannot be decoded."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Cannot decode {value!r} for response field {field}")
