from __future__ import annotations

from enum import Enum
from typing import Any, Optional

REQUIRED_ENV_VARS = (
    "PLANKA_BASE_URL",
    "PLANKA_AGENT_EMAIL",
    "PLANKA_AGENT_PASSWORD",
)


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    NETWORK = "network"
    API = "api"


class PlankaError(Exception):
    """Base error for everything the PLANKA client and operations raise."""

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        body: Any = None,
        context: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body
        self.context = context
        self.details = details


class PlankaConfigError(PlankaError):
    kind = ErrorKind.CONFIGURATION


class PlankaAuthError(PlankaError):
    kind = ErrorKind.AUTHENTICATION


class PlankaPermissionError(PlankaError):
    kind = ErrorKind.PERMISSION


class PlankaNotFoundError(PlankaError):
    kind = ErrorKind.NOT_FOUND


class PlankaValidationError(PlankaError):
    kind = ErrorKind.VALIDATION


class PlankaNetworkError(PlankaError):
    """Transport-level failure: the request never got an HTTP response."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str, *, timeout: bool = False, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.timeout = timeout


class PlankaAPIError(PlankaError):
    kind = ErrorKind.API


class PlankaToolError(Exception):
    """Raised at the tool boundary with agent-facing text for a PlankaError."""


def _body_message(body: Any) -> str:
    if isinstance(body, dict) and "message" in body:
        return str(body["message"])
    return "Unknown error"


def error_from_response(
    status: int, body: Any, context: Optional[str] = None
) -> PlankaError:
    """Map a non-2xx response onto the error taxonomy."""
    suffix = f" ({context})" if context else ""
    message = _body_message(body) + suffix
    fields = {"status": status, "body": body, "context": context}

    if status == 401:
        return PlankaAuthError(message, **fields)
    if status == 403:
        return PlankaPermissionError(message, **fields)
    if status == 404:
        return PlankaNotFoundError(
            f"Resource not found: {context or 'unknown'}", **fields
        )
    if status == 422:
        return PlankaValidationError(message, details=body, **fields)
    return PlankaAPIError(message, **fields)


def describe_error(exc: PlankaError) -> str:
    """Render an error as text for the agent."""
    kind = exc.kind
    if kind is ErrorKind.CONFIGURATION:
        required = "\n".join(f"- {name}" for name in REQUIRED_ENV_VARS)
        return (
            f"Configuration error: {exc.message}\n\n"
            f"Required environment variables:\n{required}"
        )
    if kind is ErrorKind.AUTHENTICATION:
        return f"Authentication failed: {exc.message}"
    if kind is ErrorKind.PERMISSION:
        return f"Permission denied: {exc.message}"
    if kind is ErrorKind.NOT_FOUND:
        # error_from_response already phrases these as "Resource not found: ..."
        return exc.message
    if kind is ErrorKind.VALIDATION:
        if exc.details:
            return f"Validation error: {exc.message}\nDetails: {exc.details}"
        return f"Validation error: {exc.message}"
    if kind is ErrorKind.NETWORK:
        if getattr(exc, "timeout", False):
            return f"Network timeout: {exc.message}"
        return f"Network error: {exc.message}"
    if kind is ErrorKind.API:
        return f"PLANKA error ({exc.status}): {exc.message}"
    raise AssertionError(f"unhandled error kind: {kind!r}")


__all__ = [
    "ErrorKind",
    "PlankaError",
    "PlankaConfigError",
    "PlankaAuthError",
    "PlankaPermissionError",
    "PlankaNotFoundError",
    "PlankaValidationError",
    "PlankaNetworkError",
    "PlankaAPIError",
    "PlankaToolError",
    "REQUIRED_ENV_VARS",
    "error_from_response",
    "describe_error",
]
