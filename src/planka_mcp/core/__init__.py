"""Core domain surface for planka-mcp (transport-agnostic)."""

from .client import PlankaClient, create_client_from_env
from .config import PlankaConfig, load_env_config, validate_config
from .errors import (
    ErrorKind,
    PlankaAPIError,
    PlankaAuthError,
    PlankaConfigError,
    PlankaError,
    PlankaNetworkError,
    PlankaNotFoundError,
    PlankaPermissionError,
    PlankaToolError,
    PlankaValidationError,
    describe_error,
    error_from_response,
)
from .registry import (
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "PlankaClient",
    "create_client_from_env",
    # Config
    "PlankaConfig",
    "load_env_config",
    "validate_config",
    # Errors
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
    "describe_error",
    "error_from_response",
    # Registry helpers
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
