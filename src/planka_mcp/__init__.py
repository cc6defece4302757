"""planka_mcp package exports."""

from .core import (
    ErrorKind,
    PlankaAPIError,
    PlankaAuthError,
    PlankaClient,
    PlankaConfig,
    PlankaConfigError,
    PlankaError,
    PlankaNetworkError,
    PlankaNotFoundError,
    PlankaPermissionError,
    PlankaToolError,
    PlankaValidationError,
    create_client_from_env,
    discover_tool_modules,
    register_discovered_tools,
)

__all__ = [
    # Client
    "PlankaClient",
    "PlankaConfig",
    "create_client_from_env",
    # Exceptions
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
    # Server utilities
    "discover_tool_modules",
    "register_discovered_tools",
]
