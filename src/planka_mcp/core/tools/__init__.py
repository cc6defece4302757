"""
Tool namespace for the PLANKA MCP server.

Every public coroutine in these modules whose first parameter is `client` is
registered as an MCP tool under its own name (see planka_mcp.core.registry).
"""
