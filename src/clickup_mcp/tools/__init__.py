"""MCP tool registration for clickup-mcp."""
