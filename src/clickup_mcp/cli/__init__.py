"""Command line interface for clickup-mcp."""
