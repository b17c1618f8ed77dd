"""Unified tool routing: action routers, parameter schemas and shared dispatch."""
