"""Core dependency-management logic, remote client, and response contracts."""
