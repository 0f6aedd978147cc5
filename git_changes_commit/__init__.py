"""Suggest conventional commit commands for pending git changes over MCP."""

__version__ = "0.0.1"
