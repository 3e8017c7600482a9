"""MCP server exposing a fixed catalog of best practice documents."""

__version__ = "1.0.0"
