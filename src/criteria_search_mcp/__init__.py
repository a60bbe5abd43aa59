"""Criteria search over tabular JSON datasets, exposed as an MCP server."""

__version__ = "1.0.0"
