"""Design-system introspection server over MCP STDIO."""

__version__ = "0.1.0"
