"""MCP tool server exposing name generation and rule lookup over stdio."""

from .server import NamingMCPServer, run_stdio_server

__all__ = ["NamingMCPServer", "run_stdio_server"]
