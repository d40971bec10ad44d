"""MCP (Model Context Protocol) server module for the railway timetable.

This module provides an MCP server implementation that exposes station
lookups and schedule queries through the Model Context Protocol.
"""

from .server import TimetableMCPServer, main

__all__ = ["TimetableMCPServer", "main"]
