"""MCP Server for the railway timetable client.

This module implements a Model Context Protocol (MCP) server that exposes
station lookups and schedule queries as tools.
"""

import asyncio
import json
import logging
from typing import Any

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.types import (
    TextContent,
    Tool,
)

from ..core.client import SwRailwayClient
from ..core.exceptions import TimetableError
from ..core.models import ScheduleRecord, Station

logger = logging.getLogger(__name__)

LANG_SCHEMA = {
    "type": "string",
    "description": "Language: 'ua' (Ukrainian), 'ru' (Russian) or 'en' (English)",
    "enum": ["ua", "ru", "en"],
    "default": "ua",
}


def _json_block(data: Any) -> TextContent:
    return TextContent(
        type="text",
        text=f"JSON Data:\n```json\n{json.dumps(data, indent=2, ensure_ascii=False)}\n```",
    )


class TimetableMCPServer:
    """MCP Server for station and schedule lookups."""

    def __init__(self, client: SwRailwayClient | None = None) -> None:
        """Initialize the Timetable MCP Server."""
        self.server = Server("swrailway-timetable")
        self.client = client or SwRailwayClient()

        # Register handlers
        self._register_handlers()

    def _register_handlers(self) -> None:
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            return self.list_tools()

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: dict[str, Any]
        ) -> list[TextContent]:
            """Handle tool calls."""
            return await self.call_tool(name, arguments)

    def list_tools(self) -> list[Tool]:
        """Describe the tools this server offers."""
        return [
            Tool(
                name="get_station",
                description="Get a South-Western Railway station by its id",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "station_id": {
                            "type": "string",
                            "description": "Upstream station id",
                        },
                        "lang": LANG_SCHEMA,
                    },
                    "required": ["station_id"],
                },
            ),
            Tool(
                name="search_stations",
                description="Search South-Western Railway stations by name",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "name": {
                            "type": "string",
                            "description": "Full or partial station name",
                        },
                        "lang": LANG_SCHEMA,
                    },
                    "required": ["name"],
                },
            ),
            Tool(
                name="get_schedule",
                description="List suburban trains between two stations on a date",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "from_id": {
                            "type": "string",
                            "description": "Departure station id",
                        },
                        "to_id": {
                            "type": "string",
                            "description": "Destination station id",
                        },
                        "date": {
                            "type": "string",
                            "description": "Travel date (YYYY-MM-DD), defaults to today",
                        },
                        "only_remaining": {
                            "type": "boolean",
                            "description": "If true, only trains departing later today",
                            "default": False,
                        },
                        "lang": LANG_SCHEMA,
                    },
                    "required": ["from_id", "to_id"],
                },
            ),
        ]

    async def call_tool(
        self, name: str, arguments: dict[str, Any]
    ) -> list[TextContent]:
        """Dispatch a tool call; errors are reported as text."""
        try:
            if name == "get_station":
                return await self._get_station(arguments)
            elif name == "search_stations":
                return await self._search_stations(arguments)
            elif name == "get_schedule":
                return await self._get_schedule(arguments)
            else:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]

        except Exception as e:
            logger.error(f"Error in tool {name}: {e}")
            return [TextContent(type="text", text=f"Error: {str(e)}")]

    async def _get_station(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Look up one station."""
        station_id = str(arguments["station_id"])
        lang = arguments.get("lang", "ua")

        result = await asyncio.to_thread(self.client.fetch_station, station_id, lang)
        if not result.ok:
            return [
                TextContent(type="text", text=f"Station lookup failed: {result.failure}")
            ]
        if result.data is None:
            return [TextContent(type="text", text=f"Station '{station_id}' not found")]

        station = result.data
        result_text = f"**{station.label}** (ID: {station.id})\n"
        if station.info:
            result_text += f"• **Info:** {station.info}\n"

        return [
            TextContent(type="text", text=result_text),
            _json_block(station.model_dump()),
        ]

    async def _search_stations(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Search stations by name."""
        name = arguments["name"]
        lang = arguments.get("lang", "ua")

        result = await asyncio.to_thread(self.client.fetch_stations, name, lang)
        if not result.ok:
            return [
                TextContent(type="text", text=f"Station search failed: {result.failure}")
            ]

        stations: list[Station] = result.data or []
        if not stations:
            return [
                TextContent(type="text", text=f"No stations found matching '{name}'")
            ]

        result_text = f"**Found {len(stations)} stations matching '{name}':**\n\n"
        for i, station in enumerate(stations, 1):
            result_text += f"{i}. **{station.label}** (ID: {station.id})"
            if station.info:
                result_text += f"\n   {station.info}"
            result_text += "\n"

        return [
            TextContent(type="text", text=result_text),
            _json_block([s.model_dump() for s in stations]),
        ]

    async def _get_schedule(self, arguments: dict[str, Any]) -> list[TextContent]:
        """Query trains between two stations."""
        from_id = str(arguments["from_id"])
        to_id = str(arguments["to_id"])
        date = arguments.get("date")
        only_remaining = bool(arguments.get("only_remaining", False))
        lang = arguments.get("lang", "ua")

        try:
            result = await asyncio.to_thread(
                self.client.fetch_schedule,
                date,
                lang,
                from_id,
                to_id,
                only_remaining,
            )
        except TimetableError as e:
            return [TextContent(type="text", text=f"Schedule lookup failed: {str(e)}")]

        if not result.ok:
            return [
                TextContent(
                    type="text", text=f"Schedule lookup failed: {result.failure}"
                )
            ]

        records: list[ScheduleRecord] = result.data or []
        if not records:
            return [
                TextContent(
                    type="text", text=f"No trains found from {from_id} to {to_id}"
                )
            ]

        result_text = f"**Found {len(records)} trains from {from_id} to {to_id}**"
        if date:
            result_text += f" on {date}"
        result_text += ":\n\n"
        for i, record in enumerate(records, 1):
            result_text += f"{i}. **Train {record.id}** {record.route}\n"
            result_text += (
                f"   • Departs: {record.departure_from or 'N/A'}"
                f" → Arrives: {record.arrival_to or 'N/A'}\n"
            )
            if record.time_in_trip:
                result_text += f"   • In trip: {record.time_in_trip}\n"
            if record.period:
                result_text += f"   • Runs: {record.period}\n"

        return [
            TextContent(type="text", text=result_text),
            _json_block([r.model_dump(by_alias=True) for r in records]),
        ]


async def main() -> None:
    """Main entry point for the MCP server."""
    # Configure logging
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting railway timetable MCP Server")

    server_instance = TimetableMCPServer()

    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP Server running with stdio transport")
        await server_instance.server.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="swrailway-timetable",
                server_version="0.1.0",
                capabilities=server_instance.server.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


def main_sync() -> None:
    """Synchronous wrapper for the async main function - used as entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
