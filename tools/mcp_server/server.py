"""Minimal Model Context Protocol (MCP) server for azure-naming."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional

from core import naming_rules
from core.name_service import NameGenerationResult, generate_names, list_private_dns_zones
from core.naming_config import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class ToolSpec:
    """Description for a tool exposed over MCP."""

    name: str
    description: str
    schema: Mapping[str, Any]
    handler: Callable[[Mapping[str, Any]], Awaitable[Any]]


class MCPError(Exception):
    """Exception raised for protocol errors returned to the caller."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class NamingMCPServer:
    """Implements a subset of the MCP JSON-RPC protocol over stdin/stdout."""

    protocol_version = "2024-05-01"

    def __init__(self) -> None:
        self._tools: Dict[str, ToolSpec] = {}
        self._register_tools()

    # ------------------------------------------------------------------
    # Tool registration
    def _register_tools(self) -> None:
        self._tools = {
            "generate_names": ToolSpec(
                name="generate_names",
                description="Generate the full set of compliant Azure resource names for a workload.",
                schema={
                    "type": "object",
                    "properties": {
                        "payload": {
                            "type": "object",
                            "description": "Payload accepted by the POST /api/names endpoint.",
                            "properties": {
                                "regionAbbreviation": {"type": "string", "enum": ["eus", "eus2", "wus2", "cus"]},
                                "environment": {"type": "string", "enum": ["dev", "qa", "prod"]},
                                "workloadName": {"type": "string", "minLength": 2, "maxLength": 10},
                                "uniqueSuffix": {"type": "string", "maxLength": 13},
                                "orgPrefix": {"type": "string", "maxLength": 5},
                                "instance": {"type": "integer", "minimum": 1, "maximum": 999},
                                "cloud": {"type": "string"},
                                "resourceTypes": {"type": "array", "items": {"type": "string"}},
                                "category": {"type": "string"},
                            },
                            "required": ["regionAbbreviation", "environment", "workloadName"],
                        },
                    },
                    "required": ["payload"],
                },
                handler=self._handle_generate,
            ),
            "describe_rule": ToolSpec(
                name="describe_rule",
                description="Return the template and constraints for a resource-type key.",
                schema={
                    "type": "object",
                    "properties": {
                        "resource_type": {"type": "string"},
                    },
                    "required": ["resource_type"],
                },
                handler=self._handle_describe_rule,
            ),
            "list_resource_types": ToolSpec(
                name="list_resource_types",
                description="List the resource-type keys known to the active naming rules.",
                schema={
                    "type": "object",
                    "properties": {
                        "category": {"type": "string"},
                    },
                },
                handler=self._handle_list_resource_types,
            ),
            "list_private_dns_zones": ToolSpec(
                name="list_private_dns_zones",
                description="Return the fixed privatelink DNS zone names for an Azure cloud.",
                schema={
                    "type": "object",
                    "properties": {
                        "cloud": {"type": "string", "default": "AzureCloud"},
                    },
                },
                handler=self._handle_dns_zones,
            ),
        }

    # ------------------------------------------------------------------
    # JSON-RPC handlers
    async def handle(self, request: Mapping[str, Any]) -> Dict[str, Any]:
        method = request.get("method")
        request_id = request.get("id")

        try:
            if method == "initialize":
                result = self._initialize()
            elif method == "list_tools":
                result = self._list_tools()
            elif method == "call_tool":
                params = request.get("params") or {}
                tool = params.get("name")
                args = params.get("arguments") or {}
                result = await self._call_tool(tool, args)
            elif method == "shutdown":
                result = {"ok": True}
            else:
                raise MCPError(-32601, f"Unknown method: {method}")
        except MCPError as exc:
            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "error": {"code": exc.code, "message": exc.message},
            }
        except Exception as exc:  # pragma: no cover - defensive guard
            logger.exception("Unhandled MCP server error")
            return {
                "jsonrpc": "2.0",
                "id": request_id,
                "error": {"code": -32000, "message": str(exc)},
            }

        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def _initialize(self) -> Dict[str, Any]:
        return {
            "protocolVersion": self.protocol_version,
            "serverInfo": {"name": "azure-naming", "version": "1.0"},
            "capabilities": {
                "tools": {
                    "list": True,
                    "call": True,
                }
            },
        }

    def _list_tools(self) -> Dict[str, Any]:
        tools_payload = []
        for spec in self._tools.values():
            tools_payload.append(
                {
                    "name": spec.name,
                    "description": spec.description,
                    "inputSchema": spec.schema,
                }
            )
        return {"tools": tools_payload}

    async def _call_tool(self, name: str, arguments: Mapping[str, Any]) -> Any:
        if not name:
            raise MCPError(-32602, "Tool name is required")
        spec = self._tools.get(name)
        if not spec:
            raise MCPError(-32601, f"Unknown tool: {name}")
        return await spec.handler(arguments)

    # ------------------------------------------------------------------
    # Tool implementations
    async def _handle_generate(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        payload = arguments.get("payload")
        if not isinstance(payload, Mapping):
            raise MCPError(-32602, "payload must be an object")

        def _run() -> NameGenerationResult:
            return generate_names(dict(payload))

        loop = asyncio.get_running_loop()
        try:
            result: NameGenerationResult = await loop.run_in_executor(None, _run)
        except ConfigurationError as exc:
            raise MCPError(-32602, str(exc)) from exc
        return result.to_dict()

    async def _handle_describe_rule(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        resource_type = str(arguments.get("resource_type") or "").strip()
        if not resource_type:
            raise MCPError(-32602, "resource_type is required")
        try:
            return naming_rules.describe_rule(resource_type)
        except KeyError as exc:
            raise MCPError(404, str(exc.args[0])) from exc

    async def _handle_list_resource_types(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        category = str(arguments.get("category") or "").strip() or None
        return {"resourceTypes": list(naming_rules.list_resource_types(category=category))}

    async def _handle_dns_zones(self, arguments: Mapping[str, Any]) -> Dict[str, Any]:
        cloud = str(arguments.get("cloud") or "").strip() or None
        try:
            return list_private_dns_zones(cloud)
        except ConfigurationError as exc:
            raise MCPError(-32602, str(exc)) from exc


async def _readline(reader: asyncio.StreamReader) -> Optional[str]:
    try:
        line = await reader.readline()
    except Exception:  # pragma: no cover - safety net
        return None
    if not line:
        return None
    return line.decode("utf-8").strip()


async def run_stdio_server(server: NamingMCPServer) -> None:
    """Run the MCP server over stdio until EOF or shutdown."""

    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    writer_transport, writer_protocol = await loop.connect_write_pipe(asyncio.streams.FlowControlMixin, sys.stdout)
    writer = asyncio.StreamWriter(writer_transport, writer_protocol, reader, loop)

    while True:
        line = await _readline(reader)
        if line is None:
            break
        if not line:
            continue
        try:
            request = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Ignoring invalid JSON payload: %s", line)
            continue

        response = await server.handle(request)
        writer.write(json.dumps(response).encode("utf-8") + b"\n")
        await writer.drain()

        if request.get("method") == "shutdown":
            break

    writer.close()
    await writer.wait_closed()


def main() -> None:
    logging.basicConfig(level=logging.INFO, stream=sys.stderr)
    server = NamingMCPServer()
    asyncio.run(run_stdio_server(server))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
