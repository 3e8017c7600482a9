"""
Best practices MCP server on the low-level Server API: one tool, one resource per topic.
"""
import asyncio
from pathlib import Path
from typing import Any, Optional, Union

import structlog
from mcp.server import Server
from mcp.server.lowlevel.server import ReadResourceContents
from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    CallToolResult,
    ErrorData,
    Resource,
    TextContent,
    Tool,
)
from pydantic import AnyUrl

from practices import parse, validate

from . import __version__
from .errors import ErrorKind, Failure
from .service import PracticeService

SERVER_NAME = "best-practices-mcp"
TOOL_NAME = "get_best_practice"

# JSON-RPC code MCP clients use for an unknown resource
RESOURCE_NOT_FOUND = -32002

_RESOURCE_ERROR_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: INVALID_PARAMS,
    ErrorKind.NOT_FOUND:  RESOURCE_NOT_FOUND,
    ErrorKind.SECURITY:   INTERNAL_ERROR,
    ErrorKind.READ:       INTERNAL_ERROR,
    ErrorKind.UNEXPECTED: INTERNAL_ERROR,
}


def _build_tool(valid_topics: tuple[str, ...]) -> Tool:
    # Topic is case-folded by the validator, so the schema carries no enum
    return Tool(
        name=TOOL_NAME,
        description="Retrieve best practice documentation for a given topic",
        inputSchema={
            "type": "object",
            "properties": {
                "topic": {
                    "type": "string",
                    "description": f"Topic to fetch best practices for ({', '.join(valid_topics)})",
                },
            },
            "required": ["topic"],
        },
    )


def _build_resource(d: dict) -> Resource:
    return Resource(
        uri=AnyUrl(d["uri"]),
        name=d["name"],
        description=d.get("description"),
        mimeType=d.get("mimeType"),
    )


def _error_result(message: str) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=message)],
        isError=True,
    )


def create_server(
    catalog_path: Union[str, Path],
    storage_root: Optional[Union[str, Path]] = None,
    logger: Optional[Any] = None,
    warn_on_validation: bool = True,
) -> Server:
    """
    Parse the topic catalog and return a configured MCP Server.

    Args:
        catalog_path:       Path to the catalog YAML file
        storage_root:       Directory holding topic documents (default: the catalog's directory)
        logger:             structlog-style logger threaded into every component
        warn_on_validation: Log catalog lint warnings

    Raises ValueError if the catalog has lint errors or the storage root is not a directory.
    """
    log = logger if logger is not None else structlog.get_logger(__name__)
    catalog_path = Path(catalog_path)
    catalog = parse(catalog_path)
    root = Path(storage_root if storage_root is not None else catalog_path.parent).absolute()

    if not root.is_dir():
        raise ValueError(f"Storage root is not a directory: {root}")

    result = validate(catalog, root)
    if warn_on_validation:
        for warning in result.warnings:
            log.warning("Catalog warning", detail=warning)
    if not result.is_valid:
        raise ValueError(f"Invalid catalog {catalog_path}: {'; '.join(result.errors)}")

    service = PracticeService(catalog, root, logger=log)
    tool = _build_tool(catalog.keys())
    resource_list = [_build_resource(d) for d in service.list_resources()]

    log.info(
        "Catalog loaded",
        catalog=catalog.name,
        version=catalog.version,
        topics=len(catalog),
    )

    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        log.debug("ListTools request received")
        return [tool]

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> CallToolResult:
        log.debug("CallTool request received", tool=name)
        if name != TOOL_NAME:
            log.warning("Unknown tool requested", tool=name)
            return _error_result(f"Unknown tool: {name}")

        outcome = await asyncio.to_thread(service.get_practice, (arguments or {}).get("topic"))
        if isinstance(outcome, Failure):
            return _error_result(outcome.message)

        return CallToolResult(
            content=[TextContent(type="text", text=outcome.text)],
            structuredContent={
                "topic": outcome.topic,
                "uri": outcome.uri,
                "mimeType": outcome.mime_type,
            },
        )

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        log.debug("ListResources request received")
        return resource_list

    @server.read_resource()
    async def read_resource(uri: AnyUrl):
        log.debug("ReadResource request received", uri=str(uri))
        outcome = await asyncio.to_thread(service.read_resource, str(uri))
        if isinstance(outcome, Failure):
            raise McpError(
                ErrorData(code=_RESOURCE_ERROR_CODES[outcome.kind], message=outcome.message)
            )
        return [ReadResourceContents(content=outcome.text, mime_type=outcome.mime_type)]

    return server
