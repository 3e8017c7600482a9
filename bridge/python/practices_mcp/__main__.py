"""
Best practices MCP server CLI entry point.

Usage:
    best-practices-mcp [--catalog FILE] [--storage-root DIR] [--transport stdio|http] [--port N]
"""
import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from . import __version__
from .config import Settings
from .logging_config import configure_logging


def main() -> None:
    settings = Settings()

    parser = argparse.ArgumentParser(
        prog="best-practices-mcp",
        description="Serve best practice documentation as an MCP tool and MCP resources",
    )
    parser.add_argument("--version", "-v", action="version", version=f"best-practices-mcp {__version__}")
    parser.add_argument(
        "--catalog",
        default=str(settings.catalog),
        help="Path to the topic catalog YAML (default: bundled catalog)",
    )
    parser.add_argument(
        "--storage-root",
        default=str(settings.storage_root) if settings.storage_root else None,
        help="Directory holding the topic documents (default: the catalog's directory)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default=settings.transport,
        help=f"MCP transport (default: {settings.transport})",
    )
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Host to bind for HTTP transport (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port for HTTP transport (default: {settings.port})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Minimum log level (default: {settings.log_level})",
    )
    args = parser.parse_args()

    try:
        configure_logging(args.log_level)
    except ValueError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.exit(1)
    log = structlog.get_logger("practices_mcp")

    settings = settings.model_copy(
        update={
            "catalog": Path(args.catalog),
            "storage_root": Path(args.storage_root) if args.storage_root else None,
        }
    )
    catalog_path = settings.catalog.absolute()
    if not catalog_path.exists():
        log.error("Catalog not found", catalog=str(catalog_path))
        sys.exit(1)

    from .server import create_server

    try:
        server = create_server(
            catalog_path,
            storage_root=settings.resolved_storage_root(),
            logger=log,
        )
    except Exception as e:
        log.error("Fatal error starting server", error=str(e))
        sys.exit(1)

    if args.transport == "http":
        _run_http(server, args.host, args.port, log)
    else:
        _run_stdio(server, log)


def _run_stdio(server, log) -> None:
    from mcp.server.stdio import stdio_server

    async def _run():
        async with stdio_server() as (read_stream, write_stream):
            log.info("Best practices MCP server running on stdio")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )

    asyncio.run(_run())


def _run_http(server, host: str, port: int, log) -> None:
    from mcp.server.sse import SseServerTransport
    from starlette.applications import Starlette
    from starlette.responses import Response
    from starlette.routing import Mount, Route
    import uvicorn

    sse = SseServerTransport("/messages/")

    async def handle_sse(request):
        async with sse.connect_sse(
            request.scope, request.receive, request._send
        ) as streams:
            await server.run(
                streams[0], streams[1], server.create_initialization_options()
            )
        return Response()

    starlette_app = Starlette(
        routes=[
            Route("/sse", endpoint=handle_sse),
            Mount("/messages/", app=sse.handle_post_message),
        ]
    )

    log.info("HTTP/SSE transport listening", url=f"http://{host}:{port}/sse")
    uvicorn.run(starlette_app, host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
