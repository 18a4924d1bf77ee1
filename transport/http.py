"""
Streamable HTTP transport for MCP (Model Context Protocol).

- POST /mcp: JSON-RPC requests, answered with JSON or a single SSE event
- GET /mcp: SSE stream announcing a session id
- OPTIONS /mcp: CORS preflight
- /healthz: health check endpoint (separate from /mcp)

Request handling lives in transport.endpoints; this module only adapts
FastAPI requests and responses. CORS headers are attached per response by
the endpoints, so no CORS middleware is installed.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR
import uvicorn

from config import ServerConfig

from .endpoints import HttpResponse, McpEndpoints

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Global state (initialized on first use or at startup)
endpoints: Optional[McpEndpoints] = None
app = FastAPI(title="Exercise MCP Server - Streamable HTTP")


def get_endpoints() -> McpEndpoints:
    global endpoints
    if endpoints is None:
        endpoints = McpEndpoints.from_config()
    return endpoints


def to_fastapi_response(result: HttpResponse) -> Response:
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


@app.post("/mcp")
async def mcp_post_endpoint(request: Request):
    """
    POST /mcp - Main MCP endpoint for JSON-RPC requests.

    Returns:
    - 202 Accepted (inbound responses and notifications, empty body)
    - 200 OK with Content-Type: application/json or text/event-stream
    - 400 / 401 / 403 / 500 on transport, auth, origin or internal errors
    """
    body = await request.body()
    result = await get_endpoints().post(request.headers, body)
    return to_fastapi_response(result)


@app.get("/mcp")
async def mcp_get_endpoint(request: Request):
    """GET /mcp - SSE stream with a single `connected` event"""
    result = await get_endpoints().get(request.headers)
    return to_fastapi_response(result)


@app.options("/mcp")
async def mcp_options_endpoint():
    """OPTIONS /mcp - CORS preflight, no auth or origin check"""
    return to_fastapi_response(get_endpoints().options())


@app.get("/healthz")
async def health_check():
    """Health check endpoint (separate from /mcp)"""
    db = get_endpoints().dispatcher.repos.db
    if await db.check_connection():
        return JSONResponse(content={
            "status": "healthy",
            "database": "connected"
        })
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "unhealthy", "database": "unreachable"}
    )


async def shutdown_server():
    """Cleanup on shutdown"""
    if endpoints is not None:
        await endpoints.dispatcher.repos.db.disconnect()
        logger.info("Database connection closed")


def run_http_server(config: Optional[ServerConfig] = None):
    """
    Run the MCP server with Streamable HTTP transport.

    Args:
        config: Server configuration; loaded from the environment when omitted
    """
    global endpoints

    config = config or ServerConfig.from_environment()
    endpoints = McpEndpoints.from_config(config)

    @app.on_event("startup")
    async def startup_event():
        logger.info(
            f"Exercise MCP Server (HTTP, {config.profile.value}) starting on "
            f"http://{config.host}:{config.port}/mcp"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        await shutdown_server()

    uvicorn.run(app, host=config.host, port=config.port, log_level="info")
