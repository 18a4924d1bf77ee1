"""
MCP Server Entry Point for the Exercise Content Store
Run with: python server.py (stdio) or python server.py --http
"""

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

from mcp.server.models import InitializationOptions
from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server
from mcp import types

from auth import AuthError, UserContext
from config import ServerConfig, get_environment_mode, parse_profile
from container import RepositoryContainer
from database import MongoConnection
from handlers import get_handler, get_resource_reader
from tools import get_resource_catalog, get_tool_catalog, tool_descriptor
from utils.jsonrpc import JsonRpcError, create_error_response, create_success_response

__version__ = "1.0.0"

PROTOCOL_VERSION = "2025-06-18"

# Initialize logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# ============================================================================
# TOOL OUTCOMES
# ============================================================================

@dataclass
class ToolOutcome:
    """
    Result of one tools/call.

    Success and failure serialize to the same envelope; a failed call is
    still a successful JSON-RPC response, only is_error differs.
    """
    content: list[dict[str, Any]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def success(cls, items: list[types.TextContent]) -> 'ToolOutcome':
        return cls(content=[{"type": item.type, "text": item.text} for item in items])

    @classmethod
    def failure(cls, message: str) -> 'ToolOutcome':
        return cls(content=[{"type": "text", "text": f"Error: {message}"}], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(item["text"] for item in self.content)

    def to_result(self) -> dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}


def resource_error(uri: str, message: str) -> dict[str, Any]:
    return {
        "contents": [
            {
                "uri": uri,
                "mimeType": "text/plain",
                "text": f"Error: {message}"
            }
        ]
    }


# ============================================================================
# METHOD DISPATCH
# ============================================================================

class McpDispatcher:
    """
    Maps JSON-RPC method names to handlers and builds response envelopes.

    Stateless between calls. Tool and resource failures are caught here and
    returned as error-shaped results; unknown methods become -32601. Anything
    else that raises propagates to the transport.
    """

    def __init__(self, repos: RepositoryContainer, config: ServerConfig):
        self.repos = repos
        self.config = config
        self._methods = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "resources/list": self._list_resources,
            "tools/call": self._call_tool,
            "resources/read": self._read_resource,
        }

    @property
    def methods(self) -> list[str]:
        return list(self._methods)

    async def dispatch(self, message: dict, user: Optional[UserContext] = None) -> dict:
        method = message.get("method")
        request_id = message.get("id")
        params = message.get("params")
        if not isinstance(params, dict):
            # Positional params carry nothing the MCP methods read
            params = {}

        handler = self._methods.get(method)
        if handler is None:
            logger.warning(f"Unknown method requested: {method}")
            return create_error_response(
                request_id,
                JsonRpcError.METHOD_NOT_FOUND,
                "Method not found",
                f"Unknown method: {method}"
            )

        logger.info(f"Dispatching {method} (id={request_id})")
        result = await handler(params, user)
        return create_success_response(request_id, result)

    async def _initialize(self, params: dict, user: Optional[UserContext]) -> dict:
        client_info = params.get("clientInfo")
        client = client_info.get("name") if isinstance(client_info, dict) else None
        if client:
            logger.info(f"Initialize from client: {client}")
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {
                "tools": {},
                "resources": {},
                "prompts": {},
                "logging": {}
            },
            "serverInfo": {
                "name": self.config.server_name,
                "version": __version__
            }
        }

    async def _list_tools(self, params: dict, user: Optional[UserContext]) -> dict:
        return {"tools": [tool_descriptor(t) for t in get_tool_catalog(self.config.profile)]}

    async def _list_resources(self, params: dict, user: Optional[UserContext]) -> dict:
        return {"resources": get_resource_catalog()}

    async def _call_tool(self, params: dict, user: Optional[UserContext]) -> dict:
        outcome = await self.call_tool(params.get("name"), params.get("arguments") or {}, user)
        return outcome.to_result()

    async def _read_resource(self, params: dict, user: Optional[UserContext]) -> dict:
        return await self.read_resource(params.get("uri"))

    async def call_tool(
        self,
        name: Optional[str],
        arguments: dict[str, Any],
        user: Optional[UserContext] = None,
    ) -> ToolOutcome:
        """Run a tool; every failure comes back as an error outcome"""
        logger.info(f"Tool call: {name}")
        try:
            handler_info = get_handler(name, self.config.profile) if name else None
            if not handler_info:
                raise ValueError(f"Unknown tool: {name}")

            handler, needs_user, _ = handler_info
            if needs_user and user is None:
                raise AuthError(f"Tool {name} requires an authenticated user")

            await self.repos.ensure_connected()
            if needs_user:
                items = await handler(self.repos, arguments, user)
            else:
                items = await handler(self.repos, arguments)
            return ToolOutcome.success(items)

        except Exception as e:
            logger.error(f"Error executing tool {name}: {e}", exc_info=True)
            return ToolOutcome.failure(str(e))

    async def read_resource(self, uri: Optional[str]) -> dict[str, Any]:
        """Read a resource; failures come back as a text/plain error block"""
        try:
            reader = get_resource_reader(uri) if uri else None
            if reader is None:
                raise ValueError(f"Unknown resource: {uri}")

            await self.repos.ensure_connected()
            return await reader(self.repos)

        except Exception as e:
            logger.error(f"Error reading resource {uri}: {e}", exc_info=True)
            return resource_error(uri, str(e))


def create_dispatcher(config: ServerConfig) -> McpDispatcher:
    """Wire a dispatcher to a fresh (not yet connected) MongoDB handle"""
    db = MongoConnection(config.database)
    return McpDispatcher(RepositoryContainer(db), config)


# ============================================================================
# STDIO TRANSPORT
# ============================================================================

app = Server("ms-exercise-mcp")
dispatcher: Optional[McpDispatcher] = None


@app.list_tools()
async def handle_list_tools() -> list[types.Tool]:
    """List the tools exposed by the configured profile"""
    return get_tool_catalog(dispatcher.config.profile)


@app.call_tool()
async def handle_call_tool(
    name: str, arguments: dict[str, Any]
) -> list[types.TextContent]:
    """
    Handle tool execution over stdio.

    stdio carries no bearer token, so user-scoped tools report an
    authentication error here.
    """
    outcome = await dispatcher.call_tool(name, arguments or {})
    if outcome.is_error:
        raise RuntimeError(outcome.text)
    return [types.TextContent(type="text", text=item["text"]) for item in outcome.content]


@app.list_resources()
async def handle_list_resources() -> list[types.Resource]:
    return [types.Resource(**descriptor) for descriptor in get_resource_catalog()]


@app.read_resource()
async def handle_read_resource(uri) -> str:
    """Read an exercise:// resource and return its JSON text"""
    result = await dispatcher.read_resource(str(uri))
    return result["contents"][0]["text"]


async def main(config: Optional[ServerConfig] = None):
    """Main entry point for the stdio MCP server"""
    global dispatcher

    config = config or ServerConfig.from_environment()
    dispatcher = create_dispatcher(config)

    logger.info("Exercise MCP Server starting...")
    logger.info(f"Environment: {get_environment_mode()}")
    logger.info(f"Profile: {config.profile.value}, database: {config.database.database}")

    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=config.server_name,
                    server_version=__version__,
                    capabilities=app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )
    except Exception as e:
        logger.error(f"Failed to start MCP server: {e}", exc_info=True)
        raise
    finally:
        await dispatcher.repos.db.disconnect()


def cli_entry():
    """Entry point for console script - wraps async main()"""
    import argparse

    parser = argparse.ArgumentParser(description="Exercise MCP Server")
    parser.add_argument('--version', '-v', action='store_true', help='Show version')
    parser.add_argument('--http', action='store_true', help='Run in HTTP mode (Streamable HTTP transport)')
    parser.add_argument('--port', type=int, default=None, help='Port for HTTP mode (default: MCP_PORT or 3001)')
    parser.add_argument('--host', type=str, default=None, help='Host for HTTP mode (default: MCP_HOST or 127.0.0.1)')
    parser.add_argument('--profile', type=str, default=None, help='Deployment profile: public or authenticated')

    args = parser.parse_args()

    # Handle --version flag
    if args.version:
        print(f"exercise-mcp-server version {__version__}")
        sys.exit(0)

    config = ServerConfig.from_environment()
    if args.profile:
        try:
            config.profile = parse_profile(args.profile)
        except ValueError as e:
            parser.error(str(e))
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    if args.http:
        logger.info(f"Starting in HTTP mode (Streamable HTTP) on {config.host}:{config.port}/mcp")
        from transport.http import run_http_server
        run_http_server(config)
    else:
        # Default: stdio mode
        logger.info("Starting in stdio mode...")
        asyncio.run(main(config))


if __name__ == "__main__":
    cli_entry()
