"""
HTTP entry points for POST, GET and OPTIONS on /mcp.

Framework independent: each entry point takes plain headers and body and
returns an HttpResponse. The FastAPI app and the serverless handler are thin
adapters around McpEndpoints.

POST order: auth (profile dependent), origin, body parse, inbound
responses/notifications (202), Accept check, method check, dispatch,
negotiation. Unexpected errors become 500 / -32603.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from auth import AuthError, UserContext, extract_user_context
from config import ServerConfig
from server import McpDispatcher, create_dispatcher
from utils.jsonrpc import (
    JsonRpcError, create_error_response,
    is_notification, is_request, is_response,
)
from utils.sse import compact_json, format_sse_event

from .negotiation import (
    JSON_CONTENT_TYPE, negotiate, new_session_id, parse_accept,
    sse_headers, unacceptable_outcome,
)
from .origin import validate_origin

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Accept, Origin, Authorization",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


@dataclass
class HttpResponse:
    status_code: int
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)


def header_value(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    """Case-insensitive header lookup"""
    if not headers:
        return None
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def parse_message(body: Union[str, bytes, None]) -> dict[str, Any]:
    """Parse a JSON-RPC body; anything unusable becomes an empty message"""
    if not body:
        return {}
    try:
        message = json.loads(body)
    except (ValueError, TypeError) as e:
        logger.warning(f"Malformed JSON body: {e}")
        return {}
    if not isinstance(message, dict):
        logger.warning("JSON-RPC body is not an object")
        return {}
    return message


def json_response(status_code: int, payload: Any, **extra_headers: str) -> HttpResponse:
    return HttpResponse(
        status_code=status_code,
        body=compact_json(payload),
        headers={**CORS_HEADERS, "Content-Type": JSON_CONTENT_TYPE, **extra_headers},
    )


def origin_rejected() -> HttpResponse:
    # No CORS headers on origin rejection
    return HttpResponse(
        status_code=403,
        body=compact_json({"error": "Invalid origin"}),
        headers={"Content-Type": JSON_CONTENT_TYPE},
    )


class McpEndpoints:
    """POST/GET/OPTIONS handling for one deployment profile"""

    def __init__(self, dispatcher: McpDispatcher, config: ServerConfig):
        self.dispatcher = dispatcher
        self.config = config

    @classmethod
    def from_config(cls, config: Optional[ServerConfig] = None) -> 'McpEndpoints':
        config = config or ServerConfig.from_environment()
        logger.info(f"MCP endpoints configured for profile '{config.profile.value}'")
        return cls(create_dispatcher(config), config)

    def _authenticate(self, headers: Optional[Mapping[str, str]]) -> Optional[UserContext]:
        if not self.config.auth_required:
            return None
        return extract_user_context(header_value(headers, "authorization"))

    def _auth_failure(self, error: AuthError) -> HttpResponse:
        logger.warning(f"Authentication failed: {error}")
        return json_response(
            401,
            create_error_response(None, JsonRpcError.AUTH_ERROR, str(error)),
        )

    def _origin_allowed(self, headers: Optional[Mapping[str, str]]) -> bool:
        return validate_origin(header_value(headers, "origin"), self.config.allowed_origins)

    async def post(
        self,
        headers: Optional[Mapping[str, str]],
        body: Union[str, bytes, None],
    ) -> HttpResponse:
        try:
            user = self._authenticate(headers)
        except AuthError as e:
            return self._auth_failure(e)

        if not self._origin_allowed(headers):
            return origin_rejected()

        try:
            message = parse_message(body)

            if is_response(message) or is_notification(message):
                logger.info("Accepted inbound response/notification")
                return HttpResponse(status_code=202, headers=dict(CORS_HEADERS))

            accept = header_value(headers, "accept")
            if not parse_accept(accept).acceptable:
                logger.warning(f"Unsupported Accept header: {accept}")
                outcome = unacceptable_outcome()
                return HttpResponse(
                    outcome.status_code, outcome.body, {**CORS_HEADERS, **outcome.headers()}
                )

            if not is_request(message):
                return json_response(
                    400,
                    create_error_response(
                        message.get("id"),
                        JsonRpcError.INVALID_REQUEST,
                        "Invalid JSON-RPC request: method is required"
                    ),
                )

            response = await self.dispatcher.dispatch(message, user)
            outcome = negotiate(accept, message["method"], response)
            return HttpResponse(
                outcome.status_code, outcome.body, {**CORS_HEADERS, **outcome.headers()}
            )

        except Exception as e:
            logger.error(f"Error handling MCP POST: {e}", exc_info=True)
            return json_response(
                500,
                create_error_response(None, JsonRpcError.INTERNAL_ERROR, "Internal error", str(e)),
            )

    async def get(self, headers: Optional[Mapping[str, str]]) -> HttpResponse:
        """
        GET /mcp opens an SSE stream that carries one `connected` event.

        Clients that do not accept text/event-stream get 405 with Allow: POST.
        """
        try:
            self._authenticate(headers)
        except AuthError as e:
            return self._auth_failure(e)

        if not self._origin_allowed(headers):
            return origin_rejected()

        if not parse_accept(header_value(headers, "accept")).sse:
            return json_response(
                405,
                {"error": "Method Not Allowed - must accept text/event-stream"},
                Allow="POST",
            )

        session_id = new_session_id()
        logger.info(f"Opened SSE stream {session_id}")
        return HttpResponse(
            status_code=200,
            body=format_sse_event(
                {"type": "connected", "sessionId": session_id}, "connected"
            ),
            headers={**CORS_HEADERS, **sse_headers(session_id)},
        )

    def options(self) -> HttpResponse:
        return HttpResponse(status_code=200, headers=dict(CORS_HEADERS))
