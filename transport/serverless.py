"""
Serverless entry point (API Gateway REST v1 and HTTP API v2 events).

One event loop is kept per process so the lazily opened MongoDB client
is reused across warm invocations.
"""

import asyncio
import base64
import binascii
import logging
from typing import Any, Optional, Union

from .endpoints import CORS_HEADERS, HttpResponse, McpEndpoints

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_loop: Optional[asyncio.AbstractEventLoop] = None
_endpoints: Optional[McpEndpoints] = None


def get_event_loop() -> asyncio.AbstractEventLoop:
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop


def get_endpoints() -> McpEndpoints:
    global _endpoints
    if _endpoints is None:
        _endpoints = McpEndpoints.from_config()
    return _endpoints


def event_method(event: dict) -> str:
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "").upper()


def event_body(event: dict) -> Union[str, bytes, None]:
    """Raw request body; base64 payloads stay bytes and are decoded by the JSON parser"""
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Undecodable base64 body: {e}")
            return None
    return body


def to_gateway_response(result: HttpResponse) -> dict[str, Any]:
    return {
        "statusCode": result.status_code,
        "headers": result.headers,
        "body": result.body,
    }


def lambda_handler(event: dict, context: Any = None) -> dict[str, Any]:
    method = event_method(event)
    headers = event.get("headers") or {}
    endpoints = get_endpoints()
    logger.info(f"{method} {event.get('path') or event.get('rawPath') or '/mcp'}")

    if method == "POST":
        result = get_event_loop().run_until_complete(endpoints.post(headers, event_body(event)))
    elif method == "GET":
        result = get_event_loop().run_until_complete(endpoints.get(headers))
    elif method == "OPTIONS":
        result = endpoints.options()
    else:
        result = HttpResponse(
            status_code=405,
            headers={**CORS_HEADERS, "Allow": "GET, POST, OPTIONS"},
        )

    return to_gateway_response(result)
