"""
Response negotiation for MCP Streamable HTTP.

Given the Accept header, the JSON-RPC method and the dispatcher's response,
decide between a single JSON document and one SSE event:

1. Accept names neither application/json nor text/event-stream: 400.
2. Request methods (initialize, tools/list, resources/list, tools/call,
   resources/read) prefer JSON.
3. JSON accepted and (JSON preferred or SSE not accepted): JSON.
4. SSE accepted: one `response` event carrying a fresh session id.
5. Otherwise JSON.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from utils.jsonrpc import JsonRpcError, create_error_response
from utils.sse import compact_json, format_sse_event

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
SSE_CONTENT_TYPE = "text/event-stream"

PREFER_JSON_METHODS = frozenset({
    "initialize",
    "tools/list",
    "resources/list",
    "tools/call",
    "resources/read",
})

SSE_RESPONSE_EVENT = "response"


def new_session_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class AcceptSupport:
    """Which response encodings an Accept header allows"""
    json: bool
    sse: bool

    @property
    def acceptable(self) -> bool:
        return self.json or self.sse


def parse_accept(accept: Optional[str]) -> AcceptSupport:
    value = (accept or "").lower()
    return AcceptSupport(
        json=JSON_CONTENT_TYPE in value,
        sse=SSE_CONTENT_TYPE in value,
    )


def sse_headers(session_id: str) -> dict[str, str]:
    return {
        "Content-Type": SSE_CONTENT_TYPE,
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
        "X-Session-ID": session_id,
    }


@dataclass
class NegotiationOutcome:
    """Status, content type and framed body for one HTTP response"""
    status_code: int
    content_type: str
    body: str
    session_id: Optional[str] = None

    def headers(self) -> dict[str, str]:
        if self.session_id is not None:
            return sse_headers(self.session_id)
        return {"Content-Type": self.content_type}


def unacceptable_outcome() -> NegotiationOutcome:
    return NegotiationOutcome(
        status_code=400,
        content_type=JSON_CONTENT_TYPE,
        body=compact_json(create_error_response(
            None,
            JsonRpcError.INVALID_REQUEST,
            "Not Acceptable: Accept header must include application/json or text/event-stream"
        )),
    )


def negotiate(
    accept: Optional[str],
    method: Optional[str],
    response: dict[str, Any],
    session_id_factory: Callable[[], str] = new_session_id,
) -> NegotiationOutcome:
    support = parse_accept(accept)
    logger.debug(f"Accept analysis: json={support.json} sse={support.sse} method={method}")

    if not support.acceptable:
        return unacceptable_outcome()

    prefer_json = method in PREFER_JSON_METHODS

    if support.json and (prefer_json or not support.sse):
        return NegotiationOutcome(200, JSON_CONTENT_TYPE, compact_json(response))

    if support.sse:
        session_id = session_id_factory()
        return NegotiationOutcome(
            status_code=200,
            content_type=SSE_CONTENT_TYPE,
            body=format_sse_event(response, SSE_RESPONSE_EVENT, response.get("id")),
            session_id=session_id,
        )

    return NegotiationOutcome(200, JSON_CONTENT_TYPE, compact_json(response))
