"""
SSE (Server-Sent Events) framing utilities for MCP Streamable HTTP transport.

Frame layout, byte for byte:

    id: <id>\n          only when id is not None
    event: <event>\n    only when event is non-empty
    data: <json>\n\n
"""

import json
from typing import Any, Optional


def compact_json(payload: Any) -> str:
    """Serialize without whitespace, matching what browser clients emit"""
    return json.dumps(payload, separators=(',', ':'), ensure_ascii=False)


def format_sse_event(
    data: Any,
    event: Optional[str] = "message",
    event_id: Any = None,
) -> str:
    """
    Format a payload as one SSE event.

    Example:
        >>> format_sse_event({"jsonrpc": "2.0", "id": 1, "result": {}}, "response", 1)
        'id: 1\\nevent: response\\ndata: {"jsonrpc":"2.0","id":1,"result":{}}\\n\\n'
    """
    frame = ""
    if event_id is not None:
        frame += f"id: {event_id}\n"
    if event:
        frame += f"event: {event}\n"
    frame += f"data: {compact_json(data)}\n\n"
    return frame
