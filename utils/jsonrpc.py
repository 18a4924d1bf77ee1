"""
JSON-RPC 2.0 validation and utility functions for MCP.

Handles:
- Request/notification/response classification
- Error code constants
- Response formatting
"""

from typing import Any


# JSON-RPC 2.0 Error Codes
class JsonRpcError:
    """Standard JSON-RPC 2.0 error codes plus the server-defined auth code"""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    AUTH_ERROR = -32001


def is_request(data: dict) -> bool:
    """
    Check if a JSON-RPC message asks the server to do something.

    Any message carrying a method is a request here; a message without
    one is either an inbound response or garbage.
    """
    return isinstance(data, dict) and bool(data.get("method"))


def is_notification(data: dict) -> bool:
    """
    Check if a JSON-RPC message is a client notification (no response expected).

    Only the MCP notifications/* namespace is treated this way, so an
    id-less call to an unknown method still gets a method-not-found error.
    """
    method = data.get("method")
    return (
        isinstance(method, str)
        and method.startswith("notifications/")
        and "id" not in data
    )


def is_response(data: dict) -> bool:
    """Check if a message is a JSON-RPC response (result or error, no method)"""
    return (
        isinstance(data, dict)
        and not data.get("method")
        and ("result" in data or "error" in data)
    )


def create_success_response(request_id: Any, result: Any) -> dict:
    """
    Create a JSON-RPC success response.

    Args:
        request_id: ID from original request
        result: Result data

    Returns:
        JSON-RPC response object
    """
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "result": result
    }


def create_error_response(request_id: Any, code: int, message: str, data: Any = None) -> dict:
    """
    Create a JSON-RPC error response.

    Args:
        request_id: ID from original request (can be None)
        code: Error code
        message: Error message
        data: Optional additional error data

    Returns:
        JSON-RPC error response object
    """
    error = {
        "code": code,
        "message": message
    }

    if data is not None:
        error["data"] = data

    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "error": error
    }
