"""
HTTP Entry Point Tests
POST/GET/OPTIONS handling: auth and origin gating, body parsing, status codes
and response framing, driven directly through McpEndpoints.
"""

import json
import re

import pytest

from config import ServerProfile
from tests.fakes import bearer
from tools import get_tool_catalog, tool_descriptor

SSE_FRAME = re.compile(r"^(id: .*\n)?(event: .*\n)?data: .*\n\n$")


def rpc(method, params=None, request_id=1):
    return json.dumps({"jsonrpc": "2.0", "id": request_id, "method": method, "params": params or {}})


class TestPost:

    @pytest.mark.asyncio
    async def test_tools_list_json(self, endpoints, auth_headers):
        response = await endpoints.post(auth_headers, rpc("tools/list"))
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/json"
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        body = json.loads(response.body)
        assert body["jsonrpc"] == "2.0"
        assert body["id"] == 1
        assert body["result"]["tools"] == [
            tool_descriptor(t) for t in get_tool_catalog(ServerProfile.AUTHENTICATED)
        ]

    @pytest.mark.asyncio
    async def test_header_names_are_case_insensitive(self, endpoints):
        headers = {
            "authorization": bearer({"sub": "user-1"}),
            "accept": "application/json",
        }
        response = await endpoints.post(headers, rpc("initialize"))
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_auth(self, endpoints):
        response = await endpoints.post({"Accept": "application/json"}, rpc("tools/list"))
        assert response.status_code == 401
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert json.loads(response.body) == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32001, "message": "Authorization header is required"},
        }

    @pytest.mark.asyncio
    async def test_token_without_user(self, endpoints, auth_headers):
        auth_headers["Authorization"] = bearer({"role": "admin"})
        response = await endpoints.post(auth_headers, rpc("tools/list"))
        assert response.status_code == 401
        assert json.loads(response.body)["error"]["message"] == "User ID not found in token"

    @pytest.mark.asyncio
    async def test_auth_checked_before_origin(self, endpoints):
        headers = {"Accept": "application/json", "Origin": "https://evil.example"}
        response = await endpoints.post(headers, rpc("tools/list"))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_public_profile_needs_no_token(self, public_endpoints):
        response = await public_endpoints.post({"Accept": "application/json"}, rpc("tools/list"))
        assert response.status_code == 200
        assert len(json.loads(response.body)["result"]["tools"]) == 3

    @pytest.mark.asyncio
    async def test_invalid_origin(self, endpoints, auth_headers):
        auth_headers["Origin"] = "https://evil.example"
        response = await endpoints.post(auth_headers, rpc("tools/list"))
        assert response.status_code == 403
        assert json.loads(response.body) == {"error": "Invalid origin"}
        assert "Access-Control-Allow-Origin" not in response.headers

    @pytest.mark.asyncio
    @pytest.mark.parametrize("origin", ["http://localhost:6274", "https://claude.ai"])
    async def test_allowed_origins(self, endpoints, auth_headers, origin):
        auth_headers["Origin"] = origin
        response = await endpoints.post(auth_headers, rpc("tools/list"))
        assert response.status_code == 200

    @pytest.mark.asyncio
    @pytest.mark.parametrize("accept", ["text/html", "", None])
    async def test_unsupported_accept(self, endpoints, auth_headers, accept):
        if accept is None:
            del auth_headers["Accept"]
        else:
            auth_headers["Accept"] = accept
        response = await endpoints.post(auth_headers, rpc("tools/list"))
        assert response.status_code == 400
        assert json.loads(response.body)["error"]["code"] == -32600

    @pytest.mark.asyncio
    async def test_sse_only_client(self, endpoints, auth_headers):
        auth_headers["Accept"] = "text/event-stream"
        response = await endpoints.post(
            auth_headers, rpc("tools/call", {"name": "get_exercises", "arguments": {}}, request_id=9)
        )
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "text/event-stream"
        assert response.headers["X-Session-ID"]
        assert SSE_FRAME.match(response.body)
        assert response.body.startswith("id: 9\nevent: response\n")
        data = json.loads(response.body.split("data: ", 1)[1])
        assert data["result"]["isError"] is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["{not json", "[1, 2]", "", '{"jsonrpc": "2.0", "id": 1}'])
    async def test_unusable_body(self, endpoints, auth_headers, body):
        response = await endpoints.post(auth_headers, body)
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [
        {"jsonrpc": "2.0", "id": 1, "result": {}},
        {"jsonrpc": "2.0", "id": 1, "error": {"code": -1, "message": "x"}},
        {"jsonrpc": "2.0", "method": "notifications/initialized"},
    ])
    async def test_inbound_responses_are_accepted(self, endpoints, auth_headers, message):
        auth_headers["Accept"] = "text/html"
        response = await endpoints.post(auth_headers, json.dumps(message))
        assert response.status_code == 202
        assert response.body == ""

    @pytest.mark.asyncio
    async def test_unknown_method_rides_in_200(self, endpoints, auth_headers):
        auth_headers["Accept"] = "application/json"
        response = await endpoints.post(auth_headers, rpc("unknown/method"))
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/json"
        assert json.loads(response.body)["error"]["code"] == -32601

    @pytest.mark.asyncio
    async def test_unknown_method_streams_when_both_accepted(self, endpoints, auth_headers):
        response = await endpoints.post(auth_headers, rpc("unknown/method", request_id=4))
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "text/event-stream"
        assert SSE_FRAME.match(response.body)
        data = json.loads(response.body.split("data: ", 1)[1])
        assert data["id"] == 4
        assert data["error"]["code"] == -32601

    @pytest.mark.asyncio
    async def test_bytes_body(self, endpoints, auth_headers):
        response = await endpoints.post(auth_headers, rpc("initialize").encode("utf-8"))
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_unexpected_error_is_500(self, endpoints, auth_headers, monkeypatch):
        async def explode(message, user=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(endpoints.dispatcher, "dispatch", explode)
        response = await endpoints.post(auth_headers, rpc("tools/list"))
        assert response.status_code == 500
        assert json.loads(response.body) == {
            "jsonrpc": "2.0",
            "id": None,
            "error": {"code": -32603, "message": "Internal error", "data": "boom"},
        }

    @pytest.mark.asyncio
    async def test_create_program_with_bad_index(self, endpoints, auth_headers):
        arguments = {
            "program": {"title": "P"},
            "workouts": [{"title": "A"}, {"title": "B"}],
            "program_schedule": [{"day": 1, "workout_index": 5}],
        }
        response = await endpoints.post(
            auth_headers, rpc("tools/call", {"name": "create_workout_program", "arguments": arguments})
        )
        result = json.loads(response.body)["result"]
        assert response.status_code == 200
        assert result["isError"] is True
        assert "Invalid workout_index" in result["content"][0]["text"]


class TestGet:

    @pytest.mark.asyncio
    async def test_sse_stream(self, endpoints, auth_headers):
        auth_headers["Accept"] = "text/event-stream"
        response = await endpoints.get(auth_headers)
        assert response.status_code == 200
        assert response.headers["Content-Type"] == "text/event-stream"
        session_id = response.headers["X-Session-ID"]
        assert session_id
        assert response.body.startswith("event: connected\n")
        data = json.loads(response.body.split("data: ", 1)[1])
        assert data == {"type": "connected", "sessionId": session_id}

    @pytest.mark.asyncio
    async def test_json_only_client_gets_405(self, endpoints, auth_headers):
        auth_headers["Accept"] = "application/json"
        response = await endpoints.get(auth_headers)
        assert response.status_code == 405
        assert response.headers["Allow"] == "POST"
        assert json.loads(response.body) == {"error": "Method Not Allowed - must accept text/event-stream"}

    @pytest.mark.asyncio
    async def test_missing_auth(self, endpoints):
        response = await endpoints.get({"Accept": "text/event-stream"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_origin(self, endpoints, auth_headers):
        auth_headers["Origin"] = "https://evil.example"
        response = await endpoints.get(auth_headers)
        assert response.status_code == 403


class TestOptions:

    def test_preflight(self, endpoints):
        response = endpoints.options()
        assert response.status_code == 200
        assert response.body == ""
        assert response.headers == {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Headers": "Content-Type, Accept, Origin, Authorization",
            "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        }
