"""
Pytest configuration and fixtures for Tana MCP testing.

The Tana Input API is replaced by an httpx MockTransport that records every
request and answers like Tana does: one response child per submitted node.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from tana_mcp import fastmcp_server
from tana_mcp.client import TanaClient

# Test data constants
TEST_TOKEN = "test_token_123456789"
TEST_ENDPOINT = "https://tana.test/addToNodeV2"


def echo_created_nodes(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Answer a createNodes request the way Tana does."""
    children = []
    for index, node in enumerate(payload.get("nodes", [])):
        child = {"nodeId": f"node-{index}"}
        if "name" in node:
            child["name"] = node["name"]
        if "description" in node:
            child["description"] = node["description"]
        children.append(child)
    return {"children": children}


class TanaAPIRecorder:
    """Records requests and replays a canned Tana answer."""

    def __init__(
        self,
        responder: Optional[Callable[[Dict[str, Any]], Any]] = echo_created_nodes,
        status_code: int = 200,
        error: Optional[Exception] = None,
        raw_body: Optional[bytes] = None,
    ):
        self.responder = responder
        self.status_code = status_code
        self.error = error
        self.raw_body = raw_body
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        if self.status_code >= 400:
            return httpx.Response(self.status_code, json={"error": "failed"})
        return httpx.Response(self.status_code, json=self.responder(json.loads(request.content)))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def client(self) -> TanaClient:
        return TanaClient(api_token=TEST_TOKEN, endpoint=TEST_ENDPOINT, transport=self.transport)


@pytest.fixture
def tana_api():
    """A recorder answering like a healthy Tana API."""
    return TanaAPIRecorder()


@pytest.fixture
def tana_client(tana_api):
    return tana_api.client()


@pytest.fixture
def use_tana_api(monkeypatch):
    """Route the server's tools to a recorder; returns a function taking the recorder."""
    def install(recorder: TanaAPIRecorder) -> TanaAPIRecorder:
        monkeypatch.setattr(fastmcp_server, "get_tana_client", recorder.client)
        return recorder
    return install


@pytest.fixture
def server_api(tana_api, use_tana_api):
    """The healthy recorder, already wired into the MCP server."""
    return use_tana_api(tana_api)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove Tana variables from the environment."""
    for name in ("TANA_API_TOKEN", "TANA_API_ENDPOINT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_tools():
    """Put the registered tool set back after a test adds or removes tools."""
    original_tools = fastmcp_server.mcp._tool_manager._tools.copy()
    yield
    fastmcp_server.mcp._tool_manager._tools = original_tools
