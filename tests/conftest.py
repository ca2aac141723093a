"""
Shared fixtures for StatusPage tests.

``FakeStatusPage`` stands in for api.statuspage.io through
``httpx.MockTransport`` and records every request it receives.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from fastmcp import FastMCP

from statuspage_tools.credentials import CredentialStoreAdapter


class FakeStatusPage:
    def __init__(
        self,
        unresolved: list[dict[str, Any]] | None = None,
        status_code: int = 200,
        response: Any = None,
    ):
        self.unresolved = unresolved if unresolved is not None else []
        self.status_code = status_code
        self.response = response if response is not None else {"id": "result"}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and request.url.path.endswith("/incidents/unresolved"):
            return httpx.Response(200, json=self.unresolved)
        return httpx.Response(self.status_code, json=self.response)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def actions(self) -> list[httpx.Request]:
        """Requests other than the unresolved-incident lookup."""
        return [r for r in self.requests if not r.url.path.endswith("/incidents/unresolved")]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture
def mcp() -> FastMCP:
    return FastMCP("statuspage-test")


@pytest.fixture
def credentials() -> CredentialStoreAdapter:
    return CredentialStoreAdapter.for_testing({"statuspage": "sp-test-key"})
