"""
Tests for the StatusPage MCP tools.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from statuspage_tools.credentials import CredentialStoreAdapter
from statuspage_tools.tools.statuspage_tool import register_tools

TOOL_NAMES = [
    "statuspage_patch_component",
    "statuspage_create_incident",
    "statuspage_patch_incident_by_component",
    "statuspage_list_unresolved_incidents",
    "statuspage_add_metric_data_point",
    "statuspage_execute",
]


def _response(status_code: int, data) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.content = b"{}"
    response.json.return_value = data
    return response


@pytest.fixture
def mock_http():
    with patch("statuspage_tools.tools.statuspage_tool.client.httpx.AsyncClient") as mock_client_cls:
        http = AsyncMock()
        mock_client_cls.return_value = http
        yield http


def _tool(mcp, name):
    return mcp._tool_manager._tools[name].fn


def test_registration(mcp, credentials):
    register_tools(mcp, credentials=credentials)
    for name in TOOL_NAMES:
        assert name in mcp._tool_manager._tools


@pytest.mark.asyncio
async def test_missing_credentials(mcp, mock_http):
    register_tools(mcp, credentials=CredentialStoreAdapter.for_testing({}))

    result = await _tool(mcp, "statuspage_list_unresolved_incidents")(page_id="p1")

    assert result["error"] == "StatusPage credentials not configured"
    assert "STATUSPAGE_API_KEY" in result["help"]
    mock_http.request.assert_not_called()


@pytest.mark.asyncio
async def test_env_fallback(mcp, mock_http, monkeypatch):
    monkeypatch.setenv("STATUSPAGE_API_KEY", "env-key")
    monkeypatch.delenv("STATUSPAGE_API_URL", raising=False)
    mock_http.request.return_value = _response(200, [])
    register_tools(mcp, credentials=None)

    result = await _tool(mcp, "statuspage_list_unresolved_incidents")(page_id="p1")

    assert result["success"] is True
    args, _ = mock_http.request.call_args
    assert args[0] == "GET"
    assert args[1] == "https://api.statuspage.io/v1/pages/p1/incidents/unresolved?api_key=env-key"


@pytest.mark.asyncio
async def test_patch_component(mcp, credentials, mock_http):
    mock_http.request.return_value = _response(200, {"id": "c1", "status": "major_outage"})
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_patch_component")(
        page_id="p1", component_id="c1", status="major_outage"
    )

    assert result == {
        "success": True,
        "records": [{"json": {"id": "c1", "status": "major_outage"}}],
        "count": 1,
    }
    args, kwargs = mock_http.request.call_args
    assert args[0] == "PATCH"
    assert args[1] == "https://api.statuspage.io/v1/pages/p1/components/c1?api_key=sp-test-key"
    assert kwargs["headers"] == {"Accept": "application/json"}
    assert kwargs["json"] == {"component": {"status": "major_outage"}}
    mock_http.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_incident(mcp, credentials, mock_http):
    mock_http.request.return_value = _response(201, {"id": "inc1"})
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_create_incident")(
        page_id="p1",
        incident_name="Checkout failing",
        impact="major",
        component_id="c1",
        component_status="partial_outage",
    )

    assert result["success"] is True
    assert result["records"] == [{"json": {"id": "inc1"}}]
    _, kwargs = mock_http.request.call_args
    assert kwargs["json"] == {
        "incident": {
            "name": "Checkout failing",
            "impact_override": "major",
            "status": "investigating",
            "component_ids": ["c1"],
            "components": {"c1": "partial_outage"},
        }
    }


@pytest.mark.asyncio
async def test_create_incident_skipped(mcp, credentials, mock_http):
    mock_http.request.return_value = _response(
        200, [{"id": "inc1", "components": [{"id": "c1"}]}]
    )
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_create_incident")(
        page_id="p1",
        incident_name="Checkout failing",
        component_id="c1",
        only_if_no_incident=True,
    )

    assert result == {"success": True, "records": [], "count": 0, "skipped": True}
    assert mock_http.request.call_count == 1
    assert mock_http.request.call_args[0][0] == "GET"


@pytest.mark.asyncio
async def test_patch_incident_by_component(mcp, credentials, mock_http):
    mock_http.request.side_effect = [
        _response(200, [{"id": "inc7", "components": [{"id": "c1"}]}]),
        _response(200, {"id": "inc7", "status": "resolved"}),
    ]
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_patch_incident_by_component")(
        page_id="p1", component_id="c1", status="resolved"
    )

    assert result["records"] == [{"json": {"id": "inc7", "status": "resolved"}}]
    args, kwargs = mock_http.request.call_args_list[1]
    assert args[0] == "PATCH"
    assert args[1].startswith("https://api.statuspage.io/v1/pages/p1/incidents/inc7?")
    assert kwargs["json"] == {"incident": {"status": "resolved"}}


@pytest.mark.asyncio
async def test_patch_incident_by_component_without_incident(mcp, credentials, mock_http):
    mock_http.request.return_value = _response(200, [])
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_patch_incident_by_component")(
        page_id="p1", component_id="c1", status="resolved"
    )

    assert result["skipped"] is True
    assert result["records"] == []
    assert mock_http.request.call_count == 1


@pytest.mark.asyncio
async def test_add_metric_data_point(mcp, credentials, mock_http):
    mock_http.request.return_value = _response(201, {"data": {"value": 3}})
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_add_metric_data_point")(
        page_id="p1", metric_id="m1", metric_value=3
    )

    assert result["success"] is True
    args, kwargs = mock_http.request.call_args
    assert args[0] == "POST"
    assert args[1].startswith("https://api.statuspage.io/v1/pages/p1/metrics/m1/data?")
    assert kwargs["json"]["data"]["value"] == 3
    assert isinstance(kwargs["json"]["data"]["timestamp"], float)


@pytest.mark.asyncio
async def test_api_error(mcp, credentials, mock_http):
    response = _response(404, {"error": "Component not found"})
    response.text = '{"error": "Component not found"}'
    mock_http.request.return_value = response
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_patch_component")(
        page_id="p1", component_id="missing", status="operational"
    )

    assert result["status_code"] == 404
    assert result["body"] == {"error": "Component not found"}
    assert "HTTP 404" in result["error"]
    assert "sp-test-key" not in result["error"]


@pytest.mark.asyncio
async def test_invalid_parameter(mcp, credentials, mock_http):
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_patch_component")(
        page_id="p1", component_id="c1", status="on_fire"
    )

    assert result["parameter"] == "status"
    assert "error" in result
    mock_http.request.assert_not_called()


@pytest.mark.asyncio
async def test_execute_generic(mcp, credentials, mock_http):
    mock_http.request.return_value = _response(200, [{"id": "i1"}, {"id": "i2"}])
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_execute")(
        resource="incident", operation="listUnresolved", parameters={"pageId": "p1"}
    )

    assert result["count"] == 2
    assert result["records"][1] == {"json": {"id": "i2"}}


@pytest.mark.asyncio
async def test_execute_unknown_operation(mcp, credentials, mock_http):
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_execute")(
        resource="metric", operation="create", parameters={"pageId": "p1"}
    )

    assert result["parameter"] == "operation"
    mock_http.request.assert_not_called()


@pytest.mark.asyncio
async def test_execute_missing_parameter(mcp, credentials, mock_http):
    register_tools(mcp, credentials=credentials)

    result = await _tool(mcp, "statuspage_execute")(
        resource="component", operation="patch", parameters={"pageId": "p1", "status": "operational"}
    )

    assert result == {
        "error": "Missing required parameter: componentId",
        "parameter": "componentId",
    }


@pytest.mark.asyncio
async def test_custom_base_url(mcp, mock_http):
    mock_http.request.return_value = _response(200, [])
    creds = CredentialStoreAdapter.for_testing(
        {"statuspage": "k", "statuspage_url": "http://localhost:8080/v1"}
    )
    register_tools(mcp, credentials=creds)

    await _tool(mcp, "statuspage_list_unresolved_incidents")(page_id="p1")

    assert mock_http.request.call_args[0][1] == "http://localhost:8080/v1/pages/p1/incidents/unresolved?api_key=k"
