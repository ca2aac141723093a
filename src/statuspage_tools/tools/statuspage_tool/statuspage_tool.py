"""
StatusPage Tool - Update components, incidents and metrics on StatusPage.io.

Every tool maps to one (resource, operation) of the StatusPage node and
returns the node's output records. Errors are reported as result dicts; API
errors keep the upstream status code and body.

API Reference: https://developer.statuspage.io/
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from fastmcp import FastMCP

from .dispatcher import execute
from .errors import ParameterError, StatusPageRequestError
from .models import Operation, Resource

if TYPE_CHECKING:
    from statuspage_tools.credentials import CredentialStoreAdapter


def register_tools(
    mcp: FastMCP,
    credentials: CredentialStoreAdapter | None = None,
) -> None:
    """Register StatusPage tools with the MCP server."""

    def _get_api_key() -> str | None:
        if credentials is not None:
            return credentials.get("statuspage")
        return os.getenv("STATUSPAGE_API_KEY")

    def _get_base_url() -> str | None:
        if credentials is not None:
            return credentials.get("statuspage_url")
        return os.getenv("STATUSPAGE_API_URL")

    async def _run(resource: str, operation: str, parameters: dict[str, Any]) -> dict:
        api_key = _get_api_key()
        if not api_key:
            return {
                "error": "StatusPage credentials not configured",
                "help": "Set STATUSPAGE_API_KEY environment variable or configure via credential store",
            }
        try:
            result = await execute(
                resource,
                operation,
                parameters,
                api_key,
                base_url=_get_base_url(),
            )
        except ParameterError as e:
            return {"error": str(e), "parameter": e.parameter}
        except StatusPageRequestError as e:
            return {"error": str(e), "status_code": e.status_code, "body": e.body}

        response: dict[str, Any] = {
            "success": True,
            "records": result.records,
            "count": len(result.records),
        }
        if result.skipped:
            response["skipped"] = True
        return response

    @mcp.tool()
    async def statuspage_patch_component(page_id: str, component_id: str, status: str) -> dict:
        """
        Set the status of a StatusPage component.

        Args:
            page_id: The page identifier.
            component_id: The component identifier.
            status: One of operational, degraded_performance, partial_outage,
                major_outage, under_maintenance.
        """
        return await _run(
            Resource.COMPONENT,
            Operation.PATCH,
            {"pageId": page_id, "componentId": component_id, "status": status},
        )

    @mcp.tool()
    async def statuspage_create_incident(
        page_id: str,
        incident_name: str,
        impact: str = "",
        component_id: str | None = None,
        component_status: str = "",
        only_if_no_incident: bool = False,
    ) -> dict:
        """
        Create a StatusPage incident with status "investigating".

        Args:
            page_id: The page identifier.
            incident_name: Name of the incident.
            impact: Impact override (minor, major or critical).
            component_id: Component affected by the incident.
            component_status: New status for the component. Leave empty for no change.
            only_if_no_incident: Skip creation when an unresolved incident already
                references the component.
        """
        return await _run(
            Resource.INCIDENT,
            Operation.CREATE,
            {
                "pageId": page_id,
                "incidentName": incident_name,
                "impact": impact,
                "componentId": component_id,
                "componentStatus": component_status,
                "onlyIfNoIncident": only_if_no_incident,
            },
        )

    @mcp.tool()
    async def statuspage_patch_incident_by_component(
        page_id: str, component_id: str, status: str
    ) -> dict:
        """
        Update the status of the unresolved incident referencing a component.

        Does nothing (and returns no records) when no unresolved incident
        references the component.

        Args:
            page_id: The page identifier.
            component_id: The component whose active incident should be patched.
            status: One of investigating, identified, monitoring, resolved.
        """
        return await _run(
            Resource.INCIDENT,
            Operation.PATCH_BY_COMPONENT,
            {"pageId": page_id, "componentId": component_id, "status": status},
        )

    @mcp.tool()
    async def statuspage_list_unresolved_incidents(page_id: str) -> dict:
        """
        List all unresolved incidents of a page.

        Args:
            page_id: The page identifier.
        """
        return await _run(Resource.INCIDENT, Operation.LIST_UNRESOLVED, {"pageId": page_id})

    @mcp.tool()
    async def statuspage_add_metric_data_point(
        page_id: str, metric_id: str, metric_value: int | float
    ) -> dict:
        """
        Submit a data point, timestamped now, to a page metric.

        Args:
            page_id: The page identifier.
            metric_id: The metric identifier.
            metric_value: The value to record.
        """
        return await _run(
            Resource.METRIC,
            Operation.ADD_DATA_POINT,
            {"pageId": page_id, "metricId": metric_id, "metricValue": metric_value},
        )

    @mcp.tool()
    async def statuspage_execute(resource: str, operation: str, parameters: dict) -> dict:
        """
        Run any StatusPage node operation with host-style parameters.

        Args:
            resource: component, incident or metric.
            operation: patch, create, patchByComponent, listUnresolved or addDataPoint.
            parameters: Node parameters such as pageId, componentId, status,
                incidentName, impact, componentStatus, onlyIfNoIncident,
                metricId, metricValue.
        """
        return await _run(resource, operation, parameters)
