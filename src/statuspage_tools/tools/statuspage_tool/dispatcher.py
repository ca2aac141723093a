"""
Request dispatcher for the StatusPage node.

Each invocation variant from ``models`` has exactly one handler. A handler
issues at most two requests (active-incident lookup, then the action) and
returns the parsed response, or ``SKIPPED`` when there is nothing to do.

Skipping is not an error. ``incident.patchByComponent`` with no unresolved
incident for the component, and ``incident.create`` with
``onlyIfNoIncident`` when one already exists, both complete successfully
with zero output records.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from .client import StatusPageClient
from .models import (
    INVOCATION_TYPES,
    AddMetricDataPoint,
    CreateIncident,
    IncidentCreate,
    IncidentStatus,
    Invocation,
    ListUnresolvedIncidents,
    PatchComponent,
    PatchIncidentByComponent,
    parse_invocation,
)

logger = logging.getLogger(__name__)

SKIPPED = object()


@dataclass
class NodeResult:
    """Output of one node invocation, in the host's record envelope."""

    records: list[dict[str, Any]] = field(default_factory=list)
    skipped: bool = False


def to_records(value: Any) -> list[dict[str, Any]]:
    """Wrap a response value into ``{"json": ...}`` records."""
    if value is None:
        return []
    if isinstance(value, list):
        return [{"json": item} for item in value]
    return [{"json": value}]


def build_incident_payload(invocation: CreateIncident) -> IncidentCreate:
    incident = IncidentCreate(
        name=invocation.incident_name,
        impact_override=str(invocation.impact),
        status=IncidentStatus.INVESTIGATING.value,
    )
    if invocation.component_id and invocation.component_status:
        incident.components = {invocation.component_id: str(invocation.component_status)}
    if invocation.component_id:
        incident.component_ids = [invocation.component_id]
    return incident


# --- Handlers ---


async def _patch_component(client: StatusPageClient, invocation: PatchComponent) -> Any:
    return await client.patch_component(invocation.component_id, invocation.status)


async def _create_incident(client: StatusPageClient, invocation: CreateIncident) -> Any:
    if invocation.only_if_no_incident and invocation.component_id:
        active = await client.find_active_incident(invocation.component_id)
        if active is not None:
            logger.info(
                f"Incident {active.id} already open for component "
                f"{invocation.component_id}, not creating a new one"
            )
            return SKIPPED
    return await client.create_incident(build_incident_payload(invocation))


async def _patch_incident_by_component(
    client: StatusPageClient, invocation: PatchIncidentByComponent
) -> Any:
    active = await client.find_active_incident(invocation.component_id)
    if active is None:
        logger.info(
            f"No unresolved incident references component {invocation.component_id}, "
            "nothing to patch"
        )
        return SKIPPED
    return await client.patch_incident(active.id, invocation.status)


async def _list_unresolved(client: StatusPageClient, invocation: ListUnresolvedIncidents) -> Any:
    return await client.list_unresolved_incidents()


async def _add_metric_data_point(client: StatusPageClient, invocation: AddMetricDataPoint) -> Any:
    return await client.add_metric_data_point(invocation.metric_id, invocation.metric_value)


Handler = Callable[[StatusPageClient, Any], Awaitable[Any]]

HANDLERS: dict[type[Invocation], Handler] = {
    PatchComponent: _patch_component,
    CreateIncident: _create_incident,
    PatchIncidentByComponent: _patch_incident_by_component,
    ListUnresolvedIncidents: _list_unresolved,
    AddMetricDataPoint: _add_metric_data_point,
}

_unhandled = sorted(cls.__name__ for cls in INVOCATION_TYPES.values() if cls not in HANDLERS)
if _unhandled:
    raise RuntimeError(f"No StatusPage handler for: {', '.join(_unhandled)}")


async def dispatch(invocation: Invocation, client: StatusPageClient) -> NodeResult:
    """Run the handler for ``invocation`` against ``client``."""
    handler = HANDLERS[type(invocation)]
    logger.info(
        f"StatusPage {invocation.resource}.{invocation.operation} on page {client.page_id}"
    )
    value = await handler(client, invocation)
    if value is SKIPPED:
        return NodeResult(skipped=True)
    return NodeResult(records=to_records(value))


async def execute(
    resource: str,
    operation: str,
    parameters: Mapping[str, Any],
    api_key: str,
    base_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    clock: Callable[[], float] | None = None,
) -> NodeResult:
    """Resolve parameters, then dispatch one node invocation.

    Parameter errors are raised before any request is sent. Request errors
    propagate unchanged.
    """
    invocation = parse_invocation(resource, operation, parameters)
    client_kwargs: dict[str, Any] = {"base_url": base_url, "transport": transport}
    if clock is not None:
        client_kwargs["clock"] = clock
    async with StatusPageClient(api_key, invocation.page_id, **client_kwargs) as client:
        return await dispatch(invocation, client)
