"""
StatusPage REST client.

Builds one request description per operation and sends it with httpx. The API
key travels as the ``api_key`` query parameter, which is how the StatusPage v1
API authenticates; it is masked in every log line and error message.

API Reference: https://developer.statuspage.io/
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import StatusPageRequestError
from .models import Incident, IncidentCreate, references_component

logger = logging.getLogger(__name__)

STATUSPAGE_API_URL = "https://api.statuspage.io/v1"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class RequestDescription:
    """A single outbound HTTP request."""

    method: str
    uri: str
    headers: dict[str, str]
    body: dict[str, Any] | None = None


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class StatusPageClient:
    """Async client for one StatusPage page.

    Use it as an async context manager to share one connection pool across the
    (at most two) requests of an invocation. Outside a context every request
    opens and closes its own ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        api_key: str,
        page_id: str,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.time,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._api_key = api_key
        self._page_id = page_id
        self._base_url = (base_url or STATUSPAGE_API_URL).rstrip("/")
        self._transport = transport
        self._clock = clock
        self._timeout = timeout
        self._http: httpx.AsyncClient | None = None

    async def __aenter__(self) -> StatusPageClient:
        self._http = httpx.AsyncClient(transport=self._transport, timeout=self._timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    @property
    def page_id(self) -> str:
        return self._page_id

    @property
    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def redact(self, text: str) -> str:
        """Mask the API key wherever it appears in ``text``."""
        if not self._api_key:
            return text
        return text.replace(self._api_key, "***")

    # --- Request builders ---

    def build_request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> RequestDescription:
        uri = f"{self._base_url}/pages/{self._page_id}{path}?api_key={self._api_key}"
        return RequestDescription(method=method, uri=uri, headers=self._headers, body=body)

    def patch_component_request(self, component_id: str, status: str) -> RequestDescription:
        return self.build_request(
            "PATCH",
            f"/components/{component_id}",
            {"component": {"status": str(status)}},
        )

    def list_unresolved_request(self) -> RequestDescription:
        return self.build_request("GET", "/incidents/unresolved")

    def create_incident_request(self, incident: IncidentCreate) -> RequestDescription:
        return self.build_request("POST", "/incidents", {"incident": incident.to_body()})

    def patch_incident_request(self, incident_id: str, status: str) -> RequestDescription:
        return self.build_request(
            "PATCH",
            f"/incidents/{incident_id}",
            {"incident": {"status": str(status)}},
        )

    def add_data_point_request(self, metric_id: str, value: int | float) -> RequestDescription:
        # epoch milliseconds / 1000
        timestamp = int(self._clock() * 1000) / 1000
        return self.build_request(
            "POST",
            f"/metrics/{metric_id}/data",
            {"data": {"timestamp": timestamp, "value": value}},
        )

    # --- Transport ---

    async def send(self, request: RequestDescription) -> Any:
        """Send ``request`` and return the parsed JSON body.

        Returns None for an empty body and the raw text for a body that is not
        JSON. Raises StatusPageRequestError for transport failures and non-2xx
        responses.
        """
        if self._http is not None:
            return await self._send(self._http, request)
        async with httpx.AsyncClient(transport=self._transport, timeout=self._timeout) as http:
            return await self._send(http, request)

    async def _send(self, http: httpx.AsyncClient, request: RequestDescription) -> Any:
        url = self.redact(request.uri)
        logger.debug(f"StatusPage request: {request.method} {url}")
        try:
            response = await http.request(
                request.method,
                request.uri,
                headers=request.headers,
                json=request.body,
            )
        except httpx.RequestError as e:
            logger.error(f"StatusPage network error for {request.method} {url}")
            raise StatusPageRequestError(
                f"Network error: {self.redact(str(e))}",
                method=request.method,
                url=url,
            ) from e

        if not response.is_success:
            logger.error(
                f"StatusPage API error (HTTP {response.status_code}) for {request.method} {url}"
            )
            raise StatusPageRequestError(
                f"StatusPage API error (HTTP {response.status_code})",
                status_code=response.status_code,
                body=_parse_body(response),
                method=request.method,
                url=url,
            )

        if not response.content:
            return None
        return _parse_body(response)

    # --- Operations ---

    async def patch_component(self, component_id: str, status: str) -> Any:
        return await self.send(self.patch_component_request(component_id, status))

    async def list_unresolved_incidents(self) -> list[dict[str, Any]]:
        incidents = await self.send(self.list_unresolved_request())
        return incidents or []

    async def create_incident(self, incident: IncidentCreate) -> Any:
        return await self.send(self.create_incident_request(incident))

    async def patch_incident(self, incident_id: str, status: str) -> Any:
        return await self.send(self.patch_incident_request(incident_id, status))

    async def add_metric_data_point(self, metric_id: str, value: int | float) -> Any:
        return await self.send(self.add_data_point_request(metric_id, value))

    async def find_active_incident(self, component_id: str) -> Incident | None:
        """Return the unresolved incident that references ``component_id``.

        Fetches the unresolved list on every call. The whole list is scanned,
        so when several incidents reference the component the last one wins.
        Malformed entries never match; incidents without a string ``id`` are
        ignored since they cannot be patched.
        """
        active = None
        for data in await self.list_unresolved_incidents():
            if references_component(data, component_id) and isinstance(data.get("id"), str):
                active = data
        if active is None:
            return None
        return Incident.model_validate(active)
