"""StatusPage node data models.

Two groups of models live here:

- Remote shapes (``Incident``) and the outbound ``IncidentCreate`` payload.
- One invocation model per (resource, operation) pair. Together they form the
  tagged union the dispatcher switches on. Host parameters are validated once,
  by ``parse_invocation``, before any request is built.
"""

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, ClassVar, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    ValidationError,
    field_validator,
)

from .errors import InvalidParameter, MissingParameter, UnknownOperation

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Resource(StrEnum):
    COMPONENT = "component"
    INCIDENT = "incident"
    METRIC = "metric"


class Operation(StrEnum):
    PATCH = "patch"
    CREATE = "create"
    PATCH_BY_COMPONENT = "patchByComponent"
    LIST_UNRESOLVED = "listUnresolved"
    ADD_DATA_POINT = "addDataPoint"


class ComponentStatus(StrEnum):
    """Status of a page component."""

    OPERATIONAL = "operational"
    DEGRADED_PERFORMANCE = "degraded_performance"
    PARTIAL_OUTAGE = "partial_outage"
    MAJOR_OUTAGE = "major_outage"
    UNDER_MAINTENANCE = "under_maintenance"


class IncidentStatus(StrEnum):
    """Lifecycle status of an incident."""

    INVESTIGATING = "investigating"
    IDENTIFIED = "identified"
    MONITORING = "monitoring"
    RESOLVED = "resolved"


class IncidentImpact(StrEnum):
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# Remote shapes
# ---------------------------------------------------------------------------


class Incident(BaseModel):
    """An incident as returned by the StatusPage API.

    Only ``id`` and the component ids matter here. Every other field is kept
    as-is in the model extras, and component entries are kept as raw values.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    components: list[Any] = Field(default_factory=list)

    @field_validator("components", mode="before")
    @classmethod
    def null_components_as_empty(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    def references(self, component_id: str) -> bool:
        return references_component({"components": self.components}, component_id)


def references_component(data: Any, component_id: str) -> bool:
    """Whether a raw incident lists ``component_id`` among its components.

    Entries that are not objects, or components without an ``id``, never match.
    """
    if not isinstance(data, Mapping):
        return False
    components = data.get("components")
    if not isinstance(components, list):
        return False
    return any(
        isinstance(component, Mapping) and component.get("id") == component_id
        for component in components
    )


class IncidentCreate(BaseModel):
    """Outbound ``incident`` payload for incident creation."""

    name: str | None = None
    impact_override: str | None = None
    status: str | None = None
    component_ids: list[str] | None = None
    components: dict[str, str] | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Invocations
# ---------------------------------------------------------------------------


class Invocation(BaseModel):
    """Parameters of one node invocation.

    Fields are populated from the host's camelCase parameter names
    (``pageId``) or from their snake_case equivalents.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    resource: ClassVar[Resource]
    operation: ClassVar[Operation]

    page_id: str = Field(alias="pageId")


class PatchComponent(Invocation):
    resource: ClassVar[Resource] = Resource.COMPONENT
    operation: ClassVar[Operation] = Operation.PATCH

    component_id: str = Field(alias="componentId")
    status: ComponentStatus


class CreateIncident(Invocation):
    resource: ClassVar[Resource] = Resource.INCIDENT
    operation: ClassVar[Operation] = Operation.CREATE

    incident_name: str = Field(alias="incidentName")
    impact: IncidentImpact | Literal[""] = ""
    component_id: str | None = Field(default=None, alias="componentId")
    # "" means "no change" for the component
    component_status: ComponentStatus | Literal[""] = Field(default="", alias="componentStatus")
    only_if_no_incident: bool = Field(default=False, alias="onlyIfNoIncident")

    @field_validator("component_id", mode="before")
    @classmethod
    def blank_component_id_as_none(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("impact", "component_status", mode="before")
    @classmethod
    def none_status_as_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("only_if_no_incident", mode="before")
    @classmethod
    def none_flag_as_false(cls, value: Any) -> Any:
        return False if value is None else value


class PatchIncidentByComponent(Invocation):
    resource: ClassVar[Resource] = Resource.INCIDENT
    operation: ClassVar[Operation] = Operation.PATCH_BY_COMPONENT

    component_id: str = Field(alias="componentId")
    status: IncidentStatus


class ListUnresolvedIncidents(Invocation):
    resource: ClassVar[Resource] = Resource.INCIDENT
    operation: ClassVar[Operation] = Operation.LIST_UNRESOLVED


class AddMetricDataPoint(Invocation):
    resource: ClassVar[Resource] = Resource.METRIC
    operation: ClassVar[Operation] = Operation.ADD_DATA_POINT

    metric_id: str = Field(alias="metricId")
    # strict: booleans and numeric strings are rejected, not coerced
    metric_value: StrictInt | StrictFloat = Field(alias="metricValue")


INVOCATION_TYPES: dict[tuple[Resource, Operation], type[Invocation]] = {
    (cls.resource, cls.operation): cls
    for cls in (
        PatchComponent,
        CreateIncident,
        PatchIncidentByComponent,
        ListUnresolvedIncidents,
        AddMetricDataPoint,
    )
}


def parse_invocation(
    resource: str,
    operation: str,
    parameters: Mapping[str, Any],
) -> Invocation:
    """Resolve host parameters into a typed invocation.

    Raises:
        UnknownOperation: the (resource, operation) pair is not supported.
        MissingParameter: a required parameter is absent, None or empty.
        InvalidParameter: a value is outside its enum or has the wrong type.
    """
    try:
        invocation_type = INVOCATION_TYPES[(Resource(resource), Operation(operation))]
    except (ValueError, KeyError):
        raise UnknownOperation(str(resource), str(operation)) from None

    for name, field in invocation_type.model_fields.items():
        if not field.is_required():
            continue
        alias = field.alias or name
        value = parameters.get(alias, parameters.get(name))
        if value is None or value == "":
            raise MissingParameter(alias)

    try:
        return invocation_type.model_validate(dict(parameters))
    except ValidationError as e:
        error = e.errors()[0]
        parameter = str(error["loc"][0]) if error["loc"] else "parameters"
        raise InvalidParameter(parameter, error["msg"]) from e
