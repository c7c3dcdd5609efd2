"""
Wire DTOs for the Consul health endpoints.

Field aliases are the exact (case-sensitive) JSON names used by Consul and
are the only accepted input keys. DTOs convert to and from the domain
records; absent fields stay ``None`` and are omitted again on encode.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from src.domain.entities.catalog import AgentService, Node
from src.domain.entities.errors import DecodeError
from src.domain.entities.health import (
    HealthCheck,
    HealthCheckDefinition,
    HealthChecks,
    ServiceEntry,
    parse_go_duration,
    timedelta_to_nanoseconds,
)


def _as_nanoseconds(value: Any) -> Any:
    if isinstance(value, timedelta):
        return timedelta_to_nanoseconds(value)
    if isinstance(value, str) and not value.lstrip("-").isdigit():
        return timedelta_to_nanoseconds(parse_go_duration(value))
    return value


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using Consul field names, leaving out absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def _from_fields(
        cls, extras: Optional[Dict[str, Any]] = None, **fields: Any
    ) -> Any:
        # Input validation only knows the aliases; map field names onto them.
        data = dict(extras or {})
        for name, value in fields.items():
            data[cls.model_fields[name].alias or name] = value
        return cls.model_validate(data)


class NodeDTO(_WireModel):
    """Catalog node as returned inside a service entry."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(default=None, alias="ID")
    node: Optional[str] = Field(default=None, alias="Node")
    address: Optional[str] = Field(default=None, alias="Address")
    datacenter: Optional[str] = Field(default=None, alias="Datacenter")
    tagged_addresses: Optional[Dict[str, str]] = Field(
        default=None, alias="TaggedAddresses"
    )
    meta: Optional[Dict[str, str]] = Field(default=None, alias="Meta")
    create_index: Optional[int] = Field(default=None, alias="CreateIndex")
    modify_index: Optional[int] = Field(default=None, alias="ModifyIndex")

    def to_domain(self) -> Node:
        return Node(
            id=self.id,
            node=self.node,
            address=self.address,
            datacenter=self.datacenter,
            tagged_addresses=self.tagged_addresses,
            meta=self.meta,
            create_index=self.create_index,
            modify_index=self.modify_index,
            extras=dict(self.model_extra or {}),
        )

    @classmethod
    def from_domain(cls, node: Node) -> "NodeDTO":
        return cls._from_fields(
            id=node.id,
            node=node.node,
            address=node.address,
            datacenter=node.datacenter,
            tagged_addresses=node.tagged_addresses,
            meta=node.meta,
            create_index=node.create_index,
            modify_index=node.modify_index,
            extras=node.extras,
        )


class AgentServiceDTO(_WireModel):
    """Service registration as returned inside a service entry."""

    model_config = ConfigDict(extra="allow")

    kind: Optional[str] = Field(default=None, alias="Kind")
    id: Optional[str] = Field(default=None, alias="ID")
    service: Optional[str] = Field(default=None, alias="Service")
    tags: Optional[List[str]] = Field(default=None, alias="Tags")
    meta: Optional[Dict[str, str]] = Field(default=None, alias="Meta")
    port: Optional[int] = Field(default=None, alias="Port")
    address: Optional[str] = Field(default=None, alias="Address")
    weights: Optional[Dict[str, int]] = Field(default=None, alias="Weights")
    enable_tag_override: Optional[bool] = Field(
        default=None, alias="EnableTagOverride"
    )
    namespace: Optional[str] = Field(default=None, alias="Namespace")
    create_index: Optional[int] = Field(default=None, alias="CreateIndex")
    modify_index: Optional[int] = Field(default=None, alias="ModifyIndex")

    def to_domain(self) -> AgentService:
        return AgentService(
            kind=self.kind,
            id=self.id,
            service=self.service,
            tags=self.tags,
            meta=self.meta,
            port=self.port,
            address=self.address,
            weights=self.weights,
            enable_tag_override=self.enable_tag_override,
            namespace=self.namespace,
            create_index=self.create_index,
            modify_index=self.modify_index,
            extras=dict(self.model_extra or {}),
        )

    @classmethod
    def from_domain(cls, service: AgentService) -> "AgentServiceDTO":
        return cls._from_fields(
            kind=service.kind,
            id=service.id,
            service=service.service,
            tags=service.tags,
            meta=service.meta,
            port=service.port,
            address=service.address,
            weights=service.weights,
            enable_tag_override=service.enable_tag_override,
            namespace=service.namespace,
            create_index=service.create_index,
            modify_index=service.modify_index,
            extras=service.extras,
        )


class HealthCheckDefinitionDTO(_WireModel):
    """Execution details of a check, including the deprecated durations."""

    http: Optional[str] = Field(default=None, alias="HTTP")
    header: Optional[Dict[str, List[str]]] = Field(default=None, alias="Header")
    method: Optional[str] = Field(default=None, alias="Method")
    body: Optional[str] = Field(default=None, alias="Body")
    tls_server_name: Optional[str] = Field(default=None, alias="TLSServerName")
    tls_skip_verify: Optional[bool] = Field(default=None, alias="TLSSkipVerify")
    tcp: Optional[str] = Field(default=None, alias="TCP")
    interval_duration: Optional[int] = Field(default=None, alias="IntervalDuration")
    timeout_duration: Optional[int] = Field(default=None, alias="TimeoutDuration")
    deregister_critical_service_after_duration: Optional[int] = Field(
        default=None, alias="DeregisterCriticalServiceAfterDuration"
    )
    interval: Optional[str] = Field(default=None, alias="Interval")
    timeout: Optional[str] = Field(default=None, alias="Timeout")
    deregister_critical_service_after: Optional[str] = Field(
        default=None, alias="DeregisterCriticalServiceAfter"
    )

    @field_validator(
        "interval_duration",
        "timeout_duration",
        "deregister_critical_service_after_duration",
        mode="before",
    )
    @classmethod
    def _parse_nanoseconds(cls, value: Any) -> Any:
        return _as_nanoseconds(value)

    @field_validator(
        "interval", "timeout", "deregister_critical_service_after", mode="before"
    )
    @classmethod
    def _legacy_as_text(cls, value: Any) -> Any:
        # Older agents occasionally emit the readable durations as raw numbers.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value}ns"
        return value

    def to_domain(self) -> HealthCheckDefinition:
        return HealthCheckDefinition(
            http=self.http,
            header=self.header,
            method=self.method,
            body=self.body,
            tls_server_name=self.tls_server_name,
            tls_skip_verify=self.tls_skip_verify,
            tcp=self.tcp,
            interval_duration=self.interval_duration,
            timeout_duration=self.timeout_duration,
            deregister_critical_service_after_duration=(
                self.deregister_critical_service_after_duration
            ),
            interval=self.interval,
            timeout=self.timeout,
            deregister_critical_service_after=self.deregister_critical_service_after,
        )

    @classmethod
    def from_domain(
        cls, definition: HealthCheckDefinition
    ) -> "HealthCheckDefinitionDTO":
        return cls._from_fields(
            http=definition.http,
            header=definition.header,
            method=definition.method,
            body=definition.body,
            tls_server_name=definition.tls_server_name,
            tls_skip_verify=definition.tls_skip_verify,
            tcp=definition.tcp,
            interval_duration=definition.interval_duration,
            timeout_duration=definition.timeout_duration,
            deregister_critical_service_after_duration=(
                definition.deregister_critical_service_after_duration
            ),
            interval=definition.interval,
            timeout=definition.timeout,
            deregister_critical_service_after=(
                definition.deregister_critical_service_after
            ),
        )


class HealthCheckDTO(_WireModel):
    """A single check as reported by Consul."""

    node: Optional[str] = Field(default=None, alias="Node")
    check_id: Optional[str] = Field(default=None, alias="CheckID")
    name: Optional[str] = Field(default=None, alias="Name")
    # Kept as free text: unknown states must reach the aggregator untouched.
    status: Optional[str] = Field(default=None, alias="Status")
    notes: Optional[str] = Field(default=None, alias="Notes")
    output: Optional[str] = Field(default=None, alias="Output")
    service_id: Optional[str] = Field(default=None, alias="ServiceID")
    service_name: Optional[str] = Field(default=None, alias="ServiceName")
    service_tags: Optional[List[str]] = Field(default=None, alias="ServiceTags")
    type: Optional[str] = Field(default=None, alias="Type")
    namespace: Optional[str] = Field(default=None, alias="Namespace")
    definition: Optional[HealthCheckDefinitionDTO] = Field(
        default=None, alias="Definition"
    )
    create_index: Optional[int] = Field(default=None, alias="CreateIndex")
    modify_index: Optional[int] = Field(default=None, alias="ModifyIndex")

    def to_domain(self) -> HealthCheck:
        return HealthCheck(
            node=self.node,
            check_id=self.check_id,
            name=self.name,
            status=self.status,
            notes=self.notes,
            output=self.output,
            service_id=self.service_id,
            service_name=self.service_name,
            service_tags=self.service_tags,
            type=self.type,
            namespace=self.namespace,
            definition=self.definition.to_domain() if self.definition else None,
            create_index=self.create_index,
            modify_index=self.modify_index,
        )

    @classmethod
    def from_domain(cls, check: HealthCheck) -> "HealthCheckDTO":
        definition = None
        if check.definition is not None:
            definition = HealthCheckDefinitionDTO.from_domain(check.definition)
        return cls._from_fields(
            node=check.node,
            check_id=check.check_id,
            name=check.name,
            status=check.status,
            notes=check.notes,
            output=check.output,
            service_id=check.service_id,
            service_name=check.service_name,
            service_tags=check.service_tags,
            type=check.type,
            namespace=check.namespace,
            definition=definition,
            create_index=check.create_index,
            modify_index=check.modify_index,
        )


class ServiceEntryDTO(_WireModel):
    """One element of the ``/v1/health/service`` response array."""

    node: Optional[NodeDTO] = Field(default=None, alias="Node")
    service: Optional[AgentServiceDTO] = Field(default=None, alias="Service")
    checks: Optional[List[HealthCheckDTO]] = Field(default=None, alias="Checks")

    def to_domain(self) -> ServiceEntry:
        checks = None
        if self.checks is not None:
            checks = HealthChecks([check.to_domain() for check in self.checks])
        return ServiceEntry(
            node=self.node.to_domain() if self.node else None,
            service=self.service.to_domain() if self.service else None,
            checks=checks,
        )

    @classmethod
    def from_domain(cls, entry: ServiceEntry) -> "ServiceEntryDTO":
        checks = None
        if entry.checks is not None:
            checks = [HealthCheckDTO.from_domain(check) for check in entry.checks]
        return cls._from_fields(
            node=NodeDTO.from_domain(entry.node) if entry.node else None,
            service=(
                AgentServiceDTO.from_domain(entry.service) if entry.service else None
            ),
            checks=checks,
        )


_SERVICE_ENTRIES = TypeAdapter(List[ServiceEntryDTO])
_HEALTH_CHECKS = TypeAdapter(List[HealthCheckDTO])


def decode_service_entries(payload: Any) -> List[ServiceEntry]:
    """
    Decode a JSON array of service entries.

    Raises:
        DecodeError: If the payload does not match the expected shape.
    """

    if payload is None:
        return []
    try:
        entries = _SERVICE_ENTRIES.validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(
            "Invalid service entries payload",
            details={"errors": exc.errors(include_url=False)},
        ) from exc
    return [entry.to_domain() for entry in entries]


def decode_health_checks(payload: Any) -> HealthChecks:
    """
    Decode a JSON array of health checks.

    Raises:
        DecodeError: If the payload does not match the expected shape.
    """

    if payload is None:
        return HealthChecks()
    try:
        checks = _HEALTH_CHECKS.validate_python(payload)
    except ValidationError as exc:
        raise DecodeError(
            "Invalid health checks payload",
            details={"errors": exc.errors(include_url=False)},
        ) from exc
    return HealthChecks([check.to_domain() for check in checks])


def encode_service_entries(entries: List[ServiceEntry]) -> List[Dict[str, Any]]:
    """Encode service entries back to their Consul JSON form."""

    return [ServiceEntryDTO.from_domain(entry).to_wire() for entry in entries]
