"""
Health domain entities.

This module defines the status vocabulary and the value objects returned by
the Consul health endpoints. Records are immutable snapshots of state owned
by the remote catalog: every field is optional because the server may omit
any of them, and ``None`` always means "absent" rather than "empty".
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Dict, Generic, Iterator, List, Optional, Sequence, TypeVar

from .catalog import AgentService, Node

T = TypeVar("T")


class HealthStatus(str, Enum):
    """Well-known check states reported by Consul."""

    # ANY is a wildcard used by state queries, never a real check status.
    ANY = "any"
    PASSING = "passing"
    WARNING = "warning"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"


# Special check id registered by a node in maintenance mode.
NODE_MAINT = "_node_maintenance"

# Check id prefix registered by a service in maintenance mode.
SERVICE_MAINT_PREFIX = "_service_maintenance:"

# Returned by aggregation when the checks contradict the vocabulary.
UNKNOWN_STATUS = ""

_SERVICE_MAINT_PATTERN = re.compile("^" + re.escape(SERVICE_MAINT_PREFIX))


def is_maintenance_check_id(check_id: Optional[str]) -> bool:
    """Return True when ``check_id`` marks a node or service maintenance window."""

    if check_id is None:
        return False
    return check_id == NODE_MAINT or bool(_SERVICE_MAINT_PATTERN.match(check_id))


_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}


def parse_go_duration(value: str) -> timedelta:
    """
    Parse a Go style duration string (``"10s"``, ``"1m30s"``, ``"250ms"``).

    Raises:
        ValueError: If the string is not a valid duration.
    """

    text = value.strip()
    sign = -1 if text.startswith("-") else 1
    text = text.lstrip("+-")
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    position = 0
    micros = 0.0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        micros += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()

    return timedelta(microseconds=sign * micros)


def format_go_duration(value: timedelta) -> str:
    """Render a timedelta as a duration string Consul accepts (``"5s"``, ``"1500ms"``)."""

    millis = int(round(value / timedelta(milliseconds=1)))
    if millis % 1000 == 0:
        return f"{millis // 1000}s"
    return f"{millis}ms"


@dataclass(frozen=True, slots=True)
class HealthCheckDefinition:
    """Execution parameters of an active check."""

    http: Optional[str] = None
    header: Optional[Dict[str, List[str]]] = None
    method: Optional[str] = None
    body: Optional[str] = None
    tls_server_name: Optional[str] = None
    tls_skip_verify: Optional[bool] = None
    tcp: Optional[str] = None
    # Structured durations, in integer nanoseconds as sent by Consul.
    interval_duration: Optional[int] = None
    timeout_duration: Optional[int] = None
    deregister_critical_service_after_duration: Optional[int] = None

    # Deprecated since Consul 1.4.1, kept verbatim for decode compatibility.
    interval: Optional[str] = None
    timeout: Optional[str] = None
    deregister_critical_service_after: Optional[str] = None

    @property
    def effective_interval(self) -> Optional[timedelta]:
        return _prefer_structured(self.interval_duration, self.interval)

    @property
    def effective_timeout(self) -> Optional[timedelta]:
        return _prefer_structured(self.timeout_duration, self.timeout)

    @property
    def effective_deregister_critical_service_after(self) -> Optional[timedelta]:
        return _prefer_structured(
            self.deregister_critical_service_after_duration,
            self.deregister_critical_service_after,
        )


def nanoseconds_to_timedelta(value: int) -> timedelta:
    """Convert Consul nanoseconds to a timedelta (microsecond resolution)."""
    return timedelta(microseconds=value / 1000)


def timedelta_to_nanoseconds(value: timedelta) -> int:
    return (value // timedelta(microseconds=1)) * 1000


def _prefer_structured(
    structured: Optional[int], legacy: Optional[str]
) -> Optional[timedelta]:
    if structured is not None:
        return nanoseconds_to_timedelta(structured)
    if legacy:
        return parse_go_duration(legacy)
    return None


@dataclass(frozen=True, slots=True)
class HealthCheck:
    """A single node or service level check, identified by ``(node, check_id)``."""

    node: Optional[str] = None
    check_id: Optional[str] = None
    name: Optional[str] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    output: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    service_tags: Optional[List[str]] = None
    type: Optional[str] = None
    namespace: Optional[str] = None
    definition: Optional[HealthCheckDefinition] = None
    create_index: Optional[int] = None
    modify_index: Optional[int] = None

    @property
    def is_maintenance(self) -> bool:
        return is_maintenance_check_id(self.check_id)


class HealthChecks(Sequence[HealthCheck]):
    """Ordered collection of checks as returned by the server."""

    __slots__ = ("_checks",)

    def __init__(self, checks: Optional[Sequence[HealthCheck]] = None) -> None:
        self._checks: tuple[HealthCheck, ...] = tuple(checks or ())

    def __getitem__(self, index):  # type: ignore[override]
        return self._checks[index]

    def __len__(self) -> int:
        return len(self._checks)

    def __iter__(self) -> Iterator[HealthCheck]:
        return iter(self._checks)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HealthChecks):
            return self._checks == other._checks
        return NotImplemented

    def __repr__(self) -> str:
        return f"HealthChecks({list(self._checks)!r})"

    def aggregated_status(self) -> str:
        """Return the single most representative status for these checks."""

        from src.domain.services.status_aggregator import aggregate_status

        return aggregate_status(self._checks)


@dataclass(frozen=True, slots=True)
class ServiceEntry:
    """One service instance matched by a health query."""

    node: Optional[Node] = None
    service: Optional[AgentService] = None
    checks: Optional[HealthChecks] = None

    @property
    def address(self) -> Optional[str]:
        """``host:port`` of the instance, or None when either part is missing."""

        if self.service is None:
            return None
        if self.service.address is None or self.service.port is None:
            return None
        return f"{self.service.address}:{self.service.port}"


@dataclass(frozen=True, slots=True)
class QueryMeta:
    """Side-channel metadata describing how a read was served."""

    # Usable as wait_index for a follow-up blocking query.
    last_index: Optional[int] = None
    # Usable as wait_hash on endpoints with hash based blocking.
    last_content_hash: Optional[str] = None
    last_contact: Optional[timedelta] = None
    known_leader: Optional[bool] = None
    request_time: Optional[timedelta] = None
    address_translation_enabled: Optional[bool] = None
    cache_hit: Optional[bool] = None
    cache_age: Optional[timedelta] = None
    default_acl_policy: Optional[str] = None


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Items returned by a read together with its query metadata."""

    items: List[T] = field(default_factory=list)
    meta: QueryMeta = field(default_factory=QueryMeta)
