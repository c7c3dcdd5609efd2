"""Query options shared by every Consul read."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .health import format_go_duration

QueryParams = List[Tuple[str, str]]


class HealthVariant(str, Enum):
    """Catalog view queried for service health."""

    PLAIN = "plain"
    CONNECT = "connect"
    INGRESS = "ingress"


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """
    Per-request options understood by the Consul HTTP API.

    Unset fields are not sent, leaving the agent defaults in effect.
    """

    datacenter: Optional[str] = None
    namespace: Optional[str] = None
    partition: Optional[str] = None
    allow_stale: bool = False
    require_consistent: bool = False
    use_cache: bool = False
    max_age: Optional[timedelta] = None
    wait_index: Optional[int] = None
    wait_hash: Optional[str] = None
    wait_time: Optional[timedelta] = None
    token: Optional[str] = None
    near: Optional[str] = None
    node_meta: Optional[Dict[str, str]] = None
    filter: Optional[str] = None

    def to_request_parts(self) -> Tuple[QueryParams, Dict[str, str]]:
        """Translate the options into query parameters and request headers."""

        params: QueryParams = []
        headers: Dict[str, str] = {}

        if self.datacenter:
            params.append(("dc", self.datacenter))
        if self.namespace:
            params.append(("ns", self.namespace))
        if self.partition:
            params.append(("partition", self.partition))
        if self.allow_stale:
            params.append(("stale", ""))
        if self.require_consistent:
            params.append(("consistent", ""))
        if self.wait_index:
            params.append(("index", str(self.wait_index)))
        if self.wait_hash:
            params.append(("hash", self.wait_hash))
        if self.wait_time is not None:
            params.append(("wait", format_go_duration(self.wait_time)))
        if self.near:
            params.append(("near", self.near))
        for key, value in (self.node_meta or {}).items():
            params.append(("node-meta", f"{key}:{value}"))
        if self.filter:
            params.append(("filter", self.filter))
        if self.use_cache:
            params.append(("cached", ""))
            if self.max_age is not None:
                seconds = int(self.max_age.total_seconds())
                headers["Cache-Control"] = f"max-age={seconds}"
        if self.token:
            headers["X-Consul-Token"] = self.token

        return params, headers
