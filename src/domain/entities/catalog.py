"""Catalog and agent entities embedded in health responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class Node:
    """A catalog node. Passed through untouched by the health client."""

    id: Optional[str] = None
    node: Optional[str] = None
    address: Optional[str] = None
    datacenter: Optional[str] = None
    tagged_addresses: Optional[Dict[str, str]] = None
    meta: Optional[Dict[str, str]] = None
    create_index: Optional[int] = None
    modify_index: Optional[int] = None
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AgentService:
    """A service registration as seen by the agent."""

    kind: Optional[str] = None
    id: Optional[str] = None
    service: Optional[str] = None
    tags: Optional[List[str]] = None
    meta: Optional[Dict[str, str]] = None
    port: Optional[int] = None
    address: Optional[str] = None
    weights: Optional[Dict[str, int]] = None
    enable_tag_override: Optional[bool] = None
    namespace: Optional[str] = None
    create_index: Optional[int] = None
    modify_index: Optional[int] = None
    extras: Dict[str, Any] = field(default_factory=dict)
