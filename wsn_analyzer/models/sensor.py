"""
Sensor network data models.

Immutable value records for sensor nodes and radio links. Lifecycle changes
(drain, death, wake) produce new SensorNode instances; nothing is mutated in
place, so a node list can be shared between the simulator, the DFS engine and
the playback history without defensive copies.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional
import math


class NodeStatus(str, Enum):
    ACTIVE = "active"
    SLEEPING = "sleeping"
    DEAD = "dead"


class LinkType(str, Enum):
    """Presentation tag of a link; the algorithms never read it."""
    TREE = "tree"
    BACK = "back"
    NORMAL = "normal"
    REINFORCE = "reinforce"


@dataclass(frozen=True)
class SensorNode:
    """
    Immutable snapshot of one sensor.

    Attributes:
        n_id: Unique, non-negative identifier. Never reassigned.
        x, y: Canvas position.
        energy: Remaining energy in [0, max_energy].
        max_energy: Energy restored on wake.
        sensing_range: Detection radius used for range connectivity.
        status: active, sleeping (standby, no drain) or dead (terminal).
    """
    n_id: int
    x: float
    y: float
    energy: float = 100.0
    max_energy: float = 100.0
    sensing_range: float = 160.0
    status: NodeStatus = NodeStatus.ACTIVE

    def __post_init__(self):
        if self.n_id < 0:
            raise ValueError(f"n_id must be >= 0, got {self.n_id}")
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise ValueError(f"Position must be finite: ({self.x}, {self.y})")
        if self.max_energy <= 0:
            raise ValueError(f"max_energy must be positive, got {self.max_energy}")
        if not (0.0 <= self.energy <= self.max_energy):
            raise ValueError(
                f"energy must be in [0, {self.max_energy}], got {self.energy}"
            )
        # Accept plain strings ("active") from callers and normalize to the enum
        object.__setattr__(self, "status", NodeStatus(self.status))

    @property
    def is_active(self) -> bool:
        return self.status == NodeStatus.ACTIVE

    @property
    def is_sleeping(self) -> bool:
        return self.status == NodeStatus.SLEEPING

    @property
    def is_dead(self) -> bool:
        return self.status == NodeStatus.DEAD

    @property
    def energy_ratio(self) -> float:
        return self.energy / self.max_energy

    def with_energy(self, energy: float) -> "SensorNode":
        return replace(self, energy=energy)

    def with_status(self, status: NodeStatus) -> "SensorNode":
        if self.is_dead and NodeStatus(status) != NodeStatus.DEAD:
            raise ValueError(f"Node {self.n_id} is dead and cannot become {status}")
        return replace(self, status=status)

    def woken(self) -> "SensorNode":
        """Sleeping -> active with a full battery."""
        return replace(self, status=NodeStatus.ACTIVE, energy=self.max_energy)


@dataclass(frozen=True)
class Link:
    """
    Undirected radio link between two node ids.

    link_type is presentation-only and excluded from equality, so a
    reinforcement link equals a plain link between the same endpoints
    in the same direction. Use key() for direction-free comparisons.
    """
    source: int
    target: int
    link_type: Optional[LinkType] = field(default=None, compare=False)

    def key(self) -> tuple[int, int]:
        """Unordered endpoint pair as (low id, high id)."""
        return (self.source, self.target) if self.source <= self.target else (self.target, self.source)

    def with_type(self, link_type: Optional[LinkType]) -> "Link":
        return replace(self, link_type=link_type)

    @staticmethod
    def endpoint_id(endpoint: Any) -> int:
        """
        Resolve a link endpoint to a plain integer id.

        Layout and file collaborators sometimes hand over embedded node
        objects or mappings instead of ids; they are resolved here once so
        the algorithms only ever see integers.
        """
        if isinstance(endpoint, SensorNode):
            return endpoint.n_id
        if isinstance(endpoint, dict):
            for key in ("n_id", "id"):
                if key in endpoint:
                    return int(endpoint[key])
            raise ValueError(f"Endpoint mapping has no id: {endpoint}")
        for attr in ("n_id", "id"):
            value = getattr(endpoint, attr, None)
            if value is not None:
                return int(value)
        return int(endpoint)

    @classmethod
    def from_raw(cls, raw: Any) -> "Link":
        """Build a Link from a Link, a (source, target) pair or a {source, target} mapping."""
        if isinstance(raw, Link):
            return raw
        if isinstance(raw, dict):
            link_type = raw.get("type", raw.get("link_type"))
            return cls(
                cls.endpoint_id(raw["source"]),
                cls.endpoint_id(raw["target"]),
                LinkType(link_type) if link_type else None,
            )
        source, target = raw[0], raw[1]
        return cls(cls.endpoint_id(source), cls.endpoint_id(target))
