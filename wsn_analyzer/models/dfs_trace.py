"""
DFS trace data models.

A trace is the ordered tuple of AlgorithmStep records emitted by one run of
the articulation-point search. Every step owns its own DfsState copy, so a
trace can be replayed forwards and backwards without re-running the search.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NodeColor(str, Enum):
    UNVISITED = "unvisited"
    PROCESSING = "processing"
    FINISHED = "finished"
    ARTICULATION = "articulation"


class StepEvent(str, Enum):
    INFO = "info"
    UPDATE = "update"
    FOUND_ARTICULATION_POINT = "found-articulation-point"
    BACK_EDGE = "back-edge"


# Canonical listing shown beside the trace; AlgorithmStep.code_line is 1-based.
PSEUDOCODE = (
    "function FindAP(u, p):",
    "  visited[u] = true; disc[u] = low[u] = ++time",
    "  children = 0",
    "  for each v in adj[u]:",
    "    if v == p: continue",
    "    if visited[v]:",
    "      low[u] = min(low[u], disc[v]) // Back-edge",
    "    else:",
    "      children++; FindAP(v, u)",
    "      low[u] = min(low[u], low[v])",
    "      if p != null and low[v] >= disc[u]:",
    "        AP_Found(u)",
    "  if p == null and children > 1: AP_Found(u)",
)


@dataclass(frozen=True)
class DfsState:
    """
    Frozen copy of the live search state at one instant.

    Attributes:
        discovery_time: node -> discovery time (first value is 1).
        low_link: node -> low-link value.
        parents: node -> DFS parent, None for a root.
        visited: Nodes entered so far.
        articulation_points: Nodes identified as cut vertices so far.
        colors: node -> NodeColor for every active node.
    """
    discovery_time: dict = field(default_factory=dict)
    low_link: dict = field(default_factory=dict)
    parents: dict = field(default_factory=dict)
    visited: frozenset = frozenset()
    articulation_points: frozenset = frozenset()
    colors: dict = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "DfsState":
        return cls()

    def is_tree_edge(self, a: int, b: int) -> bool:
        return self.parents.get(b) == a or self.parents.get(a) == b

    def to_dict(self) -> dict:
        """Plain, JSON-friendly view (sorted ids, string colors)."""
        return {
            "discovery_time": {str(k): v for k, v in sorted(self.discovery_time.items())},
            "low_link": {str(k): v for k, v in sorted(self.low_link.items())},
            "parents": {str(k): v for k, v in sorted(self.parents.items())},
            "visited": sorted(self.visited),
            "articulation_points": sorted(self.articulation_points),
            "colors": {str(k): NodeColor(v).value for k, v in sorted(self.colors.items())},
        }


@dataclass(frozen=True)
class AlgorithmStep:
    """
    One observable event of the articulation-point search.

    Attributes:
        step_id: Position in the trace, starting at 0.
        description: Human-readable event text.
        code_line: 1-based line in PSEUDOCODE (0 when no line applies).
        highlight_node: Node u being processed, or None.
        highlight_neighbor: Neighbor v being inspected, or None.
        state: Independent DfsState snapshot.
        event: StepEvent classification.
    """
    step_id: int
    description: str
    code_line: int
    highlight_node: Optional[int]
    highlight_neighbor: Optional[int]
    state: DfsState
    event: StepEvent = StepEvent.INFO

    @property
    def code_text(self) -> str:
        if 1 <= self.code_line <= len(PSEUDOCODE):
            return PSEUDOCODE[self.code_line - 1]
        return ""

    def to_record(self) -> dict:
        """Flat row used by the trace exporters."""
        return {
            "step_id": self.step_id,
            "event": StepEvent(self.event).value,
            "code_line": self.code_line,
            "highlight_node": self.highlight_node,
            "highlight_neighbor": self.highlight_neighbor,
            "description": self.description,
            "articulation_points": " ".join(str(n) for n in sorted(self.state.articulation_points)),
            "visited_count": len(self.state.visited),
        }
