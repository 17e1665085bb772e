from dataclasses import dataclass
from typing import Tuple

from .sensor import Link


@dataclass(frozen=True)
class ParsedGraph:
    """
    Graph handed over by a file strategy, before any layout.

    Attributes:
        node_ids: Ascending, unique, non-negative ids.
        links: Links between ids in node_ids, in file order.
    """
    node_ids: Tuple[int, ...]
    links: Tuple[Link, ...]

    def __post_init__(self):
        known = set(self.node_ids)
        for link in self.links:
            if link.source not in known or link.target not in known:
                raise ValueError(f"Link {link.key()} references an unknown node")

    @property
    def node_count(self) -> int:
        return len(self.node_ids)

    @property
    def link_count(self) -> int:
        return len(self.links)
