from typing import Dict, Iterable, List, Sequence
import numpy as np

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.sensor import Link, SensorNode


class TopologyBuilder:
    """
    Derives graph structure from sensor nodes.

    Stateless; all methods are static. Only ACTIVE nodes take part in
    connectivity. Sleeping and dead nodes may still appear in a raw link
    list but are filtered out here.
    """

    @staticmethod
    def active_nodes(nodes: Iterable[SensorNode]) -> List[SensorNode]:
        """Active nodes in ascending id order."""
        return sorted((node for node in nodes if node.is_active), key=lambda node: node.n_id)

    @staticmethod
    def normalize_links(links: Iterable) -> List[Link]:
        """Resolve every raw link (Link, pair or mapping) to a Link of plain ids."""
        return [Link.from_raw(link) for link in links]

    @staticmethod
    def build_adjacency(nodes: Iterable[SensorNode], links: Iterable) -> Dict[int, List[int]]:
        """
        Build node id -> ascending neighbor ids for the active subgraph.

        Links with an endpoint outside the active set are skipped. Duplicate
        links and self-loops are kept as given. Neighbor order is ascending,
        which fixes the DFS traversal order.
        """
        Logger.log("start build_adjacency()")
        adjacency = {node.n_id: [] for node in TopologyBuilder.active_nodes(nodes)}

        skipped = 0
        for link in TopologyBuilder.normalize_links(links):
            if link.source in adjacency and link.target in adjacency:
                adjacency[link.source].append(link.target)
                adjacency[link.target].append(link.source)
            else:
                skipped += 1

        for neighbors in adjacency.values():
            neighbors.sort()

        Logger.log(f"adjacency built: {len(adjacency)} active nodes, {skipped} links skipped")
        Logger.log("end build_adjacency()")
        return adjacency

    @staticmethod
    def range_connectivity(nodes: Sequence[SensorNode]) -> List[Link]:
        """
        Links between every pair of active nodes whose distance is at most
        the smaller of their two sensing ranges.

        Output is ordered by (source, target) with source < target.
        """
        Logger.log("start range_connectivity()")
        active = TopologyBuilder.active_nodes(nodes)
        if len(active) < 2:
            Logger.log("end range_connectivity() - fewer than two active nodes")
            return []

        ids = np.array([node.n_id for node in active], dtype=np.int64)
        xs = np.array([node.x for node in active], dtype=np.float64)
        ys = np.array([node.y for node in active], dtype=np.float64)
        ranges = np.array([node.sensing_range for node in active], dtype=np.float64)

        dx = xs[:, None] - xs[None, :]
        dy = ys[:, None] - ys[None, :]
        distances = np.sqrt(dx * dx + dy * dy)
        reach = np.minimum.outer(ranges, ranges)

        in_range = np.triu(distances <= reach, k=1)
        links = [Link(int(ids[i]), int(ids[j])) for i, j in np.argwhere(in_range)]

        Logger.log(f"range connectivity: {len(links)} links among {len(active)} active nodes")
        Logger.log("end range_connectivity()")
        return links
