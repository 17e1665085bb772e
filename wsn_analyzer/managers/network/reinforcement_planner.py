from typing import Iterable, List

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.sensor import Link, LinkType, SensorNode
from .topology_builder import TopologyBuilder


class ReinforcementPlanner:
    """
    Greedy chain reinforcement around cut vertices.

    For every articulation point p (ascending id) with active neighbors
    n1 < n2 < ... < nk, link each consecutive pair (ni, ni+1) that is not
    already linked. This bypasses p for its immediate neighborhood; it does
    not guarantee 2-connectivity of the whole graph.
    """

    @staticmethod
    def plan_reinforcements(nodes: Iterable[SensorNode], links: Iterable, articulation_points: Iterable[int]) -> List[Link]:
        articulation_points = sorted(articulation_points)
        Logger.log(f"start plan_reinforcements(articulation_points={articulation_points})")
        links = TopologyBuilder.normalize_links(links)
        adjacency = TopologyBuilder.build_adjacency(nodes, links)
        existing = {link.key() for link in links}

        planned = []
        for ap_id in articulation_points:
            neighbors = adjacency.get(ap_id, [])
            if len(neighbors) < 2:
                Logger.log(f"AP {ap_id}: fewer than two active neighbors, nothing to reinforce")
                continue
            for u, v in zip(neighbors, neighbors[1:]):
                if u == v:
                    continue
                link = Link(u, v, LinkType.REINFORCE)
                if link.key() in existing:
                    continue
                existing.add(link.key())
                planned.append(link)
                Logger.log(f"AP {ap_id}: reinforcement {u} - {v}")

        Logger.log(f"end plan_reinforcements() -> {len(planned)} links")
        return planned
