"""
Force-directed placement for uploaded graphs.

Uploaded graphs carry no coordinates, but the simulator needs positions for
range connectivity and standby placement. This module places the nodes with
a small, deterministic force simulation:

- link springs pulling endpoints towards a rest length,
- pairwise inverse-distance repulsion between all nodes,
- a collision radius keeping sensors from overlapping,
- re-centring on the canvas after every iteration.

Nodes start on a phyllotaxis spiral in id order, so the same
graph always gets the same layout.
"""

from typing import List, Optional, Sequence, Tuple
import numpy as np

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.config.analyzer_config import SensorConfig
from wsn_analyzer.models.sensor import Link, SensorNode
from .scenario_builder import ScenarioBuilder
from .topology_builder import TopologyBuilder


class ForceLayout:
    """Deterministic spring/repulsion layout."""

    def __init__(self, iterations=300, link_distance=100.0, charge_strength=-300.0,
                 collide_radius=60.0, velocity_decay=0.4, margin=50.0):
        self.iterations = iterations
        self.link_distance = link_distance
        self.charge_strength = charge_strength
        self.collide_radius = collide_radius
        self.velocity_decay = velocity_decay
        self.margin = margin
        # alpha cools from 1 to 0.001 over the run
        self.alpha_decay = 1.0 - 0.001 ** (1.0 / iterations)
        Logger.log(f"ForceLayout initialized (iterations={iterations})")

    @staticmethod
    def _initial_positions(count: int, width: float, height: float) -> np.ndarray:
        index = np.arange(count, dtype=np.float64)
        radius = 10.0 * np.sqrt(0.5 + index)
        angle = index * np.pi * (3.0 - np.sqrt(5.0))
        return np.column_stack((width / 2 + radius * np.cos(angle), height / 2 + radius * np.sin(angle)))

    def compute_positions(self, node_ids: Sequence[int], links: Sequence[Link], width: float, height: float) -> dict:
        """Return node id -> (x, y) clamped into the canvas margin."""
        node_ids = sorted(node_ids)
        index_of = {node_id: i for i, node_id in enumerate(node_ids)}
        count = len(node_ids)
        if count == 0:
            return {}

        pairs = np.array(
            [(index_of[l.source], index_of[l.target]) for l in links
             if l.source in index_of and l.target in index_of and l.source != l.target],
            dtype=np.int64,
        ).reshape(-1, 2)
        degree = np.bincount(pairs.ravel(), minlength=count).astype(np.float64)

        positions = self._initial_positions(count, width, height)
        velocities = np.zeros_like(positions)
        alpha = 1.0

        for _ in range(self.iterations):
            alpha += (0.0 - alpha) * self.alpha_decay

            # LINK SPRINGS
            if len(pairs):
                src, dst = pairs[:, 0], pairs[:, 1]
                delta = (positions[dst] + velocities[dst]) - (positions[src] + velocities[src])
                length = np.linalg.norm(delta, axis=1)
                length[length < 1e-9] = 1e-9
                strength = 1.0 / np.minimum(degree[src], degree[dst])
                scale = (length - self.link_distance) / length * alpha * strength
                shift = delta * scale[:, None]
                bias = degree[src] / (degree[src] + degree[dst])
                np.add.at(velocities, dst, -shift * bias[:, None])
                np.add.at(velocities, src, shift * (1.0 - bias)[:, None])

            # REPULSION AND COLLISION
            delta = positions[None, :, :] - positions[:, None, :]
            dist_sq = np.sum(delta * delta, axis=2)
            np.fill_diagonal(dist_sq, np.inf)
            dist_sq = np.maximum(dist_sq, 1.0)
            velocities += np.sum(delta * (self.charge_strength * alpha / dist_sq)[:, :, None], axis=1)

            dist = np.sqrt(dist_sq)
            overlap = np.clip(2 * self.collide_radius - dist, 0.0, None)
            push = (overlap / dist * 0.5)[:, :, None] * delta
            velocities -= np.sum(push, axis=1)

            velocities *= (1.0 - self.velocity_decay)
            positions += velocities

            # CENTRE
            positions += np.array([width / 2, height / 2]) - positions.mean(axis=0)

        positions[:, 0] = np.clip(positions[:, 0], self.margin, width - self.margin)
        positions[:, 1] = np.clip(positions[:, 1], self.margin, height - self.margin)
        return {node_id: (float(positions[i, 0]), float(positions[i, 1])) for node_id, i in index_of.items()}

    def compute(self, node_ids: Sequence[int], links: Sequence, width: float, height: float,
                sensor_config: Optional[SensorConfig] = None) -> Tuple[List[SensorNode], List[Link]]:
        """Place an uploaded graph: returns active SensorNodes at default energy/range and id-only links."""
        Logger.log(f"start ForceLayout.compute({len(node_ids)} nodes)")
        links = [Link(l.source, l.target) for l in TopologyBuilder.normalize_links(links)]
        positions = self.compute_positions(node_ids, links, width, height)
        nodes = [
            ScenarioBuilder.create_node(node_id, x, y, sensor_config=sensor_config)
            for node_id, (x, y) in sorted(positions.items())
        ]
        Logger.log("end ForceLayout.compute()")
        return nodes, links
