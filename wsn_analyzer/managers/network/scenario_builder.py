from typing import List, Optional, Tuple

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.config.analyzer_config import SensorConfig
from wsn_analyzer.models.sensor import Link, NodeStatus, SensorNode
from .topology_builder import TopologyBuilder


class ScenarioBuilder:
    """Builds the fixed 8-sensor demo deployment used when no graph is loaded."""

    # (node id, dx, dy) relative to the canvas centre
    DEMO_LAYOUT = (
        (0, 0, 0),
        (1, -120, -100),
        (2, -120, 100),
        (3, -220, 0),
        (4, 120, -100),
        (5, 120, 100),
        (6, 220, 0),
        (7, 0, -180),
    )

    # What range connectivity yields for DEMO_LAYOUT at the default range of 160
    DEMO_LINKS = (
        (0, 1), (0, 2), (0, 4), (0, 5),
        (1, 3), (1, 7), (2, 3),
        (4, 6), (4, 7), (5, 6),
    )

    @staticmethod
    def create_node(n_id, x, y, status=NodeStatus.ACTIVE, sensor_config: Optional[SensorConfig] = None) -> SensorNode:
        sensor_config = sensor_config or SensorConfig()
        return SensorNode(
            n_id=n_id,
            x=float(x),
            y=float(y),
            energy=sensor_config.default_energy,
            max_energy=sensor_config.default_energy,
            sensing_range=sensor_config.default_range,
            status=status,
        )

    @classmethod
    def build_initial_topology(cls, width, height, sensor_config: Optional[SensorConfig] = None) -> Tuple[List[SensorNode], List[Link]]:
        """
        Demo nodes around the canvas centre, linked by sensing range.

        No standby nodes are created here; they appear only when a
        simulation starts.
        """
        Logger.log(f"start build_initial_topology({width}, {height})")
        cx = width / 2
        cy = height / 2
        nodes = [
            cls.create_node(n_id, cx + dx, cy + dy, sensor_config=sensor_config)
            for n_id, dx, dy in cls.DEMO_LAYOUT
        ]
        links = TopologyBuilder.range_connectivity(nodes)
        Logger.log(f"end build_initial_topology() -> {len(nodes)} nodes, {len(links)} links")
        return nodes, links
