from typing import Iterable, List, Optional, Sequence

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.config.analyzer_config import SensorConfig, StandbyConfig
from wsn_analyzer.models.sensor import NodeStatus, SensorNode
from wsn_analyzer.managers.network.scenario_builder import ScenarioBuilder


class StandbySpawner:
    """Places one sleeping standby next to each critical node."""

    def __init__(self, sensor_config: Optional[SensorConfig] = None, standby_config: Optional[StandbyConfig] = None):
        self.sensor_config = sensor_config or SensorConfig()
        self.standby_config = standby_config or StandbyConfig()

    def spawn_standbys(self, nodes: Sequence[SensorNode], articulation_point_ids: Iterable[int]) -> List[SensorNode]:
        """
        Return nodes plus one sleeping, fully charged standby per articulation
        point present in nodes, offset by (+spawn_offset, +spawn_offset).

        New ids continue from the current maximum id, in ascending order of
        the articulation point they serve.
        """
        offset = self.standby_config.spawn_offset
        by_id = {node.n_id: node for node in nodes}
        next_id = max(by_id, default=0)

        spawned = list(nodes)
        for ap_id in sorted(articulation_point_ids):
            ap_node = by_id.get(ap_id)
            if ap_node is None:
                Logger.log(f"spawn_standbys: articulation point {ap_id} not among nodes, skipped", Logger.LogPriority.WARNING)
                continue
            next_id += 1
            spawned.append(ScenarioBuilder.create_node(
                next_id, ap_node.x + offset, ap_node.y + offset,
                status=NodeStatus.SLEEPING, sensor_config=self.sensor_config,
            ))
            Logger.log(f"standby {next_id} spawned beside articulation point {ap_id}")
        return spawned
