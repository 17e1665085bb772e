"""
Energy / lifecycle simulator.

One tick of the sensor battery model:

1. DRAIN: every active node loses a fixed amount of energy; nodes in the
   critical set (articulation points at simulation start) drain at the high
   rate, all others at the baseline rate. Energy is clamped at 0 and a node
   reaching 0 becomes dead.
2. WAKE: for every node that went active -> dead in this tick, sleeping
   standbys strictly closer than the wake threshold are woken with a full
   battery.

Drain is completed for all nodes before any wake decision, so wake logic
always sees post-drain statuses. Dead is terminal; sleeping nodes never drain.
"""

from typing import Iterable, List, Optional, Sequence

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.config.analyzer_config import SensorConfig, StandbyConfig
from wsn_analyzer.config.feature_flags import FeatureFlags
from wsn_analyzer.models.sensor import NodeStatus, SensorNode
from wsn_analyzer.managers.network.geometry import distance


class TickResult:
    """
    Result of one simulator tick.

    Fields:
    - nodes: NEW list of SensorNode, same order as the input
    - changed: True if any node changed status (death or wake)
    - newly_dead_ids: ids that went active -> dead this tick
    - woken_ids: ids that went sleeping -> active this tick
    """
    __slots__ = ("nodes", "changed", "newly_dead_ids", "woken_ids")

    def __init__(self, nodes: List[SensorNode], changed: bool, newly_dead_ids: list, woken_ids: list):
        self.nodes = nodes
        self.changed = changed
        self.newly_dead_ids = newly_dead_ids
        self.woken_ids = woken_ids

    def __iter__(self):
        # allows `nodes, changed = simulator.tick(...)`
        return iter((self.nodes, self.changed))

    def __repr__(self):
        return (
            f"TickResult(nodes={len(self.nodes)}, changed={self.changed}, "
            f"dead={self.newly_dead_ids}, woken={self.woken_ids})"
        )


class EnergySimulator:
    """Linear-drain battery model with standby wake-up."""

    def __init__(self, sensor_config: Optional[SensorConfig] = None, standby_config: Optional[StandbyConfig] = None):
        self.sensor_config = sensor_config or SensorConfig()
        self.standby_config = standby_config or StandbyConfig()

    @property
    def wake_threshold(self) -> float:
        return self.standby_config.wake_threshold

    def drain_for(self, node: SensorNode, critical_ids) -> float:
        if node.n_id in critical_ids:
            return self.sensor_config.drain_rate_critical
        return self.sensor_config.drain_rate_normal

    def tick(self, nodes: Sequence[SensorNode], critical_ids: Iterable[int]) -> TickResult:
        critical_ids = frozenset(critical_ids)
        previous = list(nodes)
        changed = False

        # DRAIN PASS (all nodes before any wake decision)
        updated = []
        for node in previous:
            if not node.is_active:
                updated.append(node)
                continue
            energy = max(0.0, node.energy - self.drain_for(node, critical_ids))
            if energy <= 0:
                updated.append(node.with_energy(0.0).with_status(NodeStatus.DEAD))
                changed = True
            else:
                updated.append(node.with_energy(energy))

        newly_dead = [
            i for i, (before, after) in enumerate(zip(previous, updated))
            if before.is_active and after.is_dead
        ]
        for i in newly_dead:
            Logger.log(f"node {updated[i].n_id} died (critical={updated[i].n_id in critical_ids})", Logger.LogPriority.INFO)

        # WAKE PASS
        woken = []
        for dead_index in newly_dead:
            dead_node = updated[dead_index]
            candidates = [
                (distance(dead_node, sleeper), sleeper.n_id, index)
                for index, sleeper in enumerate(updated)
                if sleeper.is_sleeping and distance(dead_node, sleeper) < self.wake_threshold
            ]
            if FeatureFlags.WAKE_NEAREST_ONLY and candidates:
                candidates = [min(candidates)]
            for _, sleeper_id, index in candidates:
                updated[index] = updated[index].woken()
                woken.append(sleeper_id)
                changed = True
                Logger.log(f"standby {sleeper_id} woken to replace node {dead_node.n_id}", Logger.LogPriority.INFO)

        return TickResult(
            nodes=updated,
            changed=changed,
            newly_dead_ids=[updated[i].n_id for i in newly_dead],
            woken_ids=woken,
        )
