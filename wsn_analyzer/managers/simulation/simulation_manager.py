from typing import Callable, List, Optional, Sequence

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.config.analyzer_config import AnalyzerConfig
from wsn_analyzer.models.sensor import Link, SensorNode
from wsn_analyzer.models.exceptions import StateTransitionError
from wsn_analyzer.managers.network.topology_builder import TopologyBuilder
from wsn_analyzer.managers.network.articulation_engine import ArticulationPointEngine
from wsn_analyzer.managers.scheduling.timer_scheduler import TimerScheduler
from .energy_simulator import EnergySimulator, TickResult
from .standby_spawner import StandbySpawner


class SimulationManager:
    """
    Runs the energy simulation session on a TimerScheduler.

    Owns the live node/link lists, the critical-id snapshot taken at start,
    the repeating tick task and at most one pending restructure task. A
    lifecycle change schedules a restructure after restructure_delay_ms; a
    later change replaces it, so only the newest recompute runs and it always
    reads the node list as it is when it fires.
    """

    def __init__(self, scheduler: TimerScheduler, config: Optional[AnalyzerConfig] = None,
                 on_restructure: Optional[Callable] = None, on_tick: Optional[Callable] = None):
        Logger.log("start SimulationManager__init__")
        self.scheduler = scheduler
        self.config = config or AnalyzerConfig()
        self.on_restructure = on_restructure
        self.on_tick = on_tick
        self.simulator = EnergySimulator(self.config.sensor, self.config.standby)
        self.spawner = StandbySpawner(self.config.sensor, self.config.standby)

        self.nodes: List[SensorNode] = []
        self.links: List[Link] = []
        self.critical_ids = frozenset()
        self.tick_count = 0
        self.restructure_count = 0
        self._tick_task = None
        self._restructure_task = None
        Logger.log("end SimulationManager__init__")

    @property
    def is_running(self) -> bool:
        return self._tick_task is not None

    @property
    def restructure_pending(self) -> bool:
        return self._restructure_task is not None

    def start(self, nodes: Sequence[SensorNode], links: Sequence, final_articulation_points) -> List[SensorNode]:
        """
        Snapshot the critical set, spawn standbys and register the tick.

        Returns the node list including the new standbys.
        """
        Logger.log(f"start SimulationManager.start(aps={sorted(final_articulation_points)})")
        if self.is_running:
            Logger.log("StateTransitionError: simulation already running.", Logger.LogPriority.ERROR)
            raise StateTransitionError("Simulation already running.")

        self.critical_ids = frozenset(final_articulation_points)
        self.nodes = self.spawner.spawn_standbys(nodes, self.critical_ids)
        self.links = TopologyBuilder.normalize_links(links)
        self.tick_count = 0
        self._tick_task = self.scheduler.call_every(
            self.config.timing.simulation_interval_ms, self.run_tick, label="simulation tick"
        )
        Logger.log(f"end SimulationManager.start() -> {len(self.nodes)} nodes")
        return list(self.nodes)

    def run_tick(self) -> TickResult:
        result = self.simulator.tick(self.nodes, self.critical_ids)
        self.nodes = result.nodes
        self.tick_count += 1
        Logger.log(f"tick {self.tick_count}: {result}")

        if result.changed:
            # CANCEL-AND-REPLACE THE PENDING RECOMPUTE
            self.scheduler.cancel(self._restructure_task)
            self._restructure_task = self.scheduler.call_later(
                self.config.timing.restructure_delay_ms, self.restructure, label="restructure"
            )
        if self.on_tick:
            self.on_tick(result)
        return result

    def restructure(self):
        """Recompute range links and the DFS trace from the latest node list."""
        Logger.log("start SimulationManager.restructure()")
        self._restructure_task = None
        self.links = TopologyBuilder.range_connectivity(self.nodes)
        steps = ArticulationPointEngine.run(self.nodes, self.links)
        self.restructure_count += 1
        if self.on_restructure:
            self.on_restructure(list(self.nodes), list(self.links), steps)
        Logger.log(f"end SimulationManager.restructure() -> {len(self.links)} links, {len(steps)} steps")
        return steps

    def stop(self):
        """Cancel the tick and any pending restructure. Safe to call when idle."""
        Logger.log("start SimulationManager.stop()")
        self.scheduler.cancel(self._tick_task)
        self.scheduler.cancel(self._restructure_task)
        self._tick_task = None
        self._restructure_task = None
        Logger.log("end SimulationManager.stop()")
