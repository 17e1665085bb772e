from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.utils.logger.local_file_strategy import LocalFileStrategy
from wsn_analyzer.config.analyzer_config import AnalyzerConfig
from wsn_analyzer.models.system_state import SystemState
from wsn_analyzer.models.parsed_graph import ParsedGraph
from wsn_analyzer.models.exceptions import NodeNotFoundError, StateTransitionError
from wsn_analyzer.managers.input.input_manager import InputManager
from wsn_analyzer.managers.export.export_manager import ExportManager
from wsn_analyzer.managers.view.view_manager import ViewManager
from wsn_analyzer.managers.playback.trace_playback_manager import TracePlaybackManager
from wsn_analyzer.managers.simulation.simulation_manager import SimulationManager
from wsn_analyzer.managers.scheduling.timer_scheduler import ManualScheduler
from wsn_analyzer.managers.network.articulation_engine import ArticulationPointEngine
from wsn_analyzer.managers.network.reinforcement_planner import ReinforcementPlanner
from wsn_analyzer.managers.network.scenario_builder import ScenarioBuilder
from wsn_analyzer.managers.network.topology_builder import TopologyBuilder
from wsn_analyzer.managers.network.force_layout import ForceLayout


class SystemController:
    """
    Coordinates input, analysis, playback, simulation, export, view and logging.

    Owns the only mutable copy of the network (nodes, links) and the only
    clock. Step playback and the energy simulation are the two timer-driven
    modes; at most one of them runs at a time.
    """

    def __init__(self, config=None, scheduler=None):
        """Initialize managers and shared state."""
        Logger.log("start SystemController__init__(self)")
        self.config = config or AnalyzerConfig()
        self.scheduler = scheduler or ManualScheduler()
        self.input_manager = InputManager()
        self.export_manager = ExportManager()
        self.view_manager = ViewManager(self)
        self.playback_manager = TracePlaybackManager()
        self.simulation_manager = SimulationManager(
            self.scheduler, self.config,
            on_restructure=self._on_restructure, on_tick=self._on_tick,
        )
        self.layout = ForceLayout(margin=self.config.canvas.layout_margin)
        self.system_state = SystemState()

        self.nodes = []
        self.links = []
        self._playback_task = None
        Logger.log("end SystemController__init__(self)")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_default_scenario(self):
        """Load the 8-sensor demo deployment and record its trace."""
        Logger.log("start load_default_scenario(self)")
        canvas = self.config.canvas
        nodes, links = ScenarioBuilder.build_initial_topology(canvas.width, canvas.height, self.config.sensor)
        self._load_graph(nodes, links, "demo")
        Logger.log("end load_default_scenario(self)")

    def input_network(self, input_data):
        """Load a graph from a file path or a `ParsedGraph`, placing it with the force layout."""
        Logger.log(f"start input_network(self, {input_data})")
        if isinstance(input_data, ParsedGraph):
            graph = input_data
            source = "parsed graph"
        else:
            graph = self.input_manager.get_graph(input_data)
            source = str(input_data)

        canvas = self.config.canvas
        nodes, links = self.layout.compute(graph.node_ids, graph.links, canvas.width, canvas.height, self.config.sensor)
        self._load_graph(nodes, links, source)
        Logger.log("end input_network(self, input_data)")

    def _load_graph(self, nodes, links, source):
        self._stop_timers()
        self.nodes = list(nodes)
        self.links = list(links)
        self.system_state.reset_modes()
        self.system_state.network_loaded = True
        self.system_state.source_description = source
        self._analyze(start_at_end=False)
        Logger.log(f"network loaded from {source}: {len(self.nodes)} nodes, {len(self.links)} links", Logger.LogPriority.INFO)

    def _analyze(self, start_at_end):
        steps = ArticulationPointEngine.run(self.nodes, self.links)
        self.playback_manager.load(steps, start_at_end=start_at_end)
        return steps

    def _require_network(self, action):
        if not self.system_state.network_loaded:
            Logger.log(f"StateTransitionError: Cannot {action}, network not loaded.", Logger.LogPriority.ERROR)
            raise StateTransitionError(f"Cannot {action}, network not loaded.")

    # ------------------------------------------------------------------
    # Step playback
    # ------------------------------------------------------------------

    def get_node(self, n_id):
        for node in self.nodes:
            if node.n_id == n_id:
                return node
        Logger.log(f"NodeNotFoundError: node {n_id} not in network", Logger.LogPriority.ERROR)
        raise NodeNotFoundError(n_id)

    def is_low_battery(self, node):
        """Active sensor at or below the configured low-battery energy."""
        return node.is_active and node.energy <= self.config.sensor.low_battery_threshold

    def node_info(self, n_id):
        """One sensor with its live neighbors and its role at the current step."""
        self._require_network("inspect node")
        node = self.get_node(n_id)
        adjacency = TopologyBuilder.build_adjacency(self.nodes, self.links)
        step = self.current_step()
        return {
            "n_id": node.n_id,
            "x": node.x,
            "y": node.y,
            "energy": node.energy,
            "max_energy": node.max_energy,
            "energy_ratio": node.energy_ratio,
            "low_battery": self.is_low_battery(node),
            "sensing_range": node.sensing_range,
            "status": node.status.value,
            "neighbors": list(adjacency.get(n_id, [])),
            "is_articulation_point": step is not None and n_id in step.state.articulation_points,
            "is_critical": self.system_state.is_simulating and n_id in self.simulation_manager.critical_ids,
        }

    def current_step(self):
        return self.playback_manager.current_step()

    def current_links(self):
        """Links tagged tree/back/normal against the current step."""
        step = self.current_step()
        if step is None:
            return list(self.links)
        return ArticulationPointEngine.classify_links(self.links, step.state)

    def next_step(self):
        """Advance the trace by one step; playback stops when the end is reached."""
        self._require_network("step forward")
        moved = self.playback_manager.next_step()
        if not moved and self.system_state.is_playing:
            self._stop_playback()
        return moved

    def prev_step(self):
        """Step back (stops playback)."""
        self._require_network("step back")
        self._stop_playback()
        return self.playback_manager.prev_step()

    def toggle_playback(self):
        """Start or stop automatic stepping. Starting stops a running simulation."""
        Logger.log("start toggle_playback(self)")
        self._require_network("play trace")
        if self.system_state.is_playing:
            self._stop_playback()
        else:
            self._stop_simulation()
            self._playback_task = self.scheduler.call_every(
                self.config.timing.playback_interval_ms, self._playback_tick, label="playback"
            )
            self.system_state.is_playing = True
        Logger.log(f"end toggle_playback(self) -> playing={self.system_state.is_playing}")
        return self.system_state.is_playing

    def _playback_tick(self):
        if not self.playback_manager.next_step():
            self._stop_playback()

    def _stop_playback(self):
        self.scheduler.cancel(self._playback_task)
        self._playback_task = None
        self.system_state.is_playing = False

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def toggle_simulation(self):
        """Start or stop the energy simulation. Starting stops step playback."""
        Logger.log("start toggle_simulation(self)")
        self._require_network("simulate")
        if self.system_state.is_simulating:
            self._stop_simulation()
        else:
            self._stop_playback()
            final_aps = ArticulationPointEngine.final_articulation_points(self.playback_manager.steps)
            self.nodes = self.simulation_manager.start(self.nodes, self.links, final_aps)
            self.system_state.is_simulating = True
        Logger.log(f"end toggle_simulation(self) -> simulating={self.system_state.is_simulating}")
        return self.system_state.is_simulating

    def _on_tick(self, result):
        self.nodes = list(result.nodes)

    def _on_restructure(self, nodes, links, steps):
        self.nodes = list(nodes)
        self.links = list(links)
        self.system_state.is_reinforced = False
        self.playback_manager.load(steps, start_at_end=True)

    def _stop_simulation(self):
        self.simulation_manager.stop()
        self.system_state.is_simulating = False

    def advance_time(self, ms):
        """Move the virtual clock; playback steps, ticks and restructures fall due here."""
        Logger.log(f"start advance_time(self, {ms})")
        fired = self.scheduler.advance(ms)
        Logger.log(f"end advance_time(self, {ms}) -> {fired} callbacks")
        return fired

    def _stop_timers(self):
        self._stop_playback()
        self._stop_simulation()

    # ------------------------------------------------------------------
    # Reinforcement, reset, export
    # ------------------------------------------------------------------

    def reinforce_network(self):
        """Append chain links around the current step's articulation points. Returns the new links."""
        Logger.log("start reinforce_network(self)")
        self._require_network("reinforce network")
        step = self.current_step()
        articulation_points = step.state.articulation_points if step else frozenset()
        if not articulation_points:
            Logger.log("end reinforce_network(self) - no articulation points")
            return []
        new_links = ReinforcementPlanner.plan_reinforcements(self.nodes, self.links, articulation_points)
        self.links.extend(new_links)
        self.system_state.is_reinforced = True
        Logger.log(f"end reinforce_network(self) -> {len(new_links)} links added", Logger.LogPriority.INFO)
        return new_links

    def reset(self):
        """Cancel every timer and reload the demo deployment."""
        Logger.log("start reset(self)")
        self._stop_timers()
        self.load_default_scenario()
        Logger.log("end reset(self)")

    def export_trace(self, export_request):
        """Export the current trace and network. Returns the export folder."""
        Logger.log(f"start export_trace(self, {export_request})")
        self._require_network("export trace")
        folder = self.export_manager.handle_export_request(
            self.playback_manager.steps, export_request, self.nodes, self.current_links()
        )
        Logger.log(f"end export_trace(self) -> {folder}")
        return folder

    # ------------------------------------------------------------------
    # View and logging
    # ------------------------------------------------------------------

    def initiate_view(self, view_strategy):
        """Submit a view request to the view manager."""
        Logger.log(f"start initiate_view(self, {view_strategy})")
        self.view_manager.initiate_view_strategy(view_strategy, self)
        Logger.log("end initiate_view(self, view_strategy)")

    def configure_logger(self, enabled, **kwargs):
        """Enable/disable logging; optionally set a minimum priority or the file storage strategy."""
        Logger.log(f"start configure_logger(self, {enabled}, {kwargs})")
        if enabled:
            Logger.enable_logging()
        else:
            Logger.disable_logging()
        min_priority = kwargs.get("min_priority", None)
        if min_priority is not None:
            Logger.set_min_priority(min_priority)
        storage_strategy = kwargs.get("storage_strategy", None)
        if storage_strategy == "file":
            file_location = kwargs.get("file_location", None)
            if not file_location:
                raise ValueError("file_location must be provided for 'file' storage strategy.")
            # SETS FILE-BASED LOGGING STRATEGY
            Logger.set_log_storage_strategy(LocalFileStrategy(file_location))
            Logger.log(f"Logger set to file storage at {file_location}.")
        elif storage_strategy is not None:
            raise ValueError(f"Unknown storage strategy: {storage_strategy}")
        Logger.log("end configure_logger(self, **kwargs)")

    def status(self):
        """Snapshot of the session for views."""
        step = self.current_step()
        return {
            "network_loaded": self.system_state.network_loaded,
            "source": self.system_state.source_description,
            "nodes": len(self.nodes),
            "active_nodes": sum(1 for node in self.nodes if node.is_active),
            "sleeping_nodes": sum(1 for node in self.nodes if node.is_sleeping),
            "dead_nodes": sum(1 for node in self.nodes if node.is_dead),
            "links": len(self.links),
            "steps": len(self.playback_manager.steps),
            "current_step": step.step_id if step else None,
            "articulation_points": sorted(step.state.articulation_points) if step else [],
            "is_playing": self.system_state.is_playing,
            "is_simulating": self.system_state.is_simulating,
            "is_reinforced": self.system_state.is_reinforced,
            "clock_ms": getattr(self.scheduler, "now_ms", None),
        }
