"""
SystemController Tests

Test Coverage:
1. Guards before a network is loaded
2. Demo and file loading
3. Timer-driven playback and simulation, and their mutual exclusion
4. Reinforcement, reset, export, status and logger configuration
"""

import json
import os

import pytest

from wsn_analyzer.controllers.system_controller import SystemController
from wsn_analyzer.models.exceptions import NodeNotFoundError, StateTransitionError
from wsn_analyzer.models.parsed_graph import ParsedGraph
from wsn_analyzer.models.sensor import Link, LinkType, NodeStatus
from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.utils.logger.local_file_strategy import LocalFileStrategy


def path_graph():
    return ParsedGraph(node_ids=(0, 1, 2, 3), links=(Link(0, 1), Link(1, 2), Link(2, 3)))


@pytest.fixture
def demo():
    controller = SystemController()
    controller.load_default_scenario()
    return controller


# ===========================
# Test Class: Guards
# ===========================
class TestGuards:

    @pytest.mark.parametrize("action", [
        "next_step", "prev_step", "toggle_playback", "toggle_simulation", "reinforce_network",
    ])
    def test_actions_need_a_network(self, action):
        controller = SystemController()
        with pytest.raises(StateTransitionError):
            getattr(controller, action)()

    def test_export_needs_a_network(self, tmp_path):
        with pytest.raises(StateTransitionError):
            SystemController().export_trace(f"export_request csv_trace_export_strategy {tmp_path}")

    def test_status_before_load(self):
        status = SystemController().status()
        assert status["network_loaded"] is False
        assert status["current_step"] is None
        assert status["articulation_points"] == []


# ===========================
# Test Class: Loading
# ===========================
class TestLoading:

    def test_demo_scenario(self, demo):
        assert len(demo.nodes) == 8
        assert len(demo.links) == 10
        assert demo.current_step().step_id == 0
        assert demo.playback_manager.final_step().state.articulation_points == frozenset()

    def test_parsed_graph(self):
        controller = SystemController()
        controller.input_network(path_graph())
        assert [node.n_id for node in controller.nodes] == [0, 1, 2, 3]
        assert controller.playback_manager.final_step().state.articulation_points == frozenset({1, 2})
        assert controller.status()["source"] == "parsed graph"

    def test_file(self, tmp_path):
        path = tmp_path / "ring.json"
        path.write_text(json.dumps([{"source": 0, "target": 1}, {"source": 1, "target": 2}, {"source": 2, "target": 0}]))
        controller = SystemController()
        controller.input_network(str(path))
        assert len(controller.links) == 3
        assert controller.system_state.source_description == str(path)

    def test_reload_stops_timers(self, demo):
        demo.toggle_playback()
        demo.input_network(path_graph())
        assert not demo.system_state.is_playing
        assert demo.scheduler.pending_tasks() == []


# ===========================
# Test Class: Playback
# ===========================
class TestPlayback:

    def test_manual_stepping(self, demo):
        assert demo.next_step() is True
        assert demo.current_step().step_id == 1
        assert demo.prev_step() is True
        assert demo.prev_step() is False

    def test_timer_playback_stops_at_end(self, demo):
        steps = demo.playback_manager.steps
        assert demo.toggle_playback() is True
        demo.advance_time(1500)
        assert demo.current_step().step_id == 1
        demo.advance_time(1500 * len(steps))
        assert demo.current_step() is steps[-1]
        assert not demo.system_state.is_playing
        assert demo.scheduler.pending_tasks() == []

    def test_toggle_off(self, demo):
        demo.toggle_playback()
        assert demo.toggle_playback() is False
        demo.advance_time(5000)
        assert demo.current_step().step_id == 0

    def test_prev_stops_playback(self, demo):
        demo.toggle_playback()
        demo.advance_time(3000)
        demo.prev_step()
        assert not demo.system_state.is_playing

    def test_current_links_follow_the_step(self, demo):
        assert all(link.link_type == LinkType.NORMAL for link in demo.current_links())
        while demo.next_step():
            pass
        types = {link.link_type for link in demo.current_links()}
        assert LinkType.TREE in types
        assert LinkType.BACK in types


# ===========================
# Test Class: Simulation
# ===========================
class TestSimulation:

    def test_demo_drains_normally(self, demo):
        assert demo.toggle_simulation() is True
        demo.advance_time(1000)
        assert [node.energy for node in demo.nodes] == [99.0] * 8

    def test_standbys_spawned_for_aps(self):
        controller = SystemController()
        controller.input_network(path_graph())
        controller.toggle_simulation()
        assert len(controller.nodes) == 6
        sleeping = [node.n_id for node in controller.nodes if node.status == NodeStatus.SLEEPING]
        assert sleeping == [4, 5]

    def test_playback_and_simulation_are_exclusive(self, demo):
        demo.toggle_playback()
        demo.toggle_simulation()
        assert demo.system_state.is_simulating
        assert not demo.system_state.is_playing
        demo.toggle_playback()
        assert demo.system_state.is_playing
        assert not demo.system_state.is_simulating
        assert [task.label for task in demo.scheduler.pending_tasks()] == ["playback"]

    def test_toggle_off_stops_draining(self, demo):
        demo.toggle_simulation()
        demo.advance_time(2000)
        demo.toggle_simulation()
        demo.advance_time(5000)
        assert demo.nodes[0].energy == 98.0


# ===========================
# Test Class: Reinforcement, reset, export
# ===========================
class TestNetworkActions:

    def test_demo_has_nothing_to_reinforce(self, demo):
        while demo.next_step():
            pass
        assert demo.reinforce_network() == []
        assert not demo.system_state.is_reinforced

    def test_reinforce_uses_current_step(self):
        controller = SystemController()
        controller.input_network(path_graph())
        assert controller.reinforce_network() == []
        while controller.next_step():
            pass
        added = controller.reinforce_network()
        assert [link.key() for link in added] == [(0, 2), (1, 3)]
        assert len(controller.links) == 5
        assert controller.status()["is_reinforced"] is True

    def test_reset_reloads_demo(self):
        controller = SystemController()
        controller.input_network(path_graph())
        controller.toggle_simulation()
        controller.advance_time(3000)
        controller.reset()
        assert controller.scheduler.pending_tasks() == []
        assert len(controller.nodes) == 8
        assert controller.system_state.source_description == "demo"
        assert not controller.system_state.is_simulating

    def test_export_trace(self, demo, tmp_path):
        folder = demo.export_trace(f"export_request json_trace_export_strategy {tmp_path}")
        with open(os.path.join(folder, "trace.json"), encoding="utf-8") as f:
            document = json.load(f)
        assert len(document["steps"]) == len(demo.playback_manager.steps)
        assert len(document["links"]) == 10

    def test_status(self, demo):
        demo.next_step()
        status = demo.status()
        assert status["nodes"] == 8
        assert status["active_nodes"] == 8
        assert status["links"] == 10
        assert status["current_step"] == 1
        assert status["clock_ms"] == 0


# ===========================
# Test Class: Logger configuration
# ===========================
class TestConfigureLogger:

    def test_disable_and_enable(self, demo, memory_log):
        demo.configure_logger(False)
        memory_log.flush_logs()
        demo.next_step()
        assert memory_log.messages() == []
        demo.configure_logger(True)
        assert "Logging enabled" in memory_log.messages()

    def test_file_strategy(self, demo, tmp_path):
        log_path = tmp_path / "logs" / "session.txt"
        demo.configure_logger(True, storage_strategy="file", file_location=str(log_path))
        assert isinstance(Logger.log_storage_strategy, LocalFileStrategy)
        assert "end configure_logger" in log_path.read_text()

    def test_file_strategy_needs_location(self, demo):
        with pytest.raises(ValueError):
            demo.configure_logger(True, storage_strategy="file")

    def test_unknown_strategy(self, demo):
        with pytest.raises(ValueError):
            demo.configure_logger(True, storage_strategy="syslog")

    def test_min_priority(self, demo, memory_log):
        demo.configure_logger(True, min_priority="error")
        memory_log.flush_logs()
        demo.next_step()
        assert memory_log.messages() == []
        with pytest.raises(ValueError):
            demo.configure_logger(True, min_priority="loud")


# ===========================
# Test Class: Node lookup
# ===========================
class TestNodeLookup:

    def test_unknown_node(self, demo):
        with pytest.raises(NodeNotFoundError) as info:
            demo.get_node(42)
        assert info.value.node_id == 42

    def test_node_info_on_path(self):
        controller = SystemController()
        controller.input_network(path_graph())
        info = controller.node_info(1)
        assert info["neighbors"] == [0, 2]
        assert info["status"] == "active"
        assert info["is_articulation_point"] is False
        while controller.next_step():
            pass
        assert controller.node_info(1)["is_articulation_point"] is True
        assert controller.node_info(1)["is_critical"] is False
        controller.toggle_simulation()
        assert controller.node_info(1)["is_critical"] is True
        assert controller.node_info(4)["status"] == "sleeping"

    def test_low_battery_follows_threshold(self):
        controller = SystemController()
        controller.input_network(path_graph())
        controller.toggle_simulation()
        controller.advance_time(5000)
        info = controller.node_info(1)
        assert info["energy"] == 25.0
        assert info["energy_ratio"] == 0.25
        assert info["low_battery"] is True
        assert controller.node_info(0)["low_battery"] is False
        # sleeping standbys keep a full battery and are never flagged
        assert controller.node_info(4)["low_battery"] is False
