"""
ArticulationPointEngine Tests

Test Coverage:
1. Known topologies: path, star, cycle, two triangles joined at a vertex
2. Trace shape: exact event order on a two-node path, back-edge reporting
3. Determinism: same input -> identical step tuple
4. Invariants: low <= disc at every step, snapshots independent of later steps
5. Degenerate input: no active nodes -> one informational step
6. Edge classification for presentation
"""

import pytest

from wsn_analyzer.models.sensor import Link, LinkType, NodeStatus, SensorNode
from wsn_analyzer.models.dfs_trace import DfsState, NodeColor, StepEvent, PSEUDOCODE
from wsn_analyzer.managers.network.articulation_engine import ArticulationPointEngine
from wsn_analyzer.managers.network.scenario_builder import ScenarioBuilder


def nodes_for(count):
    return [SensorNode(n_id=i, x=float(i), y=0.0) for i in range(count)]


def final_aps(nodes, links):
    steps = ArticulationPointEngine.run(nodes, links)
    return set(ArticulationPointEngine.final_articulation_points(steps))


PATH_LINKS = [(0, 1), (1, 2), (2, 3)]
STAR_LINKS = [(0, 1), (0, 2), (0, 3)]
CYCLE_LINKS = [(0, 1), (1, 2), (2, 0)]


# ===========================
# Test Class: Known topologies
# ===========================
class TestKnownTopologies:

    def test_path_inner_nodes_are_articulation_points(self):
        assert final_aps(nodes_for(4), PATH_LINKS) == {1, 2}

    def test_star_root_with_many_children(self):
        assert final_aps(nodes_for(4), STAR_LINKS) == {0}

    def test_star_rooted_at_leaf(self):
        # centre 3 is not the DFS root here; the non-root rule must find it
        assert final_aps(nodes_for(4), [(3, 0), (3, 1), (3, 2)]) == {3}

    def test_cycle_has_no_articulation_points(self):
        assert final_aps(nodes_for(3), CYCLE_LINKS) == set()

    def test_bowtie_shared_vertex(self):
        links = [(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 2)]
        assert final_aps(nodes_for(5), links) == {2}

    def test_disconnected_components_each_searched(self):
        links = [(0, 1), (1, 2), (3, 4), (4, 5)]
        assert final_aps(nodes_for(6), links) == {1, 4}

    def test_demo_scenario_is_biconnected(self):
        nodes, links = ScenarioBuilder.build_initial_topology(1000, 800)
        assert final_aps(nodes, links) == set()

    def test_inactive_nodes_do_not_take_part(self):
        nodes = nodes_for(4)
        nodes[1] = nodes[1].with_energy(0.0).with_status(NodeStatus.DEAD)
        steps = ArticulationPointEngine.run(nodes, PATH_LINKS)
        final = steps[-1].state
        assert final.articulation_points == frozenset()
        assert 1 not in final.colors
        assert final.visited == frozenset({0, 2, 3})

    def test_duplicate_links_do_not_change_result(self):
        assert final_aps(nodes_for(4), PATH_LINKS + PATH_LINKS) == {1, 2}


# ===========================
# Test Class: Trace shape
# ===========================
class TestTraceShape:

    def test_two_node_path_event_order(self):
        steps = ArticulationPointEngine.run(nodes_for(2), [(0, 1)])
        assert [step.code_line for step in steps] == [2, 4, 9, 2, 13, 10, 13]
        assert [step.event for step in steps] == [
            StepEvent.INFO, StepEvent.INFO, StepEvent.INFO, StepEvent.INFO,
            StepEvent.INFO, StepEvent.UPDATE, StepEvent.INFO,
        ]
        assert steps[0].description == "Visit node 0: disc[0] = low[0] = 1"
        assert (steps[1].highlight_node, steps[1].highlight_neighbor) == (0, 1)

    def test_step_ids_are_sequential(self):
        steps = ArticulationPointEngine.run(nodes_for(4), PATH_LINKS)
        assert [step.step_id for step in steps] == list(range(len(steps)))

    def test_code_lines_point_into_pseudocode(self):
        steps = ArticulationPointEngine.run(nodes_for(4), STAR_LINKS)
        for step in steps:
            assert 1 <= step.code_line <= len(PSEUDOCODE)
            assert step.code_text == PSEUDOCODE[step.code_line - 1]

    def test_back_edge_reported(self):
        steps = ArticulationPointEngine.run(nodes_for(3), CYCLE_LINKS)
        back_edges = [(s.highlight_node, s.highlight_neighbor) for s in steps if s.event == StepEvent.BACK_EDGE]
        assert (2, 0) in back_edges
        assert all(steps[i].code_line == 7 for i in range(len(steps)) if steps[i].event == StepEvent.BACK_EDGE)

    def test_root_rule_reported_on_last_line(self):
        steps = ArticulationPointEngine.run(nodes_for(4), STAR_LINKS)
        last = steps[-1]
        assert last.event == StepEvent.FOUND_ARTICULATION_POINT
        assert last.code_line == 13
        assert last.highlight_node == 0
        assert last.state.colors[0] == NodeColor.ARTICULATION

    def test_non_root_rule_reported_on_line_12(self):
        steps = ArticulationPointEngine.run(nodes_for(4), PATH_LINKS)
        found = [step for step in steps if step.event == StepEvent.FOUND_ARTICULATION_POINT]
        assert [step.highlight_node for step in found] == [2, 1]
        assert all(step.code_line == 12 for step in found)

    def test_all_nodes_finished_or_articulation_at_end(self):
        steps = ArticulationPointEngine.run(nodes_for(4), PATH_LINKS)
        colors = steps[-1].state.colors
        assert colors == {
            0: NodeColor.FINISHED,
            1: NodeColor.ARTICULATION,
            2: NodeColor.ARTICULATION,
            3: NodeColor.FINISHED,
        }

    def test_articulation_repainted_processing_after_later_child(self):
        # 1 is found via leaf 2, then returns from 3 which reaches back to 0
        steps = ArticulationPointEngine.run(nodes_for(4), [(0, 1), (1, 2), (1, 3), (3, 0)])
        update = next(
            step for step in steps
            if step.event == StepEvent.UPDATE and (step.highlight_node, step.highlight_neighbor) == (1, 3)
        )
        assert update.state.colors[1] == NodeColor.PROCESSING
        assert 1 in update.state.articulation_points
        assert steps[-1].state.articulation_points == frozenset({1})
        assert steps[-1].state.colors[1] == NodeColor.PROCESSING
        assert not any(
            step.highlight_node == 1 and step.description == "Finished processing 1" for step in steps
        )

    def test_discovery_times_start_at_one(self):
        steps = ArticulationPointEngine.run(nodes_for(4), PATH_LINKS)
        assert steps[-1].state.discovery_time == {0: 1, 1: 2, 2: 3, 3: 4}
        assert steps[-1].state.parents == {0: None, 1: 0, 2: 1, 3: 2}


# ===========================
# Test Class: Determinism and invariants
# ===========================
class TestDeterminismAndInvariants:

    def test_repeated_runs_are_identical(self):
        nodes, links = ScenarioBuilder.build_initial_topology(1000, 800)
        assert ArticulationPointEngine.run(nodes, links) == ArticulationPointEngine.run(nodes, links)

    def test_link_order_does_not_matter(self):
        links = [(0, 1), (1, 2), (2, 0), (2, 3), (3, 4), (4, 2)]
        forward = ArticulationPointEngine.run(nodes_for(5), links)
        backward = ArticulationPointEngine.run(nodes_for(5), [(b, a) for a, b in reversed(links)])
        assert forward == backward

    @pytest.mark.parametrize("links", [PATH_LINKS, STAR_LINKS, CYCLE_LINKS])
    def test_low_never_exceeds_discovery(self, links):
        for step in ArticulationPointEngine.run(nodes_for(4), links):
            for node_id in step.state.visited:
                assert step.state.low_link[node_id] <= step.state.discovery_time[node_id]

    def test_snapshots_are_independent(self):
        steps = ArticulationPointEngine.run(nodes_for(4), PATH_LINKS)
        first = steps[0].state
        assert first.discovery_time == {0: 1}
        assert first.visited == frozenset({0})
        assert first.articulation_points == frozenset()
        assert first.colors[3] == NodeColor.UNVISITED

    def test_articulation_set_only_grows(self):
        steps = ArticulationPointEngine.run(nodes_for(6), [(0, 1), (1, 2), (3, 4), (4, 5)])
        for earlier, later in zip(steps, steps[1:]):
            assert earlier.state.articulation_points <= later.state.articulation_points


# ===========================
# Test Class: Degenerate input
# ===========================
class TestDegenerateInput:

    def test_no_nodes(self):
        steps = ArticulationPointEngine.run([], [])
        assert len(steps) == 1
        assert steps[0].description == ArticulationPointEngine.NO_ACTIVE_NODES
        assert steps[0].event == StepEvent.INFO
        assert steps[0].state == DfsState.empty()
        assert steps[0].code_line == 0

    def test_only_sleeping_nodes(self):
        nodes = [SensorNode(0, 0.0, 0.0, status=NodeStatus.SLEEPING)]
        steps = ArticulationPointEngine.run(nodes, [])
        assert len(steps) == 1
        assert ArticulationPointEngine.final_articulation_points(steps) == frozenset()

    def test_single_isolated_node(self):
        steps = ArticulationPointEngine.run(nodes_for(1), [])
        assert [step.code_line for step in steps] == [2, 13]


# ===========================
# Test Class: Edge classification
# ===========================
class TestEdgeClassification:

    def test_tree_back_and_normal(self):
        steps = ArticulationPointEngine.run(nodes_for(3), CYCLE_LINKS)
        final = steps[-1].state
        assert ArticulationPointEngine.classify_edge(final, 0, 1) == LinkType.TREE
        assert ArticulationPointEngine.classify_edge(final, 1, 0) == LinkType.TREE
        assert ArticulationPointEngine.classify_edge(final, 2, 0) == LinkType.BACK
        assert ArticulationPointEngine.classify_edge(steps[0].state, 1, 2) == LinkType.NORMAL

    def test_reinforcement_tag_survives(self):
        steps = ArticulationPointEngine.run(nodes_for(3), CYCLE_LINKS)
        links = [Link(0, 1), Link(0, 2, LinkType.REINFORCE)]
        classified = ArticulationPointEngine.classify_links(links, steps[-1].state)
        assert [link.link_type for link in classified] == [LinkType.TREE, LinkType.REINFORCE]
