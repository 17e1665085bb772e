"""
Articulation-Point DFS Engine

Runs Tarjan's low-link search for cut vertices and records every meaningful
event as an AlgorithmStep, so the search can be replayed step by step.

Algorithm:
----------
1. disc/low come from a global counter; the first assigned value is 1.
2. Roots are taken in ascending id order; neighbors in ascending id order.
3. Entering u: disc[u] = low[u] = ++time.
4. Back edge u -> v (v visited, v != parent): low[u] = min(low[u], disc[v]).
5. Tree edge u -> v: after v returns, low[u] = min(low[u], low[v]);
   a non-root u is a cut vertex when low[v] >= disc[u].
6. A root is a cut vertex when it has more than one DFS child.

Recursion is kept as data: each call is a _Frame on an explicit stack
(node, parent, neighbor cursor, child count, child awaiting return), so deep
graphs cannot hit the interpreter recursion limit and the emitted order is
exactly that of the recursive formulation.

Determinism:
-----------
Same active nodes + same links -> identical step tuple. No randomness, no
dependence on link insertion order (adjacency is sorted).
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.sensor import Link, LinkType, SensorNode
from wsn_analyzer.models.dfs_trace import AlgorithmStep, DfsState, NodeColor, StepEvent
from .topology_builder import TopologyBuilder


class _Frame:
    """One pending FindAP(u, p) call."""
    __slots__ = ("node", "parent", "neighbors", "cursor", "children", "returning_child")

    def __init__(self, node: int, parent: Optional[int], neighbors: Sequence[int]):
        self.node = node
        self.parent = parent
        self.neighbors = neighbors
        self.cursor = 0
        self.children = 0
        self.returning_child = None


class _TraceRecorder:
    """Live, mutable search state plus the steps emitted from it."""

    def __init__(self, active_ids: Sequence[int]):
        self.time = 0
        self.disc: Dict[int, int] = {}
        self.low: Dict[int, int] = {}
        self.parent: Dict[int, Optional[int]] = {}
        self.visited = set()
        self.articulation_points = set()
        self.colors = {node_id: NodeColor.UNVISITED for node_id in active_ids}
        self.steps: List[AlgorithmStep] = []

    def snapshot(self) -> DfsState:
        # containers are copied so later mutation never reaches an emitted step
        return DfsState(
            discovery_time=dict(self.disc),
            low_link=dict(self.low),
            parents=dict(self.parent),
            visited=frozenset(self.visited),
            articulation_points=frozenset(self.articulation_points),
            colors=dict(self.colors),
        )

    def emit(self, code_line, description, node, neighbor, event=StepEvent.INFO):
        self.steps.append(AlgorithmStep(
            step_id=len(self.steps),
            description=description,
            code_line=code_line,
            highlight_node=node,
            highlight_neighbor=neighbor,
            state=self.snapshot(),
            event=event,
        ))

    def mark_articulation(self, node: int):
        self.articulation_points.add(node)
        self.colors[node] = NodeColor.ARTICULATION


class ArticulationPointEngine:
    """
    Step-recording articulation-point search.

    No state; all methods are static.

    Public Interface:

    1. run(nodes, links) -> tuple[AlgorithmStep, ...]
       - Filters to active nodes, builds the sorted adjacency, runs trace().

    2. trace(active_ids, adjacency) -> tuple[AlgorithmStep, ...]
       - The search itself over an already built adjacency.

    3. classify_edge(state, a, b) / classify_links(links, state)
       - Tree/back/normal tags for presentation, derived from a DfsState.
    """

    NO_ACTIVE_NODES = "No active nodes."

    @staticmethod
    def run(nodes: Iterable[SensorNode], links: Iterable) -> Tuple[AlgorithmStep, ...]:
        Logger.log("start ArticulationPointEngine.run()")
        nodes = list(nodes)
        adjacency = TopologyBuilder.build_adjacency(nodes, links)
        active_ids = [node.n_id for node in TopologyBuilder.active_nodes(nodes)]
        steps = ArticulationPointEngine.trace(active_ids, adjacency)
        Logger.log("end ArticulationPointEngine.run()")
        return steps

    @staticmethod
    def trace(active_ids: Iterable[int], adjacency: Dict[int, Sequence[int]]) -> Tuple[AlgorithmStep, ...]:
        active_ids = sorted(active_ids)
        recorder = _TraceRecorder(active_ids)

        if not active_ids:
            recorder.emit(0, ArticulationPointEngine.NO_ACTIVE_NODES, None, None, StepEvent.INFO)
            Logger.log("trace: no active nodes, single informational step")
            return tuple(recorder.steps)

        for root in active_ids:
            if root not in recorder.visited:
                Logger.log(f"trace: DFS rooted at {root}")
                ArticulationPointEngine._search_from(root, adjacency, recorder)

        Logger.log(
            f"trace: {len(recorder.steps)} steps, "
            f"articulation points={sorted(recorder.articulation_points)}"
        )
        return tuple(recorder.steps)

    @staticmethod
    def _enter(node: int, parent: Optional[int], adjacency, recorder: _TraceRecorder) -> _Frame:
        recorder.visited.add(node)
        recorder.parent[node] = parent
        recorder.time += 1
        recorder.disc[node] = recorder.low[node] = recorder.time
        recorder.colors[node] = NodeColor.PROCESSING
        recorder.emit(
            2,
            f"Visit node {node}: disc[{node}] = low[{node}] = {recorder.time}",
            node, None, StepEvent.INFO,
        )
        return _Frame(node, parent, adjacency.get(node, ()))

    @staticmethod
    def _search_from(root: int, adjacency, recorder: _TraceRecorder):
        disc, low = recorder.disc, recorder.low
        stack = [ArticulationPointEngine._enter(root, None, adjacency, recorder)]

        while stack:
            frame = stack[-1]
            u = frame.node

            # RESUME AFTER A TREE CHILD RETURNED
            if frame.returning_child is not None:
                v = frame.returning_child
                frame.returning_child = None
                low[u] = min(low[u], low[v])
                # REPAINTED EVEN IF ALREADY AN AP; LINE 12 MAY MARK IT AGAIN
                recorder.colors[u] = NodeColor.PROCESSING
                recorder.emit(
                    10,
                    f"Return from {v}: low[{u}] = min(low[{u}], low[{v}]) = {low[u]}",
                    u, v, StepEvent.UPDATE,
                )
                if frame.parent is not None and low[v] >= disc[u]:
                    recorder.mark_articulation(u)
                    recorder.emit(
                        12,
                        f"Articulation point {u}: low[{v}] = {low[v]} >= disc[{u}] = {disc[u]}",
                        u, v, StepEvent.FOUND_ARTICULATION_POINT,
                    )
                continue

            # INSPECT NEXT NEIGHBOR
            if frame.cursor < len(frame.neighbors):
                v = frame.neighbors[frame.cursor]
                frame.cursor += 1
                if v == frame.parent:
                    continue
                recorder.emit(4, f"Check edge {u} -> {v}", u, v, StepEvent.INFO)

                if v in recorder.visited:
                    low[u] = min(low[u], disc[v])
                    recorder.emit(
                        7,
                        f"Back edge {u} -> {v}: low[{u}] = min(low[{u}], disc[{v}]) = {low[u]}",
                        u, v, StepEvent.BACK_EDGE,
                    )
                else:
                    frame.children += 1
                    recorder.emit(9, f"Tree edge {u} -> {v}: recurse into {v}", u, v, StepEvent.INFO)
                    frame.returning_child = v
                    stack.append(ArticulationPointEngine._enter(v, u, adjacency, recorder))
                continue

            # ALL NEIGHBORS DONE
            stack.pop()
            if frame.parent is None and frame.children > 1:
                recorder.mark_articulation(u)
                recorder.emit(
                    13,
                    f"Root {u} has {frame.children} DFS children: articulation point",
                    u, None, StepEvent.FOUND_ARTICULATION_POINT,
                )
            elif u not in recorder.articulation_points:
                recorder.colors[u] = NodeColor.FINISHED
                recorder.emit(13, f"Finished processing {u}", u, None, StepEvent.INFO)

    # ------------------------------------------------------------------
    # Results and presentation helpers
    # ------------------------------------------------------------------

    @staticmethod
    def final_articulation_points(steps: Sequence[AlgorithmStep]) -> frozenset:
        """Articulation-point set of the last step (empty for an empty trace)."""
        if not steps:
            return frozenset()
        return steps[-1].state.articulation_points

    @staticmethod
    def classify_edge(state: DfsState, a: int, b: int) -> LinkType:
        """tree if one endpoint is the other's DFS parent, back if both are visited, else normal."""
        if state.is_tree_edge(a, b):
            return LinkType.TREE
        if a in state.visited and b in state.visited:
            return LinkType.BACK
        return LinkType.NORMAL

    @staticmethod
    def classify_links(links: Iterable, state: DfsState) -> List[Link]:
        """Tag links for drawing; reinforcement links keep their tag."""
        classified = []
        for link in TopologyBuilder.normalize_links(links):
            if link.link_type == LinkType.REINFORCE:
                classified.append(link)
            else:
                classified.append(link.with_type(
                    ArticulationPointEngine.classify_edge(state, link.source, link.target)
                ))
        return classified
