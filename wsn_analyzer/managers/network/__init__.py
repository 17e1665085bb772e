"""
Network management module.

Topology derivation, the step-recording articulation-point search,
reinforcement planning and graph placement.
"""

from .topology_builder import TopologyBuilder
from .articulation_engine import ArticulationPointEngine
from .reinforcement_planner import ReinforcementPlanner
from .scenario_builder import ScenarioBuilder
from .force_layout import ForceLayout

__all__ = [
    "TopologyBuilder",
    "ArticulationPointEngine",
    "ReinforcementPlanner",
    "ScenarioBuilder",
    "ForceLayout",
]
