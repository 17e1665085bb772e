"""
WSN Reliability Analyzer.

Teaching tool that traces Tarjan's articulation-point DFS over a wireless
sensor network and runs an energy-depletion / self-healing simulation on the
same topology.

Units:
    - Position and sensing range: canvas units
    - Energy: percent of max_energy
    - Time: milliseconds of the control-layer clock
"""

__version__ = "0.3.0"
