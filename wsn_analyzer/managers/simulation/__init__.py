from .energy_simulator import EnergySimulator, TickResult
from .standby_spawner import StandbySpawner
from .simulation_manager import SimulationManager

__all__ = ["EnergySimulator", "TickResult", "StandbySpawner", "SimulationManager"]
