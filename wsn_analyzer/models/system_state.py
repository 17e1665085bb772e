class SystemState:
    """Lightweight container for global runtime flags."""

    def __init__(self):
        """Initialize defaults."""
        self.network_loaded = False
        self.is_playing = False
        self.is_simulating = False
        self.is_reinforced = False  # Reinforcement links appended to the current topology
        self.source_description = None  # "demo" or the path of the loaded graph file

    def reset_modes(self):
        """Clear the playback/simulation/reinforcement flags, keeping the load state."""
        self.is_playing = False
        self.is_simulating = False
        self.is_reinforced = False
