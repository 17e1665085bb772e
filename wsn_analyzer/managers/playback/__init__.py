from .trace_playback_manager import TracePlaybackManager

__all__ = ["TracePlaybackManager"]
