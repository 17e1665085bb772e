from .input_manager import InputManager

__all__ = ["InputManager"]
