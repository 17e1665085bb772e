from .export_manager import ExportManager

__all__ = ["ExportManager"]
