from datetime import datetime
from pathlib import Path

from wsn_analyzer.utils.logger.logger import Logger
from .export_request_interpreter import ExportRequestInterpreter


class ExportManager:
    """Runs an export request: parse it, generate the files in memory, then write them."""

    FOLDER_PREFIX = "export_"
    TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

    def __init__(self):
        self.interpreter = ExportRequestInterpreter()

    def handle_export_request(self, steps, export_request, nodes=(), links=()):
        """Returns the folder the files were written to."""
        Logger.log(f"start handle_export_request(self, {len(steps)} steps, {export_request})")
        try:
            request = self.interpreter.parse_request(export_request)
            base_folder = self._prepare_base_folder(request['folder_location'])
            files = request['export_strategy'].generate_export(steps, nodes, links)
            export_folder = self._write_files(files, base_folder)
        except Exception as ex:
            Logger.log(f"Export failed: {ex}", Logger.LogPriority.ERROR)
            raise
        Logger.log(f"end handle_export_request(self) -> {export_folder}", Logger.LogPriority.INFO)
        return str(export_folder)

    @staticmethod
    def _prepare_base_folder(folder_location):
        base = Path(folder_location).expanduser()
        if base.exists() and not base.is_dir():
            raise ValueError(f"{base} exists but is not a directory.")
        base.mkdir(parents=True, exist_ok=True)
        return base

    def _new_export_folder(self, base):
        """export_<timestamp>, suffixed _1, _2, ... when an export already took that second."""
        name = self.FOLDER_PREFIX + datetime.now().strftime(self.TIMESTAMP_FORMAT)
        folder = base / name
        suffix = 1
        while folder.exists():
            folder = base / f"{name}_{suffix}"
            suffix += 1
        folder.mkdir()
        return folder

    def _write_files(self, files, base):
        folder = self._new_export_folder(base)
        for filename, content in files:
            (folder / filename).write_bytes(content)
            Logger.log(f"Saved file: {folder / filename}")
        return folder
