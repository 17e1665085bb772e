from wsn_analyzer.utils.logger.logger import Logger
from .csv_trace_export_strategy import CsvTraceExportStrategy
from .json_trace_export_strategy import JsonTraceExportStrategy
from .excel_trace_export_strategy import ExcelTraceExportStrategy


class ExportRequestInterpreter:
    """Parse export requests and instantiate strategies."""

    VALID_STRATEGIES = {
        "csv_trace_export_strategy": CsvTraceExportStrategy,
        "json_trace_export_strategy": JsonTraceExportStrategy,
        "excel_trace_export_strategy": ExcelTraceExportStrategy,
    }

    def parse_request(self, request_str: str):
        """Return dict with strategy and folder from 'export_request <strategy> <folder>'."""
        Logger.log(f"start parse_request(self, {request_str})")
        request_str = request_str.strip()
        if not request_str.startswith("export_request"):
            Logger.log("Request does not start with 'export_request'", Logger.LogPriority.ERROR)
            raise ValueError("The request must start with 'export_request'")
        request_str = request_str[len("export_request"):].strip()
        parts = request_str.split(maxsplit=1)
        Logger.log(f"Split request into parts: {parts}")

        if len(parts) != 2:
            Logger.log(f"Invalid number of parts in the request, expected 2 but got {len(parts)}", Logger.LogPriority.ERROR)
            raise ValueError("Request must consist of exactly 2 parts: strategy, folder.")

        strategy_name, folder_location = parts[0], parts[1].strip()
        if folder_location.lower() == "none":
            Logger.log("Folder location is 'none', which is not allowed.", Logger.LogPriority.ERROR)
            raise ValueError("Folder location cannot be 'none'.")

        if strategy_name not in self.VALID_STRATEGIES:
            Logger.log(f"Invalid export strategy: {strategy_name}", Logger.LogPriority.ERROR)
            raise ValueError(f"Invalid export strategy: '{strategy_name}'.")

        Logger.log("Request parsed successfully.")
        return {
            'export_strategy': self.VALID_STRATEGIES[strategy_name](),
            'folder_location': folder_location,
        }
