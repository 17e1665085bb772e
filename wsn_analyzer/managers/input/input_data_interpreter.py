import os

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.exceptions import UnsupportedFileTypeError
from .json_graph_strategy import JsonGraphStrategy
from .edge_list_strategy import EdgeListStrategy
from .excel_graph_strategy import ExcelGraphStrategy


class InputDataInterpreter:
    """Pick a data processing strategy based on file type."""

    STRATEGIES = {
        ".json": JsonGraphStrategy,
        ".txt": EdgeListStrategy,
        ".csv": EdgeListStrategy,
        ".edges": EdgeListStrategy,
        ".xlsx": ExcelGraphStrategy,
    }

    # GET DATA PROCESSING STRATEGY
    def get_data_processing_strategy(self, input_data):
        """Return a strategy for `input_data` path."""
        Logger.log(f"start get_data_processing_strategy({input_data})")
        # CHECK DOES FILE EXIST
        if not os.path.exists(input_data):
            Logger.log(f"input file not found: {input_data}", Logger.LogPriority.ERROR)
            raise FileNotFoundError(f"Input file not found: {input_data}")

        file_size = os.path.getsize(input_data)
        file_name = os.path.basename(input_data)
        file_extension = os.path.splitext(input_data)[1].lower()
        Logger.log(f"File details - Name: {file_name}, Size: {file_size} bytes, Extension: {file_extension}")

        strategy_class = self.STRATEGIES.get(file_extension)
        if strategy_class is None:
            Logger.log(f"unsupported file type: {file_extension}", Logger.LogPriority.ERROR)
            raise UnsupportedFileTypeError(file_extension or "(none)", sorted(self.STRATEGIES))

        Logger.log(f"end get_data_processing_strategy -> {strategy_class.__name__}")
        return strategy_class()
