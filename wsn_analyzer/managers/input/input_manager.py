from wsn_analyzer.utils.logger.logger import Logger
from .input_data_interpreter import InputDataInterpreter


class InputManager:
    """Coordinate reading graph files."""

    def __init__(self):
        Logger.log("start InputManager __init__(self)")
        self.data_interpreter = InputDataInterpreter()
        Logger.log("end InputManager __init__(self)")

    def get_graph(self, input_data):
        """Return a `ParsedGraph` read from the `input_data` path."""
        Logger.log(f"start get_graph(self, {input_data})")
        strategy = self.data_interpreter.get_data_processing_strategy(input_data)
        graph = strategy.process(input_data)
        Logger.log("end get_graph(self, input_data)")
        return graph
