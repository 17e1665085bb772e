class AnalyzerError(Exception):
    """Base class for errors raised by the WSN analyzer."""
    default_message = "WSN analyzer error."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class StateTransitionError(AnalyzerError):
    """Action not allowed in the current session state (no network, already running, ...)."""
    default_message = "Invalid state transition attempted."


class InvalidInputDataError(AnalyzerError):
    """Graph file content failed validation."""
    default_message = "Unable to validate input graph."


class UnsupportedFileTypeError(AnalyzerError):
    """No input strategy handles the file extension."""
    default_message = "File type not supported."

    def __init__(self, extension=None, supported=()):
        self.extension = extension
        self.supported = tuple(supported)
        message = None
        if extension is not None:
            message = f"Unsupported file type '{extension}'."
            if self.supported:
                message += f" Supported: {', '.join(self.supported)}"
        super().__init__(message)


class NodeNotFoundError(AnalyzerError, LookupError):
    """Node id not present in the loaded network."""
    default_message = "Node ID not found in network."

    def __init__(self, node_id=None):
        self.node_id = node_id
        super().__init__(None if node_id is None else f"Node {node_id} not found in network.")


class InvalidConfigurationError(AnalyzerError):
    """Analyzer configuration failed validation."""
    default_message = "Invalid analyzer configuration."
