from numbers import Integral

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.exceptions import InvalidInputDataError
from wsn_analyzer.models.parsed_graph import ParsedGraph
from wsn_analyzer.models.sensor import Link


class DataProcessingStrategy():
    """Interface for converting input files into a `ParsedGraph`."""

    def process(self, input_data):
        """Return a `ParsedGraph` parsed from `input_data` path."""
        raise NotImplementedError()

    @staticmethod
    def to_node_id(value):
        """Endpoint token -> non-negative int id, or InvalidInputDataError."""
        if isinstance(value, bool):
            raise InvalidInputDataError(f"Invalid node id: {value!r}")
        if isinstance(value, Integral):
            node_id = int(value)
        elif isinstance(value, float) and value.is_integer():
            node_id = int(value)
        else:
            try:
                node_id = int(str(value).strip())
            except ValueError:
                Logger.log(f"non-integer node id: {value!r}", Logger.LogPriority.ERROR)
                raise InvalidInputDataError(f"Invalid node id: {value!r}")
        if node_id < 0:
            Logger.log(f"negative node id: {node_id}", Logger.LogPriority.ERROR)
            raise InvalidInputDataError(f"Node ids must be non-negative, got {node_id}")
        return node_id

    @classmethod
    def build_graph(cls, pairs, extra_node_ids=()):
        """Validate endpoint pairs and assemble the ParsedGraph; node ids are the sorted union."""
        links = [Link(cls.to_node_id(source), cls.to_node_id(target)) for source, target in pairs]
        node_ids = {cls.to_node_id(node_id) for node_id in extra_node_ids}
        for link in links:
            node_ids.add(link.source)
            node_ids.add(link.target)

        if not node_ids:
            Logger.log("No valid nodes found", Logger.LogPriority.ERROR)
            raise InvalidInputDataError("No valid nodes found")

        graph = ParsedGraph(node_ids=tuple(sorted(node_ids)), links=tuple(links))
        Logger.log(f"parsed graph: {graph.node_count} nodes, {graph.link_count} links")
        return graph
