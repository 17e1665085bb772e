import json

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.exceptions import InvalidInputDataError
from .data_processing_strategy import DataProcessingStrategy


class JsonGraphStrategy(DataProcessingStrategy):
    """
    Parse a JSON graph file.

    Accepted shapes:
        [{"source": 0, "target": 1}, ...]
        {"links": [{"source": 0, "target": 1}, ...], "nodes": [0, 1, 2]}
    "nodes" is optional and may list ids or {"id": ...} objects; it only
    adds isolated nodes.
    """

    def process(self, input_data):
        Logger.log(f"start JsonGraphStrategy.process({input_data})")
        try:
            with open(input_data, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except json.JSONDecodeError as ex:
            Logger.log(f"malformed json: {ex}", Logger.LogPriority.ERROR)
            raise InvalidInputDataError(f"Malformed JSON: {ex}")

        if isinstance(raw, list):
            raw_links, raw_nodes = raw, []
        elif isinstance(raw, dict):
            raw_links, raw_nodes = raw.get("links", []), raw.get("nodes", [])
        else:
            raise InvalidInputDataError("JSON root must be a list of links or an object with 'links'")

        pairs = []
        for entry in raw_links:
            if not isinstance(entry, dict) or "source" not in entry or "target" not in entry:
                Logger.log(f"link entry without source/target: {entry!r}", Logger.LogPriority.ERROR)
                raise InvalidInputDataError(f"Link entry needs 'source' and 'target': {entry!r}")
            pairs.append((entry["source"], entry["target"]))

        node_ids = []
        for node in raw_nodes:
            if isinstance(node, dict):
                if "id" not in node:
                    Logger.log(f"node entry without id: {node!r}", Logger.LogPriority.ERROR)
                    raise InvalidInputDataError(f"Node entry needs 'id': {node!r}")
                node = node["id"]
            node_ids.append(node)
        graph = self.build_graph(pairs, node_ids)
        Logger.log("end JsonGraphStrategy.process()")
        return graph
