import json

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.dfs_trace import PSEUDOCODE
from .trace_export_strategy import TraceExportStrategy


class JsonTraceExportStrategy(TraceExportStrategy):
    """Full trace as one JSON document, including every step's state snapshot."""

    def generate_export(self, steps, nodes=(), links=()):
        Logger.log(f"Starting JSON export generation ({len(steps)} steps)")
        document = {
            "pseudocode": list(PSEUDOCODE),
            "steps": [dict(step.to_record(), state=step.state.to_dict()) for step in steps],
            "nodes": self.nodes_frame(nodes).to_dict(orient="records"),
            "links": self.links_frame(links).to_dict(orient="records"),
        }
        content = json.dumps(document, indent=2, default=str).encode("utf-8")
        Logger.log(f"JSON export generated ({len(content)} bytes)")
        return [("trace.json", content)]
