from wsn_analyzer.utils.logger.logger import Logger
from .trace_export_strategy import TraceExportStrategy


class CsvTraceExportStrategy(TraceExportStrategy):
    """One CSV per table: steps, nodes, links."""

    def generate_export(self, steps, nodes=(), links=()):
        Logger.log(f"Starting CSV export generation ({len(steps)} steps)")
        files = [("trace_steps.csv", self.steps_frame(steps).to_csv(index=False).encode("utf-8"))]
        if nodes:
            files.append(("nodes.csv", self.nodes_frame(nodes).to_csv(index=False).encode("utf-8")))
        if links:
            files.append(("links.csv", self.links_frame(links).to_csv(index=False).encode("utf-8")))
        Logger.log(f"CSV export generated {len(files)} files")
        return files
