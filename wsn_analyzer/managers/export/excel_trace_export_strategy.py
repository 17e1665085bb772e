from io import BytesIO

import pandas as pd

from wsn_analyzer.utils.logger.logger import Logger
from .trace_export_strategy import TraceExportStrategy


class ExcelTraceExportStrategy(TraceExportStrategy):
    """Single workbook with steps, nodes and links sheets."""

    def generate_export(self, steps, nodes=(), links=()):
        Logger.log(f"Starting Excel export generation ({len(steps)} steps)")

        # Build Excel in memory
        buffer = BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            self.steps_frame(steps).to_excel(writer, sheet_name="steps", index=False)
            self.nodes_frame(nodes).to_excel(writer, sheet_name="nodes", index=False)
            self.links_frame(links).to_excel(writer, sheet_name="links", index=False)

        Logger.log("Excel export generated")
        return [("trace.xlsx", buffer.getvalue())]
