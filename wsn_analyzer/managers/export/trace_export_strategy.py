import pandas as pd

from wsn_analyzer.models.sensor import NodeStatus


class TraceExportStrategy():
    """Turns a recorded trace (plus the network it ran on) into files."""

    def generate_export(self, steps, nodes=(), links=()):
        """Return a list[(filename, bytes)] for this export."""
        raise NotImplementedError()

    STEP_COLUMNS = [
        "step_id", "event", "code_line", "highlight_node", "highlight_neighbor",
        "description", "articulation_points", "visited_count",
    ]

    @classmethod
    def steps_frame(cls, steps):
        frame = pd.DataFrame([step.to_record() for step in steps], columns=cls.STEP_COLUMNS)
        # nullable ints so missing highlights do not turn the column into floats
        return frame.astype({"highlight_node": "Int64", "highlight_neighbor": "Int64"})

    @staticmethod
    def nodes_frame(nodes):
        return pd.DataFrame(
            [
                {
                    "n_id": node.n_id,
                    "x": node.x,
                    "y": node.y,
                    "energy": node.energy,
                    "max_energy": node.max_energy,
                    "sensing_range": node.sensing_range,
                    "status": NodeStatus(node.status).value,
                }
                for node in nodes
            ],
            columns=["n_id", "x", "y", "energy", "max_energy", "sensing_range", "status"],
        )

    @staticmethod
    def links_frame(links):
        return pd.DataFrame(
            [
                {
                    "source": link.source,
                    "target": link.target,
                    "link_type": link.link_type.value if link.link_type else "",
                }
                for link in links
            ],
            columns=["source", "target", "link_type"],
        )
