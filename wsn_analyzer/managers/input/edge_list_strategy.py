import re

from wsn_analyzer.utils.logger.logger import Logger
from .data_processing_strategy import DataProcessingStrategy


class EdgeListStrategy(DataProcessingStrategy):
    """Parse a plain edge list: one `source target` pair per line, whitespace or comma separated."""

    TOKEN_SEPARATOR = re.compile(r"[\s,]+")

    def process(self, input_data):
        Logger.log(f"start EdgeListStrategy.process({input_data})")
        pairs = []
        with open(input_data, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, start=1):
                tokens = [token for token in self.TOKEN_SEPARATOR.split(line.strip()) if token]
                # Lines with fewer than two tokens (blank, lone id) carry no edge
                if len(tokens) < 2:
                    continue
                if tokens[0].startswith("#"):
                    continue
                # csv header such as "source,target"
                if line_number == 1 and not any(token.lstrip("-").isdigit() for token in tokens[:2]):
                    Logger.log(f"skipping header line: {line.strip()}")
                    continue
                pairs.append((tokens[0], tokens[1]))
        graph = self.build_graph(pairs)
        Logger.log("end EdgeListStrategy.process()")
        return graph
