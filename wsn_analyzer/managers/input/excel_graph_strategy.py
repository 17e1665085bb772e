import pandas as pd

from wsn_analyzer.utils.logger.logger import Logger
from wsn_analyzer.models.exceptions import InvalidInputDataError
from .data_processing_strategy import DataProcessingStrategy


class ExcelGraphStrategy(DataProcessingStrategy):
    """Parse the first sheet of an Excel workbook holding an edge table."""

    COLUMN_PAIRS = (("source", "target"), ("n_from", "n_to"))

    # PROCESS INPUT DATA.
    def process(self, input_data):
        Logger.log(f"start ExcelGraphStrategy.process({input_data})")
        df = pd.read_excel(input_data)
        df.columns = [str(column).strip().lower() for column in df.columns]

        # FIND THE EDGE COLUMNS
        columns = next((pair for pair in self.COLUMN_PAIRS if set(pair) <= set(df.columns)), None)
        if columns is None:
            Logger.log(f"no edge columns in {list(df.columns)}", Logger.LogPriority.ERROR)
            raise InvalidInputDataError("Sheet needs 'source'/'target' or 'n_from'/'n_to' columns")

        # Fully blank rows are padding, half-filled rows are errors
        edges = df[list(columns)].dropna(how="all")
        if edges.isna().any().any():
            raise InvalidInputDataError("Edge row with a missing endpoint")

        graph = self.build_graph(edges.itertuples(index=False, name=None))
        Logger.log("end ExcelGraphStrategy.process()")
        return graph
