# export_csv.py
# ==================================================
# Local CSV sink (replaces the file on every run)
# ==================================================

import logging
import os
from pathlib import Path
from typing import List

from cluster_report.ingestion.build_table import ReportTable
from cluster_report.ingestion.errors import SinkError

logger = logging.getLogger(__name__)


class CsvWriter:
    """Writes the report grid to a single CSV file, atomically."""

    def __init__(self, csv_path: str):
        self.csv_path = Path(csv_path)

    def write(self, values: List[List[str]]) -> int:
        if not values:
            raise SinkError("Refusing to write an empty grid (no header row)")

        table = ReportTable(header=list(values[0]), rows=[list(row) for row in values[1:]])
        df = table.to_dataframe()

        temp_path = self.csv_path.with_name(self.csv_path.name + ".tmp")
        try:
            self.csv_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(temp_path, index=False, encoding="utf-8")
            os.replace(temp_path, self.csv_path)
        except OSError as exc:
            raise SinkError(f"Failed to write {self.csv_path}: {exc}") from exc

        logger.info("📄 Report exported: %s (%d rows)", self.csv_path, len(table.rows))
        return len(values)
