import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping

import pandas as pd

from .flatten import FlatRecord, flatten
from .schema import CLUSTER_NAME_COLUMN, FIXED_COLUMNS, FIXED_HEADER, HEALTHY, OPERATORS_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportTable:
    """Header plus rows; every row has exactly len(header) cells."""
    header: List[str]
    rows: List[List[str]]

    def to_values(self) -> List[List[str]]:
        """Header row followed by data rows, the grid sinks write."""
        return [list(self.header)] + [list(row) for row in self.rows]

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=self.header, dtype=str)


def flatten_clusters(clusters: Mapping[str, object]) -> List[FlatRecord]:
    """
    Flatten every cluster record and tag it with its identifier.

    Records come back sorted by cluster identifier so the row order never
    depends on the response's key order.
    """
    records = []
    for cluster_name in sorted(clusters):
        record = flatten(clusters[cluster_name])
        record[CLUSTER_NAME_COLUMN] = cluster_name
        records.append(record)
    return records


def build_header(records: Iterable[Mapping[str, str]]) -> List[str]:
    """Sorted, de-duplicated union of all record keys."""
    keys = set()
    for record in records:
        keys.update(record)
    return sorted(keys)


def build_rows(records: Iterable[Mapping[str, str]], header: List[str]) -> List[List[str]]:
    return [[record.get(column, "") for column in header] for record in records]


def build_table(clusters: Mapping[str, object]) -> ReportTable:
    """Dynamic mode: one column per flattened path seen in any cluster."""
    records = flatten_clusters(clusters)
    header = build_header(records)
    logger.info("Generated dynamic header with %d columns for %d clusters", len(header), len(records))
    return ReportTable(header=header, rows=build_rows(records, header))


# =========================
# Fixed-schema mode
# =========================
def summarize_operators(operators) -> str:
    """
    Collapse per-operator health into one cell.

    "Healthy" when every operator reports Healthy, otherwise
    "Unhealthy (<healthy>/<total>)". No operators counts as Healthy.
    """
    if not isinstance(operators, Mapping):
        operators = {}

    total = len(operators)
    healthy = sum(
        1 for info in operators.values()
        if isinstance(info, Mapping) and info.get("status") == HEALTHY
    )

    if healthy == total:
        return HEALTHY
    return f"Unhealthy ({healthy}/{total})"


def build_fixed_row(cluster_name: str, cluster: object) -> List[str]:
    record = flatten(cluster)
    record[CLUSTER_NAME_COLUMN] = cluster_name

    operators = cluster.get(OPERATORS_KEY) if isinstance(cluster, Mapping) else None

    row = []
    for _, path in FIXED_COLUMNS:
        if path is None:
            row.append(summarize_operators(operators))
        else:
            row.append(record.get(path, ""))
    return row


def build_fixed_table(clusters: Mapping[str, object]) -> ReportTable:
    """Fixed mode: the 8-column summary, one row per cluster."""
    rows = [build_fixed_row(name, clusters[name]) for name in sorted(clusters)]
    logger.info("Generated fixed-schema table for %d clusters", len(rows))
    return ReportTable(header=list(FIXED_HEADER), rows=rows)


TABLE_BUILDERS: Dict[str, Callable[[Mapping[str, object]], ReportTable]] = {
    "dynamic": build_table,
    "fixed": build_fixed_table,
}
