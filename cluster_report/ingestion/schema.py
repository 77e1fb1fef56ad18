"""
Column definitions for the cluster status report.

This file is the single source of truth for:
- the reserved cluster identifier column
- the fixed-schema column order and where each value comes from
"""

from .flatten import SEPARATOR

# 🔹 Injected into every flattened record (overrides any flattened key of the same name)
CLUSTER_NAME_COLUMN = "cluster_name"

# 🔹 Operator health
HEALTHY = "Healthy"
OPERATORS_KEY = "operators"
INGRESS_OPERATOR = "ingress"
INGRESS_STATUS_PATH = SEPARATOR.join([OPERATORS_KEY, INGRESS_OPERATOR, "status"])

# 🔹 Fixed-schema mode: sheet header -> flattened source path
# (DO NOT change casually)
FIXED_COLUMNS = [
    ("Cluster Name", CLUSTER_NAME_COLUMN),
    ("Version", "ocp_version"),
    ("Cloud", "cloud"),
    ("API URL", "api_url"),
    ("Ready Nodes", "node_summary_ready"),
    ("Total Nodes", "node_summary_total"),
    ("Ingress Operator", INGRESS_STATUS_PATH),
    ("Operators", None),             # computed by summarize_operators()
]

FIXED_HEADER = [title for title, _ in FIXED_COLUMNS]
