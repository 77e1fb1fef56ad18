"""
Shared pytest fixtures for the cluster status report tests.

- make_response: build requests.Response-like mocks
- clean_env: strip every report variable from the environment
- sample_clusters: a small status payload body
"""

import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

REPORT_ENV_VARS = [
    "API_ROUTE",
    "ADMIN_TOKEN",
    "SPREADSHEET_ID",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "REPORT_SINK",
    "REPORT_MODE",
    "SHEET_NAME",
    "CSV_OUTPUT_PATH",
    "POLL_ATTEMPTS",
    "POLL_INTERVAL_SECONDS",
    "REQUEST_TIMEOUT_SECONDS",
    "REPORT_INTERVAL_MINUTES",
    "LOG_FILE",
    "LOG_LEVEL",
]


def _response(status_code: int = 200, body: Any = None, text: Optional[str] = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.reason = "OK" if status_code == 200 else "Error"
    if text is not None:
        response.text = text
        response.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    else:
        response.text = json.dumps(body)
        response.json.return_value = body
    return response


@pytest.fixture
def make_response():
    return _response


@pytest.fixture
def clean_env(monkeypatch):
    for name in REPORT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def sample_clusters():
    return {
        "prod-east": {
            "ocp_version": "4.14.8",
            "cloud": "aws",
            "api_url": "https://api.prod-east.example.com:6443",
            "node_summary": {"ready": 6, "total": 6},
            "operators": {
                "ingress": {"status": "Healthy"},
                "etcd": {"status": "Healthy"},
            },
        },
        "dev-west": {
            "ocp_version": "4.15.1",
            "cloud": "gcp",
            "node_summary": {"ready": 2, "total": 3},
            "operators": {
                "ingress": {"status": "Degraded"},
                "etcd": {"status": "Healthy"},
            },
            "annotations": [{"owner": "platform"}, {"owner": "ignored"}],
        },
    }
