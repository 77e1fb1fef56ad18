import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

# ============================
# Defaults (override via .env)
# ============================
DEFAULT_SHEET_NAME = "full_data"
DEFAULT_CSV_OUTPUT_PATH = "data/cluster_status.csv"
DEFAULT_POLL_ATTEMPTS = 10
DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
DEFAULT_REPORT_INTERVAL_MINUTES = 30

SINKS = ("sheets", "csv")
REPORT_MODES = ("dynamic", "fixed")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass(frozen=True)
class ReportConfig:
    """Settings for one report run."""
    api_route: str
    admin_token: str
    spreadsheet_id: Optional[str]
    credentials_file: Optional[str]
    sink: str = "sheets"
    report_mode: str = "dynamic"
    sheet_name: str = DEFAULT_SHEET_NAME
    csv_output_path: str = DEFAULT_CSV_OUTPUT_PATH
    poll_attempts: int = DEFAULT_POLL_ATTEMPTS
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    report_interval_minutes: int = DEFAULT_REPORT_INTERVAL_MINUTES
    log_file: Optional[str] = None
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # keep the admin credential out of logs and tracebacks
        return (
            f"ReportConfig(api_route={self.api_route!r}, sink={self.sink!r}, "
            f"report_mode={self.report_mode!r}, sheet_name={self.sheet_name!r})"
        )


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _positive(name: str, default, cast, problems: list):
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        problems.append(f"{name} must be a number (got {raw!r})")
        return default
    if value <= 0:
        problems.append(f"{name} must be greater than zero (got {raw!r})")
    return value


def _choice(name: str, default: str, choices: tuple, problems: list) -> str:
    value = (_env(name) or default).lower()
    if value not in choices:
        problems.append(f"{name} must be one of {', '.join(choices)} (got {value!r})")
    return value


def load_config(dotenv_path: Optional[str] = None) -> ReportConfig:
    """
    Read report settings from the environment (and .env, if present).

    Existing environment variables win over .env entries. All problems are
    collected and raised together as one ConfigError.
    """
    load_dotenv(dotenv_path, override=False)

    problems = []

    log_level = _choice("LOG_LEVEL", "info", LOG_LEVELS, problems)
    api_route = _env("API_ROUTE")
    admin_token = _env("ADMIN_TOKEN")
    sink = _choice("REPORT_SINK", "sheets", SINKS, problems)
    report_mode = _choice("REPORT_MODE", "dynamic", REPORT_MODES, problems)

    required = {"API_ROUTE": api_route, "ADMIN_TOKEN": admin_token}

    spreadsheet_id = _env("SPREADSHEET_ID")
    credentials_file = _env("GOOGLE_APPLICATION_CREDENTIALS")
    if sink == "sheets":
        required["SPREADSHEET_ID"] = spreadsheet_id
        required["GOOGLE_APPLICATION_CREDENTIALS"] = credentials_file

    missing = [name for name, value in required.items() if value is None]
    if missing:
        problems.insert(0, f"Environment variables {', '.join(missing)} must be set")

    poll_attempts = _positive("POLL_ATTEMPTS", DEFAULT_POLL_ATTEMPTS, int, problems)
    poll_interval = _positive("POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS, float, problems)
    request_timeout = _positive("REQUEST_TIMEOUT_SECONDS", DEFAULT_REQUEST_TIMEOUT_SECONDS, float, problems)
    report_interval = _positive("REPORT_INTERVAL_MINUTES", DEFAULT_REPORT_INTERVAL_MINUTES, int, problems)

    if problems:
        raise ConfigError("; ".join(problems))

    return ReportConfig(
        api_route=api_route.rstrip("/"),
        admin_token=admin_token,
        spreadsheet_id=spreadsheet_id,
        credentials_file=credentials_file,
        sink=sink,
        report_mode=report_mode,
        sheet_name=_env("SHEET_NAME") or DEFAULT_SHEET_NAME,
        csv_output_path=_env("CSV_OUTPUT_PATH") or DEFAULT_CSV_OUTPUT_PATH,
        poll_attempts=poll_attempts,
        poll_interval=poll_interval,
        request_timeout=request_timeout,
        report_interval_minutes=report_interval,
        log_file=_env("LOG_FILE"),
        log_level=log_level.upper(),
    )
