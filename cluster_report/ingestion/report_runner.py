import logging
import time

from cluster_report.export.export_csv import CsvWriter
from cluster_report.export.sheets_writer import SheetsWriter

from .auth import get_access_token
from .build_table import TABLE_BUILDERS
from .config import ReportConfig
from .fetch_status import poll_for_status

logger = logging.getLogger(__name__)


def make_sink(config: ReportConfig):
    if config.sink == "csv":
        return CsvWriter(config.csv_output_path)
    return SheetsWriter(
        spreadsheet_id=config.spreadsheet_id,
        sheet_name=config.sheet_name,
        credentials_file=config.credentials_file
    )


def run_report(config: ReportConfig, sink=None, sleep=time.sleep) -> int:
    """
    Authenticate, poll for cluster status, flatten and write one report.

    Returns the number of data rows written. Any ReportError propagates.
    """
    logger.info("🚀 Starting cluster status report (%s mode -> %s)", config.report_mode, config.sink)

    # 🔹 Step 1: Auth
    logger.info("Authenticating with API...")
    token = get_access_token(config.api_route, config.admin_token, timeout=config.request_timeout)

    # 🔹 Step 2: Trigger + poll
    logger.info("Initiating status request...")
    payload = poll_for_status(
        config.api_route,
        token,
        attempts=config.poll_attempts,
        interval=config.poll_interval,
        timeout=config.request_timeout,
        sleep=sleep
    )

    # 🔹 Step 3: Flatten into a table
    logger.info("Flattening data and generating header...")
    table = TABLE_BUILDERS[config.report_mode](payload.clusters)

    # 🔹 Step 4: Write
    if sink is None:
        sink = make_sink(config)
    sink.write(table.to_values())

    logger.info("✅ Report completed: %d clusters, %d columns", len(table.rows), len(table.header))
    return len(table.rows)
