import logging
import sys
import time

import schedule

from cluster_report.ingestion.config import load_config
from cluster_report.ingestion.errors import ReportError
from pipeline_manager import configure_logging, run_full_pipeline


def job(config):
    logging.info("⏰ Scheduler triggered job...")
    try:
        run_full_pipeline(config)
    except Exception as e:
        # one crashed run must not stop the schedule
        logging.exception(f"❌ Crash: {e}")


def main() -> int:
    try:
        config = load_config()
    except ReportError as e:
        configure_logging()
        logging.error(f"❌ {type(e).__name__}: {e}")
        return 1

    configure_logging(config.log_level, config.log_file)

    # Configure Schedule
    schedule.every(config.report_interval_minutes).minutes.do(job, config)

    # Also run once immediately on startup
    logging.info("🚀 Scheduler Started (every %d minutes). Running first job immediately...",
                 config.report_interval_minutes)
    job(config)

    while True:
        try:
            schedule.run_pending()
            time.sleep(1)
        except KeyboardInterrupt:
            logging.info("🛑 Scheduler stopped by user.")
            break
    return 0


if __name__ == "__main__":
    sys.exit(main())
