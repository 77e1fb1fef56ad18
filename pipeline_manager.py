import logging
import sys

from cluster_report.ingestion.config import load_config
from cluster_report.ingestion.errors import ReportError
from cluster_report.ingestion.report_runner import run_report

# =========================
# Logging (UTF-8 safe on Windows)
# =========================
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level="INFO", log_file=None):
    """Log to stdout, and also to `log_file` (UTF-8) when given."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


# =========================
# Pipeline Runner
# =========================
def run_full_pipeline(config=None) -> bool:
    """Run one report. Logs and returns False on any pipeline error."""
    logging.info("=== STARTING PIPELINE ===")
    try:
        if config is None:
            config = load_config()
        run_report(config)
    except ReportError as e:
        logging.error(f"❌ {type(e).__name__}: {e}")
        return False

    logging.info("=== SUCCESS ===")
    return True


def main() -> int:
    try:
        config = load_config()
    except ReportError as e:
        configure_logging()
        logging.error(f"❌ {type(e).__name__}: {e}")
        return 1

    configure_logging(config.log_level, config.log_file)
    return 0 if run_full_pipeline(config) else 1


if __name__ == "__main__":
    sys.exit(main())
