import logging
import os
from datetime import datetime

from cli_agent_launcher.constants import LOG_DIR


def setup_logging() -> None:
    """Setup logging configuration.

    Level comes from CAL_LOG_LEVEL (default INFO). Logs are written to a
    timestamped file under LOG_DIR.
    """
    log_level = os.environ.get("CAL_LOG_LEVEL", "INFO").upper()

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = LOG_DIR / f"cal-server-{timestamp}.log"

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(log_file)],
    )

    print(f"Server logs: {log_file}")
    print("Set CAL_LOG_LEVEL=DEBUG for verbose output")
    logging.info(f"Logging to {log_file}")
