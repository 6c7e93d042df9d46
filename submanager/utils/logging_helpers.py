"""
Error log file used by the handlers next to the normal logger.
"""
import time
import traceback
import logging

logger = logging.getLogger(__name__)

ERROR_LOG_FILE = "log.txt"


def log_error(e: Exception) -> None:
    """Append the exception and its traceback to the error log file"""
    entry = f"[{time.ctime()}] {type(e).__name__}: {e}\n{traceback.format_exc()}\n"
    try:
        with open(ERROR_LOG_FILE, "a", encoding="utf-8") as f:
            f.write(entry)
    except OSError as log_ex:
        logger.error(f"Failed to write to {ERROR_LOG_FILE}: {log_ex}")
