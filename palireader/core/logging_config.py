import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Iterable

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "palireader.log"
LOG_FILE_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

# Libraries that log every request at INFO
QUIET_LOGGERS = ("werkzeug",)


def _file_handler(log_file: Path, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=LOG_FILE_SIZE,
        backupCount=LOG_BACKUP_COUNT,
        encoding='utf-8'
    )
    handler.setFormatter(formatter)
    # The file keeps everything, the console follows the chosen level
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(log_dir: Path, debug_mode: bool = False,
                  quiet: Iterable[str] = QUIET_LOGGERS) -> Path:
    """
    Send reader logs to palireader.log under `log_dir` and to stdout.

    Calling it again replaces the previous handlers, so a server restarted
    in the same process does not log every line twice. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    level = logging.DEBUG if debug_mode else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_file_handler(log_file, formatter))
    root_logger.addHandler(_console_handler(level, formatter))

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(f"Logging to {log_file} (level {logging.getLevelName(level)})")
    return log_file
