import json
import logging
import os

from config import settings

# ANSI colors per level
LOG_COLORS = {
    "DEBUG": "\033[94m",
    "INFO": "\033[92m",
    "WARNING": "\033[93m",
    "ERROR": "\033[91m",
    "CRITICAL": "\033[95m",
    "RESET": "\033[0m",
}

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = LOG_COLORS.get(record.levelname, LOG_COLORS["RESET"])
        message = super().format(record)
        return f"{color}{message}{LOG_COLORS['RESET']}"


def get_logger(name: str = "waterboy", level=None, log_dir=None) -> logging.Logger:
    """
    Return a configured logger.

    Console output is colored; when a log directory is given (or LOG_DIR is
    set) every record is also appended to ``<log_dir>/<name>.json.log`` as one
    JSON object per line. Handlers are attached only once per logger name.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level or getattr(logging, settings.log_level, logging.INFO))
    logger.propagate = False

    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(ColorFormatter(CONSOLE_FORMAT))
        logger.addHandler(stream_handler)

        log_dir = log_dir or settings.log_dir
        if log_dir is not None:
            os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(os.path.join(log_dir, f"{name}.json.log"))
            file_handler.setFormatter(JsonFormatter())
            logger.addHandler(file_handler)

    return logger
