import logging
import logging.config
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "wealthcast.log"

# Third-party loggers that are chatty at INFO during `serve`
QUIET_LOGGERS = ("uvicorn.access", "multipart")


def build_logging_config(log_dir: str | None = "logs", console_level: str = "INFO") -> dict:
    """dictConfig for the CLI and API.

    Console gets ``console_level``; when ``log_dir`` is set, a rotating file
    under it receives everything from DEBUG up.
    """
    handlers: dict[str, dict] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": console_level,
        },
    }
    if log_dir:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": os.path.join(log_dir, LOG_FILENAME),
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "encoding": "utf-8",
            "formatter": "standard",
            "level": "DEBUG",
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT, "datefmt": LOG_DATEFMT},
        },
        "handlers": handlers,
        "loggers": {
            name: {"level": "WARNING"} for name in QUIET_LOGGERS
        },
        "root": {
            "level": "DEBUG",
            "handlers": list(handlers),
        },
    }


def setup_logging(log_dir: str | None = "logs", verbose: bool = False):
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    console_level = "DEBUG" if verbose else "INFO"
    logging.config.dictConfig(build_logging_config(log_dir, console_level))
