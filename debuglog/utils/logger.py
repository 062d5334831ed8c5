import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from debuglog.utils.helper import get_env


class LoggerMixin:
    def __init__(self, name: str = None, log_dir: str = None):
        self.name = name or self.__class__.__name__
        self.log_dir = log_dir or get_env("DEBUGLOG_DIAG_DIR", required=False)
        self.logger = self.get_logger(self.name)

    def info(self, msg: str):
        self.logger.info(msg)

    def warning(self, msg: str):
        self.logger.warning(msg)

    def error(self, msg: str):
        self.logger.error(msg)

    def debug(self, msg: str):
        self.logger.debug(msg)

    def get_logger(self, name: str):
        logger = logging.getLogger(f"debuglog.{name}")
        logger.setLevel(get_env("DEBUGLOG_LOG_LEVEL", "INFO").upper())

        if logger.handlers:
            return logger

        formatter = logging.Formatter(
            "%(asctime)s - [%(levelname)s] - %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S"
        )

        # stdout belongs to the port finder result and the startup banner
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            log_file = os.path.join(self.log_dir, f"{name.replace('.', '_')}.log")

            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

        return logger
