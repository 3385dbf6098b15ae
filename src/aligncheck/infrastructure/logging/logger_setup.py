#!/usr/bin/env python3

"""Process-wide logging configuration."""

import logging
import sys
from datetime import datetime
from pathlib import Path

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LoggerSetup:
    """Attaches the console and log file handlers to the root logger."""

    _initialized = False
    _log_file_path: Path | None = None
    _handlers: list[logging.Handler] = []

    @classmethod
    def initialize(cls, log_dir: Path, debug: bool = False) -> None:
        """
        Route log records to stderr and to a fresh log file.

        Findings are printed on stdout, so the console handler writes to
        stderr. The log file always receives DEBUG records. Calling this a
        second time does nothing until reset().

        Args:
            log_dir: Directory for aligncheck_<timestamp>.log (created if missing)
            debug: Show DEBUG records on the console too
        """
        if cls._initialized:
            return

        log_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        cls._log_file_path = log_dir / f"aligncheck_{stamp}.log"

        cls._handlers = [
            cls._console_handler(logging.DEBUG if debug else logging.INFO),
            cls._file_handler(cls._log_file_path),
        ]
        root = logging.getLogger()
        root.setLevel(logging.DEBUG)
        for handler in cls._handlers:
            root.addHandler(handler)
        cls._initialized = True

        logging.getLogger(__name__).debug(
            f"Writing log to {cls._log_file_path} (console debug: {debug})"
        )

    @staticmethod
    def _console_handler(level: int) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        return handler

    @staticmethod
    def _file_handler(path: Path) -> logging.Handler:
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        return handler

    @classmethod
    def get_log_file_path(cls) -> Path | None:
        return cls._log_file_path

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    def reset(cls) -> None:
        """Detach and close the handlers added by initialize()."""
        root = logging.getLogger()
        for handler in cls._handlers:
            root.removeHandler(handler)
            handler.close()
        cls._handlers = []
        cls._initialized = False
        cls._log_file_path = None
