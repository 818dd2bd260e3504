"""
Logging and debugging utilities.
"""

import logging
import os
import sys
from datetime import datetime
from logging import Formatter
from typing import Optional

from config.settings import LOG_LEVEL, ENABLE_DEBUG_PRINTS, SAVE_LOG_FILE, LOG_DIR


class SafeFormatter(Formatter):
    """Formatter that replaces characters not encodable by the stream encoding.

    This prevents UnicodeEncodeError when logging file names with accents or
    other non-ASCII characters to consoles with limited encodings (e.g.,
    cp1252 on Windows).
    """
    def __init__(self, fmt=None, datefmt=None, stream_encoding=None):
        """Initialize formatter with optional stream encoding.

        Parameters
        ----------
        fmt : str, optional
            Log format string.
        datefmt : str, optional
            Date format string.
        stream_encoding : str, optional
            Encoding to use when sanitizing output; defaults to stream encoding.
        """
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.stream_encoding = stream_encoding

    def format(self, record):
        """Format a log record while replacing unencodable characters."""
        s = super().format(record)
        enc = self.stream_encoding or getattr(sys.stderr, 'encoding', None) or 'utf-8'
        try:
            return s.encode(enc, errors='replace').decode(enc)
        except LookupError:
            # unknown codec name reported by the stream
            return s.encode('utf-8', errors='replace').decode('utf-8')


class Logger:
    """Custom logger for the command-line tools."""

    def __init__(self, name: str = "clean-arxiv", level: Optional[str] = None):
        """Create and configure a logger instance.

        Parameters
        ----------
        name : str, optional
            Logger name (default ``"clean-arxiv"``).
        level : str, optional
            Level name overriding ``LOG_LEVEL`` (e.g. ``"DEBUG"`` for ``--verbose``).
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.setup_logging(level or LOG_LEVEL)

    def setup_logging(self, level_name: str):
        """Set up console (and optional file) handlers and formatters."""
        log_level = getattr(logging, level_name.upper(), logging.INFO)
        # avoid adding multiple handlers if setup_logging called repeatedly
        if self.logger.handlers:
            for h in list(self.logger.handlers):
                self.logger.removeHandler(h)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        console_formatter = SafeFormatter(
            '[%(name)s] %(levelname)s - %(message)s',
            stream_encoding=getattr(console_handler.stream, 'encoding', None)
        )
        console_handler.setFormatter(console_formatter)

        self.logger.setLevel(log_level)
        self.logger.addHandler(console_handler)
        self.logger.propagate = False

        if SAVE_LOG_FILE:
            os.makedirs(LOG_DIR, exist_ok=True)
            file_handler = logging.FileHandler(
                os.path.join(LOG_DIR, f"{self.name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"),
                encoding='utf-8'
            )
            file_handler.setLevel(logging.DEBUG)
            file_formatter = SafeFormatter(
                '%(asctime)s - %(levelname)s - %(message)s',
                stream_encoding='utf-8'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, msg: str):
        """Emit a debug log when debug printing is enabled."""
        if ENABLE_DEBUG_PRINTS:
            self.logger.debug(msg)

    def info(self, msg: str):
        """Emit an info log."""
        self.logger.info(msg)

    def warning(self, msg: str):
        """Emit a warning log."""
        self.logger.warning(msg)

    def error(self, msg: str):
        """Emit an error log."""
        self.logger.error(msg)

    def print_resolution(self, result):
        """Log the keep and remove listings of a resolution.

        Parameters
        ----------
        result : ResolutionResult
            Outcome of ``DependencyResolver.resolve``.
        """
        self.info(f"Main: {result.main_tex}")
        self.info(f"Files to keep ({len(result.keep)}):")
        for path in result.keep:
            self.info(f"  {path}")

        self.info(f"Files to remove ({len(result.remove)}):")
        for path in result.remove:
            self.info(f"  {path}")

        if result.unresolved:
            self.debug(f"Unresolved references ({len(result.unresolved)}):")
            for ref in result.unresolved:
                self.debug(f"  {ref.source}: {ref.kind} '{ref.name}'")
