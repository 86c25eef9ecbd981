"""
Structured logging for searchable.

Provides a centralized logger with console and optional file output,
plus counters for monitoring how often filtering is requested, applied,
coalesced away or cancelled.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

from .config import read_log_settings


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks recomputation metrics across Searchable instances.
    """

    def __init__(
        self,
        name: str = "searchable",
        level: str = "WARNING",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        level_value = logging.getLevelName(level.upper())
        if not isinstance(level_value, int):
            raise ValueError(f"Unknown log level: {level}")

        self.logger = logging.getLogger(name)
        self.logger.setLevel(level_value)
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "recomputations_requested": 0,
            "recomputations_applied": 0,
            "recomputations_cancelled": 0,
            "predicate_failures": 0,
            "renders": 0,
        }

        # Console output goes to stderr
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level_value)
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"searchable_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)
            # File always receives everything
            self.logger.setLevel(logging.DEBUG)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_recompute_requested(self):
        """Increment the counter of query changes that asked for filtering."""
        self.metrics["recomputations_requested"] += 1

    def record_recompute_applied(self):
        """Increment the counter of result sets actually stored."""
        self.metrics["recomputations_applied"] += 1

    def record_recompute_cancelled(self):
        self.metrics["recomputations_cancelled"] += 1

    def record_predicate_failure(self):
        self.metrics["predicate_failures"] += 1

    def record_render(self):
        self.metrics["renders"] += 1

    def get_metrics(self) -> dict:
        """Return current metrics, including how many requests were coalesced."""
        metrics_copy = self.metrics.copy()
        requested = metrics_copy["recomputations_requested"]
        settled = (
            metrics_copy["recomputations_applied"]
            + metrics_copy["recomputations_cancelled"]
            + metrics_copy["predicate_failures"]
        )
        metrics_copy["recomputations_coalesced"] = max(0, requested - settled)
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        requested = metrics["recomputations_requested"]
        applied = metrics["recomputations_applied"]
        ratio = 0
        if requested > 0:
            ratio = round(applied / requested * 100, 1)

        self.info("=== Searchable Session Metrics ===")
        self.info(f"Recomputations: {applied}/{requested} applied ({ratio}%)")
        self.info(f"Coalesced: {metrics['recomputations_coalesced']}")
        self.info(f"Cancelled: {metrics['recomputations_cancelled']}")
        self.info(f"Renders: {metrics['renders']}")

        if metrics["predicate_failures"]:
            self.info(f"Predicate failures: {metrics['predicate_failures']}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "searchable",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level and file output default to the environment settings
    (SEARCHABLE_LOG_LEVEL, SEARCHABLE_LOG_DIR) when not passed.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        log_level, log_dir = read_log_settings()
        if level is None:
            level = log_level
        if log_dir is not None:
            kwargs.setdefault("log_dir", log_dir)
            kwargs.setdefault("enable_file", True)
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
