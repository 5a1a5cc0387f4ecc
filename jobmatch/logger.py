"""
Structured logging system for jobmatch.

Provides centralized logging with console and file outputs, log levels,
and metrics tracking for monitoring how scoring runs behave.
"""

import logging
import threading
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

from .env import Settings


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for scoring and record intake.
    """

    def __init__(
        self,
        name: str = "jobmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
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
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers
        self._lock = threading.Lock()

        # Metrics tracking
        self.metrics = {
            "scores_computed": 0,
            "scores_by_policy": {},
            "criteria_skipped": {},
            "records_rejected": 0,
            "errors_by_type": {},
        }

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"jobmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

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

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_score(self, policy: str, skipped=()):
        """Record one computed score and the criteria it skipped."""
        with self._lock:
            self.metrics["scores_computed"] += 1
            by_policy = self.metrics["scores_by_policy"]
            by_policy[policy] = by_policy.get(policy, 0) + 1
            for name in skipped:
                key = f"{policy}.{name}"
                self.metrics["criteria_skipped"][key] = self.metrics["criteria_skipped"].get(key, 0) + 1

    def record_rejection(self, error_type: str):
        """Record a record that failed validation or import."""
        with self._lock:
            self.metrics["records_rejected"] += 1
            if error_type not in self.metrics["errors_by_type"]:
                self.metrics["errors_by_type"][error_type] = 0
            self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics."""
        with self._lock:
            return json.loads(json.dumps(self.metrics))

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Scoring Session Metrics ===")
        self.info(f"Scores computed: {metrics['scores_computed']}")
        for policy, count in metrics["scores_by_policy"].items():
            self.info(f"  {policy}: {count}")

        if metrics["criteria_skipped"]:
            self.info("Skipped criteria:")
            for key, count in sorted(metrics["criteria_skipped"].items()):
                self.info(f"  {key}: {count}")

        if metrics["records_rejected"]:
            self.info(f"Records rejected: {metrics['records_rejected']}")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "jobmatch", **kwargs) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Settings not passed explicitly come from JOBMATCH_* environment
    variables (see env.Settings).

    Args:
        name: Logger name
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        settings = Settings.from_env()
        kwargs.setdefault("level", settings.log_level)
        kwargs.setdefault("log_dir", settings.log_dir)
        kwargs.setdefault("enable_file", settings.log_to_file)
        _global_logger = StructuredLogger(name=name, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
