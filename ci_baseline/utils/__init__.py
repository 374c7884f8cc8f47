"""Utility modules for logging."""

from ci_baseline.utils.logging import ComponentLogger, get_logger, setup_logging

__all__ = ["setup_logging", "ComponentLogger", "get_logger"]
