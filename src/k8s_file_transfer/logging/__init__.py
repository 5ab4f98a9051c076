"""Logging configuration for k8s_file_transfer."""

from k8s_file_transfer.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
