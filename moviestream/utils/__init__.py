"""Shared utilities."""

from moviestream.utils.logger import setup_logger, setup_logging

__all__ = ["setup_logger", "setup_logging"]
