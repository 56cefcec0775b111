"""
Logging configuration and utilities for the KDJ screener.
"""
from .config import configure_logging, get_logger, get_screen_logger

__all__ = ["configure_logging", "get_logger", "get_screen_logger"]
