"""
Shared helpers for the EMG pointer client.
"""

from .logging_cfg import get_logger, configure_logging

__all__ = ["get_logger", "configure_logging"]
