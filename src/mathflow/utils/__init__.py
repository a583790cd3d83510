"""Utility modules for mathflow.

Provides:
- logger: get_logger for logging
"""

from mathflow.utils.logger import get_logger

__all__ = ["get_logger"]
