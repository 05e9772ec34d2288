"""
Utility modules for the HTML tree.
"""

from html5_tree.utils.config import Config
from html5_tree.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
