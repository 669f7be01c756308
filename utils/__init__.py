# utils/__init__.py
"""
Progress Tracker Utilities Package.
"""

from .logger import get_logger

__all__ = [
    'get_logger',
]
