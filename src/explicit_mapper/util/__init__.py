"""
This module provides utility functions.
"""
from .logger import ConfigureLogger

__all__ = [
    "ConfigureLogger"
]
