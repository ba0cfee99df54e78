"""
This module provides tools for introspecting the properties of classes.
"""
from .reflection import TypeDescriptor, SqlAlchemyPropertyDescriptor

__all__ = [
    "TypeDescriptor",
    "SqlAlchemyPropertyDescriptor"
]
