"""
Storage backend implementations for the contact engine.

This module contains concrete implementations of the contact storage
interface.
"""

from .json_file import JsonFileContactStorage

__all__ = ['JsonFileContactStorage']
