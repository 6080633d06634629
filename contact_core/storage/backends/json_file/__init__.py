"""
JSON file storage backend implementation.

This module provides the JSON file-based implementation of the contact
storage interface.
"""

from .json_file_storage import JsonFileContactStorage

__all__ = ['JsonFileContactStorage']
