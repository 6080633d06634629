"""
Storage interfaces for the contact engine.

This module defines the abstract base class that all contact storage
implementations must implement.
"""

from .contact_storage_interface import ContactStorageInterface

__all__ = ['ContactStorageInterface']
