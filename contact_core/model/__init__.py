"""
Data models for the contact engine.
"""

from .contact import Contact, generate_contact_id

__all__ = ["Contact", "generate_contact_id"]
