"""
Contact Engine: file-backed persistence for contact records.
"""

__version__ = "0.1.0"
