"""
Database module for the Contacts API
"""

from .connection import Database, create_database

__all__ = ["Database", "create_database"]
