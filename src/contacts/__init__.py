"""
Contacts GraphQL API
CRUD operations over a single contacts table
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
