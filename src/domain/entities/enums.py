"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role of a user account"""

    user = "user"
    guide = "guide"
    lead_guide = "lead-guide"
    admin = "admin"
