"""
User Management Use Cases
"""

from .list_users_use_case import ListUsersUseCase

__all__ = [
    "ListUsersUseCase",
]
