"""
Use Cases

Organized into domain folders:
- auth/: Authentication flows
- users/: User management
"""

from .auth import (
    SignupUseCase,
    SignupCommand,
    LoginUseCase,
    AuthenticateUseCase,
    SendWelcomeEmailUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
    UpdatePasswordUseCase,
)
from .users import (
    ListUsersUseCase,
)

__all__ = [
    # Auth
    "SignupUseCase",
    "SignupCommand",
    "LoginUseCase",
    "AuthenticateUseCase",
    "SendWelcomeEmailUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "UpdatePasswordUseCase",
    # Users
    "ListUsersUseCase",
]
