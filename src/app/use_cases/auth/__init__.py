"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .authenticate_use_case import AuthenticateUseCase
from .send_welcome_email_use_case import SendWelcomeEmailUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .update_password_use_case import UpdatePasswordUseCase
from .dtos import (
    SignupCommand,
    AuthResponse,
    UserData,
    UserInfo,
    UserListData,
    UserListResponse,
    ViewerData,
    ViewerResponse,
    MessageResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "AuthenticateUseCase",
    "SendWelcomeEmailUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "UpdatePasswordUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "AuthResponse",
    "UserListResponse",
    "ViewerResponse",
    "MessageResponse",
    # DTOs - Nested Models
    "UserData",
    "UserInfo",
    "UserListData",
    "ViewerData",
]
