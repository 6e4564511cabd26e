"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    """

    name: str
    email: str
    password: str
    password_confirm: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public user fields - never carries password or reset data"""

    id: str
    name: str
    email: str
    role: UserRole
    photo: str

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            photo=user.photo,
        )


class UserData(BaseModel):
    user: UserInfo


class AuthResponse(BaseModel):
    """Response for every use case that logs the user in"""

    status: str = "success"
    token: str
    data: UserData

    @classmethod
    def for_user(cls, user: User, token: str) -> "AuthResponse":
        return cls(token=token, data=UserData(user=UserInfo.from_entity(user)))


class UserListData(BaseModel):
    users: List[UserInfo]


class UserListResponse(BaseModel):
    status: str = "success"
    results: int
    data: UserListData


class ViewerData(BaseModel):
    user: Optional[UserInfo] = None


class ViewerResponse(BaseModel):
    """Soft-authenticated viewer of a page; user is None for anonymous visitors"""

    status: str = "success"
    data: ViewerData


class MessageResponse(BaseModel):
    """Response carrying only a status and a message"""

    status: str
    message: Optional[str] = None
