import logging
from typing import AbstractSet, Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import SessionTokenIssuer
from src.app.services.email_service import IEmailService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import AuthenticateUseCase, UserInfo
from src.domain.entities import UserRole
from src.libs.result import Error

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    return request.app.state.config


def get_token_issuer(request: Request) -> SessionTokenIssuer:
    return request.app.state.token_issuer


def get_email_service(request: Request) -> IEmailService:
    return request.app.state.email_service


def _unauthorized(message: str, code: str = "UNAUTHORIZED") -> ClientError:
    return ClientError(Error(code, message), status_code=status.HTTP_401_UNAUTHORIZED)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: SessionTokenIssuer = Depends(get_token_issuer),
) -> UserInfo:
    """
    Dependency protecting API routes.

    Accepts the session token from the Authorization bearer header or,
    failing that, from the session cookie.

    Returns:
        Public data of the authenticated user, also stored on request.state.user

    Raises:
        ClientError: 401 if the token is missing, invalid or expired, the user
        no longer exists, or the password changed after the token was issued
    """
    token = None
    if credentials is not None and credentials.credentials:
        token = credentials.credentials
    if not token:
        token = request.cookies.get(request.app.state.config.JWT_COOKIE_NAME)

    if not token:
        raise _unauthorized("Please login to get access!")

    result = await AuthenticateUseCase(uow, token_issuer).execute(token)
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)

    request.state.user = result.value
    return result.value


async def get_optional_user(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_issuer: SessionTokenIssuer = Depends(get_token_issuer),
) -> Optional[UserInfo]:
    """
    Soft authentication for user-facing pages.

    Runs the same checks as get_current_user on the session cookie, but any
    failure leaves the visitor anonymous instead of rejecting the request.
    """
    request.state.user = None
    token = request.cookies.get(request.app.state.config.JWT_COOKIE_NAME)
    if not token:
        return None

    result = await AuthenticateUseCase(uow, token_issuer).execute(token)
    if result.is_err():
        logger.debug(f"Soft authentication failed: {result.error.code}")
        return None

    request.state.user = result.value
    return result.value


def require_roles(allowed_roles: AbstractSet[UserRole]):
    """
    Build a dependency that admits only users whose role is in allowed_roles.

    Usage:
        Depends(require_roles({UserRole.admin, UserRole.lead_guide}))
    """
    allowed = frozenset(allowed_roles)

    async def check_role(current_user: UserInfo = Depends(get_current_user)) -> UserInfo:
        if current_user.role not in allowed:
            raise ClientError(
                Error("FORBIDDEN", "You don't have permission to perform this action."),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return current_user

    return check_role
