from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.error import ServerError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import UserData, UserInfo, UserListResponse
from src.app.use_cases.users import ListUsersUseCase
from src.depends import get_current_user, get_unit_of_work, require_roles
from src.domain.entities import UserRole

router = APIRouter(prefix="/users", tags=["User"])


class MeResponse(BaseModel):
    """GET /users/me response payload"""

    status: str = "success"
    data: UserData


@router.get("/me", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(current_user: UserInfo = Depends(get_current_user)):
    """
    Current User

    Raises:
        - 401 Unauthorized: Not logged in, token invalid/expired, user gone or
          password changed since the token was issued
    """
    return MeResponse(data=UserData(user=current_user))


@router.get("", status_code=status.HTTP_200_OK, response_model=UserListResponse)
async def list_users(
    current_user: UserInfo = Depends(require_roles({UserRole.admin})),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    List Users (admin only)

    Raises:
        - 401 Unauthorized: Not logged in
        - 403 Forbidden: Role is not admin
    """
    result = await ListUsersUseCase(uow).execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value
