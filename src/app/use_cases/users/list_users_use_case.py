"""
List Users Use Case

Admin view of every account.
"""

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo, UserListData, UserListResponse
from src.libs.result import Result, Return


class ListUsersUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[UserListResponse]:
        async with self.uow:
            users = await self.uow.users.list_all()
            infos = [UserInfo.from_entity(user) for user in users]
            return Return.ok(
                UserListResponse(results=len(infos), data=UserListData(users=infos))
            )
