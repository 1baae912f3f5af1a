from typing import Union

from record_access.applications.interfaces.dtos.user import UserPublic
from record_access.domain.models.query import NotFound
from record_access.domain.ports.repositories.user_repository import UserRepository


class GetUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_id: int) -> Union[UserPublic, NotFound]:
        user = await self.user_repository.get_by_id(user_id)
        if isinstance(user, NotFound):
            return user

        return UserPublic(
            id=user.id,
            username=user.username,
            email=user.email,
            created_date=user.created_date,
            is_active=user.is_active,
            role=user.role,
        )
