from abc import ABC, abstractmethod
from typing import Union

from record_access.domain.models.creation import CreateResult
from record_access.domain.models.query import NotFound
from record_access.domain.models.user import Credential, NewUser, User


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: int) -> Union[User, NotFound]:
        pass

    @abstractmethod
    async def validate_credentials(self, credential: Credential) -> bool:
        pass

    @abstractmethod
    async def create(self, user: NewUser) -> CreateResult[User]:
        pass
