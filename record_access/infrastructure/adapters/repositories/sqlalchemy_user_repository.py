from typing import Optional, Union

from record_access.applications.query.atomic_creator import AtomicCreator
from record_access.applications.query.credential_validator import CredentialValidator
from record_access.applications.query.record_reader import RecordReader
from record_access.domain.models.creation import CreateResult
from record_access.domain.models.query import NotFound
from record_access.domain.models.user import Credential, NewUser, User
from record_access.domain.ports.repositories.record_store import RecordStore, Row
from record_access.domain.ports.repositories.user_repository import UserRepository
from record_access.infrastructure.persistence.schemas import USER_SCHEMA


class SQLAlchemyUserRepository(UserRepository):
    def __init__(
        self,
        store: RecordStore,
        username_max_length: int = 64,
        password_hash_max_length: int = 256,
        timeout: Optional[float] = None,
    ):
        self.store = store
        self.reader = RecordReader(store, USER_SCHEMA, timeout=timeout)
        self.validator = CredentialValidator(
            store,
            USER_SCHEMA,
            username_max_length=username_max_length,
            secret_max_length=password_hash_max_length,
            timeout=timeout,
        )
        self.creator = AtomicCreator(store, USER_SCHEMA, timeout=timeout)

    def _to_domain(self, row: Row) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            created_date=row["created_date"],
            is_active=row["is_active"],
            role=row["role"],
        )

    async def get_by_id(self, user_id: int) -> Union[User, NotFound]:
        row = await self.reader.get_by_id(user_id)
        return row if isinstance(row, NotFound) else self._to_domain(row)

    async def validate_credentials(self, credential: Credential) -> bool:
        return await self.validator.validate(credential.username, credential.password_hash)

    async def create(self, user: NewUser) -> CreateResult[User]:
        result = await self.creator.create(
            {
                "username": user.username,
                "email": user.email,
                "password": user.password_hash.get_secret_value(),
                "role": user.role,
            }
        )
        return CreateResult[User](record=self._to_domain(result.record), state=result.state)
