from record_access.applications.interfaces.dtos.user import UserPublic, UserSchema
from record_access.domain.models.user import NewUser
from record_access.domain.ports.repositories.user_repository import UserRepository
from record_access.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class CreateUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, user_data: UserSchema) -> UserPublic:
        logger.info("Creating user")

        user = NewUser(
            username=user_data.username,
            email=str(user_data.email),
            password_hash=user_data.password_hash,
            role=user_data.role,
        )

        result = await self.user_repository.create(user)
        created = result.record

        logger.info("User created successfully: id=%s", created.id)

        return UserPublic(
            id=created.id,
            username=created.username,
            email=created.email,
            created_date=created.created_date,
            is_active=created.is_active,
            role=created.role,
        )
