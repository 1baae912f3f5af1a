from record_access.applications.interfaces.dtos.user import CredentialCheck, CredentialSchema
from record_access.domain.models.user import Credential
from record_access.domain.ports.repositories.user_repository import UserRepository


class ValidateUserUseCase:
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository

    async def execute(self, credentials: CredentialSchema) -> CredentialCheck:
        credential = Credential(username=credentials.username, password_hash=credentials.password_hash)
        valid = await self.user_repository.validate_credentials(credential)
        return CredentialCheck(valid=valid)
