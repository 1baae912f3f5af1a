from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends

from record_access.applications.interfaces.dtos.user import CredentialCheck, CredentialSchema, UserPublic, UserSchema
from record_access.applications.use_cases.user.create_user import CreateUserUseCase
from record_access.applications.use_cases.user.get_user import GetUserUseCase
from record_access.applications.use_cases.user.validate_user import ValidateUserUseCase
from record_access.domain.models.query import NotFound
from record_access.domain.ports.repositories.user_repository import UserRepository
from record_access.infrastructure.config.dependencies import get_user_repository
from record_access.presentation.error_handlers import not_found_response

router = APIRouter(prefix="/users", tags=["users"])

UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]


@router.post("/", status_code=HTTPStatus.CREATED, response_model=UserPublic)
async def create_user(user: UserSchema, user_repository: UserRepositoryDep):
    use_case = CreateUserUseCase(user_repository)
    return await use_case.execute(user)


@router.post("/validate", response_model=CredentialCheck)
async def validate_user(credentials: CredentialSchema, user_repository: UserRepositoryDep):
    use_case = ValidateUserUseCase(user_repository)
    return await use_case.execute(credentials)


@router.get("/{user_id}", response_model=UserPublic)
async def read_user(user_id: int, user_repository: UserRepositoryDep):
    use_case = GetUserUseCase(user_repository)
    result = await use_case.execute(user_id)
    if isinstance(result, NotFound):
        return not_found_response(result)
    return result
