from typing import Optional, Union

from pydantic import SecretStr
from sqlalchemy import and_, func, select

from record_access.applications.query.entity_schema import EntitySchema
from record_access.applications.query.parameter_binder import ParameterBinder
from record_access.domain.models.parameter import ParameterSpec, ParamType
from record_access.domain.ports.repositories.record_store import RecordStore


class CredentialValidator:
    """Existence check on ``username`` + stored password hash.

    Returns only a boolean: an unknown username and a wrong hash for a known
    username are the same ``False``. Neither value is logged. Widths are
    enforced before anything is bound.
    """

    def __init__(
        self,
        store: RecordStore,
        schema: EntitySchema,
        username_field: str = "username",
        secret_field: str = "password",
        username_max_length: int = 64,
        secret_max_length: int = 256,
        timeout: Optional[float] = None,
    ):
        self.store = store
        self.schema = schema
        self.username_field = username_field
        self.secret_field = secret_field
        self.username_spec = ParameterSpec(type=ParamType.STRING, max_length=username_max_length)
        self.secret_spec = ParameterSpec(type=ParamType.STRING, max_length=secret_max_length)
        self.binder = ParameterBinder()
        self.timeout = timeout

    async def validate(self, username: str, password_hash: Union[str, SecretStr]) -> bool:
        if isinstance(password_hash, SecretStr):
            password_hash = password_hash.get_secret_value()

        username_param = self.binder.bind(self.username_field, username, self.username_spec)
        secret_param = self.binder.bind(self.secret_field, password_hash, self.secret_spec)

        statement = (
            select(func.count())
            .select_from(self.schema.table)
            .where(
                and_(
                    self.schema.readable_column(self.username_field) == username_param,
                    self.schema.secret_column(self.secret_field) == secret_param,
                )
            )
        )
        count = await self.store.fetch_scalar(statement, timeout=self.timeout)
        return bool(count) and count > 0
