import pytest
import pytest_asyncio
from pydantic import SecretStr

from record_access.applications.query.credential_validator import CredentialValidator
from record_access.domain.exceptions import InvalidParameterError
from record_access.infrastructure.persistence.schemas import USER_SCHEMA

from .factories import user_factory

STORED_HASH = user_factory.create_user_data()["password_hash"]


class TestCredentialValidator:
    @pytest.fixture
    def validator(self, store):
        return CredentialValidator(store, USER_SCHEMA)

    @pytest_asyncio.fixture
    async def registered_user(self, engine):
        return await user_factory.insert_user(engine)

    @pytest.mark.asyncio
    async def test_matching_username_and_hash(self, validator, registered_user):
        assert await validator.validate("testuser", STORED_HASH) is True

    @pytest.mark.asyncio
    async def test_accepts_secret_str(self, validator, registered_user):
        assert await validator.validate("testuser", SecretStr(STORED_HASH)) is True

    @pytest.mark.asyncio
    async def test_wrong_hash_and_unknown_user_look_the_same(self, validator, registered_user):
        wrong_hash = await validator.validate("testuser", "0" * 64)
        unknown_user = await validator.validate("nobody", STORED_HASH)

        assert wrong_hash is False
        assert unknown_user is False

    @pytest.mark.asyncio
    async def test_quote_in_username_is_data(self, validator, registered_user):
        assert await validator.validate("testuser' OR '1'='1", STORED_HASH) is False
        assert await validator.validate("testuser", "' OR '1'='1") is False

    @pytest.mark.asyncio
    async def test_overlong_username_fails_before_the_store(self, mock_store):
        validator = CredentialValidator(mock_store, USER_SCHEMA, username_max_length=8)

        with pytest.raises(InvalidParameterError) as exc_info:
            await validator.validate("a" * 9, STORED_HASH)

        assert exc_info.value.parameter == "username"
        mock_store.fetch_scalar.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_overlong_hash_fails_without_echoing_it(self, mock_store):
        validator = CredentialValidator(mock_store, USER_SCHEMA, secret_max_length=16)
        secret = "s3cr3t" * 5

        with pytest.raises(InvalidParameterError) as exc_info:
            await validator.validate("testuser", secret)

        assert secret not in str(exc_info.value)
        mock_store.fetch_scalar.assert_not_awaited()
