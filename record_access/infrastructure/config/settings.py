from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    STORE_TIMEOUT_SECONDS: float = 5.0
    MAX_PAGE_SIZE: int = 100

    # Bounded widths mirror the users table columns.
    USERNAME_MAX_LENGTH: int = 64
    PASSWORD_HASH_MAX_LENGTH: int = 256
