from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = Field(default="local", alias="APP_ENV")
    database_url: str = Field(default="sqlite:///./tv_channels.db", alias="DATABASE_URL")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")
    base_path: str = Field(default="", alias="BASE_PATH")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origin: str = Field(default="*", alias="CORS_ALLOW_ORIGIN")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )


settings = Settings()
