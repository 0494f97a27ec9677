from urllib.parse import quote_plus

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Full SQLAlchemy URL. When unset it is assembled from the db_* fields below.
    database_url: str | None = None
    db_driver: str = "postgresql+psycopg2"
    db_username: str | None = None
    db_password: str | None = None
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "course_goals"

    service_name: str = "goal-tracker-backend"
    log_level: str = "INFO"
    # Apache "combined" access log; empty value disables it
    access_log_path: str | None = "logs/access.log"

    cors_origins: list[str] = ["*"]

    # Allow empty env strings for optional fields
    @field_validator("database_url", "db_username", "db_password", "access_log_path", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        if v in ("", None, "null", "None"):
            return None
        return v

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        auth = ""
        if self.db_username:
            auth = quote_plus(self.db_username)
            if self.db_password:
                auth += ":" + quote_plus(self.db_password)
            auth += "@"
        return f"{self.db_driver}://{auth}{self.db_host}:{self.db_port}/{self.db_name}"


settings = Settings()
