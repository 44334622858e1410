from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # ─────────── APP ───────────
    app_name: str = "Tender Service"
    environment: str = "dev"
    log_level: str = "INFO"
    server_address: str = "0.0.0.0:8080"

    # ─────────── API ───────────
    api_prefix: str = "/api"
    request_id_header: str = "X-Request-Id"
    default_page_limit: int = 5

    # ─────────── DATABASE ───────────
    # DATABASE_URL wins; otherwise it is assembled from the POSTGRES_* parts
    database_url: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_username: str = "postgres"
    postgres_password: str = ""
    postgres_database: str = "tender"

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_username}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_database}"
        )

    @property
    def server_host_port(self) -> tuple[str, int]:
        host, _, port = self.server_address.rpartition(":")
        return (host or "0.0.0.0"), int(port or 8080)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
