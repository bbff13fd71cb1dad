from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "congregation-registry"
    LOG_LEVEL: str = "INFO"

    JWT_SECRET: str = "change_me_jwt"
    JWT_TTL_MINUTES: int = 240

    CORS_ORIGINS: str = "http://localhost:3000"

    DATABASE_URL: str

    # Paging defaults for list endpoints; malformed page/limit input falls back to these.
    QUERY_DEFAULT_LIMIT: int = 1000
    QUERY_DEFAULT_PAGE: int = 1
    QUERY_MAX_LIMIT: int = 10000

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
