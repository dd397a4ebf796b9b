from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "onboarding-filters"
    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: str = "http://localhost:3000"

    DATABASE_URL: str

    # Requests without an explicit caller identity are scoped to this user.
    ANONYMOUS_USER_ID: str = "00000000-0000-0000-0000-000000000000"
    USER_ID_HEADER: str = "X-User-ID"

    APPLY_MAX_RECORDS: int = 10000

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
