from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from lingua.core.enums import RemovalPolicy
from lingua.domain.practice.dto import SchedulingSettingsSnapshot


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    DATABASE_URL: str = "sqlite:///./lingua.db"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Scheduler
    MIN_CARDS_FOR_MULTIPLE_CHOICE: int = 4
    INCORRECT_RETRY_HOURS: float = 4.0
    REMOVED_CARD_POLICY: RemovalPolicy = RemovalPolicy.incorrect

    def scheduling_snapshot(self) -> SchedulingSettingsSnapshot:
        return SchedulingSettingsSnapshot(retry_hours=self.INCORRECT_RETRY_HOURS)


settings = Settings()
