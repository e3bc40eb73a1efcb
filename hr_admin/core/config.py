from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./hr_admin.db"
    DATABASE_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Holiday sets never change at runtime, so memoizing them per year is safe
    HOLIDAY_CACHE_ENABLED: bool = True

    # Upper bound on business days a single booking may reserve
    MAX_BOOKING_DAYS: int = 60

    # Upper bound accepted by the end-date calculator endpoint (about ten years)
    MAX_CALENDAR_BUSINESS_DAYS: int = 2600

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
