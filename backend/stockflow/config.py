from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./stockflow.db"
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    RESET_DB: bool = False
    LOG_LEVEL: str = "INFO"

    # alerting
    DEFAULT_LOW_STOCK_THRESHOLD: int = 10
    AVERAGE_DAILY_SALES: float = Field(default=1.0, gt=0)
    SALE_LOG_REASON: str = "sale"

    # product creation
    SKU_LOCK_TIMEOUT_SECONDS: float = 10
    SKU_LOCK_DIR: Optional[str] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
