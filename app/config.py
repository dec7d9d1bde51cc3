"""Application Configuration"""

from decimal import Decimal, InvalidOperation
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from the environment (and ``.env`` when present)"""

    # Application
    APP_NAME: str = "CarePoint HMS Backend"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database (postgresql://...; rewritten for asyncpg in app.database)
    DATABASE_URL: str
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600

    # Tokens
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # CORS, comma separated (5173 = Vite dev server)
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    ALLOWED_METHODS: str = "GET,POST,PUT,DELETE,PATCH,OPTIONS"
    ALLOWED_HEADERS: str = "*"

    # Ledger: amounts are rounded half-up to CURRENCY_QUANTUM
    CURRENCY_QUANTUM: str = "0.01"
    CODE_RANDOM_LENGTH: int = 5
    BILL_SEARCH_LIMIT: int = 50

    # Login attempts per client address
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("ALLOWED_ORIGINS", "ALLOWED_METHODS")
    @classmethod
    def split_csv(cls, v: str) -> List[str]:
        return [item.strip() for item in v.split(",") if item.strip()]

    @field_validator("CURRENCY_QUANTUM")
    @classmethod
    def check_quantum(cls, v: str) -> str:
        try:
            quantum = Decimal(v)
        except InvalidOperation:
            raise ValueError("CURRENCY_QUANTUM must be a decimal such as 0.01")
        if quantum <= 0:
            raise ValueError("CURRENCY_QUANTUM must be positive")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.upper()

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def login_rate_limit(self) -> str:
        return f"{self.RATE_LIMIT_PER_MINUTE}/minute"


settings = Settings()
