import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

class Settings:
    ENV: str = os.getenv("ENV", "local")

    # Database
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", 20))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", 10))

    # JWT / Security
    SECRET_KEY: str = os.getenv("SECRET_KEY")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60))

    # Admin
    ADMIN_PRINCIPAL: Optional[str] = os.getenv("ADMIN_PRINCIPAL")

    # App identity
    APP_NAME: str = os.getenv("APP_NAME", "Dentalbook")

    # CORS
    BACKEND_CORS_ORIGINS: Optional[str] = os.getenv("BACKEND_CORS_ORIGINS")

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "True").lower() == "true"
    RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", 100))
    RATE_LIMIT_PERIOD_SECONDS: int = int(os.getenv("RATE_LIMIT_PERIOD_SECONDS", 60))

    # Redis
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    CACHE_ENABLED: bool = os.getenv("CACHE_ENABLED", "True").lower() == "true"
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", 300))

    # Clinic
    DEFAULT_CLINIC_OPEN: bool = os.getenv("DEFAULT_CLINIC_OPEN", "True").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Booking client
    BACKEND_URL: str = os.getenv("BACKEND_URL", "http://127.0.0.1:8000")
    BOOKING_MAX_RETRIES: int = int(os.getenv("BOOKING_MAX_RETRIES", 3))
    BOOKING_ATTEMPT_TIMEOUT_SECONDS: float = float(os.getenv("BOOKING_ATTEMPT_TIMEOUT_SECONDS", 30))
    BOOKING_SUCCESS_DISPLAY_SECONDS: float = float(os.getenv("BOOKING_SUCCESS_DISPLAY_SECONDS", 3))
    NETWORK_CHECK_TIMEOUT_SECONDS: float = float(os.getenv("NETWORK_CHECK_TIMEOUT_SECONDS", 3))



settings = Settings()
