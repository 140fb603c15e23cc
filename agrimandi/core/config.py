from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "agrimandi"
    API_PREFIX: str = ""

    DATABASE_URL: str = "sqlite:///./agrimandi.db"

    # Session cookie
    SECRET_KEY: str = "a-very-secret-key-for-agrimandi-app"  # Change this in production
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "agrimandi_session"
    SESSION_TTL_MINUTES: int = 60 * 24
    SESSION_COOKIE_SECURE: bool = False

    BCRYPT_ROUNDS: int = 12

    # Weather provider
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_URL: str = "https://api.openweathermap.org/data/2.5/weather"
    WEATHER_TIMEOUT_SECONDS: float = 5.0

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost", "http://localhost:3000"]

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    SEED_MANDI_PRICES: bool = True

    class Config:
        env_file = ".env"


settings = Settings()
