from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Store: "redis" for durable storage, "memory" for local dev / tests
    STORE_BACKEND: str = "redis"
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "bl:"

    # JWT, no default, MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 30
    JWT_REFRESH_EXPIRE_DAYS: int = 7

    # App
    APP_NAME: str = "Bolao Club"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev

    # Overdue-settlement scan
    SCAN_INTERVAL_SECONDS: float = 60.0

    # Admin provisioning, seeded at startup only when both are set
    ADMIN_SEED_EMAIL: str | None = None
    ADMIN_SEED_PASSWORD: str | None = None
    ADMIN_SEED_NAME: str = "Administrator"

    # Deposit instructions shown before an admin saves a config
    DEFAULT_PAYMENT_KEY: str = ""

    # Support assistant (Gemini generateContent REST API)
    SUPPORT_API_KEY: str | None = None
    SUPPORT_API_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    SUPPORT_MODEL: str = "gemini-2.0-flash"
    SUPPORT_TIMEOUT_SECONDS: float = 15.0


settings = Settings()
