"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dashboard API settings, read from the environment or a local .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Runtime
    ENV: str = "dev"  # dev | staging | prod
    VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    TESTING: bool = False  # disables rate limits

    # Database (postgresql+psycopg://... in deployments, sqlite:// for tests)
    DATABASE_URL: str
    DB_ECHO: bool = False

    # Sessions: HS256 JWT sent as Bearer header or httpOnly cookie
    JWT_SECRET: str = "change-this-in-production"
    JWT_SECRET_PREVIOUS: str = ""  # accepted for decoding only while rotating
    JWT_EXPIRES_HOURS: int = 24 * 7
    SESSION_COOKIE_NAME: str = "ngo_session"

    # Dashboard origins allowed to send credentials
    CORS_ORIGINS: str = "http://localhost:3000"

    SENTRY_DSN: str = ""

    # Requests per minute per client address
    RATE_LIMIT_AUTH: int = 5
    RATE_LIMIT_API: int = 60
    RATE_LIMIT_PUBLIC_SUBMIT: int = 20

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def jwt_secrets(self) -> list[str]:
        """Secrets tried when decoding, current one first."""
        return [s for s in (self.JWT_SECRET, self.JWT_SECRET_PREVIOUS) if s]

    @property
    def cookie_secure(self) -> bool:
        return self.ENV != "dev"


settings = Settings()
