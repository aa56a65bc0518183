from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # JWT — no default, MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 30
    JWT_REFRESH_EXPIRE_DAYS: int = 7

    # App
    APP_NAME: str = "Classifieds Marketplace"
    ENVIRONMENT: str = "development"  # development | test | production
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # One-time codes
    VERIFICATION_CODE_LENGTH: int = 6
    MOBILE_CODE_TTL_MINUTES: int = 10
    RESET_CODE_TTL_MINUTES: int = 15
    RESET_TOKEN_TTL_MINUTES: int = 15

    # Local disclosure of undelivered mobile codes. Ignored when ENVIRONMENT=production.
    EXPOSE_DEV_CODES: bool = False

    # Delivery providers (empty key = provider disabled)
    FAST2SMS_API_URL: str = "https://www.fast2sms.com/dev/bulkV2"
    FAST2SMS_API_KEY: str = ""
    SENDGRID_API_URL: str = "https://api.sendgrid.com/v3/mail/send"
    SENDGRID_API_KEY: str = ""
    SENDGRID_FROM_EMAIL: str = "no-reply@classifieds.local"
    DELIVERY_TIMEOUT_SECONDS: float = 10.0

    # Promotion catalog
    SEED_DEFAULT_PLANS: bool = True

    @property
    def dev_code_disclosure_enabled(self) -> bool:
        return self.EXPOSE_DEV_CODES and self.ENVIRONMENT.lower() != "production"


settings = Settings()
