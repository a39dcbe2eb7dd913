"""
Extraction settings.
Reads from environment variables and .env file.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Extraction settings."""

    # Camptocamp
    C2C_API_URL: str = "https://api.camptocamp.org"
    C2C_SITE_URL: str = "https://www.camptocamp.org"
    C2C_USERNAME: str | None = None
    C2C_PASSWORD: str | None = None

    # Comma-separated, most preferred first
    PREFERRED_LANGS: str = "fr,en,it,es,de,ca,eu"

    # Fetching
    PAGE_SIZE: int = 30
    REQUEST_TIMEOUT: float = 30.0

    # Output
    DEFAULT_OUTPUT: str = "xreports.csv"

    # Legacy document store
    DATABASE_URL: str | None = None
    DOCUMENT_TABLE: str = "xreport"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def preferred_langs(self) -> tuple[str, ...]:
        """Language preference order for locale selection."""
        return tuple(
            lang.strip() for lang in self.PREFERRED_LANGS.split(",") if lang.strip()
        )


# Global settings instance
settings = Settings()
