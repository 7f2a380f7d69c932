"""
Adapter configuration loaded from environment variables.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from authz_state.models.identity import Identity


class Settings(BaseSettings):
    """Adapter settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str = "mongodb://mongodb:27017"

    # Reserved identity used for intra-cluster authentication
    internal_user: str = "__system"
    internal_user_source: str = "local"

    # Logging
    log_level: str = "INFO"

    @property
    def internal_identity(self) -> Identity:
        """The internal system identity, never resolvable through the adapter."""
        return Identity(user=self.internal_user, db=self.internal_user_source)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
