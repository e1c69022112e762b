"""Application configuration using pydantic-settings.

Values come from environment variables or a local .env file.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/lendlink.db",
        description="Database connection URL",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    public_base_url: Optional[str] = Field(
        default=None,
        description="Origin used in shareable links (defaults to the request origin)",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Transaction links
    # ======================
    tx_ttl_seconds: int = Field(
        default=900, gt=0, description="Seconds a link stays readable after creation"
    )

    # ======================
    # Chain
    # ======================
    chain_id: int = Field(default=11155111, description="Target chain ID (Sepolia)")
    explorer_url: str = Field(
        default="https://sepolia.etherscan.io", description="Block explorer base URL"
    )
    sepolia_rpc_url: str = Field(
        default="https://rpc.sepolia.org", description="Sepolia RPC URL for the Python client"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def ttl_minutes(self) -> int:
        """Link lifetime in whole minutes, for user-facing messages."""
        return max(1, self.tx_ttl_seconds // 60)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "public_base_url": self.public_base_url or "(request origin)",
            "database_url": self._redact_url(self.database_url),
            "tx_ttl_seconds": self.tx_ttl_seconds,
            "chain": {
                "chain_id": self.chain_id,
                "explorer": self.explorer_url,
                "rpc": self.sepolia_rpc_url,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact sensitive parts of database URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
