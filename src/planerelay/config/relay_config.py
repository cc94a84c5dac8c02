"""
Configuration management for the relay server.
"""

import os
from typing import Optional
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from ..errors import ConfigurationError

# Load environment variables
load_dotenv()

DEFAULT_WINDOW_MS = 1500


class RelayConfig(BaseModel):
    """Main relay configuration."""

    # Required secrets
    webhook_secret: Optional[str] = Field(default=None)
    discord_webhook_url: Optional[str] = Field(default=None)

    # Correlation settings
    window_ms: int = Field(default=DEFAULT_WINDOW_MS, gt=0)

    # Downstream settings
    discord_timeout: float = Field(default=10.0)

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default="logs/relay.log")

    @classmethod
    def from_env(cls) -> "RelayConfig":
        """Create configuration from environment variables."""
        return cls(
            webhook_secret=os.getenv("WEBHOOK_SECRET"),
            discord_webhook_url=os.getenv("DISCORD_WEBHOOK"),
            window_ms=int(os.getenv("CORRELATION_WINDOW_MS", str(DEFAULT_WINDOW_MS))),
            discord_timeout=float(os.getenv("DISCORD_TIMEOUT", "10")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/relay.log") or None,
        )

    def ensure_required(self) -> None:
        """Raise ConfigurationError if a required secret is absent."""
        missing = []
        if not self.webhook_secret:
            missing.append("WEBHOOK_SECRET")
        if not self.discord_webhook_url:
            missing.append("DISCORD_WEBHOOK")
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                context={"missing": missing},
            )
