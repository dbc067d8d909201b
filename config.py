"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "*")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = False
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class GameConfig:
    """Match and room configuration."""

    hand_size: int = 4
    floor_size: int = 4
    room_id_length: int = 6
    # Seconds a room may wait for its second player before it is reaped
    waiting_ttl: int = field(
        default_factory=lambda: int(os.getenv("ROOM_WAITING_TTL", "1800"))
    )


@dataclass(frozen=True)
class NotifierConfig:
    """Operator notification (Telegram bot) configuration."""

    bot_token: str | None = field(default_factory=lambda: os.getenv("BOT_TOKEN"))
    operator_chat_id: str | None = field(
        default_factory=lambda: os.getenv("OPERATOR_CHAT_ID")
    )
    api_url: str = field(
        default_factory=lambda: os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
    )
    timeout: float = field(
        default_factory=lambda: float(os.getenv("NOTIFY_TIMEOUT", "5"))
    )

    @property
    def enabled(self) -> bool:
        """Notifications are sent only when both token and chat are set."""
        return bool(self.bot_token and self.operator_chat_id)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    game: GameConfig = field(default_factory=GameConfig)
    notifier: NotifierConfig = field(default_factory=NotifierConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)


# Global configuration instance
config = AppConfig()
