import os
import logging
import sys

import structlog

logger = logging.getLogger("securevote")


def get_logger(name: str = "securevote"):
    """Get a structured logger instance

    Usage:
        logger = get_logger(__name__)
        logger = logger.bind(component="ledger")
        logger.info("ballot cast", election_id=election_id, position_id=position_id)

    Args:
        name: Logger name (typically __name__ or module path)

    Returns:
        Structured logger instance with context binding support
    """
    return structlog.get_logger(name)


class Config:
    """Configuration management for securevote"""

    def __init__(self):
        # Database configuration - SQLite, single file
        local_path = os.path.join(os.getcwd(), "data")
        self.DB_DIR = os.getenv("SECUREVOTE_DB_DIR", local_path)
        self.DB_PATH = os.getenv("SECUREVOTE_DB_PATH", f"{self.DB_DIR}/securevote.db")
        # Seconds a writer waits on another connection's write lock
        self.DB_BUSY_TIMEOUT = float(os.getenv("SECUREVOTE_DB_BUSY_TIMEOUT", "30"))

        # API configuration
        self.API_HOST = os.getenv("SECUREVOTE_HOST", "0.0.0.0")
        self.API_PORT = int(os.getenv("SECUREVOTE_PORT", "8000"))
        self.DEBUG = os.getenv("SECUREVOTE_DEBUG", "false").lower() == "true"

        # Sessions
        self.JWT_SECRET = os.getenv("SECUREVOTE_JWT_SECRET")
        self.SESSION_HOURS = int(os.getenv("SECUREVOTE_SESSION_HOURS", "12"))
        self.COOKIE_SECURE = os.getenv("SECUREVOTE_COOKIE_SECURE", "true").lower() == "true"
        self.COOKIE_SAMESITE = os.getenv("SECUREVOTE_COOKIE_SAMESITE", "lax").lower()

        # CORS settings
        self.ALLOWED_ORIGINS = self._parse_origins(
            os.getenv(
                "SECUREVOTE_ALLOWED_ORIGINS",
                "http://localhost:3000,http://localhost:5173,http://localhost:5000,"
                "http://127.0.0.1:3000",
            )
        )

        # Features
        self.CHATBOT_ENABLED = os.getenv("SECUREVOTE_CHATBOT_ENABLED", "true").lower() == "true"
        self.MAX_CHAT_MESSAGE_LENGTH = int(os.getenv("SECUREVOTE_MAX_CHAT_MESSAGE_LENGTH", "500"))

        # Logging
        self.LOG_LEVEL = os.getenv("SECUREVOTE_LOG_LEVEL", "INFO").upper()

        self._validate()

    def _parse_origins(self, origins_str: str) -> list:
        """Parse comma-separated origins string"""
        if not origins_str:
            return []
        return [origin.strip() for origin in origins_str.split(",") if origin.strip()]

    def _validate(self):
        """Validate configuration values"""
        if self.API_PORT <= 0 or self.API_PORT > 65535:
            raise ValueError("SECUREVOTE_PORT must be between 1 and 65535")

        if self.DB_BUSY_TIMEOUT < 0:
            raise ValueError("SECUREVOTE_DB_BUSY_TIMEOUT must not be negative")

        if self.SESSION_HOURS <= 0:
            raise ValueError("SECUREVOTE_SESSION_HOURS must be positive")

        if self.COOKIE_SAMESITE not in ("lax", "strict", "none"):
            raise ValueError("SECUREVOTE_COOKIE_SAMESITE must be one of lax, strict, none")

        if self.MAX_CHAT_MESSAGE_LENGTH <= 0:
            raise ValueError("SECUREVOTE_MAX_CHAT_MESSAGE_LENGTH must be positive")

        if not self.JWT_SECRET:
            logger.warning("No JWT secret configured - sessions will not survive a restart")

    def ensure_data_dir(self) -> str:
        """Lazily create data directory if it doesn't exist

        Returns:
            Path to the data directory
        """
        if not os.path.exists(self.DB_DIR):
            logger.info("creating data directory %s", self.DB_DIR)
            os.makedirs(self.DB_DIR, exist_ok=True)
        return self.DB_DIR

    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.DEBUG or "localhost" in str(self.ALLOWED_ORIGINS)

    def summary(self) -> dict:
        """Get a summary of current configuration (excluding secrets)"""
        return {
            "db_path": self.DB_PATH,
            "db_busy_timeout": self.DB_BUSY_TIMEOUT,
            "api_host": self.API_HOST,
            "api_port": self.API_PORT,
            "debug": self.DEBUG,
            "session_hours": self.SESSION_HOURS,
            "cookie_secure": self.COOKIE_SECURE,
            "allowed_origins_count": len(self.ALLOWED_ORIGINS),
            "chatbot_enabled": self.CHATBOT_ENABLED,
            "log_level": self.LOG_LEVEL,
            "has_jwt_secret": bool(self.JWT_SECRET),
            "is_development": self.is_development(),
        }


def configure_structlog(is_development: bool = False, log_level: str = "INFO"):
    """Configure structlog for structured logging

    Args:
        is_development: If True, use human-readable console output. If False, use JSON.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # No timestamp processor - the process supervisor stamps lines
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_development:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"], drop_missing=True),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )


# Global configuration instance
config = Config()

configure_structlog(
    is_development=config.is_development(),
    log_level=config.LOG_LEVEL
)
