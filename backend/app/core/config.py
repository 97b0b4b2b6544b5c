from pydantic_settings import BaseSettings
from typing import List, Any
import json


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "PitchSite API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    API_PREFIX: str = "/api"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3001

    # ==========================================
    # Authentication
    # ==========================================
    APP_PASSWORD: str = "pitch"
    JWT_SECRET_KEY: str = "CHANGE_ME"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours
    BCRYPT_ROUNDS: int = 12

    # ==========================================
    # Document store (MongoDB)
    # ==========================================
    MONGODB_URI: str = ""
    DB_NAME: str = "pitchsite"
    PITCH_DECK_COLLECTION: str = "pitchDecks"
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = 5000

    # ==========================================
    # Claude AI
    # ==========================================
    ANTHROPIC_API_KEY: str = ""
    ANTHROPIC_BASE_URL: str = ""  # Empty means use default Anthropic URL
    CLAUDE_MODEL: str = "claude-3-5-haiku-20241022"
    CLAUDE_MAX_TOKENS: int = 2048
    CLAUDE_TEMPERATURE: float = 0.7
    CLAUDE_REQUEST_TIMEOUT: int = 120
    CLAUDE_CONNECT_TIMEOUT: int = 30
    CLAUDE_MAX_RETRIES: int = 2
    CLAUDE_RETRY_BASE_DELAY: float = 1.0  # seconds
    CLAUDE_RETRY_MAX_DELAY: float = 10.0  # seconds
    USE_FALLBACK_CONTENT: bool = False

    # ==========================================
    # Pitch decks
    # ==========================================
    CLIENT_URL: str = "http://localhost:5173"
    DEFAULT_EXPIRATION_DAYS: int = 30
    MAX_EXPIRATION_DAYS: int = 365
    SHARE_ID_LENGTH: int = 6
    SHARE_ID_MAX_ATTEMPTS: int = 10

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:5173,http://localhost:3000,http://127.0.0.1:5173,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_PER_MINUTE: int = 60

    # ==========================================
    # Requests
    # ==========================================
    MAX_REQUEST_SIZE: int = 1048576  # 1MB

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def ai_enabled(self) -> bool:
        """AI generation is attempted only with a key and without the fallback override"""
        return bool(self.ANTHROPIC_API_KEY.strip()) and not self.USE_FALLBACK_CONTENT

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


def validate_settings(cfg: "Settings") -> tuple:
    """
    Check the settings the service cannot run without.

    Returns:
        (errors, warnings) - lists of human readable messages
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not cfg.MONGODB_URI:
        errors.append("MONGODB_URI is not set")

    if cfg.is_production:
        if not cfg.JWT_SECRET_KEY or cfg.JWT_SECRET_KEY == "CHANGE_ME":
            errors.append("JWT_SECRET_KEY is not set or using default value")
        if cfg.APP_PASSWORD == "pitch":
            errors.append("APP_PASSWORD is using the default value")
    elif cfg.JWT_SECRET_KEY == "CHANGE_ME":
        warnings.append("JWT_SECRET_KEY is using the default value")

    if not cfg.ANTHROPIC_API_KEY:
        warnings.append("ANTHROPIC_API_KEY not set - fallback content will be served")
    elif cfg.USE_FALLBACK_CONTENT:
        warnings.append("USE_FALLBACK_CONTENT is on - AI generation disabled")

    if cfg.DEFAULT_EXPIRATION_DAYS > cfg.MAX_EXPIRATION_DAYS:
        errors.append("DEFAULT_EXPIRATION_DAYS exceeds MAX_EXPIRATION_DAYS")

    return errors, warnings


settings = Settings()
