"""
Configuration Management using Pydantic Settings

Loads from environment variables with .env file support
Type-safe configuration with validation
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv
import logging
import sys

logger = logging.getLogger(__name__)


def load_env_file():
    """Load .env file from multiple possible locations"""
    possible_paths = [
        Path('.env'),
        Path(__file__).parent.parent / '.env',
        Path(__file__).parent.parent.parent / '.env',
    ]

    for path in possible_paths:
        if path.exists():
            load_dotenv(path)
            logger.debug(f"Loaded .env from: {path.absolute()}")
            return True

    logger.debug("No .env file found, using environment variables")
    return False

# Load .env before defining Settings
load_env_file()


class Settings(BaseSettings):

    """Application settings"""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path (None for stdout only)"
    )

    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )

    # ========================================================================
    # Hedging Configuration
    # ========================================================================

    hedge_config_path: Optional[Path] = Field(
        default=None,
        description="Override path to hedge_config.yaml (bundled file if unset)"
    )

    default_equity_hedge_pct: float = Field(
        default=50.0,
        description="Equity hedge ratio used when the caller does not supply one (0-100)"
    )

    # ========================================================================
    # Validators
    # ========================================================================

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator('default_equity_hedge_pct')
    @classmethod
    def validate_hedge_pct(cls, v):
        if not 0.0 <= v <= 100.0:
            raise ValueError("default_equity_hedge_pct must be between 0 and 100")
        return v

    @field_validator('log_file')
    @classmethod
    def ensure_path_exists(cls, v):
        if v:
            path = Path(v)
            if not path.parent.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
        return v


# ============================================================================
# Global Settings Instance
# ============================================================================

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get global settings instance (singleton pattern)

    Usage:
        from portfolio_hedger.config.settings import get_settings
        settings = get_settings()
        print(settings.log_level)
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings (useful for testing)"""
    global _settings
    _settings = Settings()
    return _settings


# ============================================================================
# Logging Configuration
# ============================================================================

def setup_logging(settings: Optional[Settings] = None):
    """
    Configure logging based on settings

    Usage:
        from portfolio_hedger.config.settings import setup_logging, get_settings
        setup_logging(get_settings())
    """
    if settings is None:
        settings = get_settings()

    formatter = logging.Formatter(settings.log_format)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(settings.log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file, encoding='utf-8')
        file_handler.setLevel(settings.log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug(f"Logging configured: level={settings.log_level}, file={settings.log_file}")
