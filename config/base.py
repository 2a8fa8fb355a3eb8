"""
Base configuration class with all application settings.

Every setting is read from the environment once, grouped into small
dataclasses, and exposed through a single `BaseConfig` instance.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _get_bool(name: str, default: bool) -> bool:
    """Parse boolean environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    v = val.strip().lower()
    return v in ("1", "true", "yes", "on")


def _get_int(name: str, default: int) -> int:
    """Parse integer environment variable."""
    try:
        return int(os.getenv(name, str(default)))
    except (ValueError, TypeError):
        return default


def _get_list(name: str, default: List[str] = None, separator: str = ",") -> List[str]:
    """Parse comma-separated list environment variable."""
    if default is None:
        default = []

    val = os.getenv(name, "")
    if not val.strip():
        return default

    return [item.strip() for item in val.split(separator) if item.strip()]


@dataclass
class DatabaseConfig:
    """Database connection configuration."""
    url: str = ""
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 40
    pool_timeout: int = 5
    pool_recycle: int = 1800

    @classmethod
    def from_env(cls) -> 'DatabaseConfig':
        return cls(
            url=os.getenv("DATABASE_URL", ""),
            echo=_get_bool("DB_ECHO", False),
            pool_size=_get_int("DB_POOL_SIZE", 20),
            max_overflow=_get_int("DB_MAX_OVERFLOW", 40),
            pool_timeout=_get_int("DB_POOL_TIMEOUT", 5),
            pool_recycle=_get_int("DB_POOL_RECYCLE", 1800),
        )


@dataclass
class PaginationConfig:
    """Paging limits for list endpoints."""
    default_page_size: int = 10
    max_page_size: int = 100

    @classmethod
    def from_env(cls) -> 'PaginationConfig':
        return cls(
            default_page_size=_get_int("HANDOVER_DEFAULT_PAGE_SIZE", 10),
            max_page_size=_get_int("HANDOVER_MAX_PAGE_SIZE", 100),
        )


@dataclass
class ApiConfig:
    """HTTP surface configuration."""
    prefix: str = "/api"
    allowed_origins: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> 'ApiConfig':
        return cls(
            prefix=os.getenv("API_PREFIX", "/api").rstrip("/"),
            allowed_origins=_get_list("CORS_ALLOWED_ORIGINS"),
        )


class BaseConfig:
    """
    Base configuration class that consolidates all application settings.
    """

    def __init__(self):
        # Core app configuration
        self.app_name: str = "Handover Notes"
        self.app_version: str = "1.0.0"
        self.debug: bool = _get_bool("DEBUG", False)
        self.environment: str = os.getenv("HANDOVER_ENV", "development")

        # Configuration groups
        self.database = DatabaseConfig.from_env()
        self.pagination = PaginationConfig.from_env()
        self.api = ApiConfig.from_env()

        # Initialize environment-specific settings
        self._setup_environment()

    def _setup_environment(self):
        """Setup environment-specific configuration. Override in subclasses."""
        pass

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() in ("development", "dev")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() in ("testing", "test")

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if self.is_production and not self.database.url:
            errors.append("DATABASE_URL is required in production")

        if self.pagination.default_page_size < 1:
            errors.append("HANDOVER_DEFAULT_PAGE_SIZE must be >= 1")

        if self.pagination.max_page_size < self.pagination.default_page_size:
            errors.append("HANDOVER_MAX_PAGE_SIZE must be >= HANDOVER_DEFAULT_PAGE_SIZE")

        return errors
