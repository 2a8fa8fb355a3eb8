"""Development environment configuration."""

import os
from config.base import BaseConfig, DatabaseConfig


class DevelopmentConfig(BaseConfig):
    """Configuration for development environment."""

    def _setup_environment(self):
        """Setup development-specific configuration."""
        # Enable debug mode
        self.debug = True

        # Local SQLite file when no database is configured
        if not self.database.url:
            self.database = DatabaseConfig(
                url="sqlite:///./handover_dev.db",
                echo=self.database.echo,
            )

        # Allow local frontends in development
        if not self.api.allowed_origins:
            self.api.allowed_origins = [
                "http://localhost:3000",
                "http://localhost:5173",  # Vite dev server
                "http://127.0.0.1:3000",
                "http://127.0.0.1:5173",
            ]

        # Development logging
        os.environ.setdefault("LOG_LEVEL", "DEBUG")
