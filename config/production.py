"""Production environment configuration."""

import os
from config.base import BaseConfig


class ProductionConfig(BaseConfig):
    """Configuration for production environment."""

    def _setup_environment(self):
        """Setup production-specific configuration."""
        self.debug = False

        # Never echo SQL in production
        self.database.echo = False

        os.environ.setdefault("LOG_LEVEL", "INFO")
