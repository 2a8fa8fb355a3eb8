"""Testing environment configuration."""

from config.base import BaseConfig, DatabaseConfig, PaginationConfig


class TestingConfig(BaseConfig):
    """Configuration for testing environment."""

    def _setup_environment(self):
        """Setup testing-specific configuration."""
        # Enable debug mode for tests
        self.debug = True

        # In-memory database unless a test database is given explicitly
        if not self.database.url:
            self.database = DatabaseConfig(url="sqlite://")

        # Small pages keep pagination tests short
        self.pagination = PaginationConfig(default_page_size=5, max_page_size=50)

        # Permissive CORS for tests
        self.api.allowed_origins = ["*"]
