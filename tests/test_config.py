"""Tests for environment-driven configuration and logging setup."""

import logging

from config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config,
)
from logging_config import configure_logging, get_logger_levels
from shared.types import Page, page_envelope


class TestGetConfig:

    def test_selects_class_by_name(self):
        assert isinstance(get_config("testing"), TestingConfig)
        assert isinstance(get_config("prod"), ProductionConfig)
        assert isinstance(get_config("dev"), DevelopmentConfig)

    def test_unknown_environment_falls_back_to_development(self):
        assert isinstance(get_config("staging"), DevelopmentConfig)

    def test_reads_environment_variable(self, monkeypatch):
        monkeypatch.setenv("HANDOVER_ENV", "production")

        assert get_config().is_production

    def test_testing_defaults(self):
        config = get_config("testing")

        assert config.database.url == "sqlite://"
        assert config.pagination.default_page_size == 5
        assert config.validate() == []

    def test_development_defaults_to_sqlite_file(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        assert get_config("development").database.url.startswith("sqlite:///")

    def test_production_requires_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)

        assert "DATABASE_URL is required in production" in get_config("production").validate()

    def test_page_size_overrides(self, monkeypatch):
        monkeypatch.setenv("HANDOVER_DEFAULT_PAGE_SIZE", "20")
        monkeypatch.setenv("HANDOVER_MAX_PAGE_SIZE", "10")

        config = get_config("production")

        assert config.pagination.default_page_size == 20
        assert any("HANDOVER_MAX_PAGE_SIZE" in e for e in config.validate())

    def test_invalid_integer_uses_default(self, monkeypatch):
        monkeypatch.setenv("HANDOVER_MAX_PAGE_SIZE", "lots")

        assert get_config("production").pagination.max_page_size == 100


class TestLogging:

    def test_component_levels(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("LOG_LEVEL_HANDOVER", "DEBUG")
        monkeypatch.setenv("LOG_LEVEL_SQL", "ERROR")

        configure_logging()
        levels = get_logger_levels()

        assert levels["services.application"] == "DEBUG"
        assert levels["repositories"] == "DEBUG"
        assert levels["sqlalchemy.engine"] == "ERROR"
        assert logging.getLogger("handover.startup").level == logging.INFO


class TestPage:

    def test_envelope_for_partial_last_page(self):
        page = Page(items=["a"], page=2, size=3, total_elements=7)

        assert page_envelope(page) == {
            "page": 2,
            "size": 3,
            "totalPage": 3,
            "totalElement": 7,
            "firstPage": False,
            "lastPage": True,
        }

    def test_empty_page(self):
        page = Page(items=[], page=0, size=10, total_elements=0)

        assert page.total_pages == 0
        assert page.is_first and page.is_last

    def test_map_keeps_totals(self):
        page = Page(items=[1, 2], page=0, size=2, total_elements=5).map(str)

        assert page.items == ["1", "2"]
        assert page.total_pages == 3
        assert not page.is_last
