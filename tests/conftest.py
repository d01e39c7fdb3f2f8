"""Test configuration for Content Search Hub."""

import pytest

from content_search_hub.backends.memory import InMemoryItemRepository
from content_search_hub.config.settings import AppSettings, get_settings
from content_search_hub.models.hits import ContentItem, Hit


def make_hit(item_id="item-1", language="en", version=1, **kwargs) -> Hit:
    """Build a hit with sensible display defaults."""
    kwargs.setdefault("name", f"name-{item_id}")
    kwargs.setdefault("content", f"content of {item_id}")
    kwargs.setdefault("uri", f"cms://master/{item_id}?lang={language}&ver={version}")
    return Hit(item_id=item_id, language=language, version=version, **kwargs)


@pytest.fixture
def hit_factory():
    """Factory fixture for hits."""
    return make_hit


@pytest.fixture
def repository():
    """Repository with a small tree, one hidden branch and one icon."""
    return InMemoryItemRepository(
        [
            ContentItem(item_id="root", name="root"),
            ContentItem(item_id="home", name="home", parent_id="root"),
            ContentItem(
                item_id="item-1",
                name="item-1",
                parent_id="home",
                icon="item-icon.png",
            ),
            ContentItem(item_id="item-2", name="item-2", parent_id="home"),
            ContentItem(item_id="system", name="system", parent_id="root", hidden=True),
            ContentItem(item_id="templates", name="templates", parent_id="system"),
            ContentItem(item_id="item-3", name="item-3", parent_id="templates"),
        ]
    )


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return AppSettings(_env_file=None, formatter={"default_icon": "default.png"})


@pytest.fixture
def mock_env(monkeypatch):
    """Mock environment variables for testing."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("BUCKETS_ENABLED", "false")
    monkeypatch.setenv("MERGER__DEFAULT_LIMIT", "25")
    monkeypatch.setenv("FORMATTER__DEFAULT_ICON", "env-icon.png")

    # Clear lru_cache to ensure it picks up the new env vars
    get_settings.cache_clear()

    yield

    # Clean up
    get_settings.cache_clear()
