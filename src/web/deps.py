"""Dependency injection for FastAPI routes."""

from functools import lru_cache

import structlog

from cli.config import get_db_path, load_config_model
from cli.config_models import MoodlogConfig
from journal.search import JournalSearch
from journal.storage import JournalStorage

logger = structlog.get_logger()


@lru_cache
def get_config() -> MoodlogConfig:
    """Load shared config (moodlog.yaml / ~/.moodlog/config.yaml)."""
    return load_config_model()


def get_storage() -> JournalStorage:
    return JournalStorage(get_db_path(get_config()))


def get_search() -> JournalSearch:
    return JournalSearch(get_storage())
