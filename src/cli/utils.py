"""Shared CLI utilities."""


def get_components():
    """Initialize config, storage and search from the config file."""
    from cli.config import get_db_path, load_config_model
    from journal import JournalSearch, JournalStorage

    config = load_config_model()
    storage = JournalStorage(get_db_path(config))

    return {
        "config": config,
        "owner": config.owner,
        "storage": storage,
        "search": JournalSearch(storage),
    }


def parse_csv(value: str | None) -> list[str]:
    """Split a comma-separated option into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
