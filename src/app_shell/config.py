import logging
import os
from pathlib import Path

from src.adapters.memory_kv import InMemoryKeyValueStore
from src.adapters.sqlite_kv import create_sqlite_store
from src.core.ports.kv import KeyValueStorePort
from src.rules.models import Rules

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when operational requirements aren't met at startup."""

    def __init__(self, missing_env: list[str]) -> None:
        self.missing_env = missing_env
        super().__init__(f"Missing required environment variables: {', '.join(missing_env)}")


def validate_ops_rules(rules: Rules) -> None:
    """
    Validate operational requirements before startup.
    """
    missing = [name for name in rules.ops.required_env if name not in os.environ]
    if missing:
        raise ConfigError(missing)

    logger.info("Configuration validated.")


def create_store(rules: Rules) -> KeyValueStorePort:
    """Build the key-value store selected by rules.storage."""
    storage = rules.storage
    if storage.backend == "memory":
        logger.warning("Using in-memory store; nothing will be persisted")
        return InMemoryKeyValueStore()

    db_path = Path(storage.sqlite_path) if storage.sqlite_path else None
    store = create_sqlite_store(db_path, env_var=storage.data_dir_env)
    logger.info("Using SQLite store at %s", store.db_path)
    return store
