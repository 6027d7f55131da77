"""
Lookup store for cached CRD documents.

Provides a uniform ``lookup(key)`` over the Redis cache the indexer fills
and over a local directory tree (development and tests).
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

import redis

from crd_doc.domain.constants import (
    DEFAULT_REDIS_PORT,
    ENV_DATA_DIR,
    ENV_REDIS_DB,
    ENV_REDIS_HOST,
    ENV_REDIS_PORT,
)

logger = logging.getLogger(__name__)


class CRDStore(ABC):
    """Abstract key-value source of raw CRD and repository listing bytes."""

    @abstractmethod
    def lookup(self, key: str) -> bytes | None:
        """Return the raw bytes stored under ``key``, or None on a miss."""


class RedisStore(CRDStore):
    """Reads entries from Redis with ``GET``.

    Args:
        host: Redis host (``REDIS_HOST`` env or 'localhost').
        port: Redis port (``REDIS_PORT`` env or 6379).
        db: Redis database number (``REDIS_DB`` env or 0).
        client: Pre-built client; skips connection setup.
    """

    def __init__(self, host: str | None = None, port: int | None = None,
                 db: int | None = None, client=None):
        self.host = host or os.getenv(ENV_REDIS_HOST, 'localhost')
        self.port = port or int(os.getenv(ENV_REDIS_PORT, str(DEFAULT_REDIS_PORT)))
        self.db = db if db is not None else int(os.getenv(ENV_REDIS_DB, '0'))
        self._client = client if client is not None else redis.Redis(
            host=self.host,
            port=self.port,
            db=self.db,
            socket_timeout=5,
        )

    def lookup(self, key: str) -> bytes | None:
        value = self._client.get(key)
        if value is None:
            return None
        if isinstance(value, str):
            return value.encode('utf-8')
        return value


class LocalStore(CRDStore):
    """Reads entries from files under a directory.

    ``/`` in keys maps to sub-directories and each entry is stored as
    ``{key}{suffix}``, so a repository listing (``github.com/org/repo.json``)
    can sit beside the directory holding its documents.
    """

    def __init__(self, data_dir: str, suffix: str = '.json'):
        self._suffix = suffix
        self._root = Path(data_dir).resolve()
        if not self._root.is_dir():
            raise FileNotFoundError(f"Data directory not found: {self._root}")

    def _path(self, key: str) -> Path | None:
        path = (self._root / (key.strip('/') + self._suffix)).resolve()
        try:
            path.relative_to(self._root)
        except ValueError:
            logger.warning("Rejected key outside data directory: %s", key)
            return None
        return path

    def lookup(self, key: str) -> bytes | None:
        path = self._path(key)
        if path is None or not path.is_file():
            return None
        return path.read_bytes()


def store_from_env() -> CRDStore:
    """Build the store the environment asks for.

    ``CRD_DOC_DATA_DIR`` selects a LocalStore; otherwise Redis is used.
    """
    data_dir = os.getenv(ENV_DATA_DIR)
    if data_dir:
        logger.info("Using local data directory %s", data_dir)
        return LocalStore(data_dir)
    store = RedisStore()
    logger.info("Using Redis at %s:%d", store.host, store.port)
    return store
