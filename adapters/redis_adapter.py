"""Redis storage adapter."""

from __future__ import annotations

import logging
from typing import Optional

import redis

from adapters.base import KVStore, Result
from common.utils import parse_bool

logger = logging.getLogger(__name__)


class RedisAdapter(KVStore):
    """Plain string keys plus a lexicographic sorted-set index for scans.

    Options:
        url: connection URL (default ``redis://localhost:6379/0``)
        prefix: namespace for benchmark keys (default ``kvbench:``)
        flush: delete previously indexed benchmark keys on init
    """

    name = "redis"

    def __init__(self):
        self.url = "redis://localhost:6379/0"
        self.prefix = "kvbench:"
        self._redis: Optional[redis.Redis] = None

    @property
    def index_key(self) -> str:
        return f"{self.prefix}__index__"

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def init(self, options: dict[str, str]) -> Result:
        self.url = options.get("url", self.url)
        self.prefix = options.get("prefix", self.prefix)
        try:
            flush = parse_bool(options.get("flush"), default=False)
        except ValueError as e:
            return Result.error(str(e))

        logger.info(f"Connecting to Redis at {self.url}")
        try:
            # The connection pool is shared safely by all worker threads
            self._redis = redis.Redis.from_url(self.url)
            self._redis.ping()
            if flush:
                self._flush()
        except redis.RedisError as e:
            logger.error(f"Failed to connect to Redis at {self.url}: {e}")
            return Result.error(str(e))

        logger.info("Connected to Redis successfully")
        return Result.success()

    def _flush(self) -> None:
        """Delete every key recorded in the benchmark index."""
        members = self._redis.zrange(self.index_key, 0, -1)
        pipe = self._redis.pipeline()
        for member in members:
            if isinstance(member, bytes):
                member = member.decode()
            pipe.delete(self._key(member))
        pipe.delete(self.index_key)
        pipe.execute()
        logger.info(f"Flushed {len(members)} benchmark keys")

    def put(self, key: str, value: str) -> Result:
        try:
            pipe = self._redis.pipeline()
            pipe.set(self._key(key), value)
            pipe.zadd(self.index_key, {key: 0})
            pipe.execute()
        except redis.RedisError as e:
            return Result.error(str(e))
        return Result.success()

    def get(self, key: str) -> Result:
        try:
            value = self._redis.get(self._key(key))
        except redis.RedisError as e:
            return Result.error(str(e))
        if value is None:
            return Result.not_found(key)
        return Result.success()

    def remove(self, key: str) -> Result:
        try:
            pipe = self._redis.pipeline()
            pipe.delete(self._key(key))
            pipe.zrem(self.index_key, key)
            deleted, _ = pipe.execute()
        except redis.RedisError as e:
            return Result.error(str(e))
        if not deleted:
            return Result.not_found(key)
        return Result.success()

    def scan(self, start: str, end: str) -> Result:
        try:
            members = self._redis.zrangebylex(self.index_key, f"[{start}", f"({end}")
            if members:
                keys = [
                    self._key(m.decode() if isinstance(m, bytes) else m)
                    for m in members
                ]
                self._redis.mget(keys)
        except redis.RedisError as e:
            return Result.error(str(e))
        logger.debug(f"scan {start}..{end} returned {len(members)} keys")
        return Result.success()

    def close(self) -> None:
        if self._redis is not None:
            self._redis.close()
            self._redis = None
            logger.info("Disconnected from Redis")
