"""
Cache backends for rendered SVGs

Every backend stores a CacheEntry (bytes plus Last-Modified timestamp) per
key. Backends raise CacheStoreError on I/O trouble; the render pipeline
treats that as a miss.
"""
import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from collections import OrderedDict
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union

from svg_output.core.config import Settings
from svg_output.core.exceptions import CacheStoreError
from svg_output.models.render import CacheEntry

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class CacheStore(ABC):
    """Key/value store for rendered SVG entries"""

    name = "abstract"

    @abstractmethod
    def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    def load(self, key: str) -> Optional[CacheEntry]:
        """Entry for key, or None if it vanished since exists()"""
        pass

    @abstractmethod
    def save(self, key: str, entry: CacheEntry) -> None:
        pass

    def get_stats(self) -> Dict[str, Any]:
        return {"backend": self.name}


class NullCacheStore(CacheStore):
    """Cache that is never hit; used when caching is disabled"""

    name = "none"

    def exists(self, key: str) -> bool:
        return False

    def load(self, key: str) -> Optional[CacheEntry]:
        return None

    def save(self, key: str, entry: CacheEntry) -> None:
        return None


class MemoryCacheStore(CacheStore):
    """Thread-safe in-process LRU cache"""

    name = "memory"

    def __init__(self, max_items: int = 512):
        if max_items < 1:
            raise ValueError("max_items must be >= 1")
        self._max_items = int(max_items)
        self._lock = Lock()
        self._data: "OrderedDict[str, CacheEntry]" = OrderedDict()

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def load(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def save(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = entry
            while len(self._data) > self._max_items:
                self._data.popitem(last=False)

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            size = len(self._data)
        return {"backend": self.name, "cache_size": size, "cache_limit": self._max_items}


class FileCacheStore(CacheStore):
    """
    One <key>.svg body plus <key>.json metadata file per entry

    The metadata file is written last, so its presence marks a complete entry.
    """

    name = "file"

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _paths(self, key: str):
        if not _SAFE_KEY.match(key):
            raise CacheStoreError("Invalid cache key", metadata={"key": key})
        return self.directory / f"{key}.svg", self.directory / f"{key}.json"

    def exists(self, key: str) -> bool:
        _, meta_path = self._paths(key)
        return meta_path.is_file()

    def load(self, key: str) -> Optional[CacheEntry]:
        body_path, meta_path = self._paths(key)
        try:
            meta = json.loads(meta_path.read_text(encoding="utf-8"))
            content = body_path.read_bytes()
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            raise CacheStoreError(f"Cannot read cache entry: {e}", metadata={"key": key}) from e
        return CacheEntry(content=content, last_modified=int(meta.get("last_modified", 0)))

    def save(self, key: str, entry: CacheEntry) -> None:
        body_path, meta_path = self._paths(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            self._write_atomic(body_path, entry.content)
            self._write_atomic(
                meta_path,
                json.dumps({"last_modified": entry.last_modified, "size": len(entry.content)}).encode("utf-8"),
            )
        except OSError as e:
            raise CacheStoreError(f"Cannot write cache entry: {e}", metadata={"key": key}) from e

    def _write_atomic(self, path: Path, data: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=str(self.directory), prefix=".tmp_")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
            raise

    def get_stats(self) -> Dict[str, Any]:
        return {"backend": self.name, "directory": str(self.directory)}


def create_cache_store(settings: Settings) -> CacheStore:
    """Build the cache backend selected by settings.cache_backend"""
    if settings.cache_backend == "memory":
        return MemoryCacheStore(max_items=settings.cache_max_items)
    if settings.cache_backend == "file":
        return FileCacheStore(settings.cache_path)
    return NullCacheStore()
