"""缓存后端模块

为客户端查询缓存提供存储后端。
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from cachetools import LRUCache, TTLCache

from talentflow.log import get_logger

logger = get_logger("talentflow.client.cache")


@dataclass
class CacheStats:
    """缓存统计信息"""
    hits: int = 0
    misses: int = 0
    invalidations: int = 0

    @property
    def hit_rate(self) -> float:
        """命中率"""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def record_hit(self):
        self.hits += 1

    def record_miss(self):
        self.misses += 1

    def record_invalidation(self):
        self.invalidations += 1

    def reset(self):
        self.hits = 0
        self.misses = 0
        self.invalidations = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "invalidations": self.invalidations,
            "hit_rate": f"{self.hit_rate:.2%}",
        }


class CacheBackend(ABC):
    """缓存后端抽象基类"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """获取缓存值，不存在返回 None"""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """设置缓存值"""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """删除缓存"""

    @abstractmethod
    def clear(self) -> None:
        """清空所有缓存"""

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """获取统计信息"""


class MemoryBackend(CacheBackend):
    """内存缓存后端

    ttl 为 None（默认）时基于 cachetools.LRUCache，数据只会因超出 maxsize 被淘汰，
    不会自行过期。客户端查询缓存就是界面上展示的数据，必须使用这种模式。
    指定 ttl 时基于 cachetools.TTLCache，超过 ttl 秒未写入的条目被回收。

    使用示例:
        backend = MemoryBackend(maxsize=1000)
        backend.set('["jobs"]', {"jobs": [], "totalCount": 0})
        value = backend.get('["jobs"]')

        expiring = MemoryBackend(maxsize=100, ttl=60)
    """

    def __init__(
        self,
        maxsize: int = 1000,
        ttl: Optional[float] = None,
        enable_stats: bool = True,
        timer: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            maxsize: 最大缓存条目数
            ttl: 过期时间（秒），None 表示不过期
            enable_stats: 是否启用统计
            timer: TTLCache 使用的时钟，默认 time.monotonic
        """
        if ttl is None:
            self._cache = LRUCache(maxsize=maxsize)
        elif timer is None:
            self._cache = TTLCache(maxsize=maxsize, ttl=ttl)
        else:
            self._cache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)
        self._ttl = ttl
        self._maxsize = maxsize
        self._lock = threading.RLock()
        self._stats = CacheStats() if enable_stats else None

        logger.debug(f"MemoryBackend initialized: maxsize={maxsize}, ttl={ttl}")

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._cache.get(key)
            if self._stats:
                if value is None:
                    self._stats.record_miss()
                else:
                    self._stats.record_hit()
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._cache[key] = value

    def delete(self, key: str) -> bool:
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                if self._stats:
                    self._stats.record_invalidation()
                return True
            return False

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            if self._stats:
                self._stats.record_invalidation()
            logger.debug("MemoryBackend cleared")

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            stats = {
                "backend": "memory",
                "size": len(self._cache),
                "maxsize": self._maxsize,
                "ttl": self._ttl,
            }
            if self._stats:
                stats.update(self._stats.to_dict())
            return stats


__all__ = [
    "CacheStats",
    "CacheBackend",
    "MemoryBackend",
]
