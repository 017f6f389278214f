"""查询缓存

客户端的查询结果缓存，每个客户端（或每个测试）持有独立实例。

协作式取消: 每个查询键带一个代号（generation）。cancel_queries 只把代号加一，
正在进行的请求不会被中断，但它完成时发现代号已过期，结果直接丢弃。
这样慢的旧请求不会覆盖刚写入的乐观数据。

使用示例:
    cache = QueryCache()

    await cache.fetch_query(("jobs",), lambda: api.list_jobs())
    cache.cancel_queries(("jobs",))                 # 进行中的请求结果将被丢弃
    previous = cache.snapshot(("jobs",))            # 深拷贝，用于回滚
    cache.set_query_data(("jobs",), lambda old: {...})
    task = cache.invalidate_queries(("jobs",))      # 后台重新获取
    await cache.wait_idle()
"""

import asyncio
import copy
import json
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional, Set, Tuple

from talentflow.log import get_logger
from .cache_backends import CacheBackend, CacheStats, MemoryBackend

logger = get_logger()

QueryKey = Tuple[Hashable, ...]
Fetcher = Callable[[], Awaitable[Any]]


class QueryCache:
    """查询缓存

    Args:
        backend: 存储后端，默认不过期的 MemoryBackend（缓存即界面数据）
    """

    def __init__(self, backend: Optional[CacheBackend] = None):
        self._backend = backend or MemoryBackend(maxsize=1000, enable_stats=False)
        self._generations: Dict[str, int] = {}
        self._fetchers: Dict[str, Fetcher] = {}
        self._tasks: Set[asyncio.Task] = set()
        self.stats = CacheStats()

    @staticmethod
    def _key(key: QueryKey) -> str:
        return json.dumps(list(key), default=str)

    # ==================== 读写 ====================

    def get_query_data(self, key: QueryKey) -> Optional[Any]:
        """获取缓存数据，不存在返回 None"""
        value = self._backend.get(self._key(key))
        if value is None:
            self.stats.record_miss()
        else:
            self.stats.record_hit()
        return value

    def set_query_data(self, key: QueryKey, value_or_updater: Any) -> Any:
        """写入缓存数据

        Args:
            key: 查询键
            value_or_updater: 新值，或接收旧值返回新值的函数

        Returns:
            写入后的值
        """
        if callable(value_or_updater):
            value = value_or_updater(self._backend.get(self._key(key)))
        else:
            value = value_or_updater
        self._backend.set(self._key(key), value)
        return value

    def snapshot(self, key: QueryKey) -> Optional[Any]:
        """当前数据的深拷贝，之后对缓存的修改不会影响快照"""
        return copy.deepcopy(self._backend.get(self._key(key)))

    def remove_queries(self, key: QueryKey) -> None:
        """删除缓存数据并使进行中的请求失效"""
        self.cancel_queries(key)
        self._backend.delete(self._key(key))

    # ==================== 代号与取消 ====================

    def generation(self, key: QueryKey) -> int:
        return self._generations.get(self._key(key), 0)

    def cancel_queries(self, key: QueryKey) -> int:
        """使该键上所有进行中的请求失效（结果到达时丢弃）

        Returns:
            新的代号
        """
        cache_key = self._key(key)
        self._generations[cache_key] = self._generations.get(cache_key, 0) + 1
        logger.debug(f"cancel_queries {cache_key} -> generation {self._generations[cache_key]}")
        return self._generations[cache_key]

    # ==================== 获取 ====================

    def register_fetcher(self, key: QueryKey, fetcher: Fetcher) -> None:
        """登记查询函数，invalidate_queries 时用它重新获取"""
        self._fetchers[self._key(key)] = fetcher

    async def fetch_query(
        self,
        key: QueryKey,
        fetcher: Optional[Fetcher] = None,
        generation: Optional[int] = None,
    ) -> bool:
        """执行查询并在代号未变时写入缓存

        Args:
            key: 查询键
            fetcher: 查询函数，提供时同时登记；为空时使用已登记的函数
            generation: 请求发起时的代号，默认取当前代号

        Returns:
            结果是否被写入缓存（代号过期时为 False）

        Raises:
            KeyError: 既没有传入也没有登记查询函数
        """
        cache_key = self._key(key)
        if fetcher is not None:
            self._fetchers[cache_key] = fetcher
        fetcher = self._fetchers.get(cache_key)
        if fetcher is None:
            raise KeyError(f"查询未登记: {cache_key}")

        started_generation = self.generation(key) if generation is None else generation
        data = await fetcher()

        if self.generation(key) != started_generation:
            logger.debug(f"丢弃过期的查询结果 {cache_key}（generation {started_generation}）")
            return False

        self._backend.set(cache_key, data)
        return True

    def invalidate_queries(self, key: QueryKey) -> Optional[asyncio.Task]:
        """标记数据过期并在后台重新获取

        先取消进行中的旧请求，再以当前代号发起新请求；
        之后任何 cancel_queries 都会让这次重新获取的结果作废。
        获取失败时保留旧数据并记录日志。

        Returns:
            后台任务；该键没有登记查询函数时返回 None
        """
        self.stats.record_invalidation()
        cache_key = self._key(key)
        if cache_key not in self._fetchers:
            logger.debug(f"invalidate_queries {cache_key}: 无登记的查询函数，跳过重新获取")
            return None

        generation = self.cancel_queries(key)
        task = asyncio.get_running_loop().create_task(self._refetch(key, generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _refetch(self, key: QueryKey, generation: int) -> bool:
        try:
            return await self.fetch_query(key, generation=generation)
        except Exception as exc:
            logger.warning(f"后台重新获取失败 {self._key(key)}，保留旧数据: {exc!r}")
            return False

    async def wait_idle(self) -> None:
        """等待所有后台重新获取完成"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def get_stats(self) -> Dict[str, Any]:
        stats = self.stats.to_dict()
        stats["pending_refetches"] = len(self._tasks)
        stats["backend"] = self._backend.get_stats()
        return stats


__all__ = ["QueryCache", "QueryKey", "Fetcher"]
