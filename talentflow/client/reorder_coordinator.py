"""拖拽重排的乐观更新

缓存中的职位视图可以是列表页 {"jobs": [...], "totalCount": n}，也可以是职位列表本身。
乐观修改只移动元素位置，不改 order 字段，显示顺序由数组位置决定。

使用示例:
    cache = QueryCache()
    coordinator = ReorderCoordinator(api, cache)
    await coordinator.load(status="active")

    task = coordinator.begin_reorder(ReorderIntent(moved_id=1, reference_id=3))
    # 此时缓存已是乐观顺序
    result = await task
    await cache.wait_idle()
"""

import asyncio
from typing import Any, Dict, List, Optional

from talentflow.log import client_logger
from talentflow.services.reorder_handler import ReorderIntent
from talentflow.store import array_move
from .api_client import TalentFlowClient
from .notifier import Notifier
from .optimistic import MutationResult, OptimisticMutation
from .query_cache import QueryCache, QueryKey

JOBS_QUERY_KEY: QueryKey = ("jobs",)


def _items_of(view: Any) -> Optional[List[Dict[str, Any]]]:
    if isinstance(view, dict):
        return view.get("jobs")
    if isinstance(view, list):
        return view
    return None


class ReorderCoordinator(OptimisticMutation[ReorderIntent]):
    """职位拖拽重排

    Args:
        api: API 客户端
        cache: 查询缓存
        notifier: 提示
        query_key: 职位视图的查询键，默认 ("jobs",)
    """

    success_message = None
    error_message = "Failed to reorder jobs. Reverting change."

    def __init__(
        self,
        api: TalentFlowClient,
        cache: QueryCache,
        notifier: Optional[Notifier] = None,
        query_key: QueryKey = JOBS_QUERY_KEY,
    ):
        super().__init__(api, cache, query_key, notifier)

    async def load(self, **filters) -> Any:
        """登记查询函数并获取一次职位列表

        filters 透传给 list_jobs（status、search、tag、page），之后的重新获取沿用同样的条件。
        """
        async def fetch():
            return await self.api.list_jobs(**filters)

        await self.cache.fetch_query(self.query_key, fetch)
        return self.cache.get_query_data(self.query_key)

    def apply_optimistic(self, current: Any, intent: ReorderIntent) -> Optional[Any]:
        items = _items_of(current)
        if items is None:
            return None

        ids = [item.get("id") for item in items]
        if intent.moved_id not in ids or intent.reference_id not in ids:
            # 交给服务端返回 NotFoundError 走失败流程
            client_logger.warning(f"重排意图引用了视图中不存在的职位 {intent}，跳过乐观修改")
            return None

        moved = array_move(items, ids.index(intent.moved_id), ids.index(intent.reference_id))
        if isinstance(current, dict):
            return {**current, "jobs": moved}
        return moved

    async def mutation(self, intent: ReorderIntent) -> Any:
        return await self.api.reorder_job(intent.moved_id, intent.reference_id)

    def begin_reorder(self, intent: ReorderIntent) -> "asyncio.Task[MutationResult]":
        """立即应用乐观顺序并在后台发出重排请求"""
        client_logger.debug(f"begin_reorder {intent}")
        return self.start(intent)


__all__ = ["ReorderCoordinator", "JOBS_QUERY_KEY"]
