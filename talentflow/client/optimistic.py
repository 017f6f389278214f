"""乐观更新

一次乐观更新的完整流程:

    on_mutate    (同步) 取消该查询进行中的请求 -> 快照 -> 立即修改缓存
    mutation     (异步) 发出请求
    on_error     整体恢复快照，提示用户，记录错误种类
    on_success   成功提示
    on_settled   无论成败都后台重新获取，最终以服务端数据为准

嵌套: 前一个操作未完成时发起新操作，新操作从当时（可能仍是乐观的）缓存取快照，
回滚只恢复到"这一次操作之前"的状态。

使用示例:
    class RenameJob(OptimisticMutation):
        error_message = "Failed to rename job."

        def apply_optimistic(self, current, variables):
            ...

        async def mutation(self, variables):
            return await self.api.update_job(variables["id"], title=variables["title"])

    result = await RenameJob(api, cache, ("jobs",)).mutate({"id": 1, "title": "New"})
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from talentflow.log import client_logger
from .api_client import ApiError, TalentFlowClient
from .notifier import Notifier, ToastNotifier
from .query_cache import QueryCache, QueryKey

V = TypeVar("V")


@dataclass
class MutationContext:
    """on_mutate 产生的上下文"""
    previous: Any = None
    applied: bool = False


@dataclass
class MutationResult:
    """一次乐观更新的结果

    属性:
        ok: 请求是否成功
        data: 成功时的响应数据
        error: 失败时的异常
        rolled_back: 是否已恢复快照
        optimistic_applied: 是否做了乐观修改
        refetch: on_settled 发起的后台重新获取任务
    """
    ok: bool
    data: Any = None
    error: Optional[BaseException] = None
    rolled_back: bool = False
    optimistic_applied: bool = False
    refetch: Optional[asyncio.Task] = None


class OptimisticMutation(Generic[V]):
    """乐观更新基类

    子类实现 apply_optimistic 与 mutation，按需设置提示文案。

    Args:
        api: API 客户端
        cache: 查询缓存
        query_key: 受影响的查询键
        notifier: 提示，默认 ToastNotifier()
    """

    success_message: Optional[str] = None
    error_message: str = "Operation failed. Reverting change."

    def __init__(
        self,
        api: TalentFlowClient,
        cache: QueryCache,
        query_key: QueryKey,
        notifier: Optional[Notifier] = None,
    ):
        self.api = api
        self.cache = cache
        self.query_key = query_key
        self.notifier = notifier or ToastNotifier()

    # ==================== 子类实现 ====================

    def apply_optimistic(self, current: Any, variables: V) -> Optional[Any]:
        """根据当前缓存计算乐观结果

        返回新值（不要原地修改 current）；返回 None 表示不做乐观修改。
        """
        return None

    async def mutation(self, variables: V) -> Any:
        raise NotImplementedError

    # ==================== 生命周期 ====================

    def on_mutate(self, variables: V) -> MutationContext:
        self.cache.cancel_queries(self.query_key)
        previous = self.cache.snapshot(self.query_key)

        optimistic = None
        if previous is not None:
            optimistic = self.apply_optimistic(self.cache.get_query_data(self.query_key), variables)
        if optimistic is not None:
            self.cache.set_query_data(self.query_key, optimistic)

        return MutationContext(previous=previous, applied=optimistic is not None)

    def on_error(self, error: BaseException, variables: V, context: MutationContext) -> bool:
        """恢复快照并提示，返回是否做了恢复"""
        rolled_back = False
        if context.previous is not None:
            self.cache.set_query_data(self.query_key, context.previous)
            rolled_back = True

        kind = error.kind if isinstance(error, ApiError) else type(error).__name__
        client_logger.warning(
            f"{self.__class__.__name__} 失败 [{kind}]，已回滚: {error}",
            extra={"error_kind": kind},
        )
        self.notifier.error(self.error_message)
        return rolled_back

    def on_success(self, data: Any, variables: V, context: MutationContext) -> None:
        if self.success_message:
            self.notifier.success(self.success_message)

    def on_settled(
        self,
        data: Any,
        error: Optional[BaseException],
        variables: V,
        context: MutationContext,
    ) -> Optional[asyncio.Task]:
        return self.cache.invalidate_queries(self.query_key)

    # ==================== 执行 ====================

    def start(self, variables: V) -> "asyncio.Task[MutationResult]":
        """同步完成乐观修改，返回执行请求的任务

        返回时缓存已经是乐观状态，适合在同一事件循环中紧接着发起下一次操作。
        """
        context = self.on_mutate(variables)
        return asyncio.get_running_loop().create_task(self._run(variables, context))

    async def mutate(self, variables: V) -> MutationResult:
        return await self.start(variables)

    async def _run(self, variables: V, context: MutationContext) -> MutationResult:
        try:
            data = await self.mutation(variables)
        except Exception as exc:
            rolled_back = self.on_error(exc, variables, context)
            refetch = self.on_settled(None, exc, variables, context)
            if not isinstance(exc, ApiError):
                raise
            return MutationResult(
                ok=False,
                error=exc,
                rolled_back=rolled_back,
                optimistic_applied=context.applied,
                refetch=refetch,
            )

        self.on_success(data, variables, context)
        refetch = self.on_settled(data, None, variables, context)
        return MutationResult(ok=True, data=data, optimistic_applied=context.applied, refetch=refetch)


__all__ = ["MutationContext", "MutationResult", "OptimisticMutation"]
