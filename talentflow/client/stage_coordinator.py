"""看板阶段变更的乐观更新

候选人卡片拖到另一列时立即修改缓存中的阶段，失败时整体恢复。
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from .api_client import TalentFlowClient
from .notifier import Notifier
from .optimistic import OptimisticMutation
from .query_cache import QueryCache, QueryKey

CANDIDATES_QUERY_KEY: QueryKey = ("allCandidates",)


@dataclass(frozen=True)
class StageChange:
    candidate_id: int
    stage: str


class StageChangeCoordinator(OptimisticMutation[StageChange]):
    """候选人阶段变更

    使用示例:
        coordinator = StageChangeCoordinator(api, cache, notifier)
        await coordinator.load()
        result = await coordinator.mutate(StageChange(candidate_id=7, stage="tech"))
    """

    success_message = "Candidate stage updated!"
    error_message = "Failed to update stage. Reverting change."

    def __init__(
        self,
        api: TalentFlowClient,
        cache: QueryCache,
        notifier: Optional[Notifier] = None,
        query_key: QueryKey = CANDIDATES_QUERY_KEY,
    ):
        super().__init__(api, cache, query_key, notifier)

    async def load(self) -> Any:
        await self.cache.fetch_query(self.query_key, self.api.list_candidates)
        return self.cache.get_query_data(self.query_key)

    def apply_optimistic(self, current: Any, change: StageChange) -> Optional[List[Any]]:
        if not current or not any(candidate.get("id") == change.candidate_id for candidate in current):
            return None
        return [
            {**candidate, "stage": change.stage} if candidate.get("id") == change.candidate_id else candidate
            for candidate in current
        ]

    async def mutation(self, change: StageChange) -> Any:
        return await self.api.update_candidate_stage(change.candidate_id, change.stage)


__all__ = ["StageChange", "StageChangeCoordinator", "CANDIDATES_QUERY_KEY"]
