"""客户端

- TalentFlowClient / ApiError: 异步 API 客户端（httpx）
- QueryCache: 查询缓存，支持协作式取消与后台重新获取
- OptimisticMutation: 乐观更新基类
- ReorderCoordinator: 职位拖拽重排
- StageChangeCoordinator: 看板阶段变更
- AssessmentDraftStore: 测评编辑草稿
- ToastNotifier: 用户提示
"""

from .api_client import ApiError, TalentFlowClient, TRANSPORT_ERROR
from .assessment_draft import AssessmentDraftStore, QUESTION_TYPES, CHOICE_TYPES
from .cache_backends import CacheBackend, CacheStats, MemoryBackend
from .notifier import Notifier, Toast, ToastNotifier
from .optimistic import MutationContext, MutationResult, OptimisticMutation
from .query_cache import QueryCache, QueryKey
from .reorder_coordinator import ReorderCoordinator, JOBS_QUERY_KEY
from .stage_coordinator import StageChange, StageChangeCoordinator, CANDIDATES_QUERY_KEY

__all__ = [
    "ApiError",
    "TalentFlowClient",
    "TRANSPORT_ERROR",
    "AssessmentDraftStore",
    "QUESTION_TYPES",
    "CHOICE_TYPES",
    "CacheBackend",
    "CacheStats",
    "MemoryBackend",
    "Notifier",
    "Toast",
    "ToastNotifier",
    "MutationContext",
    "MutationResult",
    "OptimisticMutation",
    "QueryCache",
    "QueryKey",
    "ReorderCoordinator",
    "JOBS_QUERY_KEY",
    "StageChange",
    "StageChangeCoordinator",
    "CANDIDATES_QUERY_KEY",
]
