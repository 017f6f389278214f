"""客户端测试公共 Fixtures

FakeJobsApi / FakeCandidatesApi 是内存中的"服务端"，可以:
- 挂起重排请求，按需逐个放行（模拟嵌套操作）
- 按调用顺序注入失败
- 用 list_gate 挂起列表查询（模拟慢的后台重新获取）
"""

import asyncio
import copy
from typing import Any, Dict, List, Optional

import pytest

from talentflow.client import ApiError, QueryCache, ToastNotifier
from talentflow.store import array_move


class FakeJobsApi:
    """内存职位服务端"""

    def __init__(self, count: int = 3):
        self.server: List[Dict[str, Any]] = [
            {"id": i, "title": f"Job {i}", "order": i} for i in range(1, count + 1)
        ]
        self.hold_reorders = False
        self.pending: List[asyncio.Future] = []
        self.failures: List[Optional[BaseException]] = []
        self.list_gate: Optional[asyncio.Event] = None
        self.list_calls = 0
        self.reorder_calls: List[tuple] = []

    def server_ids(self) -> List[int]:
        return [job["id"] for job in self.server]

    async def list_jobs(self, **filters) -> Dict[str, Any]:
        self.list_calls += 1
        snapshot = copy.deepcopy(self.server)
        if self.list_gate is not None:
            await self.list_gate.wait()
        return {"jobs": snapshot, "totalCount": len(snapshot)}

    async def reorder_job(self, moved_id: int, reference_id: int) -> Dict[str, Any]:
        self.reorder_calls.append((moved_id, reference_id))
        failure = self.failures.pop(0) if self.failures else None

        if self.hold_reorders:
            release = asyncio.get_running_loop().create_future()
            self.pending.append(release)
            await release

        if failure is not None:
            raise failure

        ids = self.server_ids()
        if moved_id not in ids or reference_id not in ids:
            raise ApiError(404, "Job not found for reordering", "JOB_NOT_FOUND")

        moved = array_move(self.server, ids.index(moved_id), ids.index(reference_id))
        self.server = [{**job, "order": position} for position, job in enumerate(moved, 1)]
        return {"success": True}


class FakeCandidatesApi:
    """内存候选人服务端"""

    def __init__(self):
        self.server: List[Dict[str, Any]] = [
            {"id": 1, "name": "Ada", "stage": "applied"},
            {"id": 2, "name": "Grace", "stage": "screen"},
        ]
        self.failures: List[BaseException] = []

    async def list_candidates(self, **filters) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.server)

    async def update_candidate_stage(self, candidate_id: int, stage: str) -> Dict[str, Any]:
        if self.failures:
            raise self.failures.pop(0)
        for candidate in self.server:
            if candidate["id"] == candidate_id:
                candidate["stage"] = stage
                return dict(candidate)
        raise ApiError(404, "Candidate not found", "CANDIDATE_NOT_FOUND")


async def wait_until(predicate, attempts: int = 100) -> None:
    """让出事件循环直到条件成立"""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("条件在预期时间内未成立")


def ids_of(view) -> List[int]:
    items = view["jobs"] if isinstance(view, dict) else view
    return [item["id"] for item in items]


@pytest.fixture
def jobs_api():
    return FakeJobsApi()


@pytest.fixture
def candidates_api():
    return FakeCandidatesApi()


@pytest.fixture
def cache():
    return QueryCache()


@pytest.fixture
def notifier():
    return ToastNotifier()


@pytest.fixture
def until():
    return wait_until


@pytest.fixture
def view_ids():
    return ids_of
