"""客户端与应用联调测试

通过 httpx.ASGITransport 直连应用，覆盖完整链路：
乐观修改 -> PATCH /jobs/{id}/reorder -> 回滚或重新获取。
"""

import random

import pytest

from talentflow.app import create_app
from talentflow.client import (
    ApiError,
    QueryCache,
    ReorderCoordinator,
    StageChange,
    StageChangeCoordinator,
    TalentFlowClient,
    ToastNotifier,
)
from talentflow.config import MockApiSettings
from talentflow.services import NetworkSimulator, ReorderIntent


def _ids(view):
    return [job["id"] for job in view["jobs"]]


class TestApiClient:
    """TalentFlowClient"""

    @pytest.mark.asyncio
    async def test_unwraps_data(self, app, make_jobs):
        make_jobs(2)

        async with TalentFlowClient.for_app(app) as api:
            page = await api.list_jobs()

        assert page["totalCount"] == 2
        assert [job["id"] for job in page["jobs"]] == [1, 2]

    @pytest.mark.asyncio
    async def test_error_response_raises(self, app):
        async with TalentFlowClient.for_app(app) as api:
            with pytest.raises(ApiError) as exc_info:
                await api.get_job(42)

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == "JOB_NOT_FOUND"
        assert exc_info.value.message

    @pytest.mark.asyncio
    async def test_candidate_and_assessment_calls(self, app, make_jobs):
        make_jobs(1)

        async with TalentFlowClient.for_app(app) as api:
            candidate = await api.create_candidate("Ada", "ada@example.com", job_id=1)
            await api.update_candidate_stage(candidate["id"], "screen")
            await api.add_note(candidate["id"], "Strong")
            timeline = await api.get_timeline(candidate["id"])
            await api.save_assessment(1, [{"id": "sec-1", "title": "Basics", "questions": []}])
            assessment = await api.get_assessment(1)
            submitted = await api.submit_assessment(1, {"q-1": "yes"})

        assert {item["id"].split("-")[0] for item in timeline} == {"evt", "note"}
        assert assessment["sections"][0]["title"] == "Basics"
        assert submitted["message"] == "Submission received."


class TestReorderEndToEnd:
    """拖拽重排完整链路"""

    @pytest.mark.asyncio
    async def test_success(self, app, make_jobs):
        make_jobs(3)
        cache = QueryCache()

        async with TalentFlowClient.for_app(app) as api:
            coordinator = ReorderCoordinator(api, cache, ToastNotifier())
            await coordinator.load(status="all")

            result = await coordinator.begin_reorder(ReorderIntent(moved_id=1, reference_id=3))
            await cache.wait_idle()

        view = cache.get_query_data(("jobs",))
        assert result.ok
        assert _ids(view) == [2, 3, 1]
        assert [job["order"] for job in view["jobs"]] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_not_found_rolls_back(self, app, make_jobs):
        make_jobs(3)
        cache = QueryCache()
        notifier = ToastNotifier()

        async with TalentFlowClient.for_app(app) as api:
            coordinator = ReorderCoordinator(api, cache, notifier)
            await coordinator.load()
            before = cache.snapshot(("jobs",))

            result = await coordinator.begin_reorder(ReorderIntent(moved_id=1, reference_id=99))
            await cache.wait_idle()

        assert result.error.error_code == "JOB_NOT_FOUND"
        assert cache.get_query_data(("jobs",)) == before
        assert notifier.messages("error") == ["Failed to reorder jobs. Reverting change."]

    @pytest.mark.asyncio
    async def test_simulated_failure_rolls_back(self, settings, database, make_jobs):
        make_jobs(3)
        failing = NetworkSimulator(
            MockApiSettings(
                latency_min_ms=0, latency_max_ms=0,
                reorder_latency_min_ms=0, reorder_latency_max_ms=0,
                reorder_failure_rate=1.0,
            ),
            rng=random.Random(0),
        )
        app = create_app(settings, database=database, simulator=failing, configure_logging=False)
        cache = QueryCache()

        async with TalentFlowClient.for_app(app) as api:
            coordinator = ReorderCoordinator(api, cache, ToastNotifier())
            await coordinator.load()
            before = cache.snapshot(("jobs",))

            result = await coordinator.begin_reorder(ReorderIntent(moved_id=3, reference_id=1))
            assert cache.get_query_data(("jobs",)) == before
            await cache.wait_idle()

        assert result.rolled_back
        assert result.error.status_code == 500
        assert result.error.message == "Server error"
        assert cache.get_query_data(("jobs",)) == before


class TestStageEndToEnd:
    """看板阶段变更完整链路"""

    @pytest.mark.asyncio
    async def test_stage_change(self, app, make_jobs):
        make_jobs(1)
        cache = QueryCache()
        notifier = ToastNotifier()

        async with TalentFlowClient.for_app(app) as api:
            candidate = await api.create_candidate("Grace", "grace@example.com", job_id=1)
            coordinator = StageChangeCoordinator(api, cache, notifier)
            await coordinator.load()

            result = await coordinator.mutate(StageChange(candidate_id=candidate["id"], stage="offer"))
            await cache.wait_idle()

        assert result.ok
        assert cache.get_query_data(("allCandidates",))[0]["stage"] == "offer"
        assert notifier.messages("success") == ["Candidate stage updated!"]
