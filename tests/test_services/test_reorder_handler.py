"""ReorderHandler 测试

覆盖拖拽重排的核心场景：
- 向后/向前移动（单元素移动语义）
- order 重新编号后连续且唯一
- 引用不存在的 id
- 模拟故障时不读写数据
"""

import logging
import random

import pytest

from talentflow.config import MockApiSettings
from talentflow.exceptions import ErrorCode, NotFoundError, TransientServerError
from talentflow.models import Job
from talentflow.services import NetworkSimulator, ReorderHandler, ReorderIntent
from talentflow.store import OrderedCollectionStore


def _snapshot(store):
    store.session.expire_all()
    return [(job.id, job.order) for job in store.get_all_sorted()]


@pytest.fixture
def store(db_session):
    return OrderedCollectionStore(db_session, Job)


class TestReorderScenarios:
    """拖拽重排场景"""

    @pytest.mark.asyncio
    async def test_move_first_to_last(self, store, make_jobs, simulator):
        """[1,2,3] 把 1 放到 3 的位置 -> [2,3,1]"""
        make_jobs(3)
        handler = ReorderHandler(store, simulator)

        result = await handler.reorder(ReorderIntent(moved_id=1, reference_id=3))

        assert [job.id for job in result] == [2, 3, 1]
        assert _snapshot(store) == [(2, 1), (3, 2), (1, 3)]

    @pytest.mark.asyncio
    async def test_move_last_to_first(self, store, make_jobs, simulator):
        """[1,2,3] 把 3 放到 1 的位置 -> [3,1,2]"""
        make_jobs(3)
        handler = ReorderHandler(store, simulator)

        await handler.reorder(ReorderIntent(moved_id=3, reference_id=1))

        assert _snapshot(store) == [(3, 1), (1, 2), (2, 3)]

    @pytest.mark.asyncio
    async def test_unknown_reference_id(self, store, make_jobs, simulator):
        """引用不存在的 id -> NotFoundError，集合不变"""
        make_jobs(3)
        handler = ReorderHandler(store, simulator)

        with pytest.raises(NotFoundError) as exc_info:
            await handler.reorder(ReorderIntent(moved_id=1, reference_id=99))

        assert exc_info.value.code == ErrorCode.JOB_NOT_FOUND
        assert exc_info.value.extra["missing_ids"] == [99]
        assert _snapshot(store) == [(1, 1), (2, 2), (3, 3)]

    @pytest.mark.asyncio
    async def test_simulated_failure_logged_once(self, store, make_jobs, caplog):
        """一次模拟故障只产生一条 warning 日志"""
        make_jobs(2)
        simulator = NetworkSimulator(
            MockApiSettings(
                latency_min_ms=0, latency_max_ms=0,
                reorder_latency_min_ms=0, reorder_latency_max_ms=0,
                reorder_failure_rate=1.0,
            ),
            rng=random.Random(1),
        )
        handler = ReorderHandler(store, simulator)

        with caplog.at_level(logging.DEBUG, logger="talentflow.services"):
            with pytest.raises(TransientServerError):
                await handler.reorder(ReorderIntent(moved_id=1, reference_id=2))

        records = [r for r in caplog.records if r.name.startswith("talentflow.services")]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].name == "talentflow.services.reorder_handler"
        assert "模拟服务端故障" in records[0].getMessage()

    @pytest.mark.asyncio
    async def test_unknown_moved_id(self, store, make_jobs, simulator):
        make_jobs(2)
        handler = ReorderHandler(store, simulator)

        with pytest.raises(NotFoundError):
            await handler.reorder(ReorderIntent(moved_id=42, reference_id=1))

        assert _snapshot(store) == [(1, 1), (2, 2)]

    @pytest.mark.asyncio
    async def test_simulated_failure_leaves_collection_untouched(self, store, make_jobs, monkeypatch):
        """模拟故障在读取之前发生，不产生任何写入"""
        make_jobs(3)
        simulator = NetworkSimulator(
            MockApiSettings(
                latency_min_ms=0, latency_max_ms=0,
                reorder_latency_min_ms=0, reorder_latency_max_ms=0,
                reorder_failure_rate=1.0,
            ),
            rng=random.Random(1),
        )

        def no_read():
            raise AssertionError("故障分支不应读取集合")

        monkeypatch.setattr(store, "get_all_sorted", no_read)
        handler = ReorderHandler(store, simulator)

        with pytest.raises(TransientServerError) as exc_info:
            await handler.reorder(ReorderIntent(moved_id=1, reference_id=3))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Server error"

        monkeypatch.undo()
        assert _snapshot(store) == [(1, 1), (2, 2), (3, 3)]

    @pytest.mark.asyncio
    async def test_without_simulator(self, store, make_jobs):
        make_jobs(2)
        handler = ReorderHandler(store)

        await handler.reorder(ReorderIntent(moved_id=2, reference_id=1))

        assert _snapshot(store) == [(2, 1), (1, 2)]


class TestDensity:
    """重排后 order 始终为 1..n"""

    @pytest.mark.asyncio
    async def test_repairs_gaps_and_duplicates(self, store, make_jobs, simulator):
        """原有的间隙与重复在第一次重排后消失"""
        make_jobs(4, orders=[5, 5, 9, 20])
        handler = ReorderHandler(store, simulator)

        await handler.reorder(ReorderIntent(moved_id=4, reference_id=1))

        assert _snapshot(store) == [(4, 1), (1, 2), (2, 3), (3, 4)]

    @pytest.mark.asyncio
    async def test_random_sequence_stays_dense(self, store, make_jobs, simulator):
        make_jobs(8)
        handler = ReorderHandler(store, simulator)
        rng = random.Random(2024)
        expected = list(range(1, 9))

        for _ in range(25):
            moved, reference = rng.sample(expected, 2)
            await handler.reorder(ReorderIntent(moved_id=moved, reference_id=reference))

            from_index, to_index = expected.index(moved), expected.index(reference)
            expected.insert(to_index, expected.pop(from_index))

            snapshot = _snapshot(store)
            assert [order for _, order in snapshot] == list(range(1, 9))
            assert [job_id for job_id, _ in snapshot] == expected


class TestNetworkSimulator:
    """模拟网络层"""

    @pytest.mark.asyncio
    async def test_delay_within_bounds(self):
        slept = []

        async def fake_sleep(seconds):
            slept.append(seconds)

        simulator = NetworkSimulator(
            MockApiSettings(latency_min_ms=200, latency_max_ms=1200),
            rng=random.Random(7),
            sleep=fake_sleep,
        )

        for _ in range(20):
            delay_ms = await simulator.delay()
            assert 200 <= delay_ms <= 1200

        assert len(slept) == 20
        assert all(0.2 <= s <= 1.2 for s in slept)

    @pytest.mark.asyncio
    async def test_zero_latency_does_not_sleep(self, simulator):
        assert await simulator.reorder_delay() == 0

    def test_failure_rate_zero_never_fails(self, simulator):
        assert not any(simulator.should_fail_reorder() for _ in range(100))

    def test_failure_rate_is_probabilistic(self):
        simulator = NetworkSimulator(MockApiSettings(reorder_failure_rate=0.25), rng=random.Random(3))
        failures = sum(simulator.should_fail_reorder() for _ in range(2000))
        assert 350 < failures < 650
