"""排序请求处理

把一次拖拽意图 (moved_id, reference_id) 转换为新的全量顺序并持久化:

1. 模拟网络延迟
2. 按概率模拟服务端故障（此时不读不写）
3. 读取当前有序集合
4. 定位两个 id，缺失则 NotFoundError
5. 单元素移动（先移除再插入）
6. 全量重新编号 order = index + 1
7. bulk_replace 原子写入

3-5 步只在内存副本上进行，任何失败都不会留下部分写入。
"""

from dataclasses import dataclass
from typing import List, Optional

from talentflow.exceptions import Err, ErrorCode
from talentflow.log import get_logger
from talentflow.store import OrderedCollectionStore, array_move
from .network import NetworkSimulator

logger = get_logger()


@dataclass(frozen=True)
class ReorderIntent:
    """拖拽意图：把 moved_id 放到 reference_id 原来的位置"""
    moved_id: int
    reference_id: int


class ReorderHandler:
    """排序请求处理器

    使用示例:
        handler = ReorderHandler(OrderedCollectionStore(session, Job), simulator)
        await handler.reorder(ReorderIntent(moved_id=1, reference_id=3))
    """

    def __init__(self, store: OrderedCollectionStore, simulator: Optional[NetworkSimulator] = None):
        self.store = store
        self.simulator = simulator

    async def reorder(self, intent: ReorderIntent) -> List:
        """执行一次重排

        Returns:
            重排后的实体列表（order 已重新编号）

        Raises:
            TransientServerError: 模拟故障，未读写任何数据
            NotFoundError: moved_id 或 reference_id 不在集合中
            PersistenceError: 写入失败，已回滚
        """
        if self.simulator is not None:
            await self.simulator.reorder_delay()
            if self.simulator.should_fail_reorder():
                rate = self.simulator.settings.reorder_failure_rate
                logger.warning(f"模拟服务端故障，重排未执行: {intent}（failure_rate={rate}）")
                raise Err.transient()

        entities = self.store.get_all_sorted()
        ids = [entity.id for entity in entities]

        missing = [i for i in (intent.moved_id, intent.reference_id) if i not in ids]
        if missing:
            raise Err.not_found(
                f"Job not found for reordering: {missing}",
                code=ErrorCode.JOB_NOT_FOUND,
                missing_ids=missing,
            )

        from_index = ids.index(intent.moved_id)
        to_index = ids.index(intent.reference_id)

        reordered = array_move(entities, from_index, to_index)
        self.store.bulk_replace(
            {"id": entity.id, "order": position}
            for position, entity in enumerate(reordered, 1)
        )

        logger.info(f"重排完成: {intent.moved_id} -> 位置 {to_index + 1}（共 {len(reordered)} 条）")
        return reordered


__all__ = ["ReorderIntent", "ReorderHandler"]
