"""有序集合存储

对可排序模型（SortFieldMixin + SortableMixin）提供集合级别的读写:

- get_all_sorted(): 按 order 升序，order 相同按 id 升序
- get_by_id(): 按主键获取
- bulk_replace(): 在一个事务内覆盖给定记录的字段，失败整体回滚
- add(): 新建记录，order 默认为 count + 1

使用示例:
    store = OrderedCollectionStore(session, Job)

    jobs = store.get_all_sorted()
    store.bulk_replace([{"id": 2, "order": 1}, {"id": 1, "order": 2}])
"""

from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from talentflow.exceptions import Err, ErrorCode, NotFoundError, PersistenceError
from talentflow.log import get_logger

logger = get_logger()

ModelT = TypeVar("ModelT")


class OrderedCollectionStore(Generic[ModelT]):
    """有序集合存储

    Args:
        session: SQLAlchemy 会话
        model: 可排序模型类（需提供 id 与 order 字段）
    """

    def __init__(self, session: Session, model: Type[ModelT]):
        self.session = session
        self.model = model

    # ==================== 查询 ====================

    def get_all_sorted(self) -> List[ModelT]:
        """获取全部记录，按 order 升序，order 相同按 id 升序"""
        return self.model.get_sorted(self.session)

    def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        return self.session.get(self.model, entity_id)

    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(self.model)) or 0

    def next_order(self) -> int:
        """新记录的 order（count + 1）"""
        return self.count() + 1

    # ==================== 写入 ====================

    def add(self, entity: ModelT) -> ModelT:
        """新建记录并提交

        未指定 order 时使用 count + 1。

        Raises:
            PersistenceError: 写入失败（已回滚）
        """
        if not getattr(entity, "order", None):
            entity.order = self.next_order()

        try:
            self.session.add(entity)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(f"新建 {self.model.__name__} 失败: {exc}")
            raise Err.persistence() from exc

        self.session.refresh(entity)
        return entity

    def bulk_replace(self, records: Iterable[Mapping[str, Any]]) -> int:
        """批量覆盖记录字段（单事务）

        每条记录以 id 定位，只覆盖记录中出现的字段，其余字段保持不变。
        全部成功才提交；任何存储错误都会整体回滚，读者不会看到部分更新。

        Args:
            records: 记录列表，如 [{"id": 3, "order": 1}, {"id": 1, "order": 2}]

        Returns:
            更新的记录数

        Raises:
            NotFoundError: 存在不在集合中的 id（未做任何修改）
            ValidationException: 记录包含模型不存在的字段
            PersistenceError: 存储写入失败（已回滚）
        """
        records = [dict(record) for record in records]
        if not records:
            return 0

        columns = {attr.key for attr in inspect(self.model).column_attrs}
        unknown = sorted({key for record in records for key in record} - columns)
        if unknown:
            raise Err.invalid("存在未知字段", details=[f"未知字段: {key}" for key in unknown])

        ids = [record["id"] for record in records]

        try:
            existing: Dict[int, ModelT] = {
                entity.id: entity
                for entity in self.session.scalars(select(self.model).where(self.model.id.in_(ids)))
            }

            missing = [entity_id for entity_id in ids if entity_id not in existing]
            if missing:
                raise NotFoundError(
                    f"{self.model.__name__} 不存在: {missing}",
                    code=ErrorCode.RESOURCE_NOT_FOUND,
                    missing_ids=missing,
                )

            for record in records:
                entity = existing[record["id"]]
                for key, value in record.items():
                    if key != "id":
                        setattr(entity, key, value)

            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(f"批量更新 {self.model.__name__} 失败，已回滚: {exc}")
            raise PersistenceError() from exc

        logger.debug(f"批量更新 {self.model.__name__} 完成: {len(records)} 条")
        return len(records)


__all__ = ["OrderedCollectionStore"]
