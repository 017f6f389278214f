"""排序管理 Mixin

提供集合级别的排序查询方法，所有方法都显式接收 session，不依赖全局会话。
重新编号由 OrderedCollectionStore.bulk_replace 在单个事务内完成。

使用示例:
    from talentflow.orm import BaseModel
    from talentflow.orm.sortable import SortFieldMixin, SortableMixin

    class Job(BaseModel, SortFieldMixin, SortableMixin):
        title = mapped_column(String(200))

    jobs = Job.get_sorted(session)          # 按 order 升序，order 相同按 id
    stmt = Job.sorted_select().where(Job.status == "active")
"""

from sqlalchemy import select
from sqlalchemy.orm import Session


class SortableMixin:
    """排序管理 Mixin

    字段要求（使用者需定义或使用 SortFieldMixin）:
        - order: int  排序序号

    可配置属性（子类可覆盖）:
        - __sort_field__: 排序字段名，默认 "order"
    """

    __sort_field__: str = "order"

    # ==================== 内部方法 ====================

    @classmethod
    def _sort_column(cls):
        return getattr(cls, getattr(cls, "__sort_field__", "order"))

    @classmethod
    def sorted_select(cls, desc: bool = False):
        """构造排序查询语句

        order 相同时按 id 升序，保证结果确定。
        """
        column = cls._sort_column()
        primary = column.desc() if desc else column.asc()
        return select(cls).order_by(primary, cls.id.asc())

    # ==================== 类方法 ====================

    @classmethod
    def get_sorted(cls, session: Session, desc: bool = False) -> list:
        """获取排序后的记录列表

        Example:
            jobs = Job.get_sorted(session)
        """
        return list(session.scalars(cls.sorted_select(desc=desc)).all())


__all__ = [
    "SortableMixin",
]
