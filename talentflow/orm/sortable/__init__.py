"""排序管理模块

导出:
    - SortFieldMixin: 排序字段 Mixin（提供 order 字段）
    - SortableMixin: 排序管理 Mixin（提供排序查询方法）

使用示例:
    from talentflow.orm import BaseModel, SortFieldMixin, SortableMixin

    class Job(BaseModel, SortFieldMixin, SortableMixin):
        title = mapped_column(String(200))

    jobs = Job.get_sorted(session)
"""

from .sortable_fields import SortFieldMixin
from .sortable_mixin import SortableMixin

__all__ = [
    "SortFieldMixin",
    "SortableMixin",
]
