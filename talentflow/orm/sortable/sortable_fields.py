"""排序字段定义

提供标准的排序字段定义 Mixin，简化模型定义。

使用示例:
    from talentflow.orm import BaseModel
    from talentflow.orm.sortable import SortFieldMixin, SortableMixin

    class Job(BaseModel, SortFieldMixin, SortableMixin):
        title = mapped_column(String(200))
        # order 字段由 SortFieldMixin 自动提供
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column


class SortFieldMixin:
    """排序字段 Mixin

    提供 order 字段。在一个集合内 order 取值应为 1..N 的连续整数，
    每次重排后整体重新编号。

    字段说明:
        - order: 排序序号，从 1 开始，值越小越靠前
    """

    order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        index=True,
        comment="排序序号"
    )


__all__ = [
    "SortFieldMixin",
]
