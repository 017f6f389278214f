"""职位模型"""

import re
from typing import List, Optional

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from talentflow.orm import BaseModel, SortableMixin, SortFieldMixin


JOB_STATUSES = ("active", "archived")


def slugify(title: str) -> str:
    """职位 slug: 小写，连续空白替换为 '-'

    >>> slugify("Senior  Frontend Engineer")
    'senior-frontend-engineer'
    """
    return re.sub(r"\s+", "-", title.lower())


class Job(BaseModel, SortFieldMixin, SortableMixin):
    """职位

    职位列表是一个可拖拽排序的集合，order 在整个集合内从 1 连续编号。
    """

    title: Mapped[str] = mapped_column(String(200), nullable=False, comment="职位名称")
    slug: Mapped[str] = mapped_column(String(200), nullable=False, index=True, comment="URL 标识")
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False, index=True, comment="状态")
    tags: Mapped[List[str]] = mapped_column(JSON, default=list, nullable=False, comment="标签")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="职位描述")
