"""
ORM基础模型

提供主键、时间戳、自动表名以及序列化功能。

API 层统一输出驼峰字段名（jobId、createdAt），模型属性保持下划线命名。
"""

import re
from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func, inspect
from sqlalchemy.orm import Mapped, declarative_base, declared_attr, mapped_column


# 声明基类
Base = declarative_base()


def to_snake_case(name: str) -> str:
    """驼峰转下划线: TimelineEvent -> timeline_event"""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def to_camel_case(name: str) -> str:
    """下划线转驼峰: job_id -> jobId"""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class BaseModel(Base):
    """ORM基础模型类

    提供功能:
    - 自增整数主键 id
    - 自动表名生成（驼峰转下划线）
    - created_at / updated_at 时间戳
    - to_dict 序列化（驼峰键名）

    使用示例:
        from talentflow.orm import BaseModel

        class Job(BaseModel):
            title: Mapped[str] = mapped_column(String(200))

        job = Job(title="Frontend Engineer")
        session.add(job)
        session.commit()
        job.to_dict()   # {"id": 1, "title": "Frontend Engineer", "createdAt": ..., ...}
    """
    __abstract__ = True

    # 系统字段，构造时忽略用户传入的值
    _system_fields: ClassVar[set] = {"id", "created_at", "updated_at"}

    # to_dict 默认不输出的字段
    _hidden_fields: ClassVar[set] = set()

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return to_snake_case(cls.__name__)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        default=datetime.now,
        server_default=func.now(),
        comment="创建时间"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=True,
        onupdate=datetime.now,
        comment="更新时间"
    )

    def __init__(self, **kwargs):
        for field in self._system_fields:
            kwargs.pop(field, None)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.id}>"

    def to_dict(self, exclude: set = None) -> dict:
        """转换为字典（键名为驼峰形式）

        Args:
            exclude: 需要排除的字段集合（下划线形式的属性名）

        Returns:
            字典格式的对象数据
        """
        exclude = (exclude or set()) | self._hidden_fields
        return {
            to_camel_case(c.key): getattr(self, c.key)
            for c in inspect(self).mapper.column_attrs
            if c.key not in exclude
        }


__all__ = [
    "Base",
    "BaseModel",
    "to_snake_case",
    "to_camel_case",
]
