"""ORM 模块

- BaseModel: 模型基类（主键、时间戳、to_dict）
- SortFieldMixin / SortableMixin: 可排序集合
- DatabaseManager / get_db: 引擎与会话管理
"""

from .core_model import Base, BaseModel, to_camel_case, to_snake_case
from .db_session import DatabaseManager, get_db
from .sortable import SortableMixin, SortFieldMixin

__all__ = [
    "Base",
    "BaseModel",
    "to_camel_case",
    "to_snake_case",
    "DatabaseManager",
    "get_db",
    "SortableMixin",
    "SortFieldMixin",
]
