"""存储层

- OrderedCollectionStore: 有序集合的读取与原子批量更新
- array_move: 单元素列表移动
"""

from .list_ops import array_move
from .ordered_store import OrderedCollectionStore

__all__ = [
    "array_move",
    "OrderedCollectionStore",
]
