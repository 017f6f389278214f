"""列表操作

服务端重排与客户端乐观更新共用同一个移动算法，保证两边结果一致。
"""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def array_move(items: Sequence[T], from_index: int, to_index: int) -> List[T]:
    """单元素移动（不是交换）

    先从 from_index 取出元素，再插入到缩短后列表的 to_index 位置。
    返回新列表，不修改入参。

    Args:
        items: 原序列
        from_index: 被移动元素的当前下标
        to_index: 目标下标（按移除后的列表计算）

    Returns:
        移动后的新列表

    Raises:
        IndexError: from_index 越界

    使用示例:
        array_move([1, 2, 3], 0, 2)   # -> [2, 3, 1]
        array_move([1, 2, 3], 2, 0)   # -> [3, 1, 2]
    """
    result = list(items)
    if not -len(result) <= from_index < len(result):
        raise IndexError(f"from_index 越界: {from_index}")
    element = result.pop(from_index)
    result.insert(to_index, element)
    return result


__all__ = ["array_move"]
