"""服务层

- NetworkSimulator: 模拟网络延迟与故障
- ReorderHandler / ReorderIntent: 拖拽重排
"""

from .network import NetworkSimulator
from .reorder_handler import ReorderHandler, ReorderIntent

__all__ = [
    "NetworkSimulator",
    "ReorderHandler",
    "ReorderIntent",
]
