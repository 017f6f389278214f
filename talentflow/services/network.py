"""模拟网络层

在接口处理前注入随机延迟，并可按概率让排序接口返回服务端错误，
用来演示客户端的乐观更新与回滚。随机数源和 sleep 函数都可注入，测试时可完全确定。

使用示例:
    simulator = NetworkSimulator(settings.mock_api)
    await simulator.delay()

    # 测试：零延迟，排序必定失败
    simulator = NetworkSimulator(
        MockApiSettings(latency_min_ms=0, latency_max_ms=0,
                        reorder_latency_min_ms=0, reorder_latency_max_ms=0,
                        reorder_failure_rate=1.0),
    )
"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

from talentflow.config import MockApiSettings
from talentflow.log import get_logger

logger = get_logger()

SleepFunc = Callable[[float], Awaitable[None]]


class NetworkSimulator:
    """模拟网络延迟与故障

    Args:
        settings: 模拟网络配置，默认使用 MockApiSettings()
        rng: 随机数源，默认新建 random.Random()
        sleep: 异步等待函数，默认 asyncio.sleep
    """

    def __init__(
        self,
        settings: Optional[MockApiSettings] = None,
        rng: Optional[random.Random] = None,
        sleep: Optional[SleepFunc] = None,
    ):
        self.settings = settings or MockApiSettings()
        self.rng = rng or random.Random()
        self._sleep = sleep or asyncio.sleep

    async def _wait(self, min_ms: int, max_ms: int) -> float:
        delay_ms = self.rng.uniform(min_ms, max_ms) if max_ms > min_ms else float(min_ms)
        if delay_ms > 0:
            await self._sleep(delay_ms / 1000)
        return delay_ms

    async def delay(self) -> float:
        """普通接口延迟，返回实际等待的毫秒数"""
        return await self._wait(self.settings.latency_min_ms, self.settings.latency_max_ms)

    async def reorder_delay(self) -> float:
        """排序接口延迟"""
        return await self._wait(self.settings.reorder_latency_min_ms, self.settings.reorder_latency_max_ms)

    def should_fail_reorder(self) -> bool:
        """按配置概率判定本次排序是否模拟失败"""
        rate = self.settings.reorder_failure_rate
        if rate <= 0:
            return False
        return self.rng.random() < rate


__all__ = ["NetworkSimulator"]
