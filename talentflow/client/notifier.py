"""用户提示

客户端的 toast 提示。默认实现记录日志并保留最近的提示，界面层可替换为真实展示。
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, List

from talentflow.log import client_logger


@dataclass(frozen=True)
class Toast:
    level: str
    message: str


class Notifier:
    """提示接口"""

    def success(self, message: str) -> None:
        raise NotImplementedError

    def error(self, message: str) -> None:
        raise NotImplementedError


class ToastNotifier(Notifier):
    """记录日志并保留最近 max_history 条提示

    使用示例:
        notifier = ToastNotifier()
        notifier.error("Failed to reorder jobs. Reverting change.")
        notifier.messages("error")   # ["Failed to reorder jobs. Reverting change."]
    """

    def __init__(self, max_history: int = 100):
        self.toasts: Deque[Toast] = deque(maxlen=max_history)

    def success(self, message: str) -> None:
        client_logger.info(f"[toast] {message}")
        self.toasts.append(Toast("success", message))

    def error(self, message: str) -> None:
        client_logger.warning(f"[toast] {message}")
        self.toasts.append(Toast("error", message))

    def messages(self, level: str = None) -> List[str]:
        return [toast.message for toast in self.toasts if level is None or toast.level == level]


__all__ = ["Toast", "Notifier", "ToastNotifier"]
