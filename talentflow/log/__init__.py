"""日志模块

提供日志配置与管理：
- 自动推断模块名的 get_logger
- 微秒精度的格式化器
- 控制台 / 文件（可按大小轮转）输出

使用示例:
    from talentflow.log import setup_root_logger, get_logger

    setup_root_logger(config=settings.logging)
    logger = get_logger()
"""

from .logger import (
    setup_logger,
    setup_root_logger,
    create_formatter,
    MicrosecondFormatter,
    DEFAULT_LOG_FORMAT,
    api_logger,
    client_logger,
    logger,
    get_logger,
)

__all__ = [
    "setup_logger",
    "setup_root_logger",
    "create_formatter",
    "MicrosecondFormatter",
    "DEFAULT_LOG_FORMAT",
    "api_logger",
    "client_logger",
    "logger",
    "get_logger",
]
