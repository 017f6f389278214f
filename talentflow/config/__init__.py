"""配置模块

- AppSettings: 应用配置（推荐），支持 YAML + 环境变量
- 子配置类: DatabaseSettings, LoggingSettings, MockApiSettings
- ConfigLoader / load_yaml_config: YAML 配置加载

快速开始:
    from talentflow.config import AppSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", AppSettings)
"""

from .settings import (
    AppSettings,
    DatabaseSettings,
    LoggingSettings,
    MockApiSettings,
)

from .loader import (
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "MockApiSettings",
    "ConfigLoader",
    "load_yaml_config",
]
