"""
配置模块
提供应用的默认配置，部署时通过 YAML 文件或环境变量覆盖
"""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """数据库配置

    使用示例:
        from talentflow.config import DatabaseSettings

        db_config = DatabaseSettings(url="sqlite:///./talentflow.db")
    """
    model_config = SettingsConfigDict(env_prefix="TALENTFLOW_DB_")

    url: str = Field(default="sqlite:///./talentflow.db", description="数据库连接URL")
    echo: bool = Field(default=False, description="是否打印SQL语句")
    pool_pre_ping: bool = Field(default=True, description="连接前检查")
    pool_size: int = Field(default=5, description="连接池大小")
    max_overflow: int = Field(default=10, description="连接池最大溢出")
    pool_timeout: int = Field(default=30, description="连接超时（秒）")


class LoggingSettings(BaseSettings):
    """日志配置

    使用示例:
        log_config = LoggingSettings(level="DEBUG", file_path="logs/talentflow.log")
    """
    model_config = SettingsConfigDict(env_prefix="TALENTFLOW_LOG_")

    level: str = Field(default="INFO", description="日志级别")
    file_path: str = Field(default="", description="日志文件路径，为空则只输出到控制台")
    file_max_bytes: int = Field(default=10 * 1024 * 1024, description="单个日志文件最大字节数，0 表示不轮转")
    file_backup_count: int = Field(default=5, description="保留的备份文件数量")
    enable_console: bool = Field(default=True, description="是否启用控制台输出")
    sql_log_enabled: bool = Field(default=False, description="是否启用SQL日志")
    sql_log_level: str = Field(default="DEBUG", description="SQL日志级别")


class MockApiSettings(BaseSettings):
    """模拟网络层配置

    所有接口都会在处理前等待一段随机延迟，用于模拟真实网络。
    排序接口额外支持按概率模拟服务端故障，便于演示乐观更新的回滚。

    生产默认值不注入故障；演示时可设置 reorder_failure_rate=0.25。

    使用示例:
        mock = MockApiSettings(
            latency_min_ms=0,
            latency_max_ms=0,
            reorder_failure_rate=0.25,
        )
    """
    model_config = SettingsConfigDict(env_prefix="TALENTFLOW_MOCK_")

    latency_min_ms: int = Field(default=200, ge=0, description="普通接口最小延迟（毫秒）")
    latency_max_ms: int = Field(default=1200, ge=0, description="普通接口最大延迟（毫秒）")
    reorder_latency_min_ms: int = Field(default=500, ge=0, description="排序接口最小延迟（毫秒）")
    reorder_latency_max_ms: int = Field(default=1300, ge=0, description="排序接口最大延迟（毫秒）")
    reorder_failure_rate: float = Field(default=0.0, ge=0.0, le=1.0, description="排序接口模拟故障概率")
    page_size: int = Field(default=10, ge=1, description="职位列表每页数量")

    @model_validator(mode="after")
    def _check_ranges(self):
        if self.latency_min_ms > self.latency_max_ms:
            raise ValueError("latency_min_ms 不能大于 latency_max_ms")
        if self.reorder_latency_min_ms > self.reorder_latency_max_ms:
            raise ValueError("reorder_latency_min_ms 不能大于 reorder_latency_max_ms")
        return self


class AppSettings(BaseSettings):
    """应用配置

    将各子配置聚合为嵌套结构。

    配置优先级（从高到低）:
        显式参数 > YAML 配置文件 > 环境变量 > 代码中的默认值

    内置子配置及环境变量前缀:
        - database:  DatabaseSettings  (TALENTFLOW_DB_)
        - logging:   LoggingSettings   (TALENTFLOW_LOG_)
        - mock_api:  MockApiSettings   (TALENTFLOW_MOCK_)

    YAML 配置示例 (config/settings.yaml):
        app_name: "TalentFlow"
        database:
          url: "sqlite:///./talentflow.db"
        logging:
          level: "INFO"
        mock_api:
          reorder_failure_rate: 0.25
    """
    model_config = SettingsConfigDict(env_prefix="TALENTFLOW_")

    app_name: str = Field(default="TalentFlow", description="应用名称")
    debug: bool = Field(default=False, description="调试模式，错误响应中附带上下文信息")
    seed_on_startup: bool = Field(default=True, description="启动时为空库填充示例数据")
    seed_candidate_count: int = Field(default=1000, ge=0, description="示例候选人数量")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    mock_api: MockApiSettings = Field(default_factory=MockApiSettings)
