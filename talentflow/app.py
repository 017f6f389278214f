"""
应用工厂

使用示例:
    from talentflow.app import create_app

    app = create_app()                                  # 默认配置
    app = create_app(load_yaml_config("config/settings.yaml", AppSettings))
"""

import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from talentflow.api import register_routers
from talentflow.config import AppSettings
from talentflow.exceptions import register_exception_handlers
from talentflow.log import get_logger, setup_root_logger
from talentflow.middleware import RequestIDMiddleware
from talentflow.orm import DatabaseManager
from talentflow.response import Resp
from talentflow.seed import seed_initial_data
from talentflow.services import NetworkSimulator
from talentflow.version import __version__

logger = get_logger()


def create_app(
    settings: Optional[AppSettings] = None,
    database: Optional[DatabaseManager] = None,
    simulator: Optional[NetworkSimulator] = None,
    seed_rng: Optional[random.Random] = None,
    configure_logging: bool = True,
) -> FastAPI:
    """创建 FastAPI 应用

    数据库在此处初始化并建表；示例数据在应用启动（lifespan）时写入。

    Args:
        settings: 应用配置，默认 AppSettings()
        database: 已初始化的数据库管理器，默认按 settings.database 新建
        simulator: 模拟网络层，默认按 settings.mock_api 新建
        seed_rng: 示例数据随机数源
        configure_logging: 是否按 settings.logging 配置根日志器
    """
    settings = settings or AppSettings()

    if configure_logging:
        setup_root_logger(config=settings.logging)

    if database is None:
        database = DatabaseManager()
        database.init(config=settings.database, logging_config=settings.logging)
    database.create_all()

    simulator = simulator or NetworkSimulator(settings.mock_api)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{settings.app_name} is starting up...")
        if settings.seed_on_startup:
            with database.session_scope() as session:
                seed_initial_data(session, rng=seed_rng, candidate_count=settings.seed_candidate_count)
        yield
        logger.info(f"{settings.app_name} is shutting down...")
        database.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="招聘流程管理：可拖拽排序的职位、候选人看板与职位测评",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.simulator = simulator

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    register_routers(app)

    @app.get("/health", summary="健康检查")
    async def health_check():
        return Resp.OK(data={"status": "healthy", "version": __version__})

    return app


__all__ = ["create_app"]
