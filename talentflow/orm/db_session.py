"""
数据库会话管理模块

提供数据库引擎创建、会话管理等功能。

公开 API:
- DatabaseManager: 数据库管理器，每个应用持有一个实例（存放在 app.state.database）
- get_db(): FastAPI 依赖，按请求创建并关闭 session
- DatabaseManager.session_scope(): 非 HTTP 场景的上下文管理器（脚本、种子数据、测试）
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from talentflow.log import get_logger

_logger = get_logger("talentflow.orm.session")

__all__ = [
    "DatabaseManager",
    "get_db",
]


class DatabaseManager:
    """数据库管理器

    封装引擎与 sessionmaker。与全局单例不同，每个应用实例持有自己的管理器，
    测试可以为每个用例创建独立的内存数据库。

    使用示例:
        from talentflow.orm import DatabaseManager

        database = DatabaseManager()
        database.init(config=settings.database, logging_config=settings.logging)
        database.create_all()

        with database.session_scope() as session:
            jobs = session.query(Job).all()
    """

    def __init__(self):
        self._engine: Optional[Engine] = None
        self._session_maker: Optional[sessionmaker] = None

    # ==================== 属性访问 ====================

    @property
    def engine(self) -> Engine:
        """获取数据库引擎（只读）

        Raises:
            RuntimeError: 数据库未初始化时
        """
        if self._engine is None:
            raise RuntimeError("数据库未初始化，请先调用 init()")
        return self._engine

    @property
    def is_initialized(self) -> bool:
        """检查数据库是否已初始化"""
        return self._engine is not None and self._session_maker is not None

    # ==================== 核心方法 ====================

    def init(
        self,
        database_url: str = None,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_pre_ping: bool = True,
        sql_log_enabled: bool = False,
        config: Any = None,
        logging_config: Any = None,
        engine: Optional[Engine] = None,
    ) -> Engine:
        """初始化数据库连接

        Args:
            database_url: 数据库连接URL（如果提供 config 则忽略）
            echo: 是否输出SQL语句（如果提供 config 则忽略）
            pool_size: 连接池大小（如果提供 config 则忽略）
            max_overflow: 最大溢出连接数（如果提供 config 则忽略）
            pool_timeout: 连接超时时间（如果提供 config 则忽略）
            pool_pre_ping: 连接前是否ping（如果提供 config 则忽略）
            sql_log_enabled: 是否启用SQL耗时日志（如果提供 logging_config 则忽略）
            config: 数据库配置对象（DatabaseSettings）
            logging_config: 日志配置对象（LoggingSettings）
            engine: 直接使用已创建的引擎（测试场景）

        Returns:
            数据库引擎

        使用示例:
            database.init(database_url="sqlite:///:memory:")
            database.init(config=settings.database, logging_config=settings.logging)
        """
        if engine is not None:
            self._engine = engine
            self._session_maker = sessionmaker(autocommit=False, autoflush=True, bind=engine)
            _logger.info("使用外部提供的数据库引擎")
            return engine

        if config is not None:
            database_url = getattr(config, "url", database_url)
            echo = getattr(config, "echo", echo)
            pool_size = getattr(config, "pool_size", pool_size)
            max_overflow = getattr(config, "max_overflow", max_overflow)
            pool_timeout = getattr(config, "pool_timeout", pool_timeout)
            pool_pre_ping = getattr(config, "pool_pre_ping", pool_pre_ping)

        if logging_config is not None:
            sql_log_enabled = getattr(logging_config, "sql_log_enabled", sql_log_enabled)

        if not database_url:
            raise ValueError("database_url 是必需的，请通过参数或 config 提供")

        _logger.info(f"数据库配置URL: {database_url}")

        engine_echo = "debug" if sql_log_enabled else echo

        if database_url.startswith("sqlite:///"):
            db_path = database_url[len("sqlite:///"):]
            is_memory_db = db_path in (":memory:", "")

            if is_memory_db:
                # 内存数据库：使用 StaticPool（单连接），否则每个连接看到的是不同的库
                self._engine = create_engine(
                    database_url,
                    echo=engine_echo,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
                _logger.info("SQLite内存数据库引擎创建成功（StaticPool）")
            else:
                _logger.info(f"SQLite文件数据库路径: {os.path.abspath(db_path)}")
                self._engine = create_engine(
                    database_url,
                    echo=engine_echo,
                    connect_args={"check_same_thread": False, "timeout": pool_timeout},
                    poolclass=QueuePool,
                    pool_size=pool_size,
                    max_overflow=max_overflow,
                    pool_timeout=pool_timeout,
                    pool_pre_ping=pool_pre_ping,
                )
                _logger.info(
                    f"SQLite文件数据库引擎创建成功（QueuePool, pool_size={pool_size}, max_overflow={max_overflow}）"
                )
        else:
            self._engine = create_engine(
                database_url,
                echo=engine_echo,
                pool_pre_ping=pool_pre_ping,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
            )
            _logger.info("数据库引擎创建成功")

        if sql_log_enabled:
            sql_logger = logging.getLogger("sqlalchemy.engine")

            @event.listens_for(self._engine, "before_cursor_execute")
            def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
                conn.info.setdefault("query_start_time", []).append(time.time())

            @event.listens_for(self._engine, "after_cursor_execute")
            def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
                total_time = time.time() - conn.info["query_start_time"].pop()
                sql_logger.debug(f"[执行耗时: {total_time * 1000:.2f}ms]")

            _logger.info("SQL执行时间记录已启用")

        self._session_maker = sessionmaker(autocommit=False, autoflush=True, bind=self._engine)
        return self._engine

    def create_all(self) -> None:
        """按模型定义建表（已存在的表跳过）"""
        from .core_model import BaseModel

        BaseModel.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        from .core_model import BaseModel

        BaseModel.metadata.drop_all(self.engine)

    def new_session(self) -> Session:
        """创建一个新的 session，调用方负责关闭"""
        if self._session_maker is None:
            raise RuntimeError("数据库未初始化，请先调用 init()")
        return self._session_maker()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """session 上下文管理器：正常退出提交，异常回滚，最后关闭

        使用示例:
            with database.session_scope() as session:
                session.add(job)
        """
        session = self.new_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """释放连接池"""
        if self._engine is not None:
            self._engine.dispose()
            _logger.info("数据库连接池已释放")


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI 依赖：为每个请求提供一个 session，请求结束时关闭

    写操作由各接口（或存储层）显式提交，这里只负责收尾。

    使用示例:
        @router.get("/jobs")
        def list_jobs(db: Session = Depends(get_db)):
            ...
    """
    database: DatabaseManager = request.app.state.database
    session = database.new_session()
    try:
        yield session
    finally:
        session.close()
