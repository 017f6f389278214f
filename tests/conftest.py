"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 内存数据库（每个用例独立）
- 零延迟的模拟网络层
- FastAPI 应用与测试客户端
- 职位数据工厂
"""

import os
import random
import tempfile
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from talentflow.app import create_app
from talentflow.config import AppSettings, DatabaseSettings, MockApiSettings
from talentflow.models import Job, slugify
from talentflow.orm import DatabaseManager
from talentflow.services import NetworkSimulator


# ==================== 基础 Fixtures ====================

@pytest.fixture(scope="session")
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def temp_file(temp_dir):
    """创建临时文件的工厂函数"""
    created_files = []

    def _create_file(filename: str, content: str = "") -> str:
        filepath = os.path.join(temp_dir, filename)
        if os.path.dirname(filepath):
            os.makedirs(os.path.dirname(filepath), exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(content)
        created_files.append(filepath)
        return filepath

    yield _create_file

    for f in created_files:
        if os.path.exists(f):
            os.remove(f)


# ==================== 配置 Fixtures ====================

@pytest.fixture
def mock_settings() -> MockApiSettings:
    """零延迟、不注入故障的模拟网络配置"""
    return MockApiSettings(
        latency_min_ms=0,
        latency_max_ms=0,
        reorder_latency_min_ms=0,
        reorder_latency_max_ms=0,
        reorder_failure_rate=0.0,
        page_size=10,
    )


@pytest.fixture
def settings(mock_settings) -> AppSettings:
    return AppSettings(
        seed_on_startup=False,
        database=DatabaseSettings(url="sqlite:///:memory:"),
        mock_api=mock_settings,
    )


# ==================== 数据库 Fixtures ====================

@pytest.fixture
def database() -> Generator[DatabaseManager, None, None]:
    """内存数据库（StaticPool，单连接）"""
    manager = DatabaseManager()
    manager.init(database_url="sqlite:///:memory:")
    manager.create_all()
    yield manager
    manager.dispose()


@pytest.fixture
def db_session(database) -> Generator[Session, None, None]:
    """创建数据库会话"""
    session = database.new_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_jobs(db_session):
    """职位工厂：按给定顺序创建职位，order 默认从 1 连续编号

    使用示例:
        jobs = make_jobs(3)                       # Job 1..3, order 1..3
        jobs = make_jobs(3, orders=[2, 2, 1])     # 指定 order
    """

    def _make(count: int, orders=None, **fields):
        jobs = []
        for i in range(count):
            title = fields.get("title", f"Job {i + 1}")
            job = Job(
                title=title,
                slug=slugify(title),
                status=fields.get("status", "active"),
                tags=list(fields.get("tags", [])),
                order=orders[i] if orders else i + 1,
            )
            db_session.add(job)
            jobs.append(job)
        db_session.commit()
        return jobs

    return _make


# ==================== FastAPI Fixtures ====================

@pytest.fixture
def simulator(mock_settings) -> NetworkSimulator:
    return NetworkSimulator(mock_settings, rng=random.Random(0))


@pytest.fixture
def app(settings, database, simulator):
    """创建测试用应用（共享 database fixture 的内存库）"""
    return create_app(settings, database=database, simulator=simulator, configure_logging=False)


@pytest.fixture
def client(app):
    """创建测试客户端"""
    return TestClient(app)
