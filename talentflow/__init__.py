"""
TalentFlow - 招聘流程管理

- 服务端: FastAPI + SQLAlchemy，职位（可拖拽排序）、候选人、测评接口
- 客户端: 带查询缓存与乐观更新的异步 API 客户端

快速开始:
    from talentflow.app import create_app

    app = create_app()
"""

from .version import __version__, __author__, __description__

__all__ = [
    "__version__",
    "__author__",
    "__description__",
]
