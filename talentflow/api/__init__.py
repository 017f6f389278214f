"""HTTP 接口

使用示例:
    from talentflow.api import register_routers

    register_routers(app)
"""

from fastapi import FastAPI

from .assessments_api import create_assessments_router
from .candidates_api import build_timeline, create_candidates_router
from .jobs_api import create_jobs_router


def register_routers(app: FastAPI) -> None:
    """挂载全部业务路由"""
    app.include_router(create_jobs_router(), prefix="/jobs", tags=["jobs"])
    app.include_router(create_candidates_router(), prefix="/candidates", tags=["candidates"])
    app.include_router(create_assessments_router(), prefix="/assessments", tags=["assessments"])


__all__ = [
    "register_routers",
    "create_jobs_router",
    "create_candidates_router",
    "create_assessments_router",
    "build_timeline",
]
