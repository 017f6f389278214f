"""
职位 API

生成的路由:
    GET   /jobs                     - 职位列表（筛选、搜索、分页，按 order 排序）
    POST  /jobs                     - 创建职位（order = count + 1）
    GET   /jobs/{job_id}            - 职位详情
    PATCH /jobs/{job_id}            - 更新职位（不修改 order）
    PATCH /jobs/{job_id}/reorder    - 拖拽重排
    GET   /jobs/{job_id}/candidates - 职位下的候选人
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from talentflow.exceptions import Err, ErrorCode
from talentflow.log import api_logger
from talentflow.models import Candidate, Job, slugify
from talentflow.response import ErrorResponse, Resp
from talentflow.services import NetworkSimulator, ReorderHandler, ReorderIntent
from talentflow.store import OrderedCollectionStore

from .deps import commit_or_raise, get_db, get_simulator
from .schemas import JobCreate, JobUpdate, ReorderPayload


def _get_job_or_404(db: Session, job_id: int) -> Job:
    job = db.get(Job, job_id)
    if job is None:
        raise Err.not_found(f"职位不存在: {job_id}", code=ErrorCode.JOB_NOT_FOUND)
    return job


def create_jobs_router() -> APIRouter:
    """创建职位路由

    Returns:
        APIRouter（由应用以 prefix="/jobs" 挂载）
    """
    router = APIRouter()

    @router.get("", summary="职位列表")
    async def list_jobs(
        status: Optional[str] = Query(None, description="状态筛选，all 表示不筛选"),
        search: Optional[str] = Query(None, description="按职位名称搜索（不区分大小写）"),
        tag: Optional[str] = Query(None, description="按标签筛选"),
        page: int = Query(1, ge=1, description="页码"),
        db: Session = Depends(get_db),
        simulator: NetworkSimulator = Depends(get_simulator),
    ):
        """职位列表

        返回 {"jobs": [...], "totalCount": n}，totalCount 为筛选后、分页前的数量。
        """
        await simulator.delay()

        stmt = Job.sorted_select()
        if status and status != "all":
            stmt = stmt.where(Job.status == status)
        jobs = list(db.scalars(stmt).all())

        if tag:
            jobs = [job for job in jobs if tag in (job.tags or [])]
        if search:
            needle = search.lower()
            jobs = [job for job in jobs if needle in job.title.lower()]

        page_size = simulator.settings.page_size
        start = (page - 1) * page_size
        return Resp.OK(data={
            "jobs": jobs[start:start + page_size],
            "totalCount": len(jobs),
        })

    @router.post("", summary="创建职位", status_code=201)
    async def create_job(
        data: JobCreate,
        db: Session = Depends(get_db),
        simulator: NetworkSimulator = Depends(get_simulator),
    ):
        """创建职位，放到列表末尾"""
        await simulator.delay()

        job = Job(
            title=data.title,
            slug=slugify(data.title),
            status=data.status,
            tags=list(data.tags),
            description=data.description,
        )
        OrderedCollectionStore(db, Job).add(job)

        api_logger.info(f"职位已创建: id={job.id}, order={job.order}")
        return Resp.Created(data=job)

    @router.get("/{job_id}", summary="职位详情")
    async def get_job(job_id: int, db: Session = Depends(get_db)):
        return Resp.OK(data=_get_job_or_404(db, job_id))

    @router.patch("/{job_id}", summary="更新职位")
    async def update_job(
        job_id: int,
        data: JobUpdate,
        db: Session = Depends(get_db),
        simulator: NetworkSimulator = Depends(get_simulator),
    ):
        """部分更新职位；标题变化时重新生成 slug"""
        await simulator.delay()

        job = _get_job_or_404(db, job_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        for key, value in updates.items():
            setattr(job, key, value)
        if "title" in updates:
            job.slug = slugify(job.title)

        commit_or_raise(db)
        db.refresh(job)
        return Resp.OK(data=job, message="更新成功")

    @router.patch(
        "/{job_id}/reorder",
        summary="拖拽重排",
        responses={
            404: {"model": ErrorResponse, "description": "职位不存在"},
            500: {"model": ErrorResponse, "description": "服务端错误，客户端需回滚"},
        },
    )
    async def reorder_job(
        job_id: int,
        data: ReorderPayload,
        db: Session = Depends(get_db),
        simulator: NetworkSimulator = Depends(get_simulator),
    ):
        """把 job_id 放到 referenceId 原来的位置，成功返回 {"success": true}"""
        if data.moved_id is not None and data.moved_id != job_id:
            api_logger.warning(f"请求体 movedId={data.moved_id} 与路径 id={job_id} 不一致，以路径为准")

        handler = ReorderHandler(OrderedCollectionStore(db, Job), simulator)
        await handler.reorder(ReorderIntent(moved_id=job_id, reference_id=data.reference_id))
        return Resp.OK(data={"success": True})

    @router.get("/{job_id}/candidates", summary="职位下的候选人")
    async def list_job_candidates(job_id: int, db: Session = Depends(get_db)):
        candidates = db.scalars(
            select(Candidate).where(Candidate.job_id == job_id).order_by(Candidate.id)
        ).all()
        return Resp.OK(data=list(candidates))

    return router


__all__ = ["create_jobs_router"]
