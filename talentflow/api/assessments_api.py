"""
测评 API

生成的路由:
    GET  /assessments/{job_id}         - 获取测评结构，不存在时返回空结构
    PUT  /assessments/{job_id}         - 保存测评结构（新增或覆盖）
    POST /assessments/{job_id}/submit  - 提交候选人答案
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from talentflow.log import api_logger
from talentflow.models import Assessment, AssessmentSubmission
from talentflow.response import Resp

from .deps import commit_or_raise, get_db
from .schemas import AssessmentPayload


def create_assessments_router() -> APIRouter:
    """创建测评路由（由应用以 prefix="/assessments" 挂载）"""
    router = APIRouter()

    @router.get("/{job_id}", summary="获取测评结构")
    async def get_assessment(job_id: int, db: Session = Depends(get_db)):
        assessment = db.scalar(select(Assessment).where(Assessment.job_id == job_id))
        if assessment is None:
            return Resp.OK(data={"jobId": job_id, "sections": []})
        return Resp.OK(data=assessment)

    @router.put("/{job_id}", summary="保存测评结构")
    async def save_assessment(job_id: int, data: AssessmentPayload, db: Session = Depends(get_db)):
        assessment = db.scalar(select(Assessment).where(Assessment.job_id == job_id))
        if assessment is None:
            db.add(Assessment(job_id=job_id, sections=data.sections))
        else:
            assessment.sections = data.sections
        commit_or_raise(db)
        return Resp.OK(data={"success": True}, message="保存成功")

    @router.post("/{job_id}/submit", summary="提交测评")
    async def submit_assessment(
        job_id: int,
        answers: Dict[str, Any] = Body(..., description="候选人答案"),
        db: Session = Depends(get_db),
    ):
        db.add(AssessmentSubmission(job_id=job_id, answers=answers))
        commit_or_raise(db)

        api_logger.info(f"收到职位 {job_id} 的测评提交（{len(answers)} 个字段）")
        return Resp.OK(
            data={"success": True, "message": "Submission received."},
            message="Submission received.",
        )

    return router


__all__ = ["create_assessments_router"]
