"""
候选人 API

生成的路由:
    GET   /candidates                  - 候选人列表（阶段筛选、姓名/邮箱搜索）
    POST  /candidates                  - 创建候选人（阶段固定为 applied）
    GET   /candidates/{id}             - 候选人详情
    PATCH /candidates/{id}             - 变更阶段，并写入时间线
    GET   /candidates/{id}/timeline    - 时间线（事件与备注合并，最新在前）
    GET   /candidates/{id}/notes       - 备注列表（最新在前）
    POST  /candidates/{id}/notes       - 新增备注
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from talentflow.exceptions import Err, ErrorCode
from talentflow.log import api_logger
from talentflow.models import STAGES, Candidate, Note, TimelineEvent
from talentflow.response import Resp
from talentflow.services import NetworkSimulator

from .deps import commit_or_raise, get_db, get_simulator
from .schemas import CandidateCreate, CandidateStageUpdate, NoteCreate


def _get_candidate_or_404(db: Session, candidate_id: int) -> Candidate:
    candidate = db.get(Candidate, candidate_id)
    if candidate is None:
        raise Err.not_found(f"候选人不存在: {candidate_id}", code=ErrorCode.CANDIDATE_NOT_FOUND)
    return candidate


def build_timeline(events, notes) -> list:
    """合并时间线事件与备注，按时间倒序

    事件渲染为 {"id": "evt-<id>", "date": ..., "event": ...}，
    备注渲染为 {"id": "note-<id>", "date": ..., "event": 'Note added: "<content>"'}。
    """
    items = [
        {"id": f"evt-{event.id}", "date": event.created_at, "event": event.event_text}
        for event in events
    ] + [
        {"id": f"note-{note.id}", "date": note.created_at, "event": f'Note added: "{note.content}"'}
        for note in notes
    ]
    items.sort(key=lambda item: item["date"], reverse=True)
    return items


def create_candidates_router() -> APIRouter:
    """创建候选人路由（由应用以 prefix="/candidates" 挂载）"""
    router = APIRouter()

    @router.get("", summary="候选人列表")
    async def list_candidates(
        stage: Optional[str] = Query(None, description="阶段筛选，all 表示不筛选"),
        search: Optional[str] = Query(None, description="按姓名或邮箱搜索（不区分大小写）"),
        db: Session = Depends(get_db),
        simulator: NetworkSimulator = Depends(get_simulator),
    ):
        await simulator.delay()

        stmt = select(Candidate).order_by(Candidate.id)
        if stage and stage != "all":
            stmt = stmt.where(Candidate.stage == stage)
        candidates = list(db.scalars(stmt).all())

        if search:
            needle = search.lower()
            candidates = [
                c for c in candidates
                if needle in c.name.lower() or needle in c.email.lower()
            ]

        return Resp.OK(data=candidates)

    @router.post("", summary="创建候选人", status_code=201)
    async def create_candidate(data: CandidateCreate, db: Session = Depends(get_db)):
        candidate = Candidate(name=data.name, email=data.email, job_id=data.job_id, stage="applied")
        db.add(candidate)
        commit_or_raise(db)
        db.refresh(candidate)
        return Resp.Created(data=candidate)

    @router.get("/{candidate_id}", summary="候选人详情")
    async def get_candidate(candidate_id: int, db: Session = Depends(get_db)):
        return Resp.OK(data=_get_candidate_or_404(db, candidate_id))

    @router.patch("/{candidate_id}", summary="变更候选人阶段")
    async def update_candidate_stage(
        candidate_id: int,
        data: CandidateStageUpdate,
        db: Session = Depends(get_db),
    ):
        """变更阶段并记录时间线事件 "Moved from '<old>' to '<new>' stage." """
        if not data.stage:
            raise Err.fail("Stage is required", code=ErrorCode.INVALID_PARAMETER)
        if data.stage not in STAGES:
            raise Err.fail(
                f"Unknown stage: {data.stage}",
                code=ErrorCode.INVALID_PARAMETER,
                details=[f"stage 必须是以下之一: {', '.join(STAGES)}"],
            )

        candidate = _get_candidate_or_404(db, candidate_id)
        old_stage = candidate.stage
        candidate.stage = data.stage
        db.add(TimelineEvent(
            candidate_id=candidate.id,
            event_text=f"Moved from '{old_stage}' to '{data.stage}' stage.",
        ))
        commit_or_raise(db)
        db.refresh(candidate)

        api_logger.info(f"候选人 {candidate_id} 阶段变更: {old_stage} -> {data.stage}")
        return Resp.OK(data=candidate)

    @router.get("/{candidate_id}/timeline", summary="候选人时间线")
    async def get_timeline(candidate_id: int, db: Session = Depends(get_db)):
        events = db.scalars(
            select(TimelineEvent).where(TimelineEvent.candidate_id == candidate_id).order_by(TimelineEvent.id)
        ).all()
        notes = db.scalars(
            select(Note).where(Note.candidate_id == candidate_id).order_by(Note.id)
        ).all()
        return Resp.OK(data=build_timeline(events, notes))

    @router.get("/{candidate_id}/notes", summary="候选人备注")
    async def list_notes(candidate_id: int, db: Session = Depends(get_db)):
        notes = db.scalars(
            select(Note).where(Note.candidate_id == candidate_id).order_by(Note.id.desc())
        ).all()
        return Resp.OK(data=list(notes))

    @router.post("/{candidate_id}/notes", summary="新增备注", status_code=201)
    async def add_note(candidate_id: int, data: NoteCreate, db: Session = Depends(get_db)):
        _get_candidate_or_404(db, candidate_id)
        note = Note(candidate_id=candidate_id, content=data.content)
        db.add(note)
        commit_or_raise(db)
        db.refresh(note)
        return Resp.Created(data=note)

    return router


__all__ = ["create_candidates_router", "build_timeline"]
