"""候选人、时间线与备注模型"""

from typing import Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from talentflow.orm import BaseModel


# 看板列顺序
STAGES = ("applied", "screen", "tech", "offer", "hired", "rejected")


class Candidate(BaseModel):
    """候选人，在看板各阶段之间移动"""

    name: Mapped[str] = mapped_column(String(200), nullable=False, comment="姓名")
    email: Mapped[str] = mapped_column(String(200), nullable=False, index=True, comment="邮箱")
    stage: Mapped[str] = mapped_column(String(20), default="applied", nullable=False, index=True, comment="所处阶段")
    job_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("job.id"), nullable=True, index=True, comment="应聘职位"
    )


class TimelineEvent(BaseModel):
    """候选人时间线事件（阶段变更等），created_at 即事件时间"""

    candidate_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("candidate.id"), nullable=False, index=True
    )
    event_text: Mapped[str] = mapped_column(Text, nullable=False)


class Note(BaseModel):
    """候选人备注"""

    candidate_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("candidate.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
