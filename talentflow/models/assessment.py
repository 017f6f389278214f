"""测评模型"""

from typing import Any, Dict, List

from sqlalchemy import JSON, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from talentflow.orm import BaseModel


class Assessment(BaseModel):
    """职位测评结构，每个职位至多一份

    sections 结构:
        [{"id": ..., "title": "...", "questions": [{"id": ..., "type": "...", "text": "...", "options": [...]}]}]
    """

    job_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("job.id"), nullable=False, unique=True, index=True
    )
    sections: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list, nullable=False)


class AssessmentSubmission(BaseModel):
    """候选人提交的测评答案"""

    job_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    answers: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)
