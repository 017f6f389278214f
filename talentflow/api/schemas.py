"""
接口请求 Schema

请求体字段使用驼峰命名（jobId、referenceId），同时接受下划线命名。
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class JobCreate(BaseModel):
    """创建职位请求"""
    title: str = Field(..., min_length=1, max_length=200, description="职位名称")
    status: str = Field("active", pattern="^(active|archived)$", description="状态")
    tags: List[str] = Field(default_factory=list, description="标签")
    description: Optional[str] = Field(None, description="职位描述")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Senior Frontend Engineer",
                "tags": ["react", "remote"],
            }
        }
    )


class JobUpdate(BaseModel):
    """更新职位请求

    order 只能通过重排接口修改，这里传入的 order 会被忽略。
    """
    title: Optional[str] = Field(None, min_length=1, max_length=200, description="职位名称")
    status: Optional[str] = Field(None, pattern="^(active|archived)$", description="状态")
    tags: Optional[List[str]] = Field(None, description="标签")
    description: Optional[str] = Field(None, description="职位描述")

    model_config = ConfigDict(extra="ignore")


class ReorderPayload(BaseModel):
    """拖拽重排请求

    同时接受 movedId/referenceId 与 activeId/overId 两种写法。
    路径中的 id 为被移动的职位，body 中的 movedId 仅用于校验。
    """
    moved_id: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("movedId", "activeId", "moved_id"),
        description="被移动的职位ID",
    )
    reference_id: int = Field(
        ...,
        validation_alias=AliasChoices("referenceId", "overId", "reference_id"),
        description="目标位置上原来的职位ID",
    )


class CandidateCreate(BaseModel):
    """创建候选人请求，阶段固定为 applied"""
    name: str = Field(..., min_length=1, max_length=200, description="姓名")
    email: str = Field(..., min_length=3, max_length=200, description="邮箱")
    job_id: Optional[int] = Field(
        None,
        validation_alias=AliasChoices("jobId", "job_id"),
        description="应聘职位ID",
    )


class CandidateStageUpdate(BaseModel):
    """候选人阶段变更请求

    stage 缺失或未知时由接口返回 400。
    """
    stage: Optional[str] = Field(None, description="目标阶段")


class NoteCreate(BaseModel):
    """新增备注请求"""
    content: str = Field(..., min_length=1, description="备注内容")


class AssessmentPayload(BaseModel):
    """测评结构"""
    sections: List[Dict[str, Any]] = Field(default_factory=list, description="测评分节")

    model_config = ConfigDict(extra="ignore")


__all__ = [
    "JobCreate",
    "JobUpdate",
    "ReorderPayload",
    "CandidateCreate",
    "CandidateStageUpdate",
    "NoteCreate",
    "AssessmentPayload",
]
