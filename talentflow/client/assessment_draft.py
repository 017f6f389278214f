"""测评编辑草稿

编辑器里的测评结构（章节 -> 题目 -> 选项）先在本地修改，保存时通过 to_payload()
整体提交给 PUT /assessments/{job_id}。新建的章节、题目、选项使用 temp_ 前缀的临时 id。

每次修改都替换 sections 列表（不原地修改旧的章节对象），订阅者在修改后收到新的状态。
引用不存在的 id 时什么也不做。

使用示例:
    draft = AssessmentDraftStore()
    draft.set_initial_state(await api.get_assessment(3))

    section_id = draft.add_section()
    question_id = draft.add_question(section_id, "single-choice")
    draft.update_question_text(section_id, question_id, "Which hook manages state?")
    option_id = draft.add_option(section_id, question_id)
    draft.update_option_text(section_id, question_id, option_id, "useState")

    await api.save_assessment(draft.job_id, draft.to_payload()["sections"])
"""

import copy
import uuid
from typing import Any, Callable, Dict, List, Optional

from talentflow.log import client_logger

QUESTION_TYPES = (
    "single-choice",
    "multi-choice",
    "short text",
    "long text",
    "numeric",
    "file upload",
)
CHOICE_TYPES = ("single-choice", "multi-choice")

Listener = Callable[[Dict[str, Any]], None]


def _temp_id() -> str:
    return f"temp_{uuid.uuid4().hex[:12]}"


class AssessmentDraftStore:
    """测评草稿

    属性:
        job_id: 所属职位
        sections: 章节列表
    """

    def __init__(self, job_id: Optional[int] = None, sections: Optional[List[Dict[str, Any]]] = None):
        self.job_id = job_id
        self.sections: List[Dict[str, Any]] = copy.deepcopy(sections or [])
        self._listeners: List[Listener] = []

    # ==================== 订阅 ====================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """订阅变更，返回取消订阅的函数"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_state(self) -> Dict[str, Any]:
        return {"jobId": self.job_id, "sections": self.sections}

    def _set_sections(self, sections: List[Dict[str, Any]]) -> None:
        self.sections = sections
        state = self.get_state()
        for listener in list(self._listeners):
            listener(state)

    def _map_section(self, section_id: str, update: Callable[[Dict[str, Any]], Dict[str, Any]]) -> None:
        self._set_sections([
            update(section) if section["id"] == section_id else section
            for section in self.sections
        ])

    def _map_question(
        self,
        section_id: str,
        question_id: str,
        update: Callable[[Dict[str, Any]], Dict[str, Any]],
    ) -> None:
        self._map_section(section_id, lambda section: {
            **section,
            "questions": [
                update(question) if question["id"] == question_id else question
                for question in section.get("questions", [])
            ],
        })

    # ==================== 整体 ====================

    def set_initial_state(self, state: Dict[str, Any]) -> None:
        """用服务端返回的测评结构初始化

        Args:
            state: {"jobId": ..., "sections": [...]}，缺失的键保持不变
        """
        if "jobId" in state:
            self.job_id = state["jobId"]
        elif "job_id" in state:
            self.job_id = state["job_id"]
        if "sections" in state:
            self._set_sections(copy.deepcopy(state["sections"] or []))
        client_logger.debug(f"测评草稿已载入: job={self.job_id}, sections={len(self.sections)}")

    def to_payload(self) -> Dict[str, Any]:
        """保存用的请求体（深拷贝）"""
        return {"sections": copy.deepcopy(self.sections)}

    # ==================== 章节 ====================

    def add_section(self, title: str = "New Section") -> str:
        section_id = _temp_id()
        self._set_sections([*self.sections, {"id": section_id, "title": title, "questions": []}])
        return section_id

    def update_section_title(self, section_id: str, title: str) -> None:
        self._map_section(section_id, lambda section: {**section, "title": title})

    def remove_section(self, section_id: str) -> None:
        self._set_sections([section for section in self.sections if section["id"] != section_id])

    # ==================== 题目 ====================

    def add_question(self, section_id: str, question_type: str) -> str:
        """在章节末尾添加题目

        Raises:
            ValueError: 题型不在 QUESTION_TYPES 中
        """
        if question_type not in QUESTION_TYPES:
            raise ValueError(f"Unknown question type: {question_type!r}")

        question_id = _temp_id()
        question = {"id": question_id, "type": question_type, "text": "", "options": []}
        self._map_section(section_id, lambda section: {
            **section,
            "questions": [*section.get("questions", []), question],
        })
        return question_id

    def update_question_text(self, section_id: str, question_id: str, text: str) -> None:
        self._map_question(section_id, question_id, lambda question: {**question, "text": text})

    def remove_question(self, section_id: str, question_id: str) -> None:
        self._map_section(section_id, lambda section: {
            **section,
            "questions": [q for q in section.get("questions", []) if q["id"] != question_id],
        })

    # ==================== 选项 ====================

    def add_option(self, section_id: str, question_id: str, text: str = "") -> str:
        option_id = _temp_id()
        self._map_question(section_id, question_id, lambda question: {
            **question,
            "options": [*question.get("options", []), {"id": option_id, "text": text}],
        })
        return option_id

    def update_option_text(self, section_id: str, question_id: str, option_id: str, text: str) -> None:
        self._map_question(section_id, question_id, lambda question: {
            **question,
            "options": [
                {**option, "text": text} if option["id"] == option_id else option
                for option in question.get("options", [])
            ],
        })

    def remove_option(self, section_id: str, question_id: str, option_id: str) -> None:
        self._map_question(section_id, question_id, lambda question: {
            **question,
            "options": [o for o in question.get("options", []) if o["id"] != option_id],
        })


__all__ = ["AssessmentDraftStore", "QUESTION_TYPES", "CHOICE_TYPES"]
