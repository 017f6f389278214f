"""AssessmentDraftStore 测试"""

import pytest

from talentflow.client import AssessmentDraftStore, QUESTION_TYPES


@pytest.fixture
def draft():
    store = AssessmentDraftStore()
    store.set_initial_state({
        "jobId": 3,
        "sections": [{"id": "sec-1", "title": "Basics", "questions": []}],
    })
    return store


class TestSections:
    """章节"""

    def test_initial_state(self, draft):
        assert draft.job_id == 3
        assert draft.get_state()["sections"][0]["title"] == "Basics"

    def test_initial_state_is_copied(self):
        sections = [{"id": "sec-1", "title": "Basics", "questions": []}]
        store = AssessmentDraftStore()
        store.set_initial_state({"jobId": 1, "sections": sections})

        store.update_section_title("sec-1", "Changed")

        assert sections[0]["title"] == "Basics"

    def test_add_section(self, draft):
        section_id = draft.add_section()

        assert section_id.startswith("temp_")
        assert draft.sections[-1] == {"id": section_id, "title": "New Section", "questions": []}

    def test_temp_ids_unique(self, draft):
        assert draft.add_section() != draft.add_section()

    def test_update_and_remove_section(self, draft):
        draft.update_section_title("sec-1", "React")
        assert draft.sections[0]["title"] == "React"

        draft.remove_section("sec-1")
        assert draft.sections == []

    def test_unknown_section_is_noop(self, draft):
        before = draft.to_payload()
        draft.update_section_title("missing", "X")
        assert draft.to_payload() == before


class TestQuestions:
    """题目与选项"""

    def test_add_question(self, draft):
        question_id = draft.add_question("sec-1", "single-choice")

        question = draft.sections[0]["questions"][0]
        assert question == {"id": question_id, "type": "single-choice", "text": "", "options": []}

    @pytest.mark.parametrize("question_type", QUESTION_TYPES)
    def test_all_types_accepted(self, draft, question_type):
        draft.add_question("sec-1", question_type)
        assert draft.sections[0]["questions"][0]["type"] == question_type

    def test_unknown_type(self, draft):
        with pytest.raises(ValueError):
            draft.add_question("sec-1", "essay")

    def test_question_text_and_remove(self, draft):
        question_id = draft.add_question("sec-1", "long text")

        draft.update_question_text("sec-1", question_id, "Explain props vs state.")
        assert draft.sections[0]["questions"][0]["text"] == "Explain props vs state."

        draft.remove_question("sec-1", question_id)
        assert draft.sections[0]["questions"] == []

    def test_options(self, draft):
        question_id = draft.add_question("sec-1", "multi-choice")
        first = draft.add_option("sec-1", question_id)
        second = draft.add_option("sec-1", question_id, "useEffect")

        draft.update_option_text("sec-1", question_id, first, "useState")
        options = draft.sections[0]["questions"][0]["options"]
        assert [o["text"] for o in options] == ["useState", "useEffect"]

        draft.remove_option("sec-1", question_id, second)
        assert [o["id"] for o in draft.sections[0]["questions"][0]["options"]] == [first]


class TestSubscribe:
    """订阅"""

    def test_listeners_notified(self, draft):
        states = []
        unsubscribe = draft.subscribe(states.append)

        draft.add_section()
        draft.update_section_title("sec-1", "Intro")
        unsubscribe()
        draft.remove_section("sec-1")

        assert len(states) == 2
        assert states[-1]["sections"][0]["title"] == "Intro"

    def test_to_payload_is_detached(self, draft):
        payload = draft.to_payload()
        payload["sections"][0]["title"] = "Mutated"

        assert draft.sections[0]["title"] == "Basics"
