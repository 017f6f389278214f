"""ORM 基础设施测试

1. 命名转换与 to_dict
2. SortableMixin 排序查询
3. DatabaseManager 会话管理
"""

import pytest
from sqlalchemy import text

from talentflow.models import Candidate, Job, TimelineEvent, slugify
from talentflow.orm import DatabaseManager, to_camel_case, to_snake_case


class TestNaming:
    """命名转换"""

    def test_snake_case(self):
        assert to_snake_case("TimelineEvent") == "timeline_event"
        assert to_snake_case("AssessmentSubmission") == "assessment_submission"

    def test_camel_case(self):
        assert to_camel_case("job_id") == "jobId"
        assert to_camel_case("created_at") == "createdAt"
        assert to_camel_case("title") == "title"

    def test_table_names(self):
        assert Job.__tablename__ == "job"
        assert TimelineEvent.__tablename__ == "timeline_event"

    def test_slugify(self):
        assert slugify("Senior  Frontend\tEngineer") == "senior-frontend-engineer"


class TestBaseModel:
    """BaseModel"""

    def test_system_fields_ignored(self):
        job = Job(id=99, title="QA", slug="qa", status="active", tags=[])
        assert job.id is None

    def test_to_dict(self, db_session):
        candidate = Candidate(name="Ada", email="ada@example.com", stage="applied", job_id=None)
        db_session.add(candidate)
        db_session.commit()

        data = candidate.to_dict()

        assert data["jobId"] is None
        assert data["name"] == "Ada"
        assert data["createdAt"] is not None
        assert "email" not in candidate.to_dict(exclude={"email"})


class TestSortableMixin:
    """SortableMixin"""

    def test_ties_broken_by_id(self, db_session, make_jobs):
        make_jobs(4, orders=[2, 1, 2, 1])
        assert [job.id for job in Job.get_sorted(db_session)] == [2, 4, 1, 3]

    def test_desc(self, db_session, make_jobs):
        make_jobs(3)
        assert [job.id for job in Job.get_sorted(db_session, desc=True)] == [3, 2, 1]

    def test_sorted_select_with_filter(self, db_session, make_jobs):
        make_jobs(2, orders=[2, 1])
        make_jobs(1, orders=[3], status="archived")

        stmt = Job.sorted_select().where(Job.status == "active")

        assert [job.id for job in db_session.scalars(stmt)] == [2, 1]

    def test_empty(self, db_session):
        assert Job.get_sorted(db_session) == []


class TestDatabaseManager:
    """DatabaseManager"""

    def test_not_initialized(self):
        manager = DatabaseManager()

        assert not manager.is_initialized
        with pytest.raises(RuntimeError):
            manager.engine
        with pytest.raises(RuntimeError):
            manager.new_session()

    def test_requires_url(self):
        with pytest.raises(ValueError):
            DatabaseManager().init()

    def test_session_scope_commits(self, database):
        with database.session_scope() as session:
            session.add(Job(title="A", slug="a", status="active", tags=[], order=1))

        with database.session_scope() as session:
            assert session.scalar(text("SELECT COUNT(*) FROM job")) == 1

    def test_session_scope_rolls_back(self, database):
        with pytest.raises(RuntimeError):
            with database.session_scope() as session:
                session.add(Job(title="A", slug="a", status="active", tags=[], order=1))
                session.flush()
                raise RuntimeError("abort")

        with database.session_scope() as session:
            assert session.scalar(text("SELECT COUNT(*) FROM job")) == 0

    def test_file_database(self, temp_dir):
        import os

        manager = DatabaseManager()
        manager.init(database_url=f"sqlite:///{os.path.join(temp_dir, 'talentflow-test.db')}")
        manager.create_all()

        assert manager.is_initialized
        manager.drop_all()
        manager.dispose()
