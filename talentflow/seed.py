"""示例数据

seed_initial_data 只在对应表为空时写入，重复调用不会产生重复数据。
传入固定种子的 random.Random 时结果完全确定。

使用示例:
    with database.session_scope() as session:
        seed_initial_data(session, rng=random.Random(42), candidate_count=100)
"""

import copy
import random
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from talentflow.log import get_logger
from talentflow.models import STAGES, Assessment, Candidate, Job, TimelineEvent, slugify

logger = get_logger()

FIRST_NAMES = ["John", "Aisha", "Ben", "Chloe", "David", "Eva", "Frank", "Grace", "Henry", "Isla", "Jack"]
LAST_NAMES = ["Doe", "Khan", "Smith", "Li", "Jones", "Chen", "Williams", "Garcia", "Miller", "Davis", "Rodriguez"]

# (title, status, tags)
JOB_SEED_DATA = [
    ("Frontend Developer", "active", ["React", "CSS", "TypeScript"]),
    ("Backend Engineer", "active", ["Node.js", "SQL", "MongoDB"]),
    ("Full Stack Developer", "archived", ["React", "Node.js", "SQL"]),
    ("DevOps Engineer", "active", ["AWS", "Docker", "Kubernetes"]),
    ("Data Scientist", "active", ["Python", "Machine Learning", "SQL"]),
    ("Machine Learning Engineer", "archived", ["Python", "Machine Learning", "Docker"]),
    ("UI/UX Designer", "active", ["React", "CSS", "Agile"]),
    ("Mobile App Developer", "active", ["React", "Java", "Testing"]),
    ("Cloud Architect", "archived", ["AWS", "Kubernetes", "Docker"]),
    ("QA Engineer", "active", ["Testing", "Agile", "SQL"]),
    ("Security Engineer", "active", ["Java", "SQL", "Agile"]),
    ("System Administrator", "archived", ["Linux", "AWS", "Docker"]),
    ("Database Administrator", "active", ["SQL", "MongoDB", "Python"]),
    ("AI Researcher", "active", ["Python", "Machine Learning", "C++"]),
    ("Product Manager", "archived", ["Agile", "React", "SQL"]),
    ("Technical Writer", "active", ["Agile", "Testing", "SQL"]),
    ("Game Developer", "active", ["C++", "Java", "React"]),
    ("Blockchain Developer", "archived", ["Java", "SQL", "Testing"]),
    ("Site Reliability Engineer", "active", ["Linux", "Kubernetes", "Python"]),
    ("Junior Full Stack Developer", "active", ["React", "Node.js", "Testing"]),
]

FRONTEND_ASSESSMENT = [
    {
        "id": "sec-1",
        "title": "React Fundamentals",
        "questions": [
            {
                "id": "q-1",
                "type": "single-choice",
                "text": "Which hook manages local component state?",
                "options": [
                    {"id": "opt-1", "text": "useState"},
                    {"id": "opt-2", "text": "useEffect"},
                    {"id": "opt-3", "text": "useMemo"},
                ],
            },
            {
                "id": "q-2",
                "type": "long text",
                "text": "Explain the difference between props and state.",
                "options": [],
            },
        ],
    }
]


def _count(session: Session, model) -> int:
    return session.scalar(select(func.count()).select_from(model)) or 0


def seed_initial_data(
    session: Session,
    rng: Optional[random.Random] = None,
    candidate_count: int = 1000,
) -> Dict[str, int]:
    """填充示例数据（幂等）

    Args:
        session: 数据库会话（函数内提交）
        rng: 随机数源，默认新建 random.Random()
        candidate_count: 候选人数量

    Returns:
        本次新写入的记录数，如 {"jobs": 20, "candidates": 1000, "timeline": 5, "assessments": 1}
    """
    rng = rng or random.Random()
    created = {"jobs": 0, "candidates": 0, "timeline": 0, "assessments": 0}

    if _count(session, Job) == 0:
        for order, (title, status, tags) in enumerate(JOB_SEED_DATA, 1):
            session.add(Job(
                title=title,
                slug=slugify(title),
                status=status,
                tags=list(tags),
                description=f"We are hiring a {title} to join our team.",
                order=order,
            ))
        session.flush()
        created["jobs"] = len(JOB_SEED_DATA)

    job_ids = list(session.scalars(select(Job.id).order_by(Job.id)).all())

    if _count(session, Candidate) == 0 and job_ids:
        for i in range(candidate_count):
            first = rng.choice(FIRST_NAMES)
            last = rng.choice(LAST_NAMES)
            session.add(Candidate(
                name=f"{first} {last} #{i + 1}",
                email=f"{first.lower()}.{last.lower()}{i + 1}@example.com",
                stage=rng.choice(STAGES),
                job_id=rng.choice(job_ids),
            ))
        session.flush()
        created["candidates"] = candidate_count

    if _count(session, TimelineEvent) == 0:
        first_candidates = session.scalars(select(Candidate).order_by(Candidate.id).limit(5)).all()
        for candidate in first_candidates:
            job = session.get(Job, candidate.job_id) if candidate.job_id else None
            title = job.title if job is not None else "an open position"
            session.add(TimelineEvent(candidate_id=candidate.id, event_text=f"Applied for {title}."))
            created["timeline"] += 1

    if _count(session, Assessment) == 0 and job_ids:
        session.add(Assessment(job_id=job_ids[0], sections=copy.deepcopy(FRONTEND_ASSESSMENT)))
        created["assessments"] = 1

    session.commit()

    if any(created.values()):
        logger.info(f"示例数据已写入: {created}")
    return created


__all__ = ["seed_initial_data", "JOB_SEED_DATA"]
