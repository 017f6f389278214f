"""数据模型"""

from .job import Job, JOB_STATUSES, slugify
from .candidate import Candidate, TimelineEvent, Note, STAGES
from .assessment import Assessment, AssessmentSubmission

__all__ = [
    "Job",
    "JOB_STATUSES",
    "slugify",
    "Candidate",
    "TimelineEvent",
    "Note",
    "STAGES",
    "Assessment",
    "AssessmentSubmission",
]
