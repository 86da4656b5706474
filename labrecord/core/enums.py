# labrecord/core/enums.py
from enum import Enum


class UserRole(str, Enum):
    TEACHER = "teacher"
    STUDENT = "student"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewDecision(str, Enum):
    """Outcome a reviewer picks for an algorithm or a code submission."""

    APPROVED = "approved"
    REJECTED = "rejected"


class ProgressStatus(str, Enum):
    """Derived stage of one (assignment, student) pair. Never stored."""

    NOT_STARTED = "not_started"
    ALGORITHM_PENDING = "algorithm_pending"
    ALGORITHM_REJECTED = "algorithm_rejected"
    CODING_STAGE = "coding_stage"
    CODE_SUBMITTED = "code_submitted"
    FINAL_APPROVED = "final_approved"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
