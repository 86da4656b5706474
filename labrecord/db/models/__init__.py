from labrecord.db.base import Base
from labrecord.db.models.user import User
from labrecord.db.models.assignment import Assignment
from labrecord.db.models.algorithm_submission import AlgorithmSubmission
from labrecord.db.models.code_submission import CodeSubmission

__all__ = ["Base", "User", "Assignment", "AlgorithmSubmission", "CodeSubmission"]
