from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from labrecord.core.enums import ProgressStatus, ReviewDecision

class AlgorithmSubmit(BaseModel):
    content: str

class CodeSubmit(BaseModel):
    code: str
    language: str
    output: Optional[str] = None

class Review(BaseModel):
    decision: ReviewDecision
    feedback: Optional[str] = None

class AlgorithmSubmission(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    content: str
    status: str
    feedback: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class CodeSubmission(BaseModel):
    id: int
    assignment_id: int
    student_id: int
    code: str
    language: str
    output: Optional[str] = None
    status: str
    feedback: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class CodeReviewItem(CodeSubmission):
    """Pending code shown to a reviewer next to the approved algorithm."""

    algorithm: Optional[str] = None

class ProgressReport(BaseModel):
    status: ProgressStatus
    algorithm_feedback: Optional[str] = None
    code_feedback: Optional[str] = None
    code_rejected: bool = False

class AssignmentProgress(BaseModel):
    assignment_id: int
    title: str
    classroom_id: Optional[int] = None
    progress: ProgressReport

class RecentActivity(BaseModel):
    id: int
    kind: str  # "algorithm" or "code"
    assignment_id: int
    student_id: int
    status: str
    created_at: datetime

class ReviewStats(BaseModel):
    total_assignments: int
    pending_algorithms: int
    pending_code: int
    approved_code: int
    recent: List[RecentActivity] = []
