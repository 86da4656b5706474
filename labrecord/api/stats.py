# labrecord/api/stats.py
from fastapi import APIRouter, Depends, Query
from labrecord.api.deps import get_workflow, require_teacher
from labrecord.db.models.user import User
from labrecord.schemas.submission import ReviewStats
from labrecord.services.workflow import SubmissionWorkflow

router = APIRouter()


@router.get("/", response_model=ReviewStats)
def review_stats(
    recent: int = Query(8, ge=0, le=50),
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_teacher)
):
    """Counts for the reviewer dashboard plus the newest submissions of both kinds."""
    return workflow.review_stats(recent)
