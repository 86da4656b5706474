# labrecord/api/submissions.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from labrecord.api.deps import get_workflow, require_student, require_teacher
from labrecord.db.models.user import User
from labrecord.schemas.submission import (
    AlgorithmSubmit,
    AlgorithmSubmission,
    AssignmentProgress,
    CodeReviewItem,
    CodeSubmission,
    CodeSubmit,
    ProgressReport,
    Review,
)
from labrecord.services.workflow import SubmissionWorkflow

logger = logging.getLogger(__name__)

router = APIRouter()


# === Student side ===

@router.post("/assignments/{assignment_id}/algorithm", response_model=AlgorithmSubmission)
def submit_algorithm(
    assignment_id: int,
    body: AlgorithmSubmit,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    workflow.ensure_assignment(assignment_id)
    workflow.ensure_can_submit_algorithm(assignment_id, current_user.id)
    return workflow.submit_algorithm(assignment_id, current_user.id, body.content)


@router.get("/assignments/{assignment_id}/algorithm", response_model=List[AlgorithmSubmission])
def algorithm_history(
    assignment_id: int,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    return workflow.algorithm_history(assignment_id, current_user.id)


@router.post("/assignments/{assignment_id}/code", response_model=CodeSubmission)
def submit_code(
    assignment_id: int,
    body: CodeSubmit,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    workflow.ensure_assignment(assignment_id)
    # coding opens only after the algorithm is approved
    workflow.ensure_can_submit_code(assignment_id, current_user.id)
    return workflow.submit_code(
        assignment_id, current_user.id, body.code, body.language, body.output
    )


@router.get("/assignments/{assignment_id}/code", response_model=List[CodeSubmission])
def code_history(
    assignment_id: int,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    return workflow.code_history(assignment_id, current_user.id)


@router.get("/assignments/{assignment_id}/status", response_model=ProgressReport)
def my_status(
    assignment_id: int,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    workflow.ensure_assignment(assignment_id)
    return workflow.progress(assignment_id, current_user.id)


@router.get("/progress", response_model=List[AssignmentProgress])
def my_progress(
    classroom_id: Optional[int] = Query(None),
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    return workflow.progress_overview(current_user.id, classroom_id)


# === Teacher side ===

@router.get("/assignments/{assignment_id}/students/{student_id}/status", response_model=ProgressReport)
def student_status(
    assignment_id: int,
    student_id: int,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_teacher)
):
    workflow.ensure_assignment(assignment_id)
    return workflow.progress(assignment_id, student_id)


@router.get("/algorithms/pending", response_model=List[AlgorithmSubmission])
def pending_algorithms(
    assignment_id: Optional[int] = Query(None),
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_teacher)
):
    return workflow.pending_algorithms(assignment_id)


@router.post("/algorithms/{submission_id}/review", response_model=AlgorithmSubmission)
def review_algorithm(
    submission_id: int,
    review: Review,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_teacher)
):
    logger.info(f"🔍 [Review] Teacher {current_user.id} → algorithm {submission_id}: {review.decision.value}")
    return workflow.review_algorithm(submission_id, review.decision, review.feedback)


@router.get("/code/pending", response_model=List[CodeReviewItem])
def pending_code(
    assignment_id: Optional[int] = Query(None),
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_teacher)
):
    items = []
    for sub in workflow.pending_code(assignment_id):
        algorithm = workflow.latest_approved_algorithm(sub.assignment_id, sub.student_id)
        item = CodeReviewItem.model_validate(sub)
        item.algorithm = algorithm.content if algorithm else None
        items.append(item)
    return items


@router.post("/code/{submission_id}/review", response_model=CodeSubmission)
def review_code(
    submission_id: int,
    review: Review,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_teacher)
):
    logger.info(f"🔍 [Review] Teacher {current_user.id} → code {submission_id}: {review.decision.value}")
    return workflow.review_code(submission_id, review.decision, review.feedback)
