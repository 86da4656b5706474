# labrecord/api/records.py
from typing import List

from fastapi import APIRouter, Depends, Response
from labrecord.api.deps import get_workflow, require_student
from labrecord.core.pdf_export import record_filename, render_record_pdf
from labrecord.crud import assignment as crud_assignment
from labrecord.crud import submission as crud_submission
from labrecord.db.models.user import User
from labrecord.schemas.record import Record, RecordSummary
from labrecord.services.workflow import SubmissionWorkflow

router = APIRouter()


@router.get("/", response_model=List[RecordSummary])
def list_records(
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    result = []
    seen = set()
    # rows come newest first; one record per assignment
    for sub in crud_submission.get_approved_code_for_student(workflow.db, current_user.id):
        if sub.assignment_id in seen:
            continue
        seen.add(sub.assignment_id)
        assignment = crud_assignment.get_assignment(workflow.db, sub.assignment_id)
        result.append(RecordSummary(
            id=sub.id,
            assignment_id=sub.assignment_id,
            assignment_title=assignment.title if assignment else "Unknown",
            language=sub.language,
            created_at=sub.created_at,
        ))
    return result


@router.get("/{assignment_id}", response_model=Record)
def read_record(
    assignment_id: int,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    return workflow.build_record(assignment_id, current_user.id)


@router.get("/{assignment_id}/pdf")
def download_record(
    assignment_id: int,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(require_student)
):
    record = workflow.build_record(assignment_id, current_user.id)
    # header values must stay ASCII
    filename = record_filename(record.title).encode("ascii", "ignore").decode()
    return Response(
        content=render_record_pdf(record),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
