from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from labrecord.api.deps import get_db, get_current_user, require_teacher
from labrecord.core.errors import NotFoundError
from labrecord.db.models.user import User
from labrecord.schemas.assignment import AssignmentCreate, AssignmentUpdate, Assignment
from labrecord.crud import assignment as crud_assignment

router = APIRouter()

# Only teachers publish assignments
@router.post("/", response_model=Assignment)
def create_assignment(
    assignment_in: AssignmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher)
):
    return crud_assignment.create_assignment(db, assignment_in, teacher_id=current_user.id)

@router.get("/", response_model=List[Assignment])
def read_assignments(
    classroom_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return crud_assignment.get_assignments(db, classroom_id)

@router.get("/{assignment_id}", response_model=Assignment)
def read_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    assignment = crud_assignment.get_assignment(db, assignment_id)
    if not assignment:
        raise NotFoundError("Assignment not found")
    return assignment

# Metadata edits, owner only
@router.patch("/{assignment_id}", response_model=Assignment)
def update_assignment(
    assignment_id: int,
    changes: AssignmentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_teacher)
):
    assignment = crud_assignment.get_assignment(db, assignment_id)
    if not assignment:
        raise NotFoundError("Assignment not found")
    if assignment.teacher_id != current_user.id:
        raise HTTPException(status_code=403, detail="Only the owning teacher can edit this assignment")
    return crud_assignment.update_assignment(db, assignment, changes)
