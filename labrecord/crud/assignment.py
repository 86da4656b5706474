from typing import Optional

from sqlalchemy.orm import Session
from labrecord.crud.base import read, save
from labrecord.db.models.assignment import Assignment

def create_assignment(db: Session, assignment_data, teacher_id: int):
    db_assignment = Assignment(
        title=assignment_data.title.strip(),
        description=assignment_data.description,
        classroom_id=assignment_data.classroom_id,
        details=assignment_data.details.model_dump(mode="json"),
        teacher_id=teacher_id,
        status="active",
    )
    return save(db, db_assignment)

@read
def get_assignment(db: Session, assignment_id: int):
    return db.query(Assignment).filter(Assignment.id == assignment_id).first()

@read
def get_assignments(db: Session, classroom_id: Optional[int] = None):
    query = db.query(Assignment)
    if classroom_id is not None:
        query = query.filter(Assignment.classroom_id == classroom_id)
    return query.order_by(Assignment.created_at.desc(), Assignment.id.desc()).all()

@read
def count_assignments(db: Session) -> int:
    return db.query(Assignment).count()

def update_assignment(db: Session, db_assignment: Assignment, changes):
    data = changes.model_dump(exclude_unset=True, mode="json")
    for field, value in data.items():
        if value is None and field in ("title", "status", "details"):
            continue
        setattr(db_assignment, field, value)
    return save(db, db_assignment)
