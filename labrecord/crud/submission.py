# labrecord/crud/submission.py
# Both submission tables are append-only: rows are inserted, then only their
# status/feedback change on review.
from typing import Optional

from sqlalchemy.orm import Session
from labrecord.crud.base import read, save
from labrecord.db.models.algorithm_submission import AlgorithmSubmission
from labrecord.db.models.code_submission import CodeSubmission


def _newest_first(model):
    return (model.created_at.desc(), model.id.desc())


def _for_pair(db: Session, model, assignment_id: int, student_id: int):
    return db.query(model).filter(
        model.assignment_id == assignment_id,
        model.student_id == student_id,
    )


def create_algorithm_submission(db: Session, assignment_id: int, student_id: int, content: str):
    row = AlgorithmSubmission(
        assignment_id=assignment_id,
        student_id=student_id,
        content=content,
        status="pending",
    )
    return save(db, row)


def create_code_submission(
    db: Session,
    assignment_id: int,
    student_id: int,
    code: str,
    language: str,
    output: Optional[str] = None,
):
    row = CodeSubmission(
        assignment_id=assignment_id,
        student_id=student_id,
        code=code,
        language=language,
        output=output,
        status="pending",
    )
    return save(db, row)


@read
def get_algorithm_submission(db: Session, submission_id: int):
    return db.query(AlgorithmSubmission).filter(AlgorithmSubmission.id == submission_id).first()


@read
def get_code_submission(db: Session, submission_id: int):
    return db.query(CodeSubmission).filter(CodeSubmission.id == submission_id).first()


@read
def get_latest(db: Session, model, assignment_id: int, student_id: int, status: Optional[str] = None):
    query = _for_pair(db, model, assignment_id, student_id)
    if status is not None:
        query = query.filter(model.status == status)
    return query.order_by(*_newest_first(model)).first()


@read
def get_history(db: Session, model, assignment_id: int, student_id: int):
    return _for_pair(db, model, assignment_id, student_id).order_by(*_newest_first(model)).all()


@read
def get_by_status(db: Session, model, status: str, assignment_id: Optional[int] = None):
    query = db.query(model).filter(model.status == status)
    if assignment_id is not None:
        query = query.filter(model.assignment_id == assignment_id)
    # review queues are served oldest first
    return query.order_by(model.created_at.asc(), model.id.asc()).all()


@read
def get_approved_code_for_student(db: Session, student_id: int):
    return (
        db.query(CodeSubmission)
        .filter(CodeSubmission.student_id == student_id, CodeSubmission.status == "approved")
        .order_by(*_newest_first(CodeSubmission))
        .all()
    )


def set_review(db: Session, row, status: str, feedback: Optional[str]):
    row.status = status
    row.feedback = feedback
    return save(db, row)


@read
def get_recent(db: Session, model, limit: int = 8):
    return db.query(model).order_by(*_newest_first(model)).limit(limit).all()


@read
def count_by_status(db: Session, model, status: str) -> int:
    return db.query(model).filter(model.status == status).count()
