import asyncio
from datetime import datetime, timedelta

import pytest

from labrecord.core.enums import ProgressStatus, ReviewDecision
from labrecord.core.errors import NotFoundError, ValidationError
from labrecord.db import AlgorithmSubmission, CodeSubmission


def add_algorithm(db, assignment, student, status, created_at, content="steps"):
    row = AlgorithmSubmission(
        assignment_id=assignment.id,
        student_id=student.id,
        content=content,
        status=status,
        created_at=created_at,
    )
    db.add(row)
    db.commit()
    return row


def add_code(db, assignment, student, status, created_at, code="print(1)"):
    row = CodeSubmission(
        assignment_id=assignment.id,
        student_id=student.id,
        code=code,
        language="python",
        status=status,
        created_at=created_at,
    )
    db.add(row)
    db.commit()
    return row


NOW = datetime(2026, 3, 1, 12, 0, 0)


def test_no_rows_is_not_started(workflow, assignment, student):
    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.NOT_STARTED


@pytest.mark.parametrize(
    "algorithm_status, code_status, expected",
    [
        ("pending", None, ProgressStatus.ALGORITHM_PENDING),
        ("rejected", None, ProgressStatus.ALGORITHM_REJECTED),
        ("approved", None, ProgressStatus.CODING_STAGE),
        ("approved", "pending", ProgressStatus.CODE_SUBMITTED),
        ("approved", "approved", ProgressStatus.FINAL_APPROVED),
        # a rejected code row counts as no code row
        ("approved", "rejected", ProgressStatus.CODING_STAGE),
        # code facts win over algorithm facts
        ("rejected", "approved", ProgressStatus.FINAL_APPROVED),
        ("pending", "pending", ProgressStatus.CODE_SUBMITTED),
        (None, "rejected", ProgressStatus.NOT_STARTED),
    ],
)
def test_priority_table(db, workflow, assignment, student, algorithm_status, code_status, expected):
    if algorithm_status:
        add_algorithm(db, assignment, student, algorithm_status, NOW)
    if code_status:
        add_code(db, assignment, student, code_status, NOW + timedelta(minutes=5))

    assert workflow.derive_status(assignment.id, student.id) == expected


def test_only_latest_row_counts(db, workflow, assignment, student):
    add_algorithm(db, assignment, student, "rejected", NOW - timedelta(days=2))
    add_algorithm(db, assignment, student, "approved", NOW)

    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.CODING_STAGE


def test_older_row_inserted_later_does_not_change_status(db, workflow, assignment, student):
    add_algorithm(db, assignment, student, "approved", NOW)
    add_code(db, assignment, student, "approved", NOW + timedelta(hours=1))
    before = workflow.derive_status(assignment.id, student.id)

    add_algorithm(db, assignment, student, "pending", NOW - timedelta(days=1))
    add_code(db, assignment, student, "pending", NOW - timedelta(days=1))

    assert before == ProgressStatus.FINAL_APPROVED
    assert workflow.derive_status(assignment.id, student.id) == before


def test_pairs_are_independent(db, workflow, assignment, student, other_student):
    add_algorithm(db, assignment, other_student, "approved", NOW)

    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.NOT_STARTED
    assert workflow.derive_status(assignment.id, other_student.id) == ProgressStatus.CODING_STAGE


def test_submit_algorithm_goes_pending(workflow, assignment, student):
    row = workflow.submit_algorithm(assignment.id, student.id, "  read a, b; print a+b  ")

    assert row.status == "pending"
    assert row.content == "read a, b; print a+b"
    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.ALGORITHM_PENDING


@pytest.mark.parametrize("content", ["", "   ", "\n\t", None])
def test_submit_algorithm_rejects_blank(workflow, assignment, student, content):
    with pytest.raises(ValidationError):
        workflow.submit_algorithm(assignment.id, student.id, content)
    assert workflow.algorithm_history(assignment.id, student.id) == []


def test_submit_code_rejects_blank(workflow, assignment, student):
    with pytest.raises(ValidationError):
        workflow.submit_code(assignment.id, student.id, "   ", "python")
    assert workflow.code_history(assignment.id, student.id) == []


def test_review_unknown_submission(workflow):
    with pytest.raises(NotFoundError):
        workflow.review_algorithm(999, ReviewDecision.APPROVED)
    with pytest.raises(NotFoundError):
        workflow.review_code(999, ReviewDecision.REJECTED)


def test_review_algorithm_approved_opens_coding(workflow, assignment, student):
    row = workflow.submit_algorithm(assignment.id, student.id, "loop and add")
    workflow.review_algorithm(row.id, ReviewDecision.APPROVED)

    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.CODING_STAGE


def test_review_same_decision_twice_is_stable(workflow, assignment, student):
    row = workflow.submit_algorithm(assignment.id, student.id, "loop and add")
    workflow.review_algorithm(row.id, "approved")
    again = workflow.review_algorithm(row.id, "approved")

    assert again.status == "approved"
    assert len(workflow.algorithm_history(assignment.id, student.id)) == 1


def test_code_rejection_returns_to_coding_stage(workflow, assignment, student):
    algo = workflow.submit_algorithm(assignment.id, student.id, "loop and add")
    workflow.review_algorithm(algo.id, ReviewDecision.APPROVED)
    code = workflow.submit_code(assignment.id, student.id, "print(3)", "python")
    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.CODE_SUBMITTED

    workflow.review_code(code.id, ReviewDecision.REJECTED, "read the input")

    report = workflow.progress(assignment.id, student.id)
    assert report.status == ProgressStatus.CODING_STAGE
    assert report.code_rejected is True
    assert report.code_feedback == "read the input"
    workflow.ensure_can_submit_code(assignment.id, student.id)


def test_gating(workflow, assignment, student):
    workflow.ensure_can_submit_algorithm(assignment.id, student.id)
    with pytest.raises(ValidationError):
        workflow.ensure_can_submit_code(assignment.id, student.id)

    algo = workflow.submit_algorithm(assignment.id, student.id, "loop and add")
    with pytest.raises(ValidationError):
        workflow.ensure_can_submit_algorithm(assignment.id, student.id)
    with pytest.raises(ValidationError):
        workflow.ensure_can_submit_code(assignment.id, student.id)

    workflow.review_algorithm(algo.id, ReviewDecision.APPROVED)
    workflow.ensure_can_submit_code(assignment.id, student.id)
    with pytest.raises(ValidationError):
        workflow.ensure_can_submit_algorithm(assignment.id, student.id)

    code = workflow.submit_code(assignment.id, student.id, "print(3)", "python")
    workflow.review_code(code.id, ReviewDecision.APPROVED)
    # final_approved is terminal
    with pytest.raises(ValidationError):
        workflow.ensure_can_submit_code(assignment.id, student.id)
    with pytest.raises(ValidationError):
        workflow.ensure_can_submit_algorithm(assignment.id, student.id)


def test_ensure_assignment_missing(workflow):
    with pytest.raises(NotFoundError):
        workflow.ensure_assignment(12345)


def test_full_scenario(workflow, assignment, student):
    a, s = assignment.id, student.id

    first = workflow.submit_algorithm(a, s, "step1;step2")
    assert workflow.derive_status(a, s) == ProgressStatus.ALGORITHM_PENDING

    workflow.review_algorithm(first.id, ReviewDecision.REJECTED, "too vague")
    assert workflow.derive_status(a, s) == ProgressStatus.ALGORITHM_REJECTED
    assert workflow.progress(a, s).algorithm_feedback == "too vague"

    second = workflow.submit_algorithm(a, s, "step1;step2;step3")
    assert workflow.derive_status(a, s) == ProgressStatus.ALGORITHM_PENDING
    history = workflow.algorithm_history(a, s)
    assert [h.id for h in history] == [second.id, first.id]
    assert history[0].content == "step1;step2;step3"
    assert history[1].status == "rejected"
    assert history[1].feedback == "too vague"

    workflow.review_algorithm(second.id, ReviewDecision.APPROVED)
    assert workflow.derive_status(a, s) == ProgressStatus.CODING_STAGE

    code = workflow.submit_code(a, s, 'print("ok")', "python", "ok\n")
    assert workflow.derive_status(a, s) == ProgressStatus.CODE_SUBMITTED

    workflow.review_code(code.id, ReviewDecision.APPROVED)
    assert workflow.derive_status(a, s) == ProgressStatus.FINAL_APPROVED
    assert workflow.derive_status(a, s) == ProgressStatus.FINAL_APPROVED

    record = workflow.build_record(a, s)
    assert record.algorithm == "step1;step2;step3"
    assert record.code == 'print("ok")'
    assert record.language == "python"
    assert record.output == "ok\n"


def test_record_requires_approved_code(workflow, assignment, student):
    algo = workflow.submit_algorithm(assignment.id, student.id, "loop and add")
    workflow.review_algorithm(algo.id, ReviewDecision.APPROVED)
    workflow.submit_code(assignment.id, student.id, "print(3)", "python")

    with pytest.raises(NotFoundError):
        workflow.build_record(assignment.id, student.id)


def test_review_queues(workflow, assignment, student, other_student):
    first = workflow.submit_algorithm(assignment.id, student.id, "a")
    second = workflow.submit_algorithm(assignment.id, other_student.id, "b")
    workflow.review_algorithm(first.id, ReviewDecision.APPROVED)

    assert [row.id for row in workflow.pending_algorithms()] == [second.id]
    assert workflow.pending_code() == []


def test_run_code_rejects_blank_source(workflow, runner):
    with pytest.raises(ValidationError):
        asyncio.run(workflow.run_code("python", "   "))
    assert runner.requests == []


def test_submit_code_rejects_unknown_language(workflow, assignment, student):
    with pytest.raises(ValidationError):
        workflow.submit_code(assignment.id, student.id, "print(1)", "cobol")


def test_submit_code_normalises_language(workflow, assignment, student):
    row = workflow.submit_code(assignment.id, student.id, "print(1)", " Python ")
    assert row.language == "python"


def test_review_rejects_unknown_decision(workflow, assignment, student):
    row = workflow.submit_algorithm(assignment.id, student.id, "add")
    with pytest.raises(ValidationError):
        workflow.review_algorithm(row.id, "maybe")
    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.ALGORITHM_PENDING


def test_store_failure_is_persistence_error(db, workflow, assignment, student):
    from labrecord.core.errors import PersistenceError
    from labrecord.crud import submission as crud_submission

    with pytest.raises(PersistenceError):
        crud_submission.create_algorithm_submission(db, assignment.id, student.id, None)

    # the session was rolled back and keeps working
    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.NOT_STARTED


def test_approved_code_cannot_be_rejected_later(workflow, assignment, student):
    algo = workflow.submit_algorithm(assignment.id, student.id, "loop and add")
    workflow.review_algorithm(algo.id, ReviewDecision.APPROVED)
    code = workflow.submit_code(assignment.id, student.id, "print(3)", "python")
    workflow.review_code(code.id, ReviewDecision.APPROVED)

    with pytest.raises(ValidationError):
        workflow.review_code(code.id, ReviewDecision.REJECTED, "changed my mind")

    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.FINAL_APPROVED
    assert workflow.latest_code(assignment.id, student.id).feedback is None


def test_rejected_algorithm_stays_rejected_after_resubmit(workflow, assignment, student):
    first = workflow.submit_algorithm(assignment.id, student.id, "step1")
    workflow.review_algorithm(first.id, ReviewDecision.REJECTED, "too vague")
    workflow.submit_algorithm(assignment.id, student.id, "step1;step2")

    with pytest.raises(ValidationError):
        workflow.review_algorithm(first.id, ReviewDecision.APPROVED)

    history = workflow.algorithm_history(assignment.id, student.id)
    assert history[1].id == first.id
    assert history[1].status == "rejected"
    assert history[1].feedback == "too vague"
    assert workflow.derive_status(assignment.id, student.id) == ProgressStatus.ALGORITHM_PENDING


def test_progress_overview_covers_every_assignment(db, workflow, assignment, teacher, student):
    from labrecord.db import Assignment

    second = Assignment(title="Reverse A String", teacher_id=teacher.id, details={})
    db.add(second)
    db.commit()
    algo = workflow.submit_algorithm(assignment.id, student.id, "loop and add")
    workflow.review_algorithm(algo.id, ReviewDecision.REJECTED, "redo")

    overview = {item.assignment_id: item.progress for item in workflow.progress_overview(student.id)}

    assert overview[assignment.id].status == ProgressStatus.ALGORITHM_REJECTED
    assert overview[assignment.id].algorithm_feedback == "redo"
    assert overview[second.id].status == ProgressStatus.NOT_STARTED


def test_review_stats(db, workflow, assignment, student, other_student):
    add_algorithm(db, assignment, student, "approved", NOW - timedelta(hours=2))
    add_code(db, assignment, student, "approved", NOW - timedelta(hours=1))
    add_algorithm(db, assignment, other_student, "pending", NOW)
    add_code(db, assignment, other_student, "pending", NOW + timedelta(minutes=1))

    stats = workflow.review_stats(recent_limit=3)

    assert stats.total_assignments == 1
    assert stats.pending_algorithms == 1
    assert stats.pending_code == 1
    assert stats.approved_code == 1
    assert [(r.kind, r.status) for r in stats.recent] == [
        ("code", "pending"),
        ("algorithm", "pending"),
        ("code", "approved"),
    ]
