# labrecord/services/workflow.py
"""Submission workflow for one assignment/student pair.

Each pair keeps two append-only histories (algorithm drafts and code drafts).
The pair's progress is derived on read from the newest row of each history:

    not_started -> algorithm_pending -> coding_stage -> code_submitted -> final_approved
                        |      ^                ^              |
                        v      |                +--------------+ (code rejected)
                  algorithm_rejected

Code-stage facts always win over algorithm-stage facts. A rejected code
submission counts as no code submission, so the pair goes back to coding_stage;
`progress()` still reports the rejection and its feedback.

The two "latest row" reads are not taken from one snapshot. That is fine for a
status badge, not for access control.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from labrecord.core.enums import ProgressStatus, ReviewDecision, SubmissionStatus
from labrecord.core.errors import NotFoundError, ValidationError
from labrecord.core.executor import CodeExecutor, ExecutionResult, get_runtime
from labrecord.crud import assignment as crud_assignment
from labrecord.crud import submission as crud_submission
from labrecord.db.models.algorithm_submission import AlgorithmSubmission
from labrecord.db.models.code_submission import CodeSubmission
from labrecord.schemas.record import Record
from labrecord.schemas.submission import (
    AssignmentProgress,
    ProgressReport,
    RecentActivity,
    ReviewStats,
)

logger = logging.getLogger(__name__)

ALGORITHM_SUBMITTABLE = {ProgressStatus.NOT_STARTED, ProgressStatus.ALGORITHM_REJECTED}
CODE_SUBMITTABLE = {ProgressStatus.CODING_STAGE}


def _required_text(value: Optional[str], what: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{what} must not be empty")
    return text


class SubmissionWorkflow:
    def __init__(self, db: Session, executor: Optional[CodeExecutor] = None):
        self.db = db
        self.executor = executor or CodeExecutor()

    # === Status ===

    def latest_algorithm(self, assignment_id: int, student_id: int) -> Optional[AlgorithmSubmission]:
        return crud_submission.get_latest(self.db, AlgorithmSubmission, assignment_id, student_id)

    def latest_code(self, assignment_id: int, student_id: int) -> Optional[CodeSubmission]:
        return crud_submission.get_latest(self.db, CodeSubmission, assignment_id, student_id)

    def derive_status(self, assignment_id: int, student_id: int) -> ProgressStatus:
        code = self.latest_code(assignment_id, student_id)
        if code is not None:
            if code.status == SubmissionStatus.APPROVED:
                return ProgressStatus.FINAL_APPROVED
            if code.status == SubmissionStatus.PENDING:
                return ProgressStatus.CODE_SUBMITTED

        algorithm = self.latest_algorithm(assignment_id, student_id)
        if algorithm is None:
            return ProgressStatus.NOT_STARTED
        if algorithm.status == SubmissionStatus.APPROVED:
            return ProgressStatus.CODING_STAGE
        if algorithm.status == SubmissionStatus.PENDING:
            return ProgressStatus.ALGORITHM_PENDING
        if algorithm.status == SubmissionStatus.REJECTED:
            return ProgressStatus.ALGORITHM_REJECTED

        logger.warning(
            f"⚠️ [Workflow] Algorithm submission {algorithm.id} has unknown status {algorithm.status!r}"
        )
        return ProgressStatus.NOT_STARTED

    def progress(self, assignment_id: int, student_id: int) -> ProgressReport:
        algorithm = self.latest_algorithm(assignment_id, student_id)
        code = self.latest_code(assignment_id, student_id)
        return ProgressReport(
            status=self.derive_status(assignment_id, student_id),
            algorithm_feedback=algorithm.feedback if algorithm else None,
            code_feedback=code.feedback if code else None,
            code_rejected=bool(code and code.status == SubmissionStatus.REJECTED),
        )

    # === Stage gating ===

    def ensure_assignment(self, assignment_id: int):
        assignment = crud_assignment.get_assignment(self.db, assignment_id)
        if not assignment:
            raise NotFoundError("Assignment not found")
        return assignment

    def ensure_can_submit_algorithm(self, assignment_id: int, student_id: int) -> None:
        status = self.derive_status(assignment_id, student_id)
        if status not in ALGORITHM_SUBMITTABLE:
            raise ValidationError(f"An algorithm cannot be submitted while the status is {status.value}")

    def ensure_can_submit_code(self, assignment_id: int, student_id: int) -> None:
        status = self.derive_status(assignment_id, student_id)
        if status not in CODE_SUBMITTABLE:
            raise ValidationError(f"Code cannot be submitted while the status is {status.value}")

    # === Submissions ===

    def submit_algorithm(self, assignment_id: int, student_id: int, content: str) -> AlgorithmSubmission:
        text = _required_text(content, "Algorithm")
        row = crud_submission.create_algorithm_submission(self.db, assignment_id, student_id, text)
        logger.info(
            f"📝 [Workflow] Algorithm {row.id} submitted: assignment={assignment_id}, student={student_id}"
        )
        return row

    def submit_code(
        self,
        assignment_id: int,
        student_id: int,
        code: str,
        language: str,
        output: Optional[str] = None,
    ) -> CodeSubmission:
        source = _required_text(code, "Code")
        lang = get_runtime(language).id
        row = crud_submission.create_code_submission(
            self.db, assignment_id, student_id, source, lang, output or None
        )
        logger.info(
            f"📝 [Workflow] Code {row.id} ({lang}) submitted: assignment={assignment_id}, student={student_id}"
        )
        return row

    # === Reviews ===

    def _review(self, row, decision: ReviewDecision, feedback: Optional[str]):
        try:
            decision = ReviewDecision(decision)
        except ValueError as e:
            raise ValidationError(f"Unknown review decision: {decision}") from e
        # only pending rows are open; repeating the stored decision is a no-op
        if row.status != SubmissionStatus.PENDING:
            if row.status == decision.value:
                return row
            raise ValidationError(f"Submission {row.id} was already {row.status}")
        note = (feedback or "").strip() or None
        return crud_submission.set_review(self.db, row, decision.value, note)

    def review_algorithm(
        self, submission_id: int, decision: ReviewDecision, feedback: Optional[str] = None
    ) -> AlgorithmSubmission:
        row = crud_submission.get_algorithm_submission(self.db, submission_id)
        if not row:
            raise NotFoundError("Algorithm submission not found")
        row = self._review(row, decision, feedback)
        logger.info(f"✅ [Workflow] Algorithm {submission_id} reviewed: {row.status}")
        return row

    def review_code(
        self, submission_id: int, decision: ReviewDecision, feedback: Optional[str] = None
    ) -> CodeSubmission:
        row = crud_submission.get_code_submission(self.db, submission_id)
        if not row:
            raise NotFoundError("Code submission not found")
        row = self._review(row, decision, feedback)
        logger.info(f"✅ [Workflow] Code {submission_id} reviewed: {row.status}")
        return row

    # === Execution ===

    async def run_code(self, language: str, source: str, stdin: str = "") -> ExecutionResult:
        if not (source or "").strip():
            raise ValidationError("Code must not be empty")
        return await self.executor.execute(language, source, stdin)

    # === History and review queues ===

    def algorithm_history(self, assignment_id: int, student_id: int) -> List[AlgorithmSubmission]:
        return crud_submission.get_history(self.db, AlgorithmSubmission, assignment_id, student_id)

    def code_history(self, assignment_id: int, student_id: int) -> List[CodeSubmission]:
        return crud_submission.get_history(self.db, CodeSubmission, assignment_id, student_id)

    def pending_algorithms(self, assignment_id: Optional[int] = None) -> List[AlgorithmSubmission]:
        return crud_submission.get_by_status(
            self.db, AlgorithmSubmission, SubmissionStatus.PENDING.value, assignment_id
        )

    def pending_code(self, assignment_id: Optional[int] = None) -> List[CodeSubmission]:
        return crud_submission.get_by_status(
            self.db, CodeSubmission, SubmissionStatus.PENDING.value, assignment_id
        )

    def latest_approved_algorithm(self, assignment_id: int, student_id: int) -> Optional[AlgorithmSubmission]:
        return crud_submission.get_latest(
            self.db, AlgorithmSubmission, assignment_id, student_id, SubmissionStatus.APPROVED.value
        )

    def latest_approved_code(self, assignment_id: int, student_id: int) -> Optional[CodeSubmission]:
        return crud_submission.get_latest(
            self.db, CodeSubmission, assignment_id, student_id, SubmissionStatus.APPROVED.value
        )

    # === Dashboards ===

    def progress_overview(self, student_id: int, classroom_id: Optional[int] = None) -> List[AssignmentProgress]:
        """Derived progress of one student across every assignment, newest assignment first."""
        return [
            AssignmentProgress(
                assignment_id=a.id,
                title=a.title,
                classroom_id=a.classroom_id,
                progress=self.progress(a.id, student_id),
            )
            for a in crud_assignment.get_assignments(self.db, classroom_id)
        ]

    def review_stats(self, recent_limit: int = 8) -> ReviewStats:
        recent = [
            RecentActivity(
                id=row.id, kind=kind, assignment_id=row.assignment_id,
                student_id=row.student_id, status=row.status, created_at=row.created_at,
            )
            for kind, model in (("algorithm", AlgorithmSubmission), ("code", CodeSubmission))
            for row in crud_submission.get_recent(self.db, model, recent_limit)
        ]
        recent.sort(key=lambda item: item.created_at, reverse=True)
        return ReviewStats(
            total_assignments=crud_assignment.count_assignments(self.db),
            pending_algorithms=crud_submission.count_by_status(
                self.db, AlgorithmSubmission, SubmissionStatus.PENDING.value
            ),
            pending_code=crud_submission.count_by_status(
                self.db, CodeSubmission, SubmissionStatus.PENDING.value
            ),
            approved_code=crud_submission.count_by_status(
                self.db, CodeSubmission, SubmissionStatus.APPROVED.value
            ),
            recent=recent[:recent_limit],
        )

    # === Records ===

    def build_record(self, assignment_id: int, student_id: int) -> Record:
        assignment = self.ensure_assignment(assignment_id)
        code = self.latest_approved_code(assignment_id, student_id)
        if code is None:
            raise NotFoundError("Record not found")
        algorithm = self.latest_approved_algorithm(assignment_id, student_id)
        return Record(
            assignment_id=assignment.id,
            title=assignment.title,
            description=assignment.description,
            algorithm=algorithm.content if algorithm else "",
            code=code.code or "",
            language=code.language or "unknown",
            output=code.output or "",
        )
