# labrecord/core/errors.py
"""Error taxonomy of the submission workflow.

Every error carries a user-facing message. None of them is retried and none is
fatal to the process: the failed operation leaves stored state as it was.
"""


class LabRecordError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LabRecordError):
    """Required text is empty, or the workflow stage does not allow the action."""

    status_code = 400


class NotFoundError(LabRecordError):
    status_code = 404


class PersistenceError(LabRecordError):
    """The relational store rejected a read or a write."""

    status_code = 500


class TransportError(LabRecordError):
    """The code execution service was unreachable or answered badly."""

    status_code = 502
