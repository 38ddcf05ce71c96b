class EvaluationAppError(Exception):
    """Base class for failures scoped to a single user action."""
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(EvaluationAppError):
    """Empty required field, duplicate keyword, missing selection, ..."""
    status_code = 400
    code = "VALIDATION_ERROR"


class NotFound(EvaluationAppError):
    status_code = 404
    code = "NOT_FOUND"


class SubmissionRejected(EvaluationAppError):
    """Final submit attempted in a state that does not allow it."""
    status_code = 409
    code = "SUBMISSION_REJECTED"


class RemoteStoreError(EvaluationAppError):
    """A database read/insert/update failed."""
    status_code = 503
    code = "REMOTE_STORE_ERROR"
