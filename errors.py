from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    BUSY = "busy"
    MISSING_INPUT = "missing_input"
    EMPTY_DOCUMENT = "empty_document"
    # raised by the LLM client
    NETWORK = "network"
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"
    # raised by the result validator
    MALFORMED = "malformed"
    SCHEMA_MISMATCH = "schema_mismatch"


SERVICE_KINDS = {
    ErrorKind.NETWORK,
    ErrorKind.AUTH,
    ErrorKind.RATE_LIMIT,
    ErrorKind.SERVER_ERROR,
    ErrorKind.UNKNOWN,
}
VALIDATION_KINDS = {ErrorKind.MALFORMED, ErrorKind.SCHEMA_MISMATCH}

ANALYSIS_FAILED = "Failed to analyze resume. Please try again."

USER_MESSAGES = {
    ErrorKind.BUSY: "An analysis is already in progress. Please wait for it to finish.",
    ErrorKind.MISSING_INPUT: "Please upload a resume and provide a job description.",
    ErrorKind.EMPTY_DOCUMENT: "Failed to scan resume. Please upload a different PDF.",
}


def user_message(kind: ErrorKind) -> str:
    """Message shown to the user; service and validation kinds share one."""
    return USER_MESSAGES.get(kind, ANALYSIS_FAILED)


class AnalysisError(RuntimeError):
    """Raised when a stage of the analysis pipeline fails."""

    def __init__(self, kind: ErrorKind, message: str = "", *, field: Optional[str] = None):
        super().__init__(message or kind.value)
        self.kind = kind
        self.field = field


class ServiceError(AnalysisError):
    """Raised when the completion service cannot be reached or refuses the request"""


class ResultValidationError(AnalysisError):
    """Raised when the service reply does not match the analysis schema"""
