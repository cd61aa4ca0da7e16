from enum import Enum
from typing import Optional

from kbrelay.prompts import QUERY_REQUIRED


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UPSTREAM_FAILURE = "upstream_failure"


class RelayError(Exception):
    kind: ErrorKind
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(RelayError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400

    def __init__(self, message: str = QUERY_REQUIRED):
        super().__init__(message)


class UpstreamFailureError(RelayError):
    kind = ErrorKind.UPSTREAM_FAILURE
    status_code = 500


class KnowledgeBaseError(Exception):
    """Raised by a knowledge base client when the provider call fails."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
