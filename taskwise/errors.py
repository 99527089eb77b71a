"""Error taxonomy for TaskWise.

Every error raised by the application layer is a TaskWiseError carrying a
``kind`` discriminant. HTTP status codes are assigned only at the API boundary.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """Error kind enumeration."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    UPSTREAM_MODEL = "upstream_model"
    MALFORMED_MODEL_OUTPUT = "malformed_model_output"


class TaskWiseError(Exception):
    """Base class for application errors."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str, details: Any = None, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.upstream_status = upstream_status

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class ValidationError(TaskWiseError):
    """Missing or invalid caller input."""
    kind = ErrorKind.VALIDATION


class NotFoundError(TaskWiseError):
    """Unknown task id."""
    kind = ErrorKind.NOT_FOUND


class StorageError(TaskWiseError):
    """Datastore unavailable or failed."""
    kind = ErrorKind.STORAGE


class UpstreamModelError(TaskWiseError):
    """The external model call failed (network, auth, quota, missing key)."""
    kind = ErrorKind.UPSTREAM_MODEL


class MalformedModelOutputError(TaskWiseError):
    """The external model answered, but the content was unusable."""
    kind = ErrorKind.MALFORMED_MODEL_OUTPUT
