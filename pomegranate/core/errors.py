# pomegranate/core/errors.py

from enum import Enum
from typing import Optional

import docker.errors
import requests.exceptions


# -----------------------------
# Status classes
# -----------------------------

class StatusClass(Enum):
    """Transport-level error class derived from a canonical status code."""

    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    CONFLICT = "conflict"
    PERMISSION_DENIED = "permission_denied"
    UNAUTHENTICATED = "unauthenticated"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"

    @classmethod
    def from_code(cls, code: int) -> "StatusClass":
        return _CODE_TO_CLASS.get(code, cls.INTERNAL)

    @property
    def http_status(self) -> int:
        return _CLASS_TO_HTTP[self]


_CODE_TO_CLASS = {
    404: StatusClass.NOT_FOUND,
    400: StatusClass.INVALID_ARGUMENT,
    409: StatusClass.CONFLICT,
    403: StatusClass.PERMISSION_DENIED,
    401: StatusClass.UNAUTHENTICATED,
    503: StatusClass.UNAVAILABLE,
}

_CLASS_TO_HTTP = {
    StatusClass.NOT_FOUND: 404,
    StatusClass.INVALID_ARGUMENT: 400,
    StatusClass.CONFLICT: 409,
    StatusClass.PERMISSION_DENIED: 403,
    StatusClass.UNAUTHENTICATED: 401,
    StatusClass.UNAVAILABLE: 503,
    StatusClass.INTERNAL: 500,
}


def status_code_for(exc: BaseException) -> int:
    """Canonical status code of a runtime failure."""
    if isinstance(exc, docker.errors.NotFound):
        return 404
    if isinstance(exc, docker.errors.APIError) and exc.status_code is not None:
        return exc.status_code
    if isinstance(exc, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return 503
    return 500


# -----------------------------
# Engine Errors
# -----------------------------

class EngineErrorKind(Enum):
    CANNOT_START = "cannot_start"
    CANNOT_STOP = "cannot_stop"
    STATE_UNAVAILABLE = "state_unavailable"
    STATS_UNAVAILABLE = "stats_unavailable"
    LOGS_UNAVAILABLE = "logs_unavailable"
    IMAGE_REMOVAL_FAILED = "image_removal_failed"


class EngineError(Exception):
    """Base class for all failed engine operations."""

    kind: EngineErrorKind

    def __init__(self, message: str, cause: Optional[BaseException] = None, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if code is None:
            code = status_code_for(cause) if cause is not None else 500
        self.code = code

    @classmethod
    def wrap(cls, operation: str, name: str, cause: BaseException) -> "EngineError":
        """Build the error for a failed runtime call on a given application."""
        return cls(f"Failed to {operation} for application {name}: {cause}", cause)

    @property
    def status_class(self) -> StatusClass:
        return StatusClass.from_code(self.code)


class ApplicationCannotStart(EngineError):
    """Image pull, container creation, network attach or start failed."""
    kind = EngineErrorKind.CANNOT_START


class ApplicationCannotStop(EngineError):
    """Stopping or removing the container failed."""
    kind = EngineErrorKind.CANNOT_STOP


class ApplicationStateUnavailable(EngineError):
    """Inspection failed for a reason other than the container being absent."""
    kind = EngineErrorKind.STATE_UNAVAILABLE


class ApplicationStatsUnavailable(EngineError):
    kind = EngineErrorKind.STATS_UNAVAILABLE


class ApplicationLogsUnavailable(EngineError):
    kind = EngineErrorKind.LOGS_UNAVAILABLE


class ImageRemovalFailed(EngineError):
    kind = EngineErrorKind.IMAGE_REMOVAL_FAILED


class RuntimeConnectionError(Exception):
    """The container runtime control endpoint cannot be reached."""
    pass


# -----------------------------
# Repository Errors
# -----------------------------

class RepositoryError(Exception):
    """Base class for data-access failures."""
    pass


class ApplicationNotFound(RepositoryError):
    pass


class InvalidConfigError(RepositoryError):
    """Serialized configuration is not a JSON object of strings."""
    pass
