"""Error codes for the persistence side of the record stores."""

from enum import Enum


class ErrorCode(Enum):
    """Store error codes."""

    FILE_ACCESS = "FILE_ACCESS"
    SERIALIZATION = "SERIALIZATION"


class StoreError(Exception):
    """Base store error with code and user-safe message.

    The underlying exception is kept on ``cause`` for logging; ``message``
    is what may be shown to a client.
    """

    def __init__(
        self, code: ErrorCode, message: str, cause: BaseException | None = None
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoreError):
            return NotImplemented
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class FileAccessError(StoreError):
    """Reading or writing the persistent data store failed."""

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__(
            code=ErrorCode.FILE_ACCESS,
            message="persistent data store error",
            cause=cause,
        )


class SerializationError(StoreError):
    """Persisted state could not be encoded or decoded."""

    def __init__(self, cause: BaseException | None = None) -> None:
        super().__init__(
            code=ErrorCode.SERIALIZATION,
            message="serialization error",
            cause=cause,
        )
