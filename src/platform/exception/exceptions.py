class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class DuplicateUserError(ConflictError):
    pass


# =============================================================================
# Release pool errors (internal, logged and collected on bulk operations)
# =============================================================================


class ReleaseOutOfRangeError(DomainError):
    def __init__(self, release_id: int, capacity: int) -> None:
        super().__init__(f'release id {release_id} out of range [0, {capacity})')
        self.release_id = release_id


class ReleaseSlotEmptyError(DomainError):
    def __init__(self, release_id: int) -> None:
        super().__init__(f'release slot {release_id} is empty')
        self.release_id = release_id


class ReleaseNotInUseError(DomainError):
    def __init__(self, release_id: int) -> None:
        super().__init__(f'release slot {release_id} is not in use')
        self.release_id = release_id


class ReleaseNotFoundError(NotFoundError):
    pass


class ReleaseMismatchError(DomainError):
    pass


class ReleaseStateError(DomainError):
    pass


# =============================================================================
# Storage errors (fatal, abort the process)
# =============================================================================


class StorageError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class StorageCorruptionError(StorageError):
    pass


class SnapshotWriteError(StorageError):
    pass
