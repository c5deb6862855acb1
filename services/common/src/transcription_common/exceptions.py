"""Persistence exceptions shared by storage and database adapters."""


class PersistenceError(Exception):
    """Base class for failures while persisting audio or transcripts."""

    kind = "PersistenceError"

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class AudioNotFoundError(PersistenceError):
    """Raised when the transient audio file is missing before upload."""

    kind = "NotFound"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Audio file not found at '{path}'")


class StorageUploadFailedError(PersistenceError):
    """Raised when uploading a file to object storage fails."""

    kind = "StorageUploadFailed"

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Failed to upload '{object_name}' to storage", cause)


class InsertFailedError(PersistenceError):
    """Raised when inserting a transcript row fails."""

    kind = "InsertFailed"

    def __init__(self, table_name: str, cause: Exception | None = None):
        self.table_name = table_name
        super().__init__(f"Failed to insert row into '{table_name}'", cause)
