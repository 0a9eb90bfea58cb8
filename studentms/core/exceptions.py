class StudentMSError(Exception):
    """Base class for errors raised by the student management core."""


class StoreOpenError(StudentMSError):
    """The database file could not be created or opened."""


class SchemaError(StudentMSError):
    """Table creation or seeding failed."""


class MirrorInconsistencyError(StudentMSError):
    """The store accepted a write that the in-memory mirror could not apply."""

    def __init__(self, action: str, detail: str):
        self.action = action
        self.detail = detail
        super().__init__(f"[{action}] {detail}")
