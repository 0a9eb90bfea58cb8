from enum import Enum


class Result(str, Enum):
    """
    Outcome of a write against the store or the repository.

    Only ``OK`` is truthy, so callers that just need "did it happen" can keep
    treating the result as a boolean.
    """
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID = "invalid"
    IO_ERROR = "io_error"

    def __bool__(self) -> bool:
        return self is Result.OK
