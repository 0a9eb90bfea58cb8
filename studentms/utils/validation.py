import re

ROLL_RE = re.compile(r"^S\d{3,6}$")
NAME_RE = re.compile(r"^[A-Za-z '\-]+$")
PHONE_RE = re.compile(r"^0(2[0-9]|[3-9][0-9])[- ]?\d{3}[- ]?\d{3,4}$")
COURSE_CODE_RE = re.compile(r"^[A-Z]{3}\d{3}$")

SHORT_TEXT_MAX = 60


def is_valid_roll(value: str) -> bool:
    """
    Checks a student roll number: ``S`` followed by 3-6 digits, e.g. S001.

    Args:
        value: Entered roll number

    Returns:
        bool: True if the format is correct
    """
    return bool(ROLL_RE.fullmatch(value))


def is_valid_name(value: str) -> bool:
    """Letters, spaces, hyphens and apostrophes, 2-40 characters."""
    return 2 <= len(value) <= 40 and bool(NAME_RE.fullmatch(value))


def is_valid_phone(value: str) -> bool:
    """NZ style number such as 021-555-1234 or 09 123 4567."""
    return bool(PHONE_RE.fullmatch(value))


def is_valid_course_code(value: str) -> bool:
    return bool(COURSE_CODE_RE.fullmatch(value))


def is_non_empty_short(value: str) -> bool:
    return bool(value.strip()) and len(value) <= SHORT_TEXT_MAX
