# tests/conftest.py

import os
import tempfile

os.environ.setdefault("STUDENTMS_LOG_DIR", tempfile.mkdtemp(prefix="studentms-logs-"))

import pytest

from studentms.core.result import Result
from studentms.schemas import CourseRecord, StudentRecord
from studentms.services.mirror import Mirror
from studentms.services.repository import Repository
from studentms.services.store import Store


class FailingStore(Store):
    """A store whose every write is refused, as if the database were unavailable."""

    def _write(self, action, subject, work):
        return Result.IO_ERROR


class StubbornMirror(Mirror):
    """A mirror that ignores every write, so store and mirror drift apart."""

    def insert_student_if_absent(self, student):
        return False

    def update_marks(self, roll_no, course_code, internal_mark, final_mark):
        return False

    def remove_course(self, code):
        return False


def canonical(students, courses, grades):
    return (
        sorted((s.roll_no, s.name, s.address, s.contact) for s in students),
        sorted((c.code, c.title, c.description, c.teacher) for c in courses),
        sorted((g.roll_no, g.course_code, g.internal_mark, g.final_mark) for g in grades),
    )


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'school.db'}"


@pytest.fixture
def store(db_url):
    store = Store.open(db_url)
    store.init_schema(seed=True)
    yield store
    store.close()


@pytest.fixture
def empty_store(db_url):
    store = Store.open(db_url)
    store.init_schema(seed=False)
    yield store
    store.close()


@pytest.fixture
def repo(store):
    return Repository.load(store, pass_mark=50.0)


@pytest.fixture
def failing_repo(db_url):
    seeded = Store.open(db_url)
    seeded.init_schema(seed=True)
    seeded.close()

    failing = FailingStore.open(db_url)
    yield Repository.load(failing, pass_mark=50.0)
    failing.close()


@pytest.fixture
def stubborn_repo(store):
    students, courses, grades = store.load_all()
    return Repository(store, StubbornMirror(students, courses, grades), pass_mark=50.0)


@pytest.fixture
def sample_student():
    return StudentRecord(roll_no="S010", name="Ava Lee", address="1 Test Rd", contact="021-000")


@pytest.fixture
def sample_course():
    return CourseRecord(code="HIS101", title="History", description="World history", teacher="Mr. Stone")
