# tests/test_store.py

import os

import pytest

from studentms.core.exceptions import StoreOpenError
from studentms.core.result import Result
from studentms.schemas import CourseRecord, StudentRecord
from studentms.services.store import SEED_GRADES, Store, close_store


# === lifecycle ===


def test_open_creates_database_file(tmp_path):
    path = tmp_path / "fresh.db"
    store = Store.open(f"sqlite:///{path}")
    assert store.is_open
    store.close()
    assert os.path.exists(path)


def test_open_fails_for_unreachable_path(tmp_path):
    with pytest.raises(StoreOpenError):
        Store.open(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'school.db'}")


def test_close_is_idempotent(store):
    store.close()
    store.close()
    assert not store.is_open


def test_close_store_accepts_none():
    close_store(None)


def test_writes_after_close_fail(store, sample_student):
    store.close()
    assert store.insert_student(sample_student) is Result.IO_ERROR


# === schema and seeding ===


def test_seed_counts(store):
    counts = store.counts()
    assert counts.students == 3
    assert counts.courses == 3
    assert counts.enrollments == 4


def test_init_schema_is_idempotent(store):
    store.init_schema(seed=True)
    store.init_schema(seed=True)
    counts = store.counts()
    assert (counts.students, counts.courses, counts.enrollments) == (3, 3, 4)


def test_seed_data_values(store):
    students, courses, grades = store.load_all()
    assert {s.roll_no for s in students} == {"S001", "S002", "S003"}
    assert {c.code for c in courses} == {"MTH101", "SCI101", "ENG101"}
    assert {(g.roll_no, g.course_code, g.internal_mark, g.final_mark) for g in grades} == {
        (g.roll_no, g.course_code, g.internal_mark, g.final_mark) for g in SEED_GRADES
    }


def test_unseeded_schema_is_empty(empty_store):
    assert empty_store.load_all() == ([], [], [])


def test_seeding_is_independent_per_table(empty_store):
    assert empty_store.insert_student(StudentRecord(roll_no="S100", name="Kai"))

    empty_store.init_schema(seed=True)

    students, courses, grades = empty_store.load_all()
    assert [s.roll_no for s in students] == ["S100"]
    assert len(courses) == 3
    # every seed enrollment points at a seed student that is not there
    assert grades == []


def test_data_survives_reopen(db_url, sample_student):
    first = Store.open(db_url)
    first.init_schema()
    assert first.insert_student(sample_student)
    first.close()

    second = Store.open(db_url)
    second.init_schema()
    students, _, _ = second.load_all()
    second.close()

    assert sample_student in students


# === inserts ===


def test_insert_student(store, sample_student):
    assert store.insert_student(sample_student) is Result.OK
    students, _, _ = store.load_all()
    assert sample_student in students


def test_insert_duplicate_student_conflicts(store):
    duplicate = StudentRecord(roll_no="S001", name="Someone Else")
    assert store.insert_student(duplicate) is Result.CONFLICT

    students, _, _ = store.load_all()
    assert [s.name for s in students if s.roll_no == "S001"] == ["Ava"]


def test_insert_duplicate_course_conflicts(store):
    assert store.insert_course(CourseRecord(code="MTH101", title="Other")) is Result.CONFLICT


def test_enroll_defaults_marks_to_zero(store, sample_student):
    store.insert_student(sample_student)
    assert store.enroll("S010", "ENG101") is Result.OK

    _, _, grades = store.load_all()
    grade = next(g for g in grades if g.key == ("S010", "ENG101"))
    assert grade.internal_mark == 0
    assert grade.final_mark == 0


def test_enroll_duplicate_conflicts(store):
    assert store.enroll("S001", "MTH101") is Result.CONFLICT


def test_enroll_missing_parent_is_not_found(store):
    assert store.enroll("S999", "MTH101") is Result.NOT_FOUND
    assert store.enroll("S001", "XYZ999") is Result.NOT_FOUND
    assert store.counts().enrollments == 4


# === updates ===


def test_update_marks(store):
    assert store.update_marks("S001", "SCI101", 90, 95) is Result.OK
    _, _, grades = store.load_all()
    grade = next(g for g in grades if g.key == ("S001", "SCI101"))
    assert (grade.internal_mark, grade.final_mark) == (90, 95)


def test_update_marks_without_enrollment_is_not_found(store):
    assert store.update_marks("S002", "MTH101", 50, 50) is Result.NOT_FOUND


def test_store_rejects_out_of_range_marks(store):
    assert store.update_marks("S001", "MTH101", 101, 50) is Result.INVALID
    assert store.update_marks("S001", "MTH101", 50, -5) is Result.INVALID

    _, _, grades = store.load_all()
    grade = next(g for g in grades if g.key == ("S001", "MTH101"))
    assert (grade.internal_mark, grade.final_mark) == (75, 88)


def test_update_student(store):
    updated = StudentRecord(roll_no="S002", name="Leo Grant", address="1 New St", contact="021-777")
    assert store.update_student(updated) is Result.OK
    students, _, _ = store.load_all()
    assert updated in students


def test_update_missing_student_is_not_found(store):
    assert store.update_student(StudentRecord(roll_no="S999", name="Ghost")) is Result.NOT_FOUND


def test_update_course(store):
    updated = CourseRecord(code="SCI101", title="Physics", description="Forces", teacher="Dr. Bell")
    assert store.update_course(updated) is Result.OK
    _, courses, _ = store.load_all()
    assert updated in courses


def test_update_missing_course_is_not_found(store):
    assert store.update_course(CourseRecord(code="XYZ999", title="Nothing")) is Result.NOT_FOUND


# === deletes ===


def test_delete_student_cascades_to_grades(store):
    assert store.delete_student("S001") is Result.OK

    students, _, grades = store.load_all()
    assert "S001" not in {s.roll_no for s in students}
    assert {g.key for g in grades} == {("S002", "ENG101"), ("S003", "MTH101")}


def test_delete_course_cascades_to_grades(store):
    assert store.delete_course("MTH101") is Result.OK

    _, courses, grades = store.load_all()
    assert "MTH101" not in {c.code for c in courses}
    assert {g.key for g in grades} == {("S001", "SCI101"), ("S002", "ENG101")}


def test_delete_missing_rows_are_not_found(store):
    assert store.delete_student("S999") is Result.NOT_FOUND
    assert store.delete_course("XYZ999") is Result.NOT_FOUND
    assert store.delete_enrollment("S002", "MTH101") is Result.NOT_FOUND


def test_delete_enrollment(store):
    assert store.delete_enrollment("S003", "MTH101") is Result.OK
    _, _, grades = store.load_all()
    assert ("S003", "MTH101") not in {g.key for g in grades}
    assert store.counts().students == 3


def test_result_truthiness():
    assert Result.OK
    assert not Result.NOT_FOUND
    assert not Result.CONFLICT
    assert not Result.INVALID
    assert not Result.IO_ERROR
