# tests/test_schemas.py

import pytest
from pydantic import ValidationError

from studentms.schemas import GradeRecord, MarksUpdate, UpdateStudent


@pytest.mark.parametrize(
    "internal, final",
    [(0, 0), (100, 100), (75, 88), (62, 70), (33.5, 91.25), (100, 0)],
)
def test_weighted_score_formula(internal, final):
    grade = GradeRecord(roll_no="S001", course_code="MTH101", internal_mark=internal, final_mark=final)
    assert grade.weighted() == pytest.approx(0.3 * internal + 0.7 * final, abs=1e-9)


def test_weighted_score_for_seed_marks():
    grade = GradeRecord(roll_no="S001", course_code="MTH101", internal_mark=75, final_mark=88)
    assert grade.weighted() == pytest.approx(84.1, abs=1e-9)


def test_new_grade_starts_at_zero():
    grade = GradeRecord(roll_no="S001", course_code="MTH101")
    assert grade.internal_mark == 0.0
    assert grade.final_mark == 0.0
    assert grade.key == ("S001", "MTH101")


def test_marks_update_accepts_bounds():
    marks = MarksUpdate(internal_mark=0, final_mark=100)
    assert marks.internal_mark == 0
    assert marks.final_mark == 100


@pytest.mark.parametrize("internal, final", [(-1, 50), (50, 100.5), (101, -0.1)])
def test_marks_update_rejects_out_of_range(internal, final):
    with pytest.raises(ValidationError):
        MarksUpdate(internal_mark=internal, final_mark=final)


def test_update_student_tracks_only_set_fields():
    changes = UpdateStudent(contact="021-999")
    assert changes.model_dump(exclude_unset=True) == {"contact": "021-999"}
