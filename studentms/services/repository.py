"""
Repository combining the durable store and the in-memory mirror.

Every write follows the same order:

1. advisory pre-checks against the mirror (duplicates, missing parents,
   missing enrollments, out-of-range marks) reject obviously bad requests
   without touching the database;
2. the store applies the change and stays the final judge of every
   constraint;
3. only if the store reports success is the same change applied to the mirror.

If the store accepted a write that the mirror cannot apply the two sides have
diverged. The mirror is then rebuilt from the store and
``MirrorInconsistencyError`` is raised, so the problem is never silent.
"""

from typing import Callable, List, Optional

from pydantic import ValidationError

from studentms.core.config import settings
from studentms.core.exceptions import MirrorInconsistencyError
from studentms.core.logger import logger
from studentms.core.result import Result
from studentms.schemas import (
    Counts,
    CourseRecord,
    GradeRecord,
    MarksUpdate,
    StudentRecord,
    StudentReport,
    UpdateCourse,
    UpdateStudent,
)
from studentms.services.mirror import Mirror
from studentms.services.store import Store


class Repository:
    def __init__(self, store: Store, mirror: Mirror, pass_mark: Optional[float] = None):
        self._store = store
        self._mirror = mirror
        self._pass_mark = settings.PASS_THRESHOLD if pass_mark is None else pass_mark

    @classmethod
    def load(cls, store: Store, pass_mark: Optional[float] = None) -> "Repository":
        """Builds a repository whose mirror is a fresh copy of everything in ``store``."""
        students, courses, grades = store.load_all()
        return cls(store, Mirror(students, courses, grades), pass_mark)

    @property
    def mirror(self) -> Mirror:
        return self._mirror

    def resync(self) -> None:
        students, courses, grades = self._store.load_all()
        self._mirror.rebuild(students, courses, grades)
        logger.info("[RESYNC] Mirror rebuilt from store")

    # === protocol ===

    def _commit(
        self,
        action: str,
        subject: str,
        store_op: Callable[[], Result],
        mirror_op: Callable[[], bool],
    ) -> Result:
        result = store_op()
        if not result:
            logger.warning(f"[{action}] Store rejected {subject}: {result.value}")
            return result

        if not mirror_op():
            detail = f"Store accepted {subject} but the mirror could not apply it"
            logger.critical(f"[{action}] {detail}")
            self.resync()
            raise MirrorInconsistencyError(action, detail)

        logger.info(f"[{action}] Applied {subject}")
        return Result.OK

    @staticmethod
    def _reject(action: str, subject: str, result: Result, reason: str) -> Result:
        logger.warning(f"[{action}] Rejected {subject}: {reason}")
        return result

    # === reads ===

    def students(self) -> List[StudentRecord]:
        return self._mirror.students

    def courses(self) -> List[CourseRecord]:
        return self._mirror.courses

    def grades(self) -> List[GradeRecord]:
        return self._mirror.grades

    def find_student(self, roll_no: str) -> Optional[StudentRecord]:
        return self._mirror.find_student(roll_no)

    def find_course(self, code: str) -> Optional[CourseRecord]:
        return self._mirror.find_course(code)

    def is_enrolled(self, roll_no: str, course_code: str) -> bool:
        return self._mirror.already_enrolled(roll_no, course_code)

    def report(self, roll_no: str) -> Optional[StudentReport]:
        return self._mirror.report(roll_no, self._pass_mark)

    def counts(self) -> Counts:
        return self._mirror.counts()

    # === students ===

    def add_student(self, student: StudentRecord) -> Result:
        action, subject = "ADD STUDENT", student.roll_no
        if self._mirror.exists_student(student.roll_no):
            return self._reject(action, subject, Result.CONFLICT, "roll number already used")

        return self._commit(
            action,
            subject,
            lambda: self._store.insert_student(student),
            lambda: self._mirror.insert_student_if_absent(student),
        )

    def update_student(self, student: StudentRecord) -> Result:
        action, subject = "UPDATE STUDENT", student.roll_no
        if not self._mirror.exists_student(student.roll_no):
            return self._reject(action, subject, Result.NOT_FOUND, "student not found")

        return self._commit(
            action,
            subject,
            lambda: self._store.update_student(student),
            lambda: self._mirror.replace_student(student),
        )

    def edit_student(self, roll_no: str, changes: UpdateStudent) -> Result:
        """Applies only the fields set in ``changes`` on top of the current record."""
        current = self._mirror.find_student(roll_no)
        if current is None:
            return self._reject("UPDATE STUDENT", roll_no, Result.NOT_FOUND, "student not found")

        update_data = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}
        return self.update_student(current.model_copy(update=update_data))

    def delete_student(self, roll_no: str) -> Result:
        action = "DELETE STUDENT"
        if not self._mirror.exists_student(roll_no):
            return self._reject(action, roll_no, Result.NOT_FOUND, "student not found")

        return self._commit(
            action,
            roll_no,
            lambda: self._store.delete_student(roll_no),
            lambda: self._mirror.remove_student(roll_no),
        )

    # === courses ===

    def add_course(self, course: CourseRecord) -> Result:
        action, subject = "ADD COURSE", course.code
        if self._mirror.exists_course(course.code):
            return self._reject(action, subject, Result.CONFLICT, "course code already exists")

        return self._commit(
            action,
            subject,
            lambda: self._store.insert_course(course),
            lambda: self._mirror.insert_course_if_absent(course),
        )

    def update_course(self, course: CourseRecord) -> Result:
        action, subject = "UPDATE COURSE", course.code
        if not self._mirror.exists_course(course.code):
            return self._reject(action, subject, Result.NOT_FOUND, "course not found")

        return self._commit(
            action,
            subject,
            lambda: self._store.update_course(course),
            lambda: self._mirror.replace_course(course),
        )

    def edit_course(self, code: str, changes: UpdateCourse) -> Result:
        current = self._mirror.find_course(code)
        if current is None:
            return self._reject("UPDATE COURSE", code, Result.NOT_FOUND, "course not found")

        update_data = {k: v for k, v in changes.model_dump(exclude_unset=True).items() if v is not None}
        return self.update_course(current.model_copy(update=update_data))

    def delete_course(self, code: str) -> Result:
        action = "DELETE COURSE"
        if not self._mirror.exists_course(code):
            return self._reject(action, code, Result.NOT_FOUND, "course not found")

        return self._commit(
            action,
            code,
            lambda: self._store.delete_course(code),
            lambda: self._mirror.remove_course(code),
        )

    # === enrollments ===

    def enroll(self, roll_no: str, course_code: str) -> Result:
        action, subject = "ENROLL", f"{roll_no}/{course_code}"
        if not self._mirror.exists_student(roll_no):
            return self._reject(action, subject, Result.NOT_FOUND, "student does not exist")
        if not self._mirror.exists_course(course_code):
            return self._reject(action, subject, Result.NOT_FOUND, "course does not exist")
        if self._mirror.already_enrolled(roll_no, course_code):
            return self._reject(action, subject, Result.CONFLICT, "already enrolled")

        return self._commit(
            action,
            subject,
            lambda: self._store.enroll(roll_no, course_code),
            lambda: self._mirror.insert_enrollment(roll_no, course_code),
        )

    def enter_marks(self, roll_no: str, course_code: str, internal_mark: float, final_mark: float) -> Result:
        action, subject = "ENTER MARKS", f"{roll_no}/{course_code}"
        try:
            marks = MarksUpdate(internal_mark=internal_mark, final_mark=final_mark)
        except ValidationError as e:
            return self._reject(action, subject, Result.INVALID, f"marks out of range ({e.error_count()} errors)")

        if not self._mirror.already_enrolled(roll_no, course_code):
            return self._reject(action, subject, Result.NOT_FOUND, "not enrolled in that course")

        return self._commit(
            action,
            subject,
            lambda: self._store.update_marks(roll_no, course_code, marks.internal_mark, marks.final_mark),
            lambda: self._mirror.update_marks(roll_no, course_code, marks.internal_mark, marks.final_mark),
        )

    def delete_enrollment(self, roll_no: str, course_code: str) -> Result:
        action, subject = "DELETE ENROLLMENT", f"{roll_no}/{course_code}"
        if not self._mirror.already_enrolled(roll_no, course_code):
            return self._reject(action, subject, Result.NOT_FOUND, "not enrolled in that course")

        return self._commit(
            action,
            subject,
            lambda: self._store.delete_enrollment(roll_no, course_code),
            lambda: self._mirror.remove_enrollment(roll_no, course_code),
        )
