"""
In-memory mirror of the store.

Holds the students, courses and enrollments in store order and answers every
read the menu needs. Lookups are linear scans over plain lists. Writes here
never check the store: the repository only calls them after the store has
accepted the same change.
"""

from typing import Iterable, List, Optional, Tuple

from studentms.schemas import (
    Counts,
    CourseRecord,
    GradeRecord,
    ReportLine,
    StudentRecord,
    StudentReport,
)

DEFAULT_PASS_MARK = 50.0

Snapshot = Tuple[List[StudentRecord], List[CourseRecord], List[GradeRecord]]


class Mirror:
    def __init__(
        self,
        students: Iterable[StudentRecord] = (),
        courses: Iterable[CourseRecord] = (),
        grades: Iterable[GradeRecord] = (),
    ):
        self._students: List[StudentRecord] = []
        self._courses: List[CourseRecord] = []
        self._grades: List[GradeRecord] = []
        self.rebuild(students, courses, grades)

    # === properties ===

    @property
    def students(self) -> List[StudentRecord]:
        return list(self._students)

    @property
    def courses(self) -> List[CourseRecord]:
        return list(self._courses)

    @property
    def grades(self) -> List[GradeRecord]:
        return list(self._grades)

    def rebuild(
        self,
        students: Iterable[StudentRecord],
        courses: Iterable[CourseRecord],
        grades: Iterable[GradeRecord],
    ) -> None:
        """Replaces the whole mirror with fresh copies of the given records."""
        self._students = [s.model_copy() for s in students]
        self._courses = [c.model_copy() for c in courses]
        self._grades = [g.model_copy() for g in grades]

    def snapshot(self) -> Snapshot:
        return (
            [s.model_copy() for s in self._students],
            [c.model_copy() for c in self._courses],
            [g.model_copy() for g in self._grades],
        )

    def counts(self) -> Counts:
        return Counts(
            students=len(self._students),
            courses=len(self._courses),
            enrollments=len(self._grades),
        )

    # === lookups ===

    def find_student(self, roll_no: str) -> Optional[StudentRecord]:
        return next((s for s in self._students if s.roll_no == roll_no), None)

    def find_course(self, code: str) -> Optional[CourseRecord]:
        return next((c for c in self._courses if c.code == code), None)

    def find_grade(self, roll_no: str, course_code: str) -> Optional[GradeRecord]:
        return next(
            (g for g in self._grades if g.roll_no == roll_no and g.course_code == course_code),
            None,
        )

    def grades_for(self, roll_no: str) -> List[GradeRecord]:
        return [g for g in self._grades if g.roll_no == roll_no]

    def exists_student(self, roll_no: str) -> bool:
        return self.find_student(roll_no) is not None

    def exists_course(self, code: str) -> bool:
        return self.find_course(code) is not None

    def already_enrolled(self, roll_no: str, course_code: str) -> bool:
        return self.find_grade(roll_no, course_code) is not None

    # === inserts ===

    def insert_student_if_absent(self, student: StudentRecord) -> bool:
        if self.exists_student(student.roll_no):
            return False
        self._students.append(student.model_copy())
        return True

    def insert_course_if_absent(self, course: CourseRecord) -> bool:
        if self.exists_course(course.code):
            return False
        self._courses.append(course.model_copy())
        return True

    def insert_enrollment(self, roll_no: str, course_code: str) -> bool:
        self._grades.append(GradeRecord(roll_no=roll_no, course_code=course_code))
        return True

    # === updates ===

    def update_marks(self, roll_no: str, course_code: str, internal_mark: float, final_mark: float) -> bool:
        grade = self.find_grade(roll_no, course_code)
        if grade is None:
            return False
        grade.internal_mark = internal_mark
        grade.final_mark = final_mark
        return True

    def replace_student(self, student: StudentRecord) -> bool:
        for i, s in enumerate(self._students):
            if s.roll_no == student.roll_no:
                self._students[i] = student.model_copy()
                return True
        return False

    def replace_course(self, course: CourseRecord) -> bool:
        for i, c in enumerate(self._courses):
            if c.code == course.code:
                self._courses[i] = course.model_copy()
                return True
        return False

    # === removals ===

    def remove_student(self, roll_no: str) -> bool:
        """Removes the student and, like the store's cascade, all of its enrollments."""
        if not self.exists_student(roll_no):
            return False
        self._students = [s for s in self._students if s.roll_no != roll_no]
        self._grades = [g for g in self._grades if g.roll_no != roll_no]
        return True

    def remove_course(self, code: str) -> bool:
        """Removes the course and every enrollment in it."""
        if not self.exists_course(code):
            return False
        self._courses = [c for c in self._courses if c.code != code]
        self._grades = [g for g in self._grades if g.course_code != code]
        return True

    def remove_enrollment(self, roll_no: str, course_code: str) -> bool:
        grade = self.find_grade(roll_no, course_code)
        if grade is None:
            return False
        self._grades.remove(grade)
        return True

    # === reporting ===

    def report(self, roll_no: str, pass_mark: float = DEFAULT_PASS_MARK) -> Optional[StudentReport]:
        """
        Builds the per-student report from the cached data.

        Args:
            roll_no: Student roll number
            pass_mark: Weighted score needed to count a course as passed

        Returns:
            StudentReport: One line per enrollment plus average, count and passes,
                or None if the student is not known
        """
        student = self.find_student(roll_no)
        if student is None:
            return None

        lines = []
        for grade in self.grades_for(roll_no):
            course = self.find_course(grade.course_code)
            lines.append(
                ReportLine(
                    course_code=grade.course_code,
                    course_title=course.title if course else grade.course_code,
                    internal_mark=grade.internal_mark,
                    final_mark=grade.final_mark,
                    weighted=grade.weighted(),
                )
            )

        count = len(lines)
        average = sum(line.weighted for line in lines) / count if count else None
        passed = sum(1 for line in lines if line.weighted >= pass_mark)

        return StudentReport(
            roll_no=student.roll_no,
            name=student.name,
            lines=lines,
            average=average,
            count=count,
            passed=passed,
            pass_mark=pass_mark,
        )
