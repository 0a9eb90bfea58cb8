from .course import CourseRecord, UpdateCourse
from .grade import GradeRecord, MarksUpdate
from .report import Counts, ReportLine, StudentReport
from .student import StudentRecord, UpdateStudent

__all__ = [
    "Counts",
    "CourseRecord",
    "GradeRecord",
    "MarksUpdate",
    "ReportLine",
    "StudentRecord",
    "StudentReport",
    "UpdateCourse",
    "UpdateStudent",
]
