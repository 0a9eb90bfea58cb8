from typing import List, Optional

from pydantic import BaseModel


class ReportLine(BaseModel):
    course_code: str
    course_title: str
    internal_mark: float
    final_mark: float
    weighted: float


class StudentReport(BaseModel):
    roll_no: str
    name: str
    lines: List[ReportLine] = []
    average: Optional[float] = None
    count: int = 0
    passed: int = 0
    pass_mark: float = 50.0


class Counts(BaseModel):
    students: int = 0
    courses: int = 0
    enrollments: int = 0
