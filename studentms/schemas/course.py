from typing import Optional

from pydantic import BaseModel, ConfigDict, constr


class CourseRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: constr(strip_whitespace=True, min_length=1)
    title: str
    description: str = ""
    teacher: str = ""


class UpdateCourse(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    teacher: Optional[str] = None
