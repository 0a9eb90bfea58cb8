from typing import Optional

from pydantic import BaseModel, ConfigDict, constr


class StudentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    roll_no: constr(strip_whitespace=True, min_length=1)
    name: str
    address: str = ""
    contact: str = ""


class UpdateStudent(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = None
