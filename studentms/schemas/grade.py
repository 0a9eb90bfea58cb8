from pydantic import BaseModel, ConfigDict, Field

INTERNAL_WEIGHT = 0.3
FINAL_WEIGHT = 0.7

MIN_MARK = 0.0
MAX_MARK = 100.0


class GradeRecord(BaseModel):
    """
    One enrollment of a student in a course, with its marks.

    Marks are not range-checked here: records loaded from the store are trusted,
    and new marks go through ``MarksUpdate`` first.
    """
    model_config = ConfigDict(from_attributes=True)

    roll_no: str
    course_code: str
    internal_mark: float = 0.0
    final_mark: float = 0.0

    @property
    def key(self) -> tuple[str, str]:
        return self.roll_no, self.course_code

    def weighted(self) -> float:
        return INTERNAL_WEIGHT * self.internal_mark + FINAL_WEIGHT * self.final_mark


class MarksUpdate(BaseModel):
    internal_mark: float = Field(ge=MIN_MARK, le=MAX_MARK)
    final_mark: float = Field(ge=MIN_MARK, le=MAX_MARK)
