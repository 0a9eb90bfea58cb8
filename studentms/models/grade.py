from sqlalchemy import CheckConstraint, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studentms.core.database import Base

class Grade(Base):
    __tablename__ = "grades"
    __table_args__ = (
        CheckConstraint("internal_mark BETWEEN 0 AND 100", name="ck_grades_internal_mark"),
        CheckConstraint("final_mark BETWEEN 0 AND 100", name="ck_grades_final_mark"),
    )

    roll_no: Mapped[str] = mapped_column(
        String, ForeignKey("students.roll_no", ondelete="CASCADE"), primary_key=True
    )
    course_code: Mapped[str] = mapped_column(
        String, ForeignKey("courses.code", ondelete="CASCADE"), primary_key=True
    )
    internal_mark: Mapped[float] = mapped_column(Float, nullable=False, default=0, server_default="0")
    final_mark: Mapped[float] = mapped_column(Float, nullable=False, default=0, server_default="0")

    student: Mapped["Student"] = relationship("Student", back_populates="grades", passive_deletes=True)
    course: Mapped["Course"] = relationship("Course", back_populates="grades", passive_deletes=True)
