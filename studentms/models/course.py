from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studentms.core.database import Base

class Course(Base):
    __tablename__ = "courses"

    code: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=True)
    teacher: Mapped[str] = mapped_column(String, nullable=True)

    grades: Mapped[list["Grade"]] = relationship(
        "Grade",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
