from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from studentms.core.database import Base

class Student(Base):
    __tablename__ = "students"

    roll_no: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(String, nullable=True)
    contact: Mapped[str] = mapped_column(String, nullable=True)

    grades: Mapped[list["Grade"]] = relationship(
        "Grade",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
