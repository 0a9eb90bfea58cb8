"""
Durable store backed by SQLAlchemy.

Every write returns a ``Result`` instead of raising: unique/primary key and
CHECK violations, missing foreign keys, zero-row updates and driver errors are
all caught here, rolled back, logged with the action tag and collapsed.
Only opening the database and creating the schema raise, because the program
cannot continue without them.
"""

from typing import Callable, List, Optional, Tuple

from sqlalchemy import delete, func, select, update, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from studentms.core.database import Base, build_engine, build_sessionmaker, get_db
from studentms.core.exceptions import SchemaError, StoreOpenError
from studentms.core.logger import logger
from studentms.core.result import Result
from studentms.models import Course, Grade, Student
from studentms.schemas import Counts, CourseRecord, GradeRecord, StudentRecord

SEED_STUDENTS = [
    StudentRecord(roll_no="S001", name="Ava", address="12 Oak St", contact="021-111"),
    StudentRecord(roll_no="S002", name="Leo", address="34 Pine Ave", contact="021-222"),
    StudentRecord(roll_no="S003", name="Mia", address="56 Willow Rd", contact="021-333"),
]

SEED_COURSES = [
    CourseRecord(code="MTH101", title="Maths", description="Numbers and algebra", teacher="Mr. King"),
    CourseRecord(code="SCI101", title="Science", description="Intro science", teacher="Ms. Ray"),
    CourseRecord(code="ENG101", title="English", description="Reading & writing", teacher="Mrs. Lee"),
]

SEED_GRADES = [
    GradeRecord(roll_no="S001", course_code="MTH101", internal_mark=75, final_mark=88),
    GradeRecord(roll_no="S001", course_code="SCI101", internal_mark=62, final_mark=70),
    GradeRecord(roll_no="S002", course_code="ENG101", internal_mark=80, final_mark=92),
    GradeRecord(roll_no="S003", course_code="MTH101", internal_mark=55, final_mark=60),
]


def _classify_integrity_error(e: IntegrityError) -> Result:
    message = str(e.orig).upper()
    if "FOREIGN KEY" in message:
        return Result.NOT_FOUND
    if "CHECK" in message:
        return Result.INVALID
    return Result.CONFLICT


def _to_student(row: Student) -> StudentRecord:
    return StudentRecord(
        roll_no=row.roll_no,
        name=row.name,
        address=row.address or "",
        contact=row.contact or "",
    )


def _to_course(row: Course) -> CourseRecord:
    return CourseRecord(
        code=row.code,
        title=row.title,
        description=row.description or "",
        teacher=row.teacher or "",
    )


def _to_grade(row: Grade) -> GradeRecord:
    return GradeRecord(
        roll_no=row.roll_no,
        course_code=row.course_code,
        internal_mark=row.internal_mark,
        final_mark=row.final_mark,
    )


class Store:
    def __init__(self, engine: Engine, session_factory: Optional[sessionmaker[Session]] = None):
        self._engine: Optional[Engine] = engine
        self._session_factory = session_factory or build_sessionmaker(engine)

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    # === lifecycle ===

    @classmethod
    def open(cls, url: str) -> "Store":
        """
        Opens (and for SQLite, creates) the database at ``url``.

        Args:
            url: SQLAlchemy database URL, e.g. ``sqlite:///school.db``

        Returns:
            Store: An open store with foreign keys enforced

        Raises:
            StoreOpenError: The database could not be opened
        """
        try:
            engine = build_engine(url)
            with engine.connect():
                pass
        except SQLAlchemyError as e:
            logger.critical(f"[OPEN DATABASE] Could not open {url}: {str(e)}")
            raise StoreOpenError(f"Could not open database: {url}") from e

        logger.info(f"[OPEN DATABASE] Opened {url}")
        return cls(engine)

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.debug("[CLOSE DATABASE] Engine disposed")

    def init_schema(self, seed: bool = True) -> None:
        """
        Creates missing tables and seeds every table that is still empty.

        Safe to run on every startup. Each table is seeded on its own, so an
        existing students table does not stop courses from being seeded.
        Seed enrollments whose student or course is absent are skipped.

        Raises:
            SchemaError: Table creation or seeding failed
        """
        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            logger.critical(f"[INIT SCHEMA] Could not create tables: {str(e)}")
            raise SchemaError("Could not create tables") from e

        if not seed:
            logger.success("[INIT SCHEMA] Schema ready")
            return

        try:
            with get_db(self._session_factory) as db:
                if self._is_empty(db, Student):
                    db.add_all(Student(**s.model_dump()) for s in SEED_STUDENTS)
                    db.commit()
                    logger.info(f"[INIT SCHEMA] Seeded {len(SEED_STUDENTS)} students")

                if self._is_empty(db, Course):
                    db.add_all(Course(**c.model_dump()) for c in SEED_COURSES)
                    db.commit()
                    logger.info(f"[INIT SCHEMA] Seeded {len(SEED_COURSES)} courses")

                if self._is_empty(db, Grade):
                    seeded = 0
                    for g in SEED_GRADES:
                        if db.get(Student, g.roll_no) is None or db.get(Course, g.course_code) is None:
                            logger.warning(f"[INIT SCHEMA] Skipping seed enrollment {g.roll_no}/{g.course_code}: parent missing")
                            continue
                        db.add(Grade(**g.model_dump()))
                        seeded += 1
                    db.commit()
                    logger.info(f"[INIT SCHEMA] Seeded {seeded} enrollments")

        except SQLAlchemyError as e:
            logger.critical(f"[INIT SCHEMA] Seeding failed: {str(e)}")
            raise SchemaError("Could not seed tables") from e

        logger.success("[INIT SCHEMA] Schema ready")

    @staticmethod
    def _is_empty(db: Session, model) -> bool:
        return db.execute(select(model).limit(1)).first() is None

    # === reads ===

    def load_all(self) -> Tuple[List[StudentRecord], List[CourseRecord], List[GradeRecord]]:
        with get_db(self._session_factory) as db:
            students = [_to_student(s) for s in db.scalars(select(Student))]
            courses = [_to_course(c) for c in db.scalars(select(Course))]
            grades = [_to_grade(g) for g in db.scalars(select(Grade))]

        logger.info(
            f"[LOAD ALL] Loaded {len(students)} students, {len(courses)} courses, {len(grades)} enrollments"
        )
        return students, courses, grades

    def counts(self) -> Counts:
        with get_db(self._session_factory) as db:
            return Counts(
                students=db.scalar(select(func.count()).select_from(Student)),
                courses=db.scalar(select(func.count()).select_from(Course)),
                enrollments=db.scalar(select(func.count()).select_from(Grade)),
            )

    # === writes ===

    def _write(self, action: str, subject: str, work: Callable[[Session], bool]) -> Result:
        """
        Runs ``work`` in its own transaction and turns the outcome into a Result.

        ``work`` returns False when its statement matched no row.
        """
        if self._engine is None:
            logger.error(f"[{action}] Store is closed: {subject}")
            return Result.IO_ERROR

        with get_db(self._session_factory) as db:
            try:
                matched = work(db)
                if not matched:
                    db.rollback()
                    logger.warning(f"[{action}] No matching row: {subject}")
                    return Result.NOT_FOUND
                db.commit()

            except IntegrityError as e:
                db.rollback()
                result = _classify_integrity_error(e)
                logger.warning(f"[{action}] Constraint violation ({result.value}) for {subject}: {str(e.orig)}")
                return result

            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"[{action}] Database error for {subject}: {str(e)}")
                return Result.IO_ERROR

        logger.info(f"[{action}] Saved: {subject}")
        return Result.OK

    def insert_student(self, student: StudentRecord) -> Result:
        def work(db: Session) -> bool:
            db.add(Student(**student.model_dump()))
            db.flush()
            return True

        return self._write("ADD STUDENT", student.roll_no, work)

    def insert_course(self, course: CourseRecord) -> Result:
        def work(db: Session) -> bool:
            db.add(Course(**course.model_dump()))
            db.flush()
            return True

        return self._write("ADD COURSE", course.code, work)

    def enroll(self, roll_no: str, course_code: str) -> Result:
        def work(db: Session) -> bool:
            db.add(Grade(roll_no=roll_no, course_code=course_code, internal_mark=0, final_mark=0))
            db.flush()
            return True

        return self._write("ENROLL", f"{roll_no}/{course_code}", work)

    def update_marks(self, roll_no: str, course_code: str, internal_mark: float, final_mark: float) -> Result:
        def work(db: Session) -> bool:
            result = db.execute(
                update(Grade)
                .where(Grade.roll_no == roll_no, Grade.course_code == course_code)
                .values(internal_mark=internal_mark, final_mark=final_mark)
            )
            return result.rowcount > 0

        return self._write("ENTER MARKS", f"{roll_no}/{course_code}", work)

    def update_student(self, student: StudentRecord) -> Result:
        def work(db: Session) -> bool:
            result = db.execute(
                update(Student)
                .where(Student.roll_no == student.roll_no)
                .values(name=student.name, address=student.address, contact=student.contact)
            )
            return result.rowcount > 0

        return self._write("UPDATE STUDENT", student.roll_no, work)

    def update_course(self, course: CourseRecord) -> Result:
        def work(db: Session) -> bool:
            result = db.execute(
                update(Course)
                .where(Course.code == course.code)
                .values(title=course.title, description=course.description, teacher=course.teacher)
            )
            return result.rowcount > 0

        return self._write("UPDATE COURSE", course.code, work)

    def delete_student(self, roll_no: str) -> Result:
        # grades rows go with it through ON DELETE CASCADE
        def work(db: Session) -> bool:
            result = db.execute(delete(Student).where(Student.roll_no == roll_no))
            return result.rowcount > 0

        return self._write("DELETE STUDENT", roll_no, work)

    def delete_course(self, code: str) -> Result:
        def work(db: Session) -> bool:
            result = db.execute(delete(Course).where(Course.code == code))
            return result.rowcount > 0

        return self._write("DELETE COURSE", code, work)

    def delete_enrollment(self, roll_no: str, course_code: str) -> Result:
        def work(db: Session) -> bool:
            result = db.execute(
                delete(Grade).where(Grade.roll_no == roll_no, Grade.course_code == course_code)
            )
            return result.rowcount > 0

        return self._write("DELETE ENROLLMENT", f"{roll_no}/{course_code}", work)


def close_store(store: Optional[Store]) -> None:
    """Releases the store; a store that never opened is fine too."""
    if store is not None:
        store.close()
