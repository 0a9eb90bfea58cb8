"""
Main menu of the console front end.

Each action collects and validates its input, calls exactly one repository
operation and prints the outcome. Actions return ``MenuSignal.EXIT`` when the
user asked to leave the program from inside a prompt.
"""

from typing import Callable, Dict

from studentms.cli.prompts import MenuSignal, confirm, prompt_edit, prompt_number, prompt_until_valid, read_line
from studentms.core.result import Result
from studentms.schemas import CourseRecord, StudentRecord, StudentReport, UpdateCourse, UpdateStudent
from studentms.services.repository import Repository
from studentms.utils.validation import (
    is_non_empty_short,
    is_valid_course_code,
    is_valid_name,
    is_valid_phone,
    is_valid_roll,
)

LINE = "=" * 53
THIN = "-" * 53

FAILURE_TEXT = {
    Result.NOT_FOUND: "not found",
    Result.CONFLICT: "duplicate",
    Result.INVALID: "invalid value",
    Result.IO_ERROR: "database error",
}


def show_welcome() -> None:
    print(LINE)
    print("WELCOME".center(53))
    print(LINE)
    print("Student Management System".center(53))
    print(THIN)
    print("Developed for PSPSchool Project".center(53))
    print(LINE)
    print()


def show_menu(repo: Repository) -> None:
    counts = repo.counts()
    print(LINE)
    print("MAIN MENU".center(53))
    print(LINE)
    print(f"  Students: {counts.students:02d}   Courses: {counts.courses:02d}   Enrolments: {counts.enrollments:02d}")
    print(THIN)
    print("  [1]  Add student       [2]  View students")
    print("  [3]  Add course        [4]  View courses")
    print("  [5]  Enroll student    [6]  Enter marks")
    print("  [7]  Student report    [13] View enrollments/grades")
    print(THIN)
    print(" EDIT:")
    print("  [8]  Edit student      [9]  Edit course")
    print(THIN)
    print(" DELETE:")
    print("  [10] Delete student    [11] Delete course")
    print("  [12] Delete enrolment (student from course)")
    print(THIN)
    print("  [0]  EXIT")
    print(LINE)


def report_outcome(result: Result, success: str, failure: str) -> None:
    if result:
        print(success)
    else:
        print(f"{failure} ({FAILURE_TEXT.get(result, result.value)}).")


# === students ===


def add_student(repo: Repository) -> MenuSignal:
    signal, roll = prompt_until_valid(
        "Roll No (e.g. S001)", is_valid_roll, "Invalid roll no. Use S + 3-6 digits (e.g. S001)."
    )
    if signal is not MenuSignal.OK:
        return signal
    if repo.find_student(roll) is not None:
        print("That roll is already used.")
        return MenuSignal.OK

    signal, name = prompt_until_valid("Name", is_valid_name, "Invalid name. Letters/spaces only (2-40).")
    if signal is not MenuSignal.OK:
        return signal
    signal, address = prompt_until_valid("Address", is_non_empty_short, "Address required (max 60 chars).")
    if signal is not MenuSignal.OK:
        return signal
    signal, contact = prompt_until_valid("Contact (NZ phone)", is_valid_phone, "Invalid NZ phone.")
    if signal is not MenuSignal.OK:
        return signal

    result = repo.add_student(StudentRecord(roll_no=roll, name=name, address=address, contact=contact))
    report_outcome(result, "Student added (saved to DB).", "Could not add student")
    return MenuSignal.OK


def view_students(repo: Repository) -> MenuSignal:
    students = repo.students()
    if not students:
        print("No students enrolled.")
        return MenuSignal.OK
    print("--- View Students ---")
    for s in students:
        print(f"{s.roll_no} - {s.name} - {s.address} - {s.contact}")
    return MenuSignal.OK


def edit_student(repo: Repository) -> MenuSignal:
    signal, roll = prompt_until_valid("Roll No to edit", is_valid_roll, "Invalid roll.")
    if signal is not MenuSignal.OK:
        return signal
    current = repo.find_student(roll)
    if current is None:
        print("Student not found.")
        return MenuSignal.OK

    signal, name = prompt_edit("Name", current.name, is_valid_name, "Letters/spaces only (2-40).")
    if signal is not MenuSignal.OK:
        return signal
    signal, address = prompt_edit("Address", current.address, is_non_empty_short, "Required (max 60).")
    if signal is not MenuSignal.OK:
        return signal
    signal, contact = prompt_edit("Contact (NZ phone)", current.contact, is_valid_phone, "Invalid NZ phone.")
    if signal is not MenuSignal.OK:
        return signal

    result = repo.edit_student(roll, UpdateStudent(name=name, address=address, contact=contact))
    report_outcome(result, "Student updated (saved to DB).", "Update failed")
    return MenuSignal.OK


def delete_student(repo: Repository) -> MenuSignal:
    signal, roll = prompt_until_valid("Roll No to delete", is_valid_roll, "Invalid roll.")
    if signal is not MenuSignal.OK:
        return signal
    if repo.find_student(roll) is None:
        print("Student not found.")
        return MenuSignal.OK

    signal = confirm("Delete student and all their grades?")
    if signal is not MenuSignal.OK:
        return signal

    result = repo.delete_student(roll)
    report_outcome(result, "Student deleted (DB + local grades removed).", "Delete failed")
    return MenuSignal.OK


# === courses ===


def add_course(repo: Repository) -> MenuSignal:
    signal, code = prompt_until_valid("Code (e.g. ENG101)", is_valid_course_code, "Invalid code. 3 letters + 3 digits.")
    if signal is not MenuSignal.OK:
        return signal
    if repo.find_course(code) is not None:
        print("Course code already exists.")
        return MenuSignal.OK

    signal, title = prompt_until_valid("Title", is_non_empty_short, "Title required (max 60).")
    if signal is not MenuSignal.OK:
        return signal
    signal, description = prompt_until_valid("Description", is_non_empty_short, "Description required (max 60).")
    if signal is not MenuSignal.OK:
        return signal
    signal, teacher = prompt_until_valid("Teacher", is_valid_name, "Letters/spaces only.")
    if signal is not MenuSignal.OK:
        return signal

    result = repo.add_course(CourseRecord(code=code, title=title, description=description, teacher=teacher))
    report_outcome(result, "Course added (saved to DB).", "Could not add course")
    return MenuSignal.OK


def view_courses(repo: Repository) -> MenuSignal:
    courses = repo.courses()
    if not courses:
        print("No courses.")
        return MenuSignal.OK
    for c in courses:
        print(f"{c.code} - {c.title} - {c.teacher}")
    return MenuSignal.OK


def edit_course(repo: Repository) -> MenuSignal:
    signal, code = prompt_until_valid("Course Code to edit", is_valid_course_code, "Invalid code.")
    if signal is not MenuSignal.OK:
        return signal
    current = repo.find_course(code)
    if current is None:
        print("Course not found.")
        return MenuSignal.OK

    signal, title = prompt_edit("Title", current.title, is_non_empty_short, "Required (max 60).")
    if signal is not MenuSignal.OK:
        return signal
    signal, description = prompt_edit("Description", current.description, is_non_empty_short, "Required (max 60).")
    if signal is not MenuSignal.OK:
        return signal
    signal, teacher = prompt_edit("Teacher", current.teacher, is_valid_name, "Letters/spaces only.")
    if signal is not MenuSignal.OK:
        return signal

    result = repo.edit_course(code, UpdateCourse(title=title, description=description, teacher=teacher))
    report_outcome(result, "Course updated (saved to DB).", "Update failed")
    return MenuSignal.OK


def delete_course(repo: Repository) -> MenuSignal:
    signal, code = prompt_until_valid("Course Code to delete", is_valid_course_code, "Invalid code.")
    if signal is not MenuSignal.OK:
        return signal
    if repo.find_course(code) is None:
        print("Course not found.")
        return MenuSignal.OK

    signal = confirm("Delete course and all associated grades?")
    if signal is not MenuSignal.OK:
        return signal

    result = repo.delete_course(code)
    report_outcome(result, "Course deleted (DB + local grades removed).", "Delete failed")
    return MenuSignal.OK


# === enrollments ===


def _prompt_enrollment_key():
    signal, roll = prompt_until_valid("Roll No", is_valid_roll, "Invalid roll.")
    if signal is not MenuSignal.OK:
        return signal, None, None
    signal, code = prompt_until_valid("Course Code", is_valid_course_code, "Invalid code.")
    if signal is not MenuSignal.OK:
        return signal, None, None
    return MenuSignal.OK, roll, code


def enroll_student(repo: Repository) -> MenuSignal:
    signal, roll, code = _prompt_enrollment_key()
    if signal is not MenuSignal.OK:
        return signal

    result = repo.enroll(roll, code)
    report_outcome(result, "Enrollment success (saved to DB).", "Failed to enroll")
    return MenuSignal.OK


def enter_marks(repo: Repository) -> MenuSignal:
    signal, roll, code = _prompt_enrollment_key()
    if signal is not MenuSignal.OK:
        return signal
    if not repo.is_enrolled(roll, code):
        print("Not enrolled in that course.")
        return MenuSignal.OK

    signal, internal = prompt_number("Internal mark", 0, 100)
    if signal is not MenuSignal.OK:
        return signal
    signal, final = prompt_number("Final mark", 0, 100)
    if signal is not MenuSignal.OK:
        return signal

    result = repo.enter_marks(roll, code, internal, final)
    report_outcome(result, "Marks saved (persisted to DB).", "Failed to save marks")
    return MenuSignal.OK


def delete_enrollment(repo: Repository) -> MenuSignal:
    signal, roll, code = _prompt_enrollment_key()
    if signal is not MenuSignal.OK:
        return signal
    if not repo.is_enrolled(roll, code):
        print("Not enrolled in that course.")
        return MenuSignal.OK

    signal = confirm("Delete this enrollment?")
    if signal is not MenuSignal.OK:
        return signal

    result = repo.delete_enrollment(roll, code)
    report_outcome(result, "Enrollment deleted (DB).", "Delete failed")
    return MenuSignal.OK


def view_enrollments(repo: Repository) -> MenuSignal:
    grades = repo.grades()
    if not grades:
        print("No enrollments.")
        return MenuSignal.OK
    for g in grades:
        print(
            f"{g.roll_no} -> {g.course_code} | internal={g.internal_mark:g} "
            f"final={g.final_mark:g} weighted={g.weighted():g}"
        )
    return MenuSignal.OK


# === reporting ===


def format_report(report: StudentReport) -> str:
    lines = [f"Student: {report.name} ({report.roll_no})"]
    for line in report.lines:
        lines.append(
            f" - {line.course_title} | internal={line.internal_mark:g} "
            f"final={line.final_mark:g} grade={line.weighted:g}"
        )
    if report.count:
        lines.append(
            f"Overall average: {report.average:g} | Courses: {report.count} "
            f"| Passed: {report.passed}/{report.count}"
        )
    else:
        lines.append("No courses enrolled.")
    return "\n".join(lines)


def student_report(repo: Repository) -> MenuSignal:
    roll = read_line("Roll No: ")
    report = repo.report(roll)
    if report is None:
        print("Student not found.")
    else:
        print(format_report(report))
    return MenuSignal.OK


ACTIONS: Dict[str, Callable[[Repository], MenuSignal]] = {
    "1": add_student,
    "2": view_students,
    "3": add_course,
    "4": view_courses,
    "5": enroll_student,
    "6": enter_marks,
    "7": student_report,
    "8": edit_student,
    "9": edit_course,
    "10": delete_student,
    "11": delete_course,
    "12": delete_enrollment,
    "13": view_enrollments,
}


def run_menu(repo: Repository) -> None:
    """Loops over the main menu until the user picks 0 or exits from a prompt."""
    while True:
        show_menu(repo)
        choice = read_line("  CHOICE: ")
        if choice == "0":
            return

        action = ACTIONS.get(choice)
        if action is None:
            print("Unknown option.")
            continue

        if action(repo) is MenuSignal.EXIT:
            return
