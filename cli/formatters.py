# cli/formatters.py

# anything that renders domain objects or turns error codes into display text

from textwrap import dedent

from core.response import ErrorCode, Response
from core.validators import MAX_GPA, MIN_GPA
from models.roster import StudentRoster
from models.student import Student
from services.persistence import SkippedLine

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


# === student formatters ===


def format_student_oneline(student: Student) -> str:
    return f"ID: {student.id:<10} | Name: {student.full_name:<20} | GPA: {student.gpa:.2f}"


def format_student_multiline(student: Student) -> str:
    return dedent(
        f"""\
        Student {student.id}:
        ... First Name: {student.first_name}
        ... Last Name: {student.last_name}
        ... GPA: {student.gpa:.2f}"""
    )


# === statistics formatters ===


def format_statistics(roster: StudentRoster) -> str:
    highest = roster.highest_gpa()
    highest_line = (
        f"{highest.full_name} ({highest.id}) with {highest.gpa:.2f}"
        if highest
        else "[NO STUDENTS]"
    )

    return dedent(
        f"""\
        Roster statistics:
        ... Total Students: {roster.count()}
        ... Average GPA: {roster.average_gpa():.2f}
        ... Highest GPA: {highest_line}"""
    )


# === error formatters ===


def format_response_error(response: Response) -> str:
    """
    Builds a human-readable message for a failed `Response`.

    Args:
        response (Response): A failed response from `StudentRoster` or `RosterPersistence`.

    Returns:
        A one-line message naming the problem and the offending value.
    """
    data = response.data

    match response.error:
        case ErrorCode.INVALID_FIELD:
            if data.get("field") == "gpa":
                return f"Invalid GPA: {data.get('gpa')}. GPA must be between {MIN_GPA} and {MAX_GPA}."
            return f"Invalid value for {data.get('field', 'field')}."
        case ErrorCode.DUPLICATE_ID:
            return f"A student with ID '{data.get('id')}' already exists."
        case ErrorCode.NOT_FOUND:
            if "path" in data:
                return f"File not found: {data['path']}"
            return f"No student found with ID '{data.get('id')}'."
        case ErrorCode.CONFIRMATION_REQUIRED:
            return "Deletion must be confirmed before it can proceed."
        case ErrorCode.IO_FAILURE:
            return f"Could not read or write file: {data.get('path')}"
        case _:
            return f"Unexpected error: {response.error}"


def format_skipped_line(skipped: SkippedLine) -> str:
    match skipped.error:
        case ErrorCode.DUPLICATE_ID:
            reason = f"duplicate ID '{skipped.value}'"
        case ErrorCode.INVALID_FIELD:
            reason = f"invalid record '{skipped.value}'"
        case _:
            reason = skipped.value

    return f"Line {skipped.line_number}: skipped {reason}"
