# cli/students_menu.py

"""
Manage Students menu for the Student Roster CLI.

This module defines the interface for working with `Student` records, including:
- Adding new students with generated IDs
- Editing names and GPA
- Permanently removing students
- Finding, searching, listing, and sorting students
- Viewing roster statistics

All operations are routed through the `StudentRoster` API for validation and state tracking.
"""

from typing import cast

import cli.formatters as formatters
import cli.menu_helpers as helpers
from cli.menu_helpers import MenuSignal
from models.roster import StudentRoster
from models.student import Student
from services.persistence import RosterPersistence


def run(roster: StudentRoster, persistence: RosterPersistence) -> None:
    """
    Top-level loop with dispatch for the Manage Students menu.

    Args:
        roster (StudentRoster): The active `StudentRoster`.
        persistence (RosterPersistence): Used to offer a save before returning.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - The finally block guarantees a check for unsaved changes before returning.
    """
    title = formatters.format_banner_text("Manage Students")
    options = [
        ("Add Student", add_student),
        ("Edit Student", find_and_edit_student),
        ("Remove Student", find_and_remove_student),
        ("Find Student by ID", view_student_by_id),
        ("Search Students by Last Name", search_students_by_last_name),
        ("View All Students", view_all_students),
        ("Sort Students", sort_students_menu),
        ("View Statistics", view_statistics),
    ]
    zero_option = "Return to Main menu"

    try:
        while True:
            menu_response = helpers.display_menu(title, options, zero_option)

            if menu_response is MenuSignal.EXIT:
                break

            elif callable(menu_response):
                menu_response(roster)

            else:
                raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    finally:
        helpers.prompt_if_dirty(roster, persistence)

    helpers.returning_to("Main menu")


# === add student ===


def add_student(roster: StudentRoster) -> None:
    """
    Loops a prompt to collect a new student's details and add them with a generated ID.

    Args:
        roster (StudentRoster): The active `StudentRoster`.
    """
    while True:
        first_name = helpers.prompt_user_input_or_cancel(
            "Enter first name (leave blank to cancel):"
        )

        if first_name is MenuSignal.CANCEL:
            break
        first_name = cast(str, first_name)

        last_name = helpers.prompt_user_input_or_cancel(
            "Enter last name (leave blank to cancel):"
        )

        if last_name is MenuSignal.CANCEL:
            break
        last_name = cast(str, last_name)

        gpa = helpers.prompt_gpa_input_or_cancel(
            "Enter GPA (0.0 - 4.0, leave blank to cancel):"
        )

        if gpa is MenuSignal.CANCEL:
            break
        gpa = cast(float, gpa)

        roster_response = roster.add_with_generated_id(first_name, last_name, gpa)

        if not roster_response.success:
            helpers.display_response_failure(roster_response)
            print(f"\n{first_name} {last_name} was not added.")

        else:
            print("\nStudent added successfully:")
            print(formatters.format_student_oneline(roster_response.data["record"]))

        if not helpers.confirm_action(
            "Would you like to continue adding new students?"
        ):
            break

    helpers.returning_to("Manage Students menu")


# === edit student ===


def find_and_edit_student(roster: StudentRoster) -> None:
    student = prompt_find_student(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    edit_student(student, roster)


def edit_student(student: Student, roster: StudentRoster) -> None:
    """
    Collects replacement values for a `Student` and applies them in a single update.

    Args:
        student (Student): The `Student` being edited.
        roster (StudentRoster): The active `StudentRoster`.

    Notes:
        - Blank input keeps the current value for that field.
        - The update is all-or-nothing; if it fails the record is left as it was.
    """
    print("\nYou are editing the following student:")
    print(formatters.format_student_multiline(student))

    first_name = helpers.prompt_user_input_or_none(
        f"Enter new first name (leave blank to keep '{student.first_name}'):"
    )
    last_name = helpers.prompt_user_input_or_none(
        f"Enter new last name (leave blank to keep '{student.last_name}'):"
    )
    gpa = helpers.prompt_gpa_input_or_cancel(
        f"Enter new GPA (leave blank to keep {student.gpa:.2f}):"
    )
    new_gpa = None if gpa is MenuSignal.CANCEL else cast(float, gpa)

    if first_name is None and last_name is None and new_gpa is None:
        helpers.returning_without_changes()
        return

    preview = student.with_changes(first_name, last_name, new_gpa)
    print("\nThe student will be updated to:")
    print(formatters.format_student_multiline(preview))

    if not helpers.confirm_make_change():
        helpers.returning_without_changes()
        return

    roster_response = roster.update(student.id, first_name, last_name, new_gpa)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        print("\nStudent was not updated.")
        helpers.returning_without_changes()
    else:
        print("\nStudent successfully updated:")
        print(formatters.format_student_oneline(roster_response.data["record"]))


# === remove student ===


def find_and_remove_student(roster: StudentRoster) -> None:
    student = prompt_find_student(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    confirm_and_remove(student, roster)


def confirm_and_remove(student: Student, roster: StudentRoster) -> None:
    """
    Deletes the `Student` record from the `StudentRoster` after preview and user confirmation.

    Args:
        student (Student): The `Student` targeted for deletion.
        roster (StudentRoster): The active `StudentRoster`.
    """
    helpers.caution_banner()
    print("You are about to permanently delete the following student record:")
    print(formatters.format_student_multiline(student))

    confirm_deletion = helpers.confirm_action(
        "Are you sure you want to permanently delete this student? This action cannot be undone."
    )

    roster_response = roster.remove(student.id, confirm_deletion)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        print("\nStudent was not removed.")
        helpers.returning_without_changes()
    else:
        print(f"\n{student.full_name} successfully removed from the roster.")


# === view students ===


def view_student_by_id(roster: StudentRoster) -> None:
    student = prompt_find_student(roster)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    print("\nYou are viewing the following student record:")
    print(formatters.format_student_multiline(student))


def search_students_by_last_name(roster: StudentRoster) -> None:
    last_name = helpers.prompt_user_input_or_cancel(
        "Enter last name to search for (leave blank to cancel):"
    )

    if last_name is MenuSignal.CANCEL:
        return
    last_name = cast(str, last_name)

    results = roster.search_by_last_name(last_name)

    if not results:
        print(f"\nNo students found with last name '{last_name}'.")
        return

    print(f"\nFound {len(results)} students with last name '{last_name}':")
    helpers.display_results(results, True, formatters.format_student_oneline)


def view_all_students(roster: StudentRoster) -> None:
    """
    Displays every `Student` record in current roster order.

    Args:
        roster (StudentRoster): The active `StudentRoster`.
    """
    banner = formatters.format_banner_text("All Students")
    print(f"\n{banner}")

    all_students = roster.all()

    if not all_students:
        print("There are no students yet.")
        return

    helpers.display_results(all_students, False, formatters.format_student_oneline)
    print(f"\nTotal students: {len(all_students)}")


def sort_students_menu(roster: StudentRoster) -> None:
    """
    Reorders the roster by a user-selected key and displays the result.

    Args:
        roster (StudentRoster): The active `StudentRoster`.

    Raises:
        RuntimeError: If the menu response is unrecognized.

    Notes:
        - Sorting is persistent: it changes the order records are listed and saved in.
    """
    title = "Sort Students"
    options = [
        ("Sort by Student ID", roster.sort_by_id),
        ("Sort by Last Name", roster.sort_by_last_name),
        ("Sort by GPA (highest first)", roster.sort_by_gpa_descending),
    ]
    zero_option = "Return to Manage Students menu"

    menu_response = helpers.display_menu(title, options, zero_option)

    if menu_response is MenuSignal.EXIT:
        return
    elif callable(menu_response):
        menu_response()
    else:
        raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    view_all_students(roster)


def view_statistics(roster: StudentRoster) -> None:
    banner = formatters.format_banner_text("Statistics")
    print(f"\n{banner}")
    print(formatters.format_statistics(roster))

    if roster.count() == 0:
        return

    threshold = helpers.prompt_float_input_or_cancel(
        "Enter a GPA threshold to count students above (leave blank to skip):"
    )

    if threshold is MenuSignal.CANCEL:
        return
    threshold = cast(float, threshold)

    print(
        f"\nStudents with GPA above {threshold:.2f}: {roster.count_above_gpa(threshold)}"
    )


# === finder methods ===


def prompt_find_student(roster: StudentRoster) -> Student | MenuSignal:
    """
    Prompts the user for a student ID until a matching `Student` is found.

    Args:
        roster (StudentRoster): The active `StudentRoster`.

    Returns:
        Student | MenuSignal: The matching `Student`, or `MenuSignal.CANCEL` if the user leaves the input blank.
    """
    while True:
        student_id = helpers.prompt_user_input_or_cancel(
            "Enter student ID (leave blank to cancel):"
        )

        if student_id is MenuSignal.CANCEL:
            return MenuSignal.CANCEL
        student_id = cast(str, student_id)

        student = roster.find_by_id(student_id)

        if student is not None:
            return student

        print(f"\nNo student found with ID: {student_id}. Please try again.")
