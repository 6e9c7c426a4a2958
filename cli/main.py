# cli/main.py

"""
Main Menu for the Student Roster CLI.

Sets up logging and configuration, creates the session's `StudentRoster`, optionally seeds it with
sample data, and dispatches to the Manage Students and Roster Files menus.
"""

import logging
import os

from dotenv import load_dotenv

import cli.formatters as formatters
import cli.menu_helpers as helpers
from cli import file_menu, students_menu
from cli.menu_helpers import MenuSignal
from cli.path_utils import get_sample_data_file
from core.response import ErrorCode
from models.roster import StudentRoster
from models.student import Student
from services.persistence import RosterPersistence

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "ROSTER_LOG_LEVEL"

DEFAULT_SAMPLE_STUDENTS = [
    Student("S001", "John", "Doe", 3.5),
    Student("S002", "Jane", "Smith", 3.8),
    Student("S003", "Alice", "Johnson", 3.2),
]


def resolve_log_level(level_name: str) -> int:
    level = getattr(logging, level_name.strip().upper(), None)

    # logging also exposes non-level attributes such as BASIC_FORMAT and raiseExceptions
    if isinstance(level, bool) or not isinstance(level, int):
        return logging.WARNING

    return level


def configure_logging() -> None:
    logging.basicConfig(
        level=resolve_log_level(os.getenv(LOG_LEVEL_ENV, "WARNING")),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Main menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    load_dotenv()
    configure_logging()

    roster = StudentRoster()
    persistence = RosterPersistence()

    title = formatters.format_banner_text("STUDENT ROSTER")
    print(f"\n{title}")

    if helpers.confirm_action("Load sample data for testing?"):
        load_sample_data(roster, persistence)
    else:
        print("\nStarting with an empty roster.")

    options = [
        ("Manage Students", students_menu.run),
        ("Manage Roster Files", file_menu.run),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            helpers.prompt_if_dirty(roster, persistence)
            exit_program()

        elif callable(menu_response):
            menu_response(roster, persistence)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def load_sample_data(roster: StudentRoster, persistence: RosterPersistence) -> None:
    """
    Seeds the roster from the configured sample file, falling back to built-in records.

    Notes:
        - The sample file path comes from `ROSTER_SAMPLE_FILE`, defaulting to `sample_data.csv` in the working directory.
        - The built-in records are used when the file is missing, unreadable, or has no valid lines.
    """
    sample_path = get_sample_data_file()
    persistence_response = persistence.load_replacing(roster, sample_path)

    if persistence_response.success and persistence_response.data["count"] > 0:
        print(
            f"\nSample data loaded from {sample_path}: {persistence_response.data['count']} students added."
        )
        return

    if persistence_response.error is ErrorCode.NOT_FOUND:
        print(f"\n{sample_path} not found. Loading default sample data ...")
    else:
        logger.warning("Sample file %s could not be used", sample_path)
        print(f"\nCould not use {sample_path}. Loading default sample data ...")

    roster_response = roster.replace_all(DEFAULT_SAMPLE_STUDENTS)

    if not roster_response.success:
        helpers.display_response_failure(roster_response)
        return

    roster.mark_saved()
    print(f"Default sample data loaded: {roster_response.data['count']} students added.")


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
