# cli/file_menu.py

"""
Roster Files menu for the Student Roster CLI.

Provides save, load (replace), and import (append) operations. All file access is delegated to
`RosterPersistence`; this module only collects paths, confirms destructive actions, and reports results.
"""

import cli.formatters as formatters
import cli.menu_helpers as helpers
from cli.menu_helpers import MenuSignal
from core.response import Response
from models.roster import StudentRoster
from services.persistence import RosterPersistence


def run(roster: StudentRoster, persistence: RosterPersistence) -> None:
    """
    Top-level loop with dispatch for the Roster Files menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    title = formatters.format_banner_text("Roster Files")
    options = [
        ("Save Roster to File", helpers.save_roster),
        ("Load Roster from File (replace current students)", load_roster),
        ("Import Students from File (keep current students)", import_students),
    ]
    zero_option = "Return to Main menu"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response(roster, persistence)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Main menu")


def load_roster(roster: StudentRoster, persistence: RosterPersistence) -> None:
    """
    Replaces the roster with the contents of a file after confirmation.

    Notes:
        - If no line in the file can be parsed, the current roster is kept as is.
    """
    if roster.count() > 0:
        helpers.caution_banner()
        print(f"Loading a file will replace all {roster.count()} current students.")

        if roster.has_unsaved_changes:
            print("The current roster has unsaved changes.")

        if not helpers.confirm_action("Do you wish to continue?"):
            helpers.returning_without_changes()
            return

    file_path = helpers.prompt_data_file("load from")

    print("\nLoading roster ...")

    persistence_response = persistence.load_replacing(roster, file_path)

    display_batch_result(persistence_response, "loaded")

    if persistence_response.success and persistence_response.data["count"] == 0:
        print("No valid records were found. The current roster was kept.")


def import_students(roster: StudentRoster, persistence: RosterPersistence) -> None:
    file_path = helpers.prompt_data_file("import from")

    print("\nImporting students ...")

    persistence_response = persistence.import_appending(roster, file_path)

    display_batch_result(persistence_response, "imported")


def display_batch_result(response: Response, verb: str) -> None:
    if not response.success:
        helpers.display_response_failure(response)
        return

    warnings = response.data["warnings"]

    print(f"... {response.data['count']} students {verb} from {response.data['path']}.")

    if warnings:
        print(f"\n{len(warnings)} lines were skipped:")
        helpers.display_results(warnings, False, formatters.format_skipped_line)
