# cli/menu_helpers.py

"""
Shared console plumbing for the Student Roster menus.

Covers numbered menus and result listings, yes/no confirmation, blank-aware text and GPA prompts,
the save flow used by several menus, and a handful of stock status messages. Every menu module
routes its input and output through here so the roster screens look and behave the same.
"""

from enum import Enum
from typing import Any, Callable, Iterable

import cli.formatters as formatters
from cli.path_utils import ensure_parent_dir, resolve_data_file
from core.response import Response
from core.validators import (
    MAX_GPA,
    MIN_GPA,
    parse_float,
    parse_float_in_range,
    parse_int_in_range,
)
from models.roster import StudentRoster
from services.persistence import RosterPersistence

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    EXIT = "EXIT"


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Prints `title` and the numbered `options`, then waits for a valid pick.

    Args:
        title (str): Heading printed above the numbered list.
        options (list[tuple[str, Callable[..., Any]]]): Ordered (label, handler) pairs; entry N is chosen with "N".
        zero_option (str, optional): Label shown next to "0". Defaults to "Return".

    Returns:
        The handler paired with the chosen label, or `MenuSignal.EXIT` when "0" is entered.

    Notes:
        - Anything other than "0" or an in-range number re-prints the menu.
    """
    while True:
        print(f"\n{title}")

        for number, (label, _) in enumerate(options, 1):
            print(f"{number}. {label}")

        print(f"0. {zero_option}")

        choice = prompt_user_input("Select an option: ")

        if choice == "0":
            return MenuSignal.EXIT

        selection = parse_int_in_range(choice, 1, len(options))

        if selection is not None:
            return options[selection - 1][1]

        print("Invalid selection. Please try again.")


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = str,
) -> None:
    """
    Prints one line per item in `results`, rendered with `formatter` and optionally numbered from 1.
    """
    for number, result in enumerate(results, 1):
        prefix = f"{number:>2}. " if show_index else ""
        print(f"{prefix}{formatter(result)}")


def display_response_failure(response: Response) -> None:
    """
    Prints the error name and readable message of a failed `Response`; successful responses print nothing.
    """
    if response.success:
        return

    error_label = response.error.name if response.error else "UNKNOWN"

    print(f"\n[ERROR: {error_label}] {formatters.format_response_error(response)}")


# === prompt user input methods ===


# Every prompt goes through `prompt_user_input()`, which strips the reply.
# A blank reply doubles as a control signal:
#   - the `_or_cancel` variants turn it into `MenuSignal.CANCEL`
#   - the `_or_none` variant turns it into `None` ("keep the current value")


def confirm_action(prompt: str) -> bool:
    while True:
        choice = prompt_user_input(f"{prompt} (y/n): ").lower()

        if choice in YES_ANSWERS:
            return True

        if choice in NO_ANSWERS:
            return False

        print("Please answer 'y' or 'n'.")


def confirm_make_change() -> bool:
    return confirm_action("Apply this change?")


def confirm_unsaved_changes() -> bool:
    return confirm_action(
        "The roster has unsaved changes. Save them before continuing?"
    )


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    reply = prompt_user_input(prompt)
    return reply if reply else MenuSignal.CANCEL


def prompt_user_input_or_none(prompt: str) -> str | None:
    reply = prompt_user_input(prompt)
    return reply if reply else None


def prompt_gpa_input_or_cancel(prompt: str) -> float | MenuSignal:
    """
    Solicits a GPA, re-prompting until the input is a number within the valid range.

    Returns:
        The parsed GPA, or `MenuSignal.CANCEL` if the user leaves the input blank.
    """
    while True:
        gpa_input = prompt_user_input_or_cancel(prompt)

        if gpa_input is MenuSignal.CANCEL:
            return MenuSignal.CANCEL

        gpa = parse_float_in_range(gpa_input, MIN_GPA, MAX_GPA)

        if gpa is not None:
            return gpa

        print(f"\n[ERROR] GPA must be a number between {MIN_GPA} and {MAX_GPA}.")
        print("Please try again.")


def prompt_float_input_or_cancel(prompt: str) -> float | MenuSignal:
    while True:
        value_input = prompt_user_input_or_cancel(prompt)

        if value_input is MenuSignal.CANCEL:
            return MenuSignal.CANCEL

        value = parse_float(value_input)

        if value is not None:
            return value

        print("\n[ERROR] Please enter a number.")


def prompt_data_file(action: str) -> str:
    file_input = prompt_user_input_or_none(
        f"Enter the file path to {action} (leave blank to use the default):"
    )
    return resolve_data_file(file_input)


# === saving ===


def save_roster(roster: StudentRoster, persistence: RosterPersistence) -> bool:
    """
    Prompts for a destination and writes the roster to disk.

    Returns:
        True if the roster was saved, and False otherwise.
    """
    file_path = prompt_data_file("save to")

    try:
        ensure_parent_dir(file_path)
    except OSError as e:
        print(f"\n[ERROR] Could not create directory for {file_path}: {e}")
        return False

    persistence_response = persistence.save(roster, file_path)

    if not persistence_response.success:
        display_response_failure(persistence_response)
        return False

    print(
        f"\nSaved {persistence_response.data['count']} students to {persistence_response.data['path']}."
    )
    return True


def prompt_if_dirty(roster: StudentRoster, persistence: RosterPersistence) -> None:
    if roster.has_unsaved_changes and confirm_unsaved_changes():
        save_roster(roster, persistence)


# === status messages ===


def returning_without_changes() -> None:
    print("\nNo changes were made.")


def returning_to(destination: str) -> None:
    print(f"\nBack to the {destination}.")


def caution_banner() -> None:
    print(f"\n{formatters.format_banner_text('WARNING')}")
