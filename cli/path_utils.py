# cli/path_utils.py

import os

DATA_FILE_ENV = "ROSTER_DATA_FILE"
SAMPLE_FILE_ENV = "ROSTER_SAMPLE_FILE"
DEFAULT_SAMPLE_FILE = "sample_data.csv"


def get_default_data_file() -> str:
    """
    Resolves the default roster file path.

    Returns:
        The value of `ROSTER_DATA_FILE` if set and not blank, otherwise `~/Documents/StudentRoster/students.csv`.
    """
    configured = os.getenv(DATA_FILE_ENV, "").strip()

    if configured:
        return os.path.expanduser(configured)
    else:
        documents = os.path.join(os.path.expanduser("~"), "Documents")
        return os.path.join(documents, "StudentRoster", "students.csv")


def get_sample_data_file() -> str:
    configured = os.getenv(SAMPLE_FILE_ENV, "").strip()
    return os.path.expanduser(configured or DEFAULT_SAMPLE_FILE)


def resolve_data_file(user_input: str | None) -> str:
    """
    Produces an absolute roster file path from user input or the configured default.

    Args:
        user_input (str | None): An optional user-specified file path. If None or blank, the default path is used.

    Returns:
        A fully resolved, absolute file path.
    """
    if user_input is not None and user_input.strip():
        path = os.path.expanduser(user_input.strip())
    else:
        path = get_default_data_file()

    return os.path.abspath(path)


def ensure_parent_dir(file_path: str) -> None:
    """
    Creates the parent directory of `file_path` on disk (including parents) if it does not exist.
    """
    parent = os.path.dirname(file_path)

    if parent:
        os.makedirs(parent, exist_ok=True)
