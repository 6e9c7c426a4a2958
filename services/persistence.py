# services/persistence.py

"""
Reads and writes a `StudentRoster` to a comma-delimited text file.

File format (UTF-8, one record per line, no quoting or escaping):

    StudentID,FirstName,LastName,GPA
    S001,Ann,Lee,3.90

The first line is always a header and is discarded on read. GPA values are written with exactly two
decimal places. A name containing a comma cannot be represented; such a line splits into the wrong
number of fields and is skipped on the next load.

Loading is tolerant of bad lines: a malformed line, an unparseable or out-of-range GPA, or a repeated
ID is skipped and reported as a `SkippedLine` warning, and the remaining lines are still processed.

This module talks to the roster only through its public API and never inspects its internals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from core.response import ErrorCode, Response
from core.validators import is_non_blank, is_valid_gpa, parse_float
from models.roster import StudentRoster
from models.student import Student

logger = logging.getLogger(__name__)

HEADER = "StudentID,FirstName,LastName,GPA"
FIELD_COUNT = 4


@dataclass(frozen=True)
class SkippedLine:
    """
    A data line rejected during a load or import.

    Attributes:
        line_number (int): The 1-based line number in the source file (the header is line 1).
        error (ErrorCode): Why the line was rejected.
        value (str): The offending raw line, or the duplicate ID for `ErrorCode.DUPLICATE_ID`.
    """

    line_number: int
    error: ErrorCode
    value: str


class RosterPersistence:

    # === persistence and import ===

    def save(self, roster: StudentRoster, destination: str) -> Response:
        """
        Serializes every record in the roster to disk, in current roster order.

        Args:
            roster (StudentRoster): The roster to write.
            destination (str): The target file path. Existing content is overwritten.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if every line was written.
                    - False if the file could not be opened or written.
                - error (ErrorCode | None):
                    - `ErrorCode.IO_FAILURE` if an OSError is raised.
                - data (dict): Payload with the following keys:
                    - "path" (str): The destination path.
                    - On success:
                        - "count" (int): The number of records written.

        Notes:
            - On failure the destination may be partially written and should be treated as corrupt.
            - On success the roster is marked as saved.
        """
        records = roster.all()

        try:
            with open(destination, "w", encoding="utf-8", newline="\n") as f:
                f.write(HEADER + "\n")
                for student in records:
                    f.write(self.format_line(student) + "\n")

        except OSError as e:
            logger.error("Failed to write roster to %s: %s", destination, e)
            return Response.fail(
                error=ErrorCode.IO_FAILURE,
                data={
                    "path": destination,
                },
            )

        else:
            roster.mark_saved()
            logger.info("Saved %d students to %s", len(records), destination)

            return Response.succeed(
                data={
                    "path": destination,
                    "count": len(records),
                },
            )

    def load_replacing(self, roster: StudentRoster, source: str) -> Response:
        """
        Replaces the roster's contents with the records read from a file.

        Args:
            roster (StudentRoster): The roster to replace.
            source (str): The path of the file to read.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the file was read, even if no line could be parsed.
                    - False if the file is missing or unreadable.
                - error (ErrorCode | None):
                    - `ErrorCode.NOT_FOUND` if the source does not exist.
                    - `ErrorCode.IO_FAILURE` for any other read or decoding error.
                - data (dict): Payload with the following keys:
                    - "path" (str): The source path.
                    - On success:
                        - "count" (int): The number of records now in the roster from this file.
                        - "warnings" (list[SkippedLine]): Every rejected line, in file order.

        Notes:
            - If at least one line parses, the previous contents are discarded and replaced in a single step.
            - If no line parses, the roster is left untouched and "count" is 0.
            - When an ID repeats within the file, the first occurrence wins and later ones become `DUPLICATE_ID` warnings.
        """
        read_response = self._read_lines(source)

        if not read_response.success:
            return read_response

        warnings: list[SkippedLine] = []
        staging = StudentRoster()

        for line_number, student in self._parse_lines(
            read_response.data["lines"], warnings.append
        ):
            add_response = staging.add(student)

            if not add_response.success:
                self._skip(
                    warnings.append,
                    SkippedLine(line_number, add_response.error, student.id),
                )

        count = 0

        if staging.count() > 0:
            replace_response = roster.replace_all(staging.all())

            if not replace_response.success:
                return replace_response

            roster.mark_saved()
            count = replace_response.data["count"]

        self._log_summary("Loaded", count, warnings, source)

        return Response.succeed(
            data={
                "path": source,
                "count": count,
                "warnings": warnings,
            },
        )

    def import_appending(self, roster: StudentRoster, source: str) -> Response:
        """
        Appends the records read from a file to the roster, keeping existing records.

        Args:
            roster (StudentRoster): The roster to append to.
            source (str): The path of the file to read.

        Returns:
            Response: Same contract as `load_replacing()`, where "count" is the number of records added.

        Notes:
            - Each parsed line goes through `StudentRoster.add()`, so the usual GPA and unique ID rules apply.
            - A rejected line is recorded as a warning and the import continues.
        """
        read_response = self._read_lines(source)

        if not read_response.success:
            return read_response

        warnings: list[SkippedLine] = []
        count = 0

        for line_number, student in self._parse_lines(
            read_response.data["lines"], warnings.append
        ):
            add_response = roster.add(student)

            if add_response.success:
                count += 1
            else:
                self._skip(
                    warnings.append,
                    SkippedLine(line_number, add_response.error, student.id),
                )

        self._log_summary("Imported", count, warnings, source)

        return Response.succeed(
            data={
                "path": source,
                "count": count,
                "warnings": warnings,
            },
        )

    # === line codec ===

    @staticmethod
    def format_line(student: Student) -> str:
        return f"{student.id},{student.first_name},{student.last_name},{student.gpa:.2f}"

    @staticmethod
    def parse_line(line: str) -> Student | None:
        """
        Parses one data line into a `Student`.

        Args:
            line (str): A single line without its trailing newline.

        Returns:
            The parsed `Student`, or None if the line does not have exactly four fields, or its GPA
            is not a number or is outside 0.0-4.0.
        """
        parts = line.split(",")

        if len(parts) != FIELD_COUNT:
            return None

        student_id, first_name, last_name, gpa_field = (p.strip() for p in parts)
        gpa = parse_float(gpa_field)

        if gpa is None or not is_valid_gpa(gpa):
            return None

        return Student(student_id, first_name, last_name, gpa)

    # === helper methods ===

    def _read_lines(self, source: str) -> Response:
        try:
            with open(source, "r", encoding="utf-8") as f:
                lines = [line.rstrip("\r\n") for line in f]

        except FileNotFoundError:
            return Response.fail(
                error=ErrorCode.NOT_FOUND,
                data={
                    "path": source,
                },
            )

        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read roster from %s: %s", source, e)
            return Response.fail(
                error=ErrorCode.IO_FAILURE,
                data={
                    "path": source,
                },
            )

        else:
            return Response.succeed(
                data={
                    "lines": lines,
                },
            )

    def _parse_lines(
        self, lines: list[str], on_skip: Callable[[SkippedLine], None]
    ) -> Iterator[tuple[int, Student]]:
        """
        Yields `(line_number, Student)` for every data line that parses, skipping the header.

        Blank lines are skipped silently. Malformed lines are reported through `on_skip`.
        """
        for line_number, line in enumerate(lines[1:], start=2):
            if not is_non_blank(line):
                continue

            student = self.parse_line(line)

            if student is None:
                self._skip(
                    on_skip, SkippedLine(line_number, ErrorCode.INVALID_FIELD, line)
                )
                continue

            yield line_number, student

    def _skip(
        self, on_skip: Callable[[SkippedLine], None], skipped: SkippedLine
    ) -> None:
        logger.warning(
            "Skipping line %d (%s): %s",
            skipped.line_number,
            skipped.error.value,
            skipped.value,
        )
        on_skip(skipped)

    def _log_summary(
        self, action: str, count: int, warnings: list[SkippedLine], source: str
    ) -> None:
        if warnings:
            logger.info(
                "%s %d students from %s with %d warnings",
                action,
                count,
                source,
                len(warnings),
            )
        else:
            logger.info("%s %d students from %s", action, count, source)
