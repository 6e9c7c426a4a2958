# models/roster.py

"""
The StudentRoster model is the "source of truth" for all student records in a session.

Records are held in an ordered list. Insertion order is preserved until one of the sort methods is
called, which reorders the underlying list in place. IDs are unique under a case-insensitive,
whitespace-trimmed comparison.

Provides functions for adding (with caller-supplied or generated IDs), finding, searching, updating,
removing, sorting, and summarizing records. Mutators return a `Response`; read-only queries return
plain values because an empty result is a normal outcome.

The roster never reads or writes files itself. See `services.persistence.RosterPersistence`.
"""

from __future__ import annotations

import logging
import re
from functools import reduce
from typing import Iterable

from core.response import ErrorCode, Response
from core.validators import is_non_blank, is_valid_gpa
from models.student import Student

logger = logging.getLogger(__name__)

GENERATED_ID_PATTERN = re.compile(r"S([0-9]{3})")


class StudentRoster:

    def __init__(self):
        self._students: list[Student] = []
        self._unsaved_changes: bool = False

    # === properties ===

    @property
    def has_unsaved_changes(self) -> bool:
        return self._unsaved_changes

    # === data accessors ===

    def all(self) -> tuple[Student, ...]:
        """
        Returns a read-only snapshot of every record in current collection order.
        """
        return tuple(self._students)

    def count(self) -> int:
        return len(self._students)

    def find_by_id(self, student_id: str) -> Student | None:
        """
        Finds a `Student` by ID.

        Args:
            student_id (str): The ID to look up. Surrounding whitespace and letter case are ignored.

        Returns:
            The matching `Student`, or None if there is no match.

        Notes:
            - This method is read-only and does not raise.
        """
        index = self._index_of(student_id)
        return None if index is None else self._students[index]

    def search_by_last_name(self, last_name: str) -> list[Student]:
        """
        Collects every `Student` whose last name matches the query, ignoring letter case.

        Args:
            last_name (str): The exact last name to match.

        Returns:
            The matching records in collection order. Empty if nothing matches.

        Notes:
            - Implemented as a left fold that visits every record exactly once.
        """
        target = last_name.casefold()

        def collect(matches: list[Student], student: Student) -> list[Student]:
            if student.last_name.casefold() == target:
                matches.append(student)
            return matches

        return reduce(collect, self._students, [])

    def next_student_id(self) -> str:
        """
        Computes the next generated ID in the `S###` sequence.

        Returns:
            `S` followed by the highest existing numeric suffix plus one, zero-padded to three digits.

        Notes:
            - Only IDs of the exact form `S` + three digits take part; all other IDs count as 0.
            - Freed numbers are reused only when they are above every remaining suffix.
        """
        highest = max(
            (self._generated_id_number(s.id) for s in self._students),
            default=0,
        )
        return f"S{highest + 1:03d}"

    # --- statistics ---

    def average_gpa(self) -> float:
        if not self._students:
            return 0.0
        return sum(s.gpa for s in self._students) / len(self._students)

    def highest_gpa(self) -> Student | None:
        # max() keeps the first record that reaches the maximum
        if not self._students:
            return None
        return max(self._students, key=lambda s: s.gpa)

    def count_above_gpa(self, threshold: float) -> int:
        return reduce(
            lambda total, student: total + (1 if student.gpa > threshold else 0),
            self._students,
            0,
        )

    # === data manipulators ===

    def mark_saved(self) -> None:
        """
        Clears the unsaved changes marker after the roster has been written to or read from disk.
        """
        self._unsaved_changes = False

    def _mark_dirty(self) -> None:
        self._unsaved_changes = True

    def add(self, student: Student) -> Response:
        """
        Appends a `Student` to the end of the roster.

        Args:
            student (Student): The record to add.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was appended.
                    - False if the GPA is out of range or the ID is already taken.
                - error (ErrorCode | None):
                    - `ErrorCode.INVALID_FIELD` if the GPA is outside 0.0-4.0.
                    - `ErrorCode.DUPLICATE_ID` if another record has the same ID, ignoring case.
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added record.
                    - On failure:
                        - "field" (str) and "gpa" (float) for `INVALID_FIELD`.
                        - "id" (str) for `DUPLICATE_ID`.

        Notes:
            - The GPA is checked before uniqueness.
            - The ID is stored with surrounding whitespace removed.
            - This method mutates roster state and calls `_mark_dirty()` if successful.
        """
        if not is_valid_gpa(student.gpa):
            return Response.fail(
                error=ErrorCode.INVALID_FIELD,
                data={
                    "field": "gpa",
                    "gpa": student.gpa,
                },
            )

        if self._index_of(student.id) is not None:
            return Response.fail(
                error=ErrorCode.DUPLICATE_ID,
                data={
                    "id": student.id,
                },
            )

        if student.id != student.id.strip():
            student = Student(
                student.id.strip(), student.first_name, student.last_name, student.gpa
            )

        self._students.append(student)
        self._mark_dirty()

        logger.debug("Added student %s", student.id)

        return Response.succeed(
            data={
                "record": student,
            },
        )

    def add_with_generated_id(
        self, first_name: str, last_name: str, gpa: float
    ) -> Response:
        """
        Creates a `Student` with the next generated ID and adds it to the roster.

        Args:
            first_name (str): The student's first name.
            last_name (str): The student's last name.
            gpa (float): The student's GPA.

        Returns:
            Response: Same contract as `add()`. On success, "record" holds the new `Student`.
        """
        student = Student(
            id=self.next_student_id(),
            first_name=first_name,
            last_name=last_name,
            gpa=gpa,
        )
        return self.add(student)

    def update(
        self,
        student_id: str,
        first_name: str | None = None,
        last_name: str | None = None,
        gpa: float | None = None,
    ) -> Response:
        """
        Updates the name and/or GPA of an existing `Student`.

        Args:
            student_id (str): The ID of the record to update.
            first_name (str | None): The new first name. None or blank keeps the current value.
            last_name (str | None): The new last name. None or blank keeps the current value.
            gpa (float | None): The new GPA. None keeps the current value.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was updated, including the no-op case where nothing is supplied.
                    - False if the record does not exist or the new GPA is out of range.
                - error (ErrorCode | None):
                    - `ErrorCode.NOT_FOUND` if no record matches `student_id`.
                    - `ErrorCode.INVALID_FIELD` if `gpa` is outside 0.0-4.0.
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Student): The record as stored after the update.
                    - On failure:
                        - "id" (str) for `NOT_FOUND`.
                        - "field" (str) and "gpa" (float) for `INVALID_FIELD`.

        Notes:
            - All-or-nothing: on failure the stored record is left exactly as it was.
            - The updated record replaces the old one at the same position.
        """
        index = self._index_of(student_id)

        if index is None:
            return Response.fail(
                error=ErrorCode.NOT_FOUND,
                data={
                    "id": student_id,
                },
            )

        if gpa is not None and not is_valid_gpa(gpa):
            return Response.fail(
                error=ErrorCode.INVALID_FIELD,
                data={
                    "field": "gpa",
                    "gpa": gpa,
                },
            )

        current = self._students[index]
        updated = current.with_changes(
            first_name=first_name if is_non_blank(first_name) else None,
            last_name=last_name if is_non_blank(last_name) else None,
            gpa=gpa,
        )

        if updated != current:
            self._students[index] = updated
            self._mark_dirty()
            logger.debug("Updated student %s", updated.id)

        return Response.succeed(
            data={
                "record": updated,
            },
        )

    def remove(self, student_id: str, confirmed: bool) -> Response:
        """
        Permanently removes a `Student` from the roster.

        Args:
            student_id (str): The ID of the record to remove.
            confirmed (bool): Must be True; the caller is responsible for its own confirmation UX.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the record was removed.
                    - False if the removal was not confirmed or the record does not exist.
                - error (ErrorCode | None):
                    - `ErrorCode.CONFIRMATION_REQUIRED` if `confirmed` is False.
                    - `ErrorCode.NOT_FOUND` if no record matches `student_id`.
                - data (dict): Payload with the following keys:
                    - On success:
                        - "record" (Student): The removed record.
                    - On failure:
                        - "id" (str): The requested ID.

        Notes:
            - The confirmation gate is checked before existence, so an unconfirmed call never reveals whether the ID exists.
        """
        if not confirmed:
            return Response.fail(
                error=ErrorCode.CONFIRMATION_REQUIRED,
                data={
                    "id": student_id,
                },
            )

        index = self._index_of(student_id)

        if index is None:
            return Response.fail(
                error=ErrorCode.NOT_FOUND,
                data={
                    "id": student_id,
                },
            )

        removed = self._students.pop(index)
        self._mark_dirty()

        logger.debug("Removed student %s", removed.id)

        return Response.succeed(
            data={
                "record": removed,
            },
        )

    def clear(self) -> Response:
        removed = len(self._students)

        if removed:
            self._students = []
            self._mark_dirty()

        return Response.succeed(
            data={
                "removed": removed,
            },
        )

    def replace_all(self, students: Iterable[Student]) -> Response:
        """
        Replaces the entire contents of the roster with a new batch of records.

        Args:
            students (Iterable[Student]): The records to store, in the order they should appear.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the roster now holds exactly the given records.
                    - False if any record in the batch is invalid.
                - error (ErrorCode | None):
                    - `ErrorCode.INVALID_FIELD` if any GPA is outside 0.0-4.0.
                    - `ErrorCode.DUPLICATE_ID` if two records in the batch share an ID, ignoring case.
                - data (dict): Payload with the following keys:
                    - On success:
                        - "count" (int): The number of records now stored.
                    - On failure:
                        - The offending "id" or "field"/"gpa", as in `add()`.

        Notes:
            - The whole batch is validated against a staging roster first; on failure the current contents are untouched.
        """
        staging = StudentRoster()

        for student in students:
            add_response = staging.add(student)

            if not add_response.success:
                return add_response

        self._students = staging._students
        self._mark_dirty()

        return Response.succeed(
            data={
                "count": len(self._students),
            },
        )

    # --- sorting ---

    def sort_by_id(self) -> None:
        self._sort(lambda s: s.id.casefold())

    def sort_by_last_name(self) -> None:
        self._sort(
            lambda s: (
                s.last_name.casefold(),
                s.first_name.casefold(),
                s.id.casefold(),
            )
        )

    def sort_by_gpa_descending(self) -> None:
        self._sort(
            lambda s: (
                -s.gpa,
                s.last_name.casefold(),
                s.first_name.casefold(),
            )
        )

    def _sort(self, key) -> None:
        before = list(self._students)
        self._students.sort(key=key)

        if self._students != before:
            self._mark_dirty()

    # === helper methods ===

    def _index_of(self, student_id: str | None) -> int | None:
        if student_id is None:
            return None

        normalized = self._normalize(student_id)

        for index, student in enumerate(self._students):
            if self._normalize(student.id) == normalized:
                return index

        return None

    def _normalize(self, input: str) -> str:
        return input.strip().casefold()

    @staticmethod
    def _generated_id_number(student_id: str) -> int:
        match = GENERATED_ID_PATTERN.fullmatch(student_id.strip().upper())
        return int(match.group(1)) if match else 0

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._students)

    def __iter__(self):
        return iter(self.all())

    def __repr__(self) -> str:
        return f"StudentRoster({len(self._students)} students)"
