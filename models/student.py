# models/student.py

"""
Represents a single student record held by a `StudentRoster`.

Stores the identifying ID, first and last name, and GPA. A `Student` is an immutable value object:
every field is exposed through a read-only property, and changes are expressed by building a
replacement record with `with_changes()`. The roster swaps the replacement in place, so a stored
record can never be mutated from outside the roster.

Includes functionality for:
- Building a modified copy while keeping the ID fixed
- Field-wise equality, so records read back from disk compare equal to the originals
"""

from __future__ import annotations


class Student:

    def __init__(
        self,
        id: str,
        first_name: str,
        last_name: str,
        gpa: float,
    ):
        self._id: str = id
        self._first_name: str = first_name
        self._last_name: str = last_name
        self._gpa: float = float(gpa)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def gpa(self) -> float:
        return self._gpa

    # === data manipulators ===

    def with_changes(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        gpa: float | None = None,
    ) -> Student:
        """
        Builds a copy of this record with the given fields replaced.

        Args:
            first_name (str | None): The new first name, or None to keep the current one.
            last_name (str | None): The new last name, or None to keep the current one.
            gpa (float | None): The new GPA, or None to keep the current one.

        Returns:
            A new `Student` with the same ID.

        Notes:
            - No validation happens here; `StudentRoster.update()` decides which values are accepted.
        """
        return Student(
            id=self._id,
            first_name=self._first_name if first_name is None else first_name,
            last_name=self._last_name if last_name is None else last_name,
            gpa=self._gpa if gpa is None else gpa,
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._first_name}, {self._last_name}, {self._gpa})"

    def __str__(self) -> str:
        return f"STUDENT: {self.full_name} - (ID: {self._id}, GPA: {self._gpa:.2f})"

    def _fields(self) -> tuple[str, str, str, float]:
        return (self._id, self._first_name, self._last_name, self._gpa)
