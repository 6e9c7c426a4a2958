# tests/conftest.py

import pytest

from models.roster import StudentRoster
from models.student import Student
from services.persistence import RosterPersistence


@pytest.fixture
def sample_roster():
    return StudentRoster()


@pytest.fixture
def sample_student():
    return Student("S001", "John", "Doe", 3.5)


@pytest.fixture
def populated_roster():
    roster = StudentRoster()
    roster.add(Student("S001", "Nancy", "Smith", 3.5))
    roster.add(Student("S002", "Oscar", "Johnson", 3.6))
    roster.add(Student("S003", "Paul", "Smith", 3.7))
    roster.mark_saved()
    return roster


@pytest.fixture
def persistence():
    return RosterPersistence()


@pytest.fixture
def write_file(tmp_path):
    def _write(content: str, name: str = "students.csv") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
