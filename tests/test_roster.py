# tests/test_roster.py

import random

from core.response import ErrorCode
from models.roster import StudentRoster
from models.student import Student

# === add ===


def test_add_student(sample_roster, sample_student):
    response = sample_roster.add(sample_student)

    assert response.success
    assert response.data["record"] == sample_student
    assert sample_roster.count() == 1
    assert sample_roster.find_by_id("S001") == sample_student
    assert sample_roster.has_unsaved_changes


def test_add_duplicate_id_ignores_case(sample_roster):
    assert sample_roster.add(Student("S001", "John", "Doe", 3.5)).success

    response = sample_roster.add(Student("s001", "Jane", "Smith", 3.8))

    assert not response.success
    assert response.error is ErrorCode.DUPLICATE_ID
    assert response.data["id"] == "s001"
    assert sample_roster.count() == 1


def test_add_invalid_gpa(sample_roster):
    high = sample_roster.add(Student("S001", "Jack", "Lopez", 4.5))
    low = sample_roster.add(Student("S002", "Kate", "Lee", -0.5))

    assert high.error is ErrorCode.INVALID_FIELD
    assert high.data["gpa"] == 4.5
    assert low.error is ErrorCode.INVALID_FIELD
    assert low.data["gpa"] == -0.5
    assert sample_roster.count() == 0
    assert not sample_roster.has_unsaved_changes


def test_add_stores_trimmed_id(sample_roster):
    response = sample_roster.add(Student("  S001 ", "Ann", "Lee", 3.9))

    assert response.data["record"].id == "S001"
    assert sample_roster.all() == (Student("S001", "Ann", "Lee", 3.9),)


def test_add_preserves_insertion_order(sample_roster):
    ids = ["S010", "A7", "S002"]
    for student_id in ids:
        sample_roster.add(Student(student_id, "F", "L", 2.0))

    assert [s.id for s in sample_roster.all()] == ids


# --- generated ids ---


def test_add_with_generated_id_sequence(sample_roster):
    first = sample_roster.add_with_generated_id("Lisa", "Wang", 3.9)
    second = sample_roster.add_with_generated_id("Mike", "Chen", 3.4)

    assert first.data["record"].id == "S001"
    assert second.data["record"].id == "S002"
    assert sample_roster.count() == 2


def test_generated_id_follows_highest_suffix(sample_roster):
    sample_roster.add(Student("S007", "A", "B", 3.0))
    sample_roster.add(Student("X999", "C", "D", 3.0))
    sample_roster.add(Student("S12", "E", "F", 3.0))
    sample_roster.add(Student("s003", "G", "H", 3.0))

    assert sample_roster.next_student_id() == "S008"


def test_generated_id_reuses_freed_maximum(sample_roster):
    sample_roster.add_with_generated_id("A", "B", 3.0)
    sample_roster.add_with_generated_id("C", "D", 3.0)
    sample_roster.remove("S002", True)

    response = sample_roster.add_with_generated_id("E", "F", 3.0)

    assert response.data["record"].id == "S002"


def test_generated_id_invalid_gpa_adds_nothing(sample_roster):
    response = sample_roster.add_with_generated_id("A", "B", 5.0)

    assert response.error is ErrorCode.INVALID_FIELD
    assert sample_roster.count() == 0
    assert sample_roster.next_student_id() == "S001"


# === find and search ===


def test_find_by_id_trims_and_ignores_case(populated_roster):
    found = populated_roster.find_by_id("  s002 ")

    assert found is not None
    assert found.first_name == "Oscar"


def test_find_missing_id_returns_none(populated_roster):
    assert populated_roster.find_by_id("S999") is None
    assert populated_roster.find_by_id("") is None


def test_search_by_last_name(populated_roster):
    results = populated_roster.search_by_last_name("sMiTh")

    assert [s.first_name for s in results] == ["Nancy", "Paul"]


def test_search_by_last_name_no_match(populated_roster):
    assert populated_roster.search_by_last_name("Brown") == []


def test_search_by_last_name_is_exact(populated_roster):
    assert populated_roster.search_by_last_name("Smit") == []


# === update ===


def test_update_changes_name_and_gpa(sample_roster):
    sample_roster.add(Student("S001", "George", "Taylor", 3.0))

    response = sample_roster.update("S001", "Gregory", None, None)
    assert response.success

    updated = sample_roster.find_by_id("S001")
    assert updated.first_name == "Gregory"
    assert updated.last_name == "Taylor"
    assert updated.gpa == 3.0

    sample_roster.update("s001", None, "Thompson", 3.8)

    updated = sample_roster.find_by_id("S001")
    assert updated.first_name == "Gregory"
    assert updated.last_name == "Thompson"
    assert updated.gpa == 3.8


def test_update_with_nothing_is_noop(populated_roster):
    before = populated_roster.all()

    response = populated_roster.update("S002")

    assert response.success
    assert populated_roster.all() == before
    assert not populated_roster.has_unsaved_changes


def test_update_blank_strings_keep_values(populated_roster):
    response = populated_roster.update("S001", "   ", "", 2.0)

    assert response.success
    student = populated_roster.find_by_id("S001")
    assert student.first_name == "Nancy"
    assert student.last_name == "Smith"
    assert student.gpa == 2.0


def test_update_invalid_gpa_is_all_or_nothing(populated_roster):
    response = populated_roster.update("S001", "Changed", "Changed", 4.2)

    assert not response.success
    assert response.error is ErrorCode.INVALID_FIELD
    student = populated_roster.find_by_id("S001")
    assert student == Student("S001", "Nancy", "Smith", 3.5)


def test_update_missing_student(sample_roster):
    response = sample_roster.update("S999", "New", "Name", 3.5)

    assert response.error is ErrorCode.NOT_FOUND
    assert response.data["id"] == "S999"


def test_update_keeps_position(populated_roster):
    populated_roster.update("S002", last_name="Adams")

    assert [s.id for s in populated_roster.all()] == ["S001", "S002", "S003"]


# === remove ===


def test_remove_confirmed_deletes(populated_roster):
    response = populated_roster.remove("S001", True)

    assert response.success
    assert response.data["record"].id == "S001"
    assert populated_roster.count() == 2
    assert populated_roster.find_by_id("S001") is None
    assert populated_roster.find_by_id("S002") is not None


def test_remove_unconfirmed_always_fails(populated_roster):
    existing = populated_roster.remove("S002", False)
    missing = populated_roster.remove("S999", False)

    assert existing.error is ErrorCode.CONFIRMATION_REQUIRED
    assert missing.error is ErrorCode.CONFIRMATION_REQUIRED
    assert populated_roster.count() == 3


def test_remove_missing_student(populated_roster):
    response = populated_roster.remove("S999", True)

    assert response.error is ErrorCode.NOT_FOUND
    assert populated_roster.count() == 3


def test_clear(populated_roster):
    response = populated_roster.clear()

    assert response.data["removed"] == 3
    assert populated_roster.count() == 0
    assert populated_roster.has_unsaved_changes


# === all() is read-only ===


def test_all_returns_snapshot(populated_roster):
    snapshot = populated_roster.all()

    assert isinstance(snapshot, tuple)

    populated_roster.remove("S001", True)

    assert len(snapshot) == 3
    assert populated_roster.count() == 2


# === replace_all ===


def test_replace_all(populated_roster):
    response = populated_roster.replace_all([Student("A1", "X", "Y", 1.0)])

    assert response.success
    assert response.data["count"] == 1
    assert [s.id for s in populated_roster.all()] == ["A1"]


def test_replace_all_rejects_batch_untouched(populated_roster):
    before = populated_roster.all()

    duplicate = populated_roster.replace_all(
        [Student("A1", "X", "Y", 1.0), Student("a1", "Z", "W", 2.0)]
    )
    invalid = populated_roster.replace_all([Student("A1", "X", "Y", 9.0)])

    assert duplicate.error is ErrorCode.DUPLICATE_ID
    assert invalid.error is ErrorCode.INVALID_FIELD
    assert populated_roster.all() == before


# === sorting ===


def test_sort_by_id_ignores_case(sample_roster):
    for student_id in ["s003", "S001", "b2", "A9"]:
        sample_roster.add(Student(student_id, "F", "L", 3.0))

    sample_roster.sort_by_id()

    assert [s.id for s in sample_roster.all()] == ["A9", "b2", "S001", "s003"]


def test_sort_by_last_name_tie_breaks(sample_roster):
    sample_roster.add(Student("S004", "bob", "smith", 3.0))
    sample_roster.add(Student("S003", "Amy", "Smith", 3.0))
    sample_roster.add(Student("S002", "Bob", "Smith", 3.0))
    sample_roster.add(Student("S001", "Zed", "Adams", 3.0))

    sample_roster.sort_by_last_name()

    assert [s.id for s in sample_roster.all()] == ["S001", "S003", "S002", "S004"]


def test_sort_by_gpa_descending_tie_breaks(sample_roster):
    sample_roster.add(Student("S001", "Cat", "Young", 3.0))
    sample_roster.add(Student("S002", "Ann", "Young", 3.0))
    sample_roster.add(Student("S003", "Zoe", "adams", 3.0))
    sample_roster.add(Student("S004", "Max", "Zed", 3.9))

    sample_roster.sort_by_gpa_descending()

    assert [s.id for s in sample_roster.all()] == ["S004", "S003", "S002", "S001"]


def test_sort_keeping_order_leaves_roster_clean(populated_roster):
    populated_roster.sort_by_id()

    assert not populated_roster.has_unsaved_changes


def test_sort_is_persistent(populated_roster):
    populated_roster.sort_by_gpa_descending()
    populated_roster.add(Student("S004", "Quinn", "Ray", 4.0))

    assert [s.id for s in populated_roster.all()] == ["S003", "S002", "S001", "S004"]
    assert populated_roster.has_unsaved_changes


# === statistics ===


def test_statistics_on_empty_roster(sample_roster):
    assert sample_roster.average_gpa() == 0.0
    assert sample_roster.highest_gpa() is None
    assert sample_roster.count_above_gpa(0.0) == 0


def test_average_gpa(populated_roster):
    assert abs(populated_roster.average_gpa() - 3.6) < 1e-9


def test_highest_gpa_returns_first_maximum(sample_roster):
    sample_roster.add(Student("S001", "A", "B", 3.2))
    sample_roster.add(Student("S002", "C", "D", 3.8))
    sample_roster.add(Student("S003", "E", "F", 3.8))

    assert sample_roster.highest_gpa().id == "S002"


def test_count_above_gpa_is_strict(populated_roster):
    assert populated_roster.count_above_gpa(3.5) == 2
    assert populated_roster.count_above_gpa(3.7) == 0
    assert populated_roster.count_above_gpa(-1.0) == 3


def test_count_above_gpa_matches_filter():
    rng = random.Random(1987)
    roster = StudentRoster()

    for i in range(200):
        roster.add(Student(f"S{i:03d}", "F", "L", round(rng.uniform(0.0, 4.0), 2)))

    for threshold in [0.0, 1.25, 2.0, 3.333, 4.0]:
        expected = len([s for s in roster.all() if s.gpa > threshold])
        assert roster.count_above_gpa(threshold) == expected


def test_fold_handles_large_roster():
    roster = StudentRoster()
    students = [
        Student(f"ID{i}", "F", "Lee" if i % 2 else "Ng", 3.0) for i in range(1500)
    ]
    roster.replace_all(students)

    assert len(roster.search_by_last_name("lee")) == 750
    assert roster.count_above_gpa(2.0) == 1500


# === end-to-end ===


def test_generated_ids_then_sort_by_gpa(sample_roster):
    sample_roster.add_with_generated_id("Ann", "Lee", 3.9)
    sample_roster.add_with_generated_id("Bo", "Ng", 3.2)

    sample_roster.sort_by_gpa_descending()

    assert sample_roster.all() == (
        Student("S001", "Ann", "Lee", 3.9),
        Student("S002", "Bo", "Ng", 3.2),
    )
