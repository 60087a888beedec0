from __future__ import annotations

import pytest

from DialogDesk import label_space


def test_canonical_department_maps_variants_and_unknowns() -> None:
    assert label_space.canonical_department("IT") == "IT"
    assert label_space.canonical_department("  legal ") == "Legal"
    assert label_space.canonical_department("Human_Resources") == "HR"
    assert label_space.canonical_department("кадри") == "HR"
    with pytest.raises(RuntimeError):
        label_space.canonical_department("Finance")
    with pytest.raises(RuntimeError):
        label_space.canonical_department("")


def test_group_ids_follow_helpdesk_contract() -> None:
    assert label_space.group_id_for("IT") == 1
    assert label_space.group_id_for("HR") == 2
    assert label_space.group_id_for("Finance") == 3
    assert label_space.group_id_for("Support") == 4
    assert label_space.group_id_for("Legal") == 1
    assert label_space.group_id_for(None) == 1


@pytest.mark.parametrize(
    "priority, expected",
    [
        ("Low", 1),
        ("низький", 1),
        ("Medium", 2),
        ("High", 3),
        ("Високий", 3),
        ("Critical", 4),
        ("критический", 4),
        ("", 2),
        (None, 2),
    ],
)
def test_priority_ids_match_by_substring(priority: str | None, expected: int) -> None:
    assert label_space.priority_id_for(priority) == expected


def test_every_submission_priority_has_an_id() -> None:
    assert label_space.HELPDESK_PRIORITY_IDS == {"Low": 1, "Medium": 2, "High": 3, "Critical": 4}
    assert label_space.DEFAULT_PRIORITY_ID == 2
    for priority in label_space.SUBMISSION_PRIORITIES:
        assert label_space.priority_id_for(priority) == label_space.HELPDESK_PRIORITY_IDS[priority]
