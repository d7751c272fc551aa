from __future__ import annotations

import pytest

from db_distiller.models.config_models import CANONICAL_STATUSES
from db_distiller.models.proposal_record import ProposalRecord
from db_distiller.services.record_filter import (
    filter_records,
    get_unique_statuses,
    non_canonical_statuses,
)

OWNER = "Haugaard"


def _rec(db_no: str, status: str, owner: str | None = OWNER, pi_name: str = "Jane Doe") -> ProposalRecord:
    return ProposalRecord(db_no=db_no, pi_name=pi_name, sponsor_name="NIH", status=status, owner=owner)


@pytest.fixture()
def records() -> list[ProposalRecord]:
    return [
        _rec("1", "OSRAA Review"),
        _rec("2", "Completed"),
        _rec("3", "OSRAA Review", owner="Smith"),
        _rec("4", "Out for Review"),
        _rec("5", "osraa review"),
        _rec("6", "Out for Signature", owner=None),
        _rec("7", "OSRAA Review", owner="haugaard"),
        _rec("8", "Set-Up in Process", pi_name="John Smith"),
    ]


def _ids(rs: list[ProposalRecord]) -> list[str]:
    return [r.db_no for r in rs]


def test_owner_stage_is_exact(records):
    result = filter_records(records, [], owner=OWNER)
    assert _ids(result) == ["1", "2", "4", "5", "8"]


def test_status_stage_exact_match(records):
    result = filter_records(records, ["OSRAA Review"], owner=OWNER)
    # "osraa review" (小文字) は選択不可
    assert _ids(result) == ["1"]


def test_status_stage_multiple_labels_keeps_input_order(records):
    result = filter_records(records, ["Set-Up in Process", "Completed", "OSRAA Review"], owner=OWNER)
    assert _ids(result) == ["1", "2", "8"]


def test_completed_only(records):
    assert _ids(filter_records(records, ["Completed"], owner=OWNER)) == ["2"]


def test_all_labels_never_select_non_canonical_status(records):
    result = filter_records(records, CANONICAL_STATUSES, owner=OWNER)
    assert "5" not in _ids(result)


def test_owner_mismatch_yields_nothing(records):
    assert filter_records(records, [], owner="Nobody") == []
    assert filter_records(records, CANONICAL_STATUSES, owner="Nobody") == []


def test_empty_input():
    assert filter_records([], ["Completed"], owner=OWNER) == []
    assert filter_records([], [], owner=OWNER) == []


def test_result_is_subset_of_owner_stage(records):
    base = filter_records(records, [], owner=OWNER)
    for selection in (["Completed"], ["OSRAA Review", "Out for Review"], list(CANONICAL_STATUSES)):
        narrowed = filter_records(records, selection, owner=OWNER)
        assert all(r in base for r in narrowed)
        assert all(r.status in selection for r in narrowed)


def test_pure_and_does_not_mutate(records):
    snapshot = list(records)
    first = filter_records(records, ["Completed"], owner=OWNER)
    second = filter_records(records, ["Completed"], owner=OWNER)
    assert first == second
    assert records == snapshot


def test_pi_last_name_stage(records):
    result = filter_records(records, [], owner=OWNER, pi_last_name="smith")
    assert _ids(result) == ["8"]


def test_get_unique_statuses_sorted_non_empty():
    rs = [_rec("1", "Completed"), _rec("2", ""), _rec("3", "Box"), _rec("4", "Completed")]
    assert get_unique_statuses(rs) == ["Box", "Completed"]


def test_non_canonical_statuses(records):
    assert non_canonical_statuses(records) == ["osraa review"]
