from __future__ import annotations

from datetime import datetime, time

import pytest

from db_distiller.excel.columns import (
    COLUMN_RULES,
    ColumnRule,
    create_column_mapping,
    get_cell_value,
    match_rule,
    stringify_cell,
)
from db_distiller.excel.dates import format_date
from db_distiller.models.proposal_record import RECORD_FIELDS


def _rule(field: str) -> ColumnRule:
    return next(r for r in COLUMN_RULES if r.field == field)


def test_rule_table_covers_every_record_field_in_order():
    assert tuple(r.field for r in COLUMN_RULES) == RECORD_FIELDS


@pytest.mark.parametrize(
    "field,header",
    [
        ("db_no", "DB No."),
        ("db_no", "Proposal Number"),
        ("pi_name", "Principal Investigator"),
        ("sponsor_name", "Sponsor/Contractor"),
        ("sponsor_name", "Funding Agency"),
        ("status", "Proposal Status"),
        ("status", "  CURRENT STATUS  "),
        ("owner", "GCO/GCA/SCCO"),
        ("date_received", "Submission Date"),
        ("to_set_up", "To Set Up"),
        ("identifier_ref", "Cayuse ID"),
        ("notes", "Remarks"),
        ("status_date", "Status Changed"),
        ("legacy_id", "Old DB#"),
    ],
)
def test_each_field_matches_its_synonyms(field: str, header: str):
    assert match_rule(_rule(field), ["unrelated", header]) == 1


def test_first_matching_column_wins():
    headers = ["Status", "Current Status"]
    assert create_column_mapping(headers)["status"] == 0


def test_absent_field_maps_to_none():
    mapping = create_column_mapping(["DB No.", "PI Name", "Sponsor"])
    assert mapping["status"] is None
    assert mapping["owner"] is None


def test_ambiguous_header_can_feed_two_fields():
    # "Status Date" contains "status" and "status date"
    mapping = create_column_mapping(["Status Date"])
    assert mapping["status"] == 0
    assert mapping["status_date"] == 0


def test_none_and_numeric_headers_are_tolerated():
    mapping = create_column_mapping([None, 2024, "Sponsor"])
    assert mapping["sponsor_name"] == 2


def test_get_cell_value_trims_and_blanks():
    row = ["  1703 ", "", "   ", None]
    assert get_cell_value(row, 0) == "1703"
    assert get_cell_value(row, 1) is None
    assert get_cell_value(row, 2) is None
    assert get_cell_value(row, 3) is None


def test_get_cell_value_absent_or_out_of_range():
    assert get_cell_value(["a"], None) is None
    assert get_cell_value(["a"], 5) is None


def test_stringify_cell_types():
    assert stringify_cell(1703.0) == "1703"
    assert stringify_cell(1703.5) == "1703.5"
    assert stringify_cell(45000) == "45000"
    assert stringify_cell(datetime(2024, 3, 15)) == "2024-03-15"
    assert stringify_cell(datetime(2024, 3, 15, 9, 30)) == "2024-03-15 09:30:00"


def test_time_only_cell_is_not_a_date():
    text = stringify_cell(time(12, 0))
    assert text == "12:00:00"
    assert format_date(text) == "12:00:00"
