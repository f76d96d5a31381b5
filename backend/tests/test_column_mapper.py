from datetime import datetime, time

from courseguide.services.column_mapper import coerce_cell, invert_mapping, project_rows


def test_invert_mapping():
    assert invert_mapping({"title": 2, "credits": 0}) == {2: "title", 0: "credits"}


def test_unmapped_columns_are_discarded():
    sheet = [
        ["Credits", "Ignored", "Title"],
        [3, "noise", "Data Structures"],
    ]
    rows = project_rows(sheet, {"credits": 0, "title": 2})
    assert len(rows) == 1
    assert rows[0].fields == {"credits": "3", "title": "Data Structures"}


def test_all_empty_row_is_dropped_and_single_value_row_kept():
    sheet = [
        ["Title", "Credits"],
        [None, None],
        ["", "   "],
        [None, 4],
    ]
    rows = project_rows(sheet, {"title": 0, "credits": 1})
    assert len(rows) == 1
    assert rows[0].row_number == 4
    assert rows[0].get("credits") == "4"
    assert rows[0].get("title") == ""


def test_short_rows_still_have_every_mapped_field():
    rows = project_rows([["a", "b"], ["x"]], {"title": 0, "room": 5})
    assert rows[0].fields == {"title": "x", "room": ""}


def test_coerce_cell():
    assert coerce_cell(None) == ""
    assert coerce_cell(3.0) == "3"
    assert coerce_cell(2.5) == "2.5"
    assert coerce_cell(datetime(2025, 8, 25, 0, 0)) == "2025-08-25"
    assert coerce_cell(True) == "TRUE"


def test_time_cells_become_clock_text():
    assert coerce_cell(time(14, 30)) == "14:30"
    assert coerce_cell(time(9, 0)) == "09:00"

    rows = project_rows([["Start", "End"], [time(9, 0), time(10, 15)]], {"start_time": 0, "end_time": 1})
    assert rows[0].fields == {"start_time": "09:00", "end_time": "10:15"}
