from datetime import date

from courseguide.schemas.course import ResolvedReference, UnresolvedReference
from courseguide.services.column_mapper import MappedRow
from courseguide.services.entity_resolver import EntityResolver, parse_int_lenient, parse_sheet_date, split_lines


def make_row(**fields) -> MappedRow:
    return MappedRow(row_number=2, fields=fields)


def test_split_lines_handles_every_line_break():
    assert split_lines("SCI\r\nLIB\nONL\rART") == ["SCI", "LIB", "ONL", "ART"]
    assert split_lines("") == []
    assert split_lines(None) == []


def test_parse_int_lenient():
    assert parse_int_lenient("3") == 3
    assert parse_int_lenient("3.0") == 3
    assert parse_int_lenient("three") == 0
    assert parse_int_lenient("") == 0


def test_parse_sheet_date():
    assert parse_sheet_date("2025-08-25") == date(2025, 8, 25)
    assert parse_sheet_date("45894") == date(2025, 8, 25)
    assert parse_sheet_date("") is None
    assert parse_sheet_date("soon") is None


def test_resolves_buildings_and_faculty(session_factory, reference_data):
    resolver = EntityResolver(session_factory, max_workers=4)
    row = make_row(
        building="SCI\nLIB",
        room="101\n2",
        start_time="9:00 AM\n1:00 PM",
        end_time="10:15 AM\n2:15 PM",
        days="MW\nF",
        faculty="ada lovelace\nGrace Hopper",
    )

    [draft] = resolver.resolve_rows([row])

    first, second = draft["locations"]
    assert first["rooms"] == [
        {"building": ResolvedReference(id=reference_data["buildings"]["SCI"]), "room": "101"}
    ]
    assert (first["start_time"], first["end_time"]) == (900, 1015)
    assert first["day_monday"] and first["day_wednesday"] and not first["day_friday"]
    assert second["rooms"][0]["building"] == ResolvedReference(id=reference_data["buildings"]["LIB"])
    assert (second["start_time"], second["end_time"]) == (1300, 1415)
    assert second["day_friday"] and not second["day_monday"]
    assert [link["faculty"] for link in draft["faculty"]] == [
        ResolvedReference(id=reference_data["faculty"]["Ada Lovelace"]),
        ResolvedReference(id=reference_data["faculty"]["Grace Hopper"]),
    ]


def test_misses_fall_back_to_raw_text(session_factory, reference_data):
    resolver = EntityResolver(session_factory)
    row = make_row(building="ART", room="5", days="TR", faculty="Nobody Known")

    [draft] = resolver.resolve_rows([row])

    [location] = draft["locations"]
    assert location["rooms"] == [{"building": UnresolvedReference(raw_text="ART"), "room": "5"}]
    assert (location["start_time"], location["end_time"]) == (0, 0)
    assert draft["faculty"] == [{"faculty": UnresolvedReference(raw_text="Nobody Known")}]


def test_online_location_skips_rooms(session_factory, reference_data):
    resolver = EntityResolver(session_factory)
    [draft] = resolver.resolve_rows([make_row(building="ONL", room="", days="M")])

    [location] = draft["locations"]
    assert location["is_online"] is True
    assert location["rooms"] == []


def test_short_days_cell_applies_to_every_location(session_factory, reference_data):
    resolver = EntityResolver(session_factory)
    [draft] = resolver.resolve_rows([make_row(building="SCI\nLIB", days="TR")])

    assert all(location["day_tuesday"] and location["day_thursday"] for location in draft["locations"])


def test_draft_fields(session_factory, reference_data):
    resolver = EntityResolver(session_factory)
    row = make_row(
        section_id="",
        term="24/SP",
        credits="x",
        section="7",
        noteAcademicAffairs="a",
        notePrintedComments="b",
        noteWhatHasChanged="c",
    )

    [draft] = resolver.resolve_rows([row])

    assert draft["section_id"] is None
    assert draft["term"] == 24
    assert draft["semester_spring"] is True
    assert draft["credits"] == 0
    assert draft["section"] == 7
    assert draft["type"] == "Unknown"
    assert draft["locations"] == []
    assert [note["note"] for note in draft["notes"]] == ["a", "b", "c"]
