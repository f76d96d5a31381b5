import pytest

from courseguide.services.term_codec import current_two_digit_year, parse_term, semester_flags_for


def test_fall_term():
    term = parse_term("23/FA")
    assert term.year == 23
    assert term.semester_fall
    assert term.semester == "FA"
    assert sum(term.semester_flags().values()) == 1


def test_trims_semester_code():
    assert parse_term("24/ SP ").semester_spring


def test_unknown_code_sets_no_flags():
    term = parse_term("23/XX")
    assert term.year == 23
    assert term.semester is None
    assert not any(term.semester_flags().values())


def test_missing_code_sets_no_flags():
    assert parse_term("23").semester is None


def test_unparsable_year_falls_back_to_current_year():
    assert parse_term("next/WI").year == current_two_digit_year()
    assert parse_term(None).year == current_two_digit_year()


def test_semester_flags_for_code():
    assert semester_flags_for("su") == {
        "semester_summer": True,
        "semester_fall": False,
        "semester_winter": False,
        "semester_spring": False,
    }
    with pytest.raises(ValueError):
        semester_flags_for("AU")
