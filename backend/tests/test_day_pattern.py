from courseguide.services.day_pattern import DayPattern, format_days, parse_days, pattern_from_columns


def test_mwf():
    pattern = parse_days("MWF")
    assert pattern == DayPattern(monday=True, wednesday=True, friday=True)
    assert pattern.count() == 3


def test_th_sets_tuesday_and_thursday():
    pattern = parse_days("TH")
    assert pattern.tuesday
    assert pattern.thursday
    assert pattern.count() == 2


def test_tr_uses_r_for_thursday():
    assert parse_days("tr") == DayPattern(tuesday=True, thursday=True)


def test_saturday_only():
    assert parse_days("SAT") == DayPattern(saturday=True)


def test_sunday_with_weekday():
    assert parse_days("M SUN") == DayPattern(monday=True, sunday=True)


def test_empty_text_has_no_days():
    assert not parse_days("").any()
    assert not parse_days(None).any()


def test_format_days_in_week_order():
    assert format_days(DayPattern(friday=True, monday=True, thursday=True)) == "MRF"
    assert format_days(DayPattern(saturday=True, sunday=True)) == "SASU"


def test_columns_round_trip():
    pattern = parse_days("MW")
    columns = pattern.as_columns()
    assert columns["day_monday"] is True
    assert columns["day_tuesday"] is False

    class Row:
        pass

    row = Row()
    for key, value in columns.items():
        setattr(row, key, value)
    assert pattern_from_columns(row) == pattern
