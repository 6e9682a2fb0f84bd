import pandas as pd

from app.services.pollution_summary import analyze_pollution_data
from app.services.records import (
    normalize_pollution_columns,
    parse_datetimes,
    pollution_frame,
    to_local_timestamp
)


def test_aliases_are_coalesced_row_by_row():
    raw = pd.DataFrame([
        {"PM2.5": 10.0, "PM2_5": None, "pm10": 1.0},
        {"PM2.5": None, "PM2_5": 20.0, "pm10": 2.0},
    ])

    normalised = normalize_pollution_columns(raw)

    assert normalised["PM2.5"].tolist() == [10.0, 20.0]
    assert normalised["PM10"].tolist() == [1.0, 2.0]
    assert "PM2_5" not in normalised.columns
    assert list(raw.columns) == ["PM2.5", "PM2_5", "pm10"]


def test_timezone_offsets_keep_wall_clock_time():
    ts = to_local_timestamp("2021-03-01T09:30:00-08:00")

    assert ts.tzinfo is None
    assert ts.hour == 9


def test_unparsable_timestamps_become_nat():
    for value in (None, "", "   ", "garbage", float("nan")):
        assert to_local_timestamp(value) is pd.NaT


def test_working_frame_columns():
    frame = pollution_frame([
        {"Datetime": "2021-03-01 09:30", "PM2.5": "12.5", "PM10": None},
        {"Datetime": "nope", "PM2.5": None, "PM10": 4},
    ])

    assert frame["_date"].tolist() == ["2021-03-01", None]
    assert frame["_hour"].iloc[0] == 9
    assert frame["_year"].iloc[0] == 2021
    assert frame["_pm25"].tolist() == [12.5, 0.0]
    assert frame["_pm10"].tolist() == [0.0, 4.0]


def test_underscore_header_wins_when_both_are_present():
    raw = pd.DataFrame([
        {"Datetime": "2021-03-01 09:00", "PM2.5": 10.0, "PM2_5": 20.0, "PM10": 0.0},
        {"Datetime": "2021-03-01 10:00", "PM2.5": 7.0, "PM2_5": 0.0, "PM10": 0.0},
    ])

    normalised = normalize_pollution_columns(raw)

    assert normalised["PM2.5"].tolist() == [20.0, 7.0]
    assert analyze_pollution_data(raw.iloc[[0]])["average_pm25"] == 20.0


def test_mixed_datetime_formats_in_one_column():
    frame = pd.DataFrame({"Datetime": [
        "2021-03-01 09:30",
        "2021-03-01T10:15:00-08:00",
        "03/02/2021 11:00",
        None,
        "nope",
    ]})

    parsed = parse_datetimes(frame)

    assert parsed.iloc[0] == pd.Timestamp("2021-03-01 09:30")
    assert parsed.iloc[1] == pd.Timestamp("2021-03-01 10:15")
    assert parsed.iloc[2] == pd.Timestamp("2021-03-02 11:00")
    assert parsed.iloc[3:].isna().all()
