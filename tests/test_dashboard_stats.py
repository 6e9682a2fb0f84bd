import math

from app.services.aqi_utils import empty_category_counts
from app.services.dashboard_stats import (
    category_percentages,
    most_common_category,
    average_pm25_category,
    air_quality_assessment,
    median_pm,
    percentile_pm,
    daily_averages,
    monthly_heatmap,
    describe_trend,
    summary_frame
)


def counts(**overrides):
    result = empty_category_counts()
    result.update(overrides)
    return result


def test_category_percentages():
    shares = category_percentages(counts(GOOD=1, MODERATE=3))

    assert shares["GOOD"] == 25.0
    assert shares["MODERATE"] == 75.0
    assert shares["HAZARDOUS"] == 0


def test_category_percentages_without_days():
    assert set(category_percentages(empty_category_counts()).values()) == {0}


def test_most_common_category():
    assert most_common_category(counts(GOOD=2, MODERATE=5, UNHEALTHY=5)) == "MODERATE"
    assert most_common_category(empty_category_counts()) is None


def test_average_category_guards_infinite_values():
    assert average_pm25_category(20.0) == "MODERATE"
    assert average_pm25_category(math.inf) is None
    assert average_pm25_category(None) is None


def test_assessment_levels():
    assert air_quality_assessment(counts(GOOD=10))["level"] == "Good"
    assert air_quality_assessment(counts(MODERATE=8, UNHEALTHY=2))["level"] == "Moderate"
    assert air_quality_assessment(counts(MODERATE=19, UNHEALTHY=1))["level"] == "Good"
    assert air_quality_assessment(counts(UNHEALTHY=10))["level"] == "Concern"
    assert air_quality_assessment(counts(HAZARDOUS=10))["level"] == "Poor"


def test_median_and_percentile_skip_zero_readings(make_reading):
    records = [
        make_reading("2021-03-01 09:00", 0.0, 5.0),
        make_reading("2021-03-01 10:00", 10.0, 5.0),
        make_reading("2021-03-01 11:00", 40.0, 5.0),
        make_reading("2021-03-01 12:00", 20.0, 5.0),
        make_reading("2021-03-01 13:00", 30.0, 5.0),
    ]

    assert median_pm(records) == 25.0
    assert median_pm(records, "PM10") == 5.0
    assert percentile_pm(records, percentile=0.9) == 40.0
    assert percentile_pm(records, percentile=0.5) == 30.0
    assert median_pm([]) == 0
    assert percentile_pm([]) == 0


def test_daily_averages_sorted_by_date(make_reading):
    series = daily_averages([
        make_reading("2021-03-02 09:00", 30.0, 10.0),
        make_reading("2021-03-01 09:00", 10.0, 20.0),
        make_reading("2021-03-01 10:00", 20.0, 40.0),
    ])

    assert series == [
        {"date": "2021-03-01", "pm25_avg": 15.0, "pm10_avg": 30.0},
        {"date": "2021-03-02", "pm25_avg": 30.0, "pm10_avg": 10.0},
    ]


def test_monthly_heatmap_uses_positive_readings(make_reading):
    cells = monthly_heatmap([
        make_reading("2021-01-05 09:00", 10.0, 0.0),
        make_reading("2021-01-06 09:00", 20.0, 0.0),
        make_reading("2021-01-07 09:00", 0.0, 0.0),
        make_reading("2021-02-01 09:00", 0.0, 0.0),
    ])

    assert cells == [{"year": 2021, "month": 1, "value": 15.0}]


def test_describe_trend():
    assert describe_trend(4.0)["direction"] == "increasing"
    assert "4.00" in describe_trend(4.0)["message"]
    assert describe_trend(-1.25)["direction"] == "decreasing"
    assert "1.25" in describe_trend(-1.25)["message"]
    assert describe_trend(0)["direction"] == "none"


def test_summary_frame_lists_every_category():
    frame = summary_frame({"days_in_categories": counts(GOOD=1, MODERATE=1)})

    assert len(frame) == 6
    assert frame.loc[frame["category"] == "GOOD", "percent"].iloc[0] == 50.0
    assert frame.loc[frame["category"] == "GOOD", "label"].iloc[0] == "Good"
