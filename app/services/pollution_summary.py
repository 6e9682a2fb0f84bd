import math

from config.constants import TOP_POLLUTION_DAYS
from app.services.aqi_utils import classify_pm25, empty_category_counts
from app.services.records import pollution_frame


def empty_analytics() -> dict:
    return {
        "average_pm25": 0,
        "average_pm10": 0,
        "max_pm25": 0,
        "max_pm10": 0,
        "min_pm25": 0,
        "min_pm10": 0,
        "days_in_categories": empty_category_counts(),
        "highest_pollution_days": []
    }


def _positive_min(values) -> float:
    positive = values[values > 0]
    if positive.empty:
        return math.inf
    return float(positive.min())


def count_days_in_categories(frame) -> dict:
    """
    One vote per calendar date: the first reading seen for a date decides
    its category, later readings of the same date are ignored.
    """
    counts = empty_category_counts()
    first_of_day = frame[frame["_date"].notna()].drop_duplicates("_date", keep="first")

    for pm25 in first_of_day["_pm25"]:
        counts[classify_pm25(pm25)] += 1

    return counts


def highest_pollution_days(frame, limit=TOP_POLLUTION_DAYS) -> list:
    """
    Peak reading of each date, highest PM2.5 first. Within a date the first
    reading reaching the maximum is kept; equal peaks keep date order.
    """
    dated = frame[frame["_date"].notna()]
    if dated.empty:
        return []

    peak_index = dated.groupby("_date", sort=False)["_pm25"].idxmax()
    peaks = dated.loc[peak_index.values, ["_date", "_pm25", "_pm10"]]
    peaks = peaks.sort_values("_pm25", ascending=False, kind="mergesort").head(limit)

    return [
        {"date": row["_date"], "pm25": float(row["_pm25"]), "pm10": float(row["_pm10"])}
        for _, row in peaks.iterrows()
    ]


# =====================================================
# MAIN SUMMARY
# =====================================================
def analyze_pollution_data(filtered_data) -> dict:
    """
    Summary statistics for a school's filtered readings.

    Missing PM values count as 0 and stay in the averages' denominator, so
    gaps in the data pull the averages down. Minimums only consider strictly
    positive readings and are `inf` when there are none. An empty input gives
    the all-zero result of `empty_analytics()`.
    """
    frame = pollution_frame(filtered_data)
    if frame.empty:
        return empty_analytics()

    pm25 = frame["_pm25"]
    pm10 = frame["_pm10"]

    return {
        "average_pm25": float(pm25.sum() / len(frame)),
        "average_pm10": float(pm10.sum() / len(frame)),
        "max_pm25": float(pm25.max()),
        "max_pm10": float(pm10.max()),
        "min_pm25": _positive_min(pm25),
        "min_pm10": _positive_min(pm10),
        "days_in_categories": count_days_in_categories(frame),
        "highest_pollution_days": highest_pollution_days(frame)
    }
