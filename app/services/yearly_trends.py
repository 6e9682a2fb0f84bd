import math

from config.constants import UNHEALTHY_PM25_THRESHOLD
from app.services.records import pollution_frame


def empty_trends() -> dict:
    return {
        "yearly_averages": [],
        "yearly_unhealthy_days": [],
        "trend": 0
    }


def linear_trend(points) -> float:
    """
    Least-squares slope of (year, value) points, rounded to 3 decimals.
    Fewer than two points (or a degenerate x range) gives 0.
    """
    n = len(points)
    if n < 2:
        return 0

    sum_x = sum(x for x, _ in points)
    sum_y = sum(y for _, y in points)
    sum_xy = sum(x * y for x, y in points)
    sum_x2 = sum(x * x for x, _ in points)

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return 0

    slope = (n * sum_xy - sum_x * sum_y) / denominator
    # halves round up, so -0.0005 becomes 0 rather than -0.001
    return math.floor(slope * 1000 + 0.5) / 1000


# =====================================================
# MAIN TREND ANALYSIS
# =====================================================
def analyze_yearly_trends(pollution_data, start_year: int, end_year: int) -> dict:
    """
    Per-year PM statistics and the PM2.5 trend in µg/m³ per year.

    A day counts as unhealthy for its year when any reading that day is
    above the UNHEALTHY_SENSITIVE lower bound. Years without readings are
    left out of both series.
    """
    frame = pollution_frame(pollution_data)
    if frame.empty:
        return empty_trends()

    buckets = {
        year: {"pm25": [], "pm10": [], "unhealthy_days": set()}
        for year in range(start_year, end_year + 1)
    }

    in_range = frame[frame["_year"].between(start_year, end_year)]
    rows = in_range[["_year", "_date", "_pm25", "_pm10"]].itertuples(index=False, name=None)
    for year, date, pm25, pm10 in rows:
        bucket = buckets[int(year)]
        bucket["pm25"].append(float(pm25))
        bucket["pm10"].append(float(pm10))
        if pm25 > UNHEALTHY_PM25_THRESHOLD:
            bucket["unhealthy_days"].add(date)

    yearly_averages = []
    yearly_unhealthy_days = []

    for year, bucket in buckets.items():
        if not bucket["pm25"]:
            continue

        count = len(bucket["pm25"])
        yearly_averages.append({
            "year": year,
            "avg_pm25": sum(bucket["pm25"]) / count,
            "avg_pm10": sum(bucket["pm10"]) / count,
            "max_pm25": max(bucket["pm25"]),
            "max_pm10": max(bucket["pm10"]),
            "record_count": count
        })
        yearly_unhealthy_days.append({
            "year": year,
            "unhealthy_days": len(bucket["unhealthy_days"])
        })

    trend = linear_trend([(item["year"], item["avg_pm25"]) for item in yearly_averages])

    return {
        "yearly_averages": yearly_averages,
        "yearly_unhealthy_days": yearly_unhealthy_days,
        "trend": trend
    }
