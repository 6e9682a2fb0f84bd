import datetime as dt

import numpy as np
import pandas as pd

from app.services.records import as_frame, pollution_frame


def empty_correlation() -> dict:
    return {
        "rainy_days_avg_pm25": 0,
        "non_rainy_days_avg_pm25": 0,
        "temperature_correlation": [],
        "weather_condition_stats": []
    }


def iso_date(value):
    """
    "YYYY-MM-DD" for a weather date, read as a plain calendar date.
    No timezone conversion is applied: both datasets are assumed to use
    the same local convention.
    """
    if value is None:
        return None
    if isinstance(value, (pd.Timestamp, dt.datetime)):
        if pd.isna(value):
            return None
        return value.strftime("%Y-%m-%d")
    if isinstance(value, dt.date):
        return value.isoformat()
    try:
        if pd.isna(value):
            return None
        return pd.Timestamp(value).strftime("%Y-%m-%d")
    except (TypeError, ValueError):
        return None


def _is_number(value) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    try:
        return not pd.isna(float(value))
    except (TypeError, ValueError):
        return False


def _flag(value) -> bool:
    return isinstance(value, (bool, np.bool_)) and bool(value)


def daily_mean_pm25(frame) -> dict:
    dated = frame[frame["_date"].notna()]
    return dated.groupby("_date", sort=False)["_pm25"].mean().to_dict()


def _mean(values) -> float:
    return sum(values) / len(values) if values else 0


# =====================================================
# MAIN CORRELATION
# =====================================================
def analyze_weather_correlation(pollution_data, weather_data) -> dict:
    """
    Joins daily mean PM2.5 with weather records on the calendar date.

    Weather days without pollution readings are skipped entirely. The
    temperature series is a scatter of matched days sorted by temperature,
    not a correlation coefficient.
    """
    weather = as_frame(weather_data)
    frame = pollution_frame(pollution_data)
    if frame.empty or weather.empty:
        return empty_correlation()

    pm25_by_date = daily_mean_pm25(frame)

    rainy = []
    non_rainy = []
    conditions = {}
    temperature_points = []

    for record in weather.to_dict("records"):
        date_key = iso_date(record.get("date"))
        if date_key is None or date_key not in pm25_by_date:
            continue

        pm25 = float(pm25_by_date[date_key])

        if _flag(record.get("is_rainy")):
            rainy.append(pm25)
        else:
            non_rainy.append(pm25)

        condition = record.get("condition")
        if not isinstance(condition, str) or not condition:
            condition = "Unknown"
        stats = conditions.setdefault(condition, {"condition": condition, "days": 0, "total_pm25": 0.0})
        stats["days"] += 1
        stats["total_pm25"] += pm25

        temperature = record.get("temperature")
        if _is_number(temperature):
            temperature_points.append({"temperature": float(temperature), "pm25": pm25})

    condition_stats = [
        {
            "condition": stats["condition"],
            "days": stats["days"],
            "average_pm25": stats["total_pm25"] / stats["days"]
        }
        for stats in conditions.values()
    ]
    condition_stats.sort(key=lambda item: item["average_pm25"], reverse=True)
    temperature_points.sort(key=lambda item: item["temperature"])

    return {
        "rainy_days_avg_pm25": _mean(rainy),
        "non_rainy_days_avg_pm25": _mean(non_rainy),
        "temperature_correlation": temperature_points,
        "weather_condition_stats": condition_stats
    }
