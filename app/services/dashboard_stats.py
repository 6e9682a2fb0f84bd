import math

import pandas as pd

from config.constants import AQI_CATEGORY_ORDER, PM25_COLUMN
from app.services.aqi_utils import classify_pm25, aqi_category_label
from app.services.records import pollution_frame


# =====================================================
# CATEGORY BREAKDOWN
# =====================================================
def category_percentages(days_in_categories: dict) -> dict:
    total_days = sum(days_in_categories.values())
    if total_days == 0:
        return {key: 0 for key in days_in_categories}
    return {
        key: round(count / total_days * 100, 1)
        for key, count in days_in_categories.items()
    }


def most_common_category(days_in_categories: dict):
    """First category with the strictly highest day count, None if no days."""
    best = None
    best_count = 0
    for key in AQI_CATEGORY_ORDER:
        count = days_in_categories.get(key, 0)
        if count > best_count:
            best = key
            best_count = count
    return best


def average_pm25_category(average_pm25):
    if average_pm25 is None or not math.isfinite(average_pm25):
        return None
    return classify_pm25(average_pm25)


def air_quality_assessment(days_in_categories: dict) -> dict:
    """
    Overall verdict for the dashboard, driven by the dominant category and
    the share of unhealthy / very unhealthy days.
    """
    common = most_common_category(days_in_categories)
    shares = category_percentages(days_in_categories)
    unhealthy = shares.get("UNHEALTHY", 0)
    very_unhealthy = shares.get("VERY_UNHEALTHY", 0)

    if common == "GOOD" or (common == "MODERATE" and unhealthy < 10 and very_unhealthy < 5):
        return {"level": "Good", "message": "Air quality is generally good."}

    if common == "MODERATE" or (
        common == "UNHEALTHY_SENSITIVE" and unhealthy < 15 and very_unhealthy < 10
    ):
        return {
            "level": "Moderate",
            "message": "Air quality is acceptable but may be a concern for sensitive individuals."
        }

    if common == "UNHEALTHY_SENSITIVE" or (common == "UNHEALTHY" and very_unhealthy < 15):
        return {
            "level": "Concern",
            "message": "Air quality may be unhealthy for sensitive groups and occasionally for the general public."
        }

    return {"level": "Poor", "message": "Air quality is frequently unhealthy for all individuals."}


# =====================================================
# DISTRIBUTION
# =====================================================
def _positive_sorted(records, pollutant):
    frame = pollution_frame(records)
    column = "_pm25" if pollutant in ("PM2.5", PM25_COLUMN) else "_pm10"
    values = frame[column]
    return values[values > 0].sort_values().reset_index(drop=True)


def median_pm(records, pollutant=PM25_COLUMN) -> float:
    values = _positive_sorted(records, pollutant)
    if values.empty:
        return 0
    return float(values.median())


def percentile_pm(records, pollutant=PM25_COLUMN, percentile=0.9) -> float:
    """Nearest-rank style: value at floor(percentile * n), clamped to the last."""
    values = _positive_sorted(records, pollutant)
    if values.empty:
        return 0
    index = min(int(math.floor(percentile * len(values))), len(values) - 1)
    return float(values.iloc[index])


# =====================================================
# CHART SERIES
# =====================================================
def daily_averages(records) -> list:
    """Mean PM2.5 / PM10 per calendar date, oldest first."""
    frame = pollution_frame(records)
    dated = frame[frame["_date"].notna()]
    if dated.empty:
        return []

    daily = (
        dated.groupby("_date")
        .agg(pm25_avg=("_pm25", "mean"), pm10_avg=("_pm10", "mean"))
        .reset_index()
        .sort_values("_date")
    )
    return [
        {"date": row["_date"], "pm25_avg": float(row["pm25_avg"]), "pm10_avg": float(row["pm10_avg"])}
        for _, row in daily.iterrows()
    ]


def monthly_heatmap(records) -> list:
    """
    Mean of the positive PM2.5 readings for every (year, month) cell.
    Cells with no positive reading are omitted.
    """
    frame = pollution_frame(records)
    positive = frame[frame["_timestamp"].notna() & (frame["_pm25"] > 0)].copy()
    if positive.empty:
        return []

    positive["_month"] = positive["_timestamp"].dt.month
    cells = (
        positive.groupby(["_year", "_month"], sort=True)["_pm25"]
        .mean()
        .reset_index()
    )
    return [
        {"year": int(row["_year"]), "month": int(row["_month"]), "value": float(row["_pm25"])}
        for _, row in cells.iterrows()
    ]


# =====================================================
# TREND WORDING
# =====================================================
def describe_trend(trend) -> dict:
    if trend > 0:
        return {
            "direction": "increasing",
            "message": f"PM2.5 levels have increased by {trend:.2f} µg/m³ per year on average"
        }
    if trend < 0:
        return {
            "direction": "decreasing",
            "message": f"PM2.5 levels have decreased by {abs(trend):.2f} µg/m³ per year on average"
        }
    return {
        "direction": "none",
        "message": "No significant trend detected in PM2.5 levels over this time period"
    }


def summary_frame(analytics: dict) -> pd.DataFrame:
    """Category table (label, days, share) for display layers."""
    shares = category_percentages(analytics["days_in_categories"])
    return pd.DataFrame([
        {
            "category": key,
            "label": aqi_category_label(key),
            "days": analytics["days_in_categories"][key],
            "percent": shares[key]
        }
        for key in AQI_CATEGORY_ORDER
    ])
