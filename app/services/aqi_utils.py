import math

from config.constants import AQI_CATEGORIES, AQI_CATEGORY_ORDER, AQI_CATEGORY_COLORS


def _as_concentration(pm25) -> float:
    if pm25 is None:
        return 0.0
    try:
        pm25 = float(pm25)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(pm25):
        return 0.0
    return pm25


# =====================================================
# PM2.5 VALUE → CATEGORY KEY
# =====================================================
def classify_pm25(pm25) -> str:
    """
    Category key for a PM2.5 concentration (µg/m³).
    Bands are tested in ascending order; anything above the last
    stored max is still HAZARDOUS. Missing values count as 0.
    """
    pm25 = _as_concentration(pm25)

    for key in AQI_CATEGORY_ORDER:
        if pm25 <= AQI_CATEGORIES[key]["max"]:
            return key

    return "HAZARDOUS"


# =====================================================
# PM2.5 VALUE → FULL CATEGORY
# =====================================================
def aqi_category(pm25) -> dict:
    key = classify_pm25(pm25)
    return {"key": key, **AQI_CATEGORIES[key]}


# =====================================================
# CATEGORY KEY → LABEL / COLOR
# =====================================================
def aqi_category_label(key: str) -> str:
    return AQI_CATEGORIES.get(key, {}).get("label", "Unknown")


def aqi_category_color(key: str) -> str:
    return AQI_CATEGORY_COLORS.get(key, "#95a5a6")


def empty_category_counts() -> dict:
    return {key: 0 for key in AQI_CATEGORY_ORDER}
