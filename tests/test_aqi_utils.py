import pytest

from config.constants import AQI_CATEGORIES, AQI_CATEGORY_ORDER
from app.services.aqi_utils import (
    classify_pm25,
    aqi_category,
    aqi_category_label,
    aqi_category_color,
    empty_category_counts
)


@pytest.mark.parametrize("pm25, expected", [
    (0, "GOOD"),
    (12, "GOOD"),
    (12.1, "MODERATE"),
    (35.4, "MODERATE"),
    (35.5, "UNHEALTHY_SENSITIVE"),
    (55.4, "UNHEALTHY_SENSITIVE"),
    (55.5, "UNHEALTHY"),
    (150.5, "VERY_UNHEALTHY"),
    (250.5, "HAZARDOUS"),
    (999, "HAZARDOUS"),
    (1e6, "HAZARDOUS"),
])
def test_band_edges(pm25, expected):
    assert classify_pm25(pm25) == expected


def test_negative_and_missing_values_are_good():
    assert classify_pm25(-3) == "GOOD"
    assert classify_pm25(None) == "GOOD"
    assert classify_pm25(float("nan")) == "GOOD"


def test_values_between_stored_bands_go_to_the_next_band():
    # 12.05 is above GOOD's max and below MODERATE's min
    assert classify_pm25(12.05) == "MODERATE"


def test_bands_are_ordered_and_contiguous():
    bands = [AQI_CATEGORIES[key] for key in AQI_CATEGORY_ORDER]
    assert bands[0]["min"] == 0
    for lower, upper in zip(bands, bands[1:]):
        assert upper["min"] > lower["max"]
        assert upper["min"] - lower["max"] == pytest.approx(0.1)


def test_category_details():
    category = aqi_category(40)

    assert category["key"] == "UNHEALTHY_SENSITIVE"
    assert category["label"] == "Unhealthy for Sensitive Groups"
    assert aqi_category_label("HAZARDOUS") == "Hazardous"
    assert aqi_category_label("NOPE") == "Unknown"
    assert aqi_category_color("GOOD") == "#2ecc71"


def test_empty_counts_have_all_six_categories():
    counts = empty_category_counts()
    assert list(counts) == list(AQI_CATEGORY_ORDER)
    assert set(counts.values()) == {0}
