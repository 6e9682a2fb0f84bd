"""
School record filter.

Narrows a pollution dataset to the readings relevant to one school and a
range of years. Monitoring datasets label their sites inconsistently, so the
filter tries an ordered list of strategies and keeps the first one that
returns any rows:

    coordinates      readings within 5 km of the school's nearest center
    identifiers      readings whose SiteCode / Location names that center
    timeFiltersOnly  every reading inside the year range and school hours
    noFilters        the first 100 readings, untouched

Every strategy except the last also applies the time window
(years [start, end], hours [8, 15]); rows without a parsable Datetime
never pass it.
"""

from abc import ABC, abstractmethod

import pandas as pd

from config.constants import (
    SCHOOL_HOURS,
    COORDINATE_MATCH_RADIUS_KM,
    UNFILTERED_FALLBACK_LIMIT,
    SITE_CODE_COLUMN,
    LOCATION_COLUMN,
    LATITUDE_COLUMN,
    LONGITUDE_COLUMN
)
from config.logging import logger
from app.services.geo import haversine_km
from app.services.records import pollution_frame
from app.services.site_resolver import find_nearest_monitoring_center

WORKING_COLUMNS = ["_timestamp", "_date", "_year", "_hour", "_pm25", "_pm10"]


# =====================================================
# SHARED PREDICATES
# =====================================================
def time_window_mask(frame: pd.DataFrame, start_year: int, end_year: int) -> pd.Series:
    return (
        frame["_timestamp"].notna()
        & frame["_year"].between(start_year, end_year)
        & frame["_hour"].between(SCHOOL_HOURS["start"], SCHOOL_HOURS["end"])
    )


def _site_code_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if pd.isna(value):
            return ""
        if value.is_integer():
            # CSV parsing turns integer codes into floats when a column has gaps
            return str(int(value))
    return str(value).strip()


def site_code_matches(value, site_code) -> bool:
    code = _site_code_text(value)
    target = _site_code_text(site_code)
    if not code or not target:
        return False
    return code == target or code in target or target in code


def location_matches(value, keywords) -> bool:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    text = str(value).lower()
    return any(keyword.lower() in text for keyword in keywords)


# =====================================================
# STRATEGIES
# =====================================================
class FilterStrategy(ABC):
    """One tier of the school filter. Pure: never mutates the frame."""

    name = None

    @abstractmethod
    def apply(self, frame: pd.DataFrame, center: dict, start_year: int, end_year: int) -> pd.DataFrame:
        pass


class CoordinateStrategy(FilterStrategy):
    name = "coordinates"

    def __init__(self, radius_km=COORDINATE_MATCH_RADIUS_KM):
        self.radius_km = radius_km

    def apply(self, frame, center, start_year, end_year):
        if LATITUDE_COLUMN not in frame.columns or LONGITUDE_COLUMN not in frame.columns:
            return frame.iloc[0:0]

        lat = pd.to_numeric(frame[LATITUDE_COLUMN], errors="coerce")
        lon = pd.to_numeric(frame[LONGITUDE_COLUMN], errors="coerce")

        distances = haversine_km(lat.to_numpy(), lon.to_numpy(), center["latitude"], center["longitude"])
        # NaN distances compare False, so rows without coordinates drop out
        nearby = pd.Series(distances <= self.radius_km, index=frame.index)

        return frame[nearby & time_window_mask(frame, start_year, end_year)]


class IdentifierStrategy(FilterStrategy):
    name = "identifiers"

    def apply(self, frame, center, start_year, end_year):
        matched = pd.Series(False, index=frame.index)

        if SITE_CODE_COLUMN in frame.columns:
            matched |= frame[SITE_CODE_COLUMN].map(
                lambda value: site_code_matches(value, center["site_code"])
            ).astype(bool)

        if LOCATION_COLUMN in frame.columns:
            matched |= frame[LOCATION_COLUMN].map(
                lambda value: location_matches(value, center["location_keywords"])
            ).astype(bool)

        return frame[matched & time_window_mask(frame, start_year, end_year)]


class TimeWindowStrategy(FilterStrategy):
    name = "timeFiltersOnly"

    def apply(self, frame, center, start_year, end_year):
        return frame[time_window_mask(frame, start_year, end_year)]


class UnfilteredStrategy(FilterStrategy):
    name = "noFilters"

    def __init__(self, limit=UNFILTERED_FALLBACK_LIMIT):
        self.limit = limit

    def apply(self, frame, center, start_year, end_year):
        return frame.head(self.limit)


DEFAULT_STRATEGIES = (
    CoordinateStrategy(),
    IdentifierStrategy(),
    TimeWindowStrategy(),
    UnfilteredStrategy()
)


# =====================================================
# ENTRY POINTS
# =====================================================
def _school_coordinates(school_location):
    if school_location is None:
        return None, None
    if isinstance(school_location, dict):
        return school_location.get("latitude"), school_location.get("longitude")
    try:
        latitude, longitude = school_location
    except (TypeError, ValueError):
        return None, None
    return latitude, longitude


def select_school_records(pollution_data, school_location, start_year, end_year,
                          strategies=DEFAULT_STRATEGIES):
    """
    Runs the strategies in order and returns `(strategy_name, records)` for
    the first non-empty result. Empty input gives `(None, empty frame)`.
    """
    frame = pollution_frame(pollution_data)
    if frame.empty:
        logger.warning("Pollution dataset is empty, nothing to filter.")
        return None, frame.drop(columns=WORKING_COLUMNS, errors="ignore")

    latitude, longitude = _school_coordinates(school_location)
    center = find_nearest_monitoring_center(latitude, longitude)

    selected = frame.iloc[0:0]
    used = None
    for strategy in strategies:
        selected = strategy.apply(frame, center, start_year, end_year)
        if not selected.empty:
            used = strategy.name
            break
        logger.info(f"Filter tier '{strategy.name}' matched no records for {center['name']}")

    logger.info(
        f"School filter | center={center['name']} | tier={used} | "
        f"years={start_year}-{end_year} | rows={len(selected)}"
    )

    return used, selected.drop(columns=WORKING_COLUMNS).copy()


def filter_pollution_data_for_school(pollution_data, school_location, start_year, end_year):
    """Pollution records relevant to a school; see the module docstring for the tiers."""
    _, records = select_school_records(pollution_data, school_location, start_year, end_year)
    return records
