# =========================================================
# DATASET LOADERS
# ---------------------------------------------------------
# Reads the school directory, pollution and weather CSVs into
# pandas frames shaped for the analytics services:
#   - pollution: PM headers folded into PM2.5 / PM10
#   - weather:   date / year / month / temperature / condition / is_rainy
# File and parser errors are logged and re-raised to the caller.
# =========================================================

import os

import pandas as pd

from config.settings import settings
from config.logging import logger
from config.constants import RAIN_COLUMN
from app.services.records import normalize_pollution_columns, to_local_timestamp


def _read_csv(path, **kwargs) -> pd.DataFrame:
    if not os.path.exists(path):
        logger.error(f"Dataset not found: {path}")
        raise FileNotFoundError(path)

    try:
        df = pd.read_csv(path, skip_blank_lines=True, **kwargs)
    except (pd.errors.ParserError, UnicodeDecodeError):
        logger.exception(f"Failed to parse dataset: {path}")
        raise

    df.columns = [str(c).strip() for c in df.columns]
    logger.info(f"Loaded {len(df)} rows from {path}")
    return df


# =====================================================
# SCHOOLS
# =====================================================
def load_schools(path=None) -> pd.DataFrame:
    """School directory with every field kept as a string."""
    path = path or settings.dataset_path(settings.SCHOOLS_FILE)
    df = _read_csv(path, dtype=str, keep_default_na=False)
    return df.apply(lambda col: col.str.strip())


# =====================================================
# POLLUTION
# =====================================================
def load_pollution_data(path=None) -> pd.DataFrame:
    path = path or settings.dataset_path(settings.POLLUTION_FILE)
    df = _read_csv(path)
    return normalize_pollution_columns(df)


# =====================================================
# WEATHER
# =====================================================
def prepare_weather_data(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Derives the weather fields used by the correlation service.
    Rows whose Date cannot be parsed are dropped.
    """
    df = raw.copy()

    if "Date" in df.columns:
        parsed = pd.to_datetime(df["Date"].map(to_local_timestamp))
    else:
        parsed = pd.Series(pd.NaT, index=df.index, dtype="datetime64[ns]")

    dropped = int(parsed.isna().sum())
    if dropped:
        logger.warning(f"Dropping {dropped} weather rows with unparsable dates")

    df["date"] = parsed.dt.date
    df["year"] = parsed.dt.year
    df["month"] = parsed.dt.month

    if "Temperature" in df.columns:
        df["temperature"] = pd.to_numeric(df["Temperature"], errors="coerce").fillna(0.0)
    else:
        df["temperature"] = 0.0

    if "Condition" in df.columns:
        df["condition"] = df["Condition"].fillna("").astype(str)
    else:
        df["condition"] = ""

    if RAIN_COLUMN in df.columns:
        df["is_rainy"] = df[RAIN_COLUMN].fillna("").astype(str).str.strip().str.lower() == "yes"
    else:
        df["is_rainy"] = False

    df = df[parsed.notna()].reset_index(drop=True)
    df["year"] = df["year"].astype(int)
    df["month"] = df["month"].astype(int)
    return df


def load_weather_data(path=None) -> pd.DataFrame:
    path = path or settings.dataset_path(settings.WEATHER_FILE)
    return prepare_weather_data(_read_csv(path))


def filter_weather_data(weather: pd.DataFrame, start_year: int, end_year: int) -> pd.DataFrame:
    """Weather rows whose year lies in [start_year, end_year]."""
    if weather is None or weather.empty or "year" not in weather.columns:
        return pd.DataFrame(columns=["date", "year", "month", "temperature", "condition", "is_rainy"])
    years = pd.to_numeric(weather["year"], errors="coerce")
    return weather[years.between(start_year, end_year)].copy()
