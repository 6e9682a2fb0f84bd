import pandas as pd

from config.constants import (
    DATETIME_COLUMN,
    PM25_COLUMN,
    PM10_COLUMN,
    PM25_ALIASES,
    PM10_ALIASES
)

# time of day followed by "Z", "+hh:mm" or "-hhmm"
UTC_OFFSET_PATTERN = r"\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?\s*(?:Z|[+-]\d{2}:?\d{2})$"


# =====================================================
# INPUT COERCION
# =====================================================
def as_frame(records) -> pd.DataFrame:
    """
    Accepts a DataFrame or any sequence of flat dict records.
    None and empty sequences become an empty frame.
    """
    if records is None:
        return pd.DataFrame()
    if isinstance(records, pd.DataFrame):
        return records
    return pd.DataFrame(list(records))


# =====================================================
# PM COLUMN ALIASES -> CANONICAL NAMES
# =====================================================
def _has_reading(values: pd.Series) -> pd.Series:
    # empty or zero readings defer to the next alias
    numeric = pd.to_numeric(values, errors="coerce")
    text = values.astype(str).str.strip()
    return values.notna() & (text != "") & (numeric != 0)


def _coalesce_aliases(df, aliases, canonical):
    present = [alias for alias in aliases if alias in df.columns]
    if not present or present == [canonical]:
        return df

    # row-wise: first alias (in priority order) holding a reading wins
    merged = df[present[0]]
    for alias in present[1:]:
        merged = merged.where(_has_reading(merged), df[alias])

    df = df.drop(columns=present)
    df[canonical] = merged
    return df


def normalize_pollution_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Folds every recognised PM2.5 / PM10 header into `PM2.5` / `PM10`.
    Returns a new frame; the input is left untouched.
    """
    df = df.copy()
    df = _coalesce_aliases(df, PM25_ALIASES, PM25_COLUMN)
    df = _coalesce_aliases(df, PM10_ALIASES, PM10_COLUMN)
    return df


def pm_values(df: pd.DataFrame, column: str) -> pd.Series:
    """Numeric PM series with missing or non-numeric readings as 0."""
    if column not in df.columns:
        return pd.Series(0.0, index=df.index)
    return pd.to_numeric(df[column], errors="coerce").fillna(0.0).astype(float)


def pm25_values(df):
    return pm_values(df, PM25_COLUMN)


def pm10_values(df):
    return pm_values(df, PM10_COLUMN)


# =====================================================
# DATETIME PARSING
# =====================================================
def to_local_timestamp(value):
    """
    Parses one timestamp value, keeping its wall-clock time.
    Offsets are dropped rather than converted, so "local hour" stays local.
    """
    if value is None:
        return pd.NaT
    try:
        if pd.isna(value):
            return pd.NaT
    except (TypeError, ValueError):
        return pd.NaT
    if isinstance(value, str) and not value.strip():
        return pd.NaT

    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError):
        return pd.NaT

    if ts is pd.NaT:
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts


def parse_datetimes(df: pd.DataFrame) -> pd.Series:
    """
    datetime64 series aligned to df; NaT where Datetime is missing or unparsable.

    Plain values are parsed in one vectorised pass. Values carrying a UTC
    offset, and anything the inferred format missed, go through
    `to_local_timestamp` one by one.
    """
    parsed = pd.Series(pd.NaT, index=df.index, dtype="datetime64[ns]")
    if DATETIME_COLUMN not in df.columns:
        return parsed

    raw = df[DATETIME_COLUMN]
    text = raw.astype(str).str.strip()
    present = raw.notna() & (text != "")
    has_offset = text.str.contains(UTC_OFFSET_PATTERN, regex=True)

    plain = present & ~has_offset
    if plain.any():
        parsed[plain] = pd.to_datetime(raw[plain], errors="coerce")

    retry = present & parsed.isna()
    if retry.any():
        parsed[retry] = pd.to_datetime(raw[retry].map(to_local_timestamp))

    return pd.to_datetime(parsed)


def calendar_dates(parsed: pd.Series) -> pd.Series:
    """ISO "YYYY-MM-DD" strings (None where the timestamp is missing)."""
    dates = parsed.dt.strftime("%Y-%m-%d").astype(object)
    dates[parsed.isna()] = None
    return dates


def pollution_frame(records) -> pd.DataFrame:
    """
    Working frame for the analysers: canonical PM columns plus
    `_timestamp`, `_date`, `_year`, `_hour`, `_pm25`, `_pm10`.
    """
    df = normalize_pollution_columns(as_frame(records)).reset_index(drop=True)
    parsed = parse_datetimes(df)

    df["_timestamp"] = parsed
    df["_date"] = calendar_dates(parsed)
    df["_year"] = parsed.dt.year
    df["_hour"] = parsed.dt.hour
    df["_pm25"] = pm25_values(df)
    df["_pm10"] = pm10_values(df)
    return df
