import pandas as pd

from config.constants import SCHOOL_NAME_COLUMN, LATITUDE_COLUMN, LONGITUDE_COLUMN


def search_schools(schools: pd.DataFrame, term: str) -> pd.DataFrame:
    """Case-insensitive substring match on the school name; blank term returns all."""
    if term is None or not term.strip() or SCHOOL_NAME_COLUMN not in schools.columns:
        return schools
    names = schools[SCHOOL_NAME_COLUMN].fillna("").astype(str).str.lower()
    return schools[names.str.contains(term.strip().lower(), regex=False)]


def _parse_float(value):
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def school_location(school) -> dict:
    """
    {"latitude", "longitude"} floats for a school row (dict or Series).
    Unparsable coordinates become None, which the site resolver treats as missing.
    """
    return {
        "latitude": _parse_float(school.get(LATITUDE_COLUMN)),
        "longitude": _parse_float(school.get(LONGITUDE_COLUMN))
    }
