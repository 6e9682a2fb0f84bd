import os
from dotenv import load_dotenv

# -----------------------------------------------------
# LOAD LOCAL .env IF EXISTS
# -----------------------------------------------------
load_dotenv()  # safe: only affects local dev


def _int_env(name, default):
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer year, got {raw!r}")


class Settings:
    """
    Central configuration for the school air quality engine.
    Values come from the environment, with a local .env for development.
    """

    # ---------------- ENV ----------------
    ENV = os.getenv("ENV", "dev")

    # ---------------- DATASETS ----------------
    DATA_DIR = os.getenv("DATA_DIR", "data")
    SCHOOLS_FILE = os.getenv("SCHOOLS_FILE", "los_angeles_schools_with_lat_long.csv")
    POLLUTION_FILE = os.getenv("POLLUTION_FILE", "Combined_Daily_Data.csv")
    WEATHER_FILE = os.getenv("WEATHER_FILE", "weather_data_hourly.csv")

    # ---------------- REPORT ----------------
    SCHOOL_NAME = os.getenv("SCHOOL_NAME", "")

    # ---------------- ANALYSIS WINDOW ----------------
    START_YEAR = _int_env("START_YEAR", "2014")
    END_YEAR = _int_env("END_YEAR", "2024")

    # ---------------- LOGGING ----------------
    LOG_DIR = os.getenv("LOG_DIR", "logs")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    def dataset_path(self, file_name):
        return os.path.join(self.DATA_DIR, file_name)


# ---------------- CREATE INSTANCE ----------------
settings = Settings()

# ---------------- FAIL FAST ----------------
if settings.START_YEAR > settings.END_YEAR:
    raise ValueError(
        f"START_YEAR ({settings.START_YEAR}) must not be after END_YEAR ({settings.END_YEAR})"
    )

if settings.LOG_LEVEL not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
    raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
