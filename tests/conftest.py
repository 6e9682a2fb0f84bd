import os
import tempfile

# keep test runs from writing log files into the working tree
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "school_aq_test_logs"))

import pandas as pd
import pytest


def reading(datetime, pm25=None, pm10=None, **extra):
    record = {"Datetime": datetime, "PM2.5": pm25, "PM10": pm10}
    record.update(extra)
    return record


@pytest.fixture
def school_hours_dataset():
    """Two dates, one reading outside school hours."""
    return pd.DataFrame([
        reading("2021-03-01 09:00:00", pm25=10.0, pm10=20.0),
        reading("2021-03-01 18:00:00", pm25=50.0, pm10=60.0),
        reading("2021-03-02 10:00:00", pm25=40.0, pm10=30.0),
    ])


@pytest.fixture
def north_main_school():
    # a few hundred metres from the North Main Street monitor
    return {"latitude": 34.0680, "longitude": -118.2300}


@pytest.fixture
def make_reading():
    return reading
