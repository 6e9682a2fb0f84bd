# =========================
# AQI CATEGORIES (PM2.5, µg/m³)
# =========================
# Inclusive bands in ascending order. The HAZARDOUS max only bounds the
# stored range; classification treats the top band as open-ended.

AQI_CATEGORIES = {
    "GOOD": {"min": 0, "max": 12, "label": "Good"},
    "MODERATE": {"min": 12.1, "max": 35.4, "label": "Moderate"},
    "UNHEALTHY_SENSITIVE": {"min": 35.5, "max": 55.4, "label": "Unhealthy for Sensitive Groups"},
    "UNHEALTHY": {"min": 55.5, "max": 150.4, "label": "Unhealthy"},
    "VERY_UNHEALTHY": {"min": 150.5, "max": 250.4, "label": "Very Unhealthy"},
    "HAZARDOUS": {"min": 250.5, "max": 999, "label": "Hazardous"}
}

AQI_CATEGORY_ORDER = tuple(AQI_CATEGORIES)

AQI_CATEGORY_COLORS = {
    "GOOD": "#2ecc71",
    "MODERATE": "#f1c40f",
    "UNHEALTHY_SENSITIVE": "#e67e22",
    "UNHEALTHY": "#e74c3c",
    "VERY_UNHEALTHY": "#8e44ad",
    "HAZARDOUS": "#7f0000"
}

# A reading above this counts the day as unhealthy in yearly trends
UNHEALTHY_PM25_THRESHOLD = AQI_CATEGORIES["UNHEALTHY_SENSITIVE"]["min"]

# =========================
# FILTER CONFIG
# =========================

SCHOOL_HOURS = {"start": 8, "end": 15}
COORDINATE_MATCH_RADIUS_KM = 5
UNFILTERED_FALLBACK_LIMIT = 100
TOP_POLLUTION_DAYS = 10
EARTH_RADIUS_KM = 6371

# =========================
# DATASET SCHEMA
# =========================

DATETIME_COLUMN = "Datetime"
PM25_COLUMN = "PM2.5"
PM10_COLUMN = "PM10"
SITE_CODE_COLUMN = "SiteCode"
LOCATION_COLUMN = "Location"
LATITUDE_COLUMN = "Latitude"
LONGITUDE_COLUMN = "Longitude"

# Upstream dataset versions disagree on the PM2.5 header
PM25_ALIASES = [
    "PM2_5",
    "PM2.5",
    "pm2_5",
    "PM25",
    "pm25"
]

PM10_ALIASES = [
    "PM10",
    "pm10"
]

SCHOOL_NAME_COLUMN = "School"
RAIN_COLUMN = "Rain (yes/no)"

# =========================
# MONITORING CENTERS
# =========================
# Fixed reference sites (South Coast AQMD, Los Angeles County).
# The first entry is the fallback when a school has no coordinates.

MONITORING_CENTERS = (
    {
        "name": "Los Angeles - North Main Street",
        "latitude": 34.06659,
        "longitude": -118.22688,
        "site_code": "060371103",
        "location_keywords": frozenset({"North Main", "Central Los Angeles", "Downtown"})
    },
    {
        "name": "West Los Angeles - VA Hospital",
        "latitude": 34.05111,
        "longitude": -118.45636,
        "site_code": "060370113",
        "location_keywords": frozenset({"West Los Angeles", "VA Hospital", "Westwood"})
    },
    {
        "name": "Reseda",
        "latitude": 34.19925,
        "longitude": -118.53276,
        "site_code": "060371201",
        "location_keywords": frozenset({"Reseda", "San Fernando Valley"})
    },
    {
        "name": "Pasadena",
        "latitude": 34.13265,
        "longitude": -118.12714,
        "site_code": "060372005",
        "location_keywords": frozenset({"Pasadena", "San Gabriel Valley"})
    },
    {
        "name": "Compton",
        "latitude": 33.90140,
        "longitude": -118.20500,
        "site_code": "060371302",
        "location_keywords": frozenset({"Compton", "South Central"})
    },
    {
        "name": "Long Beach - Signal Hill",
        "latitude": 33.79236,
        "longitude": -118.17533,
        "site_code": "060374009",
        "location_keywords": frozenset({"Long Beach", "Signal Hill"})
    }
)
