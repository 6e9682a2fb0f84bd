import math

from config.constants import MONITORING_CENTERS
from config.logging import logger
from app.services.geo import haversine_km


def _as_coordinate(value):
    """Float coordinate, or None when missing, zero, NaN or unparsable."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    if not value or math.isnan(value):
        return None
    return value


def find_nearest_monitoring_center(latitude, longitude, centers=MONITORING_CENTERS):
    """
    Returns the monitoring center closest to a school, as a new dict with a
    `distance` key (km). Missing / zero / NaN coordinates fall back to the
    first registered center with `distance` set to None.
    """
    latitude = _as_coordinate(latitude)
    longitude = _as_coordinate(longitude)

    if latitude is None or longitude is None:
        fallback = dict(centers[0])
        fallback["distance"] = None
        logger.info(f"No school coordinates, using default center: {fallback['name']}")
        return fallback

    nearest = centers[0]
    min_distance = math.inf

    for center in centers:
        distance = haversine_km(latitude, longitude, center["latitude"], center["longitude"])
        # strict < keeps the first center on ties
        if distance < min_distance:
            min_distance = distance
            nearest = center

    result = dict(nearest)
    result["distance"] = min_distance
    return result
