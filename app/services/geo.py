import numpy as np

from config.constants import EARTH_RADIUS_KM


def haversine_km(lat1, lon1, lat2, lon2):
    """
    Great-circle distance in kilometres between two points given in degrees.
    Accepts scalars or numpy / pandas arrays; NaN coordinates give NaN.
    """
    lat1, lon1, lat2, lon2 = (np.radians(np.asarray(v, dtype=float)) for v in (lat1, lon1, lat2, lon2))

    d_lat = lat2 - lat1
    d_lon = lon2 - lon1

    a = np.sin(d_lat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(d_lon / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))

    distance = EARTH_RADIUS_KM * c
    if np.ndim(distance) == 0:
        return float(distance)
    return distance
