"""firefeed - near-real-time FIRMS active fire detections as GeoJSON."""

__version__ = "1.0.0"
