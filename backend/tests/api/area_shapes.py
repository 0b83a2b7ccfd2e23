"""Shared coordinates: a square area polygon and points inside and outside it."""

SQUARE = [
    {"lat": 20.0, "lng": -103.1}, {"lat": 20.0, "lng": -103.0},
    {"lat": 20.1, "lng": -103.0}, {"lat": 20.1, "lng": -103.1},
]
INSIDE = {"latitude": 20.05, "longitude": -103.05}
OUTSIDE = {"latitude": 21.0, "longitude": -103.05}
