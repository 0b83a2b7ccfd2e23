"""Area Geometry — polygon parsing and even-odd point-in-polygon containment.

Invariants:
    - Polygons are ordered (lat, lng) vertex lists; the closing edge is implicit
    - x = longitude, y = latitude in the ray-casting test
    - Fewer than 3 vertices never contain a point
    - Malformed polygons are skipped, never fatal

Design Decisions:
    - Accept both stored JSON strings and already-decoded lists: legacy rows kept
      polygons as text, new rows use a JSON column
    - First containing area wins (areas are expected not to overlap)
"""

import json
import logging
from typing import Any, Protocol, Sequence

logger = logging.getLogger(__name__)

Point = tuple[float, float]


class PolygonArea(Protocol):
    id: int
    polygon: Any


def parse_polygon(raw: Any) -> list[Point] | None:
    """Decode a stored polygon into (lat, lng) tuples, or None when malformed.

    Accepted vertex shapes: {"lat": .., "lng": ..} mappings or [lat, lng] pairs.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return None
    if not isinstance(raw, list):
        return None
    points: list[Point] = []
    for vertex in raw:
        try:
            if isinstance(vertex, dict):
                points.append((float(vertex["lat"]), float(vertex["lng"])))
            elif isinstance(vertex, (list, tuple)) and len(vertex) == 2:
                points.append((float(vertex[0]), float(vertex[1])))
            else:
                return None
        except (KeyError, TypeError, ValueError):
            return None
    return points


def point_in_polygon(lat: float, lng: float, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting: count edge crossings of a ray cast towards +x."""
    if len(polygon) < 3:
        return False
    x, y = lng, lat
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        yi, xi = polygon[i]
        yj, xj = polygon[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def find_containing_area(lat: float, lng: float, areas: Sequence[PolygonArea]):
    """First area whose polygon contains the point, or None."""
    for area in areas:
        polygon = parse_polygon(area.polygon)
        if polygon is None:
            logger.warning(
                f"Skipping area {area.id}: malformed polygon",
                extra={"area_id": area.id},
            )
            continue
        if point_in_polygon(lat, lng, polygon):
            return area
    return None
