# storefront/domain/geo.py
from typing import Any, Iterable, Optional, Sequence

from storefront.domain.entities import Coordinate, ZoneSnapshot


def to_coordinate(value: Any) -> Coordinate:
    """Accept a Coordinate/(lat, lng) pair or a {"lat": .., "lng": ..} mapping."""
    if isinstance(value, dict):
        return Coordinate(float(value["lat"]), float(value["lng"]))
    lat, lng = value
    return Coordinate(float(lat), float(lng))


def to_vertices(raw: Any) -> list[Coordinate]:
    #polygons are stored as JSON, anything that is not a list means no polygon
    if not isinstance(raw, list):
        return []
    return [to_coordinate(v) for v in raw]


def is_point_in_polygon(point: Any, polygon: Sequence[Any]) -> bool:
    """
    Even-odd ray casting.

    For every edge (v[j], v[i]) the flag flips when the edge straddles the
    point's longitude and the edge's latitude at that longitude lies above
    the point. Points exactly on an edge or vertex may go either way.
    """
    if polygon is None or len(polygon) < 3:
        return False

    p = to_coordinate(point)
    vertices = [to_coordinate(v) for v in polygon]

    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        lat_i, lng_i = vertices[i]
        lat_j, lng_j = vertices[j]

        # horizontal or zero-length edges never straddle, so no division by zero
        if (lng_i > p.lng) != (lng_j > p.lng):
            crossing = lat_j + (p.lng - lng_j) / (lng_i - lng_j) * (lat_i - lat_j)
            if p.lat < crossing:
                inside = not inside
        j = i

    return inside


def find_zone_for_point(zones: Iterable[ZoneSnapshot], point: Any) -> Optional[ZoneSnapshot]:
    """First zone (lowest id) whose polygon contains the point."""
    if point is None:
        return None

    for zone in sorted(zones, key=lambda z: z.id):
        if is_point_in_polygon(point, zone.vertices):
            return zone

    return None
