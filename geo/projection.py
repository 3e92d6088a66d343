"""
Map Projection - GeoJSON polygons -> SVG path strings (clamped Mercator).

x is linear in longitude: -180 -> 0, 180 -> width.
Latitude is clamped to +/-85 degrees, projected with
    y_merc = ln(tan(pi/4 + lat * pi/360))
and rescaled so +85 maps to 0 and -85 maps to height (screen y grows down).

Only the outer ring of each polygon is drawn; holes are ignored.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from config import config

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def mercator_y(lat: float) -> float:
    return math.log(math.tan(math.pi / 4 + lat * math.pi / 360))


def project_point(
    lon: float,
    lat: float,
    width: float,
    height: float,
    max_latitude: Optional[float] = None,
) -> Point:
    """Project one [lon, lat] vertex onto a width x height canvas."""
    limit = config.max_latitude if max_latitude is None else max_latitude
    clamped = max(-limit, min(limit, lat))

    x = (lon + 180) * width / 360
    y = height / 2 - (mercator_y(clamped) / mercator_y(limit)) * height / 2
    return x, y


def project_ring(ring: Sequence, width: float, height: float) -> List[Point]:
    """
    Project a ring, dropping malformed vertices and a duplicated closing vertex.

    The path emitter closes every ring itself.
    """
    vertices = [v for v in ring if _is_vertex(v)]
    if len(vertices) > 1 and list(vertices[0][:2]) == list(vertices[-1][:2]):
        vertices = vertices[:-1]
    return [project_point(v[0], v[1], width, height) for v in vertices]


def _is_vertex(v) -> bool:
    return isinstance(v, (list, tuple)) and len(v) >= 2 and all(
        isinstance(c, (int, float)) and not isinstance(c, bool) for c in v[:2]
    )


def ring_to_path(points: Iterable[Point]) -> str:
    """Closed SVG sub-path "M x,y L x,y ... Z"; empty for an empty ring."""
    coords = [f"{_fmt(x)},{_fmt(y)}" for x, y in points]
    if not coords:
        return ''
    return 'M' + 'L'.join(coords) + 'Z'


def _fmt(value: float) -> str:
    text = f"{value:.2f}".rstrip('0').rstrip('.')
    return '0' if text in ('-0', '') else text


def outer_rings(geometry: Optional[dict]) -> List[Sequence]:
    """Outer rings of a Polygon / MultiPolygon; [] for anything else."""
    if not geometry:
        return []

    geom_type = geometry.get('type')
    coordinates = geometry.get('coordinates') or []

    if geom_type == 'Polygon':
        return [coordinates[0]] if coordinates else []
    if geom_type == 'MultiPolygon':
        return [polygon[0] for polygon in coordinates if polygon]

    logger.debug(f"Unsupported geometry type {geom_type}")
    return []


def project_feature(geometry: Optional[dict], width: float, height: float) -> str:
    """
    Render a feature geometry as one SVG path value.

    Each polygon becomes a separate closed sub-path; sub-paths are joined
    with spaces. Null or empty geometry yields "".
    """
    paths = []
    for ring in outer_rings(geometry):
        path = ring_to_path(project_ring(ring, width, height))
        if path:
            paths.append(path)
    return ' '.join(paths)
