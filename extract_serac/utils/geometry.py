"""
Geometry rendering for the CSV "Localisation" column.

Report geometries are serialized GeoJSON strings (EPSG:3857 for
Camptocamp). The export only keeps the raw coordinates, colon-joined
between brackets.
"""
import json
from typing import Optional

from extract_serac.exceptions import MalformedGeometry
from extract_serac.schemas.xreport import Geometry


def format_number(value) -> str:
    """Render a number the way the site does: whole floats without decimals."""
    if isinstance(value, bool):
        raise TypeError(f"Not a number: {value!r}")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError(f"Not a number: {value!r}")


def _format_position(position) -> str:
    if isinstance(position, list):
        return ",".join(_format_position(item) for item in position)
    return format_number(position)


def render_geometry(geometry: Optional[Geometry]) -> Optional[str]:
    """
    Render a report geometry as "[x:y]" (or "[x:y:z]").

    Points render their coordinates colon-joined. Line strings render each
    position comma-joined, positions colon-joined.

    Args:
        geometry: Report geometry, possibly absent

    Returns:
        Rendered coordinates, or None when there is no geometry payload

    Raises:
        MalformedGeometry: payload is not JSON or has no numeric coordinates

    Example:
        >>> render_geometry(Geometry(geom='{"coordinates": [6.5, 45.9]}'))
        '[6.5:45.9]'
    """
    if geometry is None or not geometry.geom:
        return None

    try:
        payload = json.loads(geometry.geom)
    except (TypeError, ValueError) as e:
        raise MalformedGeometry(f"Geometry payload is not valid JSON: {e}") from e

    coordinates = payload.get("coordinates") if isinstance(payload, dict) else None
    if not isinstance(coordinates, list):
        raise MalformedGeometry(f"Geometry payload has no coordinates: {geometry.geom!r}")

    try:
        return "[" + ":".join(_format_position(item) for item in coordinates) + "]"
    except TypeError as e:
        raise MalformedGeometry(f"Geometry coordinates are not numeric: {e}") from e
