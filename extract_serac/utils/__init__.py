"""
extract-serac utility functions
"""
from .geometry import (
    format_number,
    render_geometry,
)

__all__ = [
    "format_number",
    "render_geometry",
]
