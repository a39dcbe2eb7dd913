"""
Pydantic schemas export.
"""
from extract_serac.schemas.xreport import (
    Area,
    AreaLocale,
    Association,
    Associations,
    Author,
    Geometry,
    XReport,
    XReportListing,
    XReportLocale,
    XReportSummary,
)

__all__ = [
    "Area",
    "AreaLocale",
    "Association",
    "Associations",
    "Author",
    "Geometry",
    "XReport",
    "XReportListing",
    "XReportLocale",
    "XReportSummary",
]
