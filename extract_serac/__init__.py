"""
extract-serac

Exports Camptocamp SERAC incident reports (x-reports) to a flat,
French-localized CSV file.
"""

__version__ = "2.0.0"
