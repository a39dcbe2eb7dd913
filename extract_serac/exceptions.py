"""
Error taxonomy for the extraction run.

Missing optional fields and unknown codes are not errors: they render as
empty cells. Everything below aborts the run.
"""


class ExtractError(Exception):
    """Base class for fatal extraction errors."""
    pass


class AuthenticationFailure(ExtractError):
    """Credentials rejected by the Camptocamp login endpoint."""
    pass


class NoLocaleAvailable(ExtractError):
    """A report (or area) has no language to read from."""
    pass


class MalformedGeometry(ExtractError):
    """The embedded GeoJSON payload of a report cannot be parsed."""
    pass


class SinkFailure(ExtractError):
    """Writing the CSV file or upserting documents failed."""
    pass
