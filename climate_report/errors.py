"""
Exceptions raised while building a climate report.
"""


class ClimateReportError(Exception):
    """Base class for every error raised by the climate_report package."""


class UsageError(ClimateReportError):
    """The command line was invalid, e.g. no input files were given."""


class FileOpenError(ClimateReportError):
    """An input file is missing or could not be read."""

    def __init__(self, path: str, reason: str = "does not exist"):
        self.path = path
        self.reason = reason
        super().__init__(f'Error: File "{path}" {reason}.')


class MalformedRecordError(ClimateReportError, ValueError):
    """A line could not be parsed into the nine TDV fields."""

    def __init__(self, reason: str, field: str = None):
        self.reason = reason
        self.field = field
        if field is not None:
            super().__init__(f"{reason} (field '{field}')")
        else:
            super().__init__(reason)
