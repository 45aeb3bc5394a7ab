"""FileSummary Schema"""

from dataclasses import dataclass


@dataclass
class FileSummary:
    """
    Outcome of reading one input file.

    Attributes:
        path (str): Path of the input file, as given on the command line.
        parsed (int): Lines parsed and folded into the statistics.
        skipped (int): Malformed lines that were skipped.
        error (str): Why the file couldn't be read, None on success.
    """

    path: str
    parsed: int = 0
    skipped: int = 0
    error: str = None

    @property
    def ok(self) -> bool:
        """Whether the file was read to the end."""
        return self.error is None
