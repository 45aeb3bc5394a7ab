"""
Processor class for climate file aggregation.
"""

import concurrent.futures
import logging
from typing import List

from climate_report.aggregator import StateTable
from climate_report.errors import FileOpenError, MalformedRecordError
from climate_report.parser import decode_line, parse_line
from climate_report.schema import FileSummary


class Processor:
    """
    Reads every input file and aggregates it into a single StateTable.

    Files are processed in argument order. With more than one worker, each
    file is aggregated into its own partial table on a thread pool and the
    partial tables are merged in argument order afterwards, which gives the
    same state ordering and tie-breaking as a sequential run.
    """

    def __init__(self, paths: List[str], workers: int = 1):
        if workers < 1:
            raise ValueError("workers must be at least 1.")

        self.paths = list(paths)
        self.workers = workers
        self.table = StateTable()
        self.summaries: List[FileSummary] = []

    def analyze_file(self, path: str, table: StateTable) -> FileSummary:
        """
        Fold every well-formed line of a file into ``table``.

        Malformed or undecodable lines are logged and skipped; empty lines
        are ignored.

        Args:
            path (str): The TDV file to read.
            table (StateTable): Table receiving the observations.

        Returns:
            FileSummary: Line counts for the file.

        Raises:
            FileOpenError: If the file is missing or can't be read.
        """
        summary = FileSummary(path=path)

        try:
            with open(path, "rb") as file:
                for line_number, raw in enumerate(file, start=1):
                    if not raw.rstrip(b"\r\n"):
                        continue

                    try:
                        observation = parse_line(decode_line(raw))
                    except MalformedRecordError as e:
                        summary.skipped += 1
                        logging.warning(
                            "Skipping malformed record %s:%d: %s", path, line_number, e
                        )
                        continue

                    table.fold(observation)
                    summary.parsed += 1
        except FileNotFoundError as e:
            raise FileOpenError(path) from e
        except OSError as e:
            raise FileOpenError(path, "could not be read") from e

        return summary

    def _analyze_partial(self, path: str) -> tuple:
        partial = StateTable()
        try:
            return partial, self.analyze_file(path, partial)
        except FileOpenError as e:
            return None, FileSummary(path=path, error=str(e))

    def _record(self, summary: FileSummary) -> None:
        self.summaries.append(summary)

        if summary.ok:
            logging.info(
                "Finished %s (%d records, %d skipped)",
                summary.path,
                summary.parsed,
                summary.skipped,
            )
        else:
            logging.error(summary.error)

    def process_sequential(self) -> None:
        """Fold each file straight into the shared table, one after another."""
        for path in self.paths:
            logging.info("Opening file: %s", path)
            try:
                summary = self.analyze_file(path, self.table)
            except FileOpenError as e:
                summary = FileSummary(path=path, error=str(e))

            self._record(summary)

    def process_parallel(self) -> None:
        """Aggregate files into partial tables concurrently, then merge in order."""
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.workers) as pool:
            for path in self.paths:
                logging.info("Opening file: %s", path)

            # map() yields results in submission order
            for partial, summary in pool.map(self._analyze_partial, self.paths):
                if partial is not None:
                    self.table.merge(partial)
                self._record(summary)

    def run(self) -> StateTable:
        """
        Process every input file.

        Returns:
            StateTable: The aggregated statistics of all readable files.
        """
        logging.info(
            "Processing %d file(s) with %d worker(s).", len(self.paths), self.workers
        )

        if self.workers > 1 and len(self.paths) > 1:
            self.process_parallel()
        else:
            self.process_sequential()

        if len(self.table) == 0:
            logging.warning("No records to report.")

        logging.info("Processor done. States found: %d", len(self.table))

        return self.table
