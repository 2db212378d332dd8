"""
Data manager for CSV problem files.
"""
import csv
import io
import logging
from pathlib import Path
from typing import List, Optional

from .models import Problem


class QuizLoadError(Exception):
    """Raised when the problem file cannot be read or parsed."""
    pass


class MalformedRowError(QuizLoadError):
    """Raised when a single record does not have the expected shape."""

    def __init__(self, row_number: int, row: List[str], reason: str):
        self.row_number = row_number
        self.row = row
        self.reason = reason
        super().__init__(f"Row {row_number}: {reason}")


class DataManager:
    """Loads question/answer pairs from a headerless CSV file."""

    REQUIRED_FIELDS = 2

    def __init__(self, filename: str = "./problems.csv"):
        """
        Initialize DataManager with the problem file path.

        Args:
            filename: Path to a CSV file with one "question,answer" record per line
        """
        self.filename = Path(filename)
        self.logger = logging.getLogger(__name__)
        self.load_errors: List[str] = []

    def load_problems(self, skip_malformed_rows: bool = False) -> List[Problem]:
        """
        Read the whole file and parse every record into a Problem.

        Args:
            skip_malformed_rows: Log and skip bad records instead of aborting

        Returns:
            Problems in file order

        Raises:
            QuizLoadError: If the file cannot be read or is not valid CSV
            MalformedRowError: If a record is malformed and skipping is disabled
        """
        self.load_errors.clear()
        rows = self._read_rows()

        problems = []
        expected_fields: Optional[int] = None
        for row_number, row in enumerate(rows, start=1):
            try:
                problem = self._parse_row(row_number, row, expected_fields)
                if expected_fields is None:
                    expected_fields = len(row)
                problems.append(problem)
            except MalformedRowError as e:
                if not skip_malformed_rows:
                    self.logger.error(f"Malformed record in {self.filename}: {e}")
                    raise
                self.logger.warning(f"Skipping malformed record in {self.filename}: {e}")
                self.load_errors.append(str(e))

        if not problems:
            self.logger.warning(f"No problems found in {self.filename}")

        self.logger.info(f"Loaded {len(problems)} problems from {self.filename}")
        return problems

    def _read_rows(self) -> List[List[str]]:
        """Read all non-blank CSV records from the file."""
        try:
            with open(self.filename, 'r', encoding='utf-8', newline='') as f:
                text = f.read()
        except FileNotFoundError:
            raise QuizLoadError(f"Problem file not found: {self.filename}")
        except PermissionError:
            raise QuizLoadError(f"Permission denied: Cannot read {self.filename}")
        except UnicodeDecodeError as e:
            raise QuizLoadError(f"Problem file {self.filename} is not valid UTF-8: {e}")
        except OSError as e:
            raise QuizLoadError(f"Failed to read problem file {self.filename}: {e}")

        self._check_bare_quotes(text)

        try:
            reader = csv.reader(io.StringIO(text, newline=''), strict=True)
            return [row for row in reader if row]
        except csv.Error as e:
            raise QuizLoadError(f"Invalid CSV in {self.filename}: {e}")

    def _check_bare_quotes(self, text: str) -> None:
        """
        Reject a double quote inside a field that did not open with one.

        The csv module keeps such quotes as literal text; a quote is only
        allowed to open a field or, doubled, to escape itself inside a
        quoted field.

        Raises:
            QuizLoadError: On the first bare quote, with its line number
        """
        line_number = 1
        in_quotes = False
        at_field_start = True
        i = 0
        while i < len(text):
            ch = text[i]
            if in_quotes:
                if ch == '"':
                    if text[i + 1:i + 2] == '"':
                        i += 1
                    else:
                        in_quotes = False
                elif ch == '\n':
                    line_number += 1
            elif ch == '"':
                if not at_field_start:
                    raise QuizLoadError(
                        f'Invalid CSV in {self.filename}: bare " in non-quoted field at line {line_number}'
                    )
                in_quotes = True
            elif ch == '\n':
                line_number += 1
            at_field_start = not in_quotes and ch in ',\n'
            i += 1

    def _parse_row(self, row_number: int, row: List[str], expected_fields: Optional[int]) -> Problem:
        """
        Build a Problem from one record.

        Every record must carry as many fields as the first well-formed
        record did. Fields past the answer column are ignored.
        """
        if len(row) < self.REQUIRED_FIELDS:
            raise MalformedRowError(
                row_number, row,
                f"expected at least {self.REQUIRED_FIELDS} fields (question, answer), got {len(row)}"
            )
        if expected_fields is not None and len(row) != expected_fields:
            raise MalformedRowError(
                row_number, row,
                f"expected {expected_fields} fields, got {len(row)}"
            )
        return Problem(question=row[0], answer=row[1])

    def get_load_errors(self) -> List[str]:
        """
        Get messages for records skipped during the last load.

        Returns:
            List of error messages
        """
        return self.load_errors.copy()

    def has_load_errors(self) -> bool:
        return len(self.load_errors) > 0
