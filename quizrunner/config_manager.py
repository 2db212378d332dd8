"""
Configuration manager for quiz runner settings.
"""
import logging
from typing import Dict, Any

from .models import QuizSettings


class ConfigManager:
    """Manages the time limit, problem file and scoring settings."""

    # Default configuration values
    DEFAULT_TIME_LIMIT = 30
    DEFAULT_FILENAME = "./problems.csv"
    DEFAULT_SCORE_PER_CORRECT = 5

    # Validation limits
    MIN_TIME_LIMIT = 0
    MIN_SCORE_PER_CORRECT = 0

    def __init__(self):
        """Initialize ConfigManager with default settings."""
        self.logger = logging.getLogger(__name__)
        self._settings = QuizSettings()

    def get_quiz_settings(self) -> QuizSettings:
        """
        Get current quiz settings.

        Returns:
            A copy of the current QuizSettings
        """
        return QuizSettings(
            time_limit=self._settings.time_limit,
            filename=self._settings.filename,
            score_per_correct=self._settings.score_per_correct,
            skip_malformed_rows=self._settings.skip_malformed_rows
        )

    def set_time_limit(self, seconds: int) -> Dict[str, Any]:
        """
        Set the total session duration.

        Args:
            seconds: Time limit in seconds, zero expires immediately

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            error_msg = f"Time limit must be an integer, got {type(seconds).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid time limit: expected a number of seconds, got {type(seconds).__name__}"
            }

        if seconds < self.MIN_TIME_LIMIT:
            # A negative limit has already elapsed
            self.logger.info(f"Negative time limit {seconds} treated as {self.MIN_TIME_LIMIT}")
            seconds = self.MIN_TIME_LIMIT

        self._settings.time_limit = seconds
        self.logger.info(f"Time limit set to {seconds} seconds")
        return {
            'success': True,
            'message': f"Time limit set to {seconds} seconds",
            'user_message': f"Time limit set to {seconds} seconds"
        }

    def get_time_limit(self) -> int:
        return self._settings.time_limit

    def set_filename(self, filename: str) -> Dict[str, Any]:
        """
        Set the path of the CSV problem file.

        The file is not opened here; a missing file is reported when loading.

        Args:
            filename: Path to the problem file

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(filename, str) or not filename.strip():
            error_msg = "Problem file path must be a non-empty string"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': "Invalid problem file: path cannot be empty"
            }

        self._settings.filename = filename
        self.logger.info(f"Problem file set to {filename}")
        return {
            'success': True,
            'message': f"Problem file set to {filename}",
            'user_message': f"Problems will be loaded from {filename}"
        }

    def get_filename(self) -> str:
        return self._settings.filename

    def set_score_per_correct(self, score: int) -> Dict[str, Any]:
        """
        Set the points awarded for each correct answer.

        Args:
            score: Non-negative number of points

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if isinstance(score, bool) or not isinstance(score, int):
            error_msg = f"Score per correct answer must be an integer, got {type(score).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid score: expected a number, got {type(score).__name__}"
            }

        if score < self.MIN_SCORE_PER_CORRECT:
            error_msg = f"Score per correct answer must be at least {self.MIN_SCORE_PER_CORRECT}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid score: {score} is negative"
            }

        self._settings.score_per_correct = score
        self.logger.info(f"Score per correct answer set to {score}")
        return {
            'success': True,
            'message': f"Score per correct answer set to {score}",
            'user_message': f"Each correct answer is worth {score} points"
        }

    def get_score_per_correct(self) -> int:
        return self._settings.score_per_correct

    def set_skip_malformed_rows(self, skip: bool) -> Dict[str, Any]:
        """Choose whether malformed CSV records are skipped or abort loading."""
        if not isinstance(skip, bool):
            error_msg = f"Skip malformed rows must be a boolean, got {type(skip).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"Invalid input: expected true/false, got {type(skip).__name__}"
            }

        self._settings.skip_malformed_rows = skip
        action = "skipped" if skip else "treated as fatal"
        self.logger.info(f"Malformed rows will be {action}")
        return {
            'success': True,
            'message': f"Malformed rows will be {action}",
            'user_message': f"Malformed rows will be {action}"
        }

    def get_skip_malformed_rows(self) -> bool:
        return self._settings.skip_malformed_rows

    def get_settings_summary(self) -> str:
        """
        Get a formatted summary of current settings.

        Returns:
            Human-readable string describing current settings
        """
        malformed_str = "skip" if self._settings.skip_malformed_rows else "abort"
        return (
            f"Quiz Settings:\n"
            f"• Time limit: {self._settings.time_limit} seconds\n"
            f"• Problem file: {self._settings.filename}\n"
            f"• Score per correct answer: {self._settings.score_per_correct}\n"
            f"• Malformed rows: {malformed_str}"
        )
